"""Unit tests for merging same-named definitions."""

from __future__ import annotations

import pytest

from litweave_core.models import SourcePosition
from litweave_core.tangle.merge import merge
from tests.unit.builders import define, lit, prose, ref


class TestMerge:
    """Grouping, ordering and pass-through behaviour of merge()."""

    def test_preserves_part_order_and_first_position(self) -> None:
        """Definitions named A at positions 0 and 2 merge into [p0, p2]."""
        p0, p1, p2 = lit("zero\n"), lit("one\n"), lit("two\n")
        chunks = [
            define("A", p0, line=3),
            define("B", p1, line=7),
            define("A", p2, line=12),
        ]

        merged = merge(chunks)

        a = next(d for d in merged if d.key == "A")
        assert a.parts == (p0, p2)
        assert a.position == SourcePosition(file_path="doc.lit", line=3)
        assert a.name == "A"

    def test_output_names_are_unique(self) -> None:
        chunks = [define("x", lit("1\n")), define("y", lit("2\n")), define("x", lit("3\n"))]

        names = [d.key for d in merge(chunks)]

        assert sorted(names) == ["x", "y"]

    def test_order_follows_first_encounter(self) -> None:
        chunks = [
            define("b", lit("1\n")),
            define("a", lit("2\n")),
            define("b", lit("3\n")),
            define("c", lit("4\n")),
        ]

        assert [d.key for d in merge(chunks)] == ["b", "a", "c"]

    def test_is_deterministic(self) -> None:
        chunks = [define(name, lit(f"{name}\n")) for name in ["q", "w", "e", "q", "r", "w"]]

        assert merge(chunks) == merge(list(chunks))

    def test_singleton_group_passes_through_unchanged(self) -> None:
        single = define("only", lit("a\n"), ref("other", "  "), line=9)

        merged = merge([single])

        assert merged == [single]
        assert merged[0] is single

    def test_names_compare_after_trimming(self) -> None:
        chunks = [define(" A ", lit("1\n")), define("A", lit("2\n"))]

        merged = merge(chunks)

        assert len(merged) == 1
        assert merged[0].name == " A "
        assert [p.text for p in merged[0].parts] == ["1\n", "2\n"]

    def test_is_idempotent(self) -> None:
        chunks = [
            define("A", lit("1\n")),
            define("*", ref("A")),
            define("A", lit("2\n")),
            define("B", lit("3\n")),
        ]

        once = merge(chunks)

        assert merge(once) == once

    def test_empty_input_gives_empty_output(self) -> None:
        assert merge([]) == []

    def test_ignores_narrative(self) -> None:
        merged = merge([prose("intro"), define("A", lit("1\n")), prose("outro")])

        assert [d.key for d in merged] == ["A"]

    def test_does_not_mutate_input(self) -> None:
        first = define("A", lit("1\n"))
        second = define("A", lit("2\n"))

        merge([first, second])

        assert first.parts == (lit("1\n"),)
        assert second.parts == (lit("2\n"),)

    def test_rejects_unknown_chunk_type(self) -> None:
        with pytest.raises(TypeError):
            merge(["not a chunk"])  # type: ignore[list-item]
