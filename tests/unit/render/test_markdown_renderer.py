"""Unit tests for Markdown rendering of literate documents."""

from __future__ import annotations

from litweave_core.parser import parse
from litweave_core.render.markdown_renderer import render_markdown
from tests.unit.builders import define, lit, prose, ref


def test_renders_narrative_and_fenced_definitions() -> None:
    document = (
        "# Greeting\n"
        "\n"
        "<< * >>=\n"
        "def main():\n"
        "    << say hello >>\n"
        "@\n"
        "Saying hello is simple:\n"
        "<< say hello >>=\n"
        'print("hello")\n'
        "@\n"
    )

    markdown = render_markdown(parse(document, "hello.py.lit"), ".py")

    assert markdown == (
        "# Greeting\n"
        "\n"
        "```py\n"
        "<< * >>=\n"
        "def main():\n"
        "    << say hello >>\n"
        "```\n"
        "Saying hello is simple:\n"
        "```py\n"
        "<< say hello >>=\n"
        'print("hello")\n'
        "```\n"
    )


def test_continuations_use_plus_equals() -> None:
    markdown = render_markdown([define("a", lit("1\n")), define(" a", lit("2\n"))], ".sh")

    assert "<< a >>=\n1\n" in markdown
    assert "<< a >>+=\n2\n" in markdown


def test_without_extension_has_no_language_tag() -> None:
    markdown = render_markdown([define("a", ref("b", "  "))], "")

    assert markdown == "```\n<< a >>=\n  << b >>\n```\n"


def test_literal_without_newline_still_closes_fence() -> None:
    markdown = render_markdown([prose("x"), define("a", lit("no newline"))], ".c")

    assert markdown == "x\n```c\n<< a >>=\nno newline\n```\n"
