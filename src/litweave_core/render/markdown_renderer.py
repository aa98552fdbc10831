"""Render a parsed literate document as plain Markdown with fenced code."""

from __future__ import annotations

from typing import Iterable, List, Set, Union

from litweave_core.models import Definition, LiteralPart, Narrative, ReferencePart
from litweave_core.tangle.annotate import normalize_extension


def render_markdown(
    chunks: Iterable[Union[Narrative, Definition]],
    language_extension: str,
) -> str:
    """
    Narrative lines are copied as they are; each definition becomes a fenced
    block tagged with the language and headed by ``<< name >>=`` (``+=`` for
    continuations of a name already shown).
    """
    lang = normalize_extension(language_extension).lstrip(".")
    lines: List[str] = []
    seen: Set[str] = set()

    for chunk in chunks:
        if isinstance(chunk, Narrative):
            lines.append(chunk.text + "\n")
        elif isinstance(chunk, Definition):
            operator = "+=" if chunk.key in seen else "="
            seen.add(chunk.key)
            lines.append(f"```{lang}\n")
            lines.append(f"<< {chunk.key} >>{operator}\n")
            for part in chunk.parts:
                if isinstance(part, LiteralPart):
                    lines.append(part.text)
                elif isinstance(part, ReferencePart):
                    lines.append(f"{part.indent}<< {part.key} >>\n")
                else:
                    raise TypeError(f"Unknown part type: {type(part).__name__}")
            if lines[-1] and not lines[-1].endswith("\n"):
                lines.append("\n")
            lines.append("```\n")
        else:
            raise TypeError(f"Unknown chunk type: {type(chunk).__name__}")

    return "".join(lines)
