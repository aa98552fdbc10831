"""
Parser - turn literate document text into a chunk sequence.

Document syntax::

    Some prose, carried through as narrative.

    << hello >>=
    def hello():
        << body >>
    @

A ``<< name >>=`` line opens a definition. Its body runs until a line that
is just ``@``, the next definition header, or the end of the document. A
body line made only of ``<< name >>`` (plus indentation) is a reference;
every other body line is literal code. Lines outside definitions are
narrative, one chunk per line.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional, Union

import structlog

from litweave_core.exceptions import DocumentParseError, ValidationError
from litweave_core.models import (
    Definition,
    LiteralPart,
    Narrative,
    Part,
    ReferencePart,
    SourcePosition,
)

logger = structlog.get_logger(__name__)

DEFINITION_PATTERN = re.compile(r"^\s*<<(?P<name>.*)>>=\s*$")
REFERENCE_PATTERN = re.compile(r"^(?P<indent>[ \t]*)<<(?P<name>.*?)>>[ \t]*$")
END_PATTERN = re.compile(r"^\s*@\s*$")


class _OpenDefinition:
    def __init__(self, name: str, line: int) -> None:
        self.name = name
        self.line = line
        self.parts: List[Part] = []


def parse(text: str, file_path: str) -> List[Union[Narrative, Definition]]:
    """
    Parse a literate document.

    Args:
        text: Document contents.
        file_path: Path recorded in each definition's source position.

    Returns:
        Chunks in document order.

    Raises:
        ValidationError: If text is not a string or file_path is empty.
        DocumentParseError: If a definition header has an empty name.
    """
    if not isinstance(text, str):
        raise ValidationError(message="text must be a string", error_code="VAL_002")
    if not file_path:
        raise ValidationError(message="file_path cannot be empty", error_code="VAL_001")

    chunks: List[Union[Narrative, Definition]] = []
    current: Optional[_OpenDefinition] = None

    def close() -> None:
        nonlocal current
        if current is not None:
            chunks.append(
                Definition(
                    name=current.name,
                    position=SourcePosition(file_path=file_path, line=current.line),
                    parts=tuple(current.parts),
                )
            )
            current = None

    lines = text.replace("\r\n", "\n").split("\n")
    # A trailing newline does not start another line.
    if lines and lines[-1] == "":
        lines.pop()

    for number, line in enumerate(lines, start=1):
        header = DEFINITION_PATTERN.match(line)
        if header:
            close()
            name = header.group("name")
            if not name.strip():
                raise DocumentParseError(file_path, number, "definition has an empty name")
            current = _OpenDefinition(name.strip(), number)
            continue

        if current is None:
            chunks.append(Narrative(text=line))
            continue

        if END_PATTERN.match(line):
            close()
            continue

        reference = REFERENCE_PATTERN.match(line)
        if reference and reference.group("name").strip():
            current.parts.append(
                ReferencePart(
                    target=reference.group("name").strip(),
                    indent=reference.group("indent"),
                )
            )
        else:
            current.parts.append(LiteralPart(text=line + "\n"))

    close()

    logger.debug(
        "document_parsed",
        file_path=file_path,
        line_count=len(lines),
        chunk_count=len(chunks),
    )
    return chunks


def parse_file(path: Union[str, Path], encoding: str = "utf-8") -> List[Union[Narrative, Definition]]:
    """Read and parse a literate document from disk."""
    path = Path(path)
    return parse(path.read_text(encoding=encoding), str(path))
