"""Pydantic models for parsed literate documents.

A document is an ordered sequence of chunks. A chunk is either a line of
narrative prose or a named macro definition whose body is a sequence of
parts: literal code text, or references to other macros.
"""

from typing import Annotated, Iterable, List, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

ROOT_NAME = "*"


class SourcePosition(BaseModel):
    """Where a definition starts in its literate source."""

    model_config = ConfigDict(frozen=True)

    file_path: str = Field(..., min_length=1, description="Path of the literate document")
    line: int = Field(..., ge=1, description="Line number of the definition header (1-indexed)")


class LiteralPart(BaseModel):
    """Code text copied to the output, including its own line separator."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["literal"] = "literal"
    text: str = Field(..., description="Output text (usually one source line plus newline)")


class ReferencePart(BaseModel):
    """A use of another macro, expanded in place at the given indentation."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["reference"] = "reference"
    target: str = Field(..., min_length=1, description="Name of the referenced macro")
    indent: str = Field(
        default="", description="Whitespace preceding the reference on its source line"
    )

    @field_validator("target")
    @classmethod
    def validate_target(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("reference target cannot be blank")
        return v

    @property
    def key(self) -> str:
        """Target name as used for lookups."""
        return self.target.strip()


Part = Annotated[Union[LiteralPart, ReferencePart], Field(discriminator="kind")]


class Narrative(BaseModel):
    """One line of prose, carried verbatim."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["narrative"] = "narrative"
    text: str = Field(default="", description="Line of prose without its line separator")


class Definition(BaseModel):
    """A named macro body.

    Several definitions may share a name; merging concatenates their parts.
    Names compare after trimming surrounding whitespace.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["definition"] = "definition"
    name: str = Field(..., min_length=1, description="Macro name as written in the header")
    position: SourcePosition = Field(..., description="Location of the definition header")
    parts: Tuple[Part, ...] = Field(default=(), description="Ordered body parts")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("definition name cannot be blank")
        return v

    @property
    def key(self) -> str:
        """Name as used for merging and lookups."""
        return self.name.strip()

    def with_parts(self, parts: Tuple[Part, ...]) -> "Definition":
        """Return a copy of this definition with a different body."""
        return Definition(name=self.name, position=self.position, parts=tuple(parts))


Chunk = Annotated[Union[Narrative, Definition], Field(discriminator="kind")]


def definitions_only(chunks: Iterable[Union[Narrative, Definition]]) -> List[Definition]:
    """Keep the definitions of a chunk sequence, in order."""
    definitions: List[Definition] = []
    for chunk in chunks:
        if isinstance(chunk, Definition):
            definitions.append(chunk)
        elif not isinstance(chunk, Narrative):
            raise TypeError(f"Unknown chunk type: {type(chunk).__name__}")
    return definitions


__all__ = [
    "ROOT_NAME",
    "SourcePosition",
    "LiteralPart",
    "ReferencePart",
    "Part",
    "Narrative",
    "Definition",
    "Chunk",
    "definitions_only",
]
