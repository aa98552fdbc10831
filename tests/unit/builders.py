"""Shorthand constructors for chunk values used across unit tests."""

from litweave_core.models import Definition, LiteralPart, Narrative, ReferencePart, SourcePosition


def lit(text):
    return LiteralPart(text=text)


def ref(target, indent=""):
    return ReferencePart(target=target, indent=indent)


def prose(text):
    return Narrative(text=text)


def define(name, *parts, line=1, file_path="doc.lit"):
    return Definition(
        name=name,
        position=SourcePosition(file_path=file_path, line=line),
        parts=tuple(parts),
    )
