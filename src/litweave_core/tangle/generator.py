"""
Code generation entry points.

``generate`` runs merge and expand over the definitions of a parsed
document; ``generate_with_annotation`` tags each definition with its source
location first.
"""

from __future__ import annotations

from typing import Iterable, Union

from litweave_core.models import ROOT_NAME, Definition, Narrative, definitions_only
from litweave_core.tangle.annotate import DEFAULT_COMMENT_TOKEN, annotate
from litweave_core.tangle.expand import expand
from litweave_core.tangle.merge import merge

ChunkLike = Union[Narrative, Definition]


def generate(chunks: Iterable[ChunkLike], root_name: str = ROOT_NAME) -> str:
    """
    Generate code from a parsed document.

    Raises:
        CircularReferenceError: If a macro expands into itself.
    """
    return expand(merge(definitions_only(chunks)), root_name)


def generate_with_annotation(
    language_extension: str,
    chunks: Iterable[ChunkLike],
    root_name: str = ROOT_NAME,
    fallback_token: str = DEFAULT_COMMENT_TOKEN,
) -> str:
    """
    Generate code in which every definition starts with a location comment.

    Raises:
        CircularReferenceError: If a macro expands into itself.
    """
    annotated = annotate(language_extension, definitions_only(chunks), fallback_token)
    return expand(merge(annotated), root_name)
