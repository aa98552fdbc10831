"""
Merge - combine definitions that share a name.

A literate document may extend a macro by defining it again further down.
Merging concatenates the bodies of all same-named definitions, keeping the
order in which they were written.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

import structlog

from litweave_core.models import Definition, Narrative, Part

logger = structlog.get_logger(__name__)


def merge(definitions: Iterable[Definition | Narrative]) -> List[Definition]:
    """
    Group definitions by trimmed name.

    Each output definition takes its name and position from the first member
    of its group, and its parts are the parts of every member in encounter
    order. Groups appear in the order their names were first encountered, so
    the output is deterministic for a given input. A group of one is passed
    through as the same value. Narrative chunks are ignored.

    Args:
        definitions: Definitions in document order.

    Returns:
        Definitions with unique names.
    """
    firsts: Dict[str, Definition] = {}
    bodies: Dict[str, List[Part]] = {}
    counts: Dict[str, int] = {}

    for chunk in definitions:
        if isinstance(chunk, Narrative):
            continue
        if not isinstance(chunk, Definition):
            raise TypeError(f"Unknown chunk type: {type(chunk).__name__}")

        key = chunk.key
        if key not in firsts:
            firsts[key] = chunk
            bodies[key] = []
            counts[key] = 0
        bodies[key].extend(chunk.parts)
        counts[key] += 1

    merged: List[Definition] = []
    for key, first in firsts.items():
        if counts[key] == 1:
            merged.append(first)
        else:
            merged.append(first.with_parts(tuple(bodies[key])))

    logger.debug(
        "definitions_merged",
        input_count=sum(counts.values()),
        output_count=len(merged),
    )
    return merged
