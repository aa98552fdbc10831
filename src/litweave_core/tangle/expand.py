"""
Expand - resolve the root macro into flat source text.

References are substituted by the rendering of the macro they name. Each
reference carries the indentation that preceded it in the document; the
indentation accumulates down nested references and is prefixed to every
literal emitted beneath it.
"""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

import structlog

from litweave_core.exceptions import CircularReferenceError
from litweave_core.models import ROOT_NAME, Definition, LiteralPart, Part, ReferencePart

logger = structlog.get_logger(__name__)


def build_lookup(definitions: Sequence[Definition]) -> Dict[str, Tuple[Part, ...]]:
    """Map each trimmed definition name to its parts.

    Names are expected to be unique (merge has run). If a name repeats,
    the last definition wins.
    """
    return {definition.key: definition.parts for definition in definitions}


def select_root(
    definitions: Sequence[Definition],
    lookup: Dict[str, Tuple[Part, ...]],
    root_name: str = ROOT_NAME,
) -> Tuple[str, Tuple[Part, ...]]:
    """
    Pick the parts expansion starts from.

    Returns the parts of ``root_name`` if defined, otherwise those of the
    last definition, otherwise an empty body. The returned name is empty
    when there are no definitions.
    """
    key = root_name.strip()
    if key in lookup:
        return key, lookup[key]
    if definitions:
        last = definitions[-1]
        logger.debug("root_fallback", root_name=key, fallback=last.key)
        return last.key, last.parts
    return "", ()


def expand(definitions: Sequence[Definition], root_name: str = ROOT_NAME) -> str:
    """
    Expand the root definition into flat text.

    Args:
        definitions: Definitions with unique names, as produced by merge().
        root_name: Name of the macro to expand; falls back to the last
            definition when no definition has this name.

    Returns:
        The expanded text. References to undefined macros expand to nothing.

    Raises:
        CircularReferenceError: If a macro expands into itself.
    """
    definitions = list(definitions)
    lookup = build_lookup(definitions)
    name, root = select_root(definitions, lookup, root_name)

    out: List[str] = []
    stack: List[str] = [name] if name else []
    _render(root, "", lookup, stack, out)
    return "".join(out)


def _render(
    parts: Sequence[Part],
    prefix: str,
    lookup: Dict[str, Tuple[Part, ...]],
    stack: List[str],
    out: List[str],
) -> None:
    for part in parts:
        if isinstance(part, LiteralPart):
            out.append(prefix + part.text)
        elif isinstance(part, ReferencePart):
            key = part.key
            if key in stack:
                cycle = stack[stack.index(key):] + [key]
                raise CircularReferenceError(name=key, cycle=cycle)
            body = lookup.get(key)
            if body is None:
                logger.debug("unresolved_reference", target=key)
                continue
            stack.append(key)
            _render(body, prefix + part.indent, lookup, stack, out)
            stack.pop()
        else:
            raise TypeError(f"Unknown part type: {type(part).__name__}")
