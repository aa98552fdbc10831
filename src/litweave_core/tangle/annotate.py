"""
Annotate - tag every definition with its source location.

Each definition gets a leading comment line ``<token> <file>:<line>`` so
that generated code can be traced back to the literate document. The
comment token depends on the language of the generated file.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from litweave_core.models import Definition, LiteralPart

DEFAULT_COMMENT_TOKEN = "//"

COMMENT_TOKENS: Dict[str, str] = {
    # shell style
    ".sh": "#",
    ".bash": "#",
    ".zsh": "#",
    ".py": "#",
    ".rb": "#",
    ".pl": "#",
    ".r": "#",
    ".yaml": "#",
    ".yml": "#",
    ".toml": "#",
    # double dash
    ".hs": "--",
    ".lhs": "--",
    ".lua": "--",
    ".sql": "--",
    ".elm": "--",
}


def normalize_extension(language_extension: str) -> str:
    """Lowercase an extension and make sure it starts with a dot ("" stays "")."""
    ext = language_extension.strip().lower()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return ext


def comment_token(language_extension: str, fallback: str = DEFAULT_COMMENT_TOKEN) -> str:
    """Line comment token for files with the given extension."""
    return COMMENT_TOKENS.get(normalize_extension(language_extension), fallback)


def annotation_line(definition: Definition, token: str) -> str:
    position = definition.position
    return f"{token} {position.file_path}:{position.line}\n"


def annotate(
    language_extension: str,
    definitions: Iterable[Definition],
    fallback: str = DEFAULT_COMMENT_TOKEN,
) -> List[Definition]:
    """
    Prepend a location comment to every definition.

    Must run before merge() so that each same-named definition keeps its
    own location line in the merged body.

    Args:
        language_extension: Extension of the generated file (".py", "hs", ...).
        definitions: Definitions in document order.
        fallback: Token used when the extension is not in COMMENT_TOKENS.

    Returns:
        New definitions; inputs are left untouched.
    """
    token = comment_token(language_extension, fallback)
    return [
        definition.with_parts(
            (LiteralPart(text=annotation_line(definition, token)),) + definition.parts
        )
        for definition in definitions
    ]
