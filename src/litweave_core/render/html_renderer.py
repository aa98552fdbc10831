"""
HTMLRenderer - render a parsed literate document as a standalone web page.

Narrative lines are converted from Markdown; every definition becomes a
highlighted code block whose references link to the definition they name.
The renderer walks the document as written (it does not merge or expand),
so each continuation of a macro appears where the author put it.
"""

from __future__ import annotations

import html
from typing import Dict, Iterable, List, Optional, Set, Union

import structlog

from litweave_core.models import Definition, LiteralPart, Narrative, ReferencePart
from litweave_core.render.highlight import CSS_CLASS, highlight_code, stylesheet
from litweave_core.render.narrative import render_markdown_html

logger = structlog.get_logger(__name__)

DEFAULT_CSS = """\
body { max-width: 50em; margin: 2em auto; padding: 0 1em;
       font-family: Georgia, serif; line-height: 1.5; color: #222; }
pre, code { font-family: Menlo, Consolas, monospace; font-size: 0.9em; }
.definition { margin: 1em 0; }
.macro-header { margin: 0; font-family: Menlo, Consolas, monospace; font-size: 0.9em; }
.macro-header a { color: #555; text-decoration: none; }
pre.highlight { margin: 0.2em 0 0 0; padding: 0.6em; background: #f6f6f6; overflow-x: auto; }
a.macro-ref { color: #06c; }
"""


def anchor_id(name: str, filler: str = "_") -> str:
    """
    Identifier-safe anchor for a macro name: trim, then replace spaces.

    Distinct names can share an anchor (``a b`` and ``a_b``); use
    assign_anchors() to get unique ids for a whole document.
    """
    return name.strip().replace(" ", filler)


def assign_anchors(
    chunks: Iterable[Union[Narrative, Definition]], filler: str = "_"
) -> Dict[str, str]:
    """
    Map each macro name of a document to a unique anchor.

    Names keep their plain anchor_id() in order of first definition; a name
    whose anchor is already taken gets a ``-2``, ``-3``... suffix.
    """
    anchors: Dict[str, str] = {}
    used: Set[str] = set()
    for chunk in chunks:
        if not isinstance(chunk, Definition) or chunk.key in anchors:
            continue
        base = anchor_id(chunk.key, filler)
        candidate = base
        suffix = 2
        while candidate in used:
            candidate = f"{base}-{suffix}"
            suffix += 1
        anchors[chunk.key] = candidate
        used.add(candidate)
    return anchors


def _macro_label(name: str) -> str:
    return f"&lt;&lt; {html.escape(name.strip())} &gt;&gt;"


def render_definition(
    definition: Definition,
    language_extension: str,
    first: bool,
    filler: str = "_",
    anchors: Optional[Dict[str, str]] = None,
) -> str:
    """
    Render one definition as an HTML block.

    The first definition of a name carries the anchor and an ``=`` header;
    later ones are shown as ``+=`` continuations linking back to it.
    Anchors come from ``anchors`` (see assign_anchors()); names missing
    from it fall back to anchor_id().
    """
    anchors = anchors or {}

    def anchor_for(name: str) -> str:
        key = name.strip()
        return anchors.get(key) or anchor_id(key, filler)

    anchor = anchor_for(definition.name)
    operator = "=" if first else "+="
    id_attr = f' id="{html.escape(anchor)}"' if first else ""

    body: List[str] = []
    pending: List[str] = []

    def flush() -> None:
        if pending:
            body.append(highlight_code("".join(pending), language_extension))
            pending.clear()

    for part in definition.parts:
        if isinstance(part, LiteralPart):
            pending.append(part.text)
        elif isinstance(part, ReferencePart):
            flush()
            target = html.escape(anchor_for(part.target))
            body.append(
                f'{html.escape(part.indent)}<a class="macro-ref" href="#{target}">'
                f"{_macro_label(part.target)}</a>\n"
            )
        else:
            raise TypeError(f"Unknown part type: {type(part).__name__}")
    flush()

    return (
        f'<div class="definition"{id_attr}>\n'
        f'<p class="macro-header"><a href="#{html.escape(anchor)}">'
        f"{_macro_label(definition.name)}{operator}</a></p>\n"
        f'<pre class="{CSS_CLASS}"><code>{"".join(body)}</code></pre>\n'
        f"</div>"
    )


def render_body(
    chunks: Iterable[Union[Narrative, Definition]],
    language_extension: str,
    filler: str = "_",
) -> str:
    """Render the chunks of a document as the contents of <body>."""
    chunks = list(chunks)
    anchors = assign_anchors(chunks, filler)
    blocks: List[str] = []
    prose: List[str] = []
    seen: Set[str] = set()

    def flush_prose() -> None:
        if prose:
            rendered = render_markdown_html("\n".join(prose))
            if rendered:
                blocks.append(rendered)
            prose.clear()

    for chunk in chunks:
        if isinstance(chunk, Narrative):
            prose.append(chunk.text)
        elif isinstance(chunk, Definition):
            flush_prose()
            first = chunk.key not in seen
            seen.add(chunk.key)
            blocks.append(
                render_definition(chunk, language_extension, first, filler, anchors)
            )
        else:
            raise TypeError(f"Unknown chunk type: {type(chunk).__name__}")
    flush_prose()

    return "\n".join(blocks)


def render_html(
    chunks: Iterable[Union[Narrative, Definition]],
    language_extension: str,
    title: str,
    css_path: Optional[str] = None,
    filler: str = "_",
    pygments_style: str = "default",
) -> str:
    """
    Render a complete HTML document.

    Args:
        chunks: Parsed document, un-merged.
        language_extension: Extension of the generated code, selects the lexer.
        title: Page title.
        css_path: Stylesheet to link; the default styles are embedded when None.
        filler: Character replacing spaces in anchors.
        pygments_style: Highlighting style for the embedded stylesheet.

    Returns:
        HTML text ending with a newline.
    """
    chunks = list(chunks)
    if css_path:
        style = f'<link rel="stylesheet" href="{html.escape(css_path)}">'
    else:
        style = f"<style>\n{DEFAULT_CSS}{stylesheet(pygments_style)}\n</style>"

    body = render_body(chunks, language_extension, filler)
    logger.debug("html_rendered", title=title, chunk_count=len(chunks))

    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{html.escape(title)}</title>\n"
        f"{style}\n"
        "</head>\n"
        "<body>\n"
        f"{body}\n"
        "</body>\n"
        "</html>\n"
    )
