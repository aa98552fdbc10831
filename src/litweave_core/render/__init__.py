"""
Render package - human-readable views of a literate document.

Main Components:
    render_html: Standalone web page with highlighted, cross-linked macros
    render_markdown: Markdown with fenced code blocks
    render_markdown_html: Narrative Markdown to HTML
    highlight_code: Pygments highlighting of code fragments
"""

from litweave_core.render.highlight import highlight_code, lexer_for_extension, stylesheet
from litweave_core.render.html_renderer import anchor_id, assign_anchors, render_html
from litweave_core.render.markdown_renderer import render_markdown
from litweave_core.render.narrative import render_inline, render_markdown_html

__all__ = [
    "anchor_id",
    "assign_anchors",
    "highlight_code",
    "lexer_for_extension",
    "render_html",
    "render_inline",
    "render_markdown",
    "render_markdown_html",
    "stylesheet",
]
