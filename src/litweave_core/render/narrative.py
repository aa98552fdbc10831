"""
Narrative - lightweight Markdown to HTML conversion for narrative text.

Covers the constructs literate documents use in practice (headings,
paragraphs, lists, block quotes, rules, fenced code, emphasis, inline code,
links and images) with regular expressions, without pulling in a Markdown
library.
"""

from __future__ import annotations

import html
import re
from typing import List

from litweave_core.exceptions import ValidationError

FENCE_PATTERN = re.compile(r"^\s*(?P<fence>`{3,}|~{3,})[ \t]*(?P<lang>[^\s`]*)")
HEADER_PATTERN = re.compile(r"^\s{0,3}(?P<hashes>#{1,6})\s+(?P<header>.*?)(?:\s+#+)?\s*$")
RULE_PATTERN = re.compile(r"^\s{0,3}([-*_])(?:\s*\1){2,}\s*$")
QUOTE_PATTERN = re.compile(r"^\s{0,3}>\s?(?P<text>.*)$")
BULLET_PATTERN = re.compile(r"^\s{0,3}[-+*]\s+(?P<text>.*)$")
ORDERED_PATTERN = re.compile(r"^\s{0,3}\d+[.)]\s+(?P<text>.*)$")

CODE_SPAN_PATTERN = re.compile(r"(`+)(.+?)\1")
IMAGE_LINK_PATTERN = re.compile(r"!\[([^\]]*)\]\(([^)\s]+)\)")
MARKDOWN_LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)")
AUTOLINK_PATTERN = re.compile(r"&lt;(https?://[^\s&]+(?:&amp;[^\s&]+)*)&gt;")
STRONG_PATTERN = re.compile(r"\*\*(.+?)\*\*|(?<!\w)__(.+?)__(?!\w)")
EMPHASIS_PATTERN = re.compile(r"\*(?!\s)(.+?)\*|(?<!\w)_(?!\s)(.+?)_(?!\w)")


def _format_text(text: str) -> str:
    # Quotes are escaped too: link targets and alt text end up inside attributes.
    text = html.escape(text, quote=True)
    text = IMAGE_LINK_PATTERN.sub(
        lambda m: f'<img src="{m.group(2)}" alt="{m.group(1).strip()}">', text
    )
    text = MARKDOWN_LINK_PATTERN.sub(
        lambda m: f'<a href="{m.group(2)}">{m.group(1).strip()}</a>', text
    )
    text = AUTOLINK_PATTERN.sub(lambda m: f'<a href="{m.group(1)}">{m.group(1)}</a>', text)
    text = STRONG_PATTERN.sub(lambda m: f"<strong>{m.group(1) or m.group(2)}</strong>", text)
    text = EMPHASIS_PATTERN.sub(lambda m: f"<em>{m.group(1) or m.group(2)}</em>", text)
    return text


def render_inline(text: str) -> str:
    """Render inline Markdown (code spans, links, emphasis) as escaped HTML."""
    pieces: List[str] = []
    position = 0
    for match in CODE_SPAN_PATTERN.finditer(text):
        pieces.append(_format_text(text[position : match.start()]))
        pieces.append(f"<code>{html.escape(match.group(2).strip(), quote=False)}</code>")
        position = match.end()
    pieces.append(_format_text(text[position:]))
    return "".join(pieces)


def _render_list(items: List[str], ordered: bool) -> str:
    tag = "ol" if ordered else "ul"
    body = "".join(f"<li>{render_inline(item)}</li>\n" for item in items)
    return f"<{tag}>\n{body}</{tag}>"


def render_markdown_html(text: str) -> str:
    """
    Convert Markdown to an HTML fragment.

    Args:
        text: Markdown source.

    Returns:
        HTML fragment, blocks separated by newlines.

    Raises:
        ValidationError: If text is not a string.
    """
    if not isinstance(text, str):
        raise ValidationError(message="text must be a string", error_code="VAL_002")

    lines = text.replace("\r\n", "\n").split("\n")
    blocks: List[str] = []
    paragraph: List[str] = []
    index = 0

    def flush_paragraph() -> None:
        if paragraph:
            joined = " ".join(line.strip() for line in paragraph)
            blocks.append(f"<p>{render_inline(joined)}</p>")
            paragraph.clear()

    while index < len(lines):
        line = lines[index]

        fence = FENCE_PATTERN.match(line)
        if fence:
            flush_paragraph()
            marker = fence.group("fence")
            lang = fence.group("lang")
            code: List[str] = []
            index += 1
            while index < len(lines) and not lines[index].strip().startswith(marker):
                code.append(lines[index])
                index += 1
            index += 1
            attr = f' class="language-{html.escape(lang)}"' if lang else ""
            escaped = html.escape("\n".join(code), quote=False)
            blocks.append(f"<pre><code{attr}>{escaped}</code></pre>")
            continue

        if not line.strip():
            flush_paragraph()
            index += 1
            continue

        header = HEADER_PATTERN.match(line)
        if header:
            flush_paragraph()
            level = len(header.group("hashes"))
            blocks.append(f"<h{level}>{render_inline(header.group('header'))}</h{level}>")
            index += 1
            continue

        if RULE_PATTERN.match(line):
            flush_paragraph()
            blocks.append("<hr>")
            index += 1
            continue

        if QUOTE_PATTERN.match(line):
            flush_paragraph()
            quoted: List[str] = []
            while index < len(lines):
                match = QUOTE_PATTERN.match(lines[index])
                if not match:
                    break
                quoted.append(match.group("text"))
                index += 1
            inner = render_markdown_html("\n".join(quoted))
            blocks.append(f"<blockquote>\n{inner}\n</blockquote>")
            continue

        for pattern, ordered in ((BULLET_PATTERN, False), (ORDERED_PATTERN, True)):
            if pattern.match(line):
                flush_paragraph()
                items: List[str] = []
                while index < len(lines):
                    match = pattern.match(lines[index])
                    if match:
                        items.append(match.group("text"))
                    elif lines[index].strip() and items and lines[index].startswith((" ", "\t")):
                        items[-1] += " " + lines[index].strip()
                    else:
                        break
                    index += 1
                blocks.append(_render_list(items, ordered))
                break
        else:
            paragraph.append(line)
            index += 1

    flush_paragraph()
    return "\n".join(blocks)
