"""
Unit tests for narrative Markdown to HTML conversion.

Covers block structure (headings, paragraphs, lists, quotes, fences, rules)
and inline formatting, including HTML escaping.
"""

from __future__ import annotations

import pytest

from litweave_core.exceptions import ValidationError
from litweave_core.render.narrative import render_inline, render_markdown_html


class TestBlocks:
    """Block-level constructs."""

    def test_headings(self) -> None:
        html = render_markdown_html("# Title\n### Sub ###")

        assert html == "<h1>Title</h1>\n<h3>Sub</h3>"

    def test_paragraph_lines_are_joined(self) -> None:
        html = render_markdown_html("line one\nline two\n\nnext")

        assert html == "<p>line one line two</p>\n<p>next</p>"

    def test_unordered_list(self) -> None:
        html = render_markdown_html("- one\n- two")

        assert html == "<ul>\n<li>one</li>\n<li>two</li>\n</ul>"

    def test_ordered_list(self) -> None:
        html = render_markdown_html("1. first\n2. second")

        assert html == "<ol>\n<li>first</li>\n<li>second</li>\n</ol>"

    def test_list_item_continuation(self) -> None:
        html = render_markdown_html("- one\n  continued\n- two")

        assert "<li>one continued</li>" in html

    def test_fenced_code_is_escaped(self) -> None:
        html = render_markdown_html("```python\nif x < 1:\n    pass\n```")

        assert html == '<pre><code class="language-python">if x &lt; 1:\n    pass</code></pre>'

    def test_block_quote(self) -> None:
        html = render_markdown_html("> quoted *text*")

        assert html == "<blockquote>\n<p>quoted <em>text</em></p>\n</blockquote>"

    def test_horizontal_rule(self) -> None:
        assert render_markdown_html("above\n\n---\n\nbelow") == "<p>above</p>\n<hr>\n<p>below</p>"

    def test_empty_input(self) -> None:
        assert render_markdown_html("") == ""
        assert render_markdown_html("\n\n") == ""

    def test_rejects_non_string(self) -> None:
        with pytest.raises(ValidationError):
            render_markdown_html(None)  # type: ignore[arg-type]


class TestInline:
    """Inline formatting."""

    def test_escapes_html(self) -> None:
        assert render_inline("<script>") == "&lt;script&gt;"

    def test_code_span_content_is_not_formatted(self) -> None:
        assert render_inline("use `a*b*c` here") == "use <code>a*b*c</code> here"

    def test_emphasis_and_strong(self) -> None:
        assert render_inline("*em* and **strong**") == "<em>em</em> and <strong>strong</strong>"

    def test_snake_case_is_not_emphasis(self) -> None:
        assert render_inline("call snake_case_name now") == "call snake_case_name now"

    def test_links_and_images(self) -> None:
        assert render_inline("[docs](https://example.com)") == (
            '<a href="https://example.com">docs</a>'
        )
        assert render_inline("![logo](img/logo.png)") == '<img src="img/logo.png" alt="logo">'

    def test_quotes_are_escaped(self) -> None:
        assert render_inline('say "hi"') == "say &quot;hi&quot;"

    def test_link_target_cannot_leave_attribute(self) -> None:
        html = render_inline('[x](http://a"onclick="alert(1))')

        assert html.startswith('<a href="http://a&quot;onclick=&quot;alert(1">x</a>')
        assert '"onclick' not in html

    def test_image_attributes_are_escaped(self) -> None:
        html = render_inline('![a" onerror="x](img.png)')

        assert html == '<img src="img.png" alt="a&quot; onerror=&quot;x">'

    def test_autolink(self) -> None:
        assert render_inline("<https://example.com/a>") == (
            '<a href="https://example.com/a">https://example.com/a</a>'
        )
