"""Syntax highlighting of code fragments with Pygments."""

from __future__ import annotations

from functools import lru_cache

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.util import ClassNotFound

from litweave_core.tangle.annotate import normalize_extension

CSS_CLASS = "highlight"


@lru_cache(maxsize=64)
def lexer_for_extension(language_extension: str) -> Lexer:
    """Lexer for files with this extension; plain text when Pygments has none."""
    ext = normalize_extension(language_extension)
    if not ext:
        return TextLexer(stripnl=False, ensurenl=False)
    try:
        return get_lexer_for_filename("source" + ext, stripnl=False, ensurenl=False)
    except ClassNotFound:
        return TextLexer(stripnl=False, ensurenl=False)


def highlight_code(code: str, language_extension: str) -> str:
    """Highlighted HTML for a code fragment, without a surrounding <pre>."""
    if not code:
        return ""
    formatter = HtmlFormatter(nowrap=True)
    rendered = highlight(code, lexer_for_extension(language_extension), formatter)
    # Pygments ends output with a newline the fragment did not have.
    if not code.endswith("\n") and rendered.endswith("\n"):
        rendered = rendered[:-1]
    return rendered


def stylesheet(style: str = "default") -> str:
    """CSS rules for highlighted fragments inside ``.highlight`` blocks."""
    return HtmlFormatter(style=style).get_style_defs(f".{CSS_CLASS}")
