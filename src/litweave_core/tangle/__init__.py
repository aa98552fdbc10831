"""
Tangle package - macro merging and expansion.

Main Components:
    merge: Combine same-named definitions into one
    expand: Resolve the root definition into flat text
    annotate: Prefix each definition with a source-location comment
    generate / generate_with_annotation: The full pipeline

Example:
    ```python
    from litweave_core.parser import parse
    from litweave_core.tangle import generate

    chunks = parse(document_text, "hello.py.lit")
    code = generate(chunks)
    ```
"""

from litweave_core.tangle.annotate import COMMENT_TOKENS, annotate, comment_token
from litweave_core.tangle.expand import expand
from litweave_core.tangle.generator import generate, generate_with_annotation
from litweave_core.tangle.merge import merge

__all__ = [
    "COMMENT_TOKENS",
    "annotate",
    "comment_token",
    "expand",
    "generate",
    "generate_with_annotation",
    "merge",
]
