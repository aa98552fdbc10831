"""
LitProcessor - run one literate document through parse, tangle and render.

Output naming: a document ``hello.py.lit`` produces ``hello.py`` in the code
directory and ``hello.py.html`` / ``hello.py.md`` in the docs directory. The
extension of the code file (``.py``) selects the annotation comment token
and the highlighting lexer.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional

import structlog

from litweave_core.config import LitweaveSettings
from litweave_core.exceptions import (
    OutputDirectoryError,
    OutputWriteError,
    SourceUnavailableError,
    ValidationError,
)
from litweave_core.logging_service import LoggingService
from litweave_core.parser import parse
from litweave_core.render import render_html, render_markdown
from litweave_core.tangle import generate, generate_with_annotation

LIT_SUFFIX = ".lit"


@dataclass
class OutputOptions:
    """
    Which outputs to produce for a document, and where.

    Attributes:
        code: Write the tangled source file
        html: Write the HTML rendering
        markdown: Write the Markdown rendering
        annotate: Prefix each macro in the code with a source-location comment
        code_dir: Directory for code output
        docs_dir: Directory for HTML/Markdown output
        css_path: Stylesheet linked from HTML output (embedded styles if None)
    """

    code: bool = True
    html: bool = True
    markdown: bool = True
    annotate: bool = False
    code_dir: Path = field(default_factory=Path.cwd)
    docs_dir: Path = field(default_factory=Path.cwd)
    css_path: Optional[str] = None

    def __post_init__(self) -> None:
        self.code_dir = Path(self.code_dir)
        self.docs_dir = Path(self.docs_dir)

    def validate(self) -> None:
        """
        Check that the output directories in use exist.

        Raises:
            OutputDirectoryError: If a required directory is missing.
        """
        if self.code and not self.code_dir.is_dir():
            raise OutputDirectoryError(str(self.code_dir))
        if (self.html or self.markdown) and not self.docs_dir.is_dir():
            raise OutputDirectoryError(str(self.docs_dir))


def output_stem(source: Path) -> str:
    """``hello.py.lit`` -> ``hello.py``; names without ``.lit`` are kept."""
    name = source.name
    if name.lower().endswith(LIT_SUFFIX) and len(name) > len(LIT_SUFFIX):
        return name[: -len(LIT_SUFFIX)]
    return name


def language_extension(source: Path) -> str:
    """Extension of the generated code file (``.py`` for ``hello.py.lit``)."""
    return Path(output_stem(source)).suffix


class LitProcessor:
    """
    Process literate documents into code and documentation files.

    Example:
        ```python
        processor = LitProcessor(LitweaveSettings())
        written = processor.process_file(Path("hello.py.lit"), OutputOptions(html=False))
        ```
    """

    def __init__(
        self,
        settings: Optional[LitweaveSettings] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.settings = settings or LitweaveSettings()
        self._sleep = sleep
        self.logger = structlog.get_logger(__name__)

    def read_source(self, path: Path) -> str:
        """
        Read a document, retrying while it is temporarily unreadable.

        Editors often replace a file while saving, so a read can fail for a
        moment. The read is retried ``watch_max_retries`` times with a fixed
        ``watch_retry_delay`` between attempts.

        Raises:
            SourceUnavailableError: If every attempt fails.
            ValidationError: If the contents cannot be decoded (not retried).
        """
        retries = self.settings.watch_max_retries
        for attempt in range(retries + 1):
            try:
                return path.read_text(encoding=self.settings.encoding)
            except UnicodeDecodeError as e:
                raise ValidationError(
                    message=f"{path} is not valid {self.settings.encoding} text: {e.reason}",
                    error_code="VAL_004",
                    details={
                        "file_path": str(path),
                        "encoding": self.settings.encoding,
                        "position": e.start,
                    },
                    original_exception=e,
                )
            except OSError as e:
                if attempt < retries:
                    self.logger.warning(
                        "source_read_retry",
                        file_path=str(path),
                        attempt=attempt + 1,
                        max_retries=retries,
                        error=str(e),
                    )
                    self._sleep(self.settings.watch_retry_delay)
                else:
                    raise SourceUnavailableError(
                        message=f"Cannot read {path} after {attempt + 1} attempts: {e}",
                        details={"file_path": str(path), "attempts": attempt + 1},
                        original_exception=e,
                    )
        raise SourceUnavailableError(message=f"Cannot read {path}")

    def render(self, source: Path, text: str, options: OutputOptions) -> Dict[Path, str]:
        """
        Produce the requested outputs for a document without writing them.

        Returns:
            Mapping of output path to contents.

        Raises:
            DocumentParseError: If the document is malformed.
            CircularReferenceError: If a macro expands into itself.
        """
        chunks = parse(text, str(source))
        stem = output_stem(source)
        ext = language_extension(source)
        outputs: Dict[Path, str] = {}

        if options.code:
            if options.annotate:
                code = generate_with_annotation(
                    ext,
                    chunks,
                    root_name=self.settings.root_name,
                    fallback_token=self.settings.fallback_comment_token,
                )
            else:
                code = generate(chunks, root_name=self.settings.root_name)
            outputs[options.code_dir / stem] = code

        if options.html:
            outputs[options.docs_dir / f"{stem}.html"] = render_html(
                chunks,
                ext,
                title=stem,
                css_path=options.css_path,
                filler=self.settings.anchor_filler,
                pygments_style=self.settings.pygments_style,
            )

        if options.markdown:
            outputs[options.docs_dir / f"{stem}.md"] = render_markdown(chunks, ext)

        return outputs

    def process_file(self, source: Path, options: OutputOptions) -> List[Path]:
        """
        Read, process and write all requested outputs for one document.

        Returns:
            Paths written, in code/html/markdown order.

        Raises:
            LitweaveError: Any failure reading, processing or writing; the
                CLI reports these per file.
        """
        source = Path(source)
        start = time.perf_counter()
        self.logger.info("document_processing_started", file_path=str(source))

        text = self.read_source(source)
        outputs = self.render(source, text, options)
        if any(path.resolve() == source.resolve() for path in outputs):
            raise ValidationError(
                message=f"Output would overwrite the source document {source}",
                error_code="VAL_003",
                details={"file_path": str(source)},
            )
        for path, contents in outputs.items():
            try:
                path.write_text(contents, encoding=self.settings.encoding)
            except (OSError, UnicodeEncodeError) as e:
                raise OutputWriteError(
                    str(path),
                    reason=str(e),
                    details={"file_path": str(source)},
                    original_exception=e,
                )
            self.logger.debug("output_written", path=str(path), size=len(contents))

        duration_ms = (time.perf_counter() - start) * 1000
        if LoggingService.is_configured():
            LoggingService.log_performance(
                operation="process_file",
                duration_ms=duration_ms,
                metadata={"file_path": str(source), "outputs": len(outputs)},
            )
        return list(outputs)
