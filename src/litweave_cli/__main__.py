"""
litweave CLI entry point.

Usage:
    litweave [--html] [--markdown] [--code] [--annotate] [--css PATH]
             [--docs-dir DIR] [--code-dir DIR] [--watch] FILE...
    litweave --help
    litweave --version

Without any of --html/--markdown/--code, all three outputs are produced.

Exit status: 0 on success, 1 when a document fails to process, 2 for
invalid arguments (missing input files or output directories).
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from litweave_core import __version__
from litweave_core.config import LitweaveSettings
from litweave_core.exceptions import LitweaveError, SourceUnavailableError
from litweave_core.logging_service import LoggingService
from litweave_core.utils import configure_logging, get_logger
from litweave_cli.pipeline import LitProcessor, OutputOptions
from litweave_cli.watch import FileWatcher


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="litweave",
        description="Generate code and documentation from literate documents",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    parser.add_argument("files", nargs="+", type=Path, metavar="FILE", help="Literate documents")

    outputs = parser.add_argument_group("outputs")
    outputs.add_argument("--html", action="store_true", help="Generate HTML documentation")
    outputs.add_argument("--markdown", action="store_true", help="Generate Markdown documentation")
    outputs.add_argument("--code", action="store_true", help="Generate source code")
    outputs.add_argument(
        "--annotate",
        action="store_true",
        help="Prefix each macro in generated code with a file:line comment",
    )
    outputs.add_argument("--css", metavar="PATH", help="Stylesheet to link from HTML output")
    outputs.add_argument(
        "--docs-dir",
        type=Path,
        default=Path.cwd(),
        metavar="DIR",
        help="Directory for HTML/Markdown output (default: current directory)",
    )
    outputs.add_argument(
        "--code-dir",
        type=Path,
        default=Path.cwd(),
        metavar="DIR",
        help="Directory for code output (default: current directory)",
    )

    parser.add_argument(
        "--watch", action="store_true", help="Regenerate outputs whenever a document changes"
    )
    parser.add_argument("--log-level", help="Log level (default: LITWEAVE_LOG_LEVEL or INFO)")
    parser.add_argument(
        "--log-format",
        choices=["json", "console"],
        help="Log format (default: LITWEAVE_LOG_FORMAT or console)",
    )
    return parser


def options_from_args(args: argparse.Namespace) -> OutputOptions:
    """Build OutputOptions; with no output flags, every output is enabled."""
    everything = not (args.html or args.markdown or args.code)
    return OutputOptions(
        code=args.code or everything,
        html=args.html or everything,
        markdown=args.markdown or everything,
        annotate=args.annotate,
        code_dir=args.code_dir,
        docs_dir=args.docs_dir,
        css_path=args.css,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = LitweaveSettings()
    if not LoggingService.is_configured():
        try:
            configure_logging(level=args.log_level, format=args.log_format, settings=settings)
        except ValueError as e:
            parser.error(str(e))
    logger = get_logger("litweave_cli")

    options = options_from_args(args)
    try:
        options.validate()
    except LitweaveError as e:
        LoggingService.log_error(e)
        print(f"litweave: error: {e.message}", file=sys.stderr)
        return 2

    missing = [str(path) for path in args.files if not path.is_file()]
    if missing:
        print(f"litweave: error: no such file: {', '.join(missing)}", file=sys.stderr)
        return 2

    processor = LitProcessor(settings)

    if args.watch:

        def regenerate(path: Path) -> None:
            try:
                processor.process_file(path, options)
            except SourceUnavailableError:
                raise
            except LitweaveError as e:
                LoggingService.log_error(e, context={"file_path": str(path)})

        watcher = FileWatcher(
            args.files,
            regenerate,
            interval=settings.watch_interval,
            recency_window=settings.watch_recency_window,
        )
        try:
            for path in args.files:
                regenerate(path)
            watcher.run()
        except SourceUnavailableError as e:
            LoggingService.log_error(e)
            return 1
        return 0

    status = 0
    for path in args.files:
        try:
            written = processor.process_file(path, options)
        except LitweaveError as e:
            LoggingService.log_error(e, context={"file_path": str(path)})
            print(f"litweave: {path}: {e.message}", file=sys.stderr)
            status = 1
            continue
        logger.info("document_processed", file_path=str(path), outputs=[str(p) for p in written])
    return status


if __name__ == "__main__":
    sys.exit(main())
