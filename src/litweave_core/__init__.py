"""
litweave core layer.

Contains:
- Chunk model for parsed literate documents
- Macro merging, expansion and source annotation (tangle)
- Document parser
- HTML and Markdown rendering (render)
- Exception hierarchy
- Configuration management
- Logging service

License: MIT
"""

from .config import LitweaveSettings, get_config_summary
from .exceptions import (
    CircularReferenceError,
    DocumentParseError,
    LitweaveError,
    OutputDirectoryError,
    OutputWriteError,
    ProcessingError,
    SourceUnavailableError,
    ValidationError,
)
from .logging_service import LoggingConfig, LoggingService
from .models import (
    ROOT_NAME,
    Definition,
    LiteralPart,
    Narrative,
    ReferencePart,
    SourcePosition,
)
from .parser import parse, parse_file
from .tangle import annotate, expand, generate, generate_with_annotation, merge

__version__ = "0.3.0"

__all__ = [
    # Exceptions
    "LitweaveError",
    "ValidationError",
    "ProcessingError",
    "CircularReferenceError",
    "DocumentParseError",
    "SourceUnavailableError",
    "OutputDirectoryError",
    "OutputWriteError",
    # Configuration
    "LitweaveSettings",
    "get_config_summary",
    # Logging
    "LoggingService",
    "LoggingConfig",
    # Model
    "ROOT_NAME",
    "SourcePosition",
    "LiteralPart",
    "ReferencePart",
    "Narrative",
    "Definition",
    # Pipeline
    "parse",
    "parse_file",
    "annotate",
    "merge",
    "expand",
    "generate",
    "generate_with_annotation",
]
