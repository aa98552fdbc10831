"""
Exception hierarchy for litweave.

Defines all exception types with error codes, transient flags, and correlation IDs.

License: MIT
"""

import uuid
from typing import Any, Dict, List, Optional


class LitweaveError(Exception):
    """
    Base exception for all litweave errors.

    All litweave exceptions inherit from this class. Provides standard
    error attributes: message, error_code, details, correlation_id.

    Attributes:
        message: Human-readable error message
        error_code: Programmatic error code (e.g., "PROC_010")
        details: Additional context (dict)
        correlation_id: UUID for tracing across layers
        original_exception: Wrapped exception (if any)
        is_transient: Whether error is transient (retryable)

    Example:
        raise LitweaveError(
            message="Operation failed",
            error_code="ERR_UNKNOWN",
            details={"file_path": "hello.py.lit"},
        )
    """

    def __init__(
        self,
        message: str,
        error_code: str = "ERR_UNKNOWN",
        details: Optional[Dict[str, Any]] = None,
        correlation_id: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.correlation_id = correlation_id or str(uuid.uuid4())
        self.original_exception = original_exception
        self.is_transient = False

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for logging/serialization.

        Returns:
            Dictionary with all error information
        """
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
            "correlation_id": self.correlation_id,
            "original_error": str(self.original_exception) if self.original_exception else None,
        }


class ValidationError(LitweaveError):
    """
    Raised when input validation fails.

    Error Codes:
        VAL_001: Missing required value
        VAL_002: Invalid value type
        VAL_003: Value out of range
        VAL_004: Document is not valid text in the configured encoding

    Not transient (user input errors should not be retried).
    """

    def __init__(self, message: str, error_code: str = "VAL_001", **kwargs):
        super().__init__(message=message, error_code=error_code, **kwargs)
        self.is_transient = False


class ProcessingError(LitweaveError):
    """
    Raised when generating code or documentation fails.

    Error Codes:
        PROC_001: Generation failed
        PROC_002: Rendering failed
        PROC_010: Circular macro reference

    Not transient by default (processing logic errors).
    """

    def __init__(self, message: str, error_code: str = "PROC_001", **kwargs):
        super().__init__(message=message, error_code=error_code, **kwargs)
        self.is_transient = False


class CircularReferenceError(ProcessingError):
    """
    Raised when a macro expands, directly or through other macros, into itself.

    Attributes:
        name: Name of the macro that reappeared on the expansion stack
        cycle: Names from the first occurrence of ``name`` back to ``name``

    Example:
        raise CircularReferenceError(name="a", cycle=["a", "b", "a"])
    """

    def __init__(
        self,
        name: str,
        cycle: List[str],
        message: Optional[str] = None,
        error_code: str = "PROC_010",
        **kwargs,
    ):
        self.name = name
        self.cycle = list(cycle)
        if message is None:
            message = (
                f"Circular reference naming '{name}', cycle path: {' -> '.join(self.cycle)}"
            )

        details = kwargs.pop("details", {})
        details["name"] = name
        details["cycle"] = self.cycle

        super().__init__(message=message, error_code=error_code, details=details, **kwargs)


class DocumentParseError(LitweaveError):
    """
    Raised when a literate document contains a malformed construct.

    Error Code: PARSE_001

    Attributes:
        file_path: Document being parsed
        line: 1-based line number of the offending line
    """

    def __init__(
        self,
        file_path: str,
        line: int,
        reason: str,
        error_code: str = "PARSE_001",
        **kwargs,
    ):
        self.file_path = file_path
        self.line = line
        message = f"{file_path}:{line}: {reason}"

        details = kwargs.pop("details", {})
        details["file_path"] = file_path
        details["line"] = line

        super().__init__(message=message, error_code=error_code, details=details, **kwargs)


class SourceUnavailableError(LitweaveError):
    """
    Raised when a source document cannot be read.

    Error Code: IO_001

    Transient (files are often briefly unreadable while an editor saves them).
    """

    def __init__(self, message: str, error_code: str = "IO_001", **kwargs):
        super().__init__(message=message, error_code=error_code, **kwargs)
        self.is_transient = True


class OutputDirectoryError(LitweaveError):
    """
    Raised when an output directory is missing or is not a directory.

    Error Code: IO_002
    """

    def __init__(self, path: str, error_code: str = "IO_002", **kwargs):
        self.path = path
        details = kwargs.pop("details", {})
        details["path"] = path
        super().__init__(
            message=f"Output directory does not exist: {path}",
            error_code=error_code,
            details=details,
            **kwargs,
        )


class OutputWriteError(LitweaveError):
    """
    Raised when a generated output file cannot be written.

    Error Code: IO_003
    """

    def __init__(self, path: str, reason: str, error_code: str = "IO_003", **kwargs):
        self.path = path
        details = kwargs.pop("details", {})
        details["path"] = path
        super().__init__(
            message=f"Cannot write {path}: {reason}",
            error_code=error_code,
            details=details,
            **kwargs,
        )


__all__ = [
    "LitweaveError",
    "ValidationError",
    "ProcessingError",
    "CircularReferenceError",
    "DocumentParseError",
    "SourceUnavailableError",
    "OutputDirectoryError",
    "OutputWriteError",
]
