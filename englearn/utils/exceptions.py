"""
Application-specific exception classes.

Transport problems and the three JSON-shape failures are kept apart so callers
can tell the learner which step went wrong.
"""

from typing import Optional


class PracticeError(Exception):
    """Base exception class for englearn errors."""

    stage: str = "unknown"

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class TransportFailure(PracticeError):
    """Raised when the completion endpoint cannot be reached or answers non-2xx."""

    stage = "transport"

    def __init__(self, message: str = "generation failed", status_code: Optional[int] = None, **kwargs):
        super().__init__(message, error_code="TRANSPORT_FAILURE", **kwargs)
        self.status_code = status_code


class InputError(PracticeError):
    """Raised when the learner's parameters are unusable before any call is made."""

    stage = "input"

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        super().__init__(message, error_code="INPUT_ERROR", **kwargs)
        self.field = field


class ParseError(PracticeError):
    """Base for failures turning completion text into structured data."""


class NoJsonFound(ParseError):
    stage = "locate"

    def __init__(self, message: str = "No JSON found in response", **kwargs):
        super().__init__(message, error_code="NO_JSON_FOUND", **kwargs)


class MalformedJson(ParseError):
    stage = "decode"

    def __init__(self, message: str = "Response JSON could not be decoded", **kwargs):
        super().__init__(message, error_code="MALFORMED_JSON", **kwargs)


class SchemaViolation(ParseError):
    """Structurally valid JSON that fails a required field, count or enum check."""

    stage = "validate"

    def __init__(self, field: str, reason: str, **kwargs):
        super().__init__(f"{field}: {reason}", error_code="SCHEMA_VIOLATION", **kwargs)
        self.field = field
        self.reason = reason


def log_error(error: PracticeError, logger=None, level: str = "error"):
    """
    Log a PracticeError with structured information.

    Args:
        error: The error to log
        logger: Logger instance (uses default logger if None)
        level: Log level ("error", "warning", "info", "debug")
    """
    if logger is None:
        import logging
        logger = logging.getLogger(__name__)

    log_func = getattr(logger, level)
    log_func(
        f"{error.error_code}: {error.message}",
        extra={
            "error_code": error.error_code,
            "stage": error.stage,
            "details": error.details,
        },
    )
