# Unroller Errors
"""Exception hierarchy raised by the unrolling engine."""

from typing import Any, Dict, Optional


class UnrollerError(Exception):
    """
    Base class for unrolling failures.

    ``content`` holds the document returned alongside the error, if any:
    the untouched input for validation failures, or the best-effort
    document for downstream failures.
    """

    default_message = "failed to unroll content"

    def __init__(self, message: Optional[str] = None, content: Optional[Dict[str, Any]] = None):
        super().__init__(message or self.default_message)
        self.content = content


class ValidationError(UnrollerError):
    """The document does not satisfy the preconditions of the selected unroller."""

    default_message = "invalid content"


class ConversionError(UnrollerError):
    """A field is present but not of the expected shape."""

    default_message = "failed to cast variable to expected type"


class UUIDNotFoundError(UnrollerError, ValueError):
    """No UUID could be extracted from a resource identifier."""

    default_message = "cannot extract UUID"


class ContentReaderError(UnrollerError):
    """The content store could not be reached or returned an unusable response."""

    default_message = "error connecting to content store"
