"""Custom exceptions for the editing context."""

from typing import Optional


class ValidationError(ValueError):
    """
    Exception raised when a document fails structural validation.

    Raised by import and whole-document replacement when a required field is
    missing or malformed. The current document is never modified when this
    is raised.

    Attributes:
        message: Error description
        field_name: Name of the offending field (e.g., 'sections')
        source: Where the data came from (e.g., a file name), if known
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        source: Optional[str] = None,
    ):
        self.message = message
        self.field_name = field_name
        self.source = source

        parts = [message]
        if field_name:
            parts.append(f"Field: {field_name}")
        if source:
            parts.append(f"Source: {source}")

        super().__init__("\n".join(parts))
