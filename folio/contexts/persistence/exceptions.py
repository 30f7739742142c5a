"""Custom exceptions for the persistence context with slot references."""

from typing import Optional


class StorageError(Exception):
    """
    Base exception for durable slot failures.

    Attributes:
        message: Error description
        key: Slot key involved in the failure
        original_error: The underlying error (e.g., OSError), if any
    """

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.key = key
        self.original_error = original_error

        parts = [message]

        if key:
            parts.append(f"Key: {key}")

        if original_error:
            parts.append(f"Original error: {str(original_error)}")

        super().__init__("\n".join(parts))


class StorageWriteError(StorageError):
    """Raised when a slot cannot be written or removed (quota, availability)."""

    pass


class StorageReadError(StorageError):
    """Raised when a slot exists but cannot be read."""

    pass
