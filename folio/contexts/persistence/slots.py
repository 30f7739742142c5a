"""
Durable key-value slots.

A slot store maps fixed string keys to string values. The Persistence Gateway
writes the serialized document under one key and the theme preference under
another.

Implementations:
- MemorySlotStore: in-process dict, optionally with a byte quota
- FileSlotStore: one file per key in a directory, written atomically
"""

import os
import shutil
import tempfile
from pathlib import Path
from typing import Dict, Optional

from folio.contexts.persistence.exceptions import StorageReadError, StorageWriteError


class SlotStore:
    """Interface for durable key-value slots."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the slot is empty."""
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        raise NotImplementedError

    def remove(self, key: str) -> None:
        """Empty the slot. Removing an empty slot is not an error."""
        raise NotImplementedError


class MemorySlotStore(SlotStore):
    """
    Slot store backed by a dict.

    Args:
        quota_bytes: Maximum total UTF-8 size of all values. Writes that would
            exceed it raise StorageWriteError, like a browser's storage quota.
    """

    def __init__(self, quota_bytes: Optional[int] = None):
        self.quota_bytes = quota_bytes
        self._slots: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._slots.get(key)

    def set(self, key: str, value: str) -> None:
        try:
            size = len(value.encode("utf-8"))
        except UnicodeEncodeError as e:
            raise StorageWriteError("Value is not valid UTF-8 text", key=key, original_error=e) from e

        if self.quota_bytes is not None:
            others = sum(len(v.encode("utf-8")) for k, v in self._slots.items() if k != key)
            if others + size > self.quota_bytes:
                raise StorageWriteError(
                    f"Quota of {self.quota_bytes} bytes exceeded", key=key
                )
        self._slots[key] = value

    def remove(self, key: str) -> None:
        self._slots.pop(key, None)


class FileSlotStore(SlotStore):
    """
    Slot store keeping each key in its own file under a directory.

    Writes go to a temp file first and are moved into place only on success,
    so a failed write never leaves a truncated slot behind.
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / key

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(f"Could not read slot file {path}", key=key, original_error=e) from e

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            temp_fd, temp_path = tempfile.mkstemp(dir=self.directory, suffix=".tmp", text=True)
        except OSError as e:
            raise StorageWriteError(f"Could not prepare slot file {path}", key=key, original_error=e) from e

        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                f.write(value)

            # Only overwrite original if write succeeded
            shutil.move(temp_path, path)
        except (OSError, ValueError) as e:
            # Clean up temp file if the write or its UTF-8 encoding failed
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise StorageWriteError(f"Could not write slot file {path}", key=key, original_error=e) from e

    def remove(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageWriteError(f"Could not remove slot file {path}", key=key, original_error=e) from e
