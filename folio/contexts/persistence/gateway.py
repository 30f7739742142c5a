"""
Persistence Gateway

Durable snapshotting of the document under a fixed key, decoupled from the
rate of edits by a debounced document channel.

Policies:
- schedule_save() restarts the quiet period on every call; the document is
  serialized when the timer fires, so the write always holds the latest state
- save_now() writes immediately and cancels any pending debounced save,
  since the state it would have written is already durable
- write failures are logged and swallowed; the in-memory document stays
  authoritative until the next successful write
- the stored form is compact ASCII-only JSON
- the theme preference lives under its own key and is written immediately
"""

import os
from typing import Callable, Optional, Tuple

from dotenv import load_dotenv

from folio.contexts.editing.defaults import normalize_theme, starter_document
from folio.contexts.editing.document import Document
from folio.contexts.editing.exceptions import ValidationError
from folio.contexts.editing.exchange import parse_document, serialize_document
from folio.contexts.persistence.exceptions import StorageReadError, StorageWriteError
from folio.contexts.persistence.logger import (
    _log_debug,
    _log_error,
    _log_info,
    log_load_fallback,
    log_save_result,
)
from folio.contexts.persistence.scheduler import DebouncedChannel, ManualClock
from folio.contexts.persistence.slots import SlotStore
from folio.utils.timestamp import now_exact

load_dotenv()
SAVE_DEBOUNCE_MS = int(os.getenv("FOLIO_SAVE_DEBOUNCE_MS", "600"))

STORAGE_KEY = "interactive_res_builder_v1"
THEME_KEY_SUFFIX = "_theme"


class PersistenceGateway:
    """
    Reads and writes the document and theme preference through a SlotStore.

    Args:
        slots: Durable key-value store
        clock: Clock driving the debounce timer (defaults to a ManualClock,
            which only fires on advance() or flush())
        delay_ms: Debounce quiet period in milliseconds
        key: Slot key for the document; the theme uses key + "_theme"
    """

    def __init__(
        self,
        slots: SlotStore,
        clock=None,
        delay_ms: int = SAVE_DEBOUNCE_MS,
        key: str = STORAGE_KEY,
    ):
        self.slots = slots
        self.clock = clock if clock is not None else ManualClock()
        self.key = key
        self.theme_key = key + THEME_KEY_SUFFIX
        self.last_saved_at: Optional[str] = None
        self.last_save_succeeded: Optional[bool] = None
        self._snapshot: Optional[Callable[[], Document]] = None
        self.document_channel = DebouncedChannel(
            name="document",
            clock=self.clock,
            delay=delay_ms / 1000,
            action=self._save_snapshot,
        )

    @property
    def save_pending(self) -> bool:
        return self.document_channel.is_pending

    def schedule_save(self, snapshot: Callable[[], Document]) -> None:
        """
        Schedule a debounced write.

        Args:
            snapshot: Callable returning the document to write; evaluated
                when the timer fires, not when scheduled
        """
        self._snapshot = snapshot
        deadline = self.document_channel.schedule()
        _log_debug(f"Save scheduled for t={deadline:.3f}")

    def save_now(self, document: Document) -> bool:
        """
        Serialize and write the document immediately.

        Cancels any pending debounced save.

        Returns:
            True if the write succeeded, False if it failed (logged)
        """
        self.document_channel.cancel()
        try:
            payload = self._encode(document)
            self.slots.set(self.key, payload)
        except StorageWriteError as e:
            self.last_save_succeeded = False
            log_save_result(self.key, success=False, error=e)
            return False

        self.last_save_succeeded = True
        self.last_saved_at = now_exact()
        log_save_result(self.key, success=True, size=len(payload))
        return True

    def _encode(self, document: Document) -> str:
        """Compact, ASCII-only storage form; unserializable documents are write failures."""
        try:
            return serialize_document(document, indent=None, ensure_ascii=True)
        except (ValueError, TypeError, RecursionError) as e:
            raise StorageWriteError(
                "Could not serialize document", key=self.key, original_error=e
            ) from e

    def flush(self) -> bool:
        """Run the pending debounced save now. Returns True if one was pending."""
        return self.document_channel.flush()

    def load(self) -> Tuple[Document, bool]:
        """
        Read the stored document.

        Returns:
            (document, True) if the slot holds a valid document, otherwise
            (starter document, False). Never raises for bad stored data.
        """
        try:
            raw = self.slots.get(self.key)
        except StorageReadError as e:
            log_load_fallback(self.key, str(e))
            return starter_document(), False

        if not raw:
            _log_debug(f"No saved state under '{self.key}'")
            return starter_document(), False

        try:
            document = parse_document(raw, source=self.key)
        except ValidationError as e:
            log_load_fallback(self.key, e.message)
            return starter_document(), False

        _log_info(f"Loaded {len(document.sections)} section(s) from '{self.key}'")
        return document, True

    def clear(self) -> bool:
        """
        Cancel any pending save and empty the document slot.

        Returns:
            True if the slot was cleared, False if removal failed (logged)
        """
        self.document_channel.cancel()
        try:
            self.slots.remove(self.key)
        except StorageWriteError as e:
            _log_error(f"Could not clear '{self.key}': {e}")
            return False
        _log_info(f"Cleared '{self.key}'")
        return True

    def get_theme_preference(self) -> str:
        """Stored theme, or "default" when unset, unreadable, or unknown."""
        try:
            value = self.slots.get(self.theme_key)
        except StorageReadError as e:
            log_load_fallback(self.theme_key, str(e))
            return normalize_theme(None)
        return normalize_theme(value)

    def set_theme_preference(self, name: str) -> str:
        """
        Store a theme preference immediately.

        Unknown names are stored as "default". Write failures are logged.

        Returns:
            The theme name actually applied
        """
        theme = normalize_theme(name)
        try:
            self.slots.set(self.theme_key, theme)
        except StorageWriteError as e:
            _log_error(f"Could not save theme preference: {e}")
        return theme

    def _save_snapshot(self) -> None:
        if self._snapshot is None:
            return
        self.save_now(self._snapshot())
