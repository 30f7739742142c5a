"""
Persistence Context

Responsibilities:
- Snapshots the document into a durable key-value slot
- Debounces writes so bursts of edits produce a single save
- Loads stored state, failing soft to the starter document
- Stores the theme preference under its own key

Owns: Slot stores, debounce scheduling, the storage wire format
Never: Mutates the document
"""

from folio.contexts.persistence.exceptions import (
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from folio.contexts.persistence.gateway import STORAGE_KEY, PersistenceGateway
from folio.contexts.persistence.scheduler import AsyncioClock, DebouncedChannel, ManualClock
from folio.contexts.persistence.slots import FileSlotStore, MemorySlotStore, SlotStore

__all__ = [
    "PersistenceGateway",
    "STORAGE_KEY",
    # Slots
    "SlotStore",
    "MemorySlotStore",
    "FileSlotStore",
    # Scheduling
    "DebouncedChannel",
    "ManualClock",
    "AsyncioClock",
    # Errors
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
]
