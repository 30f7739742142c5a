"""Shared fixtures for FOLIO tests."""

import pytest
from loguru import logger

from folio.contexts.editing.document import Document, Section
from folio.contexts.editing.store import DocumentStore
from folio.contexts.persistence.gateway import PersistenceGateway
from folio.contexts.persistence.scheduler import ManualClock
from folio.contexts.persistence.slots import MemorySlotStore
from folio.contexts.projection.projector import ViewProjector


class CountingSlotStore(MemorySlotStore):
    """MemorySlotStore that records every write."""

    def __init__(self, quota_bytes=None):
        super().__init__(quota_bytes=quota_bytes)
        self.writes = []

    def set(self, key, value):
        super().set(key, value)
        self.writes.append((key, value))


class RecordingProjector(ViewProjector):
    """Projector that records every callback it receives."""

    def __init__(self):
        self.events = []

    def on_sections_changed(self, sections):
        self.events.append(("sections", [s.title for s in sections]))

    def on_document_changed(self, document):
        self.events.append(("document", document.identity))


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def slots():
    return CountingSlotStore()


@pytest.fixture
def gateway(slots, clock):
    return PersistenceGateway(slots, clock=clock, delay_ms=600)


@pytest.fixture
def scenario_document():
    return Document(
        identity="A",
        contact="x",
        sections=[Section(title="S1", content="<p>c1</p>")],
    )


@pytest.fixture
def store(scenario_document, gateway):
    return DocumentStore(document=scenario_document, gateway=gateway)


@pytest.fixture
def projector():
    return RecordingProjector()


@pytest.fixture
def log_messages():
    """Capture loguru output (DEBUG and above) as a list of strings."""
    messages = []
    handler_id = logger.add(lambda message: messages.append(str(message)), level="DEBUG")
    yield messages
    logger.remove(handler_id)
