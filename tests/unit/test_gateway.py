"""Unit tests for the Persistence Gateway."""

import json

import pytest

from folio.contexts.editing.defaults import starter_document
from folio.contexts.editing.document import Document, Section
from folio.contexts.editing.store import DocumentStore
from folio.contexts.persistence.exceptions import StorageReadError, StorageWriteError
from folio.contexts.persistence.gateway import STORAGE_KEY, PersistenceGateway
from folio.contexts.persistence.slots import FileSlotStore, MemorySlotStore


class UnreadableSlotStore(MemorySlotStore):
    def get(self, key):
        raise StorageReadError("disk on fire", key=key)


def _document_writes(slots):
    return [value for key, value in slots.writes if key == STORAGE_KEY]


@pytest.mark.unit
def test_burst_of_mutations_produces_single_write(store, slots, clock):
    """Test that N mutations inside the window yield one write of the Nth state."""
    for i in range(10):
        store.add_section()
        store.edit_section(i + 1, f"Section {i}", f"<p>{i}</p>")
        clock.advance(0.1)

    assert _document_writes(slots) == []

    clock.advance(0.6)

    writes = _document_writes(slots)
    assert len(writes) == 1
    assert json.loads(writes[0]) == store.document.to_dict()
    assert json.loads(writes[0])["sections"][-1]["title"] == "Section 9"


@pytest.mark.unit
def test_separate_quiet_periods_produce_separate_writes(store, slots, clock):
    """Test that each quiet period ends in its own write."""
    store.add_section()
    clock.advance(0.6)
    store.add_section()
    clock.advance(0.599)

    assert len(_document_writes(slots)) == 1

    clock.advance(0.01)
    assert len(_document_writes(slots)) == 2


@pytest.mark.unit
def test_debounced_write_captures_state_at_fire_time(store, slots, clock):
    """Test that the timer writes the latest document, even after a replace."""
    store.add_section()
    store.replace_document({"name": "Z", "contact": "", "sections": []})
    clock.advance(1.0)

    assert json.loads(_document_writes(slots)[0])["name"] == "Z"


@pytest.mark.unit
def test_save_now_cancels_pending_timer(store, gateway, slots, clock):
    """Test that an explicit save makes the pending debounced save unnecessary."""
    store.add_section()
    assert gateway.save_pending

    assert store.save() is True
    assert not gateway.save_pending
    clock.advance(5.0)

    assert len(_document_writes(slots)) == 1
    assert gateway.last_saved_at is not None


@pytest.mark.unit
def test_flush_writes_pending_state(store, gateway, slots):
    """Test that flush() writes immediately and reports whether anything was pending."""
    assert gateway.flush() is False

    store.add_section()
    assert gateway.flush() is True
    assert len(_document_writes(slots)) == 1
    assert gateway.flush() is False


@pytest.mark.unit
def test_load_roundtrip(gateway, scenario_document):
    """Test that a saved document loads back equal."""
    gateway.save_now(scenario_document)

    document, found = gateway.load()

    assert found is True
    assert document == scenario_document


@pytest.mark.unit
@pytest.mark.parametrize("raw", [None, "", "{not json", '{"name": "A"}', "[1, 2]", '"text"'])
def test_load_fails_soft_to_starter(raw):
    """Test that missing or malformed stored data falls back to the starter document."""
    slots = MemorySlotStore()
    if raw is not None:
        slots.set(STORAGE_KEY, raw)

    document, found = PersistenceGateway(slots).load()

    assert found is False
    assert document == starter_document()


@pytest.mark.unit
def test_load_read_error_falls_back(log_messages):
    """Test that a slot read failure is logged and not raised."""
    document, found = PersistenceGateway(UnreadableSlotStore()).load()

    assert found is False
    assert document == starter_document()
    assert any("Failed to load saved state" in m for m in log_messages)


@pytest.mark.unit
def test_write_failure_is_logged_and_not_raised(clock, log_messages):
    """Test that a quota failure keeps the in-memory state and editing continues."""
    slots = MemorySlotStore(quota_bytes=10)
    gateway = PersistenceGateway(slots, clock=clock)
    store = DocumentStore(
        document=Document(identity="A", sections=[Section("S1", "c1")]), gateway=gateway
    )

    store.add_section()
    clock.advance(1.0)

    assert slots.get(STORAGE_KEY) is None
    assert gateway.last_save_succeeded is False
    assert any("Could not save" in m for m in log_messages)

    # Editing is not blocked after a failed write
    assert store.edit_section(1, "Still editing", "") is True
    assert store.sections[1].title == "Still editing"
    assert store.save() is False


@pytest.mark.unit
def test_reset_clears_slot_synchronously(store, gateway, clock):
    """Test that reset empties durable storage immediately and drops pending saves."""
    store.save()
    store.add_section()

    store.reset_document()

    assert gateway.load()[1] is False
    assert not gateway.save_pending

    clock.advance(5.0)
    assert gateway.load()[1] is False
    assert store.document == Document(identity="Your Name", contact="", sections=[])


@pytest.mark.unit
def test_reset_notifies_without_scheduling(store, gateway, projector):
    """Test that reset re-renders but does not schedule a save."""
    store.attach(projector)
    projector.events.clear()

    store.reset_document()

    assert projector.events == [("sections", []), ("document", "Your Name")]
    assert not gateway.save_pending


@pytest.mark.unit
def test_theme_preference_uses_separate_key(store, gateway, slots):
    """Test that theme writes are immediate and independent of document saves."""
    assert store.get_theme_preference() == "default"

    assert store.set_theme_preference("dark") == "dark"

    assert slots.get(STORAGE_KEY + "_theme") == "dark"
    assert _document_writes(slots) == []
    assert not gateway.save_pending
    assert store.get_theme_preference() == "dark"


@pytest.mark.unit
def test_invalid_theme_treated_as_default(gateway, slots):
    """Test that unknown theme values read and write as default."""
    slots.set(STORAGE_KEY + "_theme", "neon")
    assert gateway.get_theme_preference() == "default"

    assert gateway.set_theme_preference("sepia") == "default"
    assert slots.get(STORAGE_KEY + "_theme") == "default"


@pytest.mark.unit
def test_theme_survives_reset(store, gateway):
    """Test that resetting the document leaves the theme preference alone."""
    store.set_theme_preference("green")

    store.reset_document()

    assert gateway.get_theme_preference() == "green"


@pytest.mark.unit
def test_open_loads_stored_document(gateway, scenario_document, projector):
    """Test that DocumentStore.open restores the stored document and renders it."""
    gateway.save_now(scenario_document)

    store = DocumentStore.open(gateway, projectors=[projector])

    assert store.document == scenario_document
    assert projector.events == [("sections", ["S1"]), ("document", "A")]
    assert not gateway.save_pending


@pytest.mark.unit
def test_open_without_stored_document_uses_starter(gateway):
    """Test that an empty slot opens the starter document."""
    store = DocumentStore.open(gateway)

    assert store.document == starter_document()


@pytest.mark.unit
def test_unencodable_text_still_saves(store, gateway, slots, clock):
    """Test that a lone surrogate in memory is stored escaped instead of breaking saves."""
    store.edit_section(0, "\ud800", "<p>é</p>")
    clock.advance(1.0)

    writes = _document_writes(slots)
    assert len(writes) == 1
    assert writes[0].isascii()
    assert json.loads(writes[0])["sections"][0]["title"] == "\ud800"
    assert gateway.last_save_succeeded is True
    assert store.save() is True


@pytest.mark.unit
def test_unserializable_document_is_a_logged_write_failure(gateway, log_messages):
    """Test that a document json cannot serialize fails the save without raising."""
    document = Document(identity="A", sections=[], extras={"when": object()})

    assert gateway.save_now(document) is False
    assert gateway.last_save_succeeded is False
    assert any("Could not save" in m for m in log_messages)


@pytest.mark.unit
def test_file_slot_encoding_failure_leaves_no_temp_file(tmp_path):
    """Test that a value the file cannot hold raises StorageWriteError and cleans up."""
    slots = FileSlotStore(tmp_path)
    slots.set("k", "old")

    with pytest.raises(StorageWriteError):
        slots.set("k", "\ud800")

    assert slots.get("k") == "old"
    assert list(tmp_path.glob("*.tmp")) == []


@pytest.mark.unit
def test_memory_slot_rejects_unencodable_value():
    """Test that MemorySlotStore reports unencodable text as a write failure."""
    with pytest.raises(StorageWriteError):
        MemorySlotStore(quota_bytes=100).set("k", "\ud800")


@pytest.mark.unit
def test_load_of_deeply_nested_slot_fails_soft():
    """Test that stored JSON too deep to decode falls back to the starter document."""
    slots = MemorySlotStore()
    slots.set(STORAGE_KEY, '{"sections": [], "x": ' + "[" * 200000 + "]" * 200000 + "}")

    document, found = PersistenceGateway(slots).load()

    assert found is False
    assert document == starter_document()
