"""Unit tests for request/response section editing."""

import pytest

from folio.contexts.editing.document import Document, Section
from folio.contexts.editing.session import EditSession
from folio.contexts.editing.store import DocumentStore


@pytest.fixture
def session():
    store = DocumentStore(
        document=Document(identity="A", sections=[Section("S1", "<p>one</p>"), Section("S2", "")])
    )
    return EditSession(store)


@pytest.mark.unit
def test_open_returns_current_values(session):
    """Test that opening an edit pre-fills the current title and content."""
    request = session.open(0)

    assert request.index == 0
    assert request.title == "S1"
    assert request.content == "<p>one</p>"
    assert session.active is request


@pytest.mark.unit
@pytest.mark.parametrize("index", [-1, 2, "0", None])
def test_open_invalid_index(session, index):
    """Test that an invalid index opens nothing."""
    assert session.open(index) is None
    assert session.active is None


@pytest.mark.unit
def test_commit_applies_edit_rules(session):
    """Test that committing goes through edit_section (trim, Untitled default)."""
    request = session.open(1)

    assert session.commit(request.token, "   ", "<p>two</p>") is True
    assert session.store.sections[1] == Section("Untitled", "<p>two</p>")
    assert session.active is None


@pytest.mark.unit
def test_commit_with_wrong_token_rejected(session):
    """Test that a token from another request cannot commit."""
    session.open(0)

    assert session.commit("bogus", "X", "") is False
    assert session.store.sections[0].title == "S1"


@pytest.mark.unit
def test_commit_without_active_request_is_noop(session):
    """Test that committing after cancel does nothing."""
    request = session.open(0)
    session.cancel()

    assert session.commit(request.token, "X", "") is False
    assert session.store.sections[0].title == "S1"


@pytest.mark.unit
def test_reopening_replaces_active_request(session):
    """Test that only the latest request can commit."""
    first = session.open(0)
    second = session.open(1)

    assert session.commit(first.token, "X", "") is False
    assert session.commit(second.token, "Y", "") is True
    assert [s.title for s in session.store.sections] == ["S1", "Y"]


@pytest.mark.unit
def test_commit_rejected_after_sections_move(session):
    """Test that an edit opened before a reorder cannot land on the wrong section."""
    request = session.open(0)
    session.store.move_section(1, 0)

    assert session.commit(request.token, "X", "<p>x</p>") is False
    assert [s.title for s in session.store.sections] == ["S2", "S1"]


@pytest.mark.unit
def test_content_only_edits_keep_request_valid(session):
    """Test that editing another section does not invalidate an open request."""
    request = session.open(0)
    session.store.edit_section(1, "Other", "")

    assert session.commit(request.token, "First", "<p>1</p>") is True
    assert [s.title for s in session.store.sections] == ["First", "Other"]
