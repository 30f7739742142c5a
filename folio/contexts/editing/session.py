"""
Edit sessions for section editing.

Editing is a request/response exchange rather than a blocking dialog: the
view opens a request for a section, shows the returned values however it
likes, and later commits (or cancels) with the token it was given. At most
one request is active per session.

A request goes stale if section positions change while it is open (add,
remove, move, duplicate, replace, reset); committing a stale request is
rejected so the edit cannot land on the wrong section.
"""

import uuid
from dataclasses import dataclass
from typing import Optional

from folio.contexts.editing.logger import log_rejected


@dataclass(frozen=True)
class EditRequest:
    """
    An open request to edit one section.

    Attributes:
        token: Opaque identifier the view passes back on commit
        index: Position of the section being edited
        title: Current title (for pre-filling the editor)
        content: Current content (for pre-filling the editor)
        layout_version: Store layout version when the request was opened
    """

    token: str
    index: int
    title: str
    content: str
    layout_version: int


class EditSession:
    """Tracks the single active section edit for a DocumentStore."""

    def __init__(self, store):
        self.store = store
        self._active: Optional[EditRequest] = None

    @property
    def active(self) -> Optional[EditRequest]:
        return self._active

    def open(self, index: int) -> Optional[EditRequest]:
        """
        Start editing a section, replacing any active request.

        Returns:
            EditRequest, or None if index does not name a section
        """
        sections = self.store.sections
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(sections):
            log_rejected("open_edit", f"invalid index {index!r}")
            return None

        section = sections[index]
        self._active = EditRequest(
            token=uuid.uuid4().hex,
            index=index,
            title=section.title or "",
            content=section.content or "",
            layout_version=self.store.layout_version,
        )
        return self._active

    def commit(self, token: str, title: Optional[str], content: Optional[str]) -> bool:
        """
        Commit the active request.

        Returns:
            True if the section was updated; False if there is no matching
            active request or it went stale
        """
        request = self._active
        if request is None or request.token != token:
            log_rejected("commit_edit", "no matching active edit")
            return False

        self._active = None
        if request.layout_version != self.store.layout_version:
            log_rejected("commit_edit", f"sections changed since edit of index {request.index} began")
            return False

        return self.store.edit_section(request.index, title, content)

    def cancel(self) -> None:
        self._active = None
