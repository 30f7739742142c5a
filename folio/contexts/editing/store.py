"""
Document Store

Sole owner of a resume Document. Every mutation goes through a store method
so that change notification and save scheduling happen exactly once per
logical change:

    mutation -> projectors notified (on_sections_changed, on_document_changed)
             -> persistence gateway schedules a debounced save

Rejected mutations (invalid indices, invalid documents) change nothing,
notify nobody, and schedule nothing.

Stores are independent: each owns its own Document, so any number may
coexist (e.g., one per test, or a scratch store for previewing an import).
"""

import copy
import re
from typing import Any, Iterable, List, Mapping, Optional, Union

from folio.contexts.editing.defaults import (
    DEFAULT_THEME,
    blank_document,
    normalize_theme,
    placeholder_section,
    sample_document,
    starter_document,
)
from folio.contexts.editing.document import UNTITLED, Document, Section
from folio.contexts.editing.exceptions import ValidationError
from folio.contexts.editing.logger import _log_info, log_mutation, log_rejected

INTEGER_PATTERN = re.compile(r"[+-]?\d+")


def parse_index(value: Any) -> Optional[int]:
    """
    Parse a section index strictly.

    Accepts ints and strings holding a base-10 integer (e.g. a drag payload
    like "2"). Everything else, including bools, floats and NaN, is invalid.

    Returns:
        The integer, or None if value is not a valid integer
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and INTEGER_PATTERN.fullmatch(value.strip()):
        return int(value.strip())
    return None


class DocumentStore:
    """
    Owns a Document and exposes its mutations.

    Args:
        document: Initial document (defaults to the starter document)
        gateway: PersistenceGateway for saving; None keeps the store in memory only
        projectors: Views to notify after each mutation
    """

    def __init__(
        self,
        document: Optional[Document] = None,
        gateway=None,
        projectors: Iterable = (),
    ):
        self._document = document if document is not None else starter_document()
        self.gateway = gateway
        self._projectors: List = list(projectors)
        self._theme = DEFAULT_THEME
        # Bumped whenever section positions change, so stale edit requests can be detected
        self.layout_version = 0

    @classmethod
    def open(cls, gateway, projectors: Iterable = ()) -> "DocumentStore":
        """
        Create a store from durable storage, falling back to the starter document.

        Args:
            gateway: PersistenceGateway to load from and save through
            projectors: Views to attach

        Returns:
            DocumentStore holding the stored document if one was found
        """
        document, found = gateway.load()
        if not found:
            _log_info("No saved document found; starting from the starter document")
        store = cls(document=document, gateway=gateway, projectors=projectors)
        store.refresh()
        return store

    @property
    def document(self) -> Document:
        """The owned Document. Mutate it only through store methods."""
        return self._document

    @property
    def sections(self) -> List[Section]:
        return self._document.sections

    def attach(self, projector) -> None:
        """Attach a projector and render the current document to it."""
        self._projectors.append(projector)
        projector.on_sections_changed(self._document.sections)
        projector.on_document_changed(self._document)

    def detach(self, projector) -> None:
        self._projectors.remove(projector)

    def refresh(self) -> None:
        """Re-render all projectors without changing or saving anything."""
        self._notify()

    def _valid_index(self, index: Any) -> Optional[int]:
        parsed = parse_index(index)
        if parsed is None or not 0 <= parsed < len(self._document.sections):
            return None
        return parsed

    # Section operations

    def add_section(self) -> int:
        """
        Append a placeholder section.

        Returns:
            Index of the new section
        """
        self._document.sections.append(placeholder_section())
        self.layout_version += 1
        index = len(self._document.sections) - 1
        self._commit("add_section", f"index {index}")
        return index

    def edit_section(self, index: int, title: Optional[str], content: Optional[str]) -> bool:
        """
        Update a section's title and content.

        The title is trimmed and becomes "Untitled" if nothing is left.
        Content is stored verbatim.

        Returns:
            True if the section was updated, False if index is invalid
        """
        position = self._valid_index(index)
        if position is None:
            log_rejected("edit_section", f"invalid index {index!r}")
            return False

        section = self._document.sections[position]
        section.title = (title or "").strip() or UNTITLED
        section.content = content if content is not None else ""
        self._commit("edit_section", f"index {position}")
        return True

    def duplicate_section(self, index: int) -> Optional[int]:
        """
        Insert an independent deep copy of a section right after it.

        Returns:
            Index of the copy, or None if index is invalid
        """
        position = self._valid_index(index)
        if position is None:
            log_rejected("duplicate_section", f"invalid index {index!r}")
            return None

        clone = copy.deepcopy(self._document.sections[position])
        self._document.sections.insert(position + 1, clone)
        self.layout_version += 1
        self._commit("duplicate_section", f"index {position}")
        return position + 1

    def remove_section(self, index: int) -> bool:
        """
        Delete a section. Confirmation is the caller's responsibility.

        Returns:
            True if removed, False if index is invalid
        """
        position = self._valid_index(index)
        if position is None:
            log_rejected("remove_section", f"invalid index {index!r}")
            return False

        del self._document.sections[position]
        self.layout_version += 1
        self._commit("remove_section", f"index {position}")
        return True

    def move_section(self, from_index: Union[int, str], to_index: Union[int, str]) -> bool:
        """
        Move a section to a new position.

        The section is removed first and then inserted at ``to_index``, which
        is interpreted after the removal. Both indices must lie in
        ``[0, len(sections))`` and differ; either may be an integer string.

        Returns:
            True if the order changed, False if the move was rejected
        """
        source = parse_index(from_index)
        target = parse_index(to_index)
        count = len(self._document.sections)

        if source is None or target is None:
            log_rejected("move_section", f"non-integer index ({from_index!r} -> {to_index!r})")
            return False
        if source == target:
            log_rejected("move_section", f"same position {source}")
            return False
        if not (0 <= source < count and 0 <= target < count):
            log_rejected("move_section", f"index out of range ({source} -> {target}, {count} sections)")
            return False

        moved = self._document.sections.pop(source)
        self._document.sections.insert(target, moved)
        self.layout_version += 1
        self._commit("move_section", f"{source} -> {target}")
        return True

    # Header operations

    def edit_header(self, identity: Optional[str] = None, contact: Optional[str] = None) -> bool:
        """
        Update the display name and/or contact line.

        None means the field was left alone (e.g., its prompt was cancelled);
        given values are trimmed.

        Returns:
            True if anything was committed
        """
        if identity is None and contact is None:
            return False
        if identity is not None:
            self._document.identity = identity.strip()
        if contact is not None:
            self._document.contact = contact.strip()
        self._commit("edit_header")
        return True

    # Whole-document operations

    def replace_document(self, new_document: Union[Document, Mapping[str, Any]]) -> None:
        """
        Atomically replace the entire document.

        Args:
            new_document: Document, or its JSON form as a mapping

        Raises:
            ValidationError: If 'sections' is missing or malformed, or the
                document is nested too deeply to copy; the current document
                is left untouched
        """
        if isinstance(new_document, Document):
            if not isinstance(new_document.sections, list):
                raise ValidationError(
                    "Invalid document: 'sections' must be a list", field_name="sections"
                )
            try:
                replacement = copy.deepcopy(new_document)
            except RecursionError as e:
                raise ValidationError("Invalid document: nested too deeply") from e
        else:
            replacement = Document.from_dict(new_document)

        self._document = replacement
        self.layout_version += 1
        self._commit("replace_document")

    def load_sample(self) -> None:
        """Replace the document with the built-in sample resume."""
        self._document = sample_document()
        self.layout_version += 1
        self._commit("load_sample")

    def reset_document(self) -> None:
        """
        Replace the document with a blank one and clear durable storage.

        Storage is cleared synchronously and any pending save is dropped;
        nothing is scheduled afterwards.
        """
        self._document = blank_document()
        self.layout_version += 1
        if self.gateway is not None:
            self.gateway.clear()
        log_mutation("reset_document", 0)
        self._notify()

    # Persistence passthroughs

    def save(self) -> bool:
        """Write the document immediately (explicit user save)."""
        if self.gateway is None:
            return False
        return self.gateway.save_now(self._document)

    def get_theme_preference(self) -> str:
        if self.gateway is None:
            return self._theme
        return self.gateway.get_theme_preference()

    def set_theme_preference(self, name: str) -> str:
        if self.gateway is None:
            self._theme = normalize_theme(name)
            return self._theme
        return self.gateway.set_theme_preference(name)

    def _commit(self, operation: str, detail: str = "") -> None:
        log_mutation(operation, len(self._document.sections), detail)
        self._notify()
        if self.gateway is not None:
            self.gateway.schedule_save(lambda: self._document)

    def _notify(self) -> None:
        for projector in list(self._projectors):
            projector.on_sections_changed(self._document.sections)
            projector.on_document_changed(self._document)
