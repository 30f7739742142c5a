"""
Resume Document Structure

Defines the in-memory representation of a resume for FOLIO: a display name,
a contact line, and an ordered list of titled HTML sections.

The JSON form is the wire format shared by durable storage and file
import/export:

    {
      "name": "Your Name",
      "contact": "you@example.com",
      "sections": [{"title": "Summary", "content": "<p>...</p>"}]
    }

Unknown keys (top-level or per-section) are kept in ``extras`` so that a
document survives import -> export without fields being dropped.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from folio.contexts.editing.exceptions import ValidationError

UNTITLED = "Untitled"

# Keys owned by the data model; everything else is an extra
DOCUMENT_KEYS = ("name", "contact", "sections")
SECTION_KEYS = ("title", "content")


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


@dataclass
class Section:
    """
    A titled content block; the unit of reordering, duplication and removal.

    Attributes:
        title: Section heading (plaintext)
        content: Restricted HTML fragment, stored verbatim (may be empty)
        extras: Unrecognized keys carried through from imported JSON
    """

    title: str = ""
    content: str = ""
    extras: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "Section":
        # Entries are not validated individually; anything but an object is an empty section
        if not isinstance(data, Mapping):
            return cls()
        extras = {key: value for key, value in data.items() if key not in SECTION_KEYS}
        return cls(
            title=_as_text(data.get("title")),
            content=_as_text(data.get("content")),
            extras=extras,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "content": self.content, **self.extras}


@dataclass
class Document:
    """
    The full resume state.

    Attributes:
        identity: Display name shown in the header (JSON key "name")
        contact: Free-text contact line
        sections: Ordered sections; order is rendering and export order
        extras: Unrecognized top-level keys carried through from imported JSON
    """

    identity: str = ""
    contact: str = ""
    sections: List[Section] = field(default_factory=list)
    extras: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], source: str = None) -> "Document":
        """
        Build a Document from its JSON form.

        Only the presence and shape of ``sections`` is validated; individual
        section fields are normalized rather than rejected.

        Args:
            data: Parsed JSON object
            source: Optional description of where data came from (for errors)

        Returns:
            Document instance

        Raises:
            ValidationError: If data is not an object, or 'sections' is missing
                or is not a list
        """
        if not isinstance(data, Mapping):
            raise ValidationError(
                f"Invalid file format: expected a JSON object, got {type(data).__name__}",
                source=source,
            )

        sections = data.get("sections")
        if sections is None:
            raise ValidationError(
                "Invalid file format: missing 'sections'", field_name="sections", source=source
            )
        if not isinstance(sections, list):
            raise ValidationError(
                f"Invalid file format: 'sections' must be a list, got {type(sections).__name__}",
                field_name="sections",
                source=source,
            )

        extras = {key: value for key, value in data.items() if key not in DOCUMENT_KEYS}
        return cls(
            identity=_as_text(data.get("name")),
            contact=_as_text(data.get("contact")),
            sections=[Section.from_dict(section) for section in sections],
            extras=extras,
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON form with a stable key order: name, contact, sections, then extras."""
        return {
            "name": self.identity,
            "contact": self.contact,
            "sections": [section.to_dict() for section in self.sections],
            **self.extras,
        }
