"""
Pure projection of a Document into display-ready values.

render() has no side effects and knows nothing about markup engines; any UI
layer (HTML templates, a terminal, a GUI) consumes the ViewModel. Display
fallbacks are applied here and never written back to the document.
"""

from dataclasses import dataclass
from typing import Tuple

from folio.contexts.editing.defaults import (
    DEFAULT_DISPLAY_NAME,
    EMPTY_LIST_CONTENT,
    EMPTY_PREVIEW_CONTENT,
    normalize_theme,
    theme_css_class,
)
from folio.contexts.editing.document import UNTITLED, Document


@dataclass(frozen=True)
class PreviewSection:
    """A section as shown in the formatted preview."""

    title: str
    content_html: str


@dataclass(frozen=True)
class SectionCard:
    """
    A section as shown in the editable list.

    Attributes:
        index: Position in the document (0-based), passed back on actions
        number: Position label shown to the user (1-based)
        title: Section title as stored
        body_html: Content, or a placeholder when empty
    """

    index: int
    number: int
    title: str
    body_html: str


@dataclass(frozen=True)
class ViewModel:
    """
    Everything a view needs to draw the editor.

    Attributes:
        name: Header name
        contact: Header contact line
        sections: Preview sections in document order
        cards: Editable list entries in document order
        theme: Normalized theme name
        theme_class: CSS class for the theme ("" for default)
    """

    name: str
    contact: str
    sections: Tuple[PreviewSection, ...]
    cards: Tuple[SectionCard, ...]
    theme: str
    theme_class: str


def render(document: Document, theme: str = "default") -> ViewModel:
    """
    Project a document into a ViewModel.

    Args:
        document: Document to project
        theme: Theme preference; unknown names render as "default"

    Returns:
        ViewModel
    """
    sections = tuple(
        PreviewSection(
            title=section.title or UNTITLED,
            content_html=section.content or EMPTY_PREVIEW_CONTENT,
        )
        for section in document.sections
    )
    cards = tuple(
        SectionCard(
            index=index,
            number=index + 1,
            title=section.title,
            body_html=section.content or EMPTY_LIST_CONTENT,
        )
        for index, section in enumerate(document.sections)
    )
    return ViewModel(
        name=document.identity or DEFAULT_DISPLAY_NAME,
        contact=document.contact or "",
        sections=sections,
        cards=cards,
        theme=normalize_theme(theme),
        theme_class=theme_css_class(theme),
    )
