"""
Default values for FOLIO documents.

Provides shared defaults used by:
- store.py (placeholder sections, reset, sample data)
- persistence gateway (starter document when nothing valid is stored)
- projection (display fallbacks and themes)

Built-in documents live in documents.yaml next to this module and are loaded
with OmegaConf; every call returns a fresh Document so callers may mutate it.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

from omegaconf import OmegaConf

from folio.contexts.editing.document import Document, Section

BUILTIN_DOCUMENTS_PATH = Path(__file__).parent / "documents.yaml"

# Placeholder for newly added sections
NEW_SECTION_TITLE = "New Section"
NEW_SECTION_CONTENT = "<p>Describe this section...</p>"

# Display fallbacks (applied at render time only, never persisted)
DEFAULT_DISPLAY_NAME = "Your Name"
EMPTY_PREVIEW_CONTENT = "<p></p>"
EMPTY_LIST_CONTENT = "<em>No content yet</em>"

# Theme identifiers and the CSS class each one applies
THEMES = ("default", "dark", "blue", "green")
DEFAULT_THEME = "default"
THEME_CSS_CLASSES = {
    "default": "",
    "dark": "theme-dark",
    "blue": "theme-blue",
    "green": "theme-green",
}


@lru_cache(maxsize=None)
def _load_builtin_documents() -> Dict[str, Any]:
    return OmegaConf.to_container(OmegaConf.load(BUILTIN_DOCUMENTS_PATH), resolve=True)


def get_builtin_document(name: str) -> Document:
    """
    Get a fresh copy of a built-in document.

    Args:
        name: One of "starter", "sample", "blank"

    Returns:
        New Document instance

    Raises:
        ValueError: If name is not a built-in document
    """
    documents = _load_builtin_documents()
    if name not in documents:
        raise ValueError(f"Built-in document '{name}' not found. Available: {list(documents)}")
    return Document.from_dict(documents[name], source=str(BUILTIN_DOCUMENTS_PATH))


def starter_document() -> Document:
    """Document shown when durable storage holds nothing usable."""
    return get_builtin_document("starter")


def sample_document() -> Document:
    """Full example resume."""
    return get_builtin_document("sample")


def blank_document() -> Document:
    """Document left behind by an explicit reset."""
    return get_builtin_document("blank")


def placeholder_section() -> Section:
    return Section(title=NEW_SECTION_TITLE, content=NEW_SECTION_CONTENT)


def normalize_theme(name: Any) -> str:
    """Return name if it is a known theme, otherwise the default theme."""
    return name if name in THEMES else DEFAULT_THEME


def theme_css_class(name: Any) -> str:
    """CSS class applied to the document root for a theme ("" for default)."""
    return THEME_CSS_CLASSES[normalize_theme(name)]
