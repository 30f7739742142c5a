"""
Projection Context

Responsibilities:
- Defines the callback surface views implement (ViewProjector)
- Projects documents into display-ready view models (pure)
- Renders the preview and editable section list to HTML via Jinja2

Owns: Display fallbacks, escaping, theme classes
Never: Mutates the document or writes durable state
"""

from folio.contexts.projection.projector import HtmlPreviewProjector, ViewProjector
from folio.contexts.projection.renderer import (
    HtmlRenderer,
    render_preview_html,
    render_sections_html,
)
from folio.contexts.projection.view_model import (
    PreviewSection,
    SectionCard,
    ViewModel,
    render,
)

__all__ = [
    "ViewProjector",
    "HtmlPreviewProjector",
    "HtmlRenderer",
    "render",
    "render_preview_html",
    "render_sections_html",
    "ViewModel",
    "PreviewSection",
    "SectionCard",
]
