"""
View Projector callback surface.

A DocumentStore calls every attached projector once per logical mutation, in
mutation order: first on_sections_changed(sections), then
on_document_changed(document). Projectors must treat what they receive as
read-only and re-render from it.
"""

from pathlib import Path
from typing import List

from folio.contexts.editing.document import Document, Section
from folio.contexts.projection.renderer import HtmlRenderer
from folio.contexts.projection.view_model import render


class ViewProjector:
    """Base projector; both callbacks do nothing."""

    def on_sections_changed(self, sections: List[Section]) -> None:
        pass

    def on_document_changed(self, document: Document) -> None:
        pass


class HtmlPreviewProjector(ViewProjector):
    """
    Keeps an HTML preview file in sync with the document.

    Args:
        output_path: File to (re)write on every document change
        theme: Theme applied to the preview
        renderer: HtmlRenderer to use (a default one is created if omitted)
    """

    def __init__(self, output_path: Path, theme: str = "default", renderer: HtmlRenderer = None):
        self.output_path = Path(output_path)
        self.theme = theme
        self.renderer = renderer or HtmlRenderer()
        self.render_count = 0

    def on_document_changed(self, document: Document) -> None:
        html = self.renderer.render_preview(render(document, self.theme))
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.output_path.write_text(html, encoding="utf-8")
        self.render_count += 1
