"""
HTML rendering of view models with Jinja2.

Templates live in ``templates/`` next to this module unless
FOLIO_TEMPLATES_PATH points elsewhere. Loaded templates are cached per
renderer.
"""

import os
from pathlib import Path
from typing import Dict

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, Template, TemplateNotFound, select_autoescape

from folio.contexts.editing.document import Document
from folio.contexts.projection.view_model import ViewModel, render

load_dotenv()
TEMPLATES_PATH = Path(os.getenv("FOLIO_TEMPLATES_PATH", Path(__file__).parent / "templates"))

PREVIEW_TEMPLATE = "preview.html.jinja"
SECTIONS_TEMPLATE = "sections.html.jinja"


class HtmlRenderer:
    """
    Renders ViewModels to HTML with cached Jinja2 templates.

    Names, contact lines and titles are escaped; section content is trusted
    authored markup and is emitted as-is.
    """

    def __init__(self, templates_path: Path = None):
        """
        Initialize the renderer.

        Args:
            templates_path: Directory holding the .html.jinja templates.
                Defaults to folio/contexts/projection/templates/
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = Path(templates_path)
        self._cache: Dict[str, Template] = {}
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            autoescape=select_autoescape(enabled_extensions=("html", "jinja"), default=True),
            keep_trailing_newline=True,
        )

    def get_template(self, name: str) -> Template:
        """
        Get a template by file name, loading and caching it if necessary.

        Raises:
            TemplateNotFound: If template file doesn't exist
        """
        if name in self._cache:
            return self._cache[name]

        try:
            template = self.env.get_template(name)
        except TemplateNotFound as e:
            raise TemplateNotFound(f"Template '{name}' not found in {self.templates_path}") from e

        self._cache[name] = template
        return template

    def render_preview(self, view: ViewModel) -> str:
        return self.get_template(PREVIEW_TEMPLATE).render(view=view)

    def render_sections(self, view: ViewModel) -> str:
        return self.get_template(SECTIONS_TEMPLATE).render(view=view)


def render_preview_html(document: Document, theme: str = "default") -> str:
    """Render the formatted preview of a document to HTML."""
    return HtmlRenderer().render_preview(render(document, theme))


def render_sections_html(document: Document) -> str:
    """Render the editable section list of a document to HTML."""
    return HtmlRenderer().render_sections(render(document))
