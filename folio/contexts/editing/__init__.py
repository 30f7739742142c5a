"""
Editing Context

Responsibilities:
- Owns the resume document model (identity, contact line, ordered sections)
- Applies every mutation (add, edit, duplicate, remove, reorder, replace, reset)
- Notifies projectors and schedules persistence once per logical change
- Converts documents to and from their JSON exchange form

Owns: Document state, mutation rules, import/export
Never: Renders markup or touches storage directly
"""

from folio.contexts.editing.document import Document, Section
from folio.contexts.editing.exceptions import ValidationError
from folio.contexts.editing.exchange import (
    ExportArtifact,
    ImportResult,
    build_export,
    export_document,
    import_file,
    import_text,
    parse_document,
    write_export,
)
from folio.contexts.editing.session import EditRequest, EditSession
from folio.contexts.editing.store import DocumentStore

__all__ = [
    # Data structure classes
    "Document",
    "Section",
    "ValidationError",
    # Store and editing
    "DocumentStore",
    "EditSession",
    "EditRequest",
    # Import/export
    "export_document",
    "build_export",
    "write_export",
    "parse_document",
    "import_text",
    "import_file",
    "ExportArtifact",
    "ImportResult",
]
