"""
JSON Import/Export

Converts documents to and from their JSON text form. The same form is used
for durable storage (compact) and for the downloadable export file (pretty).

Import never mutates anything until the whole payload has parsed and
validated; a failed import leaves the store exactly as it was.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from folio.contexts.editing.document import Document
from folio.contexts.editing.exceptions import ValidationError
from folio.contexts.editing.logger import _log_info, log_import_result

EXPORT_FILENAME = "resume-data.json"
EXPORT_MIME_TYPE = "application/json"

IMPORT_SUCCESS_MESSAGE = "Imported resume data successfully."
NESTED_TOO_DEEPLY = "Invalid JSON: nested too deeply"


@dataclass
class ExportArtifact:
    """
    A downloadable export.

    Attributes:
        filename: Suggested file name ("resume-data.json")
        mime_type: Content type ("application/json")
        content: Pretty-printed JSON text
    """

    filename: str
    mime_type: str
    content: str


@dataclass
class ImportResult:
    """
    Result of an import attempt.

    Attributes:
        success: Whether the document was replaced
        message: Human-readable outcome, suitable for showing to the user
        section_count: Number of sections in the imported document (0 on failure)
        error: The ValidationError on failure
    """

    success: bool
    message: str
    section_count: int = 0
    error: Optional[ValidationError] = None


def serialize_document(
    document: Document, indent: Optional[int] = 2, ensure_ascii: bool = False
) -> str:
    """
    Serialize a document to JSON text.

    Output is deterministic: keys keep the document's field order and no
    fields are added or dropped.

    Args:
        document: Document to serialize
        indent: Indentation for pretty output; None for compact storage form
        ensure_ascii: Escape all non-ASCII characters (storage form)

    Returns:
        JSON text
    """
    separators = None if indent is not None else (",", ":")
    return json.dumps(
        document.to_dict(), indent=indent, ensure_ascii=ensure_ascii, separators=separators
    )


def export_document(document: Document) -> str:
    """Pretty-printed JSON of the document, as written to the export file."""
    return serialize_document(document, indent=2)


def build_export(document: Document) -> ExportArtifact:
    return ExportArtifact(
        filename=EXPORT_FILENAME,
        mime_type=EXPORT_MIME_TYPE,
        content=export_document(document),
    )


def write_export(document: Document, directory: Path) -> Path:
    """
    Write the export file into a directory.

    Args:
        document: Document to export
        directory: Target directory (created if missing)

    Returns:
        Path to the written resume-data.json
    """
    artifact = build_export(document)
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    output_path = directory / artifact.filename
    output_path.write_text(artifact.content, encoding="utf-8")
    _log_info(f"Exported {len(document.sections)} section(s) to {output_path}")
    return output_path


def parse_document(text: str, source: str = None) -> Document:
    """
    Parse JSON text into a Document.

    Args:
        text: Raw JSON text
        source: Optional description of where text came from (for errors)

    Returns:
        Document instance

    Raises:
        ValidationError: If text is not JSON, not an object, lacks 'sections',
            is nested too deeply, or holds text that cannot be written as UTF-8
    """
    try:
        data = json.loads(text)
    except (ValueError, TypeError) as e:
        # JSONDecodeError, and int values over the digit limit
        raise ValidationError(f"Invalid JSON: {e}", source=source) from e
    except RecursionError as e:
        raise ValidationError(NESTED_TOO_DEEPLY, source=source) from e

    document = Document.from_dict(data, source=source)

    # Anything accepted here must be exportable again
    try:
        export_document(document).encode("utf-8")
    except UnicodeEncodeError as e:
        raise ValidationError(
            f"Invalid text: {e.reason} ({e.object[e.start:e.end]!r})", source=source
        ) from e
    except RecursionError as e:
        raise ValidationError(NESTED_TOO_DEEPLY, source=source) from e

    return document


def import_text(store, text: str, source: str = "<text>") -> ImportResult:
    """
    Replace the store's document with one parsed from JSON text.

    Args:
        store: DocumentStore to import into
        text: Raw JSON text
        source: Description of where text came from, for logs and messages

    Returns:
        ImportResult; on failure the store is untouched
    """
    try:
        document = parse_document(text, source=source)
        store.replace_document(document)
    except ValidationError as e:
        result = ImportResult(success=False, message=f"Import failed: {e.message}", error=e)
    else:
        result = ImportResult(
            success=True,
            message=IMPORT_SUCCESS_MESSAGE,
            section_count=len(document.sections),
        )

    log_import_result(source, result)
    return result


def import_file(store, path: Path) -> ImportResult:
    """
    Import a user-selected JSON file into the store.

    Unreadable files are reported the same way as malformed ones.

    Args:
        store: DocumentStore to import into
        path: Path to the JSON file

    Returns:
        ImportResult; on failure the store is untouched
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        error = ValidationError(f"Could not read file: {e}", source=path.name)
        result = ImportResult(success=False, message=f"Import failed: {error.message}", error=error)
        log_import_result(path.name, result)
        return result

    return import_text(store, text, source=path.name)
