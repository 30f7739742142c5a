#!/usr/bin/env python3
"""
Command-line front end for editing the locally stored resume.

Each command opens the document from durable storage, applies one operation
through the Document Store, and flushes the pending save before exiting.

Commands:
    show      - Print the document's sections
    add       - Append a placeholder section
    edit      - Change a section's title and/or content
    header    - Change the name and/or contact line
    duplicate - Copy a section right after itself
    remove    - Delete a section
    move      - Move a section to a new position
    sample    - Replace the document with the sample resume
    reset     - Clear everything and start blank
    save      - Write the document immediately
    export    - Write resume-data.json
    import    - Replace the document from a JSON file
    theme     - Show or set the theme preference
    preview   - Render the formatted preview to HTML
    status    - Show storage status
"""

import os
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from folio.contexts.editing import DocumentStore, EditSession, import_file, write_export
from folio.contexts.editing.defaults import THEMES
from folio.contexts.editing.logger import setup_editing_logger
from folio.contexts.persistence import FileSlotStore, PersistenceGateway
from folio.contexts.persistence.gateway import SAVE_DEBOUNCE_MS
from folio.contexts.projection import HtmlPreviewProjector
from folio.utils.timestamp import format_age, now

load_dotenv()
STORAGE_PATH = Path(os.getenv("FOLIO_STORAGE_PATH", "outs/storage"))
EXPORT_PATH = Path(os.getenv("FOLIO_EXPORT_PATH", "outs/exports"))
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(
    add_completion=False,
    help="Edit the locally stored resume",
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _open_store() -> DocumentStore:
    """Set up session logging and open the stored document."""
    setup_editing_logger(
        LOGS_PATH / f"edit_{now()}", storage_path=STORAGE_PATH, debounce_ms=SAVE_DEBOUNCE_MS
    )
    gateway = PersistenceGateway(FileSlotStore(STORAGE_PATH))
    return DocumentStore.open(gateway)


def _finish(store: DocumentStore) -> None:
    """Flush the debounced save and report if it could not be written."""
    if store.gateway.flush() and not store.gateway.last_save_succeeded:
        typer.secho("Warning: changes could not be saved", fg=typer.colors.YELLOW, err=True)


def _print_sections(store: DocumentStore) -> None:
    document = store.document
    typer.secho(f"\n{document.identity or 'Your Name'}", fg=typer.colors.BLUE, bold=True)
    if document.contact:
        typer.echo(document.contact)
    typer.echo("")
    if not document.sections:
        typer.echo("  (no sections)")
    for index, section in enumerate(document.sections):
        typer.echo(f"  {index}. {section.title or 'Untitled'}")
    typer.echo("")


def _fail(message: str) -> None:
    typer.secho(f"Error: {message}\n", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.command("show")
def show_command(
    content: Annotated[
        bool, typer.Option("--content", "-c", help="Also print each section's content")
    ] = False,
):
    """
    Print the document's sections with their indices.

    Examples:\n

        $ edit_resume.py show             # Titles only

        $ edit_resume.py show --content   # Titles and HTML content
    """
    store = _open_store()
    if not content:
        _print_sections(store)
        return

    _print_sections(store)
    for index, section in enumerate(store.sections):
        typer.secho(f"[{index}] {section.title}", bold=True)
        typer.echo(f"{section.content}\n")


@app.command("add")
def add_command():
    """Append a placeholder section to the end of the document."""
    store = _open_store()
    index = store.add_section()
    _finish(store)
    typer.secho(f"✓ Added section {index}", fg=typer.colors.GREEN)


@app.command("edit")
def edit_command(
    index: Annotated[int, typer.Argument(help="Section index (see 'show')")],
    title: Annotated[
        Optional[str], typer.Option("--title", "-t", help="New title (kept if omitted)")
    ] = None,
    content: Annotated[
        Optional[str], typer.Option("--content", "-c", help="New HTML content (kept if omitted)")
    ] = None,
):
    """
    Change a section's title and/or content.

    Examples:\n

        $ edit_resume.py edit 0 --title "Profile"

        $ edit_resume.py edit 1 --content "<ul><li>Python</li></ul>"
    """
    store = _open_store()
    session = EditSession(store)
    request = session.open(index)
    if request is None:
        _fail(f"No section at index {index}")

    committed = session.commit(
        request.token,
        title if title is not None else request.title,
        content if content is not None else request.content,
    )
    _finish(store)
    if not committed:
        _fail(f"Could not edit section {index}")
    typer.secho(f"✓ Updated section {index}: {store.sections[index].title}", fg=typer.colors.GREEN)


@app.command("header")
def header_command(
    name: Annotated[Optional[str], typer.Option("--name", "-n", help="Display name")] = None,
    contact: Annotated[Optional[str], typer.Option("--contact", help="Contact line")] = None,
):
    """Change the name and/or contact line shown in the header."""
    if name is None and contact is None:
        _fail("Give --name and/or --contact")

    store = _open_store()
    store.edit_header(identity=name, contact=contact)
    _finish(store)
    typer.secho("✓ Header updated", fg=typer.colors.GREEN)


@app.command("duplicate")
def duplicate_command(
    index: Annotated[int, typer.Argument(help="Section index to copy")],
):
    """Insert a copy of a section directly after it."""
    store = _open_store()
    new_index = store.duplicate_section(index)
    if new_index is None:
        _fail(f"No section at index {index}")
    _finish(store)
    typer.secho(f"✓ Duplicated section {index} to {new_index}", fg=typer.colors.GREEN)


@app.command("remove")
def remove_command(
    index: Annotated[int, typer.Argument(help="Section index to delete")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
):
    """Delete a section (asks for confirmation unless --yes)."""
    store = _open_store()
    if not 0 <= index < len(store.sections):
        _fail(f"No section at index {index}")
    if not yes and not typer.confirm("Remove this section?"):
        raise typer.Exit(code=1)

    store.remove_section(index)
    _finish(store)
    typer.secho(f"✓ Removed section {index}", fg=typer.colors.GREEN)


@app.command("move")
def move_command(
    from_index: Annotated[str, typer.Argument(help="Current index of the section")],
    to_index: Annotated[str, typer.Argument(help="Index to move it to (after removal)")],
):
    """
    Move a section to a new position.

    Examples:\n

        $ edit_resume.py move 3 0   # Move the fourth section to the top
    """
    store = _open_store()
    if not store.move_section(from_index, to_index):
        _fail(f"Cannot move section {from_index} to {to_index}")
    _finish(store)
    typer.secho(f"✓ Moved section {from_index} to {to_index}", fg=typer.colors.GREEN)
    _print_sections(store)


@app.command("sample")
def sample_command(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
):
    """Replace the document with the built-in sample resume."""
    store = _open_store()
    if not yes and not typer.confirm("Replace the current document with sample data?"):
        raise typer.Exit(code=1)
    store.load_sample()
    _finish(store)
    typer.secho("✓ Sample data loaded", fg=typer.colors.GREEN)


@app.command("reset")
def reset_command(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
):
    """Clear all local changes and reset to a blank document."""
    store = _open_store()
    if not yes and not typer.confirm("Clear all local changes and reset to blank?"):
        raise typer.Exit(code=1)
    store.reset_document()
    typer.secho("✓ Reset to blank", fg=typer.colors.GREEN)


@app.command("save")
def save_command():
    """Write the current document to storage immediately."""
    store = _open_store()
    if not store.save():
        _fail("Could not save (see log for details)")
    typer.secho("✓ Saved", fg=typer.colors.GREEN)


@app.command("export")
def export_command(
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-o", help="Directory for resume-data.json"),
    ] = None,
):
    """Export the document to resume-data.json."""
    store = _open_store()
    output_path = write_export(store.document, output_dir or EXPORT_PATH)
    typer.secho(f"✓ Exported to {output_path}", fg=typer.colors.GREEN)


@app.command("import")
def import_command(
    path: Annotated[Path, typer.Argument(help="JSON file to import")],
):
    """Replace the document with the contents of a JSON file."""
    store = _open_store()
    result = import_file(store, path)
    if not result.success:
        _fail(result.message)
    _finish(store)
    typer.secho(f"✓ {result.message} ({result.section_count} sections)", fg=typer.colors.GREEN)


@app.command("theme")
def theme_command(
    name: Annotated[
        Optional[str],
        typer.Argument(help=f"Theme to apply ({', '.join(THEMES)}); omit to show current"),
    ] = None,
):
    """Show or set the theme preference."""
    store = _open_store()
    if name is None:
        typer.echo(store.get_theme_preference())
        return

    applied = store.set_theme_preference(name)
    if applied != name:
        typer.secho(f"Unknown theme '{name}', using '{applied}'", fg=typer.colors.YELLOW, err=True)
    typer.secho(f"✓ Theme: {applied}", fg=typer.colors.GREEN)


@app.command("preview")
def preview_command(
    output: Annotated[
        Path, typer.Option("--output", "-o", help="HTML file to write")
    ] = Path("outs/preview.html"),
):
    """Render the formatted preview (with the saved theme) to an HTML file."""
    store = _open_store()
    projector = HtmlPreviewProjector(output, theme=store.get_theme_preference())
    store.attach(projector)
    typer.secho(f"✓ Preview written to {output}", fg=typer.colors.GREEN)


@app.command("status")
def status_command():
    """Show where the document is stored and when it was last written."""
    store = _open_store()
    slot_path = store.gateway.slots.path_for(store.gateway.key)
    typer.echo(f"Storage: {slot_path}")
    if slot_path.exists():
        modified = datetime.fromtimestamp(slot_path.stat().st_mtime)
        typer.echo(f"Last saved: {modified:%Y-%m-%d %H:%M:%S} ({format_age(modified)})")
    else:
        typer.echo("Last saved: never (showing starter document)")
    typer.echo(f"Sections: {len(store.sections)}")
    typer.echo(f"Theme: {store.get_theme_preference()}")


if __name__ == "__main__":
    app()
