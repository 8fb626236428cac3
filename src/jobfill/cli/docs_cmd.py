"""CLI commands for the document store (resumes, cover letters)."""

from __future__ import annotations

import json
import mimetypes
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from jobfill.exceptions import DocumentNotFoundError

docs_app = typer.Typer(help="Store and retrieve resumes and cover letters.")
console = Console()


@docs_app.command("add")
def docs_add(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Document to store."),
    label: str = typer.Option(..., "--label", "-l", help="Human-readable label."),
    version: str = typer.Option(..., "--version", "-v", help="Version string, e.g. 2024-01."),
    mime: Optional[str] = typer.Option(None, "--mime", help="MIME type (guessed from the file name if omitted)."),
    tags: Optional[List[str]] = typer.Option(None, "--tag", "-t", help="Tag; repeat for several."),
    pages: Optional[int] = typer.Option(None, "--pages", min=1, help="Page count."),
    document_id: Optional[str] = typer.Option(None, "--id", help="Replace the document with this id."),
) -> None:
    """Store FILE and print its document id."""
    from jobfill.store import build_document_store

    mime = mime or mimetypes.guess_type(file.name)[0] or "application/octet-stream"
    ref = build_document_store().save_document(
        data=file.read_bytes(),
        label=label,
        version=version,
        mime=mime,
        tags=tags or [],
        pages=pages,
        document_id=document_id,
    )
    console.print(f"[green]✓[/green] Stored {ref.id}")
    console.print(f"  sha256: {ref.sha256}")


@docs_app.command("list")
def docs_list(
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON."),
) -> None:
    """List stored documents."""
    from jobfill.store import build_document_store

    refs = build_document_store().list_documents()
    if json_output:
        console.print_json(json.dumps([ref.model_dump(mode="json") for ref in refs]))
        return
    if not refs:
        console.print("No documents stored.")
        return

    table = Table(title="Documents")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Label")
    table.add_column("Version")
    table.add_column("MIME", style="dim")
    table.add_column("Pages", justify="right")
    table.add_column("Tags")
    for ref in refs:
        table.add_row(
            ref.id,
            ref.label,
            ref.version,
            ref.mime,
            str(ref.pages) if ref.pages is not None else "",
            ", ".join(ref.tags),
        )
    console.print(table)


@docs_app.command("get")
def docs_get(
    document_id: str = typer.Argument(..., help="Document id."),
    output: Path = typer.Option(..., "--output", "-o", help="Where to write the document bytes."),
) -> None:
    """Write a stored document's bytes to a file."""
    from jobfill.store import build_document_store

    record = build_document_store().get_document(document_id)
    if record is None:
        console.print(f"[red]✗[/red] {DocumentNotFoundError(document_id)}")
        raise typer.Exit(code=1)
    output.write_bytes(record.content)
    console.print(f"[green]✓[/green] Wrote {len(record.content)} bytes to {output}")


@docs_app.command("delete")
def docs_delete(document_id: str = typer.Argument(..., help="Document id.")) -> None:
    """Delete a stored document (unknown ids are ignored)."""
    from jobfill.store import build_document_store

    if build_document_store().delete_document(document_id):
        console.print(f"[green]✓[/green] Deleted {document_id}")
    else:
        console.print(f"No document {document_id}")
