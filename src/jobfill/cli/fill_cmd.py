"""``jobfill fill`` and ``jobfill detect``."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

console = Console()


def fill_command(
    page: Path = typer.Argument(..., exists=True, dir_okay=False, help="HTML page holding the application form."),
    host: str = typer.Option(..., "--host", "-H", help="Hostname the page was served from."),
    passphrase: Optional[str] = typer.Option(None, "--passphrase", "-p", help="Passphrase for an encrypted profile."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the filled page here."),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output the fill result as JSON."),
) -> None:
    """Fill PAGE from the stored profile as if it were served from HOST."""
    from jobfill.dispatcher import AUTOFILL_REQUEST, AutofillDispatcher
    from jobfill.dom import FormDocument
    from jobfill.store import build_profile_store

    document = FormDocument.from_file(page)
    dispatcher = AutofillDispatcher(build_profile_store())

    message = {"type": AUTOFILL_REQUEST}
    if passphrase:
        message["passphrase"] = passphrase
    result = dispatcher.handle_message(message, hostname=host, document=document)

    if output is not None:
        output.write_text(document.to_html(), encoding="utf-8")

    if json_output:
        data = {
            "portal": result.portal.value if result else None,
            "strategy": result.strategy if result else None,
            "filled": result.filled if result else [],
            "events": len(document.events),
        }
        console.print_json(json.dumps(data))
        return

    if result is None:
        console.print("[yellow]Nothing filled[/yellow] (no profile, locked profile, or fill aborted).")
        return

    table = Table(title=f"Filled {page.name}")
    table.add_column("Portal", style="cyan")
    table.add_column("Strategy")
    table.add_column("Fields", justify="right")
    table.add_column("Events", justify="right")
    table.add_row(result.portal.value, result.strategy, str(len(result.filled)), str(len(document.events)))
    console.print(table)
    if result.filled:
        console.print("Fields: " + ", ".join(result.filled))
    if output is not None:
        console.print(f"[green]✓[/green] Wrote {output}")


def detect_command(host: str = typer.Argument(..., help="Hostname to classify.")) -> None:
    """Print the portal id detected for HOST."""
    from jobfill.portals import detect_portal

    console.print(detect_portal(host).value)
