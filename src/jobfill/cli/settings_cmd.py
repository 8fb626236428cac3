"""CLI commands for inspecting and validating jobfill settings."""

from __future__ import annotations

import json

import typer
from pydantic import ValidationError
from rich.console import Console

settings_app = typer.Typer(help="Inspect and validate jobfill configuration.")
console = Console()


@settings_app.command("show")
def show_settings() -> None:
    """Display the currently resolved settings."""
    from jobfill.settings import get_settings

    settings = get_settings()
    console.print_json(json.dumps(settings.model_dump(mode="json"), indent=2, default=str))


@settings_app.command("validate")
def validate_settings() -> None:
    """Validate settings and report any issues."""
    from jobfill.settings import get_settings

    try:
        settings = get_settings()
    except ValidationError as e:
        console.print(f"[red]✗[/red] Settings validation failed: {e}")
        raise typer.Exit(code=1)

    console.print("[green]✓[/green] Settings are valid.")
    console.print(f"  Environment: {settings.env}")
    console.print(f"  Database: {settings.storage.sqlite_path}")
    console.print(f"  KDF iterations: {settings.crypto.iterations}")
