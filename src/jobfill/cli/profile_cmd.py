"""CLI commands for managing the stored applicant profile.

An encrypted profile stays encrypted at rest; commands that need its
contents take ``--passphrase``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from jobfill.exceptions import JobFillError, ProfileNotFoundError

profile_app = typer.Typer(help="Import, export, inspect and create the applicant profile.")
console = Console()


def _fail(message: str) -> None:
    console.print(f"[red]✗[/red] {message}")
    raise typer.Exit(code=1)


def _open_stored(passphrase: Optional[str]) -> tuple[dict[str, Any], bool]:
    """Return the stored payload (decrypted when possible) and whether it is still sealed."""
    from jobfill.crypto import decrypt_profile
    from jobfill.models import is_encrypted
    from jobfill.store import build_profile_store

    store = build_profile_store()
    payload = store.load()
    if payload is None:
        raise ProfileNotFoundError(store.key)
    if not is_encrypted(payload):
        return payload, False
    if not passphrase:
        return payload, True
    return decrypt_profile(payload, passphrase), False


def _save(profile: dict[str, Any], passphrase: Optional[str]) -> bool:
    from jobfill.crypto import encrypt_profile
    from jobfill.store import build_profile_store

    payload = encrypt_profile(profile, passphrase) if passphrase else profile
    build_profile_store().save(payload)
    return bool(passphrase)


# ---------------------------------------------------------------------------
# jobfill profile import / export
# ---------------------------------------------------------------------------


@profile_app.command("import")
def profile_import(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Profile JSON file."),
    passphrase: Optional[str] = typer.Option(None, "--passphrase", "-p", help="Encrypt the profile at rest."),
) -> None:
    """Validate and store a profile from a JSON file."""
    from jobfill.models import Profile, is_encrypted

    try:
        payload = json.loads(file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        _fail(f"{file} is not valid JSON: {e}")
    if not isinstance(payload, dict):
        _fail(f"{file} must contain a JSON object")

    if is_encrypted(payload):
        if passphrase:
            _fail("File is already encrypted; import it without --passphrase")
        _save(payload, None)
        console.print("[green]✓[/green] Imported encrypted profile as-is.")
        return

    try:
        Profile.model_validate(payload)
    except ValidationError as e:
        _fail(f"Invalid profile: {e}")

    encrypted = _save(payload, passphrase)
    console.print(f"[green]✓[/green] Imported profile{' (encrypted)' if encrypted else ''}.")


@profile_app.command("export")
def profile_export(
    passphrase: Optional[str] = typer.Option(None, "--passphrase", "-p", help="Decrypt before exporting."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to a file instead of stdout."),
) -> None:
    """Export the stored profile as JSON."""
    try:
        payload, _ = _open_stored(passphrase)
    except JobFillError as e:
        _fail(str(e))

    text = json.dumps(payload, indent=2)
    if output is None:
        console.print_json(text)
        return
    output.write_text(text + "\n", encoding="utf-8")
    console.print(f"[green]✓[/green] Wrote {output}")


# ---------------------------------------------------------------------------
# jobfill profile show / clear
# ---------------------------------------------------------------------------


@profile_app.command("show")
def profile_show(
    passphrase: Optional[str] = typer.Option(None, "--passphrase", "-p", help="Passphrase for an encrypted profile."),
) -> None:
    """Show the fillable values of the stored profile."""
    from jobfill.models import FIELD_NAMES, Profile

    try:
        payload, sealed = _open_stored(passphrase)
    except JobFillError as e:
        _fail(str(e))

    if sealed:
        console.print("Profile is [yellow]encrypted[/yellow]; pass --passphrase to view it.")
        return

    profile = Profile.model_validate(payload)
    values = profile.field_values(derive_full_name=True)
    values.update(profile.legacy_overlay())

    table = Table(title="Profile")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for field in FIELD_NAMES:
        value = values[field]
        if value is not None:
            table.add_row(field, str(value))
    console.print(table)


@profile_app.command("clear")
def profile_clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
) -> None:
    """Delete the stored profile."""
    from jobfill.store import build_profile_store

    if not yes:
        typer.confirm("Delete the stored profile?", abort=True)
    if build_profile_store().clear():
        console.print("[green]✓[/green] Profile deleted.")
    else:
        console.print("No profile stored.")


# ---------------------------------------------------------------------------
# jobfill profile create
# ---------------------------------------------------------------------------


@profile_app.command("create")
def profile_create(
    first_name: str = typer.Option("", "--first-name"),
    last_name: str = typer.Option("", "--last-name"),
    email: str = typer.Option("", "--email"),
    phone: str = typer.Option("", "--phone"),
    linkedin: str = typer.Option("", "--linkedin"),
    github: str = typer.Option("", "--github"),
    address_line1: str = typer.Option("", "--address-line1"),
    address_line2: str = typer.Option("", "--address-line2"),
    city: str = typer.Option("", "--city"),
    state: str = typer.Option("", "--state"),
    postal_code: str = typer.Option("", "--postal-code"),
    country: str = typer.Option("", "--country"),
    work_authorized: str = typer.Option("", "--work-authorized", help="yes / no"),
    needs_sponsorship: str = typer.Option("", "--needs-sponsorship", help="yes / no"),
    degree: str = typer.Option("", "--degree"),
    major: str = typer.Option("", "--major"),
    institution: str = typer.Option("", "--institution"),
    graduation_date: str = typer.Option("", "--graduation-date", help="YYYY-MM"),
    passphrase: Optional[str] = typer.Option(None, "--passphrase", "-p", help="Encrypt the profile at rest."),
) -> None:
    """Build a profile from options and store it, replacing any existing one."""
    from jobfill.models import build_profile

    profile = build_profile(
        first_name=first_name,
        last_name=last_name,
        email=email,
        phone=phone,
        linkedin=linkedin,
        github=github,
        address_line1=address_line1,
        address_line2=address_line2,
        city=city,
        state=state,
        postal_code=postal_code,
        country=country,
        work_authorized=work_authorized,
        needs_sponsorship=needs_sponsorship,
        education=[
            {"degree": degree, "major": major, "institution": institution, "graduation_date": graduation_date}
        ],
    )
    encrypted = _save(profile.model_dump(mode="json", exclude_none=True), passphrase)
    console.print(f"[green]✓[/green] Saved profile{' (encrypted)' if encrypted else ''}.")
