"""Unified CLI entry point for jobfill.

Config precedence: settings.default.toml -> settings.local.toml -> env vars (JOBFILL_* with double underscores) -> CLI flags.
"""

from __future__ import annotations

from typing import Optional

import typer

from jobfill import __version__
from jobfill.cli.docs_cmd import docs_app
from jobfill.cli.fill_cmd import detect_command, fill_command
from jobfill.cli.profile_cmd import profile_app
from jobfill.cli.settings_cmd import settings_app

APP_HELP = (
    "jobfill — fill job application forms from a stored applicant profile. "
    "Config precedence: settings.default.toml -> settings.local.toml -> env vars (JOBFILL_* with __) -> CLI flags."
)

app = typer.Typer(add_completion=True, help=APP_HELP)

app.command("fill")(fill_command)
app.command("detect")(detect_command)
app.add_typer(profile_app, name="profile")
app.add_typer(docs_app, name="docs")
app.add_typer(settings_app, name="settings")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override logging.level (DEBUG, INFO, ...)."),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit log records as JSON lines."),
) -> None:
    """Configure logging; show help when no subcommand is provided."""
    if version:
        typer.echo(f"jobfill {__version__}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    from jobfill.logging_config import configure_logging
    from jobfill.settings import get_settings

    settings = get_settings().logging
    configure_logging(log_level or settings.level, json_output=json_logs or settings.json_output)


if __name__ == "__main__":
    app()
