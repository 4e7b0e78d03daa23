"""`webthings` command line interface.

Thin layer over `WebthingsGateway`: reads settings, runs the coroutine and
renders results with Rich. Exit codes: 0 ok, 1 gateway failure,
2 invalid input or configuration.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from webthings_client.adapters.json_exporter import export_things_json, things_payload
from webthings_client.cli import doctor
from webthings_client.cli.ui_components import build_error_panel, build_things_table, print_banner
from webthings_client.core.config import AppSettings
from webthings_client.core.logging_config import setup_logging
from webthings_client.core.services.gateway_service import WebthingsGateway
from webthings_client.core.url_validation import validate_url

app = typer.Typer(no_args_is_help=True, help="Client for a WebThings gateway.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _load_gateway() -> WebthingsGateway:
    try:
        return WebthingsGateway.from_settings(AppSettings())
    except ValueError as exc:
        _console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(code=2)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level."),
) -> None:
    try:
        settings = AppSettings()
    except ValidationError as exc:
        _console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(code=2)
    setup_logging("DEBUG" if verbose else settings.log_level)


@app.command()
def things(
    as_json: bool = typer.Option(False, "--json", help="Print the raw things as JSON."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Also write the things to a JSON file."),
) -> None:
    """Resolve the gateway endpoint and list its things."""

    gateway = _load_gateway()
    outcome = asyncio.run(gateway.fetch_things())

    if outcome.error is not None:
        if as_json:
            typer.echo(json.dumps({"error": outcome.error.model_dump(mode="json")}))
        else:
            _console.print(build_error_panel(outcome.error))
        raise typer.Exit(code=1)

    if output is not None:
        export_things_json(things=outcome.things, output_path=output)

    if as_json:
        typer.echo(json.dumps(things_payload(outcome.things), ensure_ascii=False, indent=2))
        return

    print_banner(_console)
    _console.print(build_things_table(outcome.things, source=outcome.base_url))
    if output is not None:
        _console.print(f"[green]Saved:[/green] {output}")


@app.command()
def resolve() -> None:
    """Show both candidate endpoints and which one would be used."""

    gateway = _load_gateway()
    report = gateway.probe_report()

    table = Table(title="Gateway endpoints")
    table.add_column("Candidate", style="cyan", no_wrap=True)
    table.add_column("URI", style="white")
    table.add_column("Reachable", style="green")
    table.add_row("primary", report.primary, "yes" if report.primary_reachable else "no")
    table.add_row("fallback", report.fallback, "yes" if report.fallback_reachable else "no")
    _console.print(table)

    if report.selected is None:
        _console.print("[red]No reachable endpoint.[/red]")
        raise typer.Exit(code=1)
    _console.print(f"Using: [bold]{report.selected}[/bold]")


@app.command()
def validate(url: str = typer.Argument(..., help="Server address to check.")) -> None:
    """Check whether a server address is a valid web URL."""

    error = validate_url(url)
    if error is not None:
        _console.print(f"[red]invalid address[/red] {url}")
        raise typer.Exit(code=2)
    _console.print(f"[green]valid[/green] {url}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
