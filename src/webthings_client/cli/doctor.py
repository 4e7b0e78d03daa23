"""Doctor commands: gateway diagnostics and configuration."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from webthings_client.core.config import AppSettings, write_user_env_vars
from webthings_client.core.services.gateway_service import WebthingsGateway
from webthings_client.core.url_validation import validate_url

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_things(gateway: WebthingsGateway, base_url: str) -> tuple[bool, str]:
    outcome = asyncio.run(gateway.client_for(base_url).fetch_things())
    if outcome.error is not None:
        return False, outcome.error.describe()
    return True, f"HTTP 200, {len(outcome.things)} thing(s)"


@app.command()
def run() -> None:
    """Run baseline diagnostics against the configured gateway."""

    table = Table(title="WebThings Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    try:
        settings = AppSettings()
        gateway = WebthingsGateway.from_settings(settings)
    except ValueError as exc:
        table.add_row("Gateway config", "FAIL", str(exc))
        _console.print(table)
        _console.print("\n[yellow]Hint:[/yellow] run `webthings doctor setup-gateway` first.")
        raise typer.Exit(code=2)

    table.add_row("Gateway config", "OK", gateway.config.domain)
    table.add_row("Token", "OK", "set (hidden)")
    table.add_row("Probe timeout", "OK", f"{settings.probe_timeout_ms} ms")

    # Both candidates are probed here, unlike resolution which stops at the first hit.
    report = gateway.probe_report()
    table.add_row("Primary endpoint", "OK" if report.primary_reachable else "FAIL", report.primary)
    table.add_row("Fallback endpoint", "OK" if report.fallback_reachable else "FAIL", report.fallback)

    selected = report.selected
    ok_http = False
    if selected is None:
        table.add_row("Things API", "SKIPPED", "no reachable endpoint")
    else:
        ok_http, detail_http = _check_things(gateway, selected)
        table.add_row("Things API", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        raise typer.Exit(code=1)


@app.command(name="setup-gateway")
def setup_gateway() -> None:
    """Interactive gateway setup (stored in the user config .env)."""

    domain = typer.prompt("Gateway domain (e.g. myhome.webthings.io)").strip()
    use_tls = typer.confirm("Use HTTPS?", default=True)
    port = typer.prompt("Port", default=443 if use_tls else 80, type=int)
    fallback = typer.prompt("Fallback domain", default="gateway.local", show_default=True).strip()
    token = typer.prompt("Gateway token", hide_input=True, confirmation_prompt=False).strip()

    if not domain or not token:
        raise typer.BadParameter("domain and token are required")

    scheme = "https" if use_tls else "http"
    error = validate_url(f"{scheme}://{domain}:{port}")
    if error is not None:
        raise typer.BadParameter(error.describe())

    env_path = write_user_env_vars(
        {
            "WEBTHINGS_GATEWAY_DOMAIN": domain,
            "WEBTHINGS_GATEWAY_USE_TLS": "true" if use_tls else "false",
            "WEBTHINGS_GATEWAY_PORT": str(port),
            "WEBTHINGS_GATEWAY_FALLBACK_DOMAIN": fallback or "gateway.local",
            "WEBTHINGS_GATEWAY_TOKEN": token,
        }
    )

    _console.print(f"[green]Saved gateway config to:[/green] {env_path}")
