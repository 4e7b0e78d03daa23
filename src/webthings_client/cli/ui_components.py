"""CLI UI components (Rich).

Keeps rendering details out of the command functions so tables and panels
can be reused by several commands.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from webthings_client.core.domain.models import GatewayError, Thing


def print_banner(console: Console) -> None:
    title = Text("WebThings client", style="bold cyan")
    subtitle = Text("Gateway discovery • Things listing", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_things_table(things: list[Thing], *, source: str | None = None) -> Table:
    """Table with one row per thing, in the order the gateway returned them."""

    title = "Things" if not source else f"Things @ {source}"
    table = Table(title=title)
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Title", style="cyan")
    table.add_column("Types", style="white")
    table.add_column("Properties", style="green")
    table.add_column("Href", style="magenta")

    for index, thing in enumerate(things, start=1):
        table.add_row(
            str(index),
            thing.display_name,
            ", ".join(thing.types) or "-",
            ", ".join(sorted(thing.properties)) or "-",
            thing.href or thing.id or "-",
        )
    return table


def build_error_panel(error: GatewayError) -> Panel:
    body = Text()
    body.append(error.describe(), style="bold")
    if error.detail and error.status_code is not None:
        body.append(f"\n{error.detail}", style="dim")
    return Panel(body, title=Text("Gateway error", style="bold red"), border_style="red")
