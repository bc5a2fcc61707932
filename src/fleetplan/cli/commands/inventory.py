from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from fleetplan.cli.common import load_settings_or_exit, resolve_plan_or_exit
from fleetplan.core import connection_instructions


def inventory(
    fleet_file: Annotated[
        Path | None,
        typer.Argument(help="Fleet definition (YAML); uses the saved plan if omitted"),
    ] = None,
    jump_host: Annotated[
        str | None,
        typer.Option("--jump-host", help="Public address of the management host"),
    ] = None,
) -> None:
    """Print SSH connection instructions routed through the jump host."""
    settings = load_settings_or_exit()
    fleet_plan = resolve_plan_or_exit(fleet_file, settings)

    instructions = connection_instructions(
        fleet_plan,
        ssh_user=settings.inventory.ssh_user,
        jump_host=jump_host or settings.inventory.jump_host,
    )

    table = Table()
    table.add_column("Name", style="cyan")
    table.add_column("Address", style="green")
    table.add_column("Connect")

    for item in instructions:
        table.add_row(item.name, item.address, item.command)

    Console().print(table)


def register(app: typer.Typer) -> None:
    app.command()(inventory)
