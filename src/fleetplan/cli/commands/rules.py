from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from fleetplan.cli.common import load_settings_or_exit, resolve_plan_or_exit
from fleetplan.core import group_rules_by_subnet


def rules(
    fleet_file: Annotated[
        Path | None,
        typer.Argument(help="Fleet definition (YAML); uses the saved plan if omitted"),
    ] = None,
) -> None:
    """Show the firewall rule group for each subnet."""
    settings = load_settings_or_exit()
    fleet_plan = resolve_plan_or_exit(fleet_file, settings)

    console = Console()
    for group in group_rules_by_subnet(fleet_plan):
        table = Table(title=f"{group.name} ({group.subnet})")
        table.add_column("Priority", justify="right")
        table.add_column("Name", style="cyan")
        table.add_column("Access")
        table.add_column("Protocol")
        table.add_column("Port")
        table.add_column("Source", style="green")

        for rule in group.rules:
            if rule.access == "allow":
                access = "[green]allow[/green]"
            else:
                access = "[red]deny[/red]"
            table.add_row(
                str(rule.priority),
                rule.name,
                access,
                rule.protocol,
                str(rule.port),
                rule.source,
            )

        console.print(table)
        console.print(f"Members: {', '.join(str(a) for a in group.members)}\n")


def register(app: typer.Typer) -> None:
    app.command()(rules)
