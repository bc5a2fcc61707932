from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from fleetplan.cli.common import (
    build_store,
    load_settings_or_exit,
    plan_from_file_or_exit,
)


def plan(
    fleet_file: Annotated[Path, typer.Argument(help="Fleet definition (YAML)")],
    save: Annotated[
        bool, typer.Option("--save", help="Save the plan to the data directory")
    ] = False,
    as_json: Annotated[
        bool, typer.Option("--json", help="Print the plan as JSON")
    ] = False,
) -> None:
    """Allocate subnets, static addresses and rules for a fleet."""
    settings = load_settings_or_exit()
    fleet_plan = plan_from_file_or_exit(fleet_file, settings)

    if as_json:
        typer.echo(fleet_plan.model_dump_json(indent=2))
    else:
        console = Console()
        table = Table()
        table.add_column("Name", style="cyan")
        table.add_column("Class")
        table.add_column("Subnet")
        table.add_column("Address", style="green")
        table.add_column("VM Size")
        table.add_column("Rules", justify="right")

        for instance in fleet_plan.instances:
            table.add_row(
                instance.name,
                instance.device_class.label,
                str(instance.subnet),
                str(instance.address),
                instance.vm_size,
                str(len(instance.rules)),
            )

        console.print(table)
        console.print(
            f"\n[green]Planned {len(fleet_plan.instances)} instance(s)[/green], "
            f"jump host {fleet_plan.management_address}"
        )

    if save:
        store = build_store(settings)
        path = store.save_plan(fleet_plan)
        typer.echo(f"Saved plan to {path}", err=as_json)


def register(app: typer.Typer) -> None:
    app.command()(plan)
