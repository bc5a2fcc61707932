from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from fleetplan.cli.common import load_settings_or_exit, resolve_plan_or_exit
from fleetplan.core import validate_plan


def register(app: typer.Typer) -> None:
    @app.command()
    def validate(
        fleet_file: Annotated[
            Path | None,
            typer.Argument(
                help="Fleet definition (YAML); uses the saved plan if omitted"
            ),
        ] = None,
    ) -> None:
        """Check a plan for address collisions and isolation breaches."""
        settings = load_settings_or_exit()
        fleet_plan = resolve_plan_or_exit(fleet_file, settings)

        console = Console()
        result = validate_plan(fleet_plan)

        if result.errors:
            console.print("[red]✗[/red] Validation errors:\n")
            for error in result.errors:
                console.print(f"  [red]•[/red] {error}")
            console.print()

        if result.warnings:
            console.print("[yellow]⚠[/yellow] Warnings:\n")
            for warning in result.warnings:
                console.print(f"  [yellow]•[/yellow] {warning}")
            console.print()

        if result.ok:
            console.print(
                f"[green]✓[/green] {result.instance_count} instance(s) validated "
                "successfully"
            )

        if result.errors:
            raise typer.Exit(1)
