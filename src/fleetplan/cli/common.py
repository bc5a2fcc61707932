from __future__ import annotations

from pathlib import Path

import typer

from fleetplan.config import (
    Settings,
    data_dir_from_settings,
    get_settings,
    load_fleet_spec,
    resolve_config_path,
)
from fleetplan.core import AllocationError, build_plan
from fleetplan.models import FleetPlan
from fleetplan.storage import PlanStore


def load_settings_or_exit() -> Settings:
    try:
        return get_settings()
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def resolve_config_path_or_exit(allow_missing: bool = False) -> tuple[Path, bool]:
    try:
        return resolve_config_path(allow_missing=allow_missing)
    except FileNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def build_store(settings: Settings, data_dir: Path | None = None) -> PlanStore:
    path = data_dir or data_dir_from_settings(settings)
    return PlanStore(path)


def plan_from_file_or_exit(fleet_file: Path, settings: Settings) -> FleetPlan:
    try:
        spec = load_fleet_spec(fleet_file, settings.planning.address_space)
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc

    try:
        return build_plan(spec)
    except AllocationError as exc:
        typer.echo(f"Allocation failed: {exc}", err=True)
        raise typer.Exit(1) from exc


def resolve_plan_or_exit(fleet_file: Path | None, settings: Settings) -> FleetPlan:
    """Plan ``fleet_file`` when given, otherwise load the saved plan."""
    if fleet_file is not None:
        return plan_from_file_or_exit(fleet_file, settings)

    store = build_store(settings)
    try:
        plan = store.load_current_plan()
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc

    if plan is None:
        typer.echo(
            "No saved plan. Run 'fleetplan plan FLEET_FILE --save' first.", err=True
        )
        raise typer.Exit(1)
    return plan
