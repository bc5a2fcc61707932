from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from fleetplan.cli.common import (
    build_store,
    load_settings_or_exit,
    resolve_config_path_or_exit,
)
from fleetplan.config import Settings, write_settings


def register(app: typer.Typer) -> None:
    @app.command()
    def init(
        data_dir: Annotated[
            Path | None,
            typer.Option("--data-dir", "--path", help="Custom data directory"),
        ] = None,
        force: Annotated[
            bool,
            typer.Option("--force", "-f", help="Overwrite existing config and data"),
        ] = False,
    ) -> None:
        """Initialize configuration and a sample fleet file."""
        console = Console()

        config_path, config_exists = resolve_config_path_or_exit(allow_missing=True)
        if config_exists and not force:
            console.print(f"[dim]Config exists:[/dim] {config_path}")
            settings = load_settings_or_exit()
        else:
            settings = Settings()
            write_settings(settings, config_path)
            action = "Overwrote" if config_exists else "Created"
            console.print(f"[green]✓[/green] {action} config: {config_path}")

        store = build_store(settings, data_dir=data_dir)
        if store.init(force=force):
            console.print(f"[green]✓[/green] Wrote sample fleet: {store.fleet_path}")
        else:
            console.print(f"[dim]Fleet file exists:[/dim] {store.fleet_path}")
