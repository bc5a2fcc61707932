from __future__ import annotations

from typing import Annotated

import typer

from fleetplan.utils.logging import setup_logging

from .commands import config as config_cmd
from .commands.init import register as register_init
from .commands.inventory import register as register_inventory
from .commands.plan import register as register_plan
from .commands.rules import register as register_rules
from .commands.validate import register as register_validate

app = typer.Typer(
    help="fleetplan - deterministic addressing for simulated event device fleets",
    no_args_is_help=True,
)

app.add_typer(config_cmd.app, name="config")

register_init(app)
register_plan(app)
register_rules(app)
register_inventory(app)
register_validate(app)


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit"),
    ] = False,
) -> None:
    """fleetplan CLI."""
    setup_logging()

    if version:
        from importlib.metadata import version as get_version

        typer.echo(f"fleetplan version {get_version('fleetplan')}")
        raise typer.Exit()
