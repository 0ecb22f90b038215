"""Command: print the bound configuration."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from telemconf.commands._context import AppContext


@click.command()
@click.argument(
    "path",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.pass_obj
def show(app: AppContext, path: Path | None) -> None:
    """Show the channel, initializers and modules a configuration file produces."""
    from telemconf.services.loader import ConfigurationService

    app.emit(ConfigurationService(app.binder).show(path or app.settings.config_path))
