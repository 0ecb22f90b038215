"""Command: bind a configuration file and report success or the first error."""

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
def validate(app: AppContext, path: Path | None) -> None:
    """Validate a configuration file (discovered from the cwd if omitted)."""
    from telemconf.services.loader import ConfigurationService

    app.emit(ConfigurationService(app.binder).validate(path or app.settings.config_path))
