"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy binder construction (built-in types
plus plugin types) and centralized result emission.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from telemconf.output.renderers import format_result

if TYPE_CHECKING:
    from telemconf.binding.binder import ConfigurationBinder
    from telemconf.config.settings import TelemconfSettings
    from telemconf.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The binder is built on first use so ``--help`` and ``--version``
    never load plugins.
    """

    def __init__(self, settings: TelemconfSettings) -> None:
        self.settings = settings
        self._binder: ConfigurationBinder | None = None

        from telemconf.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            trace_binding=settings.trace_binding,
        )

    @property
    def binder(self) -> ConfigurationBinder:
        """The configuration binder (created lazily on first access)."""
        if self._binder is None:
            from telemconf.factory import create_default_binder
            from telemconf.plugins.manager import PluginManager

            binder = create_default_binder()
            if self.settings.load_plugins:
                PluginManager(binder.registry).discover_and_load()
            self._binder = binder
        return self._binder

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout; warnings go to stderr in text mode.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(result, json_output=self.settings.json_output)
        if result.ok:
            click.echo(output)
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
