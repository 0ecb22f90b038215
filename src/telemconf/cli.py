"""Root CLI group for telemconf with global flags and command registration."""

from __future__ import annotations

import click

from telemconf import __version__
from telemconf.commands import register_commands
from telemconf.commands._context import AppContext
from telemconf.config.settings import TelemconfSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="telemconf")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option(
    "--trace-binding", is_flag=True, help="Debug logging from the XML binder (implies -v)."
)
@click.option("--no-plugins", is_flag=True, help="Do not load telemconf.plugins entry points.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    trace_binding: bool,
    no_plugins: bool,
    config_path: str | None,
) -> None:
    """telemconf — telemetry SDK configuration loader."""
    settings = TelemconfSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        verbose=verbose,
        log_json=log_json,
        trace_binding=trace_binding,
        load_plugins=not no_plugins,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
