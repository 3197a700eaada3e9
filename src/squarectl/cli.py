"""Root CLI group for squarectl with global flags and command registration."""

from __future__ import annotations

import click

from squarectl import __version__
from squarectl.commands import register_commands
from squarectl.commands._context import AppContext
from squarectl.config.settings import SquareSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="squarectl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output (IDs only).")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and error codes.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--data-dir",
    default=None,
    type=click.Path(file_okay=False),
    help="Directory holding the squares file.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    data_dir: str | None,
) -> None:
    """squarectl — place colored squares on an expanding spiral grid."""
    settings = SquareSettings.from_cli(
        config_path=config_path,
        data_dir=data_dir,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)