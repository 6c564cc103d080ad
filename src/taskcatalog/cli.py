"""Root CLI group for taskcatalog with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from taskcatalog import __version__
from taskcatalog.commands import register_commands
from taskcatalog.commands._context import AppContext
from taskcatalog.config.settings import CatalogSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="taskcatalog")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-r",
    "--root",
    "catalog_root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Catalog root directory (contains the tasks directory).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    catalog_root: Path | None,
) -> None:
    """taskcatalog — keep task documents referenced, validated, and indexed."""
    ctx.ensure_object(dict)
    settings = CatalogSettings.from_cli(
        config_path=config_path,
        catalog_root=catalog_root,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
