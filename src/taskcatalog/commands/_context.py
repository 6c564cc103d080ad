"""AppContext — shared Click context for all commands.

Created once by the root group and passed to subcommands via
``@click.pass_obj``. Builds the Catalog lazily and owns result emission:
stdout/stderr routing and the exit code policy.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from taskcatalog.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from taskcatalog.config.settings import CatalogSettings
    from taskcatalog.infrastructure.catalog import Catalog
    from taskcatalog.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: CatalogSettings) -> None:
        self.settings = settings
        self._catalog: Catalog | None = None

        from taskcatalog.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def catalog(self) -> Catalog:
        """The catalog (created on first access)."""
        if self._catalog is None:
            from taskcatalog.config.logging import bind_catalog_root
            from taskcatalog.infrastructure.catalog import Catalog

            self._catalog = Catalog(self.settings)
            bind_catalog_root(self._catalog.root)
        return self._catalog

    def emit(self, result: ServiceResult) -> None:
        """Output a ServiceResult and apply the exit code policy.

        * Success: stdout, exit 0. Warnings go to stderr in human mode
          (they are part of the payload in JSON mode).
        * Failure: stderr, exit 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if not settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
