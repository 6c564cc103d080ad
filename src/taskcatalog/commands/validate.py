"""Command: validate task documents."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from taskcatalog.commands._base import CatalogCommand

if TYPE_CHECKING:
    from taskcatalog.commands._context import AppContext


@click.command(
    cls=CatalogCommand,
    examples="""\
  taskcatalog validate
  taskcatalog validate my-task other-task
  taskcatalog --json validate""",
)
@click.argument("folders", nargs=-1)
@click.pass_obj
def validate(app: AppContext, folders: tuple[str, ...]) -> None:
    """Validate all task folders, or only FOLDERS when given.

    Exits 1 if any checked folder has an error.
    """
    from taskcatalog.services.validate import ValidateService

    app.emit(ValidateService(app.catalog).validate(list(folders) or None))
