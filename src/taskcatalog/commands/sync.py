"""Command: sync References sections only."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from taskcatalog.commands._base import CatalogCommand

if TYPE_CHECKING:
    from taskcatalog.commands._context import AppContext


@click.command(
    cls=CatalogCommand,
    examples="""\
  taskcatalog sync
  taskcatalog -q sync""",
)
@click.pass_obj
def sync(app: AppContext) -> None:
    """Rewrite each task's References section to match its folder."""
    from taskcatalog.services.index import IndexService

    app.emit(IndexService(app.catalog).sync())
