"""Command: sync references and generate the catalog index."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from taskcatalog.commands._base import CatalogCommand

if TYPE_CHECKING:
    from taskcatalog.commands._context import AppContext


@click.command(
    cls=CatalogCommand,
    examples="""\
  taskcatalog index
  taskcatalog --root ./catalog index
  taskcatalog --json index""",
)
@click.pass_obj
def index(app: AppContext) -> None:
    """Sync References sections and write the sorted index.

    Exits 1 without writing the index when a folder name differs from its
    task id or when two tasks share an id.
    """
    from taskcatalog.services.index import IndexService

    app.emit(IndexService(app.catalog).generate())
