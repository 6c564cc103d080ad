"""Subcommand modules for taskcatalog.

register_commands() imports command modules lazily so ``--help`` stays
cheap.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the index, sync, and validate commands on the root group."""
    from taskcatalog.commands.index import index
    from taskcatalog.commands.sync import sync
    from taskcatalog.commands.validate import validate

    cli.add_command(index)
    cli.add_command(sync)
    cli.add_command(validate)
