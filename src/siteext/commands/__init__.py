"""Subcommand modules for siteext.

register_commands() uses deferred imports to keep ``siteext --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from siteext.commands.bindings import bindings
    from siteext.commands.check import check
    from siteext.commands.menu import menu

    cli.add_command(bindings)
    cli.add_command(menu)
    cli.add_command(check)
