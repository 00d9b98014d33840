"""Command: render a navigation menu for a request path."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from siteext.commands._base import SiteCommand

if TYPE_CHECKING:
    from siteext.commands._context import AppContext


@click.command(
    cls=SiteCommand,
    examples="""\
  siteext menu
  siteext menu --path /processes/42
  siteext menu --name footer --path /pages/terms
  siteext --json menu --path / --reloads 2""",
)
@click.option("--name", "name", default="menu", show_default=True, help="Menu to render.")
@click.option("--path", "path", default="/", show_default=True, help="Current request path.")
@click.option(
    "--reloads",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Hot-reload cycles to run after boot.",
)
@click.pass_obj
def menu(app: AppContext, name: str, path: str, reloads: int) -> None:
    """Render a menu with its active item for PATH."""
    app.emit(app.service.menu(name, path=path, reloads=reloads))
