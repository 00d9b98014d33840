"""Command: list the extension table."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from siteext.commands._base import SiteCommand

if TYPE_CHECKING:
    from siteext.commands._context import AppContext


@click.command(
    cls=SiteCommand,
    examples="""\
  siteext bindings
  siteext --json bindings
  siteext -v bindings""",
)
@click.pass_obj
def bindings(app: AppContext) -> None:
    """List every extension binding in lifecycle order."""
    app.emit(app.service.bindings())
