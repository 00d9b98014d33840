"""Command: verify every extension survives boot and reload cycles."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from siteext.commands._base import SiteCommand

if TYPE_CHECKING:
    from siteext.commands._context import AppContext


@click.command(
    cls=SiteCommand,
    examples="""\
  siteext check
  siteext check --reloads 3
  SITEEXT_RELOAD__ENABLED=true siteext check""",
)
@click.option(
    "--reloads",
    type=click.IntRange(min=0),
    default=1,
    show_default=True,
    help="Hot-reload cycles to run after boot.",
)
@click.pass_obj
def check(app: AppContext, reloads: int) -> None:
    """Boot, reload, and confirm every capability is still attached."""
    app.emit(app.service.check(reloads=reloads))
