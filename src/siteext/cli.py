"""``siteext`` command line: global output flags plus the site subcommands."""

from __future__ import annotations

import click

from siteext import __version__
from siteext.commands import register_commands
from siteext.commands._context import AppContext
from siteext.config.settings import SiteSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="siteext")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only hrefs or a status line.")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logs and result metadata.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Read this TOML file instead of searching for siteext.toml.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, **flags: bool) -> None:
    """Site customization layer for the host platform.

    Boots the reference host with the site's extension table and reports
    on bindings, menus and reload behavior.
    """
    ctx.obj = AppContext(SiteSettings.from_cli(config_path=config_path, **flags))
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
