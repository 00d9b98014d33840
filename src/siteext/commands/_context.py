"""AppContext: the object every subcommand receives via ``@click.pass_obj``.

Built once by the root group. It installs logging for the invocation and
owns the single place where a ServiceResult becomes terminal output and
an exit code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from siteext.config.logging import configure_logging
from siteext.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from siteext.config.settings import SiteSettings
    from siteext.services.result import ServiceResult
    from siteext.services.site import SiteService


class AppContext:
    def __init__(self, settings: SiteSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def service(self) -> SiteService:
        from siteext.services.site import SiteService

        return SiteService(self.settings)

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; stdout on success, stderr plus exit 1 on failure.

        Warnings go to stderr, except in JSON mode where they are part of
        the document.
        """
        text = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)
        click.echo(text)
        if not self.output.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
