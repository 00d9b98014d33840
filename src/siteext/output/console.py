"""Rich Console factory and theme for siteext output.

Consoles render to a StringIO buffer, preserving the
``format_result() -> str`` contract. In non-TTY environments (tests,
pipes) Rich disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SITE_THEME = Theme(
    {
        "site.ok": "bold green",
        "site.error": "bold red",
        "site.warning": "bold yellow",
        "site.op": "bold cyan",
        "site.key": "dim",
        "site.path": "dim",
        "site.active": "bold magenta",
        "site.stage.model_load": "green",
        "site.stage.class_unload": "yellow",
        "site.stage.route_load": "blue",
        "site.stage.prepare": "cyan",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=SITE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_stage(stage: str) -> str:
    """Return the Rich style name for a lifecycle stage value."""
    return f"site.stage.{stage}"
