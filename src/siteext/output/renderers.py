"""Rich rendering of ServiceResult, one renderer per operation.

:func:`render_result` picks the renderer from ``result.op``; operations
without one get a plain ``key: value`` listing of their data.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from siteext.output.console import create_console, get_output, style_for_stage

if TYPE_CHECKING:
    from rich.console import Console

    from siteext.services.result import ServiceResult

Renderer = Callable[..., None]

ACTIVE_MARK = "●"


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Rendered text for *result*, colors stripped when not on a terminal."""
    console = create_console()
    if not result.ok:
        _render_error(result, console, verbose=verbose)
    else:
        _OP_RENDERERS.get(result.op, _render_generic)(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """One-line status, or one href per line for ``menu``."""
    if not result.ok:
        message = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {message}"
    if result.op == "menu":
        return "\n".join(item["href"] for item in result.data.get("items", []))
    return f"OK: {result.op}"


def _header(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="site.ok"), Text(f"  {result.op}", style="site.op"))


def _field(console: Console, key: str, value: Any) -> None:
    console.print(Text.assemble("  ", (f"{key}: ", "site.key"), str(value)))


def _table(*columns: str) -> Table:
    table = Table(show_header=True, pad_edge=False, expand=False)
    for column in columns:
        table.add_column(column)
    return table


def _render_meta(console: Console, result: ServiceResult) -> None:
    for key, value in (result.meta or {}).items():
        _field(console, key, value)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    error = result.error
    message = error.message if error else "Unknown error"
    console.print(
        Text("ERROR", style="site.error"),
        Text(f"  {result.op}", style="site.op"),
        Text(f" — {message}"),
    )
    if verbose and error:
        for key, value in error.detail.items():
            _field(console, key, value)


def _render_menu(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _header(console, result)
    _field(console, "menu", result.data.get("name", ""))
    _field(console, "path", result.data.get("path", ""))
    table = _table("Label", "Href", "Active")
    for item in result.data.get("items", []):
        mark = Text(ACTIVE_MARK, style="site.active") if item["active"] else ""
        table.add_row(item["label"], Text(item["href"], style="site.path"), mark)
    console.print(table)
    if verbose:
        _render_meta(console, result)


def _render_bindings(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _header(console, result)
    _field(console, "count", result.data.get("count", 0))
    columns = ["Stage", "Target", "Capability"] + (["Kind"] if verbose else [])
    table = _table(*columns)
    for item in result.data.get("items", []):
        row: list[Any] = [
            Text(item["stage"], style=style_for_stage(item["stage"])),
            item["target"],
            item["capability"],
        ]
        if verbose:
            row.append(Text(item["kind"], style="dim"))
        table.add_row(*row)
    console.print(table)


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _header(console, result)
    _field(console, "bindings", data.get("bindings", 0))
    _field(console, "cycles", data.get("cycles", 0))
    for target, capabilities in data.get("targets", {}).items():
        _field(console, target, ", ".join(capabilities))
    for name, count in data.get("menus", {}).items():
        _field(console, f"menu {name}", f"{count} item(s)")
    if verbose:
        _field(console, "stages_fired", " → ".join(data.get("stages_fired", [])))
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _header(console, result)
    for key, value in result.data.items():
        if isinstance(value, dict | list):
            value = json.dumps(value, separators=(",", ":"))
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Renderer] = {
    "bindings": _render_bindings,
    "check": _render_check,
    "menu": _render_menu,
}
