"""Pluggy hook specifications for the host lifecycle stages.

One hook per :class:`~siteext.domain.lifecycle.LifecycleStage`, named
``on_<stage>``. Hooks take no arguments; subscribers learn the stage
from the hook they implement.
"""

from __future__ import annotations

import pluggy

PROJECT_NAME = "siteext"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class LifecycleHookSpec:
    """Hook specifications for the host boot/reload sequence."""

    @hookspec
    def on_model_load(self) -> None:
        """Called after the host has (re)loaded its model classes."""

    @hookspec
    def on_class_unload(self) -> None:
        """Called after the host reloader has discarded reloadable classes."""

    @hookspec
    def on_route_load(self) -> None:
        """Called after the host has drawn its routes."""

    @hookspec
    def on_prepare(self) -> None:
        """Called once per cycle, after routes, before serving requests."""
