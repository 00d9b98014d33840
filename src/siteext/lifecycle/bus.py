"""Synchronous lifecycle event dispatch via pluggy.

The host owns the bus and fires stages in its own order; the
customization layer only subscribes. Handler exceptions propagate out of
:meth:`LifecycleBus.fire` unchanged so a failed attachment aborts the
host cycle.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import SimpleNamespace

import pluggy

from siteext.domain.lifecycle import LifecycleStage, parse_stage
from siteext.lifecycle.hookspecs import PROJECT_NAME, LifecycleHookSpec, hookimpl

logger = logging.getLogger(__name__)

StageHandler = Callable[[LifecycleStage], None]


def _subscriber(stage: LifecycleStage, handler: StageHandler) -> object:
    """Wrap *handler* in a pluggy plugin implementing the hook for *stage*."""

    def impl() -> None:
        handler(stage)

    impl.__name__ = stage.hook_name
    return SimpleNamespace(**{stage.hook_name: hookimpl(impl)})


class LifecycleBus:
    """Publishes lifecycle stages to subscribed handlers.

    Several handlers subscribed to the same stage run most-recent-first,
    following pluggy's call order.
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(LifecycleHookSpec)
        self._fired: list[LifecycleStage] = []

    def subscribe(self, stage: LifecycleStage | str, handler: StageHandler) -> object:
        """Subscribe *handler* to *stage*. Returns a token for :meth:`unsubscribe`."""
        resolved = parse_stage(stage)
        plugin = _subscriber(resolved, handler)
        name = f"{resolved.hook_name}:{getattr(handler, '__qualname__', 'handler')}:{id(plugin)}"
        self._pm.register(plugin, name=name)
        logger.debug("Subscribed %s to %s", name, resolved.value)
        return plugin

    def unsubscribe(self, token: object) -> None:
        """Remove a subscription returned by :meth:`subscribe`."""
        self._pm.unregister(token)

    def fire(self, stage: LifecycleStage | str) -> None:
        """Announce *stage* to every subscriber."""
        resolved = parse_stage(stage)
        logger.debug("Firing lifecycle stage %s", resolved.value)
        self._fired.append(resolved)
        getattr(self._pm.hook, resolved.hook_name)()

    def subscriber_count(self, stage: LifecycleStage | str) -> int:
        """Number of handlers subscribed to *stage*."""
        caller = getattr(self._pm.hook, parse_stage(stage).hook_name)
        return len(caller.get_hookimpls())

    @property
    def fired(self) -> list[LifecycleStage]:
        """Every stage fired so far, in order."""
        return list(self._fired)
