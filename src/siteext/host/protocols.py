"""Interfaces the customization layer consumes from the host platform.

The host owns routing, translations, class loading, and the lifecycle
bus. The core only calls into these protocols.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from siteext.domain.lifecycle import LifecycleStage


@runtime_checkable
class LifecycleSubscriber(Protocol):
    """Offers ``subscribe(stage, handler)`` for lifecycle events."""

    def subscribe(
        self, stage: LifecycleStage | str, handler: Callable[[LifecycleStage], None]
    ) -> object: ...


@runtime_checkable
class Router(Protocol):
    """Host routing layer."""

    def resolve_path(self, route_name: str) -> str:
        """Return the path for *route_name*. Raises ``KeyError`` if unknown."""
        ...

    def current_request_path(self) -> str: ...


@runtime_checkable
class Translator(Protocol):
    """Host i18n layer."""

    def translate(self, key: str, scope: str | None = None) -> str: ...


@runtime_checkable
class ClassAttacher(Protocol):
    """Host primitive extending a named class with a capability at runtime."""

    def attach(self, target: str, capability: type) -> None:
        """Attach *capability* to *target*. Must be idempotent.

        Raises:
            AttachmentError: If the target is missing or cannot take the capability.
        """
        ...

    def has_target(self, target: str) -> bool: ...


@runtime_checkable
class Host(LifecycleSubscriber, Router, Translator, ClassAttacher, Protocol):
    """Everything the customization layer needs from the host."""
