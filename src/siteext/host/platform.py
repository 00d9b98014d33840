"""In-memory reference host used by the CLI and the test suite.

It implements only the interfaces the customization layer consumes:
a class table that is rebuilt on reload, a route table, translations,
the current request path, and a pluggy-backed lifecycle bus.

Boot order::

    MODEL_LOAD -> (draw routes) -> ROUTE_LOAD -> PREPARE

Reload order (hot reload)::

    (rebuild classes) -> MODEL_LOAD -> CLASS_UNLOAD -> (draw routes)
    -> ROUTE_LOAD -> PREPARE

Routes drawn during a cycle may be derived from class metadata (the
identity-provider routes come from ``core.User.omniauth_providers()``),
which is why some capabilities must be attached before routes load.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from typing import TYPE_CHECKING

from siteext.domain.lifecycle import LifecycleStage
from siteext.errors import AttachmentError
from siteext.host.classes import HOST_CLASSES, HOST_ROUTES, HOST_TRANSLATIONS
from siteext.lifecycle.bus import LifecycleBus

if TYPE_CHECKING:
    from siteext.lifecycle.bus import StageHandler

logger = logging.getLogger(__name__)

RouteSource = Callable[["HostPlatform"], Mapping[str, str]]


def _fresh(cls: type) -> type:
    """Return a new class object behaving like *cls* (one reload generation)."""
    return type(cls.__name__, (cls,), {"__module__": cls.__module__, "__doc__": cls.__doc__})


def omniauth_routes(host: HostPlatform) -> dict[str, str]:
    """Authorize routes for every provider the current user class offers."""
    if not host.has_target("core.User"):
        return {}
    user = host.get_class("core.User")
    return {
        f"user_{provider}_omniauth_authorize": f"/users/auth/{provider}"
        for provider in user.omniauth_providers()
    }


class HostPlatform:
    """Reference host with reloadable classes.

    Parameters:
        classes: Dotted name -> pristine class. Each load creates a fresh
            subclass, so capabilities attached earlier are dropped.
        routes: Static route table, available from construction.
        translations: ``"scope.key"`` -> text.
        route_sources: Callables deriving extra routes when routes are drawn.
        reloading: Whether the reloader fires ``CLASS_UNLOAD``.
    """

    def __init__(
        self,
        *,
        classes: Mapping[str, type],
        routes: Mapping[str, str] | None = None,
        translations: Mapping[str, str] | None = None,
        route_sources: list[RouteSource] | None = None,
        reloading: bool = False,
    ) -> None:
        self._pristine = dict(classes)
        self._static_routes = dict(routes or {})
        self._translations = dict(translations or {})
        self._route_sources = list(route_sources or [])
        self.reloading = reloading
        self.bus = LifecycleBus()
        self._classes: dict[str, type] = {}
        self._routes: dict[str, str] = dict(self._static_routes)
        self._request_path = "/"
        self.generation = 0
        self._load_classes()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def subscribe(self, stage: LifecycleStage | str, handler: StageHandler) -> object:
        return self.bus.subscribe(stage, handler)

    def boot(self) -> None:
        """Run the initial boot cycle."""
        self.bus.fire(LifecycleStage.MODEL_LOAD)
        self._draw_routes()
        self.bus.fire(LifecycleStage.ROUTE_LOAD)
        self.bus.fire(LifecycleStage.PREPARE)

    def reload(self) -> None:
        """Discard reloadable classes and run a full reload cycle."""
        self._load_classes()
        self.bus.fire(LifecycleStage.MODEL_LOAD)
        if self.reloading:
            self.bus.fire(LifecycleStage.CLASS_UNLOAD)
        self._draw_routes()
        self.bus.fire(LifecycleStage.ROUTE_LOAD)
        self.bus.fire(LifecycleStage.PREPARE)

    def _load_classes(self) -> None:
        self._classes = {name: _fresh(cls) for name, cls in self._pristine.items()}
        self.generation += 1
        logger.debug("Loaded host classes (generation %d)", self.generation)

    def _draw_routes(self) -> None:
        routes = dict(self._static_routes)
        for source in self._route_sources:
            routes.update(source(self))
        self._routes = routes

    # ------------------------------------------------------------------
    # Classes
    # ------------------------------------------------------------------

    def has_target(self, target: str) -> bool:
        return target in self._classes

    def get_class(self, target: str) -> type:
        """Current class object for *target*."""
        return self._classes[target]

    def attach(self, target: str, capability: type) -> None:
        """Make *target* implement *capability*. No-op if it already does."""
        current = self._classes.get(target)
        if current is None:
            raise AttachmentError(target, capability.__name__, "target is not loaded")
        if issubclass(current, capability):
            return
        try:
            extended = type(
                current.__name__,
                (capability, current),
                {"__module__": current.__module__, "__doc__": current.__doc__},
            )
        except TypeError as exc:
            raise AttachmentError(target, capability.__name__, str(exc)) from exc
        self._classes[target] = extended

    def remove_class(self, target: str) -> None:
        """Drop *target* from the class table and its pristine source."""
        self._pristine.pop(target, None)
        self._classes.pop(target, None)

    # ------------------------------------------------------------------
    # Routing and i18n
    # ------------------------------------------------------------------

    def resolve_path(self, route_name: str) -> str:
        return self._routes[route_name]

    def draw(self, name: str, path: str) -> None:
        """Add or change a static route, effective at once and kept by later draws."""
        self._static_routes[name] = path
        self._routes[name] = path

    def undraw(self, name: str) -> None:
        """Remove a static route, effective at once and for every later draw."""
        self._static_routes.pop(name, None)
        self._routes.pop(name, None)

    def current_request_path(self) -> str:
        return self._request_path

    @contextmanager
    def request(self, path: str) -> Iterator[None]:
        """Serve one request at *path*."""
        previous = self._request_path
        self._request_path = path
        try:
            yield
        finally:
            self._request_path = previous

    def translate(self, key: str, scope: str | None = None) -> str:
        full_key = f"{scope}.{key}" if scope else key
        return self._translations.get(full_key, f"translation missing: {full_key}")

    def store_translation(self, full_key: str, text: str) -> None:
        self._translations[full_key] = text


def default_host(*, reloading: bool = False) -> HostPlatform:
    """Reference host loaded with the platform classes, routes and translations."""
    return HostPlatform(
        classes=HOST_CLASSES,
        routes=HOST_ROUTES,
        translations=HOST_TRANSLATIONS,
        route_sources=[omniauth_routes],
        reloading=reloading,
    )
