"""SiteService: boot the site layer against a host and report on it.

Each operation bootstraps a fresh host so results reflect exactly what a
new worker process would do with the same settings.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from siteext.errors import SiteExtError
from siteext.extensions.bootstrap import SiteExtensions, bootstrap
from siteext.host.platform import HostPlatform, default_host
from siteext.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from siteext.config.settings import SiteSettings

logger = logging.getLogger(__name__)

HostFactory = Callable[..., HostPlatform]


class SiteService:
    """Operations over a bootstrapped host.

    Parameters:
        settings: Site settings.
        host_factory: Builds the host; called with ``reloading=``.
    """

    def __init__(self, settings: SiteSettings, host_factory: HostFactory = default_host) -> None:
        self._settings = settings
        self._host_factory = host_factory

    def _start(self, *, reloads: int = 0) -> tuple[HostPlatform, SiteExtensions]:
        host = self._host_factory(reloading=self._settings.reload.enabled)
        site = bootstrap(host, self._settings)
        host.boot()
        for _ in range(reloads):
            host.reload()
        logger.debug("Booted host with %d reload cycle(s)", reloads)
        return host, site

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def bindings(self) -> ServiceResult:
        """List the extension table in stage order."""
        op = "bindings"
        host = self._host_factory(reloading=self._settings.reload.enabled)
        try:
            site = bootstrap(host, self._settings)
        except SiteExtError as exc:
            return ServiceResult.failure(op, exc)
        items = [binding.describe() for binding in site.registry.bindings()]
        return ServiceResult(ok=True, op=op, data={"count": len(items), "items": items})

    def menu(self, name: str = "menu", *, path: str = "/", reloads: int = 0) -> ServiceResult:
        """Render menu *name* as seen by a request for *path*."""
        op = "menu"
        try:
            host, site = self._start(reloads=reloads)
        except SiteExtError as exc:
            return ServiceResult.failure(op, exc)

        if name not in site.slot.menus:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="NOT_FOUND",
                    message=f"No menu named {name!r}",
                    detail={"available": sorted(site.slot.menus)},
                ),
            )

        with host.request(path):
            items = site.render_menu(name)

        model = site.slot.get(name)
        built = {entry.destination for entry in model}
        warnings = [
            f"Dropped menu item {spec.label!r}: unknown route {spec.destination!r}"
            for spec in site.menus.items(name)
            if spec.destination not in built
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data={"name": name, "path": path, "items": items},
            warnings=warnings,
            meta={"cycles": 1 + reloads, "version": site.slot.version},
        )

    def check(self, *, reloads: int = 1) -> ServiceResult:
        """Boot, reload *reloads* times, and verify every mixin is still attached.

        The ``[site]`` section the layer was booted with is reported in ``meta``.
        """
        op = "check"
        try:
            host, site = self._start(reloads=reloads)
        except SiteExtError as exc:
            return ServiceResult.failure(op, exc)

        targets: dict[str, list[str]] = {}
        missing: list[dict[str, str]] = []
        for binding in site.registry.bindings():
            if not binding.is_mixin:
                continue
            cls = host.get_class(binding.target)
            attached = targets.setdefault(binding.target, [])
            if not issubclass(cls, binding.capability):  # type: ignore[arg-type]
                missing.append({"target": binding.target, "capability": binding.label})
            elif binding.label not in attached:
                attached.append(binding.label)

        if missing:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="EXTENSION_MISSING",
                    message=f"{len(missing)} capability attachment(s) lost after reload",
                    detail={"missing": missing},
                ),
            )

        menus: dict[str, Any] = {name: len(model) for name, model in site.slot.menus.items()}
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "bindings": len(site.registry),
                "cycles": 1 + reloads,
                "stages_fired": [stage.value for stage in host.bus.fired],
                "targets": targets,
                "menus": menus,
            },
            meta=self._settings.site.model_dump(),
        )
