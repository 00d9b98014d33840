"""Composition root: the table of every customization the site layer makes.

Runs once at process start, before the host begins loading. Registers
each ``(target, capability, stage)`` binding, validates the table against
the host, seals the registry, and subscribes it to every lifecycle stage.
Any error here is fatal: the process must not serve traffic half-configured.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from siteext.domain.lifecycle import ExtensionBinding, LifecycleStage
from siteext.errors import ConfigurationError
from siteext.extensions.capabilities import (
    ApplicationHelper,
    CommentsHelperExtensions,
    DeviseOverrides,
    MapHelper,
    ProposalParserExtensions,
    SanitizeHelper,
    TosRedirectFix,
    WidgetUrlsHelper,
    user_authentication,
)
from siteext.lifecycle.registry import ExtensionRegistry
from siteext.navigation.builder import (
    MenuBuilder,
    MenuRegistry,
    MenuValidation,
    NavigationRefresh,
)
from siteext.navigation.resolver import NavigationResolver
from siteext.navigation.slot import MenuSlot

if TYPE_CHECKING:
    from siteext.config.settings import SiteSettings
    from siteext.host.protocols import Host

logger = logging.getLogger(__name__)

NAVIGATION_TARGET = "navigation.menus"


@dataclass(frozen=True)
class SiteExtensions:
    """Everything the bootstrap wired up, for the host and request handlers."""

    registry: ExtensionRegistry
    menus: MenuRegistry
    slot: MenuSlot
    resolver: NavigationResolver
    builder: MenuBuilder

    def render_menu(self, name: str = "menu", current_path: str | None = None) -> list[dict]:
        return self.slot.render(self.resolver, name, current_path)


class ExtensionBootstrap:
    """Registers the site's extension table with a host.

    Parameters:
        host: The host platform the bindings attach to.
        settings: Site settings (identity providers, menus).
    """

    def __init__(self, host: Host, settings: SiteSettings) -> None:
        self._host = host
        self._settings = settings

    def extension_table(
        self, validation: MenuValidation, navigation: NavigationRefresh
    ) -> list[ExtensionBinding]:
        """Every binding the site layer makes, in application order."""
        user_auth = user_authentication(self._settings.auth)
        return [
            # The user model must carry the site providers before routes are
            # drawn from it; CLASS_UNLOAD re-adds them after a hot reload.
            ExtensionBinding("core.User", user_auth, LifecycleStage.MODEL_LOAD),
            ExtensionBinding("core.User", user_auth, LifecycleStage.CLASS_UNLOAD),
            ExtensionBinding("controllers.Base", DeviseOverrides, LifecycleStage.ROUTE_LOAD),
            # Menu routes are checked once every route, provider routes
            # included, has been drawn.
            ExtensionBinding(
                NAVIGATION_TARGET, validation, LifecycleStage.PREPARE, name="MenuValidation"
            ),
            ExtensionBinding(
                "comments.CommentsHelper", CommentsHelperExtensions, LifecycleStage.PREPARE
            ),
            ExtensionBinding(
                "content_parsers.ProposalParser",
                ProposalParserExtensions,
                LifecycleStage.PREPARE,
            ),
            ExtensionBinding("views.Base", MapHelper, LifecycleStage.PREPARE),
            ExtensionBinding("views.Base", WidgetUrlsHelper, LifecycleStage.PREPARE),
            ExtensionBinding("core.NeedsTosAccepted", TosRedirectFix, LifecycleStage.PREPARE),
            ExtensionBinding(
                "assemblies.HighlightedAssembliesCell", ApplicationHelper, LifecycleStage.PREPARE
            ),
            ExtensionBinding(
                "assemblies.HighlightedAssembliesCell", SanitizeHelper, LifecycleStage.PREPARE
            ),
            ExtensionBinding(
                NAVIGATION_TARGET, navigation, LifecycleStage.PREPARE, name="NavigationRefresh"
            ),
        ]

    def load_menus(self) -> MenuRegistry:
        """Menu specifications from settings; each configured menu replaces the host's.

        Raises:
            ConfigurationError: If two ``[[menus]]`` tables share a name.
        """
        menus = MenuRegistry()
        for menu in self._settings.menus:
            if menu.name in menus:
                raise ConfigurationError(f"Menu {menu.name!r} is configured more than once")
            menus.create(menu.name)
            for spec in menu.items:
                menus.add(menu.name, spec)
        return menus

    def run(self) -> SiteExtensions:
        """Register, validate targets, seal, and subscribe.

        Menu routes are validated by the first PREPARE stage, after the
        host has drawn its routes; an unknown route name makes the first
        ``boot()`` raise :class:`ConfigurationError` before any menu is
        published.

        Raises:
            ConfigurationError: Unknown target or stage, or a duplicate menu.
        """
        resolver = NavigationResolver(self._host)
        builder = MenuBuilder(resolver, self._host)
        menus = self.load_menus()

        slot = MenuSlot()
        registry = ExtensionRegistry(self._host)
        table = self.extension_table(
            MenuValidation(menus, builder), NavigationRefresh(menus, builder, slot)
        )
        for binding in table:
            self._check_target(binding)
            registry.register(binding)
        registry.seal()
        registry.subscribe(self._host)
        logger.debug("Bootstrapped %d extension binding(s)", len(registry))
        return SiteExtensions(
            registry=registry, menus=menus, slot=slot, resolver=resolver, builder=builder
        )

    def _check_target(self, binding: ExtensionBinding) -> None:
        if binding.is_mixin and not self._host.has_target(binding.target):
            msg = f"Unknown extension target {binding.target!r} for {binding.label}"
            raise ConfigurationError(msg)


def bootstrap(host: Host, settings: SiteSettings) -> SiteExtensions:
    """Run the site's extension bootstrap against *host*."""
    return ExtensionBootstrap(host, settings).run()
