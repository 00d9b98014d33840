"""Menu composition: named item registries and the position-ordered build.

``MenuRegistry`` collects item specifications per menu name.
``MenuBuilder`` turns one list of specifications into an immutable
``MenuModel``. ``MenuValidation`` and ``NavigationRefresh`` are the
PREPARE-stage actions that check the configured routes once and then
rebuild every registered menu and publish them together.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from operator import attrgetter
from typing import TYPE_CHECKING

from siteext.domain.menu import ActiveMatch, MenuEntry, MenuItem, MenuModel
from siteext.errors import ConfigurationError, ResolutionError

if TYPE_CHECKING:
    from siteext.host.protocols import Translator
    from siteext.navigation.resolver import NavigationResolver
    from siteext.navigation.slot import MenuSlot

logger = logging.getLogger(__name__)


class MenuRegistry:
    """Item specifications per named menu, in registration order."""

    def __init__(self) -> None:
        self._menus: dict[str, list[MenuItem]] = {}

    def create(self, name: str) -> None:
        """Start menu *name* from scratch, discarding items registered so far."""
        self._menus[name] = []

    def __contains__(self, name: object) -> bool:
        return name in self._menus

    def item(
        self,
        name: str,
        label: str,
        destination: str,
        *,
        position: int = 0,
        scope: str | None = None,
        active: ActiveMatch | str = ActiveMatch.INCLUSIVE,
    ) -> MenuItem:
        """Append an item to menu *name* and return it."""
        spec = MenuItem(
            label=label,
            destination=destination,
            position=position,
            scope=scope,
            active=ActiveMatch(active),
        )
        self.add(name, spec)
        return spec

    def add(self, name: str, spec: MenuItem) -> None:
        """Append an existing specification to menu *name*."""
        self._menus.setdefault(name, []).append(spec)

    def items(self, name: str) -> tuple[MenuItem, ...]:
        return tuple(self._menus.get(name, ()))

    def names(self) -> list[str]:
        return list(self._menus)


class MenuBuilder:
    """Builds position-ordered menu models.

    Delegates label translation and route resolution to the host; has no
    other state, so the same specifications always build the same model.
    """

    def __init__(self, resolver: NavigationResolver, translator: Translator) -> None:
        self._resolver = resolver
        self._translator = translator

    def build(self, items: Iterable[MenuItem], *, name: str = "menu") -> MenuModel:
        """Sort *items* by position (stable) and resolve them.

        Items whose destination cannot be resolved are dropped with a
        warning; the rest of the menu is still built.
        """
        entries: list[MenuEntry] = []
        for spec in sorted(items, key=attrgetter("position")):
            try:
                href = self._resolver.resolve(spec.destination)
            except ResolutionError as exc:
                logger.warning("Dropping menu item %r from %r: %s", spec.label, name, exc)
                continue
            entries.append(
                MenuEntry(
                    label=self._translator.translate(spec.label, spec.scope),
                    href=href,
                    position=spec.position,
                    active=spec.active,
                    destination=spec.destination,
                )
            )
        return MenuModel(name=name, entries=tuple(entries))

    def validate(self, items: Iterable[MenuItem], *, name: str = "menu") -> None:
        """Check every destination resolves.

        Raises:
            ConfigurationError: On the first unknown route name.
        """
        for spec in items:
            try:
                self._resolver.resolve(spec.destination)
            except ResolutionError as exc:
                msg = f"Menu {name!r} item {spec.label!r}: {exc}"
                raise ConfigurationError(msg) from exc


class MenuValidation:
    """PREPARE action: on the first cycle, every configured destination must resolve.

    It runs after the host has drawn its routes, so routes derived from
    extended classes (identity provider callbacks) count as known. Once a
    cycle has passed, later reloads leave unresolvable items to
    :class:`NavigationRefresh`, which drops them with a warning.

    Raises:
        ConfigurationError: On the first unknown route name.
    """

    def __init__(self, menus: MenuRegistry, builder: MenuBuilder) -> None:
        self._menus = menus
        self._builder = builder
        self._validated = False

    def __call__(self) -> None:
        if self._validated:
            return
        for name in self._menus.names():
            self._builder.validate(self._menus.items(name), name=name)
        self._validated = True


class NavigationRefresh:
    """PREPARE action: rebuild every registered menu and publish them at once."""

    def __init__(self, menus: MenuRegistry, builder: MenuBuilder, slot: MenuSlot) -> None:
        self._menus = menus
        self._builder = builder
        self._slot = slot

    def __call__(self) -> None:
        built = {
            name: self._builder.build(self._menus.items(name), name=name)
            for name in self._menus.names()
        }
        self._slot.publish(built)
