"""Published menu models, swapped atomically once per PREPARE."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from siteext.domain.menu import MenuModel
    from siteext.navigation.resolver import NavigationResolver

logger = logging.getLogger(__name__)


class MenuSlot:
    """Holds the current set of menus.

    :meth:`publish` replaces the whole mapping with one reference
    assignment, so a reader sees either the previous complete set or
    the new one, never a mix.
    """

    def __init__(self) -> None:
        self._menus: Mapping[str, MenuModel] = MappingProxyType({})
        self.version = 0

    def publish(self, menus: Mapping[str, MenuModel]) -> None:
        snapshot = MappingProxyType(dict(menus))
        self._menus = snapshot
        self.version += 1
        logger.debug("Published %d menu(s), version %d", len(snapshot), self.version)

    @property
    def menus(self) -> Mapping[str, MenuModel]:
        return self._menus

    def get(self, name: str = "menu") -> MenuModel:
        """Current model for menu *name*.

        Raises:
            KeyError: If no menu named *name* has been published.
        """
        return self._menus[name]

    def render(
        self,
        resolver: NavigationResolver,
        name: str = "menu",
        current_path: str | None = None,
    ) -> list[dict[str, Any]]:
        """Produce ``{label, href, active}`` records for the templating layer."""
        model = self._menus[name]
        if current_path is None:
            current_path = resolver.current_path()
        return [
            {
                "label": entry.label,
                "href": entry.href,
                "active": resolver.is_active(entry, current_path),
            }
            for entry in model
        ]
