"""Menu item specifications and the immutable menu model.

``MenuItem`` is the unresolved specification (translation key, route
name). A build resolves each item into a ``MenuEntry`` and freezes the
result as a ``MenuModel``.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, Field


class ActiveMatch(StrEnum):
    """Policy deciding when a navigation item is highlighted."""

    EXACT = "exact"
    INCLUSIVE = "inclusive"


class MenuItem(BaseModel):
    """One navigation item before resolution.

    Attributes:
        label: Translation key of the visible text.
        scope: Translation scope (``"decidim"`` for ``decidim.menu.home``).
        destination: Symbolic route name resolved by the host router.
        position: Render order, ascending.
        active: ``exact`` for home-style links, ``inclusive`` for sections.
    """

    model_config = {"frozen": True}

    label: str
    destination: str
    position: int = 0
    scope: str | None = None
    active: ActiveMatch = ActiveMatch.INCLUSIVE


class MenuConfig(BaseModel):
    """A named menu and its item specifications."""

    model_config = {"frozen": True}

    name: str = "menu"
    items: list[MenuItem] = Field(default_factory=list)


@dataclass(frozen=True)
class MenuEntry:
    """A resolved menu item: translated label and concrete path."""

    label: str
    href: str
    position: int
    active: ActiveMatch
    destination: str


@dataclass(frozen=True)
class MenuModel:
    """Immutable, position-ordered result of one menu build."""

    name: str
    entries: tuple[MenuEntry, ...] = ()

    def __iter__(self) -> Iterator[MenuEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def labels(self) -> list[str]:
        return [entry.label for entry in self.entries]
