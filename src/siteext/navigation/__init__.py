"""Navigation: ordered menu composition and active-state resolution."""

from siteext.navigation.builder import MenuBuilder, MenuRegistry, NavigationRefresh
from siteext.navigation.resolver import NavigationResolver
from siteext.navigation.slot import MenuSlot

__all__ = [
    "MenuBuilder",
    "MenuRegistry",
    "MenuSlot",
    "NavigationRefresh",
    "NavigationResolver",
]
