"""Route resolution and active-state matching for menu items."""

from __future__ import annotations

from typing import TYPE_CHECKING

from siteext.domain.menu import ActiveMatch, MenuEntry, MenuItem
from siteext.errors import ResolutionError

if TYPE_CHECKING:
    from siteext.host.protocols import Router


class NavigationResolver:
    """Maps symbolic destinations to paths and decides which item is active."""

    def __init__(self, router: Router) -> None:
        self._router = router

    def resolve(self, destination: str) -> str:
        """Resolve a route name through the host router.

        Raises:
            ResolutionError: If the router does not know *destination*.
        """
        try:
            return self._router.resolve_path(destination)
        except KeyError as exc:
            raise ResolutionError(destination) from exc

    def current_path(self) -> str:
        return self._router.current_request_path()

    def is_active(self, item: MenuItem | MenuEntry, current_path: str | None = None) -> bool:
        """Whether *item* is active for *current_path* (default: current request).

        ``exact`` matches only the resolved path itself. ``inclusive`` also
        matches any path below it (``/processes/42`` for ``/processes``).

        Request handlers pass the published :class:`MenuEntry`, whose path
        was resolved when the menu was built. A :class:`MenuItem` is
        resolved on the spot; that form is for tooling and tests.

        Raises:
            ResolutionError: If a :class:`MenuItem` destination is unknown.
        """
        if current_path is None:
            current_path = self.current_path()
        if isinstance(item, MenuEntry):
            path = item.href
        else:
            path = self.resolve(item.destination)
        if current_path == path:
            return True
        if item.active is ActiveMatch.EXACT:
            return False
        return current_path.startswith(path + "/")
