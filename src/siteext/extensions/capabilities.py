"""Capabilities attached to host classes by the site layer.

Each capability is a mixin. Attaching it puts the mixin in front of the
host class in the MRO, so overrides call ``super()`` to reach the
platform's behavior.
"""

from __future__ import annotations

import logging
import re
from typing import Any, ClassVar
from urllib.parse import urlencode

from siteext.config.models import AuthConfig

logger = logging.getLogger(__name__)


class UserAuthentication:
    """Adds the site's identity providers to the user model.

    The host draws the provider routes from ``omniauth_providers()`` when
    routes load, so this must be attached before ``ROUTE_LOAD``.
    """

    site_providers: ClassVar[tuple[str, ...]] = ()

    @classmethod
    def omniauth_providers(cls) -> tuple[str, ...]:
        base = super().omniauth_providers()  # type: ignore[misc]
        return (*base, *(p for p in cls.site_providers if p not in base))


def user_authentication(config: AuthConfig) -> type[UserAuthentication]:
    """UserAuthentication configured with the providers enabled in *config*."""
    return type(
        "UserAuthentication",
        (UserAuthentication,),
        {"site_providers": config.providers, "__module__": __name__},
    )


class DeviseOverrides:
    """Records authentication actions on controllers, for debugging sign-in flows."""

    def debug_authentication(self, action: str, **details: Any) -> None:
        trail: list[tuple[str, dict[str, Any]]] = self.__dict__.setdefault("auth_trail", [])
        trail.append((action, details))
        logger.debug("Authentication action %s", action, extra={"details": details})


class CommentsHelperExtensions:
    """Closed proposals keep their comments but lose the alignment selector."""

    def comment_form_options(self, commentable: Any) -> dict[str, Any]:
        options = dict(super().comment_form_options(commentable))  # type: ignore[misc]
        if getattr(commentable, "closed", False):
            options["alignment"] = False
        return options


class ProposalParserExtensions:
    """Also recognizes the short ``~123`` proposal reference form."""

    _short_pattern = re.compile(r"(?<![\w/])~(\d+)\b")

    def proposal_ids(self, text: str) -> list[int]:
        ids = list(super().proposal_ids(text))  # type: ignore[misc]
        for match in self._short_pattern.findall(text):
            value = int(match)
            if value not in ids:
                ids.append(value)
        return ids


class MapHelper:
    """Static map image URLs for geolocated resources."""

    static_map_base: ClassVar[str] = "/static_map"

    def static_map_url(self, latitude: float, longitude: float, *, zoom: int = 15) -> str:
        query = urlencode({"lat": latitude, "lng": longitude, "zoom": zoom})
        return f"{self.static_map_base}?{query}"


class WidgetUrlsHelper:
    """Embeddable widget URLs for resources."""

    def embed_widget_url(self, resource_path: str) -> str:
        return f"{resource_path.rstrip('/')}/embed"


class TosRedirectFix:
    """Only remember the redirect location for GET requests.

    Redirecting back to a form submission after the terms have been
    accepted would replay the request as a GET on a POST-only route.
    """

    def store_tos_redirect(self, method: str, path: str) -> str | None:
        if method.upper() != "GET":
            return None
        return super().store_tos_redirect(method, path)  # type: ignore[misc]


class ApplicationHelper:
    """General helpers made available to the assemblies content block."""

    def present_title(self, title: str, *, limit: int = 80) -> str:
        title = " ".join(title.split())
        if len(title) <= limit:
            return title
        return title[: limit - 1].rstrip() + "…"


class SanitizeHelper:
    _tag_pattern = re.compile(r"<[^>]+>")

    def sanitize_text(self, text: str) -> str:
        return self._tag_pattern.sub("", text).strip()
