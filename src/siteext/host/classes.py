"""Pristine host classes served by the reference host.

These stand in for the platform's own models, helpers and cells. The
reference host rebuilds fresh subclasses of them on every class reload,
so anything attached to a previous generation is gone.
"""

from __future__ import annotations

import re
from typing import Any


class User:
    """Platform user model."""

    @classmethod
    def omniauth_providers(cls) -> tuple[str, ...]:
        return ("facebook", "twitter", "google_oauth2")


class ControllerBase:
    """Base controller of the platform."""

    def after_sign_in_path(self, user: Any) -> str:
        return "/"


class CommentsHelper:
    def comment_form_options(self, commentable: Any) -> dict[str, Any]:
        return {"alignment": True, "add_comment": True}


class ProposalParser:
    """Finds proposal references in rich text."""

    _pattern = re.compile(r"/proposals/(\d+)")

    def proposal_ids(self, text: str) -> list[int]:
        return [int(match) for match in self._pattern.findall(text)]


class ViewBase:
    """Base class for rendered views."""


class NeedsTosAccepted:
    """Controller concern redirecting users who have not accepted the terms."""

    stored_location: str | None = None

    def store_tos_redirect(self, method: str, path: str) -> str | None:
        self.stored_location = path
        return path


class HighlightedAssembliesCell:
    """Content block listing highlighted assemblies."""

    def assemblies(self) -> list[dict[str, Any]]:
        return []


HOST_CLASSES: dict[str, type] = {
    "core.User": User,
    "controllers.Base": ControllerBase,
    "comments.CommentsHelper": CommentsHelper,
    "content_parsers.ProposalParser": ProposalParser,
    "views.Base": ViewBase,
    "core.NeedsTosAccepted": NeedsTosAccepted,
    "assemblies.HighlightedAssembliesCell": HighlightedAssembliesCell,
}

HOST_ROUTES: dict[str, str] = {
    "root": "/",
    "processes": "/processes",
    "assemblies": "/assemblies",
    "pages": "/pages",
    "search": "/search",
}

HOST_TRANSLATIONS: dict[str, str] = {
    "decidim.menu.home": "Home",
    "decidim.menu.processes": "Processes",
    "decidim.menu.assemblies": "Assemblies",
    "decidim.menu.more_information": "More information",
    "decidim.menu.search": "Search",
}
