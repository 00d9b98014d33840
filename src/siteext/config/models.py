"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, siteext.toml only contains
overrides. The default ``[[menus]]`` reproduces the site's main menu.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from siteext.domain.menu import ActiveMatch, MenuConfig, MenuItem

# --- siteext.toml sections ---


class SiteConfig(BaseModel):
    """[site] section."""

    model_config = {"frozen": True}

    use_mode: Literal["normal", "private"] = "normal"
    wrapper_class: str = "wrapper-default"
    color_profile: str = "black"
    feedback_email: str = "omastadi@hel.fi"
    auto_email_domain: str = "omastadi.hel.fi"


class AuthConfig(BaseModel):
    """[auth] section: site identity providers added to the user model."""

    model_config = {"frozen": True}

    tunnistamo_enabled: bool = True
    suomifi_enabled: bool = False
    mpassid_enabled: bool = False

    @property
    def providers(self) -> tuple[str, ...]:
        flags = (
            ("tunnistamo", self.tunnistamo_enabled),
            ("suomifi", self.suomifi_enabled),
            ("mpassid", self.mpassid_enabled),
        )
        return tuple(name for name, enabled in flags if enabled)


class ReloadConfig(BaseModel):
    """[reload] section."""

    model_config = {"frozen": True}

    enabled: bool = False


def default_menus() -> list[MenuConfig]:
    return [
        MenuConfig(
            name="menu",
            items=[
                MenuItem(
                    label="menu.home",
                    scope="decidim",
                    destination="root",
                    position=1,
                    active=ActiveMatch.EXACT,
                ),
                MenuItem(
                    label="menu.processes",
                    scope="decidim",
                    destination="processes",
                    position=2,
                    active=ActiveMatch.INCLUSIVE,
                ),
                MenuItem(
                    label="menu.more_information",
                    scope="decidim",
                    destination="pages",
                    position=3,
                    active=ActiveMatch.INCLUSIVE,
                ),
            ],
        )
    ]


class SiteExtConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    site: SiteConfig = Field(default_factory=SiteConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    reload: ReloadConfig = Field(default_factory=ReloadConfig)
    menus: list[MenuConfig] = Field(default_factory=default_menus)
