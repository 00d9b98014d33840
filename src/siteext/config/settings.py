"""SiteSettings: one frozen object for CLI flags, environment and siteext.toml.

Sources, strongest first: keyword arguments (the CLI flags), ``SITEEXT_*``
environment variables with ``__`` between nested keys, the discovered
``siteext.toml``, and the defaults in :mod:`siteext.config.models`.
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from siteext.config.discovery import find_config
from siteext.config.models import AuthConfig, ReloadConfig, SiteConfig, default_menus
from siteext.domain.menu import MenuConfig

# TOML file chosen by from_cli(), read while the settings object is built.
_active_toml: ContextVar[Path | None] = ContextVar("siteext_toml", default=None)


class SiteSettings(BaseSettings):
    """Frozen settings for the customization layer.

    Attributes:
        site_root: Directory holding ``siteext.toml`` (CWD when there is none).
        config_path: The TOML file that was read, if any.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="SITEEXT_",
        env_nested_delimiter="__",
    )

    site_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    site: SiteConfig = Field(default_factory=SiteConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    reload: ReloadConfig = Field(default_factory=ReloadConfig)
    menus: list[MenuConfig] = Field(default_factory=default_menus)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_source = TomlConfigSettingsSource(settings_cls, toml_file=_active_toml.get())
        return init_settings, env_settings, toml_source

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        site_root: Path | None = None,
        **flags: Any,
    ) -> SiteSettings:
        """Build settings for one CLI invocation.

        An explicit *config_path* wins over walk-up discovery from
        *site_root*; a path that does not exist means "no file".

        Raises:
            click.ClickException: If the TOML file cannot be parsed.
        """
        if config_path:
            candidate = Path(config_path)
            toml_path = candidate if candidate.is_file() else None
        else:
            toml_path = find_config(site_root)

        if site_root is None:
            site_root = toml_path.parent if toml_path else Path.cwd()

        token = _active_toml.set(toml_path)
        try:
            return cls(site_root=site_root, config_path=toml_path, **flags)
        except tomllib.TOMLDecodeError as exc:
            raise click.ClickException(f"Invalid TOML in {toml_path}: {exc}") from exc
        finally:
            _active_toml.reset(token)

    def menu(self, name: str) -> MenuConfig | None:
        """Configured menu called *name*, if any."""
        return next((menu for menu in self.menus if menu.name == name), None)
