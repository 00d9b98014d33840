"""Shared pytest fixtures and test helpers for siteext tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from siteext.config.settings import SiteSettings
from siteext.errors import AttachmentError
from siteext.extensions.bootstrap import SiteExtensions, bootstrap
from siteext.host.platform import HostPlatform, default_host


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's SITEEXT_* environment out of the tests."""
    monkeypatch.delenv("SITEEXT_CONFIG", raising=False)
    monkeypatch.delenv("SITEEXT_RELOAD__ENABLED", raising=False)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo handler and level changes made by CLI invocations."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    site_level = logging.getLogger("siteext").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("siteext").setLevel(site_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> SiteSettings:
    """Default settings rooted in an empty temp directory."""
    return SiteSettings.from_cli(site_root=tmp_path)


@pytest.fixture
def host() -> HostPlatform:
    """Reference host without hot reload."""
    return default_host()


@pytest.fixture
def reloading_host() -> HostPlatform:
    """Reference host in development mode (fires CLASS_UNLOAD)."""
    return default_host(reloading=True)


@pytest.fixture
def site(host: HostPlatform, settings: SiteSettings) -> SiteExtensions:
    """Site extensions bootstrapped (not yet booted) on the reference host."""
    return bootstrap(host, settings)


@pytest.fixture
def _isolated_site(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to an empty temp dir so no siteext.toml is discovered.

    Use via ``@pytest.mark.usefixtures("_isolated_site")`` on command test classes.
    """
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


class RecordingAttacher:
    """ClassAttacher double recording every attach call."""

    def __init__(self, *, fail_on: str | None = None) -> None:
        self.calls: list[tuple[str, type]] = []
        self._fail_on = fail_on

    def attach(self, target: str, capability: type) -> None:
        if target == self._fail_on:
            raise AttachmentError(target, capability.__name__, "target is not loaded")
        self.calls.append((target, capability))

    def has_target(self, target: str) -> bool:
        return target != self._fail_on


def write_toml(root: Path, content: str) -> Path:
    """Write ``siteext.toml`` under *root* and return its path."""
    path = root / "siteext.toml"
    path.write_text(content, encoding="utf-8")
    return path
