"""Locating and reading ``siteext.toml``.

The file is found the way git finds ``.git/``: look in the start
directory, then in each parent. ``SITEEXT_CONFIG`` names a file directly
and disables the walk.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from siteext.config.models import SiteExtConfig

CONFIG_FILENAME = "siteext.toml"
CONFIG_ENV_VAR = "SITEEXT_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Path of the nearest ``siteext.toml`` at or above *start* (default: CWD)."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> SiteExtConfig:
    """Validated configuration from *path*, or from the file found from *cwd*.

    Without a file every section keeps its defaults.
    """
    path = path or find_config(cwd)
    if path is None:
        return SiteExtConfig()
    with path.open("rb") as fh:
        return SiteExtConfig.model_validate(tomllib.load(fh))
