"""Tests for the menu command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from siteext.cli import cli

FOOTER_TOML = """\
[[menus]]
name = "menu"

[[menus.items]]
label = "menu.home"
scope = "decidim"
destination = "root"
position = 1
active = "exact"

[[menus]]
name = "footer"

[[menus.items]]
label = "menu.search"
scope = "decidim"
destination = "search"
"""


@pytest.mark.usefixtures("_isolated_site")
class TestMenuCommand:
    def test_default_menu(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["menu"])
        assert result.exit_code == 0
        assert "Home" in result.output
        assert "More information" in result.output

    def test_active_item_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "menu", "--path", "/processes/42"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        active = [item["label"] for item in data["data"]["items"] if item["active"]]
        assert active == ["Processes"]
        assert data["meta"]["cycles"] == 1

    def test_quiet_prints_hrefs(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "menu"])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["/", "/processes", "/pages"]

    def test_reloads(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "menu", "--reloads", "2"])
        assert result.exit_code == 0
        assert json.loads(result.output)["meta"] == {"cycles": 3, "version": 3}

    def test_negative_reloads_rejected(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["menu", "--reloads", "-1"])
        assert result.exit_code == 2

    def test_unknown_menu(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["menu", "--name", "footer"])
        assert result.exit_code == 1
        assert "No menu named 'footer'" in result.output

    def test_configured_footer(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "siteext.toml").write_text(FOOTER_TOML)
        args = ["--json", "menu", "--name", "footer", "--path", "/search"]
        result = cli_runner.invoke(cli, args)
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["data"]["items"] == [{"label": "Search", "href": "/search", "active": True}]
