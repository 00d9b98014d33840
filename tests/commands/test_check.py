"""Tests for the check command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from siteext.cli import cli


@pytest.mark.usefixtures("_isolated_site")
class TestCheckCommand:
    def test_passes_on_reference_host(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["check"])
        assert result.exit_code == 0
        assert "OK" in result.output
        assert "core.User: UserAuthentication" in result.output

    def test_json_counts(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "check", "--reloads", "3"])
        assert result.exit_code == 0
        data = json.loads(result.output)["data"]
        assert data["cycles"] == 4
        assert data["bindings"] == 12
        assert data["stages_fired"].count("prepare") == 4

    def test_reload_enabled_from_env(
        self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SITEEXT_RELOAD__ENABLED", "true")
        result = cli_runner.invoke(cli, ["--json", "check"])
        assert result.exit_code == 0
        assert "class_unload" in json.loads(result.output)["data"]["stages_fired"]

    def test_verbose_lists_stages(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", "check", "--reloads", "0"])
        assert result.exit_code == 0
        assert "model_load → route_load → prepare" in result.output

    def test_invalid_menu_route_fails(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "broken.toml"
        config.write_text(
            '[[menus]]\nname = "menu"\n\n[[menus.items]]\nlabel = "x"\ndestination = "calendar"\n'
        )
        result = cli_runner.invoke(cli, ["-c", str(config), "check"])
        assert result.exit_code == 1
        assert "calendar" in result.output

    def test_verbose_shows_site_section(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", "check"])
        assert result.exit_code == 0
        assert "use_mode: normal" in result.output
