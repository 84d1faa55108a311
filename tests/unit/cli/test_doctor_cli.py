"""Tests for the `rigdoctor doctor` command."""

import json

import pytest
from click.testing import CliRunner

from rigdoctor.cli.main import cli
from rigdoctor.config.settings import SETTINGS_ENV
from tests._fixtures.git_repos import init_git_repo


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setenv(SETTINGS_ENV, str(tmp_path / "settings.json"))
    return tmp_path / "settings.json"


@pytest.fixture
def runner():
    return CliRunner()


def _doctor(runner, town, *args):
    return runner.invoke(cli, ["doctor", "--town-root", str(town), *args])


def test_no_rig_exits_nonzero(runner, tmp_path):
    result = _doctor(runner, tmp_path, "--json")

    assert result.exit_code == 1
    data = json.loads(result.stdout)
    assert data["results"][0]["message"] == "No rig specified"


def test_clean_rig_exits_zero(runner, tmp_path, rig_dir):
    result = _doctor(runner, tmp_path, "--rig", "testrig", "--json")

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["results"][0]["status"] == "ok"
    assert data["summary"] == {"ok": 1, "warning": 0, "error": 0}


def test_missing_config_reported(runner, tmp_path, rig_dir):
    init_git_repo(rig_dir / "crew" / "agent1")

    result = _doctor(runner, tmp_path, "--rig", "testrig", "--json")

    assert result.exit_code == 1
    data = json.loads(result.stdout)
    assert data["results"][0]["message"] == "1 repo(s) missing sparse checkout configuration"
    assert "crew/agent1" in data["results"][0]["details"][0]


def test_table_output(runner, tmp_path, rig_dir):
    init_git_repo(rig_dir / "mayor" / "rig")

    result = _doctor(runner, tmp_path, "--rig", "testrig")

    assert result.exit_code == 1
    assert "mayor/rig" in result.stdout
    assert "--fix" in result.stdout


def test_fix_then_confirm(runner, tmp_path, rig_dir):
    init_git_repo(rig_dir / "mayor" / "rig")
    init_git_repo(rig_dir / "polecats" / "pc1")

    result = _doctor(runner, tmp_path, "--rig", "testrig", "--fix", "--json")

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["fixes"][0]["check_name"] == "sparse-checkout"
    assert data["fixes"][0]["success"] is True
    assert data["report"]["summary"]["error"] == 0

    again = _doctor(runner, tmp_path, "--rig", "testrig", "--json")
    assert again.exit_code == 0


def test_fix_nothing_to_do(runner, tmp_path, rig_dir):
    result = _doctor(runner, tmp_path, "--rig", "testrig", "--fix", "--json")

    assert result.exit_code == 0
    assert json.loads(result.stdout)["fixes"] == []


def test_unknown_check(runner, tmp_path):
    result = _doctor(runner, tmp_path, "--rig", "testrig", "--check", "nope")

    assert result.exit_code == 2
    assert "nope" in result.output


def test_rig_from_settings(runner, tmp_path, rig_dir, isolated_settings):
    isolated_settings.write_text(json.dumps({"town_root": str(tmp_path), "default_rig": "testrig"}))
    init_git_repo(rig_dir / "crew" / "agent1")

    result = runner.invoke(cli, ["doctor", "--json"])

    assert result.exit_code == 1
    assert "crew/agent1" in json.loads(result.stdout)["results"][0]["details"][0]


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "rigdoctor" in result.output


def test_unknown_log_level_in_settings(runner, tmp_path, rig_dir, isolated_settings):
    isolated_settings.write_text(json.dumps({"log_level": "verbose"}))

    result = _doctor(runner, tmp_path, "--rig", "testrig", "--json")

    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert result.exit_code == 0
