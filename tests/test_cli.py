"""Tests for the command line interface."""

import json
from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from screencompare.cli import cli
from screencompare.errors import BaselineMissing
from screencompare.models.config import CompareConfig
from screencompare.models.result import CaptureResult, ComparisonResult


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def config_file(tmp_path) -> str:
    path = tmp_path / "screen-compare.json"
    CompareConfig(
        baseline_folder=str(tmp_path / "baseline"),
        screenshot_path=str(tmp_path / "shots"),
    ).save(path)
    return str(path)


class TestInit:
    def test_creates_config(self, runner, tmp_path):
        path = tmp_path / "cfg.json"
        result = runner.invoke(cli, ["init", "--config", str(path), "--baseline-folder", "./base"])
        assert result.exit_code == 0
        data = json.loads(path.read_text())
        assert data["baseline_folder"] == "./base"
        assert data["screenshot_path"] == "./.tmp/screenshots"

    def test_does_not_overwrite_without_confirmation(self, runner, tmp_path):
        path = tmp_path / "cfg.json"
        path.write_text("{}")
        result = runner.invoke(cli, ["init", "--config", str(path)], input="n\n")
        assert result.exit_code == 0
        assert path.read_text() == "{}"


class TestSave:
    def test_missing_config(self, runner, tmp_path):
        result = runner.invoke(cli, ["save", "https://example.com", "home", "-c", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "Config file not found" in result.output

    def test_save_prints_path(self, runner, config_file):
        capture = CaptureResult(
            tag="home",
            file_name="home.png",
            actual_image="/shots/actual/home.png",
            screenshot_stable=False,
        )
        with patch("screencompare.cli._run", new=AsyncMock(return_value=capture)) as run:
            result = runner.invoke(cli, ["save", "https://example.com", "home", "-c", config_file])

        assert result.exit_code == 0
        assert "/shots/actual/home.png" in result.output
        assert "not stable" in result.output
        assert run.await_args.kwargs["check"] is False


class TestCheck:
    def test_check_prints_mismatch(self, runner, config_file):
        comparison = ComparisonResult(tag="home", mismatch_percentage=1.5)
        with patch("screencompare.cli._run", new=AsyncMock(return_value=comparison)) as run:
            result = runner.invoke(
                cli, ["check", "https://example.com", "home", "-s", "#main", "-c", config_file]
            )

        assert result.exit_code == 0
        assert "1.50%" in result.output
        assert run.await_args.args[3] == "#main"
        assert run.await_args.kwargs["check"] is True

    def test_fail_above(self, runner, config_file):
        comparison = ComparisonResult(tag="home", mismatch_percentage=1.5)
        with patch("screencompare.cli._run", new=AsyncMock(return_value=comparison)):
            result = runner.invoke(
                cli, ["check", "https://example.com", "home", "--fail-above", "1", "-c", config_file]
            )
        assert result.exit_code == 1

    def test_missing_baseline(self, runner, config_file):
        with patch("screencompare.cli._run", new=AsyncMock(side_effect=BaselineMissing("/b/home.png"))):
            result = runner.invoke(cli, ["check", "https://example.com", "home", "-c", config_file])
        assert result.exit_code == 1
        assert "auto_save_baseline" in result.output
