"""Tests for the jilb-insight command-line interface."""

import json

import pytest
from typer.testing import CliRunner

from jilb_insight import __version__
from jilb_insight.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    for name in ("METRIC_VARIANT", "CASE_ARM_MARKER", "WEIGHT_PROFILE", "ELSE_OPENS_FRAME"):
        monkeypatch.delenv(f"JILB_{name}", raising=False)
    return tmp_path


class TestAnalyzeCommand:
    def test_json_output(self, control_flow_path):
        result = runner.invoke(app, ["analyze", str(control_flow_path), "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["absolute_complexity"] == 28.0
        assert data["max_nesting_depth"] == 7
        assert data["source"] == str(control_flow_path)

    def test_rich_output(self, control_flow_path):
        result = runner.invoke(app, ["analyze", str(control_flow_path)])
        assert result.exit_code == 0
        assert "Jilb metric" in result.stdout

    def test_variant_and_profile(self, control_flow_path):
        result = runner.invoke(
            app,
            [
                "analyze",
                str(control_flow_path),
                "--variant",
                "operator_ratio",
                "--profile",
                "legacy",
                "--format",
                "json",
            ],
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["variant"] == "operator_ratio"
        assert data["size_denominator"] == data["operator_total"]
        assert data["absolute_complexity"] == 41.5

    def test_config_file(self, control_flow_path, isolated):
        config = isolated / "custom.toml"
        config.write_text('metric_variant = "operator_ratio"\n')
        result = runner.invoke(
            app, ["analyze", str(control_flow_path), "--config", str(config), "--format", "json"]
        )
        assert result.exit_code == 0
        assert json.loads(result.stdout)["variant"] == "operator_ratio"

    def test_invalid_variant(self, control_flow_path):
        result = runner.invoke(app, ["analyze", str(control_flow_path), "--variant", "bogus"])
        assert result.exit_code == 1
        assert "Error" in result.stdout
        assert "metric_variant" in result.stdout

    def test_unknown_format(self, control_flow_path):
        result = runner.invoke(app, ["analyze", str(control_flow_path), "--format", "xml"])
        assert result.exit_code == 1
        assert "Unknown formatter" in result.stdout

    def test_missing_file(self, isolated):
        result = runner.invoke(app, ["analyze", str(isolated / "missing.fs")])
        assert result.exit_code != 0


class TestTokensCommand:
    def test_json(self, control_flow_path):
        result = runner.invoke(app, ["tokens", str(control_flow_path), "--json"])
        assert result.exit_code == 0
        tokens = json.loads(result.stdout)
        assert tokens[0] == {"text": "open", "kind": "identifier"}

    def test_table(self, control_flow_path):
        result = runner.invoke(app, ["tokens", str(control_flow_path)])
        assert result.exit_code == 0
        assert "identifier" in result.stdout


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_json_error_output(control_flow_path):
    result = runner.invoke(
        app, ["analyze", str(control_flow_path), "--variant", "bogus", "--format", "json"]
    )
    assert result.exit_code == 1
    data = json.loads(result.stdout)
    assert data["error"] == "InvalidConfigError"
    assert data["details"]["key"] == "metric_variant"
