"""Tests for the command line interface."""

import json
import shutil

import pytest
from click.testing import CliRunner

from padline.cli import main

from tests.conftest import fixtures_dir


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def sample(tmp_path):
    path = tmp_path / "sample.js"
    shutil.copy(fixtures_dir / "sample.js", path)
    return path


class TestCheck:
    """Tests for the check command."""

    def test_reports_violations(self, runner, sample):
        result = runner.invoke(main, ["check", str(sample), "--ruleset", "recommended"])

        assert result.exit_code == 0
        assert "5 violation(s)" in result.output

    def test_no_rules_reports_nothing(self, runner, sample):
        result = runner.invoke(main, ["check", str(sample)])

        assert result.exit_code == 0
        assert "No padding violations" in result.output

    def test_strict_fails_on_violations(self, runner, sample):
        result = runner.invoke(main, ["check", str(sample), "--rule", "never:*:*", "--strict"])
        assert result.exit_code == 1

    def test_strict_passes_clean_file(self, runner, tmp_path):
        path = tmp_path / "clean.js"
        shutil.copy(fixtures_dir / "clean.js", path)

        result = runner.invoke(main, ["check", str(path), "--ruleset", "recommended", "--strict"])
        assert result.exit_code == 0

    def test_json_output(self, runner, sample):
        result = runner.invoke(
            main, ["check", str(sample), "--rule", "blankline:*:return", "--format", "json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["total_violations"] == 1
        assert data["files"][0]["violations"][0]["line"] == 7

    def test_sarif_output_file(self, runner, sample, tmp_path):
        output = tmp_path / "out.sarif"
        result = runner.invoke(
            main,
            ["check", str(sample), "--ruleset", "recommended", "--format", "sarif", "-o", str(output)],
        )

        assert result.exit_code == 0
        data = json.loads(output.read_text())
        assert len(data["runs"][0]["results"]) == 5

    def test_fix(self, runner, sample):
        result = runner.invoke(main, ["check", str(sample), "--ruleset", "recommended", "--fix"])

        assert result.exit_code == 0
        assert sample.read_text() == (fixtures_dir / "clean.js").read_text()

    def test_rules_file(self, runner, sample, tmp_path):
        rules_file = tmp_path / "rules.yml"
        rules_file.write_text("rulesets:\n  default:\n    rules:\n      - [blankline, '*', return]\n")

        result = runner.invoke(
            main, ["check", str(sample), "--rules-file", str(rules_file), "--format", "json"]
        )

        assert result.exit_code == 0
        assert json.loads(result.output)["total_violations"] == 1

    def test_invalid_rule(self, runner, sample):
        result = runner.invoke(main, ["check", str(sample), "--rule", "sometimes:*:*"])

        assert result.exit_code == 2
        assert "Configuration error" in result.output

    def test_malformed_extends(self, runner, sample, tmp_path):
        rules_file = tmp_path / "rules.yml"
        rules_file.write_text("rulesets:\n  default:\n    extends: [base]\n  base: {}\n")

        result = runner.invoke(main, ["check", str(sample), "--rules-file", str(rules_file)])

        assert result.exit_code == 2
        assert "Configuration error" in result.output

    def test_ignored_directory(self, runner, sample, tmp_path):
        result = runner.invoke(main, ["check", str(tmp_path), "--rule", "never:*:*", "--ignore", "*.js"])
        assert result.exit_code == 1


class TestListRuleset:
    def test_recommended(self, runner):
        result = runner.invoke(main, ["--list-ruleset", "recommended"])

        assert result.exit_code == 0
        assert "blankline:*:return" in result.output

    def test_none(self, runner):
        result = runner.invoke(main, ["--list-ruleset", "none"])

        assert result.exit_code == 0
        assert "No padding rules" in result.output


class TestClassify:
    def test_lists_statements(self, runner, sample):
        result = runner.invoke(main, ["classify", str(sample)])

        assert result.exit_code == 0
        assert "function_declaration" in result.output
        assert "return_statement" in result.output
        assert "directive" in result.output


def test_help_without_command(runner):
    result = runner.invoke(main, [])

    assert result.exit_code == 0
    assert "check" in result.output
