"""Tests for the CLI."""

import json
import os
import pytest
from click.testing import CliRunner

from ghacheck.cli import cli, EXIT_OK, EXIT_ERROR


FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures/.github/workflows")
INSECURE_FIXTURE = os.path.join(FIXTURES_DIR, "insecure-example.yml")
SECURE_FIXTURE = os.path.join(FIXTURES_DIR, "secure-example.yml")


@pytest.fixture
def runner(tmp_path, monkeypatch):
    # Run from an empty directory so a stray checks.yaml is never picked up
    monkeypatch.chdir(tmp_path)
    return CliRunner()


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_exit_0_on_findings(self, runner):
        result = runner.invoke(cli, [INSECURE_FIXTURE])
        assert result.exit_code == EXIT_OK
        assert "No issues found" not in result.output

    def test_exit_0_on_clean(self, runner):
        result = runner.invoke(cli, [SECURE_FIXTURE])
        assert result.exit_code == EXIT_OK
        assert "No issues found!" in result.output

    def test_exit_1_on_bad_path(self, runner):
        result = runner.invoke(cli, ["/nonexistent/path.yml"])
        assert result.exit_code == EXIT_ERROR
        assert "Error parsing workflow" in result.output

    def test_exit_1_on_invalid_yaml(self, runner, tmp_path):
        bad_file = tmp_path / "bad.yml"
        bad_file.write_text("just a string")
        result = runner.invoke(cli, [str(bad_file)])
        assert result.exit_code == EXIT_ERROR
        assert "Error" in result.output

    def test_exit_1_on_missing_checks(self, runner, tmp_path):
        result = runner.invoke(cli, [SECURE_FIXTURE, "--checks", str(tmp_path / "missing.yaml")])
        assert result.exit_code == EXIT_ERROR
        assert "Error loading checks config" in result.output

    def test_exit_1_on_invalid_checks(self, runner, tmp_path):
        (tmp_path / "checks.yaml").write_text("checks: nope\n")
        result = runner.invoke(cli, [SECURE_FIXTURE])
        assert result.exit_code == EXIT_ERROR
        assert "Error loading checks config" in result.output

    def test_missing_argument(self, runner):
        result = runner.invoke(cli, [])
        assert result.exit_code != EXIT_OK


# ---------------------------------------------------------------------------
# Output formats
# ---------------------------------------------------------------------------

class TestOutputFormats:
    def test_table_output(self, runner):
        result = runner.invoke(cli, [INSECURE_FIXTURE])
        assert "Job" in result.output
        assert "Message" in result.output
        assert "Detail" in result.output
        assert "deploy" in result.output

    def test_json_output(self, runner):
        result = runner.invoke(cli, [INSECURE_FIXTURE, "--format", "json"])
        parsed = json.loads(result.output)
        assert parsed["total"] == 12
        assert parsed["findings"][0]["scope"] == "workflow"

    def test_json_output_clean(self, runner):
        result = runner.invoke(cli, [SECURE_FIXTURE, "--format", "json"])
        assert json.loads(result.output) == {"total": 0, "findings": []}

    def test_sarif_output(self, runner):
        result = runner.invoke(cli, [INSECURE_FIXTURE, "--format", "sarif"])
        parsed = json.loads(result.output)
        assert len(parsed["runs"][0]["results"]) == 12


# ---------------------------------------------------------------------------
# Rule catalog integration
# ---------------------------------------------------------------------------

class TestCatalogIntegration:
    def test_disabled_rule_from_cwd_catalog(self, runner, tmp_path):
        (tmp_path / "checks.yaml").write_text(
            "checks:\n"
            "  - id: action_ref\n"
            "    message: 'Non-commit hash reference: %s'\n"
            "    detail: pin it\n"
            "  - id: timeout\n"
            "    message: No timeout specified\n"
            "    detail: set one\n"
            "    enabled: false\n"
        )
        result = runner.invoke(cli, [INSECURE_FIXTURE, "--format", "json"])
        parsed = json.loads(result.output)
        assert {f["rule_id"] for f in parsed["findings"]} == {"action_ref"}
        assert parsed["total"] == 3

    def test_all_rules_disabled_reports_no_issues(self, runner, tmp_path):
        cfg = tmp_path / "none.yaml"
        cfg.write_text("checks: []\n")
        result = runner.invoke(cli, [INSECURE_FIXTURE, "--checks", str(cfg)])
        assert result.exit_code == EXIT_OK
        assert "No issues found!" in result.output

    def test_message_placeholder_filled(self, runner):
        result = runner.invoke(cli, [INSECURE_FIXTURE, "--format", "json"])
        messages = [f["message"] for f in json.loads(result.output)["findings"]]
        assert "Non-commit hash reference: some-org/deploy-action@main" in messages
        assert "Non-specific runner version: ubuntu-latest" in messages


# ---------------------------------------------------------------------------
# Verbose flag
# ---------------------------------------------------------------------------

class TestVerbose:
    def test_verbose_flag_accepted(self, runner):
        result = runner.invoke(cli, ["-v", SECURE_FIXTURE])
        assert result.exit_code == EXIT_OK
