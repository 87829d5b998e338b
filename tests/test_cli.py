"""
Tests for CLI commands — global options and every command's output modes.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from opennext_cli.main import cli


@pytest.fixture(autouse=True)
def no_external_tools(isolated_config_home):
    """Neither node nor wrangler is on PATH for CLI tests."""
    with patch("opennext_cli.core.services.wrangler_cli.shutil.which", return_value=None):
        yield


def _invoke(*args: str):
    return CliRunner().invoke(cli, list(args))


class TestCLIGlobal:
    def test_help(self):
        result = _invoke("--help")
        assert result.exit_code == 0
        assert "OpenNext CLI" in result.output

    def test_version(self):
        result = _invoke("--version")
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_bad_config_exits(self, tmp_path: Path):
        (tmp_path / ".opennextjs-cli.json").write_text("- not a mapping\n")
        result = _invoke("--cwd", str(tmp_path), "locate")
        assert result.exit_code == 1
        assert "Expected a mapping" in result.output


class TestLocateCommand:
    def test_found(self, opennext_project: Path):
        result = _invoke("--cwd", str(opennext_project), "locate")
        assert result.exit_code == 0
        assert "Next.js project" in result.output

    def test_json_monorepo(self, tmp_path: Path, write_package_json):
        (tmp_path / "pnpm-workspace.yaml").write_text("packages:\n  - 'apps/*'\n")
        write_package_json(tmp_path / "apps" / "web", dependencies={"next": "15.0.0"})
        write_package_json(tmp_path / "apps" / "api", dependencies={"express": "4.0.0"})
        result = _invoke("--cwd", str(tmp_path), "locate", "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["target_found"] is True
        assert data["resolved_root"].endswith("web")
        assert len(data["searched_candidates"]) == 2

    def test_not_found(self, tmp_path: Path):
        result = _invoke("--cwd", str(tmp_path), "locate")
        assert result.exit_code == 0
        assert "No Next.js project found" in result.output


class TestMonorepoCommand:
    @pytest.mark.usefixtures("clean_ancestry")
    def test_not_monorepo(self, tmp_path: Path):
        result = _invoke("--cwd", str(tmp_path), "monorepo")
        assert "Not inside a monorepo" in result.output

    def test_json(self, tmp_path: Path, write_package_json):
        write_package_json(tmp_path, workspaces=["packages/*"])
        (tmp_path / "yarn.lock").write_text("")
        data = json.loads(_invoke("--cwd", str(tmp_path), "monorepo", "--json").output)
        assert data["kind"] == "yarn"
        assert data["workspace_patterns"] == ["packages/*"]


class TestStatusCommand:
    def test_configured(self, opennext_project: Path):
        result = _invoke("--cwd", str(opennext_project), "status")
        assert result.exit_code == 0
        assert "my-worker" in result.output
        assert "configured" in result.output

    def test_json(self, opennext_project: Path):
        result = _invoke("--cwd", str(opennext_project), "status", "--json")
        data = json.loads(result.output)
        assert data["opennext"]["worker_name"] == "my-worker"
        assert data["opennext"]["caching_strategy"] == "r2"
        assert data["package_manager"] == "pnpm"


class TestValidateCommand:
    def test_valid_with_cli_warning(self, opennext_project: Path):
        result = _invoke("--cwd", str(opennext_project), "validate")
        assert result.exit_code == 0
        assert "Configuration is valid" in result.output
        assert "wrangler CLI not found" in result.output

    def test_invalid_exits_1(self, tmp_path: Path):
        result = _invoke("--cwd", str(tmp_path), "validate")
        assert result.exit_code == 1
        assert "error(s)" in result.output

    def test_json(self, tmp_path: Path):
        result = _invoke("--cwd", str(tmp_path), "validate", "--json")
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["valid"] is False
        assert data["errors"] > 0


class TestDoctorCommand:
    def test_reports_issues(self, tmp_path: Path):
        result = _invoke("--cwd", str(tmp_path), "doctor")
        assert result.exit_code == 1
        assert "Issues" in result.output
        assert "Not a Next.js project" in result.output

    def test_json(self, opennext_project: Path):
        result = _invoke("--cwd", str(opennext_project), "doctor", "--json")
        data = json.loads(result.output)
        assert "checks" in data
        assert data["project_root"] == str(opennext_project.resolve())


class TestEnvCommand:
    def test_list(self, opennext_project: Path):
        (opennext_project / "wrangler.toml").write_text('name = "x"\n[env.staging]\n')
        result = _invoke("--cwd", str(opennext_project), "env", "list", "--json")
        assert json.loads(result.output)["environments"] == ["production", "staging"]

    def test_list_text(self, tmp_path: Path):
        result = _invoke("--cwd", str(tmp_path), "env", "list")
        assert "production (default)" in result.output

    def test_validate_warns_without_account_and_dev_vars(self, opennext_project: Path):
        (opennext_project / "wrangler.toml").write_text('name = "my-worker"\n')
        result = _invoke("--cwd", str(opennext_project), "env", "validate")
        assert result.exit_code == 0
        assert "Account ID not found in wrangler.toml" in result.output
        assert ".dev.vars file not found" in result.output

    def test_validate_passes(self, opennext_project: Path):
        (opennext_project / ".dev.vars").write_text("SECRET=1\n")
        result = _invoke("--cwd", str(opennext_project), "env", "validate", "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["valid"] is True
        assert data["warnings"] == 0
        assert [c["message"] for c in data["checks"]] == [
            "Account ID: abc123",
            ".dev.vars file exists",
        ]

    def test_validate_json_warnings(self, opennext_project: Path):
        result = _invoke("--cwd", str(opennext_project), "env", "validate", "--json")
        data = json.loads(result.output)
        assert [c["status"] for c in data["checks"]] == ["pass", "warning"]

    def test_validate_without_wrangler_toml(self, tmp_path: Path):
        result = _invoke("--cwd", str(tmp_path), "env", "validate")
        assert result.exit_code == 1
        assert "wrangler.toml not found" in result.output


class TestConfigCommand:
    def test_show_json(self, tmp_path: Path):
        (tmp_path / ".opennextjs-cli.json").write_text('{"defaultPackageManager": "pnpm"}')
        result = _invoke("--cwd", str(tmp_path), "config", "show", "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["defaultPackageManager"] == "pnpm"

    def test_show_text(self, tmp_path: Path):
        result = _invoke("--cwd", str(tmp_path), "config", "show")
        assert "Configuration" in result.output
