"""
Validate use case — locate the project, then run the check battery.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from opennext_cli.core.models.location import ProjectLocation
from opennext_cli.core.models.validation import CheckResult, ValidationReport
from opennext_cli.core.services import fs_probe
from opennext_cli.core.services.config_reader import extract_account_id, read_wrangler_toml
from opennext_cli.core.services.project_locator import locate_project
from opennext_cli.core.services.validator import CliProbe, validate_configuration

DEV_VARS = ".dev.vars"


@dataclass
class ValidateResult:
    location: ProjectLocation
    report: ValidationReport

    @property
    def valid(self) -> bool:
        return self.report.overall_valid

    def to_dict(self) -> dict:
        return {"project_root": str(self.location.resolved_root), **self.report.to_dict()}


def run_validation(
    start_dir: Path | None = None,
    cli_probe: CliProbe | None = None,
) -> ValidateResult:
    """Validate the project found from *start_dir*."""
    location = locate_project(start_dir)
    report = validate_configuration(location.resolved_root, cli_probe=cli_probe)
    return ValidateResult(location=location, report=report)


def check_environment(project_root: Path) -> ValidationReport:
    """Check the Worker's account binding and local development variables.

    A missing wrangler.toml fails and ends the report; a missing
    ``account_id`` or ``.dev.vars`` only warns.
    """
    toml_text = read_wrangler_toml(project_root)
    if toml_text is None:
        return ValidationReport(checks=[
            CheckResult.fail(
                "wrangler.toml",
                "wrangler.toml not found",
                "Create wrangler.toml in the project root",
            )
        ])

    checks = []
    account_id = extract_account_id(toml_text)
    if account_id:
        checks.append(CheckResult.ok("Account ID", f"Account ID: {account_id}"))
    else:
        checks.append(
            CheckResult.warn(
                "Account ID",
                "Account ID not found in wrangler.toml",
                "Add account_id to wrangler.toml",
            )
        )

    if fs_probe.exists(project_root / DEV_VARS):
        checks.append(CheckResult.ok(DEV_VARS, ".dev.vars file exists"))
    else:
        checks.append(
            CheckResult.warn(
                DEV_VARS,
                ".dev.vars file not found",
                "Create .dev.vars for local development variables",
            )
        )
    return ValidationReport(checks=checks)


def run_env_validation(start_dir: Path | None = None) -> ValidateResult:
    """Check environment settings for the project found from *start_dir*."""
    location = locate_project(start_dir)
    return ValidateResult(location=location, report=check_environment(location.resolved_root))
