"""
Configuration validator — run the OpenNext/Cloudflare check battery.

Checks run in a fixed order and each is independent: one failing never
stops the next from running. Missing core config or dependencies fail;
deploy-time conveniences (account id, scripts, CLI login) only warn.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Protocol

from opennext_cli.core.models.validation import CheckResult, ValidationReport
from opennext_cli.core.services.config_reader import (
    read_opennext_config,
    read_package_json,
    read_wrangler_toml,
)
from opennext_cli.core.services.project_detector import (
    ADAPTER_DEPENDENCY,
    all_dependencies,
    find_next_config,
    is_nextjs_project,
)
from opennext_cli.core.services.wrangler_cli import WranglerProbe

logger = logging.getLogger(__name__)

RECOMMENDED_SCRIPTS = ("preview", "deploy")

_HAS_NAME = re.compile(r"^name\s*=", re.MULTILINE)
_HAS_ACCOUNT = re.compile(r"^account_id\s*=", re.MULTILINE)
_HAS_DEFAULT_EXPORT = re.compile(r"export\s+default", re.MULTILINE)


class CliProbe(Protocol):
    def is_installed(self) -> bool: ...

    def is_authenticated(self) -> bool: ...


# ── Individual checks ───────────────────────────────────────────


def check_project_structure(project_root: Path) -> CheckResult:
    if not is_nextjs_project(project_root):
        return CheckResult.fail(
            "Next.js project",
            "Not a Next.js project",
            "Run this command from a Next.js project directory",
        )
    if find_next_config(project_root) is None:
        return CheckResult.warn(
            "Next.js config",
            "No next.config.* file found",
            "Next.js will use default configuration",
        )
    return CheckResult.ok("Next.js project structure", "Valid Next.js project structure")


def check_wrangler_toml(project_root: Path) -> list[CheckResult]:
    """Up to three results, escalating: exists → name → account_id."""
    text = read_wrangler_toml(project_root)
    if text is None:
        return [
            CheckResult.fail(
                "wrangler.toml exists",
                "wrangler.toml file not found",
                "Create wrangler.toml with the Worker name and account_id",
            )
        ]

    results = [CheckResult.ok("wrangler.toml exists", "wrangler.toml found")]

    if not _HAS_NAME.search(text):
        results.append(
            CheckResult.fail(
                "wrangler.toml name",
                'wrangler.toml missing required "name" field',
                'Add name = "your-worker-name" to wrangler.toml',
            )
        )
        return results
    results.append(CheckResult.ok("wrangler.toml name", "Worker name is set"))

    if not _HAS_ACCOUNT.search(text):
        results.append(
            CheckResult.warn(
                "wrangler.toml account_id",
                "wrangler.toml missing account_id (may be in environment-specific config)",
                'Add account_id = "your-account-id" to wrangler.toml or environment config',
            )
        )
    else:
        results.append(CheckResult.ok("wrangler.toml account_id", "Account id is set"))

    return results


def check_opennext_config(project_root: Path) -> CheckResult:
    text = read_opennext_config(project_root)
    if text is None:
        return CheckResult.fail(
            "open-next.config.ts exists",
            "open-next.config.ts file not found",
            "Create open-next.config.ts exporting defineCloudflareConfig()",
        )
    if not _HAS_DEFAULT_EXPORT.search(text):
        return CheckResult.fail(
            "open-next.config.ts export",
            "open-next.config.ts missing default export",
            "Ensure the config file exports a default configuration object",
        )
    return CheckResult.ok("open-next.config.ts syntax", "open-next.config.ts is valid")


def check_package_scripts(project_root: Path) -> CheckResult:
    package_json = read_package_json(project_root)
    if package_json is None:
        return CheckResult.fail(
            "package.json exists",
            "package.json not found",
            "Ensure you are in a valid Node.js project directory",
        )

    scripts = package_json.get("scripts")
    if not isinstance(scripts, dict):
        scripts = {}
    missing = [s for s in RECOMMENDED_SCRIPTS if not scripts.get(s)]
    if missing:
        return CheckResult.warn(
            "package.json scripts",
            f"Missing recommended scripts: {', '.join(missing)}",
            "Add scripts to package.json: "
            + ", ".join(f'"{s}": "opennextjs-cloudflare build && opennextjs-cloudflare {s}"' for s in missing),
        )
    return CheckResult.ok("package.json scripts", "Required scripts are present")


def check_dependencies(project_root: Path) -> CheckResult:
    package_json = read_package_json(project_root)
    if package_json is None:
        return CheckResult.fail(
            "required dependencies",
            "Cannot check dependencies - package.json not found",
            "Ensure you are in a valid Node.js project directory",
        )

    deps = all_dependencies(package_json)
    missing: list[str] = []
    install: list[str] = []
    if ADAPTER_DEPENDENCY not in deps:
        missing.append(ADAPTER_DEPENDENCY)
        install.append(ADAPTER_DEPENDENCY)
    if "wrangler" not in deps:
        missing.append("wrangler (dev dependency)")
        install.append("-D wrangler")

    if missing:
        return CheckResult.fail(
            "required dependencies",
            f"Missing dependencies: {', '.join(missing)}",
            f"Install missing dependencies: pnpm add {' '.join(install)}",
        )
    return CheckResult.ok("required dependencies", "All required dependencies are installed")


def check_cloudflare_cli(probe: CliProbe) -> CheckResult:
    if not probe.is_installed():
        return CheckResult.warn(
            "wrangler CLI",
            "wrangler CLI not found in PATH",
            "Install wrangler: pnpm add -D wrangler",
        )
    if not probe.is_authenticated():
        return CheckResult.warn(
            "Cloudflare authentication",
            "Not authenticated with Cloudflare",
            'Run "wrangler login" to authenticate',
        )
    return CheckResult.ok("Cloudflare authentication", "Authenticated with Cloudflare")


# ── Aggregate ───────────────────────────────────────────────────


def validate_configuration(
    project_root: Path,
    cli_probe: CliProbe | None = None,
) -> ValidationReport:
    """Run every check against *project_root*.

    Args:
        project_root: The located Next.js project directory.
        cli_probe: Wrangler probe (default: the real binary on PATH).

    Returns:
        ValidationReport, valid when no check failed.
    """
    probe = cli_probe or WranglerProbe()
    report = ValidationReport()

    report.checks.append(check_project_structure(project_root))
    report.checks.extend(check_wrangler_toml(project_root))
    report.checks.append(check_opennext_config(project_root))
    report.checks.append(check_package_scripts(project_root))
    report.checks.append(check_dependencies(project_root))
    report.checks.append(check_cloudflare_cli(probe))

    logger.info(
        "Validation of %s: %d error(s), %d warning(s)",
        project_root,
        len(report.errors),
        len(report.warnings),
    )
    return report
