"""
Doctor — broader health check around the validation battery.

Locates the project first (so it works from a monorepo root), then
looks at the toolchain, the project and its config. Problems are
reported with a remedy; nothing is installed or rewritten.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from opennext_cli.core.models.location import ProjectLocation
from opennext_cli.core.models.validation import CheckResult, CheckStatus
from opennext_cli.core.services.config_reader import (
    OPENNEXT_CONFIG,
    WRANGLER_TOML,
    read_package_json,
)
from opennext_cli.core.services import fs_probe
from opennext_cli.core.services.project_detector import (
    ADAPTER_DEPENDENCY,
    all_dependencies,
    detect_nextjs_project,
    detect_package_manager,
)
from opennext_cli.core.services.project_locator import locate_project
from opennext_cli.core.services.validator import CliProbe, validate_configuration
from opennext_cli.core.services.wrangler_cli import WranglerProbe

logger = logging.getLogger(__name__)

MIN_NODE_MAJOR = 18


@dataclass
class DoctorReport:
    """All health checks for one run."""

    location: ProjectLocation
    checks: list[CheckResult] = field(default_factory=list)

    @property
    def passing(self) -> list[CheckResult]:
        return [c for c in self.checks if c.status == CheckStatus.PASS]

    @property
    def warnings(self) -> list[CheckResult]:
        return [c for c in self.checks if c.status == CheckStatus.WARNING]

    @property
    def failures(self) -> list[CheckResult]:
        return [c for c in self.checks if c.status == CheckStatus.FAIL]

    @property
    def healthy(self) -> bool:
        return not self.failures

    def to_dict(self) -> dict:
        return {
            "project_root": str(self.location.resolved_root),
            "healthy": self.healthy,
            "summary": {
                "passing": len(self.passing),
                "warnings": len(self.warnings),
                "failures": len(self.failures),
            },
            "checks": [c.model_dump(mode="json") for c in self.checks],
        }


def node_version() -> str | None:
    """Installed Node.js version without the leading ``v``."""
    if shutil.which("node") is None:
        return None
    try:
        result = subprocess.run(
            ["node", "--version"],
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (subprocess.TimeoutExpired, OSError):
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip().lstrip("v")


def check_node(version: str | None) -> CheckResult:
    if version is None:
        return CheckResult.fail(
            "Node.js Version",
            "Node.js not found",
            f"Install Node.js {MIN_NODE_MAJOR} or higher",
        )
    try:
        major = int(version.split(".")[0])
    except ValueError:
        major = 0
    if major < MIN_NODE_MAJOR:
        return CheckResult.fail(
            "Node.js Version",
            f"Node.js v{version} (requires {MIN_NODE_MAJOR}+)",
            f"Upgrade Node.js to version {MIN_NODE_MAJOR} or higher",
        )
    return CheckResult.ok("Node.js Version", f"Node.js v{version}")


def run_doctor(
    start_dir: Path | None = None,
    cli_probe: CliProbe | None = None,
    node_probe: Callable[[], str | None] = node_version,
) -> DoctorReport:
    """Run all health checks.

    Args:
        start_dir: Where to start locating the project (default: cwd).
        cli_probe: Wrangler probe (default: the real binary on PATH).
        node_probe: Returns the installed Node.js version, or None.

    Returns:
        DoctorReport with checks in execution order.
    """
    probe = cli_probe or WranglerProbe()
    location = locate_project(start_dir)
    root = location.resolved_root
    report = DoctorReport(location=location)
    checks = report.checks

    checks.append(check_node(node_probe()))

    checks.append(
        CheckResult.ok("Package Manager", f"{detect_package_manager(root)} detected")
    )

    cli_installed = probe.is_installed()
    if cli_installed:
        checks.append(CheckResult.ok("Wrangler CLI", "Wrangler CLI installed"))
    else:
        checks.append(
            CheckResult.warn(
                "Wrangler CLI",
                "Wrangler CLI not found in PATH",
                "Install wrangler: pnpm add -D wrangler",
            )
        )

    detection = detect_nextjs_project(root)
    if detection.is_nextjs:
        checks.append(
            CheckResult.ok("Next.js Project", f"Next.js {detection.nextjs_version or 'detected'}")
        )
    else:
        checks.append(
            CheckResult.fail(
                "Next.js Project",
                "Not a Next.js project",
                "Run this command from a Next.js project directory",
            )
        )

    if detection.has_opennext:
        checks.append(CheckResult.ok("OpenNext.js", "OpenNext.js Cloudflare configured"))
    else:
        checks.append(
            CheckResult.fail(
                "OpenNext.js",
                "OpenNext.js Cloudflare not configured",
                f"Install the adapter: pnpm add {ADAPTER_DEPENDENCY}",
            )
        )

    package_json = read_package_json(root)
    if package_json is not None:
        deps = all_dependencies(package_json)
        if ADAPTER_DEPENDENCY not in deps:
            checks.append(
                CheckResult.fail(
                    "Dependencies",
                    f"{ADAPTER_DEPENDENCY} not installed",
                    f"Install: pnpm add {ADAPTER_DEPENDENCY}",
                )
            )
        if "wrangler" not in deps:
            checks.append(
                CheckResult.warn(
                    "Dependencies",
                    "wrangler not installed",
                    "Install: pnpm add -D wrangler",
                )
            )

    for filename in (WRANGLER_TOML, OPENNEXT_CONFIG):
        if fs_probe.exists(root / filename):
            checks.append(CheckResult.ok(f"Config: {filename}", "Found"))
        else:
            checks.append(
                CheckResult.fail(
                    f"Config: {filename}",
                    "Missing",
                    f"Create {filename} in {root}",
                )
            )

    if cli_installed and probe.is_authenticated():
        checks.append(CheckResult.ok("Cloudflare Auth", "Authenticated"))
    else:
        checks.append(
            CheckResult.warn(
                "Cloudflare Auth",
                "Not authenticated",
                'Run "wrangler login" to authenticate',
            )
        )

    if detection.has_opennext:
        validation = validate_configuration(root, cli_probe=probe)
        if not validation.overall_valid:
            checks.append(
                CheckResult.fail(
                    "Configuration",
                    f"{len(validation.errors)} error(s) found",
                    'Run "opennext-cli validate" for details',
                )
            )
        elif validation.warnings:
            checks.append(
                CheckResult.warn(
                    "Configuration",
                    f"{len(validation.warnings)} warning(s) found",
                    'Run "opennext-cli validate" for details',
                )
            )

    logger.info(
        "Doctor: %d passing, %d warning(s), %d failure(s)",
        len(report.passing),
        len(report.warnings),
        len(report.failures),
    )
    return report
