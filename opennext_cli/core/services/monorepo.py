"""
Monorepo detection — walk upward looking for workspace tooling.

At each directory level the signals are checked in a fixed priority
order; the first match wins and ends the walk:

    1. pnpm-workspace.yaml                    → pnpm (patterns parsed)
    2. package.json with a workspaces field   → yarn if yarn.lock, else npm
    3. package.json plus lerna.json           → lerna
    4. package.json plus nx.json              → nx
    5. package.json plus turbo.json           → turborepo

Pure logic — no side effects, nothing cached.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from opennext_cli.core.models.monorepo import MonorepoDescriptor, MonorepoKind
from opennext_cli.core.services import fs_probe
from opennext_cli.core.services.workspace_parser import parse_workspace_manifest

logger = logging.getLogger(__name__)

PNPM_WORKSPACE_FILE = "pnpm-workspace.yaml"
PACKAGE_JSON = "package.json"
YARN_LOCK = "yarn.lock"

# Marker files consulted after package.json, in priority order.
_MARKER_FILES: tuple[tuple[str, MonorepoKind], ...] = (
    ("lerna.json", MonorepoKind.LERNA),
    ("nx.json", MonorepoKind.NX),
    ("turbo.json", MonorepoKind.TURBOREPO),
)


def _declared_workspaces(package_json: dict[str, Any]) -> list[str] | None:
    """Return the workspaces patterns, or None when the field is unset.

    Accepts both ``"workspaces": [...]`` and
    ``"workspaces": {"packages": [...]}``. Any other non-empty value still
    marks a workspace root, with no patterns.
    """
    workspaces = package_json.get("workspaces")
    if isinstance(workspaces, list):
        return [str(w) for w in workspaces]
    if isinstance(workspaces, dict):
        packages = workspaces.get("packages") or []
        return [str(p) for p in packages] if isinstance(packages, list) else []
    return [] if workspaces else None


def _detect_at(directory: Path) -> MonorepoDescriptor | None:
    """Check a single directory level. None means keep walking."""
    pnpm_manifest = directory / PNPM_WORKSPACE_FILE
    if fs_probe.exists(pnpm_manifest):
        text = fs_probe.read_text(pnpm_manifest) or ""
        return MonorepoDescriptor(
            is_monorepo=True,
            kind=MonorepoKind.PNPM,
            root_path=directory,
            workspace_patterns=parse_workspace_manifest(text),
        )

    package_json_path = directory / PACKAGE_JSON
    if not fs_probe.exists(package_json_path):
        return None

    package_json = fs_probe.read_json(package_json_path)
    if package_json is None:
        logger.debug("Skipping unparseable %s", package_json_path)
        return None

    workspaces = _declared_workspaces(package_json)
    if workspaces is not None:
        kind = MonorepoKind.YARN if fs_probe.exists(directory / YARN_LOCK) else MonorepoKind.NPM
        return MonorepoDescriptor(
            is_monorepo=True,
            kind=kind,
            root_path=directory,
            workspace_patterns=workspaces,
        )

    for marker, kind in _MARKER_FILES:
        if fs_probe.exists(directory / marker):
            return MonorepoDescriptor(is_monorepo=True, kind=kind, root_path=directory)

    return None


def detect_monorepo(start_dir: Path | None = None) -> MonorepoDescriptor:
    """Detect whether *start_dir* sits inside a monorepo.

    Walks from *start_dir* up to the filesystem root. Terminates when the
    parent of the current directory is the directory itself.

    Args:
        start_dir: Directory to start from (default: cwd).

    Returns:
        The first matching descriptor, or a negative one.
    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        found = _detect_at(current)
        if found is not None:
            logger.debug("Monorepo (%s) detected at %s", found.kind.value, current)
            return found
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return MonorepoDescriptor(is_monorepo=False)


def find_workspace_root(start_dir: Path | None = None) -> Path | None:
    """Return the monorepo root containing *start_dir*, if any."""
    return detect_monorepo(start_dir).root_path


def is_in_monorepo(start_dir: Path | None = None) -> bool:
    """Return True if *start_dir* is inside a monorepo."""
    return detect_monorepo(start_dir).is_monorepo
