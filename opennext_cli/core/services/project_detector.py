"""
Project detection — is a directory a Next.js project, and how is it set up?

A directory is a Next.js project when its package.json declares ``next``
in ``dependencies`` or ``devDependencies``. Config files and app/pages
directories are reported but never required.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from opennext_cli.core.services import fs_probe

logger = logging.getLogger(__name__)

TARGET_DEPENDENCY = "next"
ADAPTER_DEPENDENCY = "@opennextjs/cloudflare"

NEXT_CONFIG_FILES = ("next.config.js", "next.config.mjs", "next.config.ts")

# Lockfile → package manager, in priority order.
_LOCKFILES = (
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
    ("package-lock.json", "npm"),
)


@dataclass
class ProjectDetection:
    """What a single directory looks like."""

    is_nextjs: bool = False
    nextjs_version: str | None = None
    has_opennext: bool = False
    package_manager: str | None = None
    has_next_config: bool = False
    has_app_dir: bool = False
    has_pages_dir: bool = False

    def to_dict(self) -> dict:
        return {
            "is_nextjs": self.is_nextjs,
            "nextjs_version": self.nextjs_version,
            "has_opennext": self.has_opennext,
            "package_manager": self.package_manager,
            "has_next_config": self.has_next_config,
            "has_app_dir": self.has_app_dir,
            "has_pages_dir": self.has_pages_dir,
        }


def all_dependencies(package_json: dict[str, Any]) -> dict[str, str]:
    """Merge dependencies and devDependencies (dev wins on conflict)."""
    merged: dict[str, str] = {}
    for key in ("dependencies", "devDependencies"):
        section = package_json.get(key)
        if isinstance(section, dict):
            merged.update({str(k): str(v) for k, v in section.items()})
    return merged


def _clean_version(spec: str) -> str:
    # "^15.0.0" → "15.0.0"
    return re.sub(r"[\^~]", "", spec, count=1)


def is_nextjs_project(directory: Path) -> bool:
    """Return True if *directory* declares Next.js as a dependency."""
    package_json = fs_probe.read_json(directory / "package.json")
    if package_json is None:
        return False
    return TARGET_DEPENDENCY in all_dependencies(package_json)


def find_next_config(directory: Path) -> Path | None:
    """Return the first next.config.* file found, or None."""
    for name in NEXT_CONFIG_FILES:
        path = directory / name
        if fs_probe.exists(path):
            return path
    return None


def lockfile_package_manager(directory: Path) -> str | None:
    """Package manager implied by a lockfile, or None without one."""
    for lockfile, manager in _LOCKFILES:
        if fs_probe.exists(directory / lockfile):
            return manager
    return None


def detect_package_manager(directory: Path) -> str:
    """Package manager for *directory*, defaulting to npm."""
    return lockfile_package_manager(directory) or "npm"


def get_nextjs_version(directory: Path) -> str | None:
    """Declared Next.js version with its range prefix stripped."""
    package_json = fs_probe.read_json(directory / "package.json")
    if package_json is None:
        return None
    spec = all_dependencies(package_json).get(TARGET_DEPENDENCY)
    return _clean_version(spec) if spec else None


def detect_nextjs_project(directory: Path) -> ProjectDetection:
    """Inspect *directory* and describe its Next.js / OpenNext setup."""
    result = ProjectDetection()

    package_json = fs_probe.read_json(directory / "package.json")
    if package_json is None:
        return result

    deps = all_dependencies(package_json)
    result.is_nextjs = TARGET_DEPENDENCY in deps
    next_spec = deps.get(TARGET_DEPENDENCY)
    if next_spec:
        result.nextjs_version = _clean_version(next_spec)
    result.has_opennext = ADAPTER_DEPENDENCY in deps
    result.package_manager = lockfile_package_manager(directory)
    result.has_next_config = find_next_config(directory) is not None
    result.has_app_dir = any(
        fs_probe.exists(directory / d) for d in ("app", "src/app")
    )
    result.has_pages_dir = any(
        fs_probe.exists(directory / d) for d in ("pages", "src/pages")
    )

    logger.debug("Detection for %s: %s", directory, result)
    return result
