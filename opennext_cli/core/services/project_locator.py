"""
Project locator — find the Next.js project from wherever the CLI runs.

Resolution order:

    1. The start directory itself, if it declares Next.js.
    2. Otherwise, if it sits in a monorepo, each workspace directory in
       pattern order; the first Next.js project wins.
    3. Otherwise the monorepo root, or the start directory when there
       is no monorepo.
"""

from __future__ import annotations

import logging
from pathlib import Path

from opennext_cli.core.models.location import ProjectLocation
from opennext_cli.core.services import fs_probe
from opennext_cli.core.services.monorepo import detect_monorepo
from opennext_cli.core.services.project_detector import is_nextjs_project

logger = logging.getLogger(__name__)


def _pattern_candidates(root: Path, pattern: str) -> list[Path]:
    if "*" not in pattern:
        return [root / pattern]

    # "apps/*" → "apps"; only a trailing wildcard segment is understood
    base = pattern.replace("/*", "").replace("\\*", "").rstrip("*").rstrip("/")
    base_dir = root / base if base else root
    if not base_dir.is_dir():
        logger.debug("Workspace base %s does not exist, skipping", base_dir)
        return []
    return fs_probe.list_subdirs(base_dir)


def expand_workspace_patterns(root: Path, patterns: list[str]) -> list[Path]:
    """Expand workspace globs into concrete candidate directories.

    Wildcard patterns contribute every immediate subdirectory of their
    base path. Literal patterns contribute their resolved path as-is,
    whether or not it exists. A pattern that cannot be expanded
    contributes nothing.
    """
    candidates: list[Path] = []
    for pattern in patterns:
        try:
            candidates.extend(_pattern_candidates(root, pattern))
        except (OSError, ValueError) as e:
            logger.debug("Cannot expand workspace pattern %r: %s", pattern, e)
    return candidates


def locate_project(start_dir: Path | None = None) -> ProjectLocation:
    """Locate the Next.js project starting from *start_dir*.

    Args:
        start_dir: Directory to start from (default: cwd).

    Returns:
        ProjectLocation; ``resolved_root`` is always an existing directory.
    """
    start = (start_dir or Path.cwd()).resolve()

    if is_nextjs_project(start):
        return ProjectLocation(resolved_root=start, original_dir=start, target_found=True)

    monorepo = detect_monorepo(start)
    if not monorepo.is_monorepo or monorepo.root_path is None:
        logger.info("No Next.js project or monorepo found at %s", start)
        return ProjectLocation(resolved_root=start, original_dir=start)

    workspace_root = monorepo.root_path
    candidates = expand_workspace_patterns(workspace_root, monorepo.patterns)

    location = ProjectLocation(
        resolved_root=workspace_root,
        original_dir=start,
        is_monorepo=True,
        monorepo=monorepo,
        searched_candidates=candidates,
    )

    for candidate in candidates:
        if fs_probe.exists(candidate) and is_nextjs_project(candidate):
            logger.info("Next.js project found in workspace %s", candidate)
            location.resolved_root = candidate
            location.target_found = True
            return location

    logger.info(
        "No Next.js project among %d workspace(s); using monorepo root %s",
        len(candidates),
        workspace_root,
    )
    return location
