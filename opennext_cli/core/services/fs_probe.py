"""
Filesystem probe — existence and read checks for named project files.

Every reader here folds "absent" and "unreadable" into the same ``None``
result. Callers never need to tell the two apart.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def exists(path: Path) -> bool:
    """Return True if *path* exists. Permission errors count as absent."""
    try:
        return path.exists()
    except OSError:
        return False


def read_text(path: Path) -> str | None:
    """Read a UTF-8 text file, or None if it is missing or unreadable."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        if not isinstance(e, FileNotFoundError):
            logger.debug("Cannot read %s: %s", path, e)
        return None


def read_json(path: Path) -> dict[str, Any] | None:
    """Read a JSON object file.

    Returns None when the file is missing, unreadable, not valid JSON,
    or holds something other than an object.
    """
    raw = read_text(path)
    if raw is None:
        return None
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.debug("Invalid JSON in %s: %s", path, e)
        return None
    return data if isinstance(data, dict) else None


def list_subdirs(path: Path) -> list[Path]:
    """Immediate subdirectories of *path*, sorted by name.

    Missing or unlistable directories yield an empty list.
    """
    try:
        return sorted((p for p in path.iterdir() if p.is_dir()), key=lambda p: p.name)
    except OSError as e:
        logger.debug("Cannot list %s: %s", path, e)
        return []
