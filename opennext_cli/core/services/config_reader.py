"""
Config reader — shallow extraction from wrangler.toml and open-next.config.ts.

These files are read as plain text and searched with regular expressions.
There is no TOML or TypeScript parsing: structure the patterns do not
recognise is simply invisible.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

from opennext_cli.core.models.snapshot import ConfigSnapshot
from opennext_cli.core.services import fs_probe

logger = logging.getLogger(__name__)

WRANGLER_TOML = "wrangler.toml"
OPENNEXT_CONFIG = "open-next.config.ts"
PACKAGE_JSON = "package.json"

DEFAULT_ENVIRONMENT = "production"

_NAME_RE = re.compile(r"""^name\s*=\s*["']([^"']+)["']""", re.MULTILINE)
_ACCOUNT_RE = re.compile(r"""^account_id\s*=\s*["']([^"']+)["']""", re.MULTILINE)
_STRATEGY_RE = re.compile(r"""cachingStrategy:\s*['"]([^'"]+)['"]""")
_CACHE_RE = re.compile(r"""cache:\s*['"]([^'"]+)['"]""")
_ENV_SECTION_RE = re.compile(r"\[env\.([^\]]+)\]")


# ── Readers ─────────────────────────────────────────────────────


def read_wrangler_toml(project_root: Path) -> str | None:
    return fs_probe.read_text(project_root / WRANGLER_TOML)


def read_opennext_config(project_root: Path) -> str | None:
    return fs_probe.read_text(project_root / OPENNEXT_CONFIG)


def read_package_json(project_root: Path) -> dict[str, Any] | None:
    return fs_probe.read_json(project_root / PACKAGE_JSON)


# ── Extractors ──────────────────────────────────────────────────


def extract_worker_name(toml_text: str) -> str | None:
    """First top-of-line ``name = "..."`` value."""
    match = _NAME_RE.search(toml_text)
    return match.group(1) if match else None


def extract_account_id(toml_text: str) -> str | None:
    """First top-of-line ``account_id = "..."`` value."""
    match = _ACCOUNT_RE.search(toml_text)
    return match.group(1) if match else None


def extract_caching_strategy(config_text: str) -> str | None:
    """``cachingStrategy: "..."``, falling back to ``cache: "..."``."""
    match = _STRATEGY_RE.search(config_text) or _CACHE_RE.search(config_text)
    return match.group(1) if match else None


def extract_environments(toml_text: str) -> list[str]:
    """Environment names: ``production`` first, then every ``[env.X]``.

    Sections are listed in file order without de-duplication, so an
    explicit ``[env.production]`` shows up a second time.
    """
    environments = [DEFAULT_ENVIRONMENT]
    environments.extend(m.group(1) for m in _ENV_SECTION_RE.finditer(toml_text) if m.group(1))
    return environments


# ── Aggregate ───────────────────────────────────────────────────


def snapshot_config(project_root: Path) -> ConfigSnapshot:
    """Build a ConfigSnapshot from the files under *project_root*.

    Never raises; missing files leave their fields absent.
    """
    wrangler = read_wrangler_toml(project_root)
    opennext = read_opennext_config(project_root)

    if wrangler is None:
        logger.debug("No readable %s in %s", WRANGLER_TOML, project_root)

    return ConfigSnapshot(
        identifier_name=extract_worker_name(wrangler) if wrangler else None,
        account_ref=extract_account_id(wrangler) if wrangler else None,
        strategy_name=extract_caching_strategy(opennext) if opennext else None,
        environment_names=extract_environments(wrangler or ""),
    )
