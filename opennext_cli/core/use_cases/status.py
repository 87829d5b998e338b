"""
Status use case — aggregate what the CLI knows about the current project.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from opennext_cli.core.models.location import ProjectLocation
from opennext_cli.core.models.snapshot import ConfigSnapshot
from opennext_cli.core.services import fs_probe
from opennext_cli.core.services.config_reader import (
    DEFAULT_ENVIRONMENT,
    OPENNEXT_CONFIG,
    extract_environments,
    extract_worker_name,
    read_package_json,
    read_wrangler_toml,
    snapshot_config,
)
from opennext_cli.core.services.project_detector import (
    ADAPTER_DEPENDENCY,
    ProjectDetection,
    all_dependencies,
    detect_nextjs_project,
)
from opennext_cli.core.services.project_locator import (
    expand_workspace_patterns,
    locate_project,
)

logger = logging.getLogger(__name__)

WRANGLER_FILES = ("wrangler.toml", "wrangler.json", "wrangler.jsonc")

_LINE_COMMENT = re.compile(r"//.*$", re.MULTILINE)
_BLOCK_COMMENT = re.compile(r"/\*[\s\S]*?\*/")
_JSON_NAME = re.compile(r'"name"\s*:\s*"([^"]+)"')


@dataclass
class Worker:
    """A Cloudflare Worker found in the project or a workspace."""

    path: Path
    name: str | None = None
    is_opennext: bool = False

    def to_dict(self) -> dict:
        return {"path": str(self.path), "name": self.name, "is_opennext": self.is_opennext}


@dataclass
class StatusResult:
    """Aggregated project status."""

    location: ProjectLocation
    detection: ProjectDetection
    opennext_configured: bool = False
    config: ConfigSnapshot | None = None
    dependencies: dict[str, str] = field(default_factory=dict)
    workers: list[Worker] = field(default_factory=list)

    @property
    def project_root(self) -> Path:
        return self.location.resolved_root

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        result: dict = {
            "project_root": str(self.project_root),
            "nextjs": {
                "detected": self.detection.is_nextjs,
                "version": self.detection.nextjs_version,
            },
            "opennext": {"configured": self.opennext_configured},
            "dependencies": self.dependencies,
            "package_manager": self.detection.package_manager,
            "monorepo": self.location.monorepo.to_dict() if self.location.monorepo else None,
            "workers": [w.to_dict() for w in self.workers],
        }
        if self.config is not None:
            result["opennext"].update(
                {
                    "worker_name": self.config.identifier_name,
                    "account_id": self.config.account_ref,
                    "caching_strategy": self.config.strategy_name,
                    "environments": self.config.environment_names,
                }
            )
        return result


def _json_worker_name(text: str) -> str | None:
    stripped = _BLOCK_COMMENT.sub("", _LINE_COMMENT.sub("", text))
    try:
        data = json.loads(stripped)
    except json.JSONDecodeError:
        match = _JSON_NAME.search(text)
        return match.group(1) if match else None
    name = data.get("name") if isinstance(data, dict) else None
    return name if isinstance(name, str) else None


def find_worker(directory: Path) -> Worker | None:
    """Describe the Worker configured in *directory*, if any.

    The first wrangler config file found wins.
    """
    for filename in WRANGLER_FILES:
        text = fs_probe.read_text(directory / filename)
        if text is None:
            continue
        if filename.endswith(".toml"):
            name = extract_worker_name(text)
        else:
            name = _json_worker_name(text)
        return Worker(
            path=directory,
            name=name,
            is_opennext=fs_probe.exists(directory / OPENNEXT_CONFIG),
        )
    return None


def find_workers(location: ProjectLocation) -> list[Worker]:
    """All Workers in the monorepo's workspaces, or in the project itself."""
    monorepo = location.monorepo
    if monorepo is None or monorepo.root_path is None:
        worker = find_worker(location.resolved_root)
        return [worker] if worker else []

    workers = []
    for directory in expand_workspace_patterns(monorepo.root_path, monorepo.patterns):
        worker = find_worker(directory)
        if worker is not None:
            workers.append(worker)
    return workers


def get_status(start_dir: Path | None = None) -> StatusResult:
    """Get full project status.

    Args:
        start_dir: Where to start locating the project (default: cwd).

    Returns:
        StatusResult for the located project.
    """
    location = locate_project(start_dir)
    root = location.resolved_root
    detection = detect_nextjs_project(root)
    result = StatusResult(location=location, detection=detection)

    if detection.has_opennext and read_wrangler_toml(root) is not None:
        result.opennext_configured = True
        result.config = snapshot_config(root)

    package_json = read_package_json(root)
    if package_json is not None:
        deps = all_dependencies(package_json)
        for name in (ADAPTER_DEPENDENCY, "wrangler"):
            if name in deps:
                result.dependencies[name] = deps[name]

    result.workers = find_workers(location)
    logger.debug("Status for %s: %d worker(s)", root, len(result.workers))
    return result


def list_environments(start_dir: Path | None = None) -> dict:
    """Environments declared for the located project's Worker."""
    root = locate_project(start_dir).resolved_root
    toml_text = read_wrangler_toml(root)
    environments = extract_environments(toml_text) if toml_text else [DEFAULT_ENVIRONMENT]
    return {"environments": environments, "default": DEFAULT_ENVIRONMENT}
