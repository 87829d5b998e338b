"""
Configuration loader — reads CLI preferences into a typed model.

Two files are merged, project over global:

    ~/.opennextjs-cli/config.json    (global; ONC_CONFIG_HOME overrides the dir)
    <project>/.opennextjs-cli.json   (project-specific)

Files are parsed with ``yaml.safe_load``; JSON is valid YAML, so a
hand-written YAML file works too.
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

GLOBAL_CONFIG_DIRNAME = ".opennextjs-cli"
GLOBAL_CONFIG_FILE = "config.json"
PROJECT_CONFIG_FILE = ".opennextjs-cli.json"


class ConfigError(Exception):
    """Raised when a CLI config file is unreadable or invalid."""


class CachingStrategy(str, Enum):
    STATIC_ASSETS = "static-assets"
    R2 = "r2"
    R2_DO_QUEUE = "r2-do-queue"
    R2_DO_QUEUE_TAG_CACHE = "r2-do-queue-tag-cache"


class ProjectDefaults(BaseModel):
    worker_name: str | None = Field(default=None, alias="workerName")
    account_id: str | None = Field(default=None, alias="accountId")

    model_config = {"populate_by_name": True}


class CliConfig(BaseModel):
    """User preferences for the CLI.

    Keys use the camelCase spelling of the config files; snake_case is
    accepted too.
    """

    default_package_manager: str | None = Field(default=None, alias="defaultPackageManager")
    default_caching_strategy: CachingStrategy | None = Field(
        default=None, alias="defaultCachingStrategy"
    )
    auto_backup: bool = Field(default=True, alias="autoBackup")
    confirm_destructive: bool = Field(default=True, alias="confirmDestructive")
    verbose: bool = False
    theme: str = "default"
    project_defaults: ProjectDefaults = Field(
        default_factory=ProjectDefaults, alias="projectDefaults"
    )

    model_config = {"populate_by_name": True, "extra": "ignore"}


def global_config_path() -> Path:
    """Path of the global config file."""
    home = os.environ.get("ONC_CONFIG_HOME")
    base = Path(home) if home else Path.home() / GLOBAL_CONFIG_DIRNAME
    return base / GLOBAL_CONFIG_FILE


def project_config_path(project_root: Path) -> Path:
    return project_root / PROJECT_CONFIG_FILE


def read_config_file(path: Path) -> dict[str, Any]:
    """Read one config file into a raw mapping.

    Returns ``{}`` when the file does not exist.

    Raises:
        ConfigError: If the file cannot be read or is not a mapping.
    """
    if not path.is_file():
        return {}

    logger.debug("Loading CLI config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid config in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {path}, got {type(data).__name__}")
    return data


def load_config(
    project_root: Path | None = None,
    global_path: Path | None = None,
    config_path: Path | None = None,
) -> CliConfig:
    """Load and merge global and project configuration.

    Args:
        project_root: Project whose ``.opennextjs-cli.json`` to apply.
        global_path: Explicit global config file (default: ~/.opennextjs-cli).
        config_path: Explicit file used in place of the project file.

    Returns:
        Validated CliConfig. Project keys replace global keys wholesale.

    Raises:
        ConfigError: If either file is invalid.
    """
    merged = dict(read_config_file(global_path or global_config_path()))
    if config_path is not None:
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")
        merged.update(read_config_file(config_path))
    elif project_root is not None:
        merged.update(read_config_file(project_config_path(project_root)))

    try:
        return CliConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid CLI configuration: {e}") from e
