"""
Shared test fixtures and configuration.
"""

import json
from pathlib import Path
from typing import Callable

import pytest


class StubProbe:
    """Stands in for WranglerProbe without touching PATH."""

    def __init__(self, installed: bool = True, authenticated: bool = True):
        self.installed = installed
        self.authenticated = authenticated

    def is_installed(self) -> bool:
        return self.installed

    def is_authenticated(self) -> bool:
        return self.authenticated


@pytest.fixture
def write_package_json() -> Callable[..., Path]:
    """Return a helper that writes <dir>/package.json and returns the dir."""

    def _write(
        directory: Path,
        dependencies: dict | None = None,
        dev_dependencies: dict | None = None,
        **extra,
    ) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        data: dict = {"name": directory.name}
        if dependencies is not None:
            data["dependencies"] = dependencies
        if dev_dependencies is not None:
            data["devDependencies"] = dev_dependencies
        data.update(extra)
        (directory / "package.json").write_text(json.dumps(data, indent=2))
        return directory

    return _write


@pytest.fixture
def probe_factory() -> Callable[..., StubProbe]:
    return StubProbe


@pytest.fixture
def isolated_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the global config dir at an empty temp directory."""
    home = tmp_path / "config-home"
    home.mkdir()
    monkeypatch.setenv("ONC_CONFIG_HOME", str(home))
    monkeypatch.delenv("ONC_LOG_LEVEL", raising=False)
    monkeypatch.delenv("ONC_LOG_FILE", raising=False)
    return home


@pytest.fixture
def opennext_project(tmp_path: Path, write_package_json) -> Path:
    """A fully configured Next.js + OpenNext project."""
    root = write_package_json(
        tmp_path / "app",
        dependencies={"next": "^15.0.0", "@opennextjs/cloudflare": "^1.0.0"},
        dev_dependencies={"wrangler": "^3.80.0"},
        scripts={"preview": "opennextjs-cloudflare preview", "deploy": "opennextjs-cloudflare deploy"},
    )
    (root / "next.config.ts").write_text("export default {};\n")
    (root / "wrangler.toml").write_text(
        'name = "my-worker"\naccount_id = "abc123"\nmain = ".open-next/worker.js"\n'
    )
    (root / "open-next.config.ts").write_text(
        "import { defineCloudflareConfig } from '@opennextjs/cloudflare';\n"
        "export default defineCloudflareConfig({ cachingStrategy: 'r2' });\n"
    )
    (root / "pnpm-lock.yaml").write_text("lockfileVersion: '9.0'\n")
    return root


@pytest.fixture
def clean_ancestry(tmp_path: Path) -> Path:
    """Skip when a directory above tmp_path is already a workspace root.

    Monorepo detection walks upward past tmp_path, so negative results
    only hold when the temp dir does not live inside a monorepo (e.g. a
    home directory that is itself a pnpm or npm workspace).
    """
    from opennext_cli.core.services.monorepo import detect_monorepo

    above = detect_monorepo(tmp_path.parent)
    if above.is_monorepo:
        pytest.skip(f"tmp_path sits inside a {above.kind.value} monorepo at {above.root_path}")
    return tmp_path
