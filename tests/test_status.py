"""
Tests for the status use case — aggregation, workers, environments.
"""

from pathlib import Path

from opennext_cli.core.use_cases.status import (
    find_worker,
    get_status,
    list_environments,
)


class TestGetStatus:
    def test_configured_project(self, opennext_project: Path):
        result = get_status(opennext_project)
        assert result.detection.is_nextjs is True
        assert result.opennext_configured is True
        assert result.config is not None
        assert result.config.identifier_name == "my-worker"
        assert result.dependencies == {
            "@opennextjs/cloudflare": "^1.0.0",
            "wrangler": "^3.80.0",
        }
        assert [w.name for w in result.workers] == ["my-worker"]

    def test_unconfigured_project(self, tmp_path: Path, write_package_json):
        write_package_json(tmp_path, dependencies={"next": "15.0.0"})
        result = get_status(tmp_path)
        assert result.opennext_configured is False
        assert result.config is None
        data = result.to_dict()
        assert data["opennext"] == {"configured": False}
        assert data["nextjs"]["version"] == "15.0.0"

    def test_workers_across_workspaces(self, tmp_path: Path, write_package_json):
        (tmp_path / "pnpm-workspace.yaml").write_text("packages:\n  - 'apps/*'\n")
        web = write_package_json(tmp_path / "apps" / "web", dependencies={"next": "15.0.0"})
        (web / "wrangler.toml").write_text('name = "web"\n')
        (web / "open-next.config.ts").write_text("export default {}\n")
        api = tmp_path / "apps" / "api"
        api.mkdir()
        (api / "wrangler.jsonc").write_text('{\n  // api worker\n  "name": "api"\n}\n')

        result = get_status(tmp_path)
        assert result.project_root == web.resolve()
        workers = {w.name: w for w in result.workers}
        assert set(workers) == {"web", "api"}
        assert workers["web"].is_opennext is True
        assert workers["api"].is_opennext is False


class TestFindWorker:
    def test_json_regex_fallback(self, tmp_path: Path):
        (tmp_path / "wrangler.json").write_text('{ "name": "broken", ')
        worker = find_worker(tmp_path)
        assert worker is not None
        assert worker.name == "broken"

    def test_toml_preferred(self, tmp_path: Path):
        (tmp_path / "wrangler.toml").write_text('name = "toml"\n')
        (tmp_path / "wrangler.json").write_text('{"name": "json"}')
        assert find_worker(tmp_path).name == "toml"

    def test_none(self, tmp_path: Path):
        assert find_worker(tmp_path) is None


class TestListEnvironments:
    def test_without_wrangler(self, tmp_path: Path):
        assert list_environments(tmp_path) == {
            "environments": ["production"],
            "default": "production",
        }

    def test_with_sections(self, tmp_path: Path, write_package_json):
        write_package_json(tmp_path, dependencies={"next": "15.0.0"})
        (tmp_path / "wrangler.toml").write_text(
            'name = "x"\n[env.production]\n[env.staging]\n[env.development]\n'
        )
        envs = list_environments(tmp_path)["environments"]
        assert envs == ["production", "production", "staging", "development"]
