"""Tests for project scanning and bulk rescans."""

from datetime import datetime, timezone

import pytest

from harbinger._detection import create_default_registry
from harbinger.scanner import find_projects, is_project_dir, rescan_all, scan_project
from harbinger.store import ProjectRecord, ProjectStore
from harbinger.technology import Technology


@pytest.fixture
def registry(runner):
    return create_default_registry(runner)


class TestScanProject:
    def test_rails_app_with_assets(self, project_dir, registry):
        project_dir.write(".ruby-version", "3.3.0")
        project_dir.write("Gemfile.lock", "GEM\n  specs:\n    rails (7.1.0)\n    redis (5.0.8)\n")
        project_dir.write(".nvmrc", "20.11.0")

        report = scan_project(project_dir.path, registry)

        assert report.name == "project"
        assert report.ecosystem == Technology.RUBY
        assert report.components == {
            Technology.RUBY: "3.3.0",
            Technology.RAILS: "7.1.0",
            Technology.REDIS: "5.0.8 (redis gem)",
            Technology.NODEJS: "20.11.0",
        }

    def test_present_without_version_is_not_a_component(self, project_dir, registry):
        project_dir.write("Gemfile", 'gem "sinatra"\n')
        report = scan_project(project_dir.path, registry)
        assert report.results[Technology.RUBY].present
        assert Technology.RUBY not in report.components
        assert report.ecosystem is None

    def test_path_is_resolved(self, project_dir, registry, monkeypatch):
        monkeypatch.chdir(project_dir.path.parent)
        report = scan_project("project", registry)
        assert report.path == project_dir.path.resolve()

    def test_to_record(self, project_dir, registry):
        project_dir.write("go.mod", "module x\n\ngo 1.21\n")
        report = scan_project(project_dir.path, registry)

        record = report.to_record("api")

        assert record.name == "api"
        assert record.path == str(project_dir.path.resolve())
        assert record.components == {Technology.GO: "1.21"}
        assert record.last_scanned == report.scanned_at


class TestFindProjects:
    def test_finds_nested_projects(self, tmp_path):
        (tmp_path / "shop").mkdir()
        (tmp_path / "shop" / "Gemfile").write_text("")
        (tmp_path / "tools" / "cli").mkdir(parents=True)
        (tmp_path / "tools" / "cli" / "Cargo.toml").write_text("")
        (tmp_path / "notes").mkdir()

        assert find_projects(tmp_path) == [tmp_path / "shop", tmp_path / "tools" / "cli"]

    def test_skips_hidden_and_dependency_dirs(self, tmp_path):
        (tmp_path / "web").mkdir()
        (tmp_path / "web" / "package.json").write_text("{}")
        (tmp_path / "web" / "node_modules" / "left-pad").mkdir(parents=True)
        (tmp_path / "web" / "node_modules" / "left-pad" / "package.json").write_text("{}")
        (tmp_path / ".cache" / "app").mkdir(parents=True)
        (tmp_path / ".cache" / "app" / "go.mod").write_text("")

        assert find_projects(tmp_path) == [tmp_path / "web"]

    def test_compose_file_marks_a_project(self, tmp_path):
        (tmp_path / "docker-compose.yml").write_text("services: {}\n")
        assert is_project_dir(tmp_path)

    def test_missing_directory(self, tmp_path):
        assert not is_project_dir(tmp_path / "missing")


class TestRescanAll:
    def test_updates_and_removes(self, tmp_path, project_dir, registry):
        store = ProjectStore(tmp_path / "home")
        stale = datetime(2024, 1, 1, tzinfo=timezone.utc)
        project_dir.write(".python-version", "3.12.1")
        store.save(
            ProjectRecord("api", str(project_dir.path), {Technology.PYTHON: "3.10"}, last_scanned=stale)
        )
        store.save(ProjectRecord("gone", str(tmp_path / "deleted"), {Technology.RUBY: "2.7"}, last_scanned=stale))

        summary = rescan_all(store, registry)

        assert summary.updated == ["api"]
        assert summary.removed == ["gone"]
        updated = store.get("api")
        assert updated.version(Technology.PYTHON) == "3.12.1"
        assert updated.last_scanned > stale
        assert store.get("gone") is None

    def test_empty_store(self, tmp_path, registry):
        summary = rescan_all(ProjectStore(tmp_path / "home"), registry)
        assert summary.updated == []
        assert summary.removed == []
