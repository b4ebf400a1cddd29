"""Tests for file, lockfile, manifest and database.yml readers."""

from harbinger._detection.sources.compose import (
    compose_declares_image,
    image_version,
    rails_from_dockerfile,
    ruby_from_dockerfile,
)
from harbinger._detection.sources.database_config import DatabaseConfig, load_database_config
from harbinger._detection.sources.files import any_exists, load_json, load_toml, read_stripped, table
from harbinger._detection.sources.gemfile import (
    gem_version,
    gemfile_declares_gem,
    lock_mentions_gem,
    ruby_from_gemfile,
    ruby_from_gemfile_lock,
)

GEMFILE_LOCK = """\
GEM
  remote: https://rubygems.org/
  specs:
    actionpack (7.1.0)
      rails-dom-testing (~> 2.2)
    hiredis (0.6.3)
    pg (1.5.4)
    rails (7.1.0)
      actionpack (= 7.1.0)
    redis-client (0.18.0)

PLATFORMS
  x86_64-linux

RUBY VERSION
   ruby 3.2.2p53

BUNDLED WITH
   2.4.10
"""


class TestFiles:
    def test_read_stripped(self, project_dir):
        project_dir.write(".ruby-version", "  3.3.0\n")
        assert read_stripped(project_dir.path / ".ruby-version") == "3.3.0"

    def test_read_stripped_empty_or_missing(self, project_dir):
        project_dir.write(".nvmrc", "\n")
        assert read_stripped(project_dir.path / ".nvmrc") is None
        assert read_stripped(project_dir.path / "missing") is None

    def test_load_toml_malformed(self, project_dir):
        project_dir.write("pyproject.toml", "[project\nname = ")
        assert load_toml(project_dir.path / "pyproject.toml") is None

    def test_load_toml_not_utf8(self, project_dir):
        target = project_dir.path / "pyproject.toml"
        target.write_bytes(b'[project]\nname = "caf\xe9"\n')
        assert load_toml(target) is None

    def test_table_walks_nested_tables(self):
        data = {"tool": {"poetry": {"dependencies": {"python": "^3.10"}}}}
        assert table(data, "tool", "poetry", "dependencies") == {"python": "^3.10"}

    def test_table_rejects_non_tables(self):
        assert table({"project": "x"}, "project") == {}
        assert table({"tool": "x"}, "tool", "poetry") == {}
        assert table({"tool": {"poetry": ["x"]}}, "tool", "poetry") == {}
        assert table(None, "project") == {}

    def test_load_json_malformed(self, project_dir):
        project_dir.write("package.json", "{not json")
        assert load_json(project_dir.path / "package.json") is None

    def test_any_exists(self, project_dir):
        project_dir.write("go.mod", "module x\n")
        assert any_exists(project_dir.path, ["go.work", "go.mod"])
        assert not any_exists(project_dir.path, ["Cargo.toml"])


class TestGemfile:
    def test_gem_version_top_level_spec(self):
        assert gem_version(GEMFILE_LOCK, "rails") == "7.1.0"
        assert gem_version(GEMFILE_LOCK, "pg") == "1.5.4"

    def test_gem_version_ignores_dependency_lines(self):
        assert gem_version(GEMFILE_LOCK, "rails-dom-testing") is None

    def test_gem_version_missing(self):
        assert gem_version(GEMFILE_LOCK, "mysql2") is None
        assert gem_version(None, "rails") is None

    def test_lock_mentions_gem_is_exact(self):
        assert lock_mentions_gem(GEMFILE_LOCK, "rails")
        assert lock_mentions_gem(GEMFILE_LOCK, "rails-dom-testing")
        # hiredis and redis-client are different gems
        assert not lock_mentions_gem(GEMFILE_LOCK, "redis")

    def test_gemfile_declares_gem(self):
        gemfile = 'source "https://rubygems.org"\ngem "rails", "~> 7.1"\n'
        assert gemfile_declares_gem(gemfile, "rails")
        assert not gemfile_declares_gem(gemfile, "pg")

    def test_ruby_from_gemfile(self, project_dir):
        project_dir.write("Gemfile", 'source "https://rubygems.org"\nruby "3.2.2"\ngem "rails"\n')
        assert ruby_from_gemfile(project_dir.path) == "3.2.2"

    def test_ruby_from_gemfile_single_quotes(self, project_dir):
        project_dir.write("Gemfile", "ruby '3.1.4'\n")
        assert ruby_from_gemfile(project_dir.path) == "3.1.4"

    def test_ruby_from_gemfile_lock(self, project_dir):
        project_dir.write("Gemfile.lock", GEMFILE_LOCK)
        assert ruby_from_gemfile_lock(project_dir.path) == "3.2.2p53"


class TestCompose:
    def test_image_version_with_suffix(self, project_dir):
        project_dir.write("docker-compose.yml", "services:\n  db:\n    image: postgres:16-alpine\n")
        assert image_version(project_dir.path, "postgres") == "16"

    def test_image_version_full(self, project_dir):
        project_dir.write("compose.yaml", "services:\n  db:\n    image: mysql:8.0.33\n")
        assert image_version(project_dir.path, "mysql") == "8.0.33"

    def test_image_with_registry_prefix(self, project_dir):
        project_dir.write("compose.yml", "services:\n  cache:\n    image: docker.io/library/redis:7.2-bookworm\n")
        assert image_version(project_dir.path, "redis") == "7.2"

    def test_image_name_must_match_exactly(self, project_dir):
        project_dir.write("docker-compose.yml", "services:\n  ui:\n    image: mongo-express:1.0.2\n")
        assert image_version(project_dir.path, "mongo") is None
        assert not compose_declares_image(project_dir.path, "mongo")

    def test_non_numeric_tag(self, project_dir):
        project_dir.write("docker-compose.yml", "services:\n  cache:\n    image: redis:latest\n")
        assert image_version(project_dir.path, "redis") is None
        assert compose_declares_image(project_dir.path, "redis")

    def test_untagged_image_is_declared(self, project_dir):
        project_dir.write("docker-compose.yml", "services:\n  cache:\n    image: redis\n")
        assert compose_declares_image(project_dir.path, "redis")

    def test_compose_file_precedence(self, project_dir):
        project_dir.write("docker-compose.yml", "services:\n  db:\n    image: postgres:15\n")
        project_dir.write("compose.yml", "services:\n  db:\n    image: postgres:16\n")
        assert image_version(project_dir.path, "postgres") == "15"

    def test_malformed_compose(self, project_dir):
        project_dir.write("docker-compose.yml", "services: [unclosed\n")
        assert image_version(project_dir.path, "postgres") is None

    def test_no_compose_file(self, project_dir):
        assert image_version(project_dir.path, "postgres") is None

    def test_dockerfile_ruby(self, project_dir):
        project_dir.write("Dockerfile", "ARG BASE=x\nFROM ruby:3.4.7-slim AS base\n")
        assert ruby_from_dockerfile(project_dir.path) == "3.4.7"

    def test_dockerfile_rails(self, project_dir):
        project_dir.write("Dockerfile", "FROM ruby:3.3\nARG RAILS_VERSION=7.0.8\n")
        assert rails_from_dockerfile(project_dir.path) == "7.0.8"


class TestDatabaseConfig:
    def test_production_section(self, project_dir):
        project_dir.write(
            "config/database.yml",
            "development:\n  adapter: sqlite3\nproduction:\n  adapter: postgresql\n  host: db.internal\n",
        )
        config = load_database_config(project_dir.path)
        assert config == DatabaseConfig(adapter="postgresql", host="db.internal")
        assert config.is_remote

    def test_default_section(self, project_dir):
        project_dir.write("config/database.yml", "default:\n  adapter: mysql2\ndevelopment:\n  adapter: sqlite3\n")
        assert load_database_config(project_dir.path).adapter == "mysql2"

    def test_first_section(self, project_dir):
        project_dir.write("config/database.yml", "development:\n  adapter: trilogy\n")
        assert load_database_config(project_dir.path).adapter == "trilogy"

    def test_multi_database_primary(self, project_dir):
        project_dir.write(
            "config/database.yml",
            "production:\n"
            "  primary:\n"
            "    adapter: postgresql\n"
            "    host: localhost\n"
            "  cache:\n"
            "    adapter: sqlite3\n",
        )
        config = load_database_config(project_dir.path)
        assert config.adapter == "postgresql"
        assert not config.is_remote

    def test_multi_database_without_primary(self, project_dir):
        project_dir.write(
            "config/database.yml",
            "production:\n  queue:\n    adapter: mysql2\n  cache:\n    adapter: sqlite3\n",
        )
        assert load_database_config(project_dir.path).adapter == "mysql2"

    def test_aliases_are_resolved(self, project_dir):
        project_dir.write(
            "config/database.yml",
            "default: &default\n  adapter: postgresql\n  host: localhost\nproduction:\n  <<: *default\n",
        )
        assert load_database_config(project_dir.path).adapter == "postgresql"

    def test_flat_file(self, project_dir):
        project_dir.write("config/database.yml", "adapter: postgresql\n")
        assert load_database_config(project_dir.path).adapter == "postgresql"

    def test_missing_or_malformed(self, project_dir):
        assert load_database_config(project_dir.path) is None
        project_dir.write("config/database.yml", "production: [\n")
        assert load_database_config(project_dir.path) is None

    def test_local_hosts(self):
        for host in (None, "", "localhost", "127.0.0.1", "::1", "0.0.0.0", "LOCALHOST"):
            assert not DatabaseConfig(adapter="postgresql", host=host).is_remote
        assert DatabaseConfig(adapter="postgresql", host="db.example.com").is_remote
