"""Relational database detection for PostgreSQL and MySQL.

One DatabaseDetector drives detection for both databases. The parts that
differ (adapter names, shell probe, driver gem) come from a DatabaseAdapter.
"""

from pathlib import Path
from typing import FrozenSet, Optional

from harbinger.logging_config import logger
from harbinger.shell import CommandRunner
from harbinger.technology import Technology
from harbinger.versions import normalize_version

from ..protocol import DatabaseAdapter
from ..sources.database_config import DatabaseConfig, load_database_config
from ..sources.gemfile import gem_version, read_gemfile_lock
from ..sources.probes import probe_mysql, probe_postgres
from .base import BaseDetector


def gem_label(version: Optional[str], gem_name: str) -> Optional[str]:
    """Label a driver gem version so it is not mistaken for a server version."""
    return f"{version} ({gem_name} gem)" if version else None


class PostgresAdapter:
    """PostgreSQL: ``postgresql`` adapter, ``psql`` client, ``pg`` gem."""

    technology = Technology.POSTGRES
    adapter_names: FrozenSet[str] = frozenset({"postgresql"})

    def detect_from_shell(self, runner: CommandRunner) -> Optional[str]:
        return probe_postgres(runner)

    def detect_from_gem_lock(self, lock_content: Optional[str], config: DatabaseConfig) -> Optional[str]:
        return gem_label(gem_version(lock_content, "pg"), "pg")


class MysqlAdapter:
    """MySQL: ``mysql2`` or ``trilogy`` adapter, ``mysql``/``mysqld`` binaries."""

    technology = Technology.MYSQL
    adapter_names: FrozenSet[str] = frozenset({"mysql2", "trilogy"})

    def detect_from_shell(self, runner: CommandRunner) -> Optional[str]:
        return probe_mysql(runner)

    def detect_from_gem_lock(self, lock_content: Optional[str], config: DatabaseConfig) -> Optional[str]:
        gem_name = "trilogy" if config.adapter == "trilogy" else "mysql2"
        return gem_label(gem_version(lock_content, gem_name), gem_name)


class DatabaseDetector(BaseDetector):
    """
    Detects a relational database configured in ``config/database.yml``.

    Order:
    1. The database is in use only if database.yml declares one of the
       adapter's names.
    2. The local client binary, unless the configured host is remote.
    3. The driver gem version from Gemfile.lock, labelled with the gem name.
    """

    def __init__(self, adapter: DatabaseAdapter, runner: Optional[CommandRunner] = None) -> None:
        super().__init__(runner)
        self.adapter = adapter
        self.technology = adapter.technology

    def _config(self, project_path: Path) -> Optional[DatabaseConfig]:
        config = load_database_config(project_path)
        if config is None or config.adapter not in self.adapter.adapter_names:
            return None
        return config

    def is_present(self, project_path: Path) -> bool:
        return self._config(project_path) is not None

    def detect(self, project_path: Path) -> Optional[str]:
        config = self._config(project_path)
        if config is None:
            return None

        if config.is_remote:
            logger.debug(f"{self.name}: skipping shell probe for remote host {config.host}")
        else:
            version = normalize_version(self.adapter.detect_from_shell(self.runner))
            if version:
                logger.debug(f"{self.name}: found {version} from local client")
                return version

        return self.adapter.detect_from_gem_lock(read_gemfile_lock(project_path), config)
