"""Reader for Rails ``config/database.yml``."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from harbinger.logging_config import logger

from .files import read_text

DATABASE_YML = Path("config") / "database.yml"

LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1", "::1", "0.0.0.0"})


@dataclass(frozen=True)
class DatabaseConfig:
    """Adapter and host of the database a project connects to."""

    adapter: Optional[str]
    host: Optional[str] = None

    @property
    def is_remote(self) -> bool:
        """
        True when the configured host points away from this machine.

        No host means a local Unix socket. A remote server's version cannot
        be learned from the local client binary, so shell probes are skipped.
        """
        if not self.host:
            return False
        return self.host.lower() not in LOCAL_HOSTS


def _environment_section(config: Dict[str, Any]) -> Optional[Any]:
    """Pick ``production``, else ``default``, else the first key."""
    if config.get("production"):
        return config["production"]
    if config.get("default"):
        return config["default"]
    return next(iter(config.values()), None)


def _connection_settings(section: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Find the mapping holding the adapter inside an environment section.

    Single database: the section itself. Multi-database: ``primary``, else
    the first nested mapping that declares an adapter.
    """
    if section.get("adapter"):
        return section
    primary = section.get("primary")
    if isinstance(primary, dict):
        return primary
    for value in section.values():
        if isinstance(value, dict) and value.get("adapter"):
            return value
    return None


def load_database_config(project_path: Path) -> Optional[DatabaseConfig]:
    """
    Resolve the adapter and host from ``config/database.yml``.

    A flat file with a top-level ``adapter`` key is accepted too.

    Args:
        project_path: Project directory

    Returns:
        DatabaseConfig, or None if the file is missing, malformed or has no adapter
    """
    content = read_text(project_path / DATABASE_YML)
    if content is None:
        return None

    try:
        config = yaml.safe_load(content)
    except yaml.YAMLError as e:
        logger.debug(f"Failed to parse database.yml: {e}")
        return None

    if not isinstance(config, dict) or not config:
        return None

    if config.get("adapter"):
        settings: Optional[Dict[str, Any]] = config
    else:
        section = _environment_section(config)
        if not isinstance(section, dict):
            return None
        settings = _connection_settings(section)

    if not settings or not settings.get("adapter"):
        return None

    host = settings.get("host")
    return DatabaseConfig(
        adapter=str(settings["adapter"]),
        host=str(host) if host is not None else None,
    )
