"""Persistent store of tracked projects (``<config_dir>/config.yml``)."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .exceptions import ProjectStoreError
from .logging_config import logger
from .technology import Technology

CONFIG_FILE = "config.yml"


@dataclass
class ProjectRecord:
    """
    A tracked project and the versions found by its latest scan.

    Attributes:
        name: Unique key, usually the directory basename
        path: Absolute project path
        components: Detected versions keyed by technology
        last_scanned: Time of the scan that produced this record
    """

    name: str
    path: str
    components: Dict[Technology, str] = field(default_factory=dict)
    last_scanned: datetime = field(default_factory=lambda: datetime.now().astimezone())

    def version(self, technology: Technology) -> Optional[str]:
        return self.components.get(technology)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the stored mapping: path, last_scanned and one key per component."""
        data: Dict[str, Any] = {
            "path": self.path,
            "last_scanned": self.last_scanned.isoformat(timespec="seconds"),
        }
        for technology in Technology:
            if technology in self.components:
                data[technology.value] = self.components[technology]
        return data

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "ProjectRecord":
        """Deserialize a stored mapping. Keys that are not technologies are ignored."""
        components: Dict[Technology, str] = {}
        for technology in Technology:
            value = data.get(technology.value)
            if value not in (None, ""):
                components[technology] = str(value)

        last_scanned = data.get("last_scanned")
        if isinstance(last_scanned, datetime):
            scanned = last_scanned
        else:
            try:
                scanned = datetime.fromisoformat(str(last_scanned))
            except ValueError:
                scanned = datetime.fromtimestamp(0).astimezone()

        return cls(name=name, path=str(data.get("path", "")), components=components, last_scanned=scanned)


class ProjectStore:
    """
    YAML-backed store of tracked projects.

    A missing or malformed file reads as an empty store. Saving a project
    replaces its whole entry.
    """

    def __init__(self, config_dir: Path) -> None:
        self.config_dir = Path(config_dir)
        self.config_file = self.config_dir / CONFIG_FILE

    def _load(self) -> Dict[str, Any]:
        if not self.config_file.is_file():
            return {}
        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Could not read project store {self.config_file}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, Any]) -> None:
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise ProjectStoreError(f"Could not write project store {self.config_file}: {e}")

    def _projects(self, data: Dict[str, Any]) -> Dict[str, Any]:
        projects = data.get("projects")
        return projects if isinstance(projects, dict) else {}

    def list_all(self) -> List[ProjectRecord]:
        """All tracked projects, in stored order."""
        return [
            ProjectRecord.from_dict(str(name), entry)
            for name, entry in self._projects(self._load()).items()
            if isinstance(entry, dict)
        ]

    def get(self, name: str) -> Optional[ProjectRecord]:
        entry = self._projects(self._load()).get(name)
        return ProjectRecord.from_dict(name, entry) if isinstance(entry, dict) else None

    def save(self, record: ProjectRecord) -> None:
        """
        Save a project, replacing any existing entry of the same name.

        Raises:
            ProjectStoreError: If the store cannot be written
        """
        data = self._load()
        projects = self._projects(data)
        projects[record.name] = record.to_dict()
        data["projects"] = projects
        self._write(data)
        logger.debug(f"Saved project {record.name} ({len(record.components)} components)")

    def remove(self, name: str) -> bool:
        """
        Stop tracking a project.

        Returns:
            True if the project was tracked
        """
        data = self._load()
        projects = self._projects(data)
        if name not in projects:
            return False
        del projects[name]
        data["projects"] = projects
        self._write(data)
        return True

    def count(self) -> int:
        return len(self.list_all())
