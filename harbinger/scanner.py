"""Project scanning: run every detector and record the results."""

import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from ._detection import DetectionResult, DetectorRegistry, create_default_registry
from ._detection.detectors.go import GO_MARKERS
from ._detection.detectors.node import NODE_MARKERS
from ._detection.detectors.python import PYTHON_MARKERS
from ._detection.detectors.ruby import RUBY_MARKERS
from ._detection.detectors.rust import RUST_MARKERS
from ._detection.sources.compose import COMPOSE_FILES
from .ecosystem import primary_ecosystem
from .logging_config import logger
from .store import ProjectRecord, ProjectStore
from .technology import Technology

# Files whose presence makes a directory a project for recursive scans
PROJECT_MARKERS = frozenset(
    name
    for name in RUBY_MARKERS + PYTHON_MARKERS + NODE_MARKERS + RUST_MARKERS + GO_MARKERS + COMPOSE_FILES
    if name != "node_modules"
)

# Directories never descended into during recursive scans
SKIP_DIRS = frozenset({"node_modules", "vendor", "venv", "target", "__pycache__"})


@dataclass
class ScanReport:
    """
    Result of scanning one project directory.

    Attributes:
        path: Absolute project path
        results: Detection result per technology
        scanned_at: Time of the scan
    """

    path: Path
    results: Dict[Technology, DetectionResult]
    scanned_at: datetime = field(default_factory=lambda: datetime.now().astimezone())

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def components(self) -> Dict[Technology, str]:
        """Detected versions only; technologies without a version are left out."""
        return {tech: result.version for tech, result in self.results.items() if result.version is not None}

    @property
    def ecosystem(self) -> Optional[Technology]:
        return primary_ecosystem(self.components)

    def to_record(self, name: Optional[str] = None) -> ProjectRecord:
        return ProjectRecord(
            name=name or self.name,
            path=str(self.path),
            components=self.components,
            last_scanned=self.scanned_at,
        )


@dataclass
class RescanSummary:
    """Outcome of a bulk rescan."""

    updated: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)


def scan_project(path: Path, registry: Optional[DetectorRegistry] = None) -> ScanReport:
    """
    Run every detector against a project directory.

    Args:
        path: Project directory
        registry: Detector registry (default: all detectors with the default runner)

    Returns:
        ScanReport with one DetectionResult per technology
    """
    registry = registry or create_default_registry()
    project_path = Path(path).expanduser().resolve()
    logger.debug(f"Scanning {project_path}")
    return ScanReport(path=project_path, results=registry.detect_all(project_path))


def is_project_dir(path: Path) -> bool:
    """Check whether a directory holds a marker of any tracked technology."""
    try:
        return any(entry.name in PROJECT_MARKERS for entry in path.iterdir())
    except OSError:
        return False


def find_projects(base: Path) -> List[Path]:
    """
    Find project directories under a base directory.

    Hidden directories and dependency/build directories are not descended
    into. The base itself is included when it is a project.

    Args:
        base: Directory to search

    Returns:
        Sorted list of project directories
    """
    found: List[Path] = []
    for root, dirs, _files in os.walk(base):
        dirs[:] = sorted(d for d in dirs if not d.startswith(".") and d not in SKIP_DIRS)
        root_path = Path(root)
        if is_project_dir(root_path):
            found.append(root_path)
    return sorted(found)


def rescan_all(store: ProjectStore, registry: Optional[DetectorRegistry] = None) -> RescanSummary:
    """
    Rescan every tracked project and save the fresh results.

    Projects whose directory no longer exists are removed from the store.
    Projects are processed one at a time; a removal does not stop the loop.

    Args:
        store: Project store
        registry: Detector registry

    Returns:
        RescanSummary listing updated and removed project names
    """
    registry = registry or create_default_registry()
    summary = RescanSummary()

    for record in store.list_all():
        project_path = Path(record.path)
        if not project_path.is_dir():
            logger.info(f"Removing {record.name}: {record.path} no longer exists")
            store.remove(record.name)
            summary.removed.append(record.name)
            continue

        report = scan_project(project_path, registry)
        store.save(report.to_record(record.name))
        summary.updated.append(record.name)

    return summary
