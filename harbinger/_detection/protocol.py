"""Detector and DatabaseAdapter protocols for version detection plugins."""

from pathlib import Path
from typing import FrozenSet, Optional, Protocol

from harbinger.shell import CommandRunner
from harbinger.technology import Technology

from .result import DetectionResult
from .sources.database_config import DatabaseConfig


class Detector(Protocol):
    """
    Protocol defining the interface for per-technology detectors.

    Each detector tries its sources in a fixed priority order and returns
    the first normalized version found. Detectors are stateless: running one
    twice on an unchanged directory gives the same answer.

    Example:
        class GoDetector:
            technology = Technology.GO
            name = "go"

            def is_present(self, project_path: Path) -> bool:
                return (project_path / "go.mod").exists()

            def detect(self, project_path: Path) -> Optional[str]:
                # go.mod -> go.work -> .go-version -> compose -> go version
                ...
    """

    @property
    def technology(self) -> Technology:
        """The technology this detector reports on."""
        ...

    @property
    def name(self) -> str:
        """Human-readable name used in logs."""
        ...

    def is_present(self, project_path: Path) -> bool:
        """
        Check for a marker of the technology in the project.

        Args:
            project_path: Project directory

        Returns:
            True if the project uses this technology, even if no version is known
        """
        ...

    def detect(self, project_path: Path) -> Optional[str]:
        """
        Detect the version used by the project.

        Implementations never raise: unreadable files, parse errors and
        failed commands all count as "not found" for that source.

        Args:
            project_path: Project directory

        Returns:
            Normalized version string, or None if no source yielded one
        """
        ...

    def result(self, project_path: Path) -> DetectionResult:
        """Combine is_present() and detect() into a DetectionResult."""
        ...


class DatabaseAdapter(Protocol):
    """
    Protocol for the database-specific parts of relational database detection.

    The shared DatabaseDetector handles database.yml parsing, the remote host
    gate and source ordering. An adapter only knows which adapter names it
    answers to and how to read its version from the shell or the lockfile.
    """

    @property
    def technology(self) -> Technology:
        ...

    @property
    def adapter_names(self) -> FrozenSet[str]:
        """database.yml ``adapter`` values that select this database."""
        ...

    def detect_from_shell(self, runner: CommandRunner) -> Optional[str]:
        """Probe the local client binary for its version."""
        ...

    def detect_from_gem_lock(self, lock_content: Optional[str], config: DatabaseConfig) -> Optional[str]:
        """
        Fall back to the driver gem version, labelled with the gem name.

        Args:
            lock_content: Gemfile.lock text, if any
            config: Resolved database configuration

        Returns:
            Labelled version such as "1.5.4 (pg gem)", or None
        """
        ...
