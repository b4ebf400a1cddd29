"""Common behaviour for detectors."""

from pathlib import Path
from typing import Optional

from harbinger.shell import CommandRunner, make_runner
from harbinger.technology import Technology

from ..result import DetectionResult


class BaseDetector:
    """
    Base class providing ``result()`` on top of ``is_present()`` and ``detect()``.

    Subclasses set ``technology`` and implement the two lookups. Detectors
    that shell out take a CommandRunner; the default runner uses the
    standard probe timeout.
    """

    technology: Technology

    def __init__(self, runner: Optional[CommandRunner] = None) -> None:
        self.runner: CommandRunner = runner or make_runner()

    @property
    def name(self) -> str:
        return self.technology.value

    def is_present(self, project_path: Path) -> bool:
        raise NotImplementedError

    def detect(self, project_path: Path) -> Optional[str]:
        raise NotImplementedError

    def result(self, project_path: Path) -> DetectionResult:
        version = self.detect(project_path)
        present = version is not None or self.is_present(project_path)
        return DetectionResult.from_detection(present, version)
