"""Detector registry for running all technology detectors over a project."""

from pathlib import Path
from typing import Dict

from harbinger.logging_config import logger
from harbinger.technology import Technology

from .protocol import Detector
from .result import DetectionResult


class DetectorRegistry:
    """
    Registry for managing and running technology detectors.

    Detectors run independently; one failing detector does not stop the
    others.

    Example:
        registry = DetectorRegistry()
        registry.register(RubyDetector())
        registry.register(DatabaseDetector(PostgresAdapter()))

        results = registry.detect_all(Path("/srv/app"))
        results[Technology.RUBY].version  # "3.3.0"
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._detectors: Dict[Technology, Detector] = {}

    def register(self, detector: Detector) -> None:
        """
        Register a detector, replacing any existing one for the same technology.

        Args:
            detector: Detector implementation to register
        """
        self._detectors[detector.technology] = detector
        logger.debug(f"Registered detector: {detector.name}")

    def detect(self, technology: Technology, project_path: Path) -> DetectionResult:
        """
        Run one detector.

        Args:
            technology: Technology to detect
            project_path: Project directory

        Returns:
            DetectionResult; absent if the detector raised
        """
        detector = self._detectors[technology]
        try:
            return detector.result(project_path)
        except Exception as e:
            logger.warning(f"Error running {detector.name} detector on {project_path}: {e}")
            return DetectionResult.absent()

    def detect_all(self, project_path: Path) -> Dict[Technology, DetectionResult]:
        """
        Run every registered detector against a project.

        Args:
            project_path: Project directory

        Returns:
            Mapping of technology to its detection result, in Technology order
        """
        return {
            technology: self.detect(technology, project_path)
            for technology in Technology
            if technology in self._detectors
        }
