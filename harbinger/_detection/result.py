"""DetectionResult dataclass for per-technology detection output."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DetectionResult:
    """
    Outcome of running one detector against one project.

    Attributes:
        present: A marker of the technology was found
        version: Normalized version, or None if it could not be determined

    ``present=True, version=None`` is meaningful: the project uses the
    technology but its version is unknown. It is reported differently from
    a project that does not use the technology at all.
    """

    present: bool
    version: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate result state."""
        if self.version is not None and not self.present:
            raise ValueError("A detected version implies the technology is present")

    @classmethod
    def absent(cls) -> "DetectionResult":
        """Create a result for a project that does not use the technology."""
        return cls(present=False, version=None)

    @classmethod
    def from_detection(cls, present: bool, version: Optional[str]) -> "DetectionResult":
        """Create a result, treating any detected version as evidence of presence."""
        return cls(present=present or version is not None, version=version)
