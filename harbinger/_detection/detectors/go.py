"""Go detector."""

import re
from pathlib import Path
from typing import Optional

from harbinger.technology import Technology

from ..sources.compose import image_version
from ..sources.files import any_exists, read_stripped, read_text
from ..sources.probes import probe_go
from ..utils import first_version
from .base import BaseDetector

GO_MARKERS = ("go.mod", "go.work", ".go-version")

_GO_DIRECTIVE = re.compile(r"^go\s+([\d.]+)", re.MULTILINE)
_GO_QUALIFIER = re.compile(r"-(?:alpine|rc\d+|beta\d*).*$")


def go_directive(path: Path) -> Optional[str]:
    """Read the ``go 1.21`` directive from go.mod or go.work."""
    content = read_text(path)
    if not content:
        return None
    match = _GO_DIRECTIVE.search(content)
    return match.group(1) if match else None


def strip_go_qualifier(version: Optional[str]) -> Optional[str]:
    """Remove ``-alpine``, ``-rcN`` and ``-betaN`` qualifiers."""
    if version is None:
        return None
    return _GO_QUALIFIER.sub("", version)


class GoDetector(BaseDetector):
    """
    Detects the Go version.

    Sources, in order: go.mod, go.work, .go-version, compose ``golang:``
    image, then ``go version`` for projects with a Go marker.
    """

    technology = Technology.GO

    def is_present(self, project_path: Path) -> bool:
        return any_exists(project_path, GO_MARKERS)

    def detect(self, project_path: Path) -> Optional[str]:
        return first_version(
            self.name,
            [
                ("go.mod", lambda: go_directive(project_path / "go.mod")),
                ("go.work", lambda: go_directive(project_path / "go.work")),
                (".go-version", lambda: strip_go_qualifier(read_stripped(project_path / ".go-version"))),
                ("compose", lambda: image_version(project_path, "golang")),
                ("go version", lambda: probe_go(self.runner) if self.is_present(project_path) else None),
            ],
        )
