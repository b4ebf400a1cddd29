"""Node.js detector."""

from pathlib import Path
from typing import Optional

from harbinger.technology import Technology

from ..sources.compose import image_version
from ..sources.files import any_exists, load_json, read_stripped
from ..sources.probes import probe_node
from ..utils import first_version
from .base import BaseDetector

NODE_MARKERS = ("package.json", "package-lock.json", ".nvmrc", ".node-version", "node_modules")
NODE_VERSION_FILES = (".nvmrc", ".node-version")


def node_from_version_files(project_path: Path) -> Optional[str]:
    """Read the first non-empty .nvmrc or .node-version."""
    for name in NODE_VERSION_FILES:
        content = read_stripped(project_path / name)
        if content:
            return content
    return None


def node_from_package_json(project_path: Path) -> Optional[str]:
    """Read ``engines.node`` from package.json."""
    package = load_json(project_path / "package.json")
    if not isinstance(package, dict):
        return None
    engines = package.get("engines")
    if not isinstance(engines, dict):
        return None
    node = engines.get("node")
    return node if isinstance(node, str) and node.strip() else None


class NodeDetector(BaseDetector):
    """
    Detects the Node.js version.

    Sources, in order: .nvmrc/.node-version, package.json ``engines.node``,
    compose ``node:`` image, then ``node --version`` for projects with a
    Node.js marker.
    """

    technology = Technology.NODEJS

    def is_present(self, project_path: Path) -> bool:
        return any_exists(project_path, NODE_MARKERS)

    def detect(self, project_path: Path) -> Optional[str]:
        return first_version(
            self.name,
            [
                ("version file", lambda: node_from_version_files(project_path)),
                ("package.json", lambda: node_from_package_json(project_path)),
                ("compose", lambda: image_version(project_path, "node")),
                ("node --version", lambda: probe_node(self.runner) if self.is_present(project_path) else None),
            ],
        )
