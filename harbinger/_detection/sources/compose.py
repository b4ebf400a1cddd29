"""Readers for container manifests: compose files and the Dockerfile."""

import re
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import yaml

from harbinger.logging_config import logger
from harbinger.versions import leading_numeric_version

from .files import read_text

COMPOSE_FILES = (
    "docker-compose.yml",
    "docker-compose.yaml",
    "compose.yml",
    "compose.yaml",
)
DOCKERFILE = "Dockerfile"

_DOCKERFILE_RUBY = re.compile(r"^FROM\s+ruby:(\d+\.\d+(?:\.\d+)?)", re.IGNORECASE | re.MULTILINE)
_DOCKERFILE_RAILS = re.compile(r"^FROM\s+rails:(\d+\.\d+(?:\.\d+)?)", re.IGNORECASE | re.MULTILINE)
_RAILS_VERSION_ARG = re.compile(r"RAILS_VERSION[=:](\d+\.\d+(?:\.\d+)?)", re.IGNORECASE)


def compose_path(project_path: Path) -> Optional[Path]:
    """Return the first compose file present in the project."""
    for name in COMPOSE_FILES:
        candidate = project_path / name
        if candidate.is_file():
            return candidate
    return None


def load_compose(project_path: Path) -> Optional[Dict[str, Any]]:
    """Parse the project's compose file."""
    path = compose_path(project_path)
    if path is None:
        return None
    content = read_text(path)
    if content is None:
        return None
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        logger.debug(f"Failed to parse {path.name}: {e}")
        return None
    return data if isinstance(data, dict) else None


def _service_images(project_path: Path) -> Iterator[str]:
    compose = load_compose(project_path)
    if not compose:
        return
    services = compose.get("services")
    if not isinstance(services, dict):
        return
    for service in services.values():
        if isinstance(service, dict) and isinstance(service.get("image"), str):
            yield service["image"].strip()


def _image_pattern(image_name: str) -> re.Pattern:
    # Optional registry/namespace prefix: docker.io/library/postgres:16
    return re.compile(rf"^(?:[\w.-]+/)*{re.escape(image_name)}:(\S+)$")


def image_version(project_path: Path, image_name: str) -> Optional[str]:
    """
    Extract the version of a service image declared in the compose file.

    ``postgres:16-alpine`` yields ``16`` and ``mysql:8.0.33`` yields ``8.0.33``.
    Tags without a leading number (``latest``) are skipped.

    Args:
        project_path: Project directory
        image_name: Image name without registry or tag (e.g., "golang")

    Returns:
        Leading dotted numeric version of the first matching image tag
    """
    pattern = _image_pattern(image_name)
    for image in _service_images(project_path):
        match = pattern.match(image)
        if not match:
            continue
        version = leading_numeric_version(match.group(1))
        if version:
            return version
    return None


def compose_declares_image(project_path: Path, image_name: str) -> bool:
    """Check whether any compose service uses the image, whatever its tag."""
    pattern = _image_pattern(image_name)
    return any(pattern.match(image) or image == image_name for image in _service_images(project_path))


def ruby_from_dockerfile(project_path: Path) -> Optional[str]:
    """Read the Ruby version from a ``FROM ruby:3.4.7-slim`` line."""
    content = read_text(project_path / DOCKERFILE)
    if not content:
        return None
    match = _DOCKERFILE_RUBY.search(content)
    return match.group(1) if match else None


def rails_from_dockerfile(project_path: Path) -> Optional[str]:
    """Read the Rails version from ``FROM rails:7.0`` or a ``RAILS_VERSION`` build argument."""
    content = read_text(project_path / DOCKERFILE)
    if not content:
        return None
    match = _DOCKERFILE_RAILS.search(content) or _RAILS_VERSION_ARG.search(content)
    return match.group(1) if match else None
