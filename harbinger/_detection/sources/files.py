"""Filesystem helpers shared by the source readers.

Every helper collapses a missing file or a read/parse failure into None.
"""

import json
import tomllib
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from harbinger.logging_config import logger


def read_text(path: Path) -> Optional[str]:
    """Read a text file, returning None if it is missing or unreadable."""
    if not path.is_file():
        return None
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug(f"Could not read {path}: {e}")
        return None


def read_stripped(path: Path) -> Optional[str]:
    """Read a single-value pin file (.ruby-version, .nvmrc, ...) without surrounding whitespace."""
    content = read_text(path)
    if content is None:
        return None
    content = content.strip()
    return content or None


def load_toml(path: Path) -> Optional[Dict[str, Any]]:
    """Parse a TOML file."""
    if not path.is_file():
        return None
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, ValueError) as e:
        # ValueError covers TOMLDecodeError and UnicodeDecodeError
        logger.debug(f"Failed to parse {path.name}: {e}")
        return None


def table(data: Optional[Dict[str, Any]], *keys: str) -> Dict[str, Any]:
    """
    Walk nested TOML tables, returning {} when a key is missing or not a table.

    Example:
        table(pyproject, "tool", "poetry", "dependencies")
    """
    current: Any = data
    for key in keys:
        if not isinstance(current, dict):
            return {}
        current = current.get(key)
    return current if isinstance(current, dict) else {}


def load_json(path: Path) -> Optional[Any]:
    """Parse a JSON file."""
    content = read_text(path)
    if content is None:
        return None
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        logger.debug(f"Failed to parse {path.name}: {e}")
        return None


def any_exists(project_path: Path, names: Iterable[str]) -> bool:
    """Check whether any of the named files or directories exist in the project."""
    return any((project_path / name).exists() for name in names)
