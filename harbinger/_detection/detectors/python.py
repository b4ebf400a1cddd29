"""Python detector."""

import re
from pathlib import Path
from typing import Optional

from harbinger.technology import Technology

from ..sources.compose import image_version
from ..sources.files import any_exists, load_toml, read_stripped, read_text, table
from ..sources.probes import probe_python
from ..utils import first_version
from .base import BaseDetector

PYTHON_MARKERS = (
    "pyproject.toml",
    "requirements.txt",
    ".python-version",
    "setup.py",
    "setup.cfg",
)
VENV_CONFIGS = ("venv/pyvenv.cfg", ".venv/pyvenv.cfg")

_PYVENV_VERSION = re.compile(r"^\s*version\s*=\s*(\d+\.\d+(?:\.\d+)?)", re.MULTILINE)


def python_from_pyproject(project_path: Path) -> Optional[str]:
    """
    Read the Python requirement from pyproject.toml.

    PEP 621 ``[project] requires-python`` wins over
    ``[tool.poetry.dependencies] python``.
    """
    data = load_toml(project_path / "pyproject.toml")
    if not data:
        return None

    requires_python = table(data, "project").get("requires-python")
    if isinstance(requires_python, str) and requires_python.strip():
        return requires_python

    poetry_python = table(data, "tool", "poetry", "dependencies").get("python")
    if isinstance(poetry_python, str) and poetry_python.strip():
        return poetry_python
    return None


def python_from_pyvenv(project_path: Path) -> Optional[str]:
    """Read ``version = 3.11.5`` from a virtualenv's pyvenv.cfg."""
    for cfg in VENV_CONFIGS:
        content = read_text(project_path / cfg)
        if not content:
            continue
        match = _PYVENV_VERSION.search(content)
        if match:
            return match.group(1)
    return None


class PythonDetector(BaseDetector):
    """
    Detects the Python version.

    Sources, in order: pyproject.toml, .python-version, virtualenv
    pyvenv.cfg, compose ``python:`` image, then ``python3``/``python`` on the
    PATH. The interpreter probe only runs for projects with a Python marker;
    otherwise every directory would report the system Python.
    """

    technology = Technology.PYTHON

    def is_present(self, project_path: Path) -> bool:
        return any_exists(project_path, PYTHON_MARKERS + VENV_CONFIGS)

    def detect(self, project_path: Path) -> Optional[str]:
        return first_version(
            self.name,
            [
                ("pyproject.toml", lambda: python_from_pyproject(project_path)),
                (".python-version", lambda: read_stripped(project_path / ".python-version")),
                ("pyvenv.cfg", lambda: python_from_pyvenv(project_path)),
                ("compose", lambda: image_version(project_path, "python")),
                ("python3 --version", lambda: probe_python(self.runner) if self.is_present(project_path) else None),
            ],
        )
