"""Pytest configuration and shared fixtures for all tests."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest

from harbinger.shell import CommandResult
from harbinger.technology import Technology


class FakeRunner:
    """CommandRunner stand-in returning canned output.

    Commands without a registered response fail, as if the binary were not
    installed.
    """

    def __init__(self) -> None:
        self.responses: Dict[Tuple[str, ...], CommandResult] = {}
        self.calls: List[List[str]] = []

    def respond(self, argv: List[str], output: str, success: bool = True) -> None:
        self.responses[tuple(argv)] = CommandResult(output=output, success=success)

    def __call__(self, argv: List[str]) -> CommandResult:
        self.calls.append(list(argv))
        return self.responses.get(tuple(argv), CommandResult(output="", success=False))

    def ran(self, command: str) -> bool:
        return any(call[0] == command for call in self.calls)


class ProjectDir:
    """Temporary project directory with a helper to write fixture files."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def write(self, relative: str, content: str = "") -> Path:
        target = self.path / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
        return target


@pytest.fixture(autouse=True)
def isolate_harbinger_env(monkeypatch, tmp_path):
    """Point every test at a throwaway harbinger home and clear overrides.

    Keeps tests from reading or writing the developer's ~/.harbinger.
    """
    for name in (
        "HARBINGER_CACHE_DIR",
        "HARBINGER_EOL_API_URL",
        "HARBINGER_PROBE_TIMEOUT",
        "HARBINGER_HTTP_TIMEOUT",
        "HARBINGER_LOG_LEVEL",
        "HARBINGER_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HARBINGER_HOME", str(tmp_path / "harbinger-home"))


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def project_dir(tmp_path) -> ProjectDir:
    root = tmp_path / "project"
    root.mkdir()
    return ProjectDir(root)


class FakeEolRegistry:
    """EolRegistry stand-in answering from a fixed product/cycle mapping.

    Versions are matched on major.minor, then on major.
    """

    def __init__(self, dates: Optional[Dict[str, Dict[str, Any]]] = None) -> None:
        self.dates = dates or {}
        self.refreshed: List[str] = []

    def eol_for(self, technology: Technology, version: Optional[str]) -> Any:
        if not version:
            return None
        cycles = self.dates.get(technology.product, {})
        parts = version.split(".")
        major_minor = ".".join(parts[:2])
        if major_minor in cycles:
            return cycles[major_minor]
        return cycles.get(parts[0])

    def refresh(self, product: str) -> Optional[List[Dict[str, Any]]]:
        self.refreshed.append(product)
        cycles = self.dates.get(product)
        if cycles is None:
            return None
        return [{"cycle": cycle, "eol": eol} for cycle, eol in cycles.items()]


@pytest.fixture
def eol() -> FakeEolRegistry:
    return FakeEolRegistry(
        {
            "ruby": {"3.3": "2027-03-31", "2.7": "2023-03-31"},
            "rails": {"7.1": "2025-10-01"},
            "postgresql": {"16": "2028-11-09", "12": "2024-11-14"},
            "nodejs": {"22": False},
            "python": {"3.12": "2028-10-31"},
            "go": {"1.21": "2024-08-13"},
        }
    )
