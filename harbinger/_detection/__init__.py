"""Version detection plugin architecture.

Each tracked technology has a detector that tries its sources in a fixed
priority order and returns the first normalized version:

- ruby: .ruby-version, Gemfile, Gemfile.lock, Dockerfile
- rails: Gemfile.lock, Dockerfile
- postgres/mysql: config/database.yml gate, local client (skipped for
  remote hosts), driver gem
- redis/mongo: compose image, local binary, client gem
- python: pyproject.toml, .python-version, pyvenv.cfg, compose, interpreter
- nodejs: .nvmrc/.node-version, package.json, compose, node binary
- rust: toolchain file, Cargo.toml, compose, rustc
- go: go.mod, go.work, .go-version, compose, go binary

Usage:
    from harbinger._detection import create_default_registry

    registry = create_default_registry()
    results = registry.detect_all(Path("/srv/app"))
"""

from typing import Optional

from harbinger.shell import CommandRunner, make_runner

from .protocol import DatabaseAdapter, Detector
from .registry import DetectorRegistry
from .result import DetectionResult

__all__ = [
    "DatabaseAdapter",
    "DetectionResult",
    "Detector",
    "DetectorRegistry",
    "create_default_registry",
]


def create_default_registry(runner: Optional[CommandRunner] = None) -> DetectorRegistry:
    """
    Create a registry with a detector for every technology.

    Args:
        runner: CommandRunner used for shell probes (default: subprocess
                with the standard probe timeout)

    Returns:
        DetectorRegistry configured with all detectors
    """
    from .detectors import (
        DatabaseDetector,
        GoDetector,
        MongoDetector,
        MysqlAdapter,
        NodeDetector,
        PostgresAdapter,
        PythonDetector,
        RailsDetector,
        RedisDetector,
        RubyDetector,
        RustDetector,
    )

    runner = runner or make_runner()

    registry = DetectorRegistry()
    registry.register(RubyDetector(runner))
    registry.register(RailsDetector(runner))
    registry.register(DatabaseDetector(PostgresAdapter(), runner))
    registry.register(DatabaseDetector(MysqlAdapter(), runner))
    registry.register(RedisDetector(runner))
    registry.register(MongoDetector(runner))
    registry.register(PythonDetector(runner))
    registry.register(NodeDetector(runner))
    registry.register(RustDetector(runner))
    registry.register(GoDetector(runner))
    return registry
