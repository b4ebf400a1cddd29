"""Tests for the detector registry and DetectionResult."""

import unittest
from pathlib import Path

import pytest

from harbinger._detection import create_default_registry
from harbinger._detection.detectors import BaseDetector
from harbinger._detection.registry import DetectorRegistry
from harbinger._detection.result import DetectionResult
from harbinger.technology import Technology


class ExplodingDetector(BaseDetector):
    technology = Technology.REDIS

    def is_present(self, project_path: Path) -> bool:
        return True

    def detect(self, project_path: Path):
        raise RuntimeError("boom")


class FixedDetector(BaseDetector):
    def __init__(self, technology, version, runner=None):
        super().__init__(runner)
        self.technology = technology
        self._version = version

    def is_present(self, project_path: Path) -> bool:
        return True

    def detect(self, project_path: Path):
        return self._version


class TestDetectionResult(unittest.TestCase):
    def test_absent(self):
        result = DetectionResult.absent()
        self.assertFalse(result.present)
        self.assertIsNone(result.version)

    def test_version_requires_presence(self):
        with self.assertRaises(ValueError):
            DetectionResult(present=False, version="3.3.0")

    def test_from_detection_promotes_presence(self):
        self.assertEqual(DetectionResult.from_detection(False, "3.3.0"), DetectionResult(True, "3.3.0"))


class TestDetectorRegistry:
    def test_failing_detector_reports_absent(self, tmp_path, runner):
        registry = DetectorRegistry()
        registry.register(ExplodingDetector(runner))
        registry.register(FixedDetector(Technology.RUBY, "3.3.0", runner))

        results = registry.detect_all(tmp_path)

        assert results[Technology.REDIS] == DetectionResult.absent()
        assert results[Technology.RUBY] == DetectionResult(present=True, version="3.3.0")

    def test_detect_all_follows_technology_order(self, tmp_path, runner):
        registry = DetectorRegistry()
        registry.register(FixedDetector(Technology.GO, "1.21", runner))
        registry.register(FixedDetector(Technology.RUBY, "3.3.0", runner))

        assert list(registry.detect_all(tmp_path)) == [Technology.RUBY, Technology.GO]

    def test_register_replaces(self, tmp_path, runner):
        registry = DetectorRegistry()
        registry.register(FixedDetector(Technology.RUBY, "3.2.0", runner))
        registry.register(FixedDetector(Technology.RUBY, "3.3.0", runner))

        assert registry.detect_all(tmp_path) == {Technology.RUBY: DetectionResult(True, "3.3.0")}

    def test_detect_unregistered(self, tmp_path):
        with pytest.raises(KeyError):
            DetectorRegistry().detect(Technology.GO, tmp_path)

    def test_empty_registry(self, tmp_path):
        assert DetectorRegistry().detect_all(tmp_path) == {}


class TestDefaultRegistry:
    def test_covers_every_technology(self, tmp_path, runner):
        results = create_default_registry(runner).detect_all(tmp_path)
        assert set(results) == set(Technology)

    def test_empty_project(self, project_dir, runner):
        results = create_default_registry(runner).detect_all(project_dir.path)
        assert all(result == DetectionResult.absent() for result in results.values())
        assert runner.calls == []

    def test_rails_app(self, project_dir, runner):
        project_dir.write(".ruby-version", "3.3.0")
        project_dir.write("Gemfile.lock", "GEM\n  specs:\n    pg (1.5.4)\n    rails (7.1.0)\n")
        project_dir.write("config/database.yml", "production:\n  adapter: postgresql\n")
        runner.respond(["psql", "--version"], "psql (PostgreSQL) 16.1")

        results = create_default_registry(runner).detect_all(project_dir.path)

        assert results[Technology.RUBY].version == "3.3.0"
        assert results[Technology.RAILS].version == "7.1.0"
        assert results[Technology.POSTGRES].version == "16.1"
        assert not results[Technology.MYSQL].present
        assert not results[Technology.NODEJS].present
