"""Ruby and Rails detectors."""

from pathlib import Path
from typing import Optional

from harbinger.technology import Technology

from ..sources.compose import rails_from_dockerfile, ruby_from_dockerfile
from ..sources.files import any_exists, read_stripped
from ..sources.gemfile import (
    GEMFILE,
    GEMFILE_LOCK,
    gem_version,
    gemfile_declares_gem,
    lock_mentions_gem,
    read_gemfile,
    read_gemfile_lock,
    ruby_from_gemfile,
    ruby_from_gemfile_lock,
)
from ..utils import first_version
from .base import BaseDetector

RUBY_MARKERS = (GEMFILE, GEMFILE_LOCK, ".ruby-version")


class RubyDetector(BaseDetector):
    """
    Detects the Ruby version.

    Sources, in order:
    1. .ruby-version
    2. Gemfile ``ruby "x.y.z"`` directive
    3. Gemfile.lock RUBY VERSION section
    4. Dockerfile ``FROM ruby:x.y.z``
    """

    technology = Technology.RUBY

    def is_present(self, project_path: Path) -> bool:
        return any_exists(project_path, RUBY_MARKERS)

    def detect(self, project_path: Path) -> Optional[str]:
        return first_version(
            self.name,
            [
                (".ruby-version", lambda: read_stripped(project_path / ".ruby-version")),
                ("Gemfile", lambda: ruby_from_gemfile(project_path)),
                ("Gemfile.lock", lambda: ruby_from_gemfile_lock(project_path)),
                ("Dockerfile", lambda: ruby_from_dockerfile(project_path)),
            ],
        )


class RailsDetector(BaseDetector):
    """Detects the Rails version from the locked ``rails`` gem."""

    technology = Technology.RAILS

    def is_present(self, project_path: Path) -> bool:
        return lock_mentions_gem(read_gemfile_lock(project_path), "rails") or gemfile_declares_gem(
            read_gemfile(project_path), "rails"
        )

    def detect(self, project_path: Path) -> Optional[str]:
        return first_version(
            self.name,
            [
                ("Gemfile.lock", lambda: gem_version(read_gemfile_lock(project_path), "rails")),
                ("Dockerfile", lambda: rails_from_dockerfile(project_path)),
            ],
        )
