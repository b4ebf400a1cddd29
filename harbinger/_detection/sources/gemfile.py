"""Readers for Gemfile and Gemfile.lock."""

import re
from pathlib import Path
from typing import Optional

from .files import read_text

GEMFILE = "Gemfile"
GEMFILE_LOCK = "Gemfile.lock"

_GEMFILE_RUBY = re.compile(r"""^\s*ruby\s+["']([^"']+)["']""", re.MULTILINE)
_LOCK_RUBY_VERSION = re.compile(r"RUBY VERSION\s+ruby\s+(\S+)")


def read_gemfile_lock(project_path: Path) -> Optional[str]:
    return read_text(project_path / GEMFILE_LOCK)


def read_gemfile(project_path: Path) -> Optional[str]:
    return read_text(project_path / GEMFILE)


def gem_version(lock_content: Optional[str], gem_name: str) -> Optional[str]:
    """
    Extract a resolved gem version from Gemfile.lock content.

    Only top-level specs match: they sit at exactly four spaces of
    indentation (``    pg (1.5.4)``). Dependency constraints listed under a
    spec are indented further and are ignored.

    Args:
        lock_content: Gemfile.lock text
        gem_name: Gem to look up

    Returns:
        Version string, or None if the gem is not locked
    """
    if not lock_content:
        return None
    pattern = re.compile(rf"^ {{4}}{re.escape(gem_name)}\s+\(([^)]+)\)", re.MULTILINE)
    match = pattern.search(lock_content)
    return match.group(1) if match else None


def lock_mentions_gem(lock_content: Optional[str], gem_name: str) -> bool:
    """Check whether the gem appears anywhere in Gemfile.lock (spec or dependency)."""
    if not lock_content:
        return False
    pattern = re.compile(rf"^\s+{re.escape(gem_name)} \(", re.MULTILINE)
    return pattern.search(lock_content) is not None


def gemfile_declares_gem(gemfile_content: Optional[str], gem_name: str) -> bool:
    """Check for a ``gem "<name>"`` line in a Gemfile."""
    if not gemfile_content:
        return False
    pattern = re.compile(rf"""^\s*gem\s+["']{re.escape(gem_name)}["']""", re.MULTILINE)
    return pattern.search(gemfile_content) is not None


def ruby_from_gemfile(project_path: Path) -> Optional[str]:
    """Read the ``ruby "x.y.z"`` directive from the Gemfile."""
    content = read_gemfile(project_path)
    if not content:
        return None
    match = _GEMFILE_RUBY.search(content)
    return match.group(1) if match else None


def ruby_from_gemfile_lock(project_path: Path) -> Optional[str]:
    """Read the RUBY VERSION section of Gemfile.lock (``ruby 3.2.2p53``)."""
    content = read_gemfile_lock(project_path)
    if not content:
        return None
    match = _LOCK_RUBY_VERSION.search(content)
    return match.group(1) if match else None
