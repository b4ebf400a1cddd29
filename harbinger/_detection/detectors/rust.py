"""Rust detector."""

from pathlib import Path
from typing import Optional

from harbinger.technology import Technology
from harbinger.versions import is_toolchain_channel

from ..sources.compose import image_version
from ..sources.files import any_exists, load_toml, read_stripped, table
from ..sources.probes import probe_rust
from ..utils import first_version
from .base import BaseDetector

RUST_MARKERS = ("Cargo.toml", "Cargo.lock", "rust-toolchain", "rust-toolchain.toml")


def _pinned_channel(channel: Optional[str]) -> Optional[str]:
    if not channel or is_toolchain_channel(channel.strip()):
        return None
    return channel.strip()


def rust_from_toolchain(project_path: Path) -> Optional[str]:
    """
    Read a pinned toolchain from rust-toolchain.toml or the legacy rust-toolchain file.

    Floating channels (stable, beta, nightly) name no release and are skipped.
    """
    data = load_toml(project_path / "rust-toolchain.toml")
    if data:
        channel = table(data, "toolchain").get("channel")
        pinned = _pinned_channel(channel if isinstance(channel, str) else None)
        if pinned:
            return pinned

    legacy = read_stripped(project_path / "rust-toolchain")
    if legacy and not legacy.startswith("["):
        return _pinned_channel(legacy.splitlines()[0])
    if legacy:
        # Legacy file name holding TOML content
        data = load_toml(project_path / "rust-toolchain")
        channel = table(data, "toolchain").get("channel")
        return _pinned_channel(channel if isinstance(channel, str) else None)
    return None


def rust_from_cargo_toml(project_path: Path) -> Optional[str]:
    """Read the minimum supported Rust version (``rust-version``) from Cargo.toml."""
    data = load_toml(project_path / "Cargo.toml")
    if not data:
        return None
    for section in (table(data, "package"), table(data, "workspace", "package")):
        if isinstance(section.get("rust-version"), str):
            return section["rust-version"]
    return None


def has_rust_sources(project_path: Path) -> bool:
    src = project_path / "src"
    if not src.is_dir():
        return False
    try:
        return next(src.rglob("*.rs"), None) is not None
    except OSError:
        return False


class RustDetector(BaseDetector):
    """
    Detects the Rust version.

    Sources, in order: toolchain file, Cargo.toml ``rust-version``, compose
    ``rust:`` image, then ``rustc --version`` for projects with a Rust marker.
    """

    technology = Technology.RUST

    def is_present(self, project_path: Path) -> bool:
        return any_exists(project_path, RUST_MARKERS) or has_rust_sources(project_path)

    def detect(self, project_path: Path) -> Optional[str]:
        return first_version(
            self.name,
            [
                ("rust-toolchain", lambda: rust_from_toolchain(project_path)),
                ("Cargo.toml", lambda: rust_from_cargo_toml(project_path)),
                ("compose", lambda: image_version(project_path, "rust")),
                ("rustc --version", lambda: probe_rust(self.runner) if self.is_present(project_path) else None),
            ],
        )
