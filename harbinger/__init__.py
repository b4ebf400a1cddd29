"""harbinger: end-of-life tracking for the runtimes, frameworks and datastores your projects use."""


def _get_version() -> str:
    """Installed distribution version, else the version in pyproject.toml."""
    try:
        from importlib.metadata import PackageNotFoundError, version

        return version("harbinger")
    except PackageNotFoundError:
        pass

    try:
        from pathlib import Path

        import tomllib

        pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
        with open(pyproject_path, "rb") as f:
            return tomllib.load(f).get("project", {}).get("version", "unknown")
    except (OSError, ValueError):
        return "unknown"


__version__ = _get_version()
