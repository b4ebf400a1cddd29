"""Runtime settings for harbinger, loaded from environment variables.

Configuration is read once per command invocation and threaded explicitly
into the components that need it:

- HARBINGER_HOME: Directory holding the tracked project store (default: ~/.harbinger)
- HARBINGER_CACHE_DIR: Directory for cached EOL tables (default: $HARBINGER_HOME/data)
- HARBINGER_EOL_API_URL: Base URL of the EOL registry (default: https://endoflife.date/api)
- HARBINGER_PROBE_TIMEOUT: Timeout in seconds for version probe commands (default: 5)
- HARBINGER_HTTP_TIMEOUT: Timeout in seconds for EOL registry requests (default: 30)
- HARBINGER_LOG_LEVEL: Logging level (default: WARNING)
- HARBINGER_LOG_FORMAT: Set to "json" for structured log output
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from .exceptions import ConfigurationError
from .logging_config import logger

DEFAULT_EOL_API_URL = "https://endoflife.date/api"
DEFAULT_PROBE_TIMEOUT = 5.0
DEFAULT_HTTP_TIMEOUT = 30.0
LOCALHOST_PATTERNS = ["127.0.0.1", "localhost", "0.0.0.0"]


def default_home_dir() -> Path:
    """Return the default harbinger directory under the user's home."""
    return Path.home() / ".harbinger"


@dataclass
class Settings:
    """Configuration settings for a harbinger run."""

    home_dir: Path
    cache_dir: Path
    eol_api_url: str = DEFAULT_EOL_API_URL
    probe_timeout: float = DEFAULT_PROBE_TIMEOUT
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    log_level: str = "WARNING"

    def validate(self) -> None:
        """
        Validate configuration settings.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if self.probe_timeout <= 0:
            raise ConfigurationError("HARBINGER_PROBE_TIMEOUT must be a positive number of seconds")
        if self.http_timeout <= 0:
            raise ConfigurationError("HARBINGER_HTTP_TIMEOUT must be a positive number of seconds")
        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ConfigurationError(f"Unknown log level: {self.log_level}")

        self._validate_api_url()

    def _validate_api_url(self) -> None:
        """
        Validate and normalize the EOL registry base URL.

        Raises:
            ConfigurationError: If URL format is invalid
        """
        try:
            parsed = urlparse(self.eol_api_url)
        except Exception as e:
            raise ConfigurationError(f"Invalid EOL API URL format: {e}")

        if not parsed.scheme or parsed.scheme not in ("http", "https"):
            raise ConfigurationError("EOL API URL must start with http:// or https://")

        if not parsed.netloc:
            raise ConfigurationError("EOL API URL must include a valid hostname")

        if parsed.scheme == "http" and not any(localhost in parsed.netloc for localhost in LOCALHOST_PATTERNS):
            logger.warning("Using HTTP (not HTTPS) for the EOL registry - consider using HTTPS")

        # Remove trailing slash if present for consistency
        if self.eol_api_url.endswith("/"):
            self.eol_api_url = self.eol_api_url.rstrip("/")


def _parse_seconds(name: str, default: float) -> float:
    """Parse a timeout environment variable."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got '{raw}'")


def load_settings(home_dir: Optional[Path] = None) -> Settings:
    """
    Load and validate settings from environment variables.

    Args:
        home_dir: Explicit harbinger directory, overriding HARBINGER_HOME

    Returns:
        Validated Settings object

    Raises:
        ConfigurationError: If configuration is invalid
    """
    if home_dir is None:
        env_home = os.getenv("HARBINGER_HOME")
        home_dir = Path(env_home).expanduser() if env_home else default_home_dir()

    env_cache = os.getenv("HARBINGER_CACHE_DIR")
    cache_dir = Path(env_cache).expanduser() if env_cache else home_dir / "data"

    settings = Settings(
        home_dir=home_dir,
        cache_dir=cache_dir,
        eol_api_url=os.getenv("HARBINGER_EOL_API_URL", DEFAULT_EOL_API_URL),
        probe_timeout=_parse_seconds("HARBINGER_PROBE_TIMEOUT", DEFAULT_PROBE_TIMEOUT),
        http_timeout=_parse_seconds("HARBINGER_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT),
        log_level=os.getenv("HARBINGER_LOG_LEVEL", "WARNING"),
    )
    settings.validate()
    logger.debug(f"Loaded settings: home={settings.home_dir}, cache={settings.cache_dir}")
    return settings
