"""End-of-life data: cached endoflife.date tables and cycle matching.

Usage:
    from harbinger._eol import create_registry

    registry = create_registry(settings)
    registry.eol_date_for("ruby", "3.2.2")
"""

from harbinger.config import Settings

from .cache import CACHE_EXPIRY_SECONDS, EolCache
from .registry import EolDate, EolRegistry, match_cycle
from .source import EndOfLifeSource

__all__ = [
    "CACHE_EXPIRY_SECONDS",
    "EndOfLifeSource",
    "EolCache",
    "EolDate",
    "EolRegistry",
    "create_registry",
    "match_cycle",
]


def create_registry(settings: Settings) -> EolRegistry:
    """
    Create an EolRegistry backed by the configured cache directory and API URL.

    Args:
        settings: Loaded harbinger settings

    Returns:
        EolRegistry ready for lookups
    """
    source = EndOfLifeSource(
        EolCache(settings.cache_dir),
        base_url=settings.eol_api_url,
        timeout=settings.http_timeout,
    )
    return EolRegistry(source)
