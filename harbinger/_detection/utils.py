"""Shared helpers for detectors."""

from typing import Callable, Optional, Sequence, Tuple

from harbinger.logging_config import logger
from harbinger.versions import normalize_version

# A labelled source reader: (source name, zero-argument reader)
SourceReader = Tuple[str, Callable[[], Optional[str]]]


def first_version(technology_name: str, readers: Sequence[SourceReader]) -> Optional[str]:
    """
    Try source readers in priority order and return the first usable version.

    A reader whose raw value normalizes to None (``stable``, ``lts/unknown``)
    does not stop the chain; the next reader is tried.

    Args:
        technology_name: Name used in log messages
        readers: (source name, reader) pairs in priority order

    Returns:
        First normalized version, or None if no reader yields one
    """
    for source_name, reader in readers:
        raw = reader()
        if raw is None:
            continue
        version = normalize_version(raw)
        if version is None:
            logger.debug(f"{technology_name}: ignoring unusable value {raw!r} from {source_name}")
            continue
        logger.debug(f"{technology_name}: found {version} in {source_name}")
        return version
    return None
