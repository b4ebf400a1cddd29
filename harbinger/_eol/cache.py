"""On-disk cache of EOL cycle tables, one JSON file per product."""

import json
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from harbinger.logging_config import logger

# Cycle tables are refreshed once a day
CACHE_EXPIRY_SECONDS = 24 * 60 * 60

EolTable = List[Dict[str, Any]]


class EolCache:
    """
    Per-product JSON cache under an explicit directory.

    Freshness is judged from the file modification time. The directory is
    created lazily on the first write.
    """

    def __init__(self, cache_dir: Path, expiry_seconds: int = CACHE_EXPIRY_SECONDS) -> None:
        self.cache_dir = Path(cache_dir)
        self.expiry_seconds = expiry_seconds

    def path_for(self, product: str) -> Path:
        return self.cache_dir / f"{product}.json"

    def is_fresh(self, product: str, now: Optional[float] = None) -> bool:
        """Check whether the cached table was written within the expiry window."""
        path = self.path_for(product)
        try:
            mtime = path.stat().st_mtime
        except OSError:
            return False
        now = time.time() if now is None else now
        return mtime > now - self.expiry_seconds

    def read(self, product: str) -> Optional[EolTable]:
        """
        Load a cached table.

        Returns:
            The cached list of cycle entries, or None if missing or corrupt
        """
        path = self.path_for(product)
        if not path.is_file():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load cached EOL data {path}: {e}")
            return None
        if not isinstance(data, list):
            logger.warning(f"Ignoring malformed cached EOL data {path}")
            return None
        return data

    def write(self, product: str, data: EolTable) -> None:
        """Persist a table. A write failure is logged and otherwise ignored."""
        path = self.path_for(product)
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            logger.debug(f"Cached EOL data: {path}")
        except OSError as e:
            logger.warning(f"Failed to save EOL data to cache: {e}")
