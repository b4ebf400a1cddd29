"""EOL date resolution by release-cycle matching."""

import re
from typing import Any, Dict, List, Optional, Tuple, Union

from harbinger.technology import Technology

from .cache import EolTable
from .source import EndOfLifeSource

# An ISO date string, False for "supported with no announced EOL", or None for "no data"
EolDate = Union[str, bool, None]

_LEADING_DIGITS = re.compile(r"\d+")


def _cycle(entry: Dict[str, Any]) -> str:
    return str(entry.get("cycle", ""))


def _cycle_key(cycle: str) -> Tuple[int, ...]:
    """Numeric sort key for a cycle: "7.10" > "7.9". Each part sorts by its leading digits."""
    key = []
    for part in cycle.split("."):
        digits = _LEADING_DIGITS.match(part)
        key.append(int(digits.group()) if digits else 0)
    return tuple(key)


def match_cycle(table: EolTable, version: str) -> Optional[Dict[str, Any]]:
    """
    Find the cycle entry a version belongs to.

    1. Exact ``major.minor`` cycle (MySQL 8.0, Ruby 3.2)
    2. Exact ``major`` cycle (PostgreSQL 16)
    3. The highest ``major.*`` cycle, for a bare major against a table of
       minor cycles. This picks the newest minor of the series, which may
       not be the one actually deployed.

    Args:
        table: Cycle entries for one product
        version: Normalized version string

    Returns:
        Matching cycle entry, or None
    """
    entries = [entry for entry in table if isinstance(entry, dict)]
    parts = version.split(".")
    major = parts[0]
    major_minor = f"{major}.{parts[1]}" if len(parts) > 1 else None

    if major_minor:
        for entry in entries:
            if _cycle(entry) == major_minor:
                return entry

    for entry in entries:
        if _cycle(entry) == major:
            return entry

    candidates: List[Dict[str, Any]] = [e for e in entries if _cycle(e).startswith(f"{major}.")]
    if not candidates:
        return None
    return max(candidates, key=lambda e: _cycle_key(_cycle(e)))


class EolRegistry:
    """
    Resolves versions to EOL dates using per-product cycle tables.

    Example:
        registry = EolRegistry(EndOfLifeSource(EolCache(cache_dir)))
        registry.eol_date_for("postgresql", "16.11")  # "2028-11-09"
        registry.eol_for(Technology.NODEJS, "22")     # False while unannounced
    """

    def __init__(self, source: EndOfLifeSource) -> None:
        self.source = source

    def table(self, product: str) -> Optional[EolTable]:
        return self.source.fetch(product)

    def eol_date_for(self, product: str, version: Optional[str]) -> EolDate:
        """
        Get the EOL date for a product version.

        Args:
            product: endoflife.date product slug
            version: Normalized version string

        Returns:
            ISO date string, False when the cycle has no EOL yet, or None when
            the table is unavailable or no cycle matches
        """
        if not version:
            return None
        table = self.table(product)
        if not table:
            return None
        entry = match_cycle(table, version)
        if entry is None:
            return None
        eol = entry.get("eol")
        if eol is False or isinstance(eol, str):
            return eol
        return None

    def eol_for(self, technology: Technology, version: Optional[str]) -> EolDate:
        """Get the EOL date for a technology version."""
        return self.eol_date_for(technology.product, version)

    def refresh(self, product: str) -> Optional[EolTable]:
        """Re-download a product table, bypassing the cache."""
        return self.source.refresh(product)
