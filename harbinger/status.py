"""EOL status classification."""

from datetime import date
from typing import Iterable, Optional, Union

EOL = "eol"
WARNING = "warning"
SAFE = "safe"
UNKNOWN = "unknown"

# Days before EOL at which a component is flagged
WARNING_THRESHOLD_DAYS = 180
ENDING_SOON_DAYS = 30

_SEVERITY = {UNKNOWN: 0, SAFE: 1, WARNING: 2, EOL: 3}


def days_until(eol: Union[str, bool, None], today: Optional[date] = None) -> Optional[int]:
    """
    Days from today until an EOL date.

    Args:
        eol: ISO date string, False (no EOL announced) or None (no data)
        today: Reference date (default: today)

    Returns:
        Days remaining, negative once past EOL; None without a date
    """
    if not isinstance(eol, str) or not eol:
        return None
    try:
        eol_date = date.fromisoformat(eol[:10])
    except ValueError:
        return None
    today = today or date.today()
    return (eol_date - today).days


def component_status(days: Optional[int]) -> str:
    """Classify days remaining as eol, warning, safe or unknown."""
    if days is None:
        return UNKNOWN
    if days < 0:
        return EOL
    if days < WARNING_THRESHOLD_DAYS:
        return WARNING
    return SAFE


def overall_status(statuses: Iterable[str]) -> str:
    """Worst status among components; unknown when nothing could be evaluated."""
    worst = UNKNOWN
    for status in statuses:
        if _SEVERITY.get(status, 0) > _SEVERITY[worst]:
            worst = status
    return worst


def describe_days(days: int) -> str:
    """Human-readable EOL countdown."""
    if days < 0:
        return f"ALREADY EOL ({abs(days)} days ago)"
    if days < ENDING_SOON_DAYS:
        return f"ENDING SOON ({days} days remaining)"
    return f"{days} days remaining"


def is_gem_fallback(version: Optional[str]) -> bool:
    """Versions labelled as driver gem fallbacks describe a client library, not the server."""
    return bool(version) and "gem" in version
