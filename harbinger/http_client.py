"""HTTP session factory for the EOL registry."""

from typing import Dict, Optional

import requests

from . import __version__

USER_AGENT = f"harbinger/{__version__}"


def get_default_headers(accept: Optional[str] = None) -> Dict[str, str]:
    """
    Headers sent with every request.

    Args:
        accept: Optional Accept header value (e.g., "application/json")

    Returns:
        Dictionary of HTTP headers
    """
    headers = {"User-Agent": USER_AGENT}
    if accept:
        headers["Accept"] = accept
    return headers


def create_session() -> requests.Session:
    """Create a requests session carrying the default headers."""
    session = requests.Session()
    session.headers.update(get_default_headers(accept="application/json"))
    return session
