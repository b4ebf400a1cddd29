"""endoflife.date client with on-disk caching."""

from typing import Dict, Optional

import requests

from harbinger.config import DEFAULT_EOL_API_URL, DEFAULT_HTTP_TIMEOUT
from harbinger.exceptions import EolFetchError
from harbinger.http_client import create_session
from harbinger.logging_config import logger

from .cache import EolCache, EolTable


class EndOfLifeSource:
    """
    Fetches per-product cycle tables from the endoflife.date API.

    Lookup order for a product:
    1. Tables already fetched during this invocation
    2. A fresh cache file (younger than 24 hours)
    3. The API; a successful response is written back to the cache
    4. A stale cache file, if the API is unavailable

    ``fetch`` never raises. None means no data is available at all.
    """

    def __init__(
        self,
        cache: EolCache,
        base_url: str = DEFAULT_EOL_API_URL,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
    ) -> None:
        self.cache = cache
        self.base_url = base_url.rstrip("/")
        self.session = session or create_session()
        self.timeout = timeout
        self._tables: Dict[str, Optional[EolTable]] = {}

    def fetch(self, product: str) -> Optional[EolTable]:
        """
        Get the cycle table for a product.

        Args:
            product: endoflife.date product slug (e.g., "postgresql")

        Returns:
            List of cycle entries, or None if neither the API nor the cache has data
        """
        if product in self._tables:
            return self._tables[product]

        if self.cache.is_fresh(product):
            table = self.cache.read(product)
            if table is not None:
                logger.debug(f"Using cached EOL data for {product}")
                self._tables[product] = table
                return table

        try:
            table = self._fetch_from_api(product)
        except EolFetchError as e:
            table = self.cache.read(product)
            if table is not None:
                logger.warning(f"{e}; using stale cached data for {product}")
            else:
                logger.warning(f"{e}; no cached data for {product}")
            self._tables[product] = table
            return table

        self.cache.write(product, table)
        self._tables[product] = table
        return table

    def refresh(self, product: str) -> Optional[EolTable]:
        """
        Re-download a product table regardless of cache freshness.

        Returns:
            The new table, or None if the API request failed (the cache is left untouched)
        """
        try:
            table = self._fetch_from_api(product)
        except EolFetchError as e:
            logger.warning(str(e))
            return None
        self.cache.write(product, table)
        self._tables[product] = table
        return table

    def _fetch_from_api(self, product: str) -> EolTable:
        """
        Query ``<base_url>/<product>.json``.

        Raises:
            EolFetchError: On network errors, non-2xx responses or unexpected payloads
        """
        url = f"{self.base_url}/{product}.json"
        logger.debug(f"Fetching EOL data: {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "unknown"
            raise EolFetchError(f"EOL API request for {product} failed with status {status}")
        except requests.exceptions.RequestException as e:
            raise EolFetchError(f"EOL API request for {product} failed: {e}")
        except ValueError as e:
            raise EolFetchError(f"EOL API returned invalid JSON for {product}: {e}")

        if not isinstance(data, list):
            raise EolFetchError(f"EOL API returned an unexpected payload for {product}")
        return data
