"""
Public key fetch and cache. No per-request fetches once a key is known.

Background for newcomers:
    The directory system signs agent tokens with an EC private key and
    publishes the matching public key as a PEM file at a URL derived from the
    token's issuer and ``kid``. Keys at a given URL never change, so a fetched
    key is kept for the life of the process. The cache is only emptied by an
    explicit ``clear()``.

    A failed fetch is never cached: the next token for the same URL tries the
    network again.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

import requests

logger = logging.getLogger(__name__)

USER_AGENT = "agency-bridge/1.0"


class KeyFetcher:
    """
    HTTP GET for public key material.

    Non-200 responses and network errors yield ``None``; callers never see a
    ``requests`` exception.
    """

    def __init__(self, timeout: tuple[float, float]) -> None:
        self._timeout = timeout

    def fetch(self, url: str) -> str | None:
        logger.info("Fetching public key url=%s", url)
        try:
            resp = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=self._timeout)
        except requests.RequestException as e:
            logger.warning("Public key fetch failed url=%s error=%s", url, type(e).__name__)
            return None

        if resp.status_code != 200:
            logger.warning("Public key fetch returned status=%s url=%s", resp.status_code, url)
            return None

        body = resp.text.strip()
        return body or None


class KeyCache:
    """
    In-memory map of key URL -> PEM text, populated lazily.

    Entries are written once and read many times. Concurrent misses for the
    same URL may both fetch; the last write wins.
    """

    def __init__(self, fetch: Callable[[str], str | None]) -> None:
        self._fetch = fetch
        self._keys: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, url: str) -> str | None:
        """Return the cached key for ``url``, fetching it on first use."""
        with self._lock:
            cached = self._keys.get(url)
        if cached is not None:
            logger.debug("Public key cache hit url=%s", url)
            return cached

        key = self._fetch(url)
        if not key:
            return None

        with self._lock:
            self._keys[url] = key
        logger.info("Public key cached url=%s", url)
        return key

    def clear(self) -> None:
        with self._lock:
            self._keys.clear()
        logger.info("Public key cache cleared")

    def __len__(self) -> int:
        with self._lock:
            return len(self._keys)
