"""
Bearer tokens for the booking system, cached per site key.

Background for newcomers:
    Every booking-system API call needs an ``auth-token`` header. Tokens are
    minted by ``POST authentication/authenticate`` with a per-site technical
    user (the credentials table, loaded from YAML) and stay valid for 30
    minutes. We keep one token per site key and fetch a new one on the first
    read after it expired; there is no background refresh.

    Two requests that both find the token expired may both fetch a new one;
    the later write wins.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import requests
import yaml
from pydantic import BaseModel, Field

from agency_bridge.errors import NoCredentials, TokenFetchFailed

logger = logging.getLogger(__name__)

AUTH_ENDPOINT = "authentication/authenticate"
DEFAULT_TTL_SECONDS = 30 * 60


class SiteCredentials(BaseModel):
    username: str
    password: str


class CredentialsConfigModel(BaseModel):
    sites: dict[str, SiteCredentials] = Field(default_factory=dict)


def load_credentials(path: Path) -> dict[str, SiteCredentials]:
    """Read the ``booking_credentials`` table from YAML, keyed by lower-case site key."""
    raw_text = path.read_text(encoding="utf-8")
    raw: dict[str, Any] = yaml.safe_load(raw_text) or {}

    if "booking_credentials" not in raw:
        raise ValueError(f"Missing top-level 'booking_credentials' key in config: {path}")

    model = CredentialsConfigModel.model_validate(raw["booking_credentials"] or {})
    return {site.lower(): creds for site, creds in model.sites.items()}


@dataclass(frozen=True)
class _CachedToken:
    token: str
    issued_at: float


class BookingTokenCache:
    """
    In-memory token cache for the booking system.

    The lock only guards the dict; network calls happen outside it.
    """

    def __init__(
        self,
        base_url: str,
        credentials: Mapping[str, SiteCredentials],
        *,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        timeout: tuple[float, float] = (10.0, 30.0),
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._auth_url = f"{base_url.rstrip('/')}/{AUTH_ENDPOINT}"
        self._credentials = {site.lower(): creds for site, creds in credentials.items()}
        self._ttl = ttl_seconds
        self._timeout = timeout
        self._clock = clock
        self._tokens: dict[str, _CachedToken] = {}
        self._lock = threading.Lock()

    def has_credentials(self, site_key: str | None) -> bool:
        return bool(site_key) and site_key.lower() in self._credentials

    def get_token(self, site_key: str) -> str:
        """Return a valid token for ``site_key``, fetching one if needed."""
        if not site_key:
            raise NoCredentials("Site key is empty")
        key = site_key.lower()

        with self._lock:
            cached = self._tokens.get(key)
        if cached is not None and self._clock() < cached.issued_at + self._ttl:
            return cached.token

        logger.debug("Booking token expired or missing site=%s", key)
        creds = self._credentials.get(key)
        if creds is None:
            logger.error("No booking credentials configured site=%s", key)
            raise NoCredentials(f"No credentials configured for site: {key}")

        token = self._request_token(key, creds)
        with self._lock:
            self._tokens[key] = _CachedToken(token=token, issued_at=self._clock())
        logger.info("New booking token cached site=%s", key)
        return token

    def refresh(self, site_key: str) -> str:
        """Drop any cached token for ``site_key`` and fetch a new one."""
        logger.info("Refreshing booking token site=%s", site_key)
        if site_key:
            with self._lock:
                self._tokens.pop(site_key.lower(), None)
        return self.get_token(site_key)

    def clear(self) -> None:
        with self._lock:
            self._tokens.clear()
        logger.info("Booking token cache cleared")

    def _request_token(self, site_key: str, creds: SiteCredentials) -> str:
        body = {"username": creds.username, "password": creds.password, "micrositeId": site_key}
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        logger.info("Requesting booking token site=%s user=%s", site_key, creds.username)
        try:
            resp = requests.post(self._auth_url, json=body, headers=headers, timeout=self._timeout)
        except requests.RequestException as e:
            raise TokenFetchFailed(f"Token request failed: {type(e).__name__}") from e

        if resp.status_code != 200:
            raise TokenFetchFailed(f"Token request returned status={resp.status_code}")

        try:
            payload = resp.json()
        except ValueError as e:
            raise TokenFetchFailed("Token response is not JSON") from e

        token = payload.get("token") if isinstance(payload, dict) else None
        if not token:
            raise TokenFetchFailed("No token in booking authentication response")
        return str(token)
