"""Key endpoint configuration from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_QA_KEY_URL = "https://qa-cockpit-aer-de.aerticket.org/common/keys/{kid}.pub"
DEFAULT_STG_KEY_URL = "https://stg-cockpit-aer-de.aerticket.org/common/keys/{kid}.pub"
DEFAULT_PROD_KEY_URL = "https://cockpit.aerticket.de/common/keys/{kid}.pub"


def _getenv(key: str, default: str) -> str:
    raw = os.environ.get(key)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def _getenv_float(key: str, default: float) -> float:
    raw = os.environ.get(key)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class KeyEndpointConfig:
    """
    Where the issuer publishes its ES256 public keys, per environment.

    Each template must contain ``{kid}``; the key id from the token header is
    substituted into it.

    Optional:
        JWT_QA_PUBLIC_KEY_URL: template for issuers starting with ``qa-``.
        JWT_STG_PUBLIC_KEY_URL: template for issuers starting with ``stg-``.
        JWT_PROD_PUBLIC_KEY_URL: template for every other issuer.
        JWT_KEY_CONNECT_TIMEOUT_SECONDS: connect timeout for key fetches (default 5).
        JWT_KEY_READ_TIMEOUT_SECONDS: read timeout for key fetches (default 10).
    """

    qa_key_url: str = DEFAULT_QA_KEY_URL
    stg_key_url: str = DEFAULT_STG_KEY_URL
    prod_key_url: str = DEFAULT_PROD_KEY_URL
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 10.0

    @property
    def timeout(self) -> tuple[float, float]:
        return (self.connect_timeout_seconds, self.read_timeout_seconds)

    def environment_templates(self) -> tuple[tuple[str, str], ...]:
        """Issuer prefix -> URL template, checked in order."""
        return (
            ("qa-", self.qa_key_url),
            ("stg-", self.stg_key_url),
        )

    @classmethod
    def from_environ(cls) -> KeyEndpointConfig:
        return cls(
            qa_key_url=_getenv("JWT_QA_PUBLIC_KEY_URL", DEFAULT_QA_KEY_URL),
            stg_key_url=_getenv("JWT_STG_PUBLIC_KEY_URL", DEFAULT_STG_KEY_URL),
            prod_key_url=_getenv("JWT_PROD_PUBLIC_KEY_URL", DEFAULT_PROD_KEY_URL),
            connect_timeout_seconds=_getenv_float("JWT_KEY_CONNECT_TIMEOUT_SECONDS", 5.0),
            read_timeout_seconds=_getenv_float("JWT_KEY_READ_TIMEOUT_SECONDS", 10.0),
        )
