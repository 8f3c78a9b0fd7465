"""
Client for the directory system, the source of truth for agency data.

Each call authenticates with a short-lived HS256 assertion signed with the
shared secret (60 seconds, fixed audience), minted fresh per request.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from urllib.parse import quote

import jwt
import requests
from pydantic import ValidationError

from agency_bridge.errors import DirectoryError
from agency_bridge.schemas.directory import DirectoryAgency

logger = logging.getLogger(__name__)


class DirectoryClient:
    def __init__(
        self,
        base_url: str,
        *,
        secret: str | None,
        audience: str,
        key_id: str,
        token_lifetime_seconds: int = 60,
        timeout: tuple[float, float] = (10.0, 30.0),
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._base = base_url if base_url.endswith("/") else f"{base_url}/"
        self._secret = secret
        self._audience = audience
        self._key_id = key_id
        self._lifetime = token_lifetime_seconds
        self._timeout = timeout
        self._clock = clock

    def _assertion(self) -> str:
        if not self._secret:
            raise DirectoryError("Directory signing secret is not configured")
        payload = {
            "aud": self._audience,
            "exp": int(self._clock()) + self._lifetime,
        }
        return jwt.encode(
            payload,
            self._secret,
            algorithm="HS256",
            headers={"typ": "JWT", "kid": self._key_id},
        )

    def get_agency_record(self, agency_number: str | None) -> DirectoryAgency | None:
        """
        Fetch agency master data.

        Returns None for a blank agency number (no request is made) and for
        404. Any other failure raises ``DirectoryError``.
        """
        if not agency_number or not agency_number.strip():
            logger.warning("Agency number is empty, skipping directory lookup")
            return None

        url = f"{self._base}{quote(agency_number.strip(), safe='')}"
        headers = {"Accept": "application/json", "Authorization": f"Bearer {self._assertion()}"}
        logger.debug("Directory agency lookup agency=%s", agency_number)
        try:
            resp = requests.get(url, headers=headers, timeout=self._timeout)
        except requests.RequestException as e:
            logger.error("Directory lookup failed agency=%s error=%s", agency_number, type(e).__name__)
            raise DirectoryError(f"Network error accessing directory: {type(e).__name__}") from e

        if resp.status_code == 404:
            logger.info("Agency not found in directory agency=%s", agency_number)
            return None
        if resp.status_code != 200:
            logger.error("Directory lookup returned status=%s agency=%s", resp.status_code, agency_number)
            raise DirectoryError(f"Directory returned status={resp.status_code}")

        try:
            body = resp.json()
        except ValueError as e:
            raise DirectoryError("Directory response is not JSON") from e
        if not body:
            logger.warning("Empty directory response agency=%s", agency_number)
            return None

        try:
            return DirectoryAgency.model_validate(body)
        except ValidationError as e:
            raise DirectoryError("Unexpected directory agency payload") from e
