"""
Client for the booking system's agency and user resources.

Reads that the flow depends on (``get_agency``) raise ``BookingSystemError``
on anything other than 200 or 404, so the caller can tell "not there" from
"could not ask". Writes and the user existence check return booleans and
log failures instead of raising.
"""

from __future__ import annotations

import logging
from urllib.parse import quote

import requests
from pydantic import ValidationError

from agency_bridge.errors import BookingAuthError, BookingSystemError
from agency_bridge.schemas.booking import BookingAgency, BookingAgencyRequest, BookingUserRequest

from .booking_auth import BookingTokenCache

logger = logging.getLogger(__name__)

AGENCY_LANGUAGE = "DE"
_PLAIN_FEES = {"plainfees": "true"}


def _segment(value: str) -> str:
    return quote(value, safe="")


class BookingClient:
    def __init__(
        self,
        base_url: str,
        tokens: BookingTokenCache,
        *,
        timeout: tuple[float, float] = (10.0, 30.0),
    ) -> None:
        self._base = base_url.rstrip("/")
        self._tokens = tokens
        self._timeout = timeout

    def _headers(self, site: str) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "auth-token": self._tokens.get_token(site),
        }

    def _agency_collection_url(self, site: str) -> str:
        return f"{self._base}/agency/{_segment(site)}/"

    def get_agency(self, site: str, agency_number: str) -> BookingAgency | None:
        """Return the agency record, or None when the booking system has none."""
        url = f"{self._base}/agency/{_segment(site)}/{_segment(agency_number)}"
        logger.debug("Booking agency lookup site=%s agency=%s", site, agency_number)
        try:
            resp = requests.get(
                url,
                params={"lang": AGENCY_LANGUAGE},
                headers=self._headers(site),
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.error("Booking agency lookup failed site=%s error=%s", site, type(e).__name__)
            raise BookingSystemError(f"Network error accessing booking system: {type(e).__name__}") from e

        if resp.status_code == 404:
            logger.info("Agency not found in booking system site=%s agency=%s", site, agency_number)
            return None
        if resp.status_code != 200:
            logger.error("Booking agency lookup returned status=%s site=%s", resp.status_code, site)
            raise BookingSystemError(f"Booking system returned status={resp.status_code}")

        try:
            body = resp.json()
        except ValueError as e:
            raise BookingSystemError("Booking agency response is not JSON") from e
        if not body:
            logger.warning("Empty agency response from booking system site=%s", site)
            return None

        try:
            return BookingAgency.model_validate(body)
        except ValidationError as e:
            raise BookingSystemError("Unexpected booking agency payload") from e

    def create_agency(self, request: BookingAgencyRequest, site: str) -> bool:
        logger.info("Creating agency in booking system site=%s agency=%s", site, request.external_id)
        return self._send(
            "POST",
            self._agency_collection_url(site),
            site,
            request.to_wire(),
            what="agency creation",
            params=_PLAIN_FEES,
        )

    def update_agency(self, request: BookingAgencyRequest, site: str) -> bool:
        logger.info("Updating agency in booking system site=%s agency=%s", site, request.external_id)
        return self._send(
            "PUT",
            self._agency_collection_url(site),
            site,
            request.to_wire(),
            what="agency update",
            params=_PLAIN_FEES,
        )

    def get_user(self, site: str, agency_number: str, job_id: str) -> bool:
        """True iff the booking system answers 200 for the user."""
        url = f"{self._base}/user/{_segment(site)}/{_segment(agency_number)}/{_segment(job_id)}"
        try:
            resp = requests.get(url, headers=self._headers(site), timeout=self._timeout)
        except (requests.RequestException, BookingAuthError) as e:
            logger.error("Booking user lookup failed site=%s error=%s", site, type(e).__name__)
            return False

        exists = resp.status_code == 200
        logger.debug("Booking user exists=%s site=%s agency=%s user=%s", exists, site, agency_number, job_id)
        return exists

    def create_user(self, request: BookingUserRequest, site: str) -> bool:
        url = f"{self._base}/user/{_segment(site)}/{_segment(request.agency or '')}"
        logger.info(
            "Creating user in booking system site=%s agency=%s username=%s",
            site,
            request.agency,
            request.username,
        )
        return self._send("POST", url, site, request.to_wire(), what="user creation")

    def _send(
        self,
        method: str,
        url: str,
        site: str,
        body: dict[str, object],
        *,
        what: str,
        params: dict[str, str] | None = None,
    ) -> bool:
        try:
            resp = requests.request(
                method,
                url,
                params=params,
                json=body,
                headers=self._headers(site),
                timeout=self._timeout,
            )
        except (requests.RequestException, BookingAuthError) as e:
            logger.error("Booking %s failed site=%s error=%s", what, site, type(e).__name__)
            return False

        success = resp.status_code == 200
        logger.info("Booking %s result=%s status=%s", what, "SUCCESS" if success else "FAILED", resp.status_code)
        return success
