"""
Authentication and reconciliation flow.

Background for newcomers:
    An agent arrives from the directory system with a signed token. Before we
    can send them to their microsite, the booking system behind that microsite
    must know their agency and their user. The flow is:

    1.  Reject an empty token.
    2.  Normalize language and trip type (never rejected, only cleaned up).
    3.  Validate the token and read the claims.
    4.  Find the microsite for the agent's business-unit code, or fall back to
        the default microsite.
    5.  Derive the agent's booking-system password.
    6.  Check the agency in the booking system and, if it is missing or
        inactive, copy it over from the directory system.
    7.  Check the user in the booking system and create it if missing.
    8.  Build the redirect URL.

    Only steps 1, 3 and 5 can fail the request. Anything that goes wrong in
    6 and 7 is logged and shows up as status fields in the outcome, because
    the agent still needs a redirect when a backend is having a bad day.
"""

from __future__ import annotations

import logging
import re
from typing import Protocol

from agency_bridge.clients.booking import BookingClient
from agency_bridge.clients.directory import DirectoryClient
from agency_bridge.errors import (
    AuthenticationError,
    AuthenticationFailed,
    CredentialDerivationFailed,
    EmptyToken,
    UpstreamError,
)
from agency_bridge.token_util.claims import TokenClaims
from agency_bridge.token_util.errors import TokenValidationError
from agency_bridge.token_util.validator import EcTokenValidator

from .credentials import derive_credential
from .domain import AgencyStatus, AuthenticationOutcome, MicrositeTarget
from .redirect import build_redirect_url
from .sync_mapping import to_agency_request, to_user_request

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "DE"
LANGUAGE_PATTERN = re.compile(r"^[A-Za-z]{2}$")
TRIP_TYPE_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,30}$")
_NON_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9]")


class MicrositeLookup(Protocol):
    def lookup(self, company_code: str | None) -> MicrositeTarget | None: ...


def normalize_language(language: str | None, default: str = DEFAULT_LANGUAGE) -> str:
    """``"de-DE"`` -> ``"DE"``; blank or non-alphabetic input -> ``default``."""
    if not language or not language.strip():
        return default
    candidate = language.strip()[:2].upper()
    return candidate if LANGUAGE_PATTERN.match(candidate) else default


def normalize_trip_type(trip_type: str | None) -> str:
    """Keep valid values, strip anything else down to alphanumerics."""
    if not trip_type or not trip_type.strip():
        return ""
    candidate = trip_type.strip()
    if not TRIP_TYPE_PATTERN.match(candidate):
        candidate = _NON_ALPHANUMERIC.sub("", candidate)
    return candidate


class AuthenticationService:
    """
    Runs one authentication request end to end.

    Holds no per-request state; one instance serves all concurrent requests.
    The shared caches live in the injected validator and booking client.
    """

    def __init__(
        self,
        *,
        validator: EcTokenValidator,
        microsites: MicrositeLookup,
        booking: BookingClient,
        directory: DirectoryClient,
        fallback: MicrositeTarget,
        default_language: str = DEFAULT_LANGUAGE,
    ) -> None:
        self._validator = validator
        self._microsites = microsites
        self._booking = booking
        self._directory = directory
        self._fallback = fallback
        self._default_language = default_language

    def authenticate(
        self,
        token: str | None,
        language: str | None = None,
        trip_type: str | None = None,
    ) -> AuthenticationOutcome:
        """
        Authenticate the agent and prepare their redirect.

        Never raises for expected failures: hard failures come back as an
        outcome with ``success=False`` and the first failure's message.
        """
        try:
            return self._authenticate(token, language, trip_type)
        except AuthenticationError as e:
            logger.warning("Authentication failed: %s (%s)", e, type(e).__name__)
            return AuthenticationOutcome.failure(str(e), error=type(e).__name__)

    def _authenticate(
        self,
        token: str | None,
        language: str | None,
        trip_type: str | None,
    ) -> AuthenticationOutcome:
        if not token or not token.strip():
            raise EmptyToken("Token cannot be empty")

        normalized_language = normalize_language(language, self._default_language)
        normalized_type = normalize_trip_type(trip_type)
        logger.info("Authenticating agent lang=%s type=%s", normalized_language, normalized_type)

        claims = self._validate(token.strip())
        logger.info(
            "Token validated agent=%s %s company=%s agency=%s",
            claims.agent_first_name,
            claims.agent_last_name,
            claims.company_code,
            claims.agency_number,
        )

        target = self._resolve_target(claims.company_code)
        password = self._derive_password(claims)

        agency_number = claims.agency_number or ""
        agency_status, agency_synced = self._ensure_agency(agency_number, target)
        user_available = self._ensure_user(claims, target)

        redirect_url = build_redirect_url(
            target.url,
            normalized_language,
            normalized_type,
            claims.job_id or "",
            password,
            agency_number,
        )

        return AuthenticationOutcome.succeeded(
            claims=claims,
            target=target,
            derived_password=password,
            agency_status=agency_status,
            agency_synced=agency_synced,
            user_available=user_available,
            language=normalized_language,
            trip_type=normalized_type,
            redirect_url=redirect_url,
        )

    def _validate(self, token: str) -> TokenClaims:
        try:
            return self._validator.validate(token)
        except TokenValidationError as e:
            raise AuthenticationFailed(f"Failed to validate token: {e}") from e

    def _resolve_target(self, company_code: str | None) -> MicrositeTarget:
        target = self._microsites.lookup(company_code)
        if target is None:
            logger.warning("Using fallback microsite company_code=%s", company_code)
            return self._fallback
        return target

    def _derive_password(self, claims: TokenClaims) -> str:
        try:
            password = derive_credential(claims.job_id, claims.agency_number)
        except (TypeError, ValueError) as e:
            raise CredentialDerivationFailed("Failed to generate user password") from e
        if not password:
            raise CredentialDerivationFailed("Failed to generate user password")
        return password

    # ---------- Reconciliation ----------

    def _agency_status(self, site: str, agency_number: str) -> AgencyStatus:
        try:
            record = self._booking.get_agency(site, agency_number)
        except UpstreamError as e:
            logger.error("Agency status check failed site=%s agency=%s: %s", site, agency_number, e)
            return AgencyStatus.ERROR

        if record is None:
            return AgencyStatus.NOT_FOUND
        return AgencyStatus.ACTIVE if record.is_active else AgencyStatus.INACTIVE

    def _ensure_agency(self, agency_number: str, target: MicrositeTarget) -> tuple[AgencyStatus, bool | None]:
        """
        Return the agency's status as first observed, and the sync result.

        The sync result is None when no sync was attempted (ACTIVE or ERROR).
        """
        status = self._agency_status(target.api_key, agency_number)
        logger.info("Agency status agency=%s status=%s", agency_number, status.name)

        if status not in (AgencyStatus.INACTIVE, AgencyStatus.NOT_FOUND):
            return status, None

        synced = self._sync_agency(agency_number, target.site_key, status)
        if synced:
            logger.info("Agency synchronized from directory agency=%s", agency_number)
        else:
            logger.warning("Agency synchronization from directory failed agency=%s", agency_number)
        return status, synced

    def _sync_agency(self, agency_number: str, site: str, status: AgencyStatus) -> bool:
        # Success means the booking system returns the agency afterwards;
        # field values are not compared.
        try:
            record = self._directory.get_agency_record(agency_number)
            if record is None:
                logger.warning("Agency not found in directory agency=%s", agency_number)
                return False

            request = to_agency_request(record)
            if status is AgencyStatus.NOT_FOUND:
                ok = self._booking.create_agency(request, site)
            else:
                ok = self._booking.update_agency(request, site)
            if not ok:
                return False

            return self._booking.get_agency(site, agency_number) is not None
        except Exception:  # noqa: BLE001
            logger.warning("Error syncing agency from directory agency=%s", agency_number, exc_info=True)
            return False

    def _ensure_user(self, claims: TokenClaims, target: MicrositeTarget) -> bool:
        site = target.site_key
        agency_number = claims.agency_number or ""
        job_id = claims.job_id or ""
        try:
            if self._booking.get_user(site, agency_number, job_id):
                logger.debug("User exists user=%s agency=%s", job_id, agency_number)
                return True

            logger.debug("User missing, creating from directory data user=%s agency=%s", job_id, agency_number)
            record = self._directory.get_agency_record(agency_number)
            if record is None:
                logger.warning("Cannot build booking user without directory agency user=%s", job_id)
                return False

            created = self._booking.create_user(to_user_request(claims, record), site)
            if created:
                logger.info("User created in booking system user=%s", job_id)
            else:
                logger.warning("User creation in booking system failed user=%s", job_id)
            return created
        except Exception:  # noqa: BLE001
            logger.warning("Error ensuring booking user user=%s", job_id, exc_info=True)
            return False
