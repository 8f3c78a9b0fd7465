from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

from agency_bridge.token_util.claims import TokenClaims

AUTHENTICATION_SUCCESSFUL = "Authentication successful"


class AgencyStatus(Enum):
    """Live state of an agency in the booking system, recomputed per request."""

    ACTIVE = "Agency exists and is active"
    INACTIVE = "Agency exists but is inactive - needs update"
    NOT_FOUND = "Agency not found in booking system"
    ERROR = "Error occurred while checking agency status"

    @property
    def description(self) -> str:
        return self.value


@dataclass(frozen=True)
class MicrositeTarget:
    """Where an agent is sent, and which booking-system site serves them."""

    url: str
    name: str | None
    site_key: str
    """Booking-system microsite id used for agency/user writes and credentials."""

    api_key: str
    """Booking-system microsite id used for the agency status read."""


@dataclass(frozen=True)
class AuthenticationOutcome:
    """
    Result of one authentication request.

    On success every reconciliation field is filled in, even when the booking
    system could not be brought in sync. On failure only ``success``,
    ``message`` and ``error`` are meaningful.
    """

    success: bool
    message: str
    error: str | None = None

    agent_first_name: str | None = None
    agent_last_name: str | None = None
    agency_number: str | None = None
    company_code: str | None = None
    role: str | None = None
    job_id: str | None = None
    language: str | None = None
    trip_type: str | None = None

    redirect_url: str | None = None
    microsite_name: str | None = None
    microsite: str | None = None
    microsite_api: str | None = None

    derived_password: str | None = None

    agency_status: str | None = None
    agency_status_description: str | None = None
    agency_synced: bool | None = None
    """None when no sync was attempted."""

    user_available: bool | None = None

    @classmethod
    def failure(cls, message: str, error: str | None = None) -> AuthenticationOutcome:
        return cls(success=False, message=message, error=error)

    @classmethod
    def succeeded(
        cls,
        *,
        claims: TokenClaims,
        target: MicrositeTarget,
        derived_password: str,
        agency_status: AgencyStatus,
        agency_synced: bool | None,
        user_available: bool,
        language: str,
        trip_type: str,
        redirect_url: str,
    ) -> AuthenticationOutcome:
        return cls(
            success=True,
            message=AUTHENTICATION_SUCCESSFUL,
            agent_first_name=claims.agent_first_name,
            agent_last_name=claims.agent_last_name,
            agency_number=claims.agency_number,
            company_code=claims.company_code,
            role=claims.role,
            job_id=claims.job_id,
            language=language,
            trip_type=trip_type,
            redirect_url=redirect_url,
            microsite_name=target.name,
            microsite=target.site_key,
            microsite_api=target.api_key,
            derived_password=derived_password,
            agency_status=agency_status.name,
            agency_status_description=agency_status.description,
            agency_synced=agency_synced,
            user_available=user_available,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dict."""
        return asdict(self)
