"""Typed claim set produced after validating an agent token."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class TokenClaims:
    """
    Claims asserted by the directory system about an agent.

    All fields are optional at parse time. ``agency_number``, ``company_code``
    and ``job_id`` are the ones the reconciliation flow routes on.
    """

    subject: str | None = None
    agency_number: str | None = None
    company_code: str | None = None
    """Business-unit code; selects the microsite."""

    job_id: str | None = None
    """Agent's user id; numeric values are carried in their string form."""

    role: str | None = None
    issuer: str | None = None
    audience: str | None = None
    token_id: str | None = None
    agent_first_name: str | None = None
    agent_last_name: str | None = None
    issued_at: int | None = None
    not_before: int | None = None
    expires_at: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dict."""
        return asdict(self)


def _str_or_none(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _int_or_none(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def claims_from_payload(payload: dict[str, Any]) -> TokenClaims:
    """
    Build ``TokenClaims`` from a decoded token body.

    Wire names are the issuer's camelCase names (``agencyNumber``,
    ``companyCode``, ``jobId``, ``agentFirstName``...) plus the registered
    JWT claims.
    """
    return TokenClaims(
        subject=_str_or_none(payload.get("sub")),
        agency_number=_str_or_none(payload.get("agencyNumber")),
        company_code=_str_or_none(payload.get("companyCode")),
        job_id=_str_or_none(payload.get("jobId")),
        role=_str_or_none(payload.get("role")),
        issuer=_str_or_none(payload.get("iss")),
        audience=_str_or_none(payload.get("aud")),
        token_id=_str_or_none(payload.get("jti")),
        agent_first_name=_str_or_none(payload.get("agentFirstName")),
        agent_last_name=_str_or_none(payload.get("agentLastName")),
        issued_at=_int_or_none(payload.get("iat")),
        not_before=_int_or_none(payload.get("nbf")),
        expires_at=_int_or_none(payload.get("exp")),
    )
