"""
Deterministic redirect password for an agent.

The booking-system user created for an agent gets this value as its login
password, and the redirect carries it again on every visit. It is derived,
never stored: ``md5(job_id + "_" + agency_number + SECRET_SUFFIX)`` as
lower-case hex. Missing fields count as empty strings.
"""

from __future__ import annotations

import hashlib
import hmac
import logging

logger = logging.getLogger(__name__)

SECRET_SUFFIX = "_*seCrEt+"


def derive_credential(job_id: str | None, agency_number: str | None) -> str:
    job = (job_id or "").strip()
    agency = (agency_number or "").strip()
    plain = f"{job}_{agency}{SECRET_SUFFIX}"
    logger.debug("Deriving credential job_id=%s agency_number=%s", job, agency)
    return hashlib.md5(plain.encode("utf-8")).hexdigest()


def verify_credential(provided: str | None, job_id: str | None, agency_number: str | None) -> bool:
    """Check a password presented back to us against the derived value."""
    if not provided:
        return False
    expected = derive_credential(job_id, agency_number)
    return hmac.compare_digest(expected, provided)
