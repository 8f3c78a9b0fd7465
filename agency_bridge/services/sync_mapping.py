"""Translate directory agency data into booking-system request bodies."""

from __future__ import annotations

from agency_bridge.schemas.booking import BookingAgencyRequest, BookingUserRequest
from agency_bridge.schemas.directory import DirectoryAgency
from agency_bridge.token_util.claims import TokenClaims

BUSINESS_NAME = "AERTiCKET Conso GmbH Grenzenlos Reisen"
USER_ROLES = ("user", "agent")


def to_agency_request(agency: DirectoryAgency) -> BookingAgencyRequest:
    # Fields the directory has no equivalent for get the booking system's
    # placeholder values.
    return BookingAgencyRequest(
        external_id=agency.agency_number,
        companyname=agency.company_name,
        address_text=agency.address,
        city=agency.city,
        postal_code=agency.zip,
        country=agency.country,
        email=agency.email,
        phone_number=agency.phone,
        tax_number=agency.tax_number,
        value_added_tax_id=agency.value_added_tax_id,
        iban=agency.iban,
        bic=agency.bic,
        bank_name=agency.bank_name,
        collection_method=agency.collection_method,
        company_short_code=agency.company_short_code,
        chain=agency.chain,
        active="true",
        taxes="0",
        invoice_type="NET",
        document_number="-",
        contact_person_name="-",
        contact_person_last_name="-",
        business_name=BUSINESS_NAME,
    )


def to_user_request(claims: TokenClaims, agency: DirectoryAgency) -> BookingUserRequest:
    """New booking-system user for the agent; the password is set on first login."""
    return BookingUserRequest(
        username=claims.job_id or "",
        password="",
        name=claims.agent_first_name,
        surname=claims.agent_last_name,
        email=agency.email,
        agency=agency.agency_number,
        active="true",
        roles=list(USER_ROLES),
    )
