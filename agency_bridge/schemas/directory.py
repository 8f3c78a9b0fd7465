from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DirectoryAgency(BaseModel):
    """Agency master data as served by the directory system."""

    # Agency numbers and postal codes arrive as JSON numbers for some agencies.
    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    agency_number: str | None = Field(default=None, alias="agencyNumber")
    company_name: str | None = Field(default=None, alias="companyName")
    address: str | None = None
    city: str | None = None
    zip: str | None = None
    country: str | None = None
    email: str | None = None
    phone: str | None = None
    name: str | None = None
    fax: str | None = None
    tax_number: str | None = Field(default=None, alias="taxNumber")
    iban: str | None = None
    bic: str | None = None
    value_added_tax_id: str | None = Field(default=None, alias="valueAddedTaxId")
    no_advertising_mails: bool | None = Field(default=None, alias="noAdvertisingMails")
    bank_name: str | None = Field(default=None, alias="bankName")
    collection_method: str | None = Field(default=None, alias="collectionMethod")
    company_short_code: str | None = Field(default=None, alias="companyShortCode")
    chain: str | None = None
    branch: int | None = None
