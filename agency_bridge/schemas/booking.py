from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class BookingAgency(BaseModel):
    """Agency record as returned by the booking system (only fields we read)."""

    # The booking system sends ids as numbers or strings depending on the site.
    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    id: str | None = None
    active: bool | str | None = None
    """JSON boolean, or the string ``"true"``/``"false"`` in any case."""

    name: str | None = None
    email: str | None = None
    city: str | None = None
    country: str | None = None
    postal_code: str | None = Field(default=None, alias="postalCode")
    business_name: str | None = Field(default=None, alias="businessName")

    @property
    def is_active(self) -> bool:
        if isinstance(self.active, bool):
            return self.active
        return (self.active or "").strip().lower() == "true"


class BookingAgencyRequest(BaseModel):
    """Create/update body for ``agency/{site}/``."""

    model_config = ConfigDict(populate_by_name=True)

    external_id: str | None = Field(default=None, alias="externalId")
    companyname: str | None = None
    address_text: str | None = Field(default=None, alias="addressText")
    city: str | None = None
    postal_code: str | None = Field(default=None, alias="postalCode")
    country: str | None = None
    email: str | None = None
    phone_number: str | None = Field(default=None, alias="phoneNumber")
    taxes: str | None = None
    active: str | None = None
    document_number: str | None = Field(default=None, alias="documentNumber")
    contact_person_name: str | None = Field(default=None, alias="contactPersonName")
    contact_person_last_name: str | None = Field(default=None, alias="contactPersonLastName")
    business_name: str | None = Field(default=None, alias="businessName")
    invoice_type: str | None = Field(default=None, alias="invoiceType")
    bic: str | None = Field(default=None, alias="BIC")
    iban: str | None = Field(default=None, alias="IBAN")
    bank_name: str | None = Field(default=None, alias="bankName")
    collection_method: str | None = Field(default=None, alias="collectionMethod")
    company_short_code: str | None = Field(default=None, alias="companyShortCode")
    chain: str | None = None
    tax_number: str | None = Field(default=None, alias="taxNumber")
    value_added_tax_id: str | None = Field(default=None, alias="valueAddedTaxId")

    def to_wire(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)


class BookingUserRequest(BaseModel):
    """Create body for ``user/{site}/{agency}``."""

    username: str
    password: str = ""
    name: str | None = None
    surname: str | None = None
    roles: list[str] = Field(default_factory=list)
    email: str | None = None
    agency: str | None = None
    active: str = "true"

    def to_wire(self) -> dict[str, object]:
        return self.model_dump()
