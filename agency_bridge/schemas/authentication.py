from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class AuthenticationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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
    user_available: bool | None = None
