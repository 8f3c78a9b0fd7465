from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from agency_bridge.db.base import Base


class MicrositeMapping(Base):
    """Business-unit code -> microsite and booking-system site ids."""

    __tablename__ = "aer_cockpit_mapping_microsite"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    company_code: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    microsite: Mapped[str | None] = mapped_column(String(100), nullable=True)
    microsite_api: Mapped[str | None] = mapped_column(String(100), nullable=True)
    microsite_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
