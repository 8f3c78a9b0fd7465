from __future__ import annotations

import logging
from collections.abc import Callable

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from agency_bridge.models.microsite import MicrositeMapping

from .domain import MicrositeTarget

logger = logging.getLogger(__name__)


class MicrositeRepository:
    """
    Read-only lookup of the microsite a business-unit code is served by.

    Database errors are logged and reported as "no mapping" so the caller
    falls back to the default microsite.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def lookup(self, company_code: str | None) -> MicrositeTarget | None:
        if not company_code:
            return None

        stmt = (
            select(MicrositeMapping)
            .where(MicrositeMapping.company_code == company_code)
            .order_by(MicrositeMapping.id)
            .limit(1)
        )
        try:
            with self._session_factory() as db:
                mapping = db.scalars(stmt).first()
        except SQLAlchemyError as e:
            logger.error("Microsite lookup failed company_code=%s error=%s", company_code, type(e).__name__)
            return None

        if mapping is None:
            logger.warning("No microsite mapping found company_code=%s", company_code)
            return None
        if not mapping.microsite_url:
            logger.warning("Microsite mapping has no URL company_code=%s id=%s", company_code, mapping.id)
            return None

        logger.info("Microsite mapping found company_code=%s url=%s", company_code, mapping.microsite_url)
        return MicrositeTarget(
            url=mapping.microsite_url,
            name=mapping.name,
            site_key=mapping.microsite or "",
            api_key=mapping.microsite_api or "",
        )
