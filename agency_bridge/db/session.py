from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from agency_bridge.settings import get_settings


def _engine_options(url: str) -> dict[str, Any]:
    # The mapping table is read from FastAPI's worker threads.
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


_db_url = get_settings().resolved_db_url()

engine = create_engine(_db_url, **_engine_options(_db_url))

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, class_=Session)
