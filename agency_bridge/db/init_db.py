from __future__ import annotations

from sqlalchemy.engine import Engine

from agency_bridge.db.base import Base
from agency_bridge.models import microsite as _microsite  # noqa: F401  (register tables)


def init_db(engine: Engine) -> None:
    """
    Ensure the microsite mapping table exists.

    Mappings are maintained by the directory team; nothing is seeded here.
    """

    Base.metadata.create_all(bind=engine)
