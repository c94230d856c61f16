import logging
from typing import List, Optional

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from cartoon_creator.db.base import Base
from cartoon_creator.db.session import engine as default_engine

logger = logging.getLogger(__name__)


def init_db(bind: Optional[Engine] = None) -> List[str]:
    """Create any missing tables and return the table names now present."""
    from cartoon_creator import models  # noqa: F401  registers tables on Base.metadata

    bind = bind or default_engine
    Base.metadata.create_all(bind=bind)

    tables = inspect(bind).get_table_names()
    logger.info("[DB] %d tables ready: %s", len(tables), ", ".join(tables))
    return tables
