from database import Base, get_engine
from sqlalchemy.engine import Engine
import logging

import models  # noqa: F401  registers tables on Base.metadata

logger = logging.getLogger(__name__)


def init_database(engine: Engine | None = None):
    """Create all tables that do not exist yet."""
    engine = engine or get_engine()
    Base.metadata.create_all(bind=engine)
    logger.info(f"✅ Database ready: tables {sorted(Base.metadata.tables)}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_database()
