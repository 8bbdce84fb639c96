from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
import logging

logger = logging.getLogger(__name__)

SessionLocal = sessionmaker(expire_on_commit=False)
Base = declarative_base()

_engine: Engine | None = None


def _is_sqlite_memory(database_url: str) -> bool:
    return database_url in ("sqlite://", "sqlite:///") or ":memory:" in database_url


def build_engine(database_url: str) -> Engine:
    """
    Create an engine for the given SQLAlchemy URL.

    SQLite connections are shared across the request threadpool; file
    databases run in WAL mode, in-memory databases share a single connection.
    """
    if not database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=False,
            pool_pre_ping=True,  # Verify connections are alive before using
            pool_recycle=3600,
        )

    if _is_sqlite_memory(database_url):
        return create_engine(
            database_url,
            connect_args={'check_same_thread': False},
            poolclass=StaticPool,
            echo=False,
        )

    engine = create_engine(
        database_url,
        connect_args={'check_same_thread': False},
        echo=False,
        pool_pre_ping=True,
    )

    # Enable WAL mode on connection
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA synchronous=NORMAL")
        cursor.execute("PRAGMA busy_timeout=5000")  # Wait up to 5s for locks instead of failing immediately
        cursor.close()

    return engine


def init_engine(database_url: str) -> Engine:
    """Build the process-wide engine and bind SessionLocal to it."""
    global _engine
    if _engine is not None:
        _engine.dispose()
    _engine = build_engine(database_url)
    SessionLocal.configure(bind=_engine)
    logger.info(f"Database engine initialized ({_engine.dialect.name})")
    return _engine


def get_engine() -> Engine:
    """Return the process-wide engine, building it from configuration on first use."""
    if _engine is None:
        from config.app_config import get_config
        return init_engine(get_config().database_url)
    return _engine


def get_db():
    """Dependency for FastAPI routes"""
    get_engine()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
