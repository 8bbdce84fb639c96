import sys
from pathlib import Path

# Add backend directory to Python path FIRST
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Now import after path is set
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from config.app_config import AppConfig
from database import build_engine
from models import Base
from repositories.memory_repository import InMemoryMovieRepository
from repositories.movie_repository import SqlMovieRepository
from services.movie_service import MovieService
from utils.keyed_lock import KeyedLock


@pytest.fixture
def db_session():
    """Create in-memory database for testing"""
    engine = build_engine('sqlite://')
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def app_config() -> AppConfig:
    """Configuration independent of the developer's environment and .env file"""
    return AppConfig(
        _env_file=None,
        database_url="sqlite://",
        default_page_size=10,
        max_page_size=100,
    )


@pytest.fixture
def sql_store(db_session) -> SqlMovieRepository:
    return SqlMovieRepository(db_session)


@pytest.fixture
def memory_store() -> InMemoryMovieRepository:
    return InMemoryMovieRepository()


@pytest.fixture(params=["sql", "memory"])
def store(request, db_session):
    """Every MovieStore implementation, for contract tests"""
    if request.param == "sql":
        return SqlMovieRepository(db_session)
    return InMemoryMovieRepository()


@pytest.fixture
def service(memory_store, app_config) -> MovieService:
    return MovieService(memory_store, app_config, locks=KeyedLock())


@pytest.fixture
def movie_payload() -> dict:
    return {
        "title": "The Godfather",
        "genre": "Crime",
        "duration_minutes": 175,
        "description": "The aging patriarch of a crime dynasty transfers control to his son.",
    }


@pytest.fixture
def client(db_session, app_config):
    """TestClient wired to the in-memory SQLite session.

    The lifespan is not entered, so no engine or log file is created.
    """
    from dependencies import get_app_config, get_movie_store
    from main import app

    app.dependency_overrides[get_movie_store] = lambda: SqlMovieRepository(db_session)
    app.dependency_overrides[get_app_config] = lambda: app_config
    yield TestClient(app)
    app.dependency_overrides.clear()
