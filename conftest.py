import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from src.core import Settings
from src.db import Database
from src.main import create_app


def sqlite_url(path) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest_asyncio.fixture
async def database(tmp_path):
    """Fresh SQLite database with all tables created"""
    db = Database(sqlite_url(tmp_path / "flashcards.db"))
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    async with database.session_factory() as session:
        yield session


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        DATABASE_URL=sqlite_url(tmp_path / "api.db"),
        RUN_MIGRATIONS=False,
        PROJECT_NAME="Flashcards API (tests)",
    )


@pytest.fixture
def client(test_settings):
    """TestClient running the app lifespan against a temporary database"""
    app = create_app(test_settings)
    with TestClient(app) as test_client:
        yield test_client
