"""
Shared fixtures: every test gets an app built from explicit settings
backed by its own SQLite file.
"""
import pytest
from fastapi.testclient import TestClient

from school_platform.school_platform.school_service.config import Settings
from school_platform.school_platform.school_service.main import create_app

TEST_SECRET = "test-signing-secret-0123456789abcdef"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        JWT_SECRET=TEST_SECRET,
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db_session(client, app):
    """Session on the same database the client talks to."""
    session = app.state.session_factory()
    yield session
    session.close()
