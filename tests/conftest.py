import os
from unittest.mock import patch

import pytest

from habitboard.context import SessionContext
from tests.support import ALICE, TEST_TOKEN

# Set test environment variables
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("BACKEND_SESSION_SECRET", "test-secret")
os.environ["BACKEND_LOG_LEVEL"] = "WARNING"
os.environ["DASHBOARD_LOG_LEVEL"] = "WARNING"


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "habitboard-test.db"


@pytest.fixture
def backend_client(db_path, monkeypatch):
    """FastAPI TestClient backed by a fresh sqlite file."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_path}")
    monkeypatch.setenv("BACKEND_SESSION_SECRET", TEST_TOKEN)
    monkeypatch.setenv("ALLOWED_EMAILS", "")
    monkeypatch.setenv("DASHBOARD_TIMEZONE", "UTC")

    from fastapi.testclient import TestClient

    from habitboard_backend import db, settings
    from habitboard_backend.main import create_app

    settings.reset_settings()
    db._engine = None
    db._session_factory = None
    with TestClient(create_app()) as client:
        yield client
    settings.reset_settings()


@pytest.fixture
def session_ctx():
    return SessionContext(user_email=ALICE, token=TEST_TOKEN, api_base_url="http://store.test")


@pytest.fixture
def mock_request():
    """Patch the API client's single entry point used by the data layer."""
    with patch("habitboard.data.repositories.api_client.request") as mocked:
        yield mocked
