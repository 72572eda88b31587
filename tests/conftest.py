"""Shared pytest fixtures for the Flask app and its MongoDB-backed stores."""

from __future__ import annotations

import sys
from pathlib import Path

import mongomock
import pytest

# Ensure the application package is importable during tests.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from portal import database  # noqa: E402
from portal.main import create_app  # noqa: E402

BASE_CONFIG = {
    "TESTING": True,
    "MONGODB_URI": None,
    "ADMIN_USERNAME": "admin",
    "ADMIN_PASSWORD": "s3cret-pass",
    "SMTP_HOST": None,
    "SMTP_USER": None,
    "SMTP_PASS": None,
    "RATE_LIMIT_MAX_REQUESTS": 100,
    "RATE_LIMIT_WINDOW_SECONDS": 60,
    "ORGANIZATION_NAME": "SentriX",
}


@pytest.fixture(autouse=True)
def mongo_db(monkeypatch: pytest.MonkeyPatch):
    """Provide an isolated in-memory MongoDB database for each test."""
    test_db_name = "test_internship_applications"

    client = mongomock.MongoClient()
    db = client[test_db_name]

    monkeypatch.setattr(database, "get_mongo_client", lambda: client)
    monkeypatch.setattr(database, "get_database", lambda: db)

    yield db

    client.drop_database(test_db_name)


@pytest.fixture
def make_app():
    """Build an app from the test defaults plus per-test overrides."""

    def _make_app(**overrides):
        return create_app(dict(BASE_CONFIG, **overrides))

    return _make_app


@pytest.fixture
def app(make_app):
    """App running in mock mode (no MONGODB_URI)."""
    return make_app()


@pytest.fixture
def db_app(make_app, mongo_db):
    """App backed by the mongomock database."""
    return make_app(MONGODB_URI="mongodb://testserver:27017/")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db_client(db_app):
    return db_app.test_client()
