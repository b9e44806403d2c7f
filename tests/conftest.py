"""
Pytest fixtures for the plant tracker test suite.
"""

import pytest

from app import create_app
from tracker.config import Settings
from tracker.database import Database, init_db
from tracker.repository import PlantRepository


@pytest.fixture
def db_path(tmp_path):
    """Path of an initialized, empty plant database."""
    path = tmp_path / "plants.db"
    init_db(path)
    return path


@pytest.fixture
def settings(db_path, tmp_path):
    """Settings pointing at the temporary database, no config file."""
    return Settings(
        config_path=tmp_path / "missing.toml",
        database_path=str(db_path),
        log_level="warning",
    )


@pytest.fixture
def app(settings):
    """Create application for testing."""
    app = create_app(settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def repo(db_path):
    """PlantRepository inside an open transaction, committed on teardown."""
    with Database(db_path) as db:
        yield PlantRepository(db)


@pytest.fixture
def make_plant(client):
    """POST a plant through the API and return its JSON record."""
    def _make(**overrides):
        payload = {
            "name": "Monstera",
            "purchase_date": "2024-03-15",
            "location": "Living room",
            "watering_interval_days": 7,
            "last_watered": None,
        }
        payload.update(overrides)
        resp = client.post("/api/plants", json=payload)
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()["data"]
    return _make
