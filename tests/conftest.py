import mongomock
import pytest
from fastapi.testclient import TestClient

from capsulify_api.app.core.config import settings
from capsulify_api.app.core.db import Database
from capsulify_api.app.main import create_app

# ============================================================================
# Test store: every test gets a fresh in-memory mongomock client wrapped in
# the same Database object the app uses, injected through create_app().
# ============================================================================


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    """Keep PBKDF2 cheap in tests; the format and checks are unchanged."""
    monkeypatch.setattr(settings, "password_hash_iterations", 1000)


@pytest.fixture(name="database")
def database_fixture():
    database = Database(name="capsulify_test", client=mongomock.MongoClient())
    database.connect()
    yield database
    database.close()


@pytest.fixture(name="tag_ids")
def tag_ids_fixture(database: Database):
    """Seed the tags collection and return {name: _id}."""
    result = database.tags.insert_many([{"name": "Work"}, {"name": "Chic"}, {"name": "Casual"}])
    return dict(zip(["Work", "Chic", "Casual"], result.inserted_ids))


@pytest.fixture(name="client")
def client_fixture(database: Database):
    app = create_app(database)
    with TestClient(app) as client:
        yield client


@pytest.fixture(name="combo_payload")
def combo_payload_fixture():
    return {
        "comboName": "Smart casual Friday",
        "top": "white-tee",
        "bottom": "navy-chinos",
        "shoes": "loafers",
        "bag": "tote",
        "tags": ["Work", " Chic "],
        "layer": "denim-jacket",
    }
