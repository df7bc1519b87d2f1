# ---------------------------------------------------------------------------
# Shared pytest fixtures
#
# The environment is configured before any application import so the app
# never reaches for real AWS credentials: LOCAL_STORAGE=1 selects the
# filesystem backend and LOG_LEVEL=0 keeps test output quiet. Route tests
# inject their own backend through reset_storage().
# ---------------------------------------------------------------------------
import os

os.environ["LOCAL_STORAGE"] = "1"
os.environ["LOG_LEVEL"] = "0"
os.environ.pop("LOG_FILE", None)
os.environ.pop("CREDENTIALS_SOURCE", None)

import pytest
from fastapi.testclient import TestClient

from greenery_api.config import get_settings
from greenery_api.main import app
from greenery_api.services.storage import LocalStorage, reset_storage


@pytest.fixture(autouse=True)
def _fresh_state():
    get_settings.cache_clear()
    reset_storage()
    yield
    get_settings.cache_clear()
    reset_storage()


@pytest.fixture
def local_storage(tmp_path):
    storage = LocalStorage(str(tmp_path / "bucket"))
    reset_storage(storage)
    return storage


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def record():
    return {
        "greenery_id": "g1",
        "name": "Oak",
        "phone": "555-1",
        "email": "a@b.com",
        "address": "1 Main St",
    }
