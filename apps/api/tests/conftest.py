from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient

# Settings are read at import time; set them before the app is imported.
os.environ.setdefault("ENV", "test")
os.environ.setdefault("METRICS_ENABLED", "false")
os.environ.setdefault("CONVENE_AUTOSAVE", "true")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from convene.db import StoreSession, open_session  # noqa: E402
from convene.main import create_app  # noqa: E402
from convene.store.event_store import EventStore  # noqa: E402


@pytest.fixture
def store() -> EventStore:
    return EventStore()


@pytest.fixture
def data_path(tmp_path):
    return tmp_path / "data" / "convene_data.txt"


@pytest.fixture
def db_session(data_path) -> StoreSession:
    return open_session(path=data_path, autosave=True)


@pytest.fixture
def client(db_session):
    with TestClient(create_app(db_session)) as test_client:
        yield test_client
