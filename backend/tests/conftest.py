"""
Every test gets its own SQLite file so cascades never see another test's rows.
"""
import pytest
from fastapi.testclient import TestClient

from gymprogress.db import Store
from gymprogress.main import create_app


@pytest.fixture
def store(tmp_path):
    s = Store(f"sqlite:///{tmp_path / 'gym.db'}")
    s.init_schema()
    yield s
    s.dispose()


@pytest.fixture
def db(store):
    with store.session() as session:
        yield session


@pytest.fixture
def client(store):
    with TestClient(create_app(store)) as c:
        yield c
