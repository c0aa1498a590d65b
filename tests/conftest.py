import mongomock
import pytest
from fastapi.testclient import TestClient

from tasky.core.config import Settings
from tasky.core.database import Store
from tasky.main import create_app

VALID_USER_ID = "64b7f0c2a1b2c3d4e5f60718"


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def store():
    return Store(mongomock.MongoClient(), "tasky_test")


@pytest.fixture
def client(store, settings):
    app = create_app(store=store, settings=settings)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def make_task(client):
    def _make_task(title="x", **fields):
        body = {"title": title, "userId": VALID_USER_ID}
        body.update(fields)
        response = client.post("/api/v1/tasks", json=body)
        assert response.status_code == 201
        return response.json()["taskId"]
    return _make_task


@pytest.fixture
def make_user(client):
    def _make_user(name="Ada", email="ada@example.com", password="secret"):
        response = client.post(
            "/api/v1/users",
            json={"name": name, "email": email, "password": password}
        )
        assert response.status_code == 201
        return response.json()["userId"]
    return _make_user
