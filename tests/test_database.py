from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from tasky.core.config import Settings
from tasky.core.database import Store, StoreUnavailable
from tasky.main import create_app
from tasky.models.task import TASK_SCHEMA
from tasky.models.user import USER_SCHEMA


def test_init_collections_creates_both_when_missing():
    store = Store(MagicMock(), "tasky")
    store.db.list_collection_names.return_value = []

    store.init_collections()

    assert store.db.create_collection.call_count == 2
    store.db.create_collection.assert_any_call("users", validator={"$jsonSchema": USER_SCHEMA})
    store.db.create_collection.assert_any_call("tasks", validator={"$jsonSchema": TASK_SCHEMA})


def test_init_collections_skips_existing():
    store = Store(MagicMock(), "tasky")
    store.db.list_collection_names.return_value = ["users"]

    store.init_collections()

    store.db.create_collection.assert_called_once_with(
        "tasks", validator={"$jsonSchema": TASK_SCHEMA}
    )


def test_init_collections_when_all_exist():
    store = Store(MagicMock(), "tasky")
    store.db.list_collection_names.return_value = ["tasks", "users"]

    store.init_collections()

    store.db.create_collection.assert_not_called()


def test_connect_to_unreachable_server(monkeypatch):
    monkeypatch.setenv("MONGO_URI", "mongodb://127.0.0.1:1")
    monkeypatch.setenv("CONNECT_TIMEOUT", "0.2")

    with pytest.raises(StoreUnavailable):
        Store.connect(Settings())


@pytest.mark.parametrize("init_enabled", [True, False])
def test_startup_initializes_collections_when_enabled(monkeypatch, init_enabled):
    connected = Store(MagicMock(), "tasky")
    connected.init_collections = MagicMock()
    monkeypatch.setattr(Store, "connect", classmethod(lambda cls, settings: connected))

    settings = Settings()
    settings.mongo_init_collections = init_enabled
    app = create_app(settings=settings)

    with TestClient(app):
        assert app.state.store is connected

    assert connected.init_collections.called is init_enabled
    assert app.state.store is None
