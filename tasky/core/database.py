"""
MongoDB access for Tasky.

One ``Store`` is built at startup and attached to the application; request
handlers receive it through the ``get_store`` dependency.
"""
import logging
import threading
from typing import Dict, Optional

import pymongo
from fastapi import Request
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from ..models.task import TASKS_COLLECTION, TASK_SCHEMA
from ..models.user import USERS_COLLECTION, USER_SCHEMA
from .config import Settings

logger = logging.getLogger(__name__)


class StoreUnavailable(RuntimeError):
    """Raised when the document store cannot be reached at startup."""


class Store:
    """Shared handle on the document store and its collections."""

    def __init__(self, client: MongoClient, db_name: str):
        self.client = client
        self.db: Database = client[db_name]
        self._collections: Dict[str, Collection] = {}
        self._lock = threading.Lock()

    @classmethod
    def connect(cls, settings: Settings) -> "Store":
        """
        Open the client and verify it with a ping.

        Args:
            settings: Application settings

        Returns:
            Store: A store ready to serve requests

        Raises:
            StoreUnavailable: If the server cannot be reached
        """
        logger.info(f"Connecting to MongoDB at {settings.mongo_host}:{settings.mongo_port}...")
        client = MongoClient(
            settings.mongo_uri,
            serverSelectionTimeoutMS=int(settings.connect_timeout * 1000),
        )
        store = cls(client, settings.mongo_dbname)
        try:
            store.ping(settings.connect_timeout)
        except PyMongoError as e:
            client.close()
            logger.error(f"Failed to ping MongoDB: {e}")
            raise StoreUnavailable(f"Failed to connect to MongoDB: {e}") from e

        logger.info("MongoDB connection established")
        return store

    def collection(self, name: str) -> Collection:
        """Return the handle for ``name``, resolving it on first use."""
        with self._lock:
            handle = self._collections.get(name)
            if handle is None:
                handle = self.db[name]
                self._collections[name] = handle
                logger.debug(f"Resolved collection '{name}'")
            return handle

    @property
    def users(self) -> Collection:
        return self.collection(USERS_COLLECTION)

    @property
    def tasks(self) -> Collection:
        return self.collection(TASKS_COLLECTION)

    def ping(self, timeout: Optional[float] = None) -> None:
        """Run a ``ping`` command, bounded by ``timeout`` seconds."""
        with pymongo.timeout(timeout):
            self.client.admin.command("ping")

    def init_collections(self) -> None:
        """Create the validated collections that do not exist yet."""
        existing = set(self.db.list_collection_names())
        for name, schema in ((USERS_COLLECTION, USER_SCHEMA), (TASKS_COLLECTION, TASK_SCHEMA)):
            if name in existing:
                logger.info(f"Collection '{name}' already exists")
                continue
            self.db.create_collection(name, validator={"$jsonSchema": schema})
            logger.info(f"Collection '{name}' created")

    def close(self) -> None:
        self.client.close()
        logger.info("MongoDB connection closed")


def get_store(request: Request) -> Store:
    """FastAPI dependency returning the application's store."""
    return request.app.state.store
