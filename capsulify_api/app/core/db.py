"""
MongoDB integration.

This module provides the ``Database`` context object that owns the
process-wide ``MongoClient``, the ``init_db`` hook applied on
application start, and small helpers shared by the services:
``run`` executes a blocking driver call in the threadpool,
``parse_object_id`` validates identifiers coming from request paths and
``serialize_document`` turns ``ObjectId`` values into strings for JSON
responses.

One ``Database`` is created per application.  ``connect`` is called from
the startup hook and ``close`` from the shutdown hook; services receive
the instance through FastAPI dependencies instead of importing a global.
"""

import logging
from typing import Any, Callable, Optional, TypeVar

from bson import ObjectId
from bson.errors import InvalidId
from fastapi.concurrency import run_in_threadpool
from pymongo import MongoClient
from pymongo.collection import Collection

from .config import settings
from .errors import ValidationError

T = TypeVar("T")

COMBOS = "combos"
TAGS = "tags"
USERS = "users"


class Database:
    """Holds the shared client and database handle.

    Parameters
    ----------
    uri : Optional[str]
        MongoDB connection string.  Defaults to ``settings.mongo_uri``.
    name : Optional[str]
        Database name.  Defaults to ``settings.database_name``.
    client : Optional[MongoClient]
        Pre-built client (for example a ``mongomock`` client in tests).
        An injected client is never closed by ``close``.
    """

    def __init__(
        self,
        uri: Optional[str] = None,
        name: Optional[str] = None,
        client: Optional[MongoClient] = None,
    ) -> None:
        self.uri = uri or settings.mongo_uri
        self.name = name or settings.database_name
        self._client = client
        self._owns_client = client is None
        self._db = None

    def connect(self) -> "Database":
        """Open the client (once) and select the database."""
        if self._db is not None:
            return self
        if self._client is None:
            self._client = MongoClient(
                self.uri, serverSelectionTimeoutMS=settings.mongo_timeout_ms
            )
        self._db = self._client[self.name]
        return self

    def close(self) -> None:
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None
        self._db = None

    def collection(self, name: str) -> Collection:
        if self._db is None:
            raise RuntimeError("Database is not connected; call connect() first")
        return self._db[name]

    @property
    def combos(self) -> Collection:
        return self.collection(COMBOS)

    @property
    def tags(self) -> Collection:
        return self.collection(TAGS)

    @property
    def users(self) -> Collection:
        return self.collection(USERS)


async def run(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run a blocking driver call without blocking the event loop."""
    return await run_in_threadpool(func, *args, **kwargs)


def parse_object_id(value: Any) -> ObjectId:
    """Convert a path identifier into an ``ObjectId``.

    Malformed identifiers are a client error, not a missing document,
    so ``ValidationError`` is raised instead of returning ``None``.
    """
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as e:
        raise ValidationError(f"Invalid id: {value!r}") from e


def serialize_document(value: Any) -> Any:
    """Recursively replace ``ObjectId`` values with their hex strings."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: serialize_document(item) for key, item in value.items()}
    if isinstance(value, list):
        return [serialize_document(item) for item in value]
    return value


def init_db(database: Database) -> None:
    """Prepare collections on application start.

    Creates non-unique lookup indexes for the fields the services
    query by and logs the names of the combinations already stored.
    Neither ``comboName`` nor ``email`` is unique-constrained.
    """
    logger = logging.getLogger(__name__)
    database.connect()
    logger.info("Database connected: %s", database.name)

    database.combos.create_index("comboName")
    database.tags.create_index("name")
    database.users.create_index("email")

    names = [doc.get("comboName") for doc in database.combos.find({}, {"comboName": 1})]
    logger.info("Existing combos: %s", names)
