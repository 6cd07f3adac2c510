"""Process-wide MongoDB connection with single-flight establishment.

One ``ConnectionCache`` is built when the events app loads and shared by every
store. The first caller establishes the connection; callers that arrive while
that attempt is running wait for it instead of opening their own client.
"""

import functools
import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future
from typing import Any

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from events.domain.errors import StoreUnavailableError
from events.models import ensure_indexes

logger = logging.getLogger(__name__)

Connector = Callable[[], Database]


def connect_mongo(uri: str, default_db: str, options: dict[str, Any]) -> Database:
    """Open a client, force server selection with a ping and ensure indexes."""
    client: MongoClient = MongoClient(uri, **options)
    try:
        client.admin.command("ping")
        db = client.get_default_database(default=default_db)
        ensure_indexes(db)
    except PyMongoError:
        client.close()
        raise
    return db


class ConnectionCache:
    """Lazily established, reused database handle."""

    def __init__(self, connector: Connector) -> None:
        self._connector = connector
        self._lock = threading.Lock()
        self._connection: Database | None = None
        self._pending: Future | None = None

    @classmethod
    def for_uri(cls, uri: str, default_db: str, **options: Any) -> "ConnectionCache":
        return cls(functools.partial(connect_mongo, uri, default_db, options))

    def get_connection(self) -> Database:
        """Return the shared database handle, establishing it on first use.

        Raises:
            StoreUnavailableError: If the attempt this caller joined failed.
        """
        connection = self._connection
        if connection is not None:
            return connection

        with self._lock:
            if self._connection is not None:
                return self._connection
            pending = self._pending
            owner = pending is None
            if owner:
                pending = self._pending = Future()

        if not owner:
            return pending.result()
        return self._establish(pending)

    def _establish(self, pending: Future) -> Database:
        try:
            connection = self._connector()
        except PyMongoError as exc:
            logger.error("MongoDB connection error: %s", exc)
            error = StoreUnavailableError(f"Could not connect to MongoDB: {exc}")
            self._fail(pending, error)
            raise error from exc
        except Exception as exc:
            logger.error("MongoDB connection error: %s", exc)
            self._fail(pending, exc)
            raise

        with self._lock:
            self._connection = connection
            self._pending = None
        pending.set_result(connection)
        logger.info("MongoDB connected successfully")
        return connection

    def _fail(self, pending: Future, error: BaseException) -> None:
        with self._lock:
            self._pending = None
        pending.set_exception(error)

