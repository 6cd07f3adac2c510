"""Tests for the shared MongoDB connection cache.

Run with: pytest tests/test_connection.py -v
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from unittest import mock

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from events.domain.errors import StoreUnavailableError
from events.stores import connection as connection_module
from events.stores.connection import ConnectionCache, connect_mongo

WORKERS = 8


class SlowConnector:
    """Blocks inside connect until released, counting attempts."""

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.attempts = 0
        self.started = threading.Event()
        self.release = threading.Event()

    def __call__(self):
        self.attempts += 1
        self.started.set()
        self.release.wait(timeout=5)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _call_concurrently(cache, connector):
    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        futures = [pool.submit(cache.get_connection) for _ in range(WORKERS)]
        connector.started.wait(timeout=5)
        # let every worker reach the cache before the attempt finishes
        time.sleep(0.1)
        connector.release.set()
        outcomes = []
        for future in futures:
            try:
                outcomes.append(future.result(timeout=5))
            except Exception as exc:
                outcomes.append(exc)
    return outcomes


class TestConnectionCache:
    def test_concurrent_first_calls_share_one_attempt(self):
        """All first callers get the same handle from a single connect."""
        db = object()
        connector = SlowConnector([db])
        cache = ConnectionCache(connector)

        outcomes = _call_concurrently(cache, connector)

        assert connector.attempts == 1
        assert all(outcome is db for outcome in outcomes)
        assert cache.get_connection() is db
        assert connector.attempts == 1

    def test_established_connection_is_reused(self):
        db = object()
        connector = mock.Mock(return_value=db)
        cache = ConnectionCache(connector)

        assert cache.get_connection() is db
        assert cache.get_connection() is db
        connector.assert_called_once_with()

    def test_failure_reaches_every_waiter_and_next_caller_retries(self):
        """A failed attempt is shared, then cleared so the next call reconnects."""
        db = object()
        connector = SlowConnector([ServerSelectionTimeoutError("no servers"), db])
        cache = ConnectionCache(connector)

        outcomes = _call_concurrently(cache, connector)

        assert connector.attempts == 1
        assert all(isinstance(outcome, StoreUnavailableError) for outcome in outcomes)
        assert "no servers" in outcomes[0].message

        assert cache.get_connection() is db
        assert connector.attempts == 2

    def test_unexpected_errors_propagate_unwrapped(self):
        db = object()
        connector = mock.Mock(side_effect=[RuntimeError("boom"), db])
        cache = ConnectionCache(connector)
        with pytest.raises(RuntimeError, match="boom"):
            cache.get_connection()
        assert cache.get_connection() is db
        assert connector.call_count == 2


class TestConnectMongo:
    def test_pings_and_ensures_indexes(self, monkeypatch):
        client = mock.MagicMock()
        client_cls = mock.Mock(return_value=client)
        monkeypatch.setattr(connection_module, "MongoClient", client_cls)

        db = connect_mongo("mongodb://db:27017", "eventhub", {"maxPoolSize": 10})

        client_cls.assert_called_once_with("mongodb://db:27017", maxPoolSize=10)
        client.admin.command.assert_called_once_with("ping")
        client.get_default_database.assert_called_once_with(default="eventhub")
        assert db is client.get_default_database.return_value
        assert db.__getitem__.call_count >= 2

    def test_closes_client_when_server_is_unreachable(self, monkeypatch):
        client = mock.MagicMock()
        client.admin.command.side_effect = ServerSelectionTimeoutError("timed out")
        monkeypatch.setattr(connection_module, "MongoClient", mock.Mock(return_value=client))

        with pytest.raises(ServerSelectionTimeoutError):
            connect_mongo("mongodb://db:27017", "eventhub", {})
        client.close.assert_called_once_with()

    def test_for_uri_passes_settings_through(self, monkeypatch):
        connect = mock.Mock(return_value=object())
        monkeypatch.setattr(connection_module, "connect_mongo", connect)

        cache = ConnectionCache.for_uri("mongodb://db", "eventhub", serverSelectionTimeoutMS=10)
        cache.get_connection()

        connect.assert_called_once_with(
            "mongodb://db", "eventhub", {"serverSelectionTimeoutMS": 10}
        )
