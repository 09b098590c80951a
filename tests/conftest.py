from unittest.mock import MagicMock

import pytest
import redis

from typeahead.services.query_engine import QueryEngine
from typeahead.utils.store import MemoryStore

SPRING_QUERIES = [
    ("spring boot", 150),
    ("spring cloud", 120),
    ("spring security", 100),
]


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def engine(store):
    engine = QueryEngine(store, seed_queries=SPRING_QUERIES)
    engine.load()
    return engine


@pytest.fixture
def broken_store():
    """A store whose every call fails like an unreachable Redis."""
    store = MagicMock()
    error = redis.ConnectionError("Connection refused")
    store.scan_by_prefix.side_effect = error
    store.get.side_effect = error
    store.set.side_effect = error
    store.set_if_absent.side_effect = error
    store.increment_by.side_effect = error
    store.ping.return_value = False
    return store
