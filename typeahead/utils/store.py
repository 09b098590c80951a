"""Durable key-value stores holding per-query frequency counters.

Unlike the request-path helpers in the services layer, these clients let
errors propagate; the durability layer decides what a failure means.
"""

import logging
import threading
from typing import Protocol

import redis

logger = logging.getLogger("typeahead.store")

SCAN_BATCH_SIZE = 500


class KeyValueStore(Protocol):
    def scan_by_prefix(self, namespace: str) -> list[tuple[str, str | int]]: ...

    def get(self, key: str) -> int | None: ...

    def set(self, key: str, value: int) -> None: ...

    def set_if_absent(self, key: str, value: int) -> bool: ...

    def increment_by(self, key: str, delta: int) -> int: ...

    def ping(self) -> bool: ...

    def close(self) -> None: ...


class RedisStore:
    """Frequency counters stored as plain Redis integers."""

    def __init__(self, client: redis.Redis):
        self.client = client

    @classmethod
    def from_url(cls, url: str, socket_timeout: float | None = None) -> "RedisStore":
        client = redis.Redis.from_url(
            url,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )
        return cls(client)

    def scan_by_prefix(self, namespace: str) -> list[tuple[str, str | int]]:
        records: list[tuple[str, str | int]] = []
        batch: list[str] = []
        for key in self.client.scan_iter(match=f"{namespace}*", count=SCAN_BATCH_SIZE):
            batch.append(key)
            if len(batch) >= SCAN_BATCH_SIZE:
                records.extend(self._fetch(batch))
                batch = []
        if batch:
            records.extend(self._fetch(batch))
        return records

    def _fetch(self, keys: list[str]) -> list[tuple[str, str | int]]:
        # Keys deleted mid-scan come back as None
        values = self.client.mget(keys)
        return [(key, value) for key, value in zip(keys, values) if value is not None]

    def get(self, key: str) -> int | None:
        raw = self.client.get(key)
        if raw is None:
            return None
        return int(raw)

    def set(self, key: str, value: int) -> None:
        self.client.set(key, value)

    def set_if_absent(self, key: str, value: int) -> bool:
        return bool(self.client.set(key, value, nx=True))

    def increment_by(self, key: str, delta: int) -> int:
        return int(self.client.incrby(key, delta))

    def ping(self) -> bool:
        try:
            return bool(self.client.ping())
        except redis.RedisError as e:
            logger.warning("Redis ping failed: %s", e)
            return False

    def close(self) -> None:
        self.client.close()


class MemoryStore:
    """Process-local store for tests and for running without Redis."""

    def __init__(self, initial: dict[str, int] | None = None):
        self._data: dict[str, int] = dict(initial or {})
        self._lock = threading.Lock()

    def scan_by_prefix(self, namespace: str) -> list[tuple[str, str | int]]:
        with self._lock:
            return [(k, v) for k, v in self._data.items() if k.startswith(namespace)]

    def get(self, key: str) -> int | None:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: int) -> None:
        with self._lock:
            self._data[key] = int(value)

    def set_if_absent(self, key: str, value: int) -> bool:
        with self._lock:
            if key in self._data:
                return False
            self._data[key] = int(value)
            return True

    def increment_by(self, key: str, delta: int) -> int:
        with self._lock:
            value = self._data.get(key, 0) + delta
            self._data[key] = value
            return value

    def ping(self) -> bool:
        return True

    def close(self) -> None:
        pass


def create_store(backend: str, url: str, socket_timeout: float | None = None) -> KeyValueStore:
    """Build the store named by ``backend`` (``redis`` or ``memory``)."""
    if backend == "memory":
        logger.info("Using in-memory frequency store; counts will not survive restarts")
        return MemoryStore()
    if backend == "redis":
        return RedisStore.from_url(url, socket_timeout=socket_timeout)
    raise ValueError(f"Unknown store backend: {backend!r}")
