import threading
from collections import OrderedDict
from typing import Callable, Hashable


class SuggestionCache:
    """Thread-safe LRU memo of ranked suggestions, cleared on every write.

    ``clear_all`` bumps a generation counter. A value computed while a clear
    happened is handed back to its caller but never stored, so no entry can
    predate the most recent write.
    """

    def __init__(self, max_size: int = 1024):
        self.max_size = max_size
        self._store: "OrderedDict[Hashable, list[str]]" = OrderedDict()
        self._lock = threading.Lock()
        self._generation = 0
        self.hits = 0
        self.misses = 0

    def get_or_compute(self, key: Hashable, compute: Callable[[], list[str]]) -> list[str]:
        return self.lookup(key, compute)[0]

    def lookup(
        self, key: Hashable, compute: Callable[[], list[str]]
    ) -> tuple[list[str], bool]:
        """Like ``get_or_compute``, also reporting whether the cache was hit."""
        with self._lock:
            if key in self._store:
                self._store.move_to_end(key)
                self.hits += 1
                return list(self._store[key]), True
            self.misses += 1
            generation = self._generation

        value = compute()

        with self._lock:
            if generation == self._generation and self.max_size > 0:
                self._store[key] = list(value)
                self._store.move_to_end(key)
                if len(self._store) > self.max_size:
                    self._store.popitem(last=False)
        return value, False

    def clear_all(self) -> None:
        with self._lock:
            self._generation += 1
            self._store.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
