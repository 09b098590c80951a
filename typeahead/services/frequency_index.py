import heapq
import threading


class FrequencyIndex:
    """Thread-safe query -> frequency map used for popularity ranking.

    Entries keep their first-insertion order, which is the tie-break for
    queries with the same frequency.
    """

    def __init__(self):
        self._counts: dict[str, int] = {}
        self._lock = threading.Lock()

    def merge_increment(self, query: str, delta: int = 1) -> int:
        """Add ``delta`` to a query's count, inserting it if absent."""
        with self._lock:
            value = self._counts.get(query, 0) + delta
            self._counts[query] = value
            return value

    def set(self, query: str, frequency: int) -> None:
        with self._lock:
            self._counts[query] = frequency

    def get(self, query: str) -> int | None:
        with self._lock:
            return self._counts.get(query)

    def top_n(self, limit: int) -> list[tuple[str, int]]:
        """Return up to ``limit`` (query, frequency) pairs, most frequent first."""
        if limit <= 0:
            return []
        with self._lock:
            items = list(self._counts.items())
        return heapq.nlargest(limit, items, key=lambda item: item[1])

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return dict(self._counts)

    def __contains__(self, query: str) -> bool:
        with self._lock:
            return query in self._counts

    def __len__(self) -> int:
        with self._lock:
            return len(self._counts)
