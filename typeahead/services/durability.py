import logging
import threading
from typing import Iterable

from typeahead.services.frequency_index import FrequencyIndex
from typeahead.services.seed_queries import SEED_QUERIES
from typeahead.services.suggestion_cache import SuggestionCache
from typeahead.services.trie import Trie, normalize
from typeahead.utils.store import KeyValueStore

logger = logging.getLogger("typeahead.durability")

QUERY_FREQUENCY_KEY = "query:frequency:"


class DurabilitySync:
    """Keeps the trie and frequency index in step with the durable store.

    The store is written through on every record, best-effort: in-memory
    state is updated first and is never rolled back when the store fails.
    """

    def __init__(
        self,
        trie: Trie,
        index: FrequencyIndex,
        cache: SuggestionCache,
        store: KeyValueStore,
        key_prefix: str = QUERY_FREQUENCY_KEY,
        persist_seed: bool = True,
        seed_queries: Iterable[tuple[str, int]] = SEED_QUERIES,
    ):
        self.trie = trie
        self.index = index
        self.cache = cache
        self.store = store
        self.key_prefix = key_prefix
        self.persist_seed = persist_seed
        self.seed_queries = list(seed_queries)
        self._write_lock = threading.Lock()

    def key_for(self, query: str) -> str:
        return f"{self.key_prefix}{query}"

    def load_all(self) -> int:
        """Populate the trie and index from the store, seeding when it is empty.

        Seeds are written back only after a scan that succeeded, and never
        over an existing counter: a failed scan says nothing about what the
        store holds. Returns the number of queries loaded.
        """
        scanned = True
        try:
            records = self.store.scan_by_prefix(self.key_prefix)
        except Exception as e:
            logger.warning("Failed to load query frequencies from store: %s", e)
            records = []
            scanned = False

        loaded = 0
        with self._write_lock:
            for key, raw in records:
                query = normalize(key[len(self.key_prefix):])
                try:
                    frequency = int(raw)
                except (TypeError, ValueError):
                    logger.warning("Skipping non-integer frequency key=%s value=%r", key, raw)
                    continue
                if not query or frequency < 0:
                    continue
                self.trie.insert(query, frequency)
                self.index.set(query, frequency)
                loaded += 1

        if loaded:
            logger.info("Loaded %d queries from store", loaded)
        else:
            loaded = self._seed(persist=self.persist_seed and scanned)
        self.cache.clear_all()
        return loaded

    def _seed(self, persist: bool) -> int:
        seeded = []
        with self._write_lock:
            for query, frequency in self.seed_queries:
                query = normalize(query)
                if not query:
                    continue
                self.trie.insert(query, frequency)
                self.index.set(query, frequency)
                seeded.append((query, frequency))

        if persist:
            for query, frequency in seeded:
                try:
                    if not self.store.set_if_absent(self.key_for(query), frequency):
                        logger.debug("Kept existing durable count for seed query: %s", query)
                except Exception as e:
                    logger.warning("Failed to persist seed queries: %s", e)
                    break

        logger.info("Initialized %d seed queries", len(seeded))
        return len(seeded)

    def record_query(self, query: str | None) -> int | None:
        """Count one occurrence of ``query``. Returns its in-memory frequency."""
        query = normalize(query)
        if not query:
            return None

        with self._write_lock:
            frequency = self.trie.record(query)
            if query in self.index:
                self.index.merge_increment(query, 1)
            else:
                self.index.set(query, frequency)
                logger.debug("Added new query to trie: %s", query)

        try:
            self.store.increment_by(self.key_for(query), 1)
        except Exception as e:
            logger.warning("Failed to persist frequency for query=%s: %s", query, e)

        self.cache.clear_all()
        logger.debug("Recorded query: %s (frequency=%d)", query, frequency)
        return frequency
