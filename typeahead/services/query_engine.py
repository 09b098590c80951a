import logging

from typeahead.config import Settings
from typeahead.services.durability import QUERY_FREQUENCY_KEY, DurabilitySync
from typeahead.services.frequency_index import FrequencyIndex
from typeahead.services.suggestion_cache import SuggestionCache
from typeahead.services.trie import Trie, normalize
from typeahead.utils.store import KeyValueStore, create_store

logger = logging.getLogger("typeahead.engine")


class QueryEngine:
    """Prefix suggestions and popularity over one trie and one durable store.

    Built once at startup and shared by every request handler. None of the
    public operations raise: blank input and non-positive limits give empty
    results.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key_prefix: str = QUERY_FREQUENCY_KEY,
        default_limit: int = 10,
        cache_size: int = 1024,
        persist_seed: bool = True,
        seed_queries=None,
    ):
        self.store = store
        self.default_limit = default_limit
        self.trie = Trie()
        self.index = FrequencyIndex()
        self.cache = SuggestionCache(max_size=cache_size)
        sync_kwargs = {} if seed_queries is None else {"seed_queries": seed_queries}
        self.sync = DurabilitySync(
            self.trie,
            self.index,
            self.cache,
            store,
            key_prefix=key_prefix,
            persist_seed=persist_seed,
            **sync_kwargs,
        )

    @classmethod
    def create(cls, settings: Settings, store: KeyValueStore | None = None) -> "QueryEngine":
        """Build an engine from settings and load its state from the store."""
        if store is None:
            store = create_store(
                settings.store_backend,
                settings.redis_url,
                socket_timeout=settings.redis_socket_timeout,
            )
        engine = cls(
            store,
            key_prefix=settings.frequency_key_prefix,
            default_limit=settings.max_suggestions,
            cache_size=settings.suggestion_cache_size,
            persist_seed=settings.persist_seed_queries,
        )
        engine.load()
        return engine

    def load(self) -> int:
        count = self.sync.load_all()
        logger.info("Query engine ready with %d queries", self.trie.size)
        return count

    def suggest(self, prefix: str | None, limit: int | None = None) -> list[str]:
        """Get autocompletion suggestions for a prefix, most popular first."""
        return self.trace_suggest(prefix, limit)[0]

    def trace_suggest(
        self, prefix: str | None, limit: int | None = None
    ) -> tuple[list[str], str]:
        """``suggest`` plus how it was served: ``hit``, ``miss`` or ``skip``.

        ``skip`` means the input was blank or the limit non-positive.
        """
        limit = self.default_limit if limit is None else limit
        prefix = normalize(prefix)
        if not prefix or limit <= 0:
            return [], "skip"
        logger.debug("Getting suggestions for prefix: %s", prefix)
        suggestions, hit = self.cache.lookup(
            (prefix, limit), lambda: self.trie.search(prefix, limit)
        )
        return suggestions, "hit" if hit else "miss"

    def record(self, query: str | None) -> None:
        """Record one occurrence of a search query."""
        self.sync.record_query(query)

    def popular(self, limit: int = 10) -> dict[str, int]:
        """Most frequent queries, in descending order of frequency."""
        return dict(self.index.top_n(limit))
