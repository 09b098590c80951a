"""Suggestion latency benchmark.

Usage:
    python -m scripts.benchmark [--memory]

Drives the query engine from a thread pool with a mix of suggest and record
calls and reports:
- Latency (p50, p95, p99) per operation
- Cache hit rate
- Whether the trie and frequency index still agree afterwards
"""

import random
import statistics
import sys
import time
from concurrent.futures import ThreadPoolExecutor

sys.path.insert(0, ".")

from typeahead.config import settings
from typeahead.services.query_engine import QueryEngine
from typeahead.utils.store import MemoryStore

TEST_PREFIXES = ["s", "sp", "spring", "ja", "java", "doc", "k", "re", "type", "data", "micro"]
TEST_QUERIES = [
    "spring boot",
    "spring security",
    "java stream",
    "docker compose",
    "kubernetes",
    "redis cache",
    "typescript generics",
    "fastapi dependency injection",
    "python asyncio",
    "postgres vacuum",
]

OPERATIONS = 5000
WORKERS = 8
RECORD_RATIO = 0.1


def _timed(fn, *args) -> float:
    start = time.perf_counter()
    fn(*args)
    return (time.perf_counter() - start) * 1000


def _report(name: str, latencies: list[float]):
    if not latencies:
        return
    sorted_lat = sorted(latencies)
    print(f"{name} Latency ({len(latencies)} calls):")
    print(f"  p50:  {sorted_lat[len(sorted_lat)//2]:7.3f} ms")
    print(f"  p95:  {sorted_lat[int(len(sorted_lat)*0.95)]:7.3f} ms")
    print(f"  p99:  {sorted_lat[int(len(sorted_lat)*0.99)]:7.3f} ms")
    print(f"  mean: {statistics.mean(latencies):7.3f} ms")


def main(argv: list[str]):
    print("=== Typeahead Benchmark ===\n")

    store = MemoryStore() if "--memory" in argv else None
    engine = QueryEngine.create(settings, store=store)
    rng = random.Random(42)

    def one_call(_):
        if rng.random() < RECORD_RATIO:
            return "record", _timed(engine.record, rng.choice(TEST_QUERIES))
        return "suggest", _timed(engine.suggest, rng.choice(TEST_PREFIXES))

    suggest_latencies = []
    record_latencies = []
    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        for op, elapsed in pool.map(one_call, range(OPERATIONS)):
            (record_latencies if op == "record" else suggest_latencies).append(elapsed)

    print("=== Results ===\n")
    _report("Suggest", suggest_latencies)
    _report("Record", record_latencies)

    lookups = engine.cache.hits + engine.cache.misses
    print(f"\nCache hit rate: {engine.cache.hits / max(lookups, 1):.1%}")

    drift = [
        q for q, freq in engine.index.snapshot().items()
        if engine.trie.frequency(q) != freq
    ]
    print(f"Trie/index mismatches: {len(drift)}")
    print("\nTop queries:")
    for query, frequency in engine.popular(5).items():
        print(f"  {frequency:6d}  {query}")

    engine.store.close()
    print("Done.")


if __name__ == "__main__":
    main(sys.argv[1:])
