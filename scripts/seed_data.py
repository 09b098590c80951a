"""Seed the durable store with the built-in query frequencies.

Usage:
    python -m scripts.seed_data [--overwrite]

Existing counters are left untouched unless --overwrite is given, so the
script is safe to run against a store that already has real traffic.
"""

import sys

sys.path.insert(0, ".")

from typeahead.config import settings
from typeahead.services.seed_queries import SEED_QUERIES
from typeahead.services.trie import normalize
from typeahead.utils.store import create_store


def main(argv: list[str]) -> int:
    overwrite = "--overwrite" in argv
    print("=== Typeahead Seeder ===\n")
    print(f"Store: {settings.store_backend} ({settings.redis_url})")

    store = create_store(
        settings.store_backend,
        settings.redis_url,
        socket_timeout=settings.redis_socket_timeout,
    )
    written = skipped = 0
    try:
        for query, frequency in SEED_QUERIES:
            key = f"{settings.frequency_key_prefix}{normalize(query)}"
            if not overwrite and store.get(key) is not None:
                skipped += 1
                continue
            store.set(key, frequency)
            written += 1
            print(f"  {key} = {frequency}")
    except Exception as e:
        print(f"Seeding failed: {e}")
        return 1
    finally:
        store.close()

    print(f"\nWrote {written} queries, skipped {skipped} existing")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
