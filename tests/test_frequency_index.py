"""Tests for the popularity index."""

from concurrent.futures import ThreadPoolExecutor

from typeahead.services.frequency_index import FrequencyIndex


def test_merge_increment_inserts_and_adds():
    index = FrequencyIndex()
    assert index.merge_increment("redis", 1) == 1
    assert index.merge_increment("redis", 4) == 5
    assert index.get("redis") == 5
    assert index.get("kafka") is None


def test_top_n_orders_by_frequency():
    index = FrequencyIndex()
    index.set("java 21", 200)
    index.set("typescript", 210)
    index.set("kubernetes", 170)

    assert index.top_n(2) == [("typescript", 210), ("java 21", 200)]
    assert index.top_n(10) == [("typescript", 210), ("java 21", 200), ("kubernetes", 170)]


def test_top_n_ties_keep_first_insertion_order():
    index = FrequencyIndex()
    index.set("b", 5)
    index.set("a", 5)
    index.set("c", 9)
    index.set("b", 5)  # re-set does not move an entry

    assert index.top_n(3) == [("c", 9), ("b", 5), ("a", 5)]


def test_top_n_is_prefix_of_larger_limit():
    index = FrequencyIndex()
    for i, freq in enumerate([3, 7, 7, 1, 7, 3, 0, 9]):
        index.set(f"q{i}", freq)

    full = index.top_n(100)
    for limit in range(len(full) + 1):
        assert index.top_n(limit) == full[:limit]


def test_top_n_non_positive_limit():
    index = FrequencyIndex()
    index.set("a", 1)
    assert index.top_n(0) == []
    assert index.top_n(-3) == []


def test_concurrent_increments():
    index = FrequencyIndex()
    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda _: index.merge_increment("hot", 1), range(2000)))
    assert index.get("hot") == 2000
    assert len(index) == 1
