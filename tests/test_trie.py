"""Tests for the autocomplete trie."""

from typeahead.services.trie import Trie, normalize


def test_trie_insert_and_search():
    trie = Trie()
    trie.insert("search engine", 10)
    trie.insert("search optimization", 5)
    trie.insert("sorting algorithms", 3)

    results = trie.search("search")
    assert results == ["search engine", "search optimization"]


def test_trie_no_match():
    trie = Trie()
    trie.insert("hello world", 1)
    assert trie.search("xyz") == []


def test_trie_case_insensitive():
    trie = Trie()
    trie.insert("  Python Programming ", 5)
    assert trie.search("PYTHON") == ["python programming"]
    assert trie.frequency("python programming") == 5


def test_trie_limit():
    trie = Trie()
    for i in range(20):
        trie.insert(f"test term {i}", i)
    results = trie.search("test", limit=5)
    assert results == [f"test term {i}" for i in (19, 18, 17, 16, 15)]


def test_trie_frequency_ordering():
    trie = Trie()
    trie.insert("apple", 1)
    trie.insert("application", 10)
    trie.insert("app store", 5)

    assert trie.search("app") == ["application", "app store", "apple"]


def test_trie_ties_keep_insertion_order():
    trie = Trie()
    trie.insert("cab", 3)
    trie.insert("car", 3)
    trie.insert("ca", 3)
    trie.insert("cat", 7)

    # Depth-first order: "ca" is reached before its children
    assert trie.search("ca") == ["cat", "ca", "cab", "car"]
    assert trie.search("ca") == trie.search("ca")


def test_trie_prefix_is_itself_a_word():
    trie = Trie()
    trie.insert("kubernetes", 170)
    trie.insert("kubernetes pod", 150)
    assert trie.search("kubernetes") == ["kubernetes", "kubernetes pod"]


def test_trie_blank_input_is_noop():
    trie = Trie()
    trie.insert("", 5)
    trie.insert(None, 5)
    trie.insert("   ", 5)
    assert trie.size == 0
    assert trie.search("") == []
    assert trie.search(None) == []
    assert trie.search("a", limit=0) == []


def test_insert_overwrites_frequency():
    trie = Trie()
    trie.insert("redis", 10)
    trie.insert("redis", 3)
    assert trie.frequency("redis") == 3
    assert trie.size == 1


def test_increment_existing_word():
    trie = Trie()
    trie.insert("docker", 4)
    assert trie.increment_frequency("Docker ") == 5
    assert trie.frequency("docker") == 5


def test_increment_unknown_word_is_noop():
    trie = Trie()
    trie.insert("docker compose", 4)
    # "docker" is only an inner node, not a word
    assert trie.increment_frequency("docker") is None
    assert trie.increment_frequency("podman") is None
    assert "docker" not in trie
    assert trie.search("docker") == ["docker compose"]


def test_record_inserts_then_increments():
    trie = Trie()
    assert trie.record("Kafka") == 1
    assert trie.record("kafka") == 2
    assert trie.record("") is None
    assert trie.size == 1
    assert trie.frequency("kafka") == 2


def test_stored_word_matches_path():
    trie = Trie()
    trie.insert("Spring Boot", 1)
    node = trie.root
    for char in "spring boot":
        node = node.children[char]
    assert node.is_end
    assert node.word == "spring boot"


def test_deep_word_does_not_recurse():
    trie = Trie()
    word = "a" * 5000
    trie.insert(word, 1)
    assert trie.search("aaa") == [word]


def test_trie_size():
    trie = Trie()
    assert trie.size == 0
    trie.insert("a", 1)
    trie.insert("b", 1)
    trie.insert("b", 2)
    assert trie.size == 2


def test_normalize():
    assert normalize("  Boot ") == "boot"
    assert normalize(None) == ""
    assert normalize("") == ""
