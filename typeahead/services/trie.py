import heapq
import logging
import threading

logger = logging.getLogger("typeahead.trie")


def normalize(text: str | None) -> str:
    """Trim surrounding whitespace and lower-case. ``None`` becomes ``""``."""
    if not text:
        return ""
    return text.strip().lower()


class TrieNode:
    """Node in a prefix trie for fast autocompletion."""

    __slots__ = ("children", "is_end", "word", "frequency")

    def __init__(self):
        self.children: dict[str, TrieNode] = {}
        self.is_end: bool = False
        self.word: str = ""
        self.frequency: int = 0


class Trie:
    """In-memory prefix trie of normalized queries ranked by frequency.

    A single re-entrant lock guards both mutation and traversal, so a reader
    never iterates a child map while a writer is growing it. New nodes are
    fully built before they are linked into their parent.
    """

    def __init__(self):
        self.root = TrieNode()
        self._size = 0
        self._lock = threading.RLock()

    def insert(self, word: str | None, frequency: int = 1) -> None:
        """Insert a word, overwriting the frequency of an existing entry."""
        word = normalize(word)
        if not word:
            return
        with self._lock:
            node = self._walk(word, create=True)
            if not node.is_end:
                self._size += 1
            node.is_end = True
            node.word = word
            node.frequency = max(int(frequency), 0)

    def increment_frequency(self, word: str | None) -> int | None:
        """Add one to an existing word. Unknown words are left alone."""
        word = normalize(word)
        if not word:
            return None
        with self._lock:
            node = self._walk(word)
            if node is None or not node.is_end:
                return None
            node.frequency += 1
            return node.frequency

    def record(self, word: str | None) -> int | None:
        """Insert ``word`` with frequency 1, or increment it if already present.

        Returns the resulting frequency, or None for blank input.
        """
        word = normalize(word)
        if not word:
            return None
        with self._lock:
            node = self._walk(word, create=True)
            if node.is_end:
                node.frequency += 1
            else:
                node.is_end = True
                node.word = word
                node.frequency = 1
                self._size += 1
            return node.frequency

    def search(self, prefix: str | None, limit: int = 10) -> list[str]:
        """Find words starting with a prefix, most frequent first.

        Words with equal frequency keep depth-first collection order, which
        follows child insertion order and is therefore stable between calls.
        """
        prefix = normalize(prefix)
        if not prefix or limit <= 0:
            return []
        with self._lock:
            node = self._walk(prefix)
            if node is None:
                return []
            results: list[TrieNode] = []
            self._dfs(node, results)
            # nlargest is stable on ties, like sorted(..., reverse=True)[:limit]
            top = heapq.nlargest(limit, results, key=lambda n: n.frequency)
            return [n.word for n in top]

    def frequency(self, word: str | None) -> int | None:
        word = normalize(word)
        if not word:
            return None
        with self._lock:
            node = self._walk(word)
            if node is None or not node.is_end:
                return None
            return node.frequency

    def __contains__(self, word: str) -> bool:
        return self.frequency(word) is not None

    def _walk(self, word: str, create: bool = False) -> TrieNode | None:
        node = self.root
        for char in word:
            child = node.children.get(char)
            if child is None:
                if not create:
                    return None
                child = TrieNode()
                node.children[char] = child
            node = child
        return node

    def _dfs(self, node: TrieNode, results: list[TrieNode]):
        # Iterative, so long queries cannot hit the recursion limit
        stack = [node]
        while stack:
            current = stack.pop()
            if current.is_end:
                results.append(current)
            stack.extend(reversed(list(current.children.values())))

    @property
    def size(self) -> int:
        return self._size
