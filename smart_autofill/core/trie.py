# trie.py
# 26-way prefix tree for letter-by-letter autofill.
# Every node keeps a small cache of the best completions beneath it so the
# per-keystroke path never has to walk the whole subtree.

from __future__ import annotations
from typing import Dict, Iterator, List, Optional, Tuple

Word = str
Weight = int
Candidate = Tuple[Word, Weight]

ALPHABET_SIZE = 26
_A = ord("a")


def letter_index(ch: str) -> int:
    """Slot of a lowercase ascii letter, -1 for anything else."""
    if isinstance(ch, str) and len(ch) == 1 and "a" <= ch <= "z":
        return ord(ch) - _A
    return -1


class PrefixNode:
    """
    A single node in the tree.
    children: fixed array of 26 optional child nodes
    word: the complete word ending here, None if not terminal
    best: cached completions reachable from here, best first
    stale: cache may no longer be the true top-k of the subtree
    """

    __slots__ = ("children", "word", "best", "stale")

    def __init__(self) -> None:
        self.children: List[Optional[PrefixNode]] = [None] * ALPHABET_SIZE
        self.word: Optional[Word] = None
        self.best: List[Word] = []
        self.stale = False

    @property
    def terminal(self) -> bool:
        return self.word is not None

    def child(self, ch: str) -> Optional["PrefixNode"]:
        idx = letter_index(ch)
        if idx < 0:
            return None
        return self.children[idx]


class PrefixIndex:
    """
    Prefix tree used by the SuggestionEngine for:
     - O(len) insertion and prefix lookup
     - bounded, weight-sorted completion lists per node
     - exact fallback to a full subtree scan when a cache can't be trusted

    Weights are recorded here as they are reported by insert()/refresh();
    the FrequencyModel remains the owner of the numbers.
    """

    def __init__(self, cache_size: int = 10, use_cache: bool = True) -> None:
        self._root = PrefixNode()
        self._weights: Dict[Word, Weight] = {}
        self.cache_size = cache_size
        self.use_cache = use_cache

    @property
    def root(self) -> PrefixNode:
        return self._root

    def _key(self, word: Word) -> Tuple[int, Word]:
        return (-self._weights.get(word, 0), word)

    # insertion -----------------------------------------------------
    def insert(self, word: Word, weight: Weight) -> None:
        """
        Insert `word` (or update its weight) and fix up every cache on its path.
        Raises ValueError for anything but a non-empty lowercase a-z word.
        """
        if not word or any(letter_index(ch) < 0 for ch in word):
            raise ValueError(f"not a lowercase word: {word!r}")

        old = self._weights.get(word)
        self._weights[word] = max(0, int(weight))
        demoted = old is not None and self._weights[word] < old

        node = self._root
        self._place(node, word, demoted)
        for ch in word:
            idx = ord(ch) - _A
            nxt = node.children[idx]
            if nxt is None:
                nxt = node.children[idx] = PrefixNode()
            node = nxt
            self._place(node, word, demoted)
        node.word = word

    def refresh(self, word: Word, weight: Weight) -> None:
        """Invalidate-and-reinsert a single word along its path."""
        self.insert(word, weight)

    def _place(self, node: PrefixNode, word: Word, demoted: bool) -> None:
        """Keep node.best equal to the top cache_size of the subtree."""
        best = node.best
        key = self._key(word)
        if word in best:
            if demoted and len(best) >= self.cache_size:
                # something outside the cache may now outrank it
                node.stale = True
            best.remove(word)
        elif len(best) >= self.cache_size:
            if key >= self._key(best[-1]):
                return
            best.pop()

        lo, hi = 0, len(best)
        while lo < hi:
            mid = (lo + hi) // 2
            if self._key(best[mid]) < key:
                lo = mid + 1
            else:
                hi = mid
        best.insert(lo, word)

    # search/traversal ---------------------------------------------------------
    def lookup_node(self, prefix: str) -> Optional[PrefixNode]:
        """Follow `prefix` from the root; None as soon as a letter has no child."""
        node: Optional[PrefixNode] = self._root
        for ch in prefix:
            node = node.child(ch)
            if node is None:
                return None
        return node

    def completions_under(self, node: PrefixNode, limit: int) -> List[Word]:
        """
        Up to `limit` words below `node` sorted by weight desc, then lexicographically.
        Warm: read the cache. Cold: scan the subtree and rebuild the cache.
        """
        if limit <= 0:
            return []
        if not self.use_cache:
            return [w for w, _ in self._scan(node)[:limit]]

        covers = limit <= self.cache_size or len(node.best) < self.cache_size
        if not node.stale and covers:
            return node.best[:limit]

        ranked = self._scan(node)
        node.best = [w for w, _ in ranked[: self.cache_size]]
        node.stale = False
        return [w for w, _ in ranked[:limit]]

    def _scan(self, node: PrefixNode) -> List[Candidate]:
        """Full subtree enumeration, explicit stack instead of recursion."""
        out: List[Candidate] = []
        stack = [node]
        while stack:
            cur = stack.pop()
            if cur.word is not None:
                out.append((cur.word, self._weights.get(cur.word, 0)))
            stack.extend(c for c in cur.children if c is not None)
        out.sort(key=lambda t: (-t[1], t[0]))
        return out

    # convenience/debugging -----------------------------------------------------
    def weight(self, word: Word) -> Weight:
        return self._weights.get(word, 0)

    def words(self) -> Iterator[Word]:
        return iter(self._weights)

    def __len__(self) -> int:
        return len(self._weights)

    def __contains__(self, word: object) -> bool:
        """Simple membership check."""
        if not isinstance(word, str) or not word:
            return False
        node = self.lookup_node(word)
        return node is not None and node.terminal
