"""
Brute-force exploration of the idempotent congruence.

IDEM - normal forms in the free IDEmpotent Monoid

Words are grown one letter at a time and every word is unioned with each
word obtained by deleting one half of an adjacent square. The resulting
partition only joins words that are really congruent, so it is an
independent check on reduce(): every class must share a single normal
form. With enough rounds the classes with short representatives are
exactly the elements of the free band.

Example:
    uf = explore(2, rounds=6)
    class_representatives(uf, max_rep_len=3)
    # => [(0,), (0, 1), (0, 1, 0), (1,), (1, 0), (1, 0, 1)]
"""

import logging
from typing import Dict, List, Sequence, Tuple

from .reducer import reduce
from .word import Symbol, Word

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 12
DEFAULT_MAX_REP_LEN = 8


class UnionFind:
    """
    Union-find over words.

    Each word gets a key in order of first sight. Roots always point at
    the shortest word seen for their class, so rep_of() is the shortest
    member.
    """

    def __init__(self):
        self.keys: Dict[Word, int] = {}
        self.words: List[Word] = []
        self.ptrs: List[int] = []

    def key_for(self, word: Sequence[Symbol]) -> int:
        """Key for word, interning it if new."""
        word = tuple(word)
        key = self.keys.get(word)
        if key is None:
            key = len(self.words)
            self.keys[word] = key
            self.words.append(word)
            self.ptrs.append(key)
        return key

    def find(self, key: int) -> int:
        """Root key of key's class."""
        while self.ptrs[key] != key:
            key = self.ptrs[key]
        return key

    def union(self, key1: int, key2: int) -> None:
        """Merge the classes of two keys."""
        root1, root2 = self.find(key1), self.find(key2)
        if len(self.words[root1]) < len(self.words[root2]):
            root = root1
        else:
            root = root2

        # Repoint both chains at the new root
        for key in (key1, key2):
            while self.ptrs[key] != key:
                self.ptrs[key], key = root, self.ptrs[key]
            self.ptrs[key] = root

    def rep_of(self, key: int) -> Word:
        """Shortest word in key's class."""
        return self.words[self.find(key)]

    def to_sets(self) -> List[List[Word]]:
        """All classes, each sorted, in sorted order."""
        mapping: Dict[int, List[Word]] = {}
        for key, word in enumerate(self.words):
            mapping.setdefault(self.find(key), []).append(word)
        return sorted(sorted(words) for words in mapping.values())

    def __len__(self) -> int:
        return len(self.words)

    def __repr__(self) -> str:
        return f"UnionFind({len(self.words)} words)"


def register(uf: UnionFind, word: Sequence[Symbol]) -> int:
    """Intern word and union it with every square-root reduction of it."""
    word = tuple(word)
    key = uf.key_for(word)
    for length in range(1, len(word) // 2 + 1):
        for idx in range(len(word) - 2 * length + 1):
            if word[idx:idx + length] == word[idx + length:idx + 2 * length]:
                reduced_word = word[:idx] + word[idx + length:]
                uf.union(key, uf.key_for(reduced_word))
    return key


def extend(uf: UnionFind, n_letters: int) -> None:
    """Grow every known word by one letter differing from its last letter."""
    for idx in range(len(uf.words)):
        word = uf.words[idx]
        for sym in range(n_letters):
            if word and word[-1] == sym:
                continue
            register(uf, word + (sym,))


def explore(n_letters: int, rounds: int = DEFAULT_ROUNDS) -> UnionFind:
    """Seed the single letters, then extend rounds times."""
    if n_letters < 0:
        raise ValueError(f"Alphabet size must be non-negative, got {n_letters}")
    uf = UnionFind()
    for sym in range(n_letters):
        uf.key_for((sym,))
    for i in range(rounds):
        extend(uf, n_letters)
        logger.debug("round %d: %d words, %d classes", i + 1, len(uf), len(uf.to_sets()))
    return uf


def class_representatives(uf: UnionFind, max_rep_len: int = DEFAULT_MAX_REP_LEN) -> List[Word]:
    """Shortest word of every class that has one of length <= max_rep_len."""
    reps = []
    for words in uf.to_sets():
        shortest = min(words, key=len)
        if len(shortest) <= max_rep_len:
            reps.append(shortest)
    return reps


def cumulative_histogram(min_lengths: Sequence[int]) -> List[int]:
    """
    Cumulative class counts by shortest-word length.

    Element n is the number of classes whose shortest word has length
    <= n. The empty word is never explored, so it is counted here at
    length 0.
    """
    size = max(min_lengths, default=0) + 1
    counts = [0] * size
    counts[0] = 1
    for length in min_lengths:
        counts[length] += 1

    total = 0
    for i, count in enumerate(counts):
        total += count
        counts[i] = total
    return counts


def multiplication_table(words: Sequence[Sequence[Symbol]]) -> List[Tuple[Word, Word, Word]]:
    """(x, y, normal form of x y) for every ordered pair of words."""
    table = []
    for x in words:
        for y in words:
            table.append((tuple(x), tuple(y), reduce(tuple(x) + tuple(y))))
    return table
