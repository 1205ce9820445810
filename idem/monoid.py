"""
Enumeration of the free idempotent monoid.

IDEM - normal forms in the free IDEmpotent Monoid

Every element of the free band on n letters has exactly one normal form.
A normal form using exactly k letters is built from two normal forms
using k-1 letters:

    merge(left_word + (left_missing,), (right_missing,) + right_word)

where each (k-1)-letter word is relabelled to avoid one letter of the
k-letter alphabet, and that missing letter is placed next to it.

Example:
    generate_monoid(2)  # => [(), (0,), (1,), (1, 0, 1), (1, 0), (0, 1), (0, 1, 0)]
"""

import itertools
import logging
import math
from typing import List, Sequence, Tuple

from .word import EMPTY, Symbol, Word, merge, relabel

logger = logging.getLogger(__name__)


def variants_on(words: Sequence[Word], n_letters: int) -> List[Tuple[Word, Symbol]]:
    """
    Relabel (n-1)-letter words onto an n-letter alphabet, once per missing letter.

    For each missing letter i, symbols >= i are shifted up by one, so the
    result uses every letter except i. Returns (word, missing letter) pairs.

    Example:
        variants_on([(0,)], 2) -> [((1,), 0), ((0,), 1)]
    """
    res = []
    for missing in range(n_letters):
        for word in words:
            new_word = tuple(s + 1 if s >= missing else s for s in word)
            res.append((new_word, missing))
    return res


def generate_exact_monoid(n_letters: int) -> List[Word]:
    """
    Normal forms using exactly the letters 0..n_letters-1.

    e.g. for 2 letters: "ab", "ba", "aba", "bab", but not "a" or "b".
    """
    if n_letters < 0:
        raise ValueError(f"Alphabet size must be non-negative, got {n_letters}")
    if n_letters == 0:
        return [EMPTY]

    shorter_words = generate_exact_monoid(n_letters - 1)
    variants = variants_on(shorter_words, n_letters)

    words = []
    for left_word, left_sym in variants:
        left = left_word + (left_sym,)
        for right_word, right_sym in variants:
            words.append(merge(left, (right_sym,) + right_word))

    logger.debug("exact monoid on %d letters: %d words", n_letters, len(words))
    return words


def generate_monoid(n_letters: int) -> List[Word]:
    """
    All normal forms of the free idempotent monoid on n_letters letters.

    Words are grouped by the number of letters they use, then by the
    (increasing) selection of letters, starting with the empty word.
    """
    if n_letters < 0:
        raise ValueError(f"Alphabet size must be non-negative, got {n_letters}")

    words = []
    for size in range(n_letters + 1):
        exact = generate_exact_monoid(size)
        # Exact words already cover every ordering of their letters, so
        # increasing selections reach each normal form once.
        for letters in itertools.combinations(range(n_letters), size):
            words.extend(relabel(word, letters) for word in exact)

    logger.debug("monoid on %d letters: %d words", n_letters, len(words))
    return words


def exact_monoid_size(n_letters: int) -> int:
    """Number of normal forms using exactly n_letters letters."""
    if n_letters < 0:
        raise ValueError(f"Alphabet size must be non-negative, got {n_letters}")
    size = 1
    for k in range(1, n_letters + 1):
        size = (k * size) ** 2
    return size


def monoid_size(n_letters: int) -> int:
    """
    Order of the free idempotent monoid on n_letters letters.

    Examples:
        monoid_size(2) -> 7
        monoid_size(3) -> 160
    """
    if n_letters < 0:
        raise ValueError(f"Alphabet size must be non-negative, got {n_letters}")
    return sum(math.comb(n_letters, i) * exact_monoid_size(i)
               for i in range(n_letters + 1))
