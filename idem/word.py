"""
Words over a bounded alphabet.

IDEM - normal forms in the free IDEmpotent Monoid

A word is a tuple of symbol indices. Symbol i is written as the base-36
digit for i + 10, so index 0 is 'a', index 1 is 'b' and so on up to 'z'.

This module holds the word helpers shared by the generator and the
reducer, including the overlap merge:

    merge((0, 1, 2), (1, 2, 0))  # => (0, 1, 2, 0)    "abc" + "bca" -> "abca"
"""

from typing import FrozenSet, Iterable, Optional, Sequence, Tuple

# Type aliases
Symbol = int
Word = Tuple[int, ...]

EMPTY: Word = ()

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
_OFFSET = 10

# Letters 'a'..'z'
MAX_LETTERS = len(_DIGITS) - _OFFSET


class WordError(ValueError):
    """Raised when text or symbols do not form a word over the alphabet."""


# ============================================================
# Letter codec
# ============================================================

def sym_to_char(sym: Symbol) -> str:
    """
    Render a symbol index as its letter.

    Examples:
        sym_to_char(0) -> "a"
        sym_to_char(25) -> "z"
    """
    if not 0 <= sym < MAX_LETTERS:
        raise WordError(f"Symbol {sym} has no letter (0 <= symbol < {MAX_LETTERS})")
    return _DIGITS[sym + _OFFSET]


def char_to_sym(c: str) -> Symbol:
    """Parse a single letter back into its symbol index."""
    idx = _DIGITS.find(c) if len(c) == 1 else -1
    if idx < _OFFSET:
        raise WordError(f"Not a letter: {c!r}")
    return idx - _OFFSET


def parse_word(text: str, n_letters: Optional[int] = None) -> Word:
    """
    Parse text into a word.

    The literal "0" is the empty word, matching how the generator
    prints it. With n_letters given, letters past the alphabet are
    rejected too.

    Examples:
        parse_word("abca") -> (0, 1, 2, 0)
        parse_word("0") -> ()
        parse_word("abd", n_letters=3) -> WordError
    """
    text = text.strip()
    if text == "0":
        return EMPTY
    word = tuple(char_to_sym(c) for c in text)
    if n_letters is not None:
        check_word(word, n_letters)
    return word


def format_word(word: Sequence[Symbol], empty: str = "") -> str:
    """
    Render a word as letters.

    Args:
        word: Word to render
        empty: Text used for the empty word ("0" on the command line)
    """
    if not word:
        return empty
    return "".join(sym_to_char(s) for s in word)


def describe(word: Sequence[Symbol]) -> str:
    """Letters for messages and logs; falls back to the tuple past 'z'."""
    if all(isinstance(s, int) and 0 <= s < MAX_LETTERS for s in word):
        return repr(format_word(word))
    return repr(tuple(word))


def check_word(word: Iterable[Symbol], n_letters: int) -> Word:
    """Return word as a tuple, raising WordError on symbols outside 0..n_letters-1."""
    word = tuple(word)
    for sym in word:
        if not isinstance(sym, int) or not 0 <= sym < n_letters:
            raise WordError(f"Symbol {sym!r} outside alphabet of {n_letters} letters")
    return word


# ============================================================
# Structural helpers
# ============================================================

def content(word: Sequence[Symbol]) -> FrozenSet[Symbol]:
    """The set of letters occurring in word."""
    return frozenset(word)


def reverse(word: Sequence[Symbol]) -> Word:
    """Mirror a word."""
    return tuple(reversed(word))


def relabel(word: Sequence[Symbol], letters: Sequence[Symbol]) -> Word:
    """
    Rename symbol i to letters[i].

    Example:
        relabel((0, 1, 0), (2, 5)) -> (2, 5, 2)
    """
    return tuple(letters[s] for s in word)


def left_cover(word: Sequence[Symbol]) -> int:
    """
    Length of the shortest prefix that contains every letter of word.

    word[:left_cover(word) - 1] is the longest prefix missing exactly one
    letter, and word[left_cover(word) - 1] is that letter.
    """
    need = len(content(word))
    seen = set()
    for i, sym in enumerate(word):
        seen.add(sym)
        if len(seen) == need:
            return i + 1
    return 0


def right_cover(word: Sequence[Symbol]) -> int:
    """
    Start index of the shortest suffix that contains every letter of word.

    Mirror image of left_cover: word[right_cover(word) + 1:] is the
    longest suffix missing exactly one letter.
    """
    need = len(content(word))
    seen = set()
    for i in range(len(word) - 1, -1, -1):
        seen.add(word[i])
        if len(seen) == need:
            return i
    return len(word)


def is_square_free(word: Sequence[Symbol]) -> bool:
    """True if no non-empty factor of word occurs twice in a row."""
    n = len(word)
    for length in range(1, n // 2 + 1):
        for idx in range(n - 2 * length + 1):
            if word[idx:idx + length] == word[idx + length:idx + 2 * length]:
                return False
    return True


# ============================================================
# Overlap merge
# ============================================================

def overlap(left: Sequence[Symbol], right: Sequence[Symbol]) -> int:
    """
    Length of the longest suffix of left that is also a prefix of right.

    Zero always matches, so this never fails.
    """
    n_left = len(left)
    for length in range(min(n_left, len(right)), 0, -1):
        if tuple(left[n_left - length:]) == tuple(right[:length]):
            return length
    return 0


def merge(left: Sequence[Symbol], right: Sequence[Symbol]) -> Word:
    """
    Concatenate two words, collapsing their maximal boundary overlap.

    Examples:
        merge("ab", "ba") -> "aba"
        merge(x, ()) -> x
        merge(x, x) -> x
    """
    cut = len(left) - overlap(left, right)
    return tuple(left[:cut]) + tuple(right)
