"""
Normalization with proof in the free idempotent monoid.

IDEM - normal forms in the free IDEmpotent Monoid

reduce() computes the normal form of a word and, on request, a
Derivation proving the word congruent to it. The algorithm follows
Lothaire: a word w on k letters is determined by its longest prefix on
k-1 letters, the letter that follows it, its longest suffix on k-1
letters and the letter that precedes it. Both ends are reduced
recursively, everything strictly between the two all-letter covers is
removed, and the covers are merged at their overlap.

Quick Start:
    from idem.reducer import reduce

    reduce((0, 1, 0, 1))                  # => (0, 1)
    word, proof = reduce((0, 0, 1), trace=True)
    print(proof.format())                 # (aa)b -> (a)b

Helpers:
    find_u(x, y)            x ~ x y u, for content(y) <= content(x)
    find_v(x, y)            x ~ v y x, the mirror image
    remove_middle(l, m, r)  l m r ~ l r, when l and r share all letters
    reduce_middle(l, r)     l r ~ merge(l, r)
"""

import logging
from typing import List, Sequence, Tuple, Union

from .derivation import (
    Derivation, identity, join, prefix, square, suffix, time_rev, word_rev,
)
from .word import (
    Symbol, Word, content, describe, left_cover, overlap, reverse, right_cover,
)

logger = logging.getLogger(__name__)


class InvariantError(RuntimeError):
    """Raised when a helper is called outside its letter-coverage precondition."""


def _rfind(word: Word, sym: Symbol) -> int:
    for idx in range(len(word) - 1, -1, -1):
        if word[idx] == sym:
            return idx
    raise InvariantError(f"Letter {describe((sym,))} does not occur in "
                         f"{describe(word)}")


def find_u(x: Sequence[Symbol], y: Sequence[Symbol]) -> Tuple[Word, Derivation]:
    """
    Find u with x ~ x y u.

    Every letter of y must occur in x. Each letter of y is produced by
    squaring the tail of the left part that starts at its last occurrence:
    the first copy of that tail grows the left part by the letter, the rest
    of the second copy is pushed onto u.

    Returns:
        (u, derivation from x to x + y + u)
    """
    left, u = tuple(x), ()
    parts: List[Derivation] = []
    for sym in y:
        idx = _rfind(left, sym)
        parts.append(prefix(left[:idx], suffix(square(left[idx:]), u)))
        u = left[idx + 1:] + u
        left = left + (sym,)

    if not parts:
        return u, identity(left)
    return u, join(parts)


def find_v(x: Sequence[Symbol], y: Sequence[Symbol]) -> Tuple[Word, Derivation]:
    """
    Find v with x ~ v y x.

    Solved as the mirror image of find_u.

    Returns:
        (v, derivation from x to v + y + x)
    """
    u, d = find_u(reverse(x), reverse(y))
    return reverse(u), word_rev(d)


def remove_middle(l: Sequence[Symbol], m: Sequence[Symbol],
                  r: Sequence[Symbol]) -> Derivation:
    """
    Prove l m r ~ l r.

    l and r must use the same letters, and m no others.

    The proof first shows l m r ~ l m r l r by inserting a copy of l
    before r (find_v), squaring l r, and taking the copy out again. It
    then grows the trailing l into l m r u (find_u), collapses the square
    (l m r)(l m r) and shrinks l m r u back to l.
    """
    l, m, r = tuple(l), tuple(m), tuple(r)
    if content(l) != content(r) or not content(m) <= content(l):
        raise InvariantError(
            f"Cannot remove {describe(m)} between {describe(l)} "
            f"and {describe(r)}: letters not covered")

    lr = l + r
    lmr = l + m + r

    v, insert_v = find_v(r, l)                      # r ~ v l r
    u, insert_u = find_u(l, m + r)                  # l ~ l m r u

    return join([
        prefix(l + m, insert_v),                    # l m r -> l m v l r
        prefix(l + m + v, square(lr)),              # -> l m v l r l r
        suffix(prefix(l + m, time_rev(insert_v)), lr),  # -> l m r l r
        prefix(lmr, suffix(insert_u, r)),           # -> l m r l m r u r
        suffix(time_rev(square(lmr)), u + r),       # -> l m r u r
        suffix(time_rev(insert_u), r),              # -> l r
    ])


def reduce_middle(left: Sequence[Symbol], right: Sequence[Symbol]) -> Derivation:
    """
    Prove left right ~ merge(left, right).

    With maximal overlap t, left + right is head + ov + ov + tail, and
    collapsing the square ov ov is the reverse of squaring ov.
    """
    left, right = tuple(left), tuple(right)
    t = overlap(left, right)
    if t == 0:
        return identity(left + right)
    cut = len(left) - t
    head, ov, tail = left[:cut], left[cut:], right[t:]
    return prefix(head, suffix(time_rev(square(ov)), tail))


def _reduce(word: Word, depth: int = 0) -> Derivation:
    """Derivation from word to its normal form."""
    if not word:
        return identity(word)

    logger.debug("%sreduce %s (%d letters)", "  " * depth, describe(word),
                 len(content(word)))

    parts: List[Derivation] = []
    current = word

    # Longest prefix on k-1 letters
    cut = left_cover(current) - 1
    if cut > 0:
        d = _reduce(current[:cut], depth + 1)
        if d:
            parts.append(suffix(d, current[cut:]))
            current = d.end + current[cut:]

    # Longest suffix on k-1 letters, taken from the updated word
    cut = right_cover(current) + 1
    if cut < len(current):
        d = _reduce(current[cut:], depth + 1)
        if d:
            parts.append(prefix(current[:cut], d))
            current = current[:cut] + d.end

    left_end = left_cover(current)
    right_start = right_cover(current)
    if right_start >= left_end:
        left, middle, right = current[:left_end], current[left_end:right_start], current[right_start:]
        if middle:
            parts.append(remove_middle(left, middle, right))
        d = reduce_middle(left, right)
        if d:
            parts.append(d)

    if not parts:
        return identity(word)
    return join(parts)


def reduce(word: Sequence[Symbol], trace: bool = False
           ) -> Union[Word, Tuple[Word, Derivation]]:
    """
    Reduce a word to its normal form.

    Args:
        word: Sequence of non-negative symbol indices
        trace: If True, return (normal_form, derivation) tuple

    Returns:
        The normal form, or (normal form, derivation) if trace=True.
        The derivation starts at word and ends at the normal form.
    """
    word = tuple(word)
    for sym in word:
        if not isinstance(sym, int) or sym < 0:
            raise ValueError(f"Symbols must be non-negative integers, got {sym!r}")

    derivation = _reduce(word)
    if trace:
        return derivation.end, derivation
    return derivation.end
