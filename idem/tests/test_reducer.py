"""Tests for normalization with proof."""

import itertools
import random

import pytest

from idem import (
    InvariantError, content, format_word, generate_monoid, is_square_free, merge,
    parse_word, reduce, reduce_middle, remove_middle,
)
from idem.reducer import find_u, find_v


def w(text):
    return parse_word(text)


def all_words(n_letters, max_length):
    for length in range(max_length + 1):
        for word in itertools.product(range(n_letters), repeat=length):
            yield word


def assert_chain(derivation, start, end):
    """Check a derivation literally, step by step."""
    assert derivation.start == start
    assert derivation.end == end
    current = start
    for step in derivation:
        assert step.source == current
        if step.kind == "square":
            assert step.after == step.before + step.before
        else:
            assert step.before == step.after + step.after
        current = step.target
    assert current == end


class TestFindU:
    """Tests for find_u: x ~ x y u."""

    def test_basic(self):
        x, y = w("abc"), w("ba")
        u, d = find_u(x, y)
        assert_chain(d, x, x + y + u)
        assert len(d) == len(y)

    def test_empty_y(self):
        u, d = find_u(w("ab"), ())
        assert u == ()
        assert not d

    def test_uses_last_occurrence(self):
        """The squared tail starts at the rightmost occurrence."""
        u, d = find_u(w("abca"), w("b"))
        assert d.steps[0].format() == "a(bca) -> a(bcabca)"
        assert u == w("ca")

    def test_letter_missing(self):
        with pytest.raises(InvariantError):
            find_u(w("ab"), w("c"))

    def test_random(self):
        rng = random.Random(7)
        for _ in range(50):
            x = tuple(rng.randrange(3) for _ in range(rng.randint(1, 6)))
            y = tuple(rng.choice(x) for _ in range(rng.randint(0, 6)))
            u, d = find_u(x, y)
            assert_chain(d, x, x + y + u)
            assert content(u) <= content(x)


class TestFindV:
    """Tests for find_v: x ~ v y x."""

    def test_basic(self):
        x, y = w("abc"), w("ba")
        v, d = find_v(x, y)
        assert_chain(d, x, v + y + x)

    def test_mirror_of_find_u(self):
        x, y = w("abca"), w("b")
        v, d = find_v(x, y)
        assert v == w("a")
        assert_chain(d, x, w("ababca"))

    def test_letter_missing(self):
        with pytest.raises(InvariantError):
            find_v(w("ab"), w("cab"))


class TestRemoveMiddle:
    """Tests for remove_middle: l m r ~ l r."""

    @pytest.mark.parametrize("l, m, r", [
        ("a", "a", "a"),
        ("ab", "b", "ba"),
        ("abc", "ca", "acb"),
        ("abc", "bacab", "cba"),
        ("bca", "cc", "abc"),
    ])
    def test_chain(self, l, m, r):
        l, m, r = w(l), w(m), w(r)
        d = remove_middle(l, m, r)
        assert_chain(d, l + m + r, l + r)

    def test_letters_not_covered(self):
        with pytest.raises(InvariantError):
            remove_middle(w("ab"), w("c"), w("ab"))

    def test_ends_differ(self):
        with pytest.raises(InvariantError):
            remove_middle(w("ab"), w("a"), w("ac"))

    def test_only_elementary_steps(self):
        """Every step squares or unsquares one fragment."""
        d = remove_middle(w("abc"), w("b"), w("cab"))
        counts = d.kind_counts()
        assert counts["square"] + counts["unsquare"] == len(d)


class TestReduceMiddle:
    """Tests for reduce_middle: l r ~ merge(l, r)."""

    def test_overlap(self):
        left, right = w("abc"), w("bca")
        d = reduce_middle(left, right)
        assert_chain(d, left + right, merge(left, right))
        assert len(d) == 1
        assert d.steps[0].format() == "a(bcbc)a -> a(bc)a"

    def test_no_overlap(self):
        d = reduce_middle(w("abc"), w("acb"))
        assert not d
        assert d.end == w("abcacb")

    def test_full_overlap(self):
        d = reduce_middle(w("ab"), w("ab"))
        assert_chain(d, w("abab"), w("ab"))


class TestReduceExamples:
    """Tests for reduce on hand-checked words."""

    @pytest.mark.parametrize("text, expected", [
        ("", ""),
        ("a", "a"),
        ("aa", "a"),
        ("aaa", "a"),
        ("abab", "ab"),
        ("aba", "aba"),
        ("abba", "aba"),
        ("aabb", "ab"),
        ("abcbc", "abc"),
        ("abcacb", "abcacb"),
        ("abcabc", "abc"),
    ])
    def test_normal_forms(self, text, expected):
        assert format_word(reduce(w(text))) == expected

    def test_abcacb_is_fixpoint(self):
        """abcacb is already normal and stays that way."""
        word = w("abcacb")
        normal, d = reduce(word, trace=True)
        assert normal == word
        assert not d
        assert reduce(normal) == normal

    def test_trace_returns_derivation(self):
        normal, d = reduce(w("aabb"), trace=True)
        assert normal == w("ab")
        assert d.format() == "(aa)bb -> (a)bb\na(bb) -> a(b)"

    def test_accepts_lists(self):
        assert reduce([0, 1, 0, 1]) == (0, 1)

    def test_rejects_negative_symbols(self):
        with pytest.raises(ValueError):
            reduce((0, -1))

    def test_large_alphabet(self):
        """Symbols beyond the 26 letters are fine for the core."""
        word = (40, 41, 40, 41, 42)
        assert reduce(word) == (40, 41, 42)


class TestReduceProperties:
    """Tests for the algebraic properties of reduce."""

    @pytest.mark.parametrize("n", [1, 2, 3])
    def test_agrees_with_generator(self, n):
        """Every word of length <= 6 reduces to an enumerated normal form."""
        normal_forms = set(generate_monoid(n))
        for word in all_words(n, 6):
            assert reduce(word) in normal_forms, format_word(word)

    @pytest.mark.parametrize("n", [2, 3])
    def test_idempotent(self, n):
        for word in all_words(n, 6):
            normal = reduce(word)
            assert reduce(normal) == normal

    @pytest.mark.parametrize("n", [2, 3])
    def test_normal_forms_are_fixpoints(self, n):
        """Reducing a generated normal form changes nothing, without steps."""
        for word in generate_monoid(n):
            normal, d = reduce(word, trace=True)
            assert normal == word
            assert not d

    def test_chain_validity(self):
        for word in all_words(3, 5):
            normal, d = reduce(word, trace=True)
            assert_chain(d, word, normal)

    def test_square_invariance(self):
        """reduce(l m m r) == reduce(l m r)."""
        rng = random.Random(2024)
        for _ in range(200):
            l, m, r = (tuple(rng.randrange(3) for _ in range(rng.randint(lo, 4)))
                       for lo in (0, 1, 0))
            assert reduce(l + m + m + r) == reduce(l + m + r)

    def test_preserves_content(self):
        for word in all_words(3, 5):
            assert content(reduce(word)) == content(word)

    def test_square_free_output(self):
        for word in all_words(3, 6):
            assert is_square_free(reduce(word))

    def test_longer_words_four_letters(self):
        rng = random.Random(11)
        for _ in range(30):
            word = tuple(rng.randrange(4) for _ in range(rng.randint(8, 14)))
            normal, d = reduce(word, trace=True)
            assert_chain(d, word, normal)
            assert reduce(normal) == normal
