"""Tests for the enumeration of normal forms."""

import pytest

from idem import (
    content, exact_monoid_size, format_word, generate_exact_monoid, generate_monoid,
    is_square_free, monoid_size, variants_on,
)


def letters(words):
    return [format_word(w, "0") for w in words]


class TestVariants:
    """Tests for variants_on."""

    def test_single_letter(self):
        """One 1-letter word gives one variant per missing letter."""
        assert variants_on([(0,)], 2) == [((1,), 0), ((0,), 1)]

    def test_missing_letter_is_absent(self):
        """Each variant avoids exactly its missing letter."""
        words = generate_exact_monoid(2)
        for word, missing in variants_on(words, 3):
            assert missing not in word
            assert content(word) | {missing} == {0, 1, 2}

    def test_count(self):
        words = generate_exact_monoid(2)
        assert len(variants_on(words, 3)) == 3 * len(words)


class TestExactMonoid:
    """Tests for generate_exact_monoid."""

    def test_zero_letters(self):
        assert generate_exact_monoid(0) == [()]

    def test_one_letter(self):
        assert generate_exact_monoid(1) == [(0,)]

    def test_two_letters(self):
        """Words using both a and b."""
        assert set(letters(generate_exact_monoid(2))) == {"ab", "ba", "aba", "bab"}

    def test_every_letter_used(self):
        for word in generate_exact_monoid(3):
            assert content(word) == {0, 1, 2}

    def test_sizes(self):
        for k in range(4):
            words = generate_exact_monoid(k)
            assert len(words) == exact_monoid_size(k)
            assert len(set(words)) == len(words)

    def test_negative(self):
        with pytest.raises(ValueError):
            generate_exact_monoid(-1)


class TestMonoid:
    """Tests for generate_monoid."""

    def test_two_letters(self):
        """The free band on 2 letters has 7 elements."""
        words = letters(generate_monoid(2))
        assert sorted(words) == sorted(["0", "a", "b", "ab", "ba", "aba", "bab"])
        assert len(words) == 7

    def test_order(self):
        """Empty word first, then by number of letters used."""
        words = generate_monoid(3)
        assert words[:4] == [(), (0,), (1,), (2,)]
        sizes = [len(content(w)) for w in words]
        assert sizes == sorted(sizes)

    def test_three_letters(self):
        """160 distinct words on 3 letters."""
        words = generate_monoid(3)
        assert len(words) == 160
        assert len(set(words)) == 160

    @pytest.mark.parametrize("n", [0, 1, 2, 3])
    def test_square_free(self, n):
        """No normal form contains a square."""
        for word in generate_monoid(n):
            assert is_square_free(word), format_word(word)

    def test_alphabet_respected(self):
        for word in generate_monoid(3):
            assert all(0 <= s < 3 for s in word)

    def test_longest_normal_form(self):
        """On 3 letters the longest normal forms have 8 letters, e.g. cbcabaca."""
        words = generate_monoid(3)
        assert max(len(w) for w in words) == 8
        assert "cbcabaca" in letters(words)


class TestSizes:
    """Tests for the closed-form counts."""

    def test_known_orders(self):
        assert [monoid_size(n) for n in range(5)] == [1, 2, 7, 160, 332381]

    def test_exact_sizes(self):
        assert [exact_monoid_size(k) for k in range(4)] == [1, 1, 4, 144]

    def test_matches_enumeration(self):
        for n in range(4):
            assert monoid_size(n) == len(generate_monoid(n))

    def test_negative(self):
        with pytest.raises(ValueError):
            monoid_size(-1)
