"""
The free band on a fixed number of letters.

IDEM - normal forms in the free IDEmpotent Monoid

FreeBand binds the word helpers, the generator and the reducer to one
alphabet size, so callers can work with letters instead of indices:

    band = FreeBand(3)
    band.format(band("abcbc"))          # => "abc"
    band.multiply("ab", "ba")           # => (0, 1, 0)
    proof = band.prove("abab", "ab")    # Derivation, or None
    len(band)                           # => 160
"""

from typing import List, Optional, Sequence, Tuple, Union

from .derivation import Derivation, join, time_rev
from .monoid import generate_monoid, monoid_size
from .reducer import reduce as _reduce_word
from .word import MAX_LETTERS, Symbol, Word, check_word, format_word, parse_word

WordLike = Union[str, Sequence[Symbol]]


class FreeBand:
    """
    The free idempotent monoid on n_letters generators.

    Methods accept words either as letter strings ("abc") or as symbol
    sequences ((0, 1, 2)); both are checked against the alphabet.
    """

    def __init__(self, n_letters: int):
        if not 0 <= n_letters <= MAX_LETTERS:
            raise ValueError(f"Alphabet size must be between 0 and {MAX_LETTERS}, "
                             f"got {n_letters}")
        self.n_letters = n_letters
        self._elements: Optional[List[Word]] = None
        self._element_set = None

    def word(self, w: WordLike) -> Word:
        """Coerce letters or symbols to a checked word."""
        if isinstance(w, str):
            return parse_word(w, self.n_letters)
        return check_word(w, self.n_letters)

    def parse(self, text: str) -> Word:
        """Parse letters, rejecting anything outside the alphabet."""
        return parse_word(text, self.n_letters)

    def format(self, w: Sequence[Symbol], empty: str = "") -> str:
        """Render a word as letters."""
        return format_word(w, empty)

    def reduce(self, w: WordLike, trace: bool = False
               ) -> Union[Word, Tuple[Word, Derivation]]:
        """
        Normal form of w.

        Args:
            w: Word to reduce
            trace: If True, return (normal_form, derivation) tuple
        """
        return _reduce_word(self.word(w), trace=trace)

    def multiply(self, x: WordLike, y: WordLike) -> Word:
        """Product of two elements, as a normal form."""
        return _reduce_word(self.word(x) + self.word(y))

    def equivalent(self, x: WordLike, y: WordLike) -> bool:
        """True if x and y are congruent."""
        return self.reduce(x) == self.reduce(y)

    def prove(self, x: WordLike, y: WordLike) -> Optional[Derivation]:
        """
        Derivation from x to y through their common normal form.

        Returns None if x and y are not congruent.
        """
        x_nf, x_proof = self.reduce(x, trace=True)
        y_nf, y_proof = self.reduce(y, trace=True)
        if x_nf != y_nf:
            return None
        return join([x_proof, time_rev(y_proof)])

    def elements(self) -> List[Word]:
        """All normal forms, as listed by generate_monoid."""
        if self._elements is None:
            self._elements = generate_monoid(self.n_letters)
            self._element_set = frozenset(self._elements)
        return list(self._elements)

    def is_normal(self, w: WordLike) -> bool:
        """True if w is one of the enumerated normal forms."""
        if self._element_set is None:
            self.elements()
        return self.word(w) in self._element_set

    def __len__(self) -> int:
        return monoid_size(self.n_letters)

    def __iter__(self):
        """Iterate over all normal forms."""
        return iter(self.elements())

    def __contains__(self, w) -> bool:
        """Normal-form membership: "aba" in band."""
        try:
            return self.is_normal(w)
        except ValueError:
            return False

    def __call__(self, w: WordLike, **kwargs):
        """Make band callable: band(w) is shorthand for band.reduce(w)."""
        return self.reduce(w, **kwargs)

    def __repr__(self) -> str:
        return f"FreeBand({self.n_letters} letters)"
