"""
IDEM - normal forms in the free IDEmpotent Monoid

Reduces words modulo the idempotent congruence (any repeated factor ww
may be replaced by w) and proves every reduction with a chain of
elementary squaring and unsquaring steps.

Quick Start:
    from idem import FreeBand

    band = FreeBand(3)
    word, proof = band("abcbc", trace=True)
    band.format(word)        # => "abc"
    print(proof.format())    # a(bcbc) -> a(bc)

    len(band)                # => 160
    list(band)[:4]           # => [(), (0,), (1,), (2,)]

Words:
    A word is a tuple of symbol indices; index 0 is written "a", 1 is
    "b", and so on. The empty word is written "0" on the command line.

Core operations:
    merge(left, right)          concatenate, collapsing the boundary overlap
    generate_monoid(n)          every normal form on n letters
    reduce(word, trace=False)   normal form, optionally with its Derivation

Derivations:
    identity, square, join, prefix, suffix, time_rev and word_rev build
    new Derivations from old ones; each is checked on construction.
"""

__version__ = "0.1.0"

# Words
from .word import (
    Symbol,
    Word,
    EMPTY,
    MAX_LETTERS,
    WordError,
    sym_to_char,
    char_to_sym,
    parse_word,
    format_word,
    describe,
    check_word,
    content,
    reverse,
    relabel,
    left_cover,
    right_cover,
    is_square_free,
    overlap,
    merge,
)

# Generator
from .monoid import (
    variants_on,
    generate_exact_monoid,
    generate_monoid,
    exact_monoid_size,
    monoid_size,
)

# Derivations
from .derivation import (
    DerivationError,
    RewriteStep,
    Derivation,
    identity,
    square,
    join,
    prefix,
    suffix,
    time_rev,
    word_rev,
)

# Reduction
from .reducer import (
    InvariantError,
    find_u,
    find_v,
    remove_middle,
    reduce_middle,
    reduce,
)

from .band import FreeBand

# Public API
__all__ = [
    # Version
    "__version__",
    # Words
    "Symbol",
    "Word",
    "EMPTY",
    "MAX_LETTERS",
    "WordError",
    "sym_to_char",
    "char_to_sym",
    "parse_word",
    "format_word",
    "describe",
    "check_word",
    "content",
    "reverse",
    "relabel",
    "left_cover",
    "right_cover",
    "is_square_free",
    "overlap",
    "merge",
    # Generator
    "variants_on",
    "generate_exact_monoid",
    "generate_monoid",
    "exact_monoid_size",
    "monoid_size",
    # Derivations
    "DerivationError",
    "RewriteStep",
    "Derivation",
    "identity",
    "square",
    "join",
    "prefix",
    "suffix",
    "time_rev",
    "word_rev",
    # Reduction
    "InvariantError",
    "find_u",
    "find_v",
    "remove_middle",
    "reduce_middle",
    "reduce",
    # Facade
    "FreeBand",
]
