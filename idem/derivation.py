"""
Derivations: checkable chains of squaring and unsquaring steps.

IDEM - normal forms in the free IDEmpotent Monoid

A Derivation proves that its start word is congruent to its end word.
Each RewriteStep replaces a fragment m by mm (squaring) or mm by m
(unsquaring) inside a fixed literal context, so every step can be
checked by plain word equality.

Derivations are immutable and built bottom-up:

    d = square((0, 1))                 # ab -> abab
    d = prefix((2,), d)                # cab -> cabab
    d = join([d, time_rev(d)])         # cab -> cabab -> cab

Rendering:
    Use Derivation.format() to get "before -> after" lines in which the
    rewritten fragment is parenthesised, e.g. "c(ab) -> c(abab)".
"""

from typing import Dict, Iterable, List, Sequence

from .word import Symbol, Word, describe, format_word, reverse


class DerivationError(ValueError):
    """Raised when steps do not form a valid chain."""


class RewriteStep:
    """A single squaring or unsquaring of a fragment inside a context."""

    __slots__ = ("left", "before", "after", "right")

    def __init__(self, left: Sequence[Symbol], before: Sequence[Symbol],
                 after: Sequence[Symbol], right: Sequence[Symbol]):
        before, after = tuple(before), tuple(after)
        if not before or not after:
            raise DerivationError("Rewrite fragments must be non-empty")
        if after != before + before and before != after + after:
            raise DerivationError(
                f"Not a square rewrite: {describe(before)} -> {describe(after)}")
        self.left = tuple(left)
        self.before = before
        self.after = after
        self.right = tuple(right)

    @property
    def source(self) -> Word:
        """The whole word before the rewrite."""
        return self.left + self.before + self.right

    @property
    def target(self) -> Word:
        """The whole word after the rewrite."""
        return self.left + self.after + self.right

    @property
    def kind(self) -> str:
        """"square" or "unsquare"."""
        return "square" if len(self.after) > len(self.before) else "unsquare"

    def reversed(self) -> "RewriteStep":
        """The same rewrite run backwards."""
        return RewriteStep(self.left, self.after, self.before, self.right)

    def mirrored(self) -> "RewriteStep":
        """The rewrite on mirrored words; left and right contexts trade places."""
        return RewriteStep(reverse(self.right), reverse(self.before),
                           reverse(self.after), reverse(self.left))

    def wrapped(self, left: Sequence[Symbol] = (), right: Sequence[Symbol] = ()) -> "RewriteStep":
        """The rewrite inside a larger context."""
        return RewriteStep(tuple(left) + self.left, self.before, self.after,
                           self.right + tuple(right))

    def format(self) -> str:
        """Render as "ab(c)d -> ab(cc)d"."""
        left, right = format_word(self.left), format_word(self.right)
        return (f"{left}({format_word(self.before)}){right} -> "
                f"{left}({format_word(self.after)}){right}")

    def __eq__(self, other):
        if isinstance(other, RewriteStep):
            return (self.left, self.before, self.after, self.right) == \
                   (other.left, other.before, other.after, other.right)
        return NotImplemented

    def __hash__(self):
        return hash((self.left, self.before, self.after, self.right))

    def __repr__(self) -> str:
        return f"{self.kind}: {self.format()}"

    def to_dict(self) -> Dict:
        """Convert step to dictionary for serialization."""
        return {
            "kind": self.kind,
            "left": format_word(self.left),
            "before": format_word(self.before),
            "after": format_word(self.after),
            "right": format_word(self.right),
        }


class Derivation:
    """
    A proof that start is congruent to end.

    Provides multiple formatting options:
        - format("steps"): one "before -> after" line per step (default)
        - format("chain"): the successive whole words
        - format("compact"): single line summary
        - to_dict(): JSON-serializable dictionary

    The constructor checks the chain and raises DerivationError if any
    step does not start where the previous one ended.
    """

    __slots__ = ("start", "end", "steps")

    def __init__(self, start: Sequence[Symbol], end: Sequence[Symbol],
                 steps: Iterable[RewriteStep] = ()):
        self.start: Word = tuple(start)
        self.end: Word = tuple(end)
        self.steps = tuple(steps)
        self._check()

    def _check(self) -> None:
        current = self.start
        for i, step in enumerate(self.steps):
            if step.source != current:
                raise DerivationError(
                    f"Step {i + 1} starts at {describe(step.source)}, "
                    f"expected {describe(current)}")
            current = step.target
        if current != self.end:
            raise DerivationError(
                f"Derivation ends at {describe(current)}, "
                f"recorded end is {describe(self.end)}")

    def format(self, style: str = "steps") -> str:
        """
        Format the derivation in different styles.

        Args:
            style: One of "steps", "chain", "compact"

        Returns:
            Formatted string representation of the derivation.
        """
        if style == "compact":
            return (f"{format_word(self.start, '0')} --[{len(self.steps)} steps]--> "
                    f"{format_word(self.end, '0')}")

        elif style == "chain":
            words = [self.start] + [step.target for step in self.steps]
            return "\n".join(format_word(w, "0") for w in words)

        elif style == "steps":
            return "\n".join(step.format() for step in self.steps)

        raise ValueError(f"Unknown style: {style}. Valid options: steps, chain, compact")

    def __repr__(self) -> str:
        lines = [f"Initial: {format_word(self.start, '0')}"]
        for i, step in enumerate(self.steps, 1):
            lines.append(f"  {i}. {step}")
        lines.append(f"Final: {format_word(self.end, '0')}")
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self):
        """Iterate over rewrite steps."""
        return iter(self.steps)

    def __bool__(self) -> bool:
        """True if any rewriting was done."""
        return len(self.steps) > 0

    def __eq__(self, other):
        if isinstance(other, Derivation):
            return (self.start, self.end, self.steps) == (other.start, other.end, other.steps)
        return NotImplemented

    def __hash__(self):
        return hash((self.start, self.end, self.steps))

    def to_dict(self) -> Dict:
        """Convert derivation to dictionary for JSON serialization."""
        return {
            "start": format_word(self.start),
            "end": format_word(self.end),
            "steps": [step.to_dict() for step in self.steps],
            "step_count": len(self.steps),
        }

    def kind_counts(self) -> Dict[str, int]:
        """Count squaring and unsquaring steps."""
        counts = {"square": 0, "unsquare": 0}
        for step in self.steps:
            counts[step.kind] += 1
        return counts


# ============================================================
# Constructors and combinators
# ============================================================

def identity(word: Sequence[Symbol]) -> Derivation:
    """The empty proof that word is congruent to itself."""
    return Derivation(word, word)


def square(fragment: Sequence[Symbol]) -> Derivation:
    """The one-step proof m -> mm."""
    fragment = tuple(fragment)
    return Derivation(fragment, fragment + fragment,
                      [RewriteStep((), fragment, fragment + fragment, ())])


def join(derivations: Iterable[Derivation]) -> Derivation:
    """
    Compose derivations end to start.

    Raises DerivationError if the list is empty or if one derivation does
    not end exactly where the next one starts.
    """
    derivations = list(derivations)
    if not derivations:
        raise DerivationError("Cannot join an empty list of derivations")

    steps: List[RewriteStep] = []
    for prev, nxt in zip(derivations, derivations[1:]):
        if prev.end != nxt.start:
            raise DerivationError(
                f"Cannot join: {describe(prev.end)} does not match "
                f"{describe(nxt.start)}")
    for d in derivations:
        steps.extend(d.steps)
    return Derivation(derivations[0].start, derivations[-1].end, steps)


def prefix(context: Sequence[Symbol], d: Derivation) -> Derivation:
    """Lift d into words that begin with context."""
    context = tuple(context)
    return Derivation(context + d.start, context + d.end,
                      [step.wrapped(left=context) for step in d.steps])


def suffix(d: Derivation, context: Sequence[Symbol]) -> Derivation:
    """Lift d into words that end with context."""
    context = tuple(context)
    return Derivation(d.start + context, d.end + context,
                      [step.wrapped(right=context) for step in d.steps])


def time_rev(d: Derivation) -> Derivation:
    """The same proof run backwards, from end to start."""
    return Derivation(d.end, d.start, [step.reversed() for step in reversed(d.steps)])


def word_rev(d: Derivation) -> Derivation:
    """The proof of the mirrored statement: every word is reversed."""
    return Derivation(reverse(d.start), reverse(d.end),
                      [step.mirrored() for step in d.steps])
