#!/usr/bin/env python3
"""
IDEM Feature Demonstration

This script walks through the main features of the idem library.
"""

from idem import (
    FreeBand, format_word, generate_exact_monoid, merge, monoid_size, parse_word,
    reduce, remove_middle,
)
from idem.explore import class_representatives, explore


def section(title: str):
    """Print a section header."""
    print(f"\n{'='*60}")
    print(f" {title}")
    print('='*60)


def demo_merge():
    """Demonstrate the overlap merge."""
    section("Overlap Merge")

    for left, right in [("abc", "bca"), ("ab", "ba"), ("abc", "acb"), ("ab", "ab")]:
        merged = merge(parse_word(left), parse_word(right))
        print(f"  merge({left}, {right}) = {format_word(merged)}")


def demo_generation():
    """Demonstrate enumeration of normal forms."""
    section("Generating Normal Forms")

    for n in range(5):
        print(f"  {n} letters: {monoid_size(n)} elements")

    exact = generate_exact_monoid(3)
    longest = max(exact, key=len)
    print(f"\n  {len(exact)} normal forms use exactly 3 letters")
    print(f"  longest: {format_word(longest)} ({len(longest)} letters)")


def demo_reduction():
    """Demonstrate reduction with derivations."""
    section("Reduction")

    for text in ["aabb", "abba", "abcbc", "abcacb", "cabcabbcab"]:
        normal = reduce(parse_word(text))
        print(f"  {text} => {format_word(normal, '0')}")


def demo_derivations():
    """Demonstrate derivation output."""
    section("Derivations")

    band = FreeBand(3)
    word, proof = band("abcbcab", trace=True)
    print(f"  abcbcab => {band.format(word)} in {len(proof)} steps\n")
    for line in proof.format().splitlines():
        print(f"    {line}")

    print("\n  Removing a middle factor: abc b cab => abc cab")
    middle = remove_middle(parse_word("abc"), parse_word("b"), parse_word("cab"))
    print(f"    {middle.format('compact')}")
    print(f"    {middle.kind_counts()}")


def demo_algebra():
    """Demonstrate products, equality and proofs."""
    section("Band Algebra")

    band = FreeBand(3)
    print(f"  ab * ba = {band.format(band.multiply('ab', 'ba'))}")
    print(f"  abcabc == abc: {band.equivalent('abcabc', 'abc')}")
    print(f"  ab == ba: {band.equivalent('ab', 'ba')}")

    proof = band.prove("abcbcab", "abcabcab")
    print("\n  abcbcab ~ abcabcab:")
    print(f"    {proof.format('compact')}")

    print(f"\n  'abcab' in band: {'abcab' in band}")
    print(f"  'abab' in band: {'abab' in band}")


def demo_explore():
    """Demonstrate the brute-force cross-check."""
    section("Brute-Force Exploration")

    uf = explore(2, rounds=8)
    reps = class_representatives(uf, max_rep_len=3)
    print(f"  {len(uf)} words explored on 2 letters")
    print(f"  class representatives: {', '.join(format_word(r) for r in reps)}")
    agree = all(len({reduce(w) for w in words}) == 1 for words in uf.to_sets())
    print(f"  every class has one normal form: {agree}")


def main():
    """Run all demonstrations."""
    print("IDEM - normal forms in the free idempotent monoid")
    print("Feature Demonstration")

    demo_merge()
    demo_generation()
    demo_reduction()
    demo_derivations()
    demo_algebra()
    demo_explore()

    print("\n" + "="*60)
    print(" Demo complete!")
    print("="*60)


if __name__ == "__main__":
    main()
