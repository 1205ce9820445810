#!/usr/bin/env python3
"""
IDEM Command-Line Interface

Usage:
    idem generate 3                 # Every normal form on 3 letters
    idem reduce abcacb              # Normal form of a word
    idem reduce -v abab             # ... with its derivation
    idem reduce --json abab         # ... as JSON
    echo abab | idem reduce         # Filter mode
    idem explore 3 --histogram      # Brute-force union-find check
    idem table 2                    # Multiplication table

Output:
    Words are written with letters a..z. The empty word is written "0".
    Derivation lines have the form "ab(c)d -> ab(cc)d", with the
    rewritten fragment in parentheses.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional, Sequence

from . import __version__
from .band import FreeBand
from .explore import (
    DEFAULT_MAX_REP_LEN, DEFAULT_ROUNDS, class_representatives, cumulative_histogram,
    explore, multiplication_table,
)
from .word import MAX_LETTERS, format_word, parse_word

logger = logging.getLogger(__name__)


# ============================================================
# Requests
# ============================================================

class GenerateRequest:
    """Print every normal form on n_letters letters."""

    def __init__(self, n_letters: int):
        self.n_letters = n_letters

    def __repr__(self) -> str:
        return f"GenerateRequest({self.n_letters})"


class ReduceRequest:
    """Reduce words; an empty word list means read stdin."""

    def __init__(self, words: Sequence[str], verbose: bool = False, as_json: bool = False):
        self.words = list(words)
        self.verbose = verbose
        self.as_json = as_json

    def __repr__(self) -> str:
        return f"ReduceRequest({self.words!r}, verbose={self.verbose}, as_json={self.as_json})"


class ExploreRequest:
    """Partition words by brute force and report class representatives."""

    def __init__(self, n_letters: int, rounds: int = DEFAULT_ROUNDS,
                 max_rep_len: int = DEFAULT_MAX_REP_LEN, histogram: bool = False):
        self.n_letters = n_letters
        self.rounds = rounds
        self.max_rep_len = max_rep_len
        self.histogram = histogram

    def __repr__(self) -> str:
        return (f"ExploreRequest({self.n_letters}, rounds={self.rounds}, "
                f"max_rep_len={self.max_rep_len}, histogram={self.histogram})")


class TableRequest:
    """Print the multiplication table of the normal forms."""

    def __init__(self, n_letters: int):
        self.n_letters = n_letters

    def __repr__(self) -> str:
        return f"TableRequest({self.n_letters})"


# ============================================================
# Handlers
# ============================================================

def _alphabet_size(text: str) -> int:
    try:
        n = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}")
    if not 0 <= n <= MAX_LETTERS:
        raise argparse.ArgumentTypeError(f"alphabet size must be between 0 and {MAX_LETTERS}")
    return n


def run_generate(request: GenerateRequest) -> int:
    for word in FreeBand(request.n_letters):
        print(format_word(word, "0"))
    return 0


def reduce_line(text: str, verbose: bool = False, as_json: bool = False) -> str:
    """
    Reduce one word written in letters and return the text to print.

    Raises WordError if text is not a word.
    """
    word = parse_word(text)
    n_letters = max(word) + 1 if word else 0
    normal, derivation = FreeBand(n_letters).reduce(word, trace=True)

    if as_json:
        result = derivation.to_dict()
        result["input"] = format_word(word)
        result["normal_form"] = format_word(normal)
        return json.dumps(result)

    lines = []
    if verbose and derivation:
        lines.append(derivation.format("steps"))
    lines.append(format_word(normal, "0"))
    return "\n".join(lines)


def run_reduce(request: ReduceRequest) -> int:
    if request.words:
        lines = request.words
    else:
        lines = (line.strip() for line in sys.stdin)

    for line in lines:
        if not line or line.startswith("#"):
            continue
        try:
            print(reduce_line(line, request.verbose, request.as_json))
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
    return 0


def run_explore(request: ExploreRequest) -> int:
    uf = explore(request.n_letters, request.rounds)
    sets = uf.to_sets()
    logger.info("%d words in %d classes", len(uf), len(sets))

    if request.histogram:
        min_lengths = [min(len(w) for w in words) for words in sets]
        histogram = cumulative_histogram(min_lengths)
        print(f"##### {request.rounds} ({len(sets)} entries, {histogram})")
        return 0

    for rep in class_representatives(uf, request.max_rep_len):
        print(format_word(rep, "0"))
    return 0


def run_table(request: TableRequest) -> int:
    for x, y, xy in multiplication_table(FreeBand(request.n_letters).elements()):
        print(f"{format_word(x, '0')} * {format_word(y, '0')} = {format_word(xy, '0')}")
    return 0


HANDLERS = {
    GenerateRequest: run_generate,
    ReduceRequest: run_reduce,
    ExploreRequest: run_explore,
    TableRequest: run_table,
}


def run(request) -> int:
    """Dispatch a request to its handler and return the exit code."""
    handler = HANDLERS.get(type(request))
    if handler is None:
        raise TypeError(f"Unknown request: {request!r}")
    logger.debug("running %r", request)
    return handler(request)


# ============================================================
# Argument parsing
# ============================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="idem",
        description="IDEM - normal forms in the free idempotent monoid",
        epilog="Examples:\n"
               "  idem generate 2                Print the 7 elements on 2 letters\n"
               "  idem reduce -v abcbc           Reduce with derivation\n"
               "  echo abab | idem reduce        Filter mode\n"
               "  idem explore 3 --histogram     Brute-force class counts\n",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    generate = commands.add_parser("generate", help="List every normal form")
    generate.add_argument("n_letters", type=_alphabet_size, help="Alphabet size")

    reduce_cmd = commands.add_parser("reduce", help="Reduce words to normal form")
    reduce_cmd.add_argument("words", nargs="*", help="Words to reduce (default: read stdin)")
    reduce_cmd.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print the derivation before each normal form"
    )
    reduce_cmd.add_argument(
        "--json",
        action="store_true",
        dest="as_json",
        help="Print each result as a JSON object"
    )

    explore_cmd = commands.add_parser("explore", help="Brute-force union-find exploration")
    explore_cmd.add_argument("n_letters", type=_alphabet_size, help="Alphabet size")
    explore_cmd.add_argument(
        "-r", "--rounds",
        type=int,
        default=DEFAULT_ROUNDS,
        help=f"Number of extension rounds (default: {DEFAULT_ROUNDS})"
    )
    explore_cmd.add_argument(
        "--max-rep-len",
        type=int,
        default=DEFAULT_MAX_REP_LEN,
        help=f"Longest representative to print (default: {DEFAULT_MAX_REP_LEN})"
    )
    explore_cmd.add_argument(
        "--histogram",
        action="store_true",
        help="Print the cumulative histogram of shortest class members"
    )

    table = commands.add_parser("table", help="Multiplication table of normal forms")
    table.add_argument("n_letters", type=_alphabet_size, help="Alphabet size")

    return parser


def parse_request(argv: Optional[List[str]] = None):
    """Parse command-line arguments into (request, log level)."""
    args = build_parser().parse_args(argv)

    if args.command == "generate":
        request = GenerateRequest(args.n_letters)
    elif args.command == "reduce":
        request = ReduceRequest(args.words, verbose=args.verbose, as_json=args.as_json)
    elif args.command == "explore":
        request = ExploreRequest(args.n_letters, rounds=args.rounds,
                                 max_rep_len=args.max_rep_len, histogram=args.histogram)
    else:
        request = TableRequest(args.n_letters)

    return request, args.log_level


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    request, log_level = parse_request(argv)
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    sys.exit(run(request))


if __name__ == "__main__":
    main()
