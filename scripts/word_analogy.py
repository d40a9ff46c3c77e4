#!/usr/bin/env python3
"""
Word analogy queries over a word2vec binary file: A is to B as C is to ...?

Answers a single --words A B C query or runs an interactive prompt
(three words per line, EXIT to quit), like word2vec's word-analogy tool.
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from w2vsearch.core.config import get_default_top_k
from w2vsearch.core.errors import LoadError, QueryError, UnknownWord
from w2vsearch.core.schemas import LoaderOptions
from w2vsearch.core.timer import TimerRegistry
from w2vsearch.vector import SimilarityEngine, format_hits, format_table, hits_to_dicts

PROMPT = "Enter three words (EXIT to break): "


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Solve word analogies (A is to B as C is to ?) against a word2vec binary file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s vectors.bin                                # Interactive prompt
  %(prog)s vectors.bin --words man king woman -k 5    # Single query
  %(prog)s vectors.bin --words man king woman --json  # Output results as JSON
        """
    )
    parser.add_argument("file", help="word2vec binary file (e.g. vectors.bin)")
    parser.add_argument("--words", "-w", nargs=3, metavar=("A", "B", "C"),
                        help="Analogy words; omit for an interactive prompt")
    parser.add_argument("-k", type=int, default=None, help="Number of results (default: W2V_DEFAULT_TOP_K)")
    parser.add_argument("--json", "-j", action="store_true", help="Output results as JSON")
    parser.add_argument("--compact", "-c", action="store_true", help="One-line output instead of a table")
    return parser


def run_query(engine: SimilarityEngine, timers: TimerRegistry, words, k: int, args) -> bool:
    """Run one analogy and print it; returns False if the query was rejected."""
    a, b, c = words
    try:
        with timers.timed("ANALOGY"):
            hits = engine.analogy(a, b, c, k)
    except UnknownWord as e:
        print(f"Out of dictionary word: {e.word}")
        return False
    except QueryError as e:
        print(f"ERROR: {e}")
        return False

    if args.json:
        sys.stdout.write(json.dumps(hits_to_dicts(hits), indent=2) + "\n")
    elif args.compact:
        sys.stdout.write(f"{a} {b} {c} = {format_hits(hits)}")
    else:
        sys.stdout.write(format_table(hits))
    return True


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    k = args.k if args.k is not None else get_default_top_k()

    engine = SimilarityEngine()
    timers = TimerRegistry()
    try:
        with timers.timed("LOADER"):
            table = engine.load_file(args.file, LoaderOptions.from_env())
    except LoadError as e:
        print(f"ERROR: Failed to load {args.file}: {e}")
        return 1

    if not args.json:
        print(f"Loaded {len(table)} words, dimension {table.dim()}")

    if args.words is not None:
        return 0 if run_query(engine, timers, args.words, k, args) else 1

    while True:
        try:
            line = input(PROMPT).strip()
        except EOFError:
            break
        if line == "EXIT":
            break
        words = line.split()
        if len(words) != 3:
            if words:
                print("Only three words are allowed")
            continue
        run_query(engine, timers, words, k, args)
    return 0


if __name__ == "__main__":
    # undecodable word bytes are held as lone surrogates; print them back as bytes
    sys.stdout.reconfigure(errors="surrogateescape")
    sys.exit(main())
