#!/usr/bin/env python3
"""
Nearest-word lookup over a word2vec binary file.

Loads the file once, then answers either a single --word query or an
interactive prompt loop (type EXIT to quit), like word2vec's distance tool.
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

PROMPT = "Enter word (EXIT to break): "


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find the closest words to a query word in a word2vec binary file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s vectors.bin                    # Interactive prompt
  %(prog)s vectors.bin --word king -k 10  # Single query
  %(prog)s vectors.bin --word king --json # Output results as JSON

Environment variables:
- W2V_BUFFER_SIZE=67108864 (loader buffer size in bytes)
- W2V_DEFAULT_TOP_K=40 (default number of results)
        """
    )
    parser.add_argument("file", help="word2vec binary file (e.g. vectors.bin)")
    parser.add_argument("--word", "-w", help="Query word; omit for an interactive prompt")
    parser.add_argument("-k", type=int, default=None, help="Number of results (default: W2V_DEFAULT_TOP_K)")
    parser.add_argument("--json", "-j", action="store_true", help="Output results as JSON")
    parser.add_argument("--compact", "-c", action="store_true", help="One-line output instead of a table")
    return parser


def render(hits, args) -> str:
    if args.json:
        return json.dumps(hits_to_dicts(hits), indent=2) + "\n"
    if args.compact:
        return format_hits(hits)
    return format_table(hits)


def run_query(engine: SimilarityEngine, timers: TimerRegistry, word: str, k: int, args) -> bool:
    """Run one query and print it; returns False if the query was rejected."""
    try:
        with timers.timed("MATCHES"):
            hits = engine.nearest(word, k)
    except UnknownWord as e:
        print(f"Out of dictionary word: {e.word}")
        return False
    except QueryError as e:
        print(f"ERROR: {e}")
        return False
    sys.stdout.write(render(hits, args))
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

    if args.word is not None:
        return 0 if run_query(engine, timers, args.word, k, args) else 1

    while True:
        try:
            word = input(PROMPT).strip()
        except EOFError:
            break
        if word == "EXIT":
            break
        if not word:
            continue
        run_query(engine, timers, word, k, args)
    return 0


if __name__ == "__main__":
    # undecodable word bytes are held as lone surrogates; print them back as bytes
    sys.stdout.reconfigure(errors="surrogateescape")
    sys.exit(main())
