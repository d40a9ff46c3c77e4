#!/usr/bin/env python3
"""
Vocabulary analysis for a word2vec binary file.

Loads the file and prints word-length statistics, to look for junk tokens
worth filtering. Pass --min-word-length 1 to keep single-character tokens
in the analysis.
"""

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from w2vsearch.core.errors import LoadError
from w2vsearch.core.schemas import LoaderOptions
from w2vsearch.core.stats import analyze_vocabulary, format_stats
from w2vsearch.vector import load


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Word-length statistics for a word2vec binary file")
    parser.add_argument("file", help="word2vec binary file (e.g. vectors.bin)")
    parser.add_argument("--min-word-length", type=int, default=None,
                        help="Override W2V_MIN_WORD_LENGTH for this analysis")
    parser.add_argument("--show-one-char", action="store_true", help="List single-character words")
    parser.add_argument("--json", "-j", action="store_true", help="Output results as JSON")
    args = parser.parse_args(argv)

    options = LoaderOptions.from_env()
    if args.min_word_length is not None:
        try:
            options = LoaderOptions(**{**options.model_dump(), "min_word_length": args.min_word_length})
        except ValidationError as e:
            parser.error(str(e))

    if not args.json:
        print("Reading...")
    try:
        table = load(args.file, options)
    except LoadError as e:
        print(f"ERROR: Failed to load {args.file}: {e}")
        return 1

    stats = analyze_vocabulary(table.words)

    if args.json:
        data = stats.to_dict()
        if not args.show_one_char:
            data.pop("one_char_words")
        if table.report is not None:
            data["load_report"] = table.report.to_dict()
        print(json.dumps(data, indent=2))
        return 0

    if args.show_one_char:
        for word in stats.one_char_words:
            print(f"1char word {word}")
    sys.stdout.write(format_stats(stats))
    if table.report is not None:
        print(f"duplicates = {table.report.duplicates}")
    print("Done")
    return 0


if __name__ == "__main__":
    # undecodable word bytes are held as lone surrogates; print them back as bytes
    sys.stdout.reconfigure(errors="surrogateescape")
    sys.exit(main())
