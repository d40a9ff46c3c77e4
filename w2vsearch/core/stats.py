"""
Word-length statistics over a loaded vocabulary.

Useful for spotting junk tokens (punctuation, digits, stray single
characters) in a word2vec file before deciding on filtering rules.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, List
import numpy as np


@dataclass
class VocabularyStats:
    size: int
    zero_length: int
    one_char: int
    punctuation: int
    digit: int
    min_length: int
    max_length: int
    mean_length: float
    variance: float
    std_deviation: float
    one_char_words: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def analyze_vocabulary(words: Iterable[str]) -> VocabularyStats:
    """Compute length statistics for `words` (e.g. ``table.words``)."""
    words = list(words)
    lengths = np.fromiter((len(word) for word in words), dtype=np.int64, count=len(words))

    one_char_words = [word for word in words if len(word) == 1]
    punctuation = sum(1 for word in one_char_words if not word.isalnum())
    digit = sum(1 for word in one_char_words if word.isdigit())

    if len(words) == 0:
        return VocabularyStats(0, 0, 0, 0, 0, 0, 0, 0.0, 0.0, 0.0, [])

    mean = float(lengths.mean())
    variance = float(((lengths - mean) ** 2).mean())
    return VocabularyStats(
        size=len(words),
        zero_length=int(np.count_nonzero(lengths == 0)),
        one_char=len(one_char_words),
        punctuation=punctuation,
        digit=digit,
        min_length=int(lengths.min()),
        max_length=int(lengths.max()),
        mean_length=mean,
        variance=variance,
        std_deviation=float(np.sqrt(variance)),
        one_char_words=one_char_words,
    )


def format_stats(stats: VocabularyStats) -> str:
    lines = [
        f"list size = {stats.size}",
        f"zero length words = {stats.zero_length}",
        f"one char words = {stats.one_char}",
        f"punctuation words = {stats.punctuation}",
        f"digit words = {stats.digit}",
        f"min word len = {stats.min_length}",
        f"max word len = {stats.max_length}",
        f"mean word len = {stats.mean_length:.4f}",
        f"word len variance = {stats.variance:.4f}",
        f"word len std deviation = {stats.std_deviation:.4f}",
    ]
    return "\n".join(lines) + "\n"
