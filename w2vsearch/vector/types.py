"""
Value types shared by the loader, the embedding table and the engine.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, NamedTuple


class Hit(NamedTuple):
    """A ranked search result."""

    word: str
    """Matching vocabulary word"""

    score: float
    """Cosine similarity to the query, in [-1, 1]"""


class Header(NamedTuple):
    vocab_size: int
    dimension: int


@dataclass(frozen=True)
class LoadReport:
    """Summary of one load of a word2vec binary file."""

    path: str
    vocab_size: int
    dimension: int
    loaded: int = 0
    duplicates: int = 0
    rejected_short: int = 0
    rejected_zero: int = 0
    refills: int = 0
    elapsed_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['elapsed_ms'] = round(self.elapsed_ms, 2)
        return data
