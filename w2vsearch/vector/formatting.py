"""
Rendering of ranked hits for terminals and JSON output.
"""

from typing import Any, Dict, List, Sequence

from ..core.schemas import HitModel
from .types import Hit

SCORE_FORMAT = "({:.4f})"


def format_hits(hits: Sequence[Hit]) -> str:
    """One line: "word (0.1234), other (0.0987)" followed by a newline."""
    parts = [f"{hit.word} {SCORE_FORMAT.format(hit.score)}" for hit in hits]
    return ", ".join(parts) + "\n"


def format_table(hits: Sequence[Hit]) -> str:
    """Two-column listing in the style of word2vec's distance tool."""
    lines = [f"{'Word':>50}{'Cosine distance':>20}", "-" * 70]
    for hit in hits:
        lines.append(f"{hit.word:>50}{hit.score:>20.6f}")
    return "\n".join(lines) + "\n"


def hits_to_dicts(hits: Sequence[Hit]) -> List[Dict[str, Any]]:
    return [HitModel(word=hit.word, score=hit.score).model_dump() for hit in hits]
