"""
Immutable word -> unit vector table backed by one contiguous float32 matrix.
"""

from typing import Dict, Iterator, List, Optional, Tuple
import numpy as np

from .types import LoadReport


class EmbeddingTable:
    """Ordered, read-only mapping from word to unit-length vector.

    Rows are stored row-major in a single ``(len, dim)`` float32 array, with a
    parallel list of words and a dict index ``word -> row``. Iteration follows
    row order, which is the order words were first seen in the file.

    The table takes ownership of `vectors` and marks it read-only.
    """

    def __init__(self, words: List[str], vectors: np.ndarray, report: Optional[LoadReport] = None):
        if vectors.ndim != 2:
            raise ValueError(f"Expected a 2-d vector matrix, got shape {vectors.shape}")
        if len(words) != vectors.shape[0]:
            raise ValueError(f"{len(words)} words for {vectors.shape[0]} vectors")

        self._words = list(words)
        self._index: Dict[str, int] = {word: row for row, word in enumerate(self._words)}
        if len(self._index) != len(self._words):
            raise ValueError("Duplicate words in embedding table")

        self._vectors = np.ascontiguousarray(vectors, dtype=np.float32)
        self._vectors.flags.writeable = False
        self.report = report

    def get(self, word: str) -> Optional[np.ndarray]:
        """Return the (read-only) vector for `word`, or None."""
        row = self._index.get(word)
        if row is None:
            return None
        return self._vectors[row]

    def row_of(self, word: str) -> Optional[int]:
        return self._index.get(word)

    def word_at(self, row: int) -> str:
        return self._words[row]

    def len(self) -> int:
        return len(self._words)

    def dim(self) -> int:
        return self._vectors.shape[1]

    @property
    def words(self) -> List[str]:
        return list(self._words)

    @property
    def vectors(self) -> np.ndarray:
        """The full read-only ``(len, dim)`` matrix in row order."""
        return self._vectors

    def iter(self) -> Iterator[Tuple[str, np.ndarray]]:
        """Yield ``(word, vector)`` pairs in insertion order."""
        for row, word in enumerate(self._words):
            yield word, self._vectors[row]

    def __iter__(self) -> Iterator[Tuple[str, np.ndarray]]:
        return self.iter()

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word) -> bool:
        return word in self._index

    def __repr__(self) -> str:
        return f"EmbeddingTable(len={len(self)}, dim={self.dim()})"


class EmbeddingTableBuilder:
    """Accumulates rows during a load; `build()` freezes them into a table.

    Re-inserting a word overwrites its vector in place and keeps its row.
    """

    def __init__(self, dimension: int, capacity_hint: int = 0):
        if dimension < 1:
            raise ValueError("dimension must be >= 1")
        self.dimension = dimension
        self._vectors = np.empty((max(capacity_hint, 1), dimension), dtype=np.float32)
        self._words: List[str] = []
        self._index: Dict[str, int] = {}

    def _ensure_capacity(self, rows: int) -> None:
        capacity = self._vectors.shape[0]
        if rows <= capacity:
            return
        grown = np.empty((max(rows, capacity * 2), self.dimension), dtype=np.float32)
        grown[:len(self._words)] = self._vectors[:len(self._words)]
        self._vectors = grown

    def put(self, word: str, vector: np.ndarray) -> bool:
        """Insert or overwrite `word`. Returns True when an earlier vector was replaced."""
        row = self._index.get(word)
        if row is not None:
            self._vectors[row] = vector
            return True

        row = len(self._words)
        self._ensure_capacity(row + 1)
        self._vectors[row] = vector
        self._words.append(word)
        self._index[word] = row
        return False

    def __len__(self) -> int:
        return len(self._words)

    def build(self, report: Optional[LoadReport] = None) -> EmbeddingTable:
        rows = len(self._words)
        if rows < self._vectors.shape[0]:
            # shrink so the unused tail of the preallocation is freed
            vectors = self._vectors[:rows].copy()
        else:
            vectors = self._vectors
        table = EmbeddingTable(self._words, vectors, report=report)
        self._vectors = np.empty((1, self.dimension), dtype=np.float32)
        self._words = []
        self._index = {}
        return table
