"""
Similarity search over an attached EmbeddingTable.

Every row is a unit vector, so cosine similarity is the dot product. A search
is one linear pass in table order keeping the k best rows in a min-heap.
"""

import heapq
import math
from typing import Iterable, List, Optional
import numpy as np

from util.logging import logger
from ..core.config import get_search_chunk_rows
from ..core.errors import (
    AlreadyLoaded,
    InvalidK,
    InvalidQuery,
    NotLoaded,
    UnknownWord,
)
from ..core.schemas import LoaderOptions
from .loader import load, normalize
from .table import EmbeddingTable
from .types import Hit


class SimilarityEngine:
    """Answers nearest-word and analogy queries against one table.

    The engine starts empty; `attach()` installs a table exactly once. After
    that it holds no mutable state, so concurrent queries need no locking.
    """

    def __init__(self, chunk_rows: Optional[int] = None):
        self._table: Optional[EmbeddingTable] = None
        self._chunk_rows = chunk_rows if chunk_rows is not None else get_search_chunk_rows()
        if self._chunk_rows < 1:
            raise ValueError("chunk_rows must be >= 1")

    @property
    def is_loaded(self) -> bool:
        return self._table is not None

    @property
    def table(self) -> EmbeddingTable:
        return self._require_table()

    def attach(self, table: EmbeddingTable) -> None:
        if not isinstance(table, EmbeddingTable):
            raise TypeError(f"Expected EmbeddingTable, got {type(table).__name__}")
        if self._table is not None:
            raise AlreadyLoaded()
        self._table = table

    def load_file(self, path, options: Optional[LoaderOptions] = None) -> EmbeddingTable:
        """Load a word2vec binary file and attach the resulting table."""
        if self._table is not None:
            raise AlreadyLoaded()
        table = load(path, options)
        self.attach(table)
        return table

    def _require_table(self) -> EmbeddingTable:
        if self._table is None:
            raise NotLoaded()
        return self._table

    def _lookup(self, table: EmbeddingTable, word: str) -> np.ndarray:
        vector = table.get(word)
        if vector is None:
            raise UnknownWord(word)
        return vector

    def nearest(self, word: str, k: int) -> List[Hit]:
        """The k words closest to `word`, excluding `word` itself."""
        table = self._require_table()
        vector = self._lookup(table, word)
        hits = self.search(vector, {word}, k)
        logger.log_query("nearest", [word], k, len(hits))
        return hits

    def analogy(self, a: str, b: str, c: str, k: int) -> List[Hit]:
        """The k words closest to normalize(v(b) - v(a) + v(c)): a is to b as c is to ...?"""
        table = self._require_table()
        vector_a = self._lookup(table, a)
        vector_b = self._lookup(table, b)
        vector_c = self._lookup(table, c)

        combined = (vector_b.astype(np.float64)
                    - vector_a.astype(np.float64)
                    + vector_c.astype(np.float64))
        query = normalize(combined)
        if query is None:
            raise InvalidQuery(f"Analogy vector for ({a}, {b}, {c}) has zero length")

        hits = self.search(query, {a, b, c}, k)
        logger.log_query("analogy", [a, b, c], k, len(hits))
        return hits

    def search(self, query, exclude: Iterable[str], k: int) -> List[Hit]:
        """Top k rows by dot product with `query`, skipping words in `exclude`.

        Hits come back sorted by score descending; equal scores keep table
        order, because a candidate must strictly beat the current k-th best.
        """
        table = self._require_table()
        query = self._check_query(query, table.dim())

        if isinstance(exclude, str):
            exclude = [exclude]
        excluded_rows = []
        for word in set(exclude):
            row = table.row_of(word)
            if row is not None:
                excluded_rows.append(row)
        excluded_rows.sort()

        limit = len(table) - len(excluded_rows)
        if isinstance(k, bool) or not isinstance(k, (int, np.integer)) or not 1 <= k <= limit:
            raise InvalidK(k, limit)
        k = int(k)

        # entries are (score, -row); heap[0] is the weakest kept hit, and among
        # equal scores the latest row, so earlier rows win ties
        best = [(-math.inf, 1)] * k
        vectors = table.vectors
        total = len(table)
        skip = 0

        for start in range(0, total, self._chunk_rows):
            stop = min(start + self._chunk_rows, total)
            scores = vectors[start:stop].astype(np.float64) @ query

            while skip < len(excluded_rows) and excluded_rows[skip] < stop:
                scores[excluded_rows[skip] - start] = -math.inf
                skip += 1

            for offset in np.flatnonzero(scores > best[0][0]):
                score = float(scores[offset])
                if score > best[0][0]:
                    heapq.heapreplace(best, (score, -(start + int(offset))))

        ranked = sorted(best, key=lambda entry: (-entry[0], -entry[1]))
        return [Hit(table.word_at(-neg_row), score) for score, neg_row in ranked]

    @staticmethod
    def _check_query(query, dim: int) -> np.ndarray:
        values = np.asarray(query, dtype=np.float64)
        if values.shape != (dim,):
            raise InvalidQuery(f"Query vector must have shape ({dim},), got {values.shape}")
        if not np.all(np.isfinite(values)):
            raise InvalidQuery("Query vector has non-finite components")
        return values
