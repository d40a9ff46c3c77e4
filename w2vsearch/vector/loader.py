"""
Loader for the word2vec binary format.

Layout: an ASCII header line "<vocab_size> <dimension>\\n", then vocab_size
records of "<word> " followed by dimension little-endian float32 values.
Records are parsed through a bounded RecordReader; a record that does not fit
in the remaining buffer is retried from its start after a refill.
"""

import os
import sys
import time
from typing import Optional, Tuple
import numpy as np

from util.logging import logger
from ..core.errors import (
    DimensionOverflow,
    InvalidHeaderValues,
    LoadError,
    MalformedHeader,
    MalformedRecord,
    OpenError,
    RecordExceedsBuffer,
    StreamReadError,
    TruncatedRecord,
)
from ..core.schemas import LoaderOptions
from .reader import FLOAT_DTYPE, RecordReader
from .table import EmbeddingTable, EmbeddingTableBuilder
from .types import Header, LoadReport


def parse_header(line: bytes) -> Header:
    """Parse the first line of a word2vec binary file."""
    try:
        text = line.decode('ascii')
    except UnicodeDecodeError as exc:
        raise MalformedHeader("Header line is not ASCII") from exc

    tokens = text.split()
    if len(tokens) < 2:
        raise MalformedHeader(f"Header must contain vocab size and vector size, got {text.strip()!r}")
    for token in tokens[:2]:
        digits = token[1:] if token.startswith('-') else token
        # int() would also take "+3" and "1_000"
        if not digits.isdigit():
            raise MalformedHeader(f"Header values are not integers: {text.strip()!r}")
    vocab_size = int(tokens[0])
    dimension = int(tokens[1])

    if vocab_size <= 0 or dimension <= 0:
        raise InvalidHeaderValues(vocab_size, dimension)
    if vocab_size * dimension * FLOAT_DTYPE.itemsize > sys.maxsize:
        raise DimensionOverflow(vocab_size, dimension)
    return Header(vocab_size, dimension)


def normalize(vector: np.ndarray) -> Optional[np.ndarray]:
    """Scale `vector` to unit L2 norm (float64 math, float32 result).

    Returns None when the norm is zero or not finite.
    """
    values = np.asarray(vector, dtype=np.float64)
    norm = np.sqrt(np.dot(values, values))
    if norm == 0.0 or not np.isfinite(norm):
        return None
    return (values / norm).astype(np.float32)


class WordVectorLoader:
    """Streams a word2vec binary file into an EmbeddingTable."""

    def __init__(self, options: Optional[LoaderOptions] = None):
        self.options = options if options is not None else LoaderOptions.from_env()

    def good_word(self, raw_word: bytes) -> bool:
        """Length check on the trimmed token bytes, so "é" counts as 2."""
        return len(raw_word.strip()) >= self.options.min_word_length

    def record_bound(self, dimension: int) -> int:
        """Largest record the loader guarantees to handle, in bytes."""
        # word bytes + separating space + one stray newline + vector
        return self.options.max_word_bytes + 2 + dimension * FLOAT_DTYPE.itemsize

    def load(self, path) -> EmbeddingTable:
        """Load `path` and return the finished table.

        Raises a LoadError subclass on failure; the file is always closed and no
        partial table escapes.
        """
        path = os.fspath(path)
        try:
            stream = open(path, 'rb')
        except OSError as exc:
            error = OpenError(path, exc.strerror or str(exc))
            logger.log_load_failed(path, error)
            raise error from exc

        try:
            with stream:
                return self._load_stream(path, stream)
        except LoadError as error:
            logger.log_load_failed(path, error)
            raise

    def _file_size(self, stream) -> int:
        try:
            return os.fstat(stream.fileno()).st_size
        except OSError as exc:
            raise StreamReadError(f"Unable to get file size: {exc}") from exc

    def _read_header(self, reader: RecordReader) -> Header:
        while True:
            line = reader.read_line()
            if line is not None:
                return parse_header(line)
            if reader.available >= reader.capacity or reader.refill() == 0:
                raise MalformedHeader("No header line terminated by a newline")

    def _read_record(self, reader: RecordReader, dimension: int) -> Optional[Tuple[bytes, np.ndarray]]:
        """One (word bytes, raw vector) record, or None if the buffer ran short."""
        word = reader.read_word()
        if word is None:
            return None
        vector = reader.read_floats(dimension)
        if vector is None:
            return None
        return word, vector

    def _load_stream(self, path: str, stream) -> EmbeddingTable:
        started = time.perf_counter()
        file_size = self._file_size(stream)
        if file_size == 0:
            raise MalformedHeader("File is empty")

        # no point holding more buffer than there is file
        capacity = min(self.options.buffer_size, file_size)
        reader = RecordReader(stream, capacity)
        reader.fill()

        vocab_size, dimension = self._read_header(reader)
        bound = self.record_bound(dimension)
        if self.options.buffer_size <= bound:
            raise RecordExceedsBuffer(bound, self.options.buffer_size)

        logger.log_load_started(path, vocab_size, dimension, capacity)

        # the header count is only a hint; never reserve more rows than the
        # rest of the file could hold at one byte per word
        smallest_record = 2 + dimension * FLOAT_DTYPE.itemsize
        capacity_hint = min(vocab_size, max(1, (file_size - reader.position) // smallest_record))
        builder = EmbeddingTableBuilder(dimension, capacity_hint)
        duplicates = 0
        rejected_short = 0
        rejected_zero = 0
        unicode_errors = self.options.unicode_errors

        record_index = 0
        while record_index < vocab_size:
            reader.mark()
            record = self._read_record(reader, dimension)
            if record is None:
                reader.reset()
                try:
                    bytes_read = reader.refill()
                except RecordExceedsBuffer as exc:
                    raise RecordExceedsBuffer(exc.record_bytes, exc.buffer_size, record_index) from None
                if bytes_read == 0:
                    raise TruncatedRecord(record_index, reader.position)
                continue

            record_index += 1
            raw_word, raw_vector = record
            # bytes.strip() trims ASCII whitespace only
            try:
                word = raw_word.strip().decode('utf-8', errors=unicode_errors)
            except UnicodeDecodeError as exc:
                raise MalformedRecord(record_index - 1, f"word is not valid UTF-8: {exc.reason}") from exc
            if not self.good_word(raw_word):
                rejected_short += 1
                continue
            vector = normalize(raw_vector)
            if vector is None:
                rejected_zero += 1
                continue
            if builder.put(word, vector):
                duplicates += 1

        report = LoadReport(
            path=path,
            vocab_size=vocab_size,
            dimension=dimension,
            loaded=len(builder),
            duplicates=duplicates,
            rejected_short=rejected_short,
            rejected_zero=rejected_zero,
            refills=reader.refills,
            elapsed_ms=(time.perf_counter() - started) * 1000,
        )
        table = builder.build(report)
        logger.log_load_completed(report.to_dict())
        return table


def load(path, options: Optional[LoaderOptions] = None) -> EmbeddingTable:
    """Load a word2vec binary file into an EmbeddingTable."""
    return WordVectorLoader(options).load(path)
