"""
Exceptions raised by the loader and the similarity engine.
"""

from typing import Optional


class WordVectorError(Exception):
    """Base exception for word vector loading and search."""
    pass


# Load failures

class LoadError(WordVectorError):
    """A word2vec file could not be loaded. No partial table is returned."""
    pass


class OpenError(LoadError):
    """The file could not be opened."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        message = f"Unable to open file: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class StreamReadError(LoadError):
    """A read failed part way through the file."""
    pass


class MalformedHeader(LoadError):
    """Header line is absent, not ASCII, or lacks the two integers."""
    pass


class InvalidHeaderValues(LoadError):
    """Header parsed but vocab size or dimension is not positive."""

    def __init__(self, vocab_size: int, dimension: int):
        self.vocab_size = vocab_size
        self.dimension = dimension
        super().__init__(f"Invalid vocab size and/or vector size: {vocab_size} {dimension}")


class DimensionOverflow(LoadError):
    """vocab_size * dimension * 4 does not fit in the address space."""

    def __init__(self, vocab_size: int, dimension: int):
        self.vocab_size = vocab_size
        self.dimension = dimension
        super().__init__(
            f"Embedding matrix of {vocab_size} x {dimension} floats exceeds addressable size"
        )


class TruncatedRecord(LoadError):
    """End of file reached inside a word or a vector."""

    def __init__(self, record_index: int, offset: int):
        self.record_index = record_index
        self.offset = offset
        super().__init__(
            f"Unexpected end of file in record {record_index} (file offset {offset})"
        )


class MalformedRecord(LoadError):
    """A record's word could not be decoded under the strict unicode policy."""

    def __init__(self, record_index: int, reason: str):
        self.record_index = record_index
        super().__init__(f"Malformed record {record_index}: {reason}")


class RecordExceedsBuffer(LoadError):
    """A single record cannot fit in the configured read buffer."""

    def __init__(self, record_bytes: int, buffer_size: int, record_index: Optional[int] = None):
        self.record_bytes = record_bytes
        self.buffer_size = buffer_size
        self.record_index = record_index
        where = f" at record {record_index}" if record_index is not None else ""
        super().__init__(
            f"Record of up to {record_bytes} bytes{where} does not fit in a {buffer_size} byte buffer"
        )


# Query failures

class QueryError(WordVectorError):
    """A similarity query was rejected. The engine stays usable."""
    pass


class NotLoaded(QueryError):
    """Query issued before a table was attached."""

    def __init__(self):
        super().__init__("You need to load a word vector table before searching")


class AlreadyLoaded(QueryError):
    """attach() called on an engine that already has a table."""

    def __init__(self):
        super().__init__("A word vector table is already attached to this engine")


class UnknownWord(QueryError):
    """Query word is not in the table."""

    def __init__(self, word: str):
        self.word = word
        super().__init__(word)


class InvalidK(QueryError):
    """k is not a positive integer within the number of candidate rows."""

    def __init__(self, k, limit: int):
        self.k = k
        self.limit = limit
        super().__init__(f"k must be between 1 and {limit}, got {k!r}")


class InvalidQuery(QueryError):
    """Query vector has the wrong shape or cannot be normalized."""
    pass
