"""
Bounded byte buffer over a binary stream for word2vec record parsing.

Reads never raise on a short buffer: they return None, and the caller decides
whether to `refill()` and retry the record from its mark.
"""

from typing import BinaryIO, Optional
import numpy as np

from util.logging import logger
from ..core.errors import RecordExceedsBuffer, StreamReadError

SPACE = 0x20
NEWLINE = 0x0A

# word2vec always stores little-endian float32
FLOAT_DTYPE = np.dtype('<f4')


class RecordReader:
    """Sliding window of at most `capacity` bytes over `stream`.

    `file_offset` is the stream offset of buffer[0]; `mark()` remembers the
    start of the record being parsed so a refill can carry it forward.
    """

    def __init__(self, stream: BinaryIO, capacity: int):
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._stream = stream
        self._buffer = bytearray(capacity)
        self._view = memoryview(self._buffer)
        self.capacity = capacity
        self.file_offset = 0
        self._pos = 0
        self._end = 0
        self._mark = 0
        self.refills = 0

    @property
    def position(self) -> int:
        """Absolute stream offset of the next unread byte."""
        return self.file_offset + self._pos

    @property
    def available(self) -> int:
        return self._end - self._pos

    def _read_into(self, start: int) -> int:
        """Fill buffer[start:] from the stream; returns bytes read (0 at EOF)."""
        total = 0
        while start + total < self.capacity:
            try:
                n = self._stream.readinto(self._view[start + total:])
            except OSError as exc:
                raise StreamReadError(f"Error reading file at offset {self.file_offset + start + total}: {exc}") from exc
            if not n:
                break
            total += n
        return total

    def fill(self) -> int:
        """Initial read from the current stream position."""
        self._end = self._read_into(0)
        self._pos = 0
        self._mark = 0
        return self._end

    def mark(self) -> None:
        self._mark = self._pos

    def reset(self) -> None:
        self._pos = self._mark

    def refill(self) -> int:
        """Move bytes from the mark onwards to the front and read more after them.

        Returns the number of new bytes read; 0 means end of stream. Raises
        RecordExceedsBuffer when the marked record already spans the full buffer.
        """
        carried = self._end - self._mark
        if self._mark == 0 and self._end == self.capacity:
            raise RecordExceedsBuffer(carried + 1, self.capacity)

        if carried:
            self._view[:carried] = bytes(self._view[self._mark:self._end])
        self.file_offset += self._mark
        self._pos = 0
        self._mark = 0
        self._end = carried

        bytes_read = self._read_into(carried)
        self._end += bytes_read
        self.refills += 1
        logger.log_buffer_refill(self.file_offset, carried, bytes_read)
        return bytes_read

    def read_line(self) -> Optional[bytes]:
        """Bytes up to (not including) the next newline, or None if none is buffered."""
        idx = self._buffer.find(b'\n', self._pos, self._end)
        if idx == -1:
            return None
        line = bytes(self._view[self._pos:idx])
        self._pos = idx + 1
        return line

    def read_word(self) -> Optional[bytes]:
        """Raw word token bytes up to the next space.

        Newlines ahead of the token are skipped (some writers put one between
        records). The space itself is consumed and not returned.
        """
        pos = self._pos
        while pos < self._end and self._buffer[pos] == NEWLINE:
            pos += 1
        if pos >= self._end:
            return None

        idx = self._buffer.find(b' ', pos, self._end)
        if idx == -1:
            return None
        word = bytes(self._view[pos:idx])
        self._pos = idx + 1
        return word

    def read_floats(self, count: int) -> Optional[np.ndarray]:
        """`count` little-endian float32 values as a native-order copy, or None."""
        nbytes = count * FLOAT_DTYPE.itemsize
        if self._end - self._pos < nbytes:
            return None
        values = np.frombuffer(self._buffer, dtype=FLOAT_DTYPE, count=count, offset=self._pos)
        self._pos += nbytes
        return values.astype(np.float32)
