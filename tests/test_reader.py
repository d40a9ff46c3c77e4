"""
Tests for the bounded RecordReader.
"""

import io

import numpy as np
import pytest

from w2vsearch.core.errors import RecordExceedsBuffer, StreamReadError
from w2vsearch.vector.reader import RecordReader


def test_reads_return_none_when_buffer_runs_short():
    payload = b"word " + np.array([1.5, -2.0], dtype="<f4").tobytes()
    reader = RecordReader(io.BytesIO(payload), capacity=8)
    reader.fill()

    reader.mark()
    assert reader.read_word() == b"word"
    assert reader.read_floats(2) is None

    reader.reset()
    assert reader.position == 0
    assert reader.available == 8


def test_refill_carries_marked_bytes_forward():
    first = b"aa " + np.array([1.0], dtype="<f4").tobytes()
    second = b"bbb " + np.array([2.0], dtype="<f4").tobytes()
    reader = RecordReader(io.BytesIO(first + second), capacity=10)
    reader.fill()

    reader.mark()
    assert reader.read_word() == b"aa"
    np.testing.assert_array_equal(reader.read_floats(1), [1.0])

    reader.mark()
    assert reader.read_word() is None  # only "bbb" buffered, no space yet
    reader.reset()
    assert reader.refill() == 5
    assert reader.file_offset == len(first)
    assert reader.position == len(first)

    assert reader.read_word() == b"bbb"
    np.testing.assert_array_equal(reader.read_floats(1), [2.0])
    assert reader.refills == 1


def test_leading_newlines_are_skipped():
    reader = RecordReader(io.BytesIO(b"\n\nword rest"), capacity=64)
    reader.fill()

    assert reader.read_word() == b"word"


def test_only_newlines_is_insufficient():
    reader = RecordReader(io.BytesIO(b"\n\n\n"), capacity=64)
    reader.fill()

    assert reader.read_word() is None


def test_read_line():
    reader = RecordReader(io.BytesIO(b"3 2\nrest"), capacity=64)
    reader.fill()

    assert reader.read_line() == b"3 2"
    assert reader.read_line() is None


def test_floats_are_little_endian_copies():
    raw = np.array([0.25, 8.0], dtype="<f4").tobytes()
    reader = RecordReader(io.BytesIO(raw), capacity=64)
    reader.fill()

    values = reader.read_floats(2)

    assert values.dtype == np.float32
    assert values.flags.writeable
    np.testing.assert_array_equal(values, [0.25, 8.0])


def test_full_buffer_without_progress_raises():
    reader = RecordReader(io.BytesIO(b"x" * 32), capacity=16)
    reader.fill()

    reader.mark()
    assert reader.read_word() is None
    reader.reset()
    with pytest.raises(RecordExceedsBuffer):
        reader.refill()


def test_refill_at_eof_returns_zero():
    reader = RecordReader(io.BytesIO(b"abc"), capacity=16)
    reader.fill()
    reader.mark()

    assert reader.refill() == 0


def test_stream_errors_are_wrapped():
    class BrokenStream(io.RawIOBase):
        def readinto(self, buffer):
            raise OSError("disk on fire")

    reader = RecordReader(BrokenStream(), capacity=16)
    with pytest.raises(StreamReadError):
        reader.fill()


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        RecordReader(io.BytesIO(b""), capacity=0)
