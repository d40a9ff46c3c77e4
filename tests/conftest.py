"""
Shared fixtures: writers for small word2vec binary files.
"""

import numpy as np
import pytest


def encode_w2v(records, dimension=None, vocab_size=None, separator=b"", header=None) -> bytes:
    """Serialize (word, floats) pairs in word2vec binary layout.

    `separator` is appended after each vector (the C tool writes b"\\n").
    """
    if dimension is None:
        dimension = len(records[0][1])
    if vocab_size is None:
        vocab_size = len(records)
    if header is None:
        header = f"{vocab_size} {dimension}\n".encode("ascii")

    chunks = [header]
    for word, values in records:
        if isinstance(word, str):
            word = word.encode("utf-8")
        chunks.append(word + b" ")
        chunks.append(np.asarray(values, dtype="<f4").tobytes())
        chunks.append(separator)
    return b"".join(chunks)


@pytest.fixture
def write_w2v(tmp_path):
    """Factory writing a word2vec binary file and returning its path."""
    counter = {"n": 0}

    def _write(records=None, raw=None, **kwargs):
        counter["n"] += 1
        path = tmp_path / f"vectors_{counter['n']}.bin"
        data = raw if raw is not None else encode_w2v(records, **kwargs)
        path.write_bytes(data)
        return path

    return _write


@pytest.fixture
def s1_records():
    """Three 2-d records; "a" is only kept when min_word_length is 1."""
    return [
        ("a", [1.0, 0.0]),
        ("bb", [0.0, 1.0]),
        ("cc", [1.0, 1.0]),
    ]


@pytest.fixture
def analogy_records():
    queen = np.array([1.0, -1.0, 1.0]) / np.sqrt(3.0)
    return [
        ("king", [1.0, 0.0, 0.0]),
        ("man", [0.0, 1.0, 0.0]),
        ("woman", [0.0, 0.0, 1.0]),
        ("queen", queen.tolist()),
    ]


@pytest.fixture
def many_records():
    """60 random non-zero records with distinct three-character words."""
    rng = np.random.default_rng(1234)
    vectors = rng.normal(size=(60, 4))
    return [(f"w{i:02d}", vectors[i].tolist()) for i in range(60)]
