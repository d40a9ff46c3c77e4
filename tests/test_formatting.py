"""
Tests for hit formatting and vocabulary statistics.
"""

import json

import pytest

from w2vsearch.core.stats import analyze_vocabulary, format_stats
from w2vsearch.vector import Hit, format_hits, format_table, hits_to_dicts


@pytest.fixture
def hits():
    return [Hit("cc", 0.70710678), Hit("bb", 0.0)]


def test_format_hits(hits):
    assert format_hits(hits) == "cc (0.7071), bb (0.0000)\n"


def test_format_hits_negative_scores():
    assert format_hits([Hit("far", -0.25)]) == "far (-0.2500)\n"


def test_format_hits_empty():
    assert format_hits([]) == "\n"


def test_format_table(hits):
    lines = format_table(hits).splitlines()

    assert "Cosine distance" in lines[0]
    assert set(lines[1]) == {"-"}
    assert lines[2].split() == ["cc", "0.707107"]
    assert lines[3].split() == ["bb", "0.000000"]


def test_hits_to_dicts_is_json_ready(hits):
    data = hits_to_dicts(hits)

    assert data == [{"word": "cc", "score": 0.70710678}, {"word": "bb", "score": 0.0}]
    assert json.loads(json.dumps(data)) == data


def test_analyze_vocabulary():
    stats = analyze_vocabulary(["a", "7", ",", "bb", "cccc"])

    assert stats.size == 5
    assert stats.zero_length == 0
    assert stats.one_char == 3
    assert stats.punctuation == 1
    assert stats.digit == 1
    assert stats.min_length == 1
    assert stats.max_length == 4
    assert stats.mean_length == pytest.approx(1.8)
    assert stats.variance == pytest.approx(1.36)
    assert stats.std_deviation == pytest.approx(1.36 ** 0.5)
    assert stats.one_char_words == ["a", "7", ","]


def test_analyze_empty_vocabulary():
    stats = analyze_vocabulary([])

    assert stats.size == 0
    assert stats.mean_length == 0.0


def test_format_stats():
    text = format_stats(analyze_vocabulary(["ab", "abcd"]))

    assert "list size = 2" in text
    assert "min word len = 2" in text
    assert "max word len = 4" in text
    assert "mean word len = 3.0000" in text
    assert "word len variance = 1.0000" in text
