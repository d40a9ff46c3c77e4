"""
Word2vec binary loading and cosine-similarity search.
"""

# Package initialization for vector module
from .types import Hit, Header, LoadReport
from .table import EmbeddingTable, EmbeddingTableBuilder
from .loader import WordVectorLoader, load, normalize, parse_header
from .engine import SimilarityEngine
from .formatting import format_hits, format_table, hits_to_dicts

__all__ = [
    'Hit',
    'Header',
    'LoadReport',
    'EmbeddingTable',
    'EmbeddingTableBuilder',
    'WordVectorLoader',
    'load',
    'normalize',
    'parse_header',
    'SimilarityEngine',
    'format_hits',
    'format_table',
    'hits_to_dicts'
]
