"""
Indexing core.

- tokenizers: Tokenizer protocol and word-level implementations
- inverted_index: thread-safe token -> file associations
- engine: Indexer driving tokenization over one or many files
- discovery: path deduplication and directory expansion for front ends
"""

from findex.indexing.discovery import DiscoveryResult, expand_paths
from findex.indexing.engine import Indexer, resolve_worker_count
from findex.indexing.inverted_index import InvertedIndex
from findex.indexing.models import BatchIndexResult, IndexOutcome, TokenFileAssoc
from findex.indexing.tokenizers import (
    ByWordTokenizer,
    LineOccurrenceTokenizer,
    RegexWordTokenizer,
    Tokenizer,
    available_tokenizers,
    get_tokenizer,
)


__all__ = [
    "BatchIndexResult",
    "ByWordTokenizer",
    "DiscoveryResult",
    "IndexOutcome",
    "Indexer",
    "InvertedIndex",
    "LineOccurrenceTokenizer",
    "RegexWordTokenizer",
    "TokenFileAssoc",
    "Tokenizer",
    "available_tokenizers",
    "expand_paths",
    "get_tokenizer",
    "resolve_worker_count",
]
