"""findex: a concurrent in-memory inverted index over text files."""

from findex.errors import (
    ErrorKind,
    FindexError,
    InvalidArgumentError,
    IOFailureError,
    NotFoundError,
    UnsupportedInputError,
)
from findex.indexing import (
    BatchIndexResult,
    ByWordTokenizer,
    IndexOutcome,
    Indexer,
    InvertedIndex,
    TokenFileAssoc,
    Tokenizer,
    get_tokenizer,
)


__version__ = "0.1.0"

__all__ = [
    "BatchIndexResult",
    "ByWordTokenizer",
    "ErrorKind",
    "FindexError",
    "IOFailureError",
    "IndexOutcome",
    "Indexer",
    "InvalidArgumentError",
    "InvertedIndex",
    "NotFoundError",
    "TokenFileAssoc",
    "Tokenizer",
    "UnsupportedInputError",
    "__version__",
    "get_tokenizer",
]
