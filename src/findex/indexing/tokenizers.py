"""Tokenizers that turn one file's content into unique tokens plus metadata.

A tokenizer is handed a readable text stream positioned at the start of a file
and yields ``(token, meta)`` pairs. Every token appears at most once per call,
so a tokenizer has to see the whole file before it can emit anything. The
stream belongs to the caller: tokenizers read from it but never close it.

Tokenizers are generic over the token and metadata types. The reference
``ByWordTokenizer`` produces ``(str, int)`` pairs (word, occurrence count);
``LineOccurrenceTokenizer`` shows a different metadata type, the lines where a
word occurs.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Callable, Hashable, Iterator
import io
import re
from typing import Any, Protocol, TypeVar

from findex.errors import UnsupportedInputError


TokenT_co = TypeVar("TokenT_co", bound=Hashable, covariant=True)
MetaT_co = TypeVar("MetaT_co", covariant=True)


class Tokenizer(Protocol[TokenT_co, MetaT_co]):
    """Protocol implemented by tokenizers."""

    def tokenize(self, stream: Any) -> Iterator[tuple[TokenT_co, MetaT_co]]:  # pragma: no cover - interface definition
        ...


def _require_text_stream(stream: Any) -> None:
    if isinstance(stream, io.TextIOBase):
        return
    if isinstance(stream, (io.RawIOBase, io.BufferedIOBase, bytes, bytearray, memoryview)):
        raise UnsupportedInputError(f"Expected a line-buffered text stream, got {type(stream).__name__}")
    if not callable(getattr(stream, "readline", None)):
        raise UnsupportedInputError(f"Expected a line-buffered text stream, got {type(stream).__name__}")


def _iter_lines(stream: Any) -> Iterator[str]:
    while True:
        line = stream.readline()
        if not line:
            return
        if isinstance(line, bytes):
            raise UnsupportedInputError("Byte streams are not supported; open the file in text mode")
        yield line.rstrip("\r\n")


class ByWordTokenizer:
    """Split lines on single spaces and count every word across the file.

    Mirrors the simplest possible word splitter: no normalization, no
    punctuation handling. Consecutive or leading spaces therefore produce an
    empty token, and a blank line counts as one empty word. Trailing spaces
    contribute nothing.
    """

    separator = " "

    def tokenize(self, stream: Any) -> Iterator[tuple[str, int]]:
        _require_text_stream(stream)
        counts: Counter[str] = Counter()
        for line in _iter_lines(stream):
            words = line.split(self.separator)
            # A line with no separator is kept whole, even when empty
            if len(words) > 1:
                while words and not words[-1]:
                    words.pop()
            counts.update(words)
        return iter(counts.items())


class RegexWordTokenizer:
    """Regex-based tokenizer that counts word matches per file."""

    def __init__(self, pattern: str = r"[\w']+", *, lowercase: bool = False) -> None:
        self.pattern = re.compile(pattern, re.UNICODE)
        self.lowercase = lowercase

    def tokenize(self, stream: Any) -> Iterator[tuple[str, int]]:
        _require_text_stream(stream)
        counts: Counter[str] = Counter()
        for line in _iter_lines(stream):
            counts.update(self.words(line))
        return iter(counts.items())

    def words(self, line: str) -> Iterator[str]:
        for match in self.pattern.finditer(line):
            word = match.group(0)
            yield word.lower() if self.lowercase else word


class LineOccurrenceTokenizer:
    """Map each word to the sorted 1-based line numbers it occurs on."""

    def __init__(self, pattern: str = r"[\w']+", *, lowercase: bool = True) -> None:
        self._words = RegexWordTokenizer(pattern, lowercase=lowercase)

    def tokenize(self, stream: Any) -> Iterator[tuple[str, tuple[int, ...]]]:
        _require_text_stream(stream)
        lines: defaultdict[str, list[int]] = defaultdict(list)
        for lineno, line in enumerate(_iter_lines(stream), start=1):
            for word in self._words.words(line):
                seen = lines[word]
                if not seen or seen[-1] != lineno:
                    seen.append(lineno)
        return ((word, tuple(linenos)) for word, linenos in lines.items())


_TOKENIZER_FACTORIES: dict[str, Callable[[], Tokenizer[Any, Any]]] = {
    "by-word": lambda: ByWordTokenizer(),
    "regex": lambda: RegexWordTokenizer(),
    "regex-lower": lambda: RegexWordTokenizer(lowercase=True),
    "lines": lambda: LineOccurrenceTokenizer(),
}

DEFAULT_TOKENIZER = "by-word"


def available_tokenizers() -> list[str]:
    return sorted(_TOKENIZER_FACTORIES)


def get_tokenizer(name: str | None) -> Tokenizer[Any, Any]:
    """Return a fresh tokenizer by name, defaulting to the by-word tokenizer."""

    if name is None:
        return _TOKENIZER_FACTORIES[DEFAULT_TOKENIZER]()
    normalized = name.lower()
    if normalized not in _TOKENIZER_FACTORIES:
        msg = f"Unknown tokenizer '{name}'. Available: {available_tokenizers()}"
        raise ValueError(msg)
    return _TOKENIZER_FACTORIES[normalized]()
