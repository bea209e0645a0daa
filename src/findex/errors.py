"""Error kinds raised by the indexing core."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Failure categories reported per path."""

    NOT_FOUND = "not_found"
    IO_FAILURE = "io_failure"
    UNSUPPORTED_INPUT = "unsupported_input"
    INVALID_ARGUMENT = "invalid_argument"


class FindexError(Exception):
    """Base error for the indexing core."""

    kind: ErrorKind = ErrorKind.IO_FAILURE


class NotFoundError(FindexError, FileNotFoundError):
    """Raised when a path does not resolve to a readable file."""

    kind = ErrorKind.NOT_FOUND


class IOFailureError(FindexError, OSError):
    """Raised when a file cannot be read after it was located."""

    kind = ErrorKind.IO_FAILURE


class UnsupportedInputError(FindexError, TypeError):
    """Raised when a tokenizer is handed a stream kind it cannot process."""

    kind = ErrorKind.UNSUPPORTED_INPUT


class InvalidArgumentError(FindexError, ValueError):
    """Raised when a required token, path or tokenizer is missing."""

    kind = ErrorKind.INVALID_ARGUMENT
