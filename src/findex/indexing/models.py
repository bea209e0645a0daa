"""Indexing data models."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Generic, TypeVar

from findex.errors import ErrorKind, FindexError


MetaT = TypeVar("MetaT")

STATUS_INDEXED = "indexed"
STATUS_FAILED = "failed"


@dataclass(frozen=True)
class TokenFileAssoc(Generic[MetaT]):
    """Links one file to the metadata of a token within that file."""

    path: Path
    meta: MetaT


@dataclass(frozen=True, slots=True)
class IndexOutcome:
    """Result of indexing a single path."""

    path: Path | None
    status: str
    associations: int = 0
    error_kind: ErrorKind | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == STATUS_INDEXED

    @classmethod
    def success(cls, path: Path | None, associations: int) -> IndexOutcome:
        return cls(path=path, status=STATUS_INDEXED, associations=associations)

    @classmethod
    def failure(cls, path: Path | None, exc: Exception) -> IndexOutcome:
        if isinstance(exc, FindexError):
            return cls(path=path, status=STATUS_FAILED, error_kind=exc.kind, message=str(exc))
        # Not one of ours: no kind, keep the exception type in the message
        return cls(path=path, status=STATUS_FAILED, message=f"{type(exc).__name__}: {exc}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": str(self.path) if self.path is not None else None,
            "status": self.status,
            "associations": self.associations,
            "error_kind": self.error_kind.value if self.error_kind else None,
            "message": self.message,
        }


@dataclass(frozen=True, slots=True)
class BatchIndexResult:
    """Outcome of an ``index_many`` run, one entry per input path in input order."""

    outcomes: tuple[IndexOutcome, ...]
    workers: int | None
    warnings: tuple[str, ...] = field(default_factory=tuple)
    duration_s: float = 0.0

    def __iter__(self) -> Iterator[IndexOutcome]:
        return iter(self.outcomes)

    def __len__(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> tuple[IndexOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if outcome.ok)

    @property
    def failed(self) -> tuple[IndexOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if not outcome.ok)
