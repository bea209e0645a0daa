"""Indexing engine: reads files, tokenizes them and fills the inverted index.

``Indexer`` is the unit of work and the concurrency boundary. ``index_one``
indexes a single file synchronously; ``index_many`` fans the same work out over
a bounded thread pool and blocks until every file has been attempted. Failures
are isolated per path and reported back as ``IndexOutcome`` records rather than
aborting the batch.

Known limitations, kept on purpose:

* A file that fails halfway through tokenization may leave some of its tokens
  recorded; nothing is rolled back.
* Re-indexing a file appends a second set of associations instead of replacing
  the first one, so stale entries from a changed file stay queryable.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
import contextvars
import logging
import os
from pathlib import Path
import time
from typing import Generic, TextIO, TypeVar
from uuid import uuid4

from findex.errors import FindexError, InvalidArgumentError, IOFailureError, NotFoundError
from findex.indexing.inverted_index import InvertedIndex
from findex.indexing.models import BatchIndexResult, IndexOutcome, TokenFileAssoc
from findex.indexing.tokenizers import Tokenizer
from findex.observability.context import trace_context
from findex.observability.metrics import (
    ASSOCIATIONS_RECORDED,
    FILES_INDEXED,
    INDEX_ERRORS,
    INDEX_LATENCY,
    QUERY_COUNT,
    track_latency,
)
from findex.observability.tracing import create_span


logger = logging.getLogger(__name__)

TokenT = TypeVar("TokenT", bound=Hashable)
MetaT = TypeVar("MetaT")

DEFAULT_ENCODING = "utf-8"


def resolve_worker_count(concurrency: int | None) -> tuple[int, str | None]:
    """Return the pool size to use and, when falling back, a warning for the caller.

    Both an unspecified (``None``) and a non-positive value fall back to the
    number of processor cores and produce a warning.
    """
    if concurrency is not None and concurrency > 0:
        return concurrency, None

    cores = os.cpu_count() or 1
    reason = "Number of jobs not specified." if concurrency is None else "Number of jobs needs to be positive."
    return cores, f"{reason} Defaulting to the number of processor cores available: {cores}"


class Indexer(Generic[TokenT, MetaT]):
    """Drive a tokenizer over files and record results into an inverted index."""

    def __init__(
        self,
        tokenizer: Tokenizer[TokenT, MetaT],
        *,
        index: InvertedIndex[TokenT, MetaT] | None = None,
        encoding: str = DEFAULT_ENCODING,
    ) -> None:
        if tokenizer is None:
            raise InvalidArgumentError("tokenizer must not be None")
        self._tokenizer = tokenizer
        self._index: InvertedIndex[TokenT, MetaT] = index if index is not None else InvertedIndex()
        self.encoding = encoding

    @property
    def tokenizer(self) -> Tokenizer[TokenT, MetaT]:
        return self._tokenizer

    @property
    def index(self) -> InvertedIndex[TokenT, MetaT]:
        return self._index

    def query(self, token: TokenT) -> tuple[TokenFileAssoc[MetaT], ...]:
        """Return the associations recorded for ``token`` (empty if none)."""
        result = self._index.query(token)
        QUERY_COUNT.labels(hit="true" if result else "false").inc()
        return result

    def index_one(self, path: str | os.PathLike[str]) -> int:
        """Index a single file and return the number of associations recorded.

        Raises:
            InvalidArgumentError: ``path`` is None.
            NotFoundError: the file does not exist, is a directory or cannot be
                opened for reading.
            IOFailureError: any read or decode failure after opening, or an
                unknown encoding.
            UnsupportedInputError: the tokenizer rejected the stream.
        """
        if path is None:
            raise InvalidArgumentError("path must not be None")
        file_path = Path(path)

        with (
            create_span("findex.index_one", attributes={"findex.path": str(file_path)}) as span,
            track_latency(INDEX_LATENCY, operation="index_one"),
        ):
            try:
                recorded = self._read_and_record(file_path)
            except Exception as exc:
                FILES_INDEXED.labels(status="failed").inc()
                INDEX_ERRORS.labels(kind=exc.kind.value if isinstance(exc, FindexError) else "internal").inc()
                logger.debug("Indexing failed for %s: %s", file_path, exc)
                raise
            span.set_attribute("findex.associations", recorded)

        FILES_INDEXED.labels(status="indexed").inc()
        ASSOCIATIONS_RECORDED.inc(recorded)
        logger.debug("Indexed %s (%d tokens)", file_path, recorded)
        return recorded

    def _open(self, file_path: Path) -> TextIO:
        try:
            return open(file_path, encoding=self.encoding)
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError, PermissionError) as exc:
            raise NotFoundError(f"File for indexing not found at path {file_path}") from exc
        except LookupError as exc:
            raise IOFailureError(f"Cannot read {file_path}: unknown encoding {self.encoding!r}") from exc
        except OSError as exc:
            raise IOFailureError(f"Failed to open {file_path}: {exc.strerror or exc}") from exc

    def _read_and_record(self, file_path: Path) -> int:
        recorded = 0
        try:
            with self._open(file_path) as stream:
                for token, meta in self._tokenizer.tokenize(stream):
                    self._index.record_association(token, file_path, meta)
                    recorded += 1
        except FindexError:
            raise
        except UnicodeDecodeError as exc:
            raise IOFailureError(f"Cannot decode {file_path} as {self.encoding}: {exc.reason}") from exc
        except OSError as exc:
            raise IOFailureError(f"Failed to read {file_path}: {exc.strerror or exc}") from exc
        return recorded

    def try_index_one(self, path: str | os.PathLike[str] | None) -> IndexOutcome:
        """Index ``path`` and report the result instead of raising."""
        outcome_path = Path(path) if path is not None else None
        try:
            recorded = self.index_one(path)
        except FindexError as exc:
            return IndexOutcome.failure(outcome_path, exc)
        except Exception as exc:
            logger.exception("Unexpected error while indexing %s", outcome_path)
            return IndexOutcome.failure(outcome_path, exc)
        return IndexOutcome.success(outcome_path, recorded)

    def index_many(
        self,
        paths: Iterable[str | os.PathLike[str]],
        concurrency: int | None = None,
        *,
        executor: Executor | None = None,
    ) -> BatchIndexResult:
        """Index every path over a bounded pool and wait for all of them.

        A pool of ``concurrency`` threads is created for this call and shut down
        before returning. Callers indexing repeatedly can pass a long-lived
        ``executor`` instead; it is used as-is and never shut down here, and
        ``concurrency`` is ignored.

        Paths are expected to be deduplicated regular files already. The result
        holds one outcome per input path, in input order.
        """
        path_list = list(paths)
        warnings: list[str] = []
        workers: int | None = None
        if executor is None:
            workers, warning = resolve_worker_count(concurrency)
            if warning:
                logger.warning(warning)
                warnings.append(warning)

        batch_id = uuid4().hex[:12]
        start = time.perf_counter()
        with (
            create_span(
                "findex.index_many",
                attributes={"findex.batch": batch_id, "findex.paths": len(path_list), "findex.workers": workers or 0},
            ),
            track_latency(INDEX_LATENCY, operation="index_many"),
        ):
            if executor is not None:
                outcomes = self._gather(executor, path_list, batch_id)
            else:
                with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="findex-index") as pool:
                    outcomes = self._gather(pool, path_list, batch_id)

        result = BatchIndexResult(
            outcomes=tuple(outcomes),
            workers=workers,
            warnings=tuple(warnings),
            duration_s=time.perf_counter() - start,
        )
        logger.info(
            "Indexed %d/%d files in %.3fs",
            len(result.succeeded),
            len(result),
            result.duration_s,
            extra={"batch_id": batch_id, "failed": len(result.failed)},
        )
        for outcome in result.failed:
            logger.debug("Failed to index %s", outcome.path, extra={"outcome": outcome.to_dict()})
        return result

    def _gather(self, executor: Executor, path_list: list, batch_id: str) -> list[IndexOutcome]:
        # Submit everything first, then collect in input order
        futures: list[Future[IndexOutcome]] = [
            executor.submit(contextvars.copy_context().run, self._run_task, path, batch_id) for path in path_list
        ]
        return [future.result() for future in futures]

    def _run_task(self, path: str | os.PathLike[str] | None, batch_id: str) -> IndexOutcome:
        trace_context.set({**(trace_context.get() or {}), "batch": batch_id})
        return self.try_index_one(path)
