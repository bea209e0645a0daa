"""Thread-safe inverted index mapping tokens to file associations."""

from __future__ import annotations

from collections.abc import Hashable
from pathlib import Path
import threading
from typing import Generic, TypeVar

from findex.errors import InvalidArgumentError
from findex.indexing.models import TokenFileAssoc


TokenT = TypeVar("TokenT", bound=Hashable)
MetaT = TypeVar("MetaT")

DEFAULT_SHARDS = 16


class _Shard(Generic[TokenT, MetaT]):
    __slots__ = ("lock", "postings")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.postings: dict[TokenT, list[TokenFileAssoc[MetaT]]] = {}


class InvertedIndex(Generic[TokenT, MetaT]):
    """Lock-striped token -> associations map.

    Tokens are spread over ``shards`` independent dicts, each guarded by its own
    lock, so workers recording different tokens rarely contend. Lookups copy the
    association list while holding the shard lock and hand out an immutable
    tuple, which keeps callers from ever seeing or mutating internal storage.

    Per-token order is the order in which ``record_association`` calls
    completed. Nothing is ever removed: indexing the same file twice yields two
    associations per token.
    """

    def __init__(self, shards: int = DEFAULT_SHARDS) -> None:
        if shards < 1:
            raise InvalidArgumentError(f"shards must be positive, got {shards}")
        self._shards: tuple[_Shard[TokenT, MetaT], ...] = tuple(_Shard() for _ in range(shards))

    def _shard_for(self, token: TokenT) -> _Shard[TokenT, MetaT]:
        if token is None:
            raise InvalidArgumentError("token must not be None")
        return self._shards[hash(token) % len(self._shards)]

    def record_association(self, token: TokenT, path: Path, meta: MetaT) -> TokenFileAssoc[MetaT]:
        """Append a new association for ``token``, creating its list when absent."""
        shard = self._shard_for(token)
        assoc = TokenFileAssoc(path=path, meta=meta)
        with shard.lock:
            postings = shard.postings.get(token)
            if postings is None:
                shard.postings[token] = [assoc]
            else:
                postings.append(assoc)
        return assoc

    def query(self, token: TokenT) -> tuple[TokenFileAssoc[MetaT], ...]:
        """Return a snapshot of the associations for ``token`` (empty if unknown)."""
        shard = self._shard_for(token)
        with shard.lock:
            postings = shard.postings.get(token)
            return tuple(postings) if postings else ()

    def __contains__(self, token: object) -> bool:
        if token is None:
            return False
        shard = self._shards[hash(token) % len(self._shards)]
        with shard.lock:
            return token in shard.postings

    def __len__(self) -> int:
        total = 0
        for shard in self._shards:
            with shard.lock:
                total += len(shard.postings)
        return total

    def association_count(self) -> int:
        total = 0
        for shard in self._shards:
            with shard.lock:
                total += sum(len(postings) for postings in shard.postings.values())
        return total

    def tokens(self) -> list[TokenT]:
        collected: list[TokenT] = []
        for shard in self._shards:
            with shard.lock:
                collected.extend(shard.postings)
        return collected

    def snapshot(self) -> dict[TokenT, tuple[TokenFileAssoc[MetaT], ...]]:
        """Copy the whole index shard by shard.

        Shards are locked one at a time, so a snapshot taken during indexing is
        consistent per token but not across tokens.
        """
        result: dict[TokenT, tuple[TokenFileAssoc[MetaT], ...]] = {}
        for shard in self._shards:
            with shard.lock:
                for token, postings in shard.postings.items():
                    result[token] = tuple(postings)
        return result
