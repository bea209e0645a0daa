"""Expand user-supplied paths into a deduplicated list of regular files."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
import logging
import os
from pathlib import Path


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DiscoveryResult:
    """Files to index plus the inputs that could not be expanded."""

    files: list[Path] = field(default_factory=list)
    missing: list[Path] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def expand_paths(paths: Iterable[str | os.PathLike[str]]) -> DiscoveryResult:
    """Deduplicate ``paths`` and expand directories recursively.

    Input order is preserved (first occurrence wins). Files found under a
    directory are sorted so repeated runs index in the same order. A file
    reachable both directly and through a directory is listed once.
    """
    result = DiscoveryResult()
    seen_inputs: set[Path] = set()
    seen_files: set[Path] = set()

    def add_file(candidate: Path) -> None:
        key = candidate.resolve()
        if key in seen_files:
            return
        seen_files.add(key)
        result.files.append(candidate)

    for raw in paths:
        path = Path(raw)
        if path in seen_inputs:
            continue
        seen_inputs.add(path)

        if not path.exists():
            result.missing.append(path)
            continue

        if path.is_dir():
            try:
                for candidate in _walk_regular_files(path):
                    add_file(candidate)
            except OSError as exc:
                logger.warning("Failed to walk directory %s: %s", path, exc)
                result.errors.append(f"{path}: {exc}")
            continue

        add_file(path)

    return result


def _walk_regular_files(root: Path) -> Iterator[Path]:
    def raise_error(exc: OSError) -> None:
        raise exc

    for dirpath, dirnames, filenames in os.walk(root, onerror=raise_error):
        dirnames.sort()
        base = Path(dirpath)
        for name in sorted(filenames):
            candidate = base / name
            if candidate.is_file():
                yield candidate
