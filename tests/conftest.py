"""Shared test fixtures and configuration."""

import os
from pathlib import Path
import sys

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = REPO_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


# Pin every setting so a developer's shell or .env never leaks into tests
TEST_ENV = {
    "FINDEX_JOBS": "1",
    "FINDEX_TOKENIZER": "by-word",
    "FINDEX_ENCODING": "utf-8",
    "FINDEX_INDEX_SHARDS": "16",
    "FINDEX_LOG_LEVEL": "warning",
    "FINDEX_LOG_JSON": "false",
    "FINDEX_TRACING_ENABLED": "false",
    "FINDEX_SERVICE_NAME": "findex-test",
}

for key, value in TEST_ENV.items():
    os.environ[key] = value


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Reset FINDEX_* variables before each test."""
    for key in list(os.environ):
        if key.startswith("FINDEX_") and key not in TEST_ENV:
            monkeypatch.delenv(key, raising=False)
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)


@pytest.fixture
def corpus(tmp_path: Path) -> Path:
    """Small directory tree of text files.

    test/test0.txt          "test zero"
    test/test1.txt          "test one"
    test/test_dir/test2.txt "test two"
    test/test_dir/test3.txt "test three"
    """
    root = tmp_path / "test"
    (root / "test_dir").mkdir(parents=True)
    (root / "test0.txt").write_text("test zero\n", encoding="utf-8")
    (root / "test1.txt").write_text("test one\n", encoding="utf-8")
    (root / "test_dir" / "test2.txt").write_text("test two\n", encoding="utf-8")
    (root / "test_dir" / "test3.txt").write_text("test three\n", encoding="utf-8")
    return root


@pytest.fixture
def write_file(tmp_path: Path):
    """Write ``content`` to ``tmp_path / name`` and return the path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
