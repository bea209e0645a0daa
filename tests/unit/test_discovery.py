"""Unit tests for path expansion used by the front end."""

import os

import pytest

from findex.indexing.discovery import expand_paths


pytestmark = pytest.mark.unit


def test_directory_expands_recursively_in_sorted_order(corpus):
    result = expand_paths([corpus])

    assert result.files == [
        corpus / "test0.txt",
        corpus / "test1.txt",
        corpus / "test_dir" / "test2.txt",
        corpus / "test_dir" / "test3.txt",
    ]
    assert result.missing == []
    assert result.errors == []


def test_missing_paths_reported_separately(corpus, tmp_path):
    missing = tmp_path / "nonexist.txt"

    result = expand_paths([corpus / "test0.txt", missing])

    assert result.files == [corpus / "test0.txt"]
    assert result.missing == [missing]


def test_duplicate_inputs_are_collapsed(corpus):
    file_path = corpus / "test0.txt"

    result = expand_paths([file_path, str(file_path), file_path])

    assert result.files == [file_path]


def test_file_reachable_twice_listed_once(corpus):
    result = expand_paths([corpus / "test_dir" / "test2.txt", corpus / "test_dir"])

    assert result.files == [corpus / "test_dir" / "test2.txt", corpus / "test_dir" / "test3.txt"]


def test_input_order_preserved(corpus):
    result = expand_paths([corpus / "test1.txt", corpus / "test0.txt"])

    assert result.files == [corpus / "test1.txt", corpus / "test0.txt"]


def test_empty_directory_yields_nothing(tmp_path):
    empty = tmp_path / "empty"
    empty.mkdir()

    result = expand_paths([empty])

    assert result.files == []
    assert result.missing == []


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_broken_symlinks_are_skipped(tmp_path):
    root = tmp_path / "links"
    root.mkdir()
    (root / "real.txt").write_text("x", encoding="utf-8")
    os.symlink(root / "gone.txt", root / "dangling.txt")

    result = expand_paths([root])

    assert result.files == [root / "real.txt"]


def test_walk_errors_are_collected(corpus, monkeypatch):
    def failing_walk(top, onerror=None):
        onerror(PermissionError(13, "Permission denied", str(top)))
        return iter(())

    monkeypatch.setattr("findex.indexing.discovery.os.walk", failing_walk)

    result = expand_paths([corpus])

    assert result.files == []
    assert len(result.errors) == 1
    assert "Permission denied" in result.errors[0]
