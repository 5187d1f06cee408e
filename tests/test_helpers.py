from __future__ import annotations

from pathlib import Path

import pytest

from markdown_cells.filesystem import get_max_file_size, read_markdown


def test_get_max_file_size_uses_default(monkeypatch):
    monkeypatch.delenv("MARKDOWN_CELLS_MAX_FILE_SIZE", raising=False)

    assert get_max_file_size(default=123) == 123


def test_get_max_file_size_reads_environment(monkeypatch):
    monkeypatch.setenv("MARKDOWN_CELLS_MAX_FILE_SIZE", "2048")

    assert get_max_file_size() == 2048


def test_get_max_file_size_rejects_non_integer(monkeypatch):
    monkeypatch.setenv("MARKDOWN_CELLS_MAX_FILE_SIZE", "invalid")
    with pytest.raises(ValueError):
        get_max_file_size()


def test_get_max_file_size_rejects_non_positive(monkeypatch):
    monkeypatch.setenv("MARKDOWN_CELLS_MAX_FILE_SIZE", "0")
    with pytest.raises(ValueError):
        get_max_file_size()


def test_read_markdown_returns_contents(tmp_path: Path):
    target = tmp_path / "doc.md"
    target.write_text("# Heading\n", encoding="utf-8")

    assert read_markdown(target, 1024) == "# Heading\n"


def test_read_markdown_rejects_large_file(tmp_path: Path):
    target = tmp_path / "doc.md"
    target.write_text("# Heading\n", encoding="utf-8")

    with pytest.raises(IOError, match="too large"):
        read_markdown(target, 4)


def test_read_markdown_rejects_invalid_utf8(tmp_path: Path):
    target = tmp_path / "binary.md"
    target.write_bytes(b"\xff\xfe\x00")

    with pytest.raises(IOError, match="Invalid UTF-8"):
        read_markdown(target, 1024)


def test_read_markdown_handles_missing_file(tmp_path: Path):
    with pytest.raises(IOError):
        read_markdown(tmp_path / "missing.md", 1024)
