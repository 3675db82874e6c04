"""Unit tests for the storage backends."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from structlog.testing import capture_logs

from checkem.storage.backend import FileStorage, MemoryStorage

# ---------------------------------------------------------------------------
# FileStorage
# ---------------------------------------------------------------------------


class TestFileStorage:
    def test_missing_file_does_not_exist(self, tmp_path: Path) -> None:
        assert FileStorage().exists(str(tmp_path / "absent.json")) is False

    def test_directory_is_not_a_store(self, tmp_path: Path) -> None:
        assert FileStorage().exists(str(tmp_path)) is False

    def test_write_then_read(self, store_path: Path) -> None:
        storage = FileStorage()
        storage.write(str(store_path), '{"a": 1}')
        assert storage.exists(str(store_path))
        assert storage.read(str(store_path)) == '{"a": 1}'

    def test_write_creates_parent_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "c.json"
        FileStorage(fsync=False).write(str(target), "{}")
        assert target.read_text() == "{}"

    def test_write_replaces_existing_content(self, store_path: Path) -> None:
        storage = FileStorage()
        storage.write(str(store_path), "first-and-longer")
        storage.write(str(store_path), "second")
        assert storage.read(str(store_path)) == "second"

    def test_write_logged_under_file_component(self, store_path: Path) -> None:
        with capture_logs() as logs:
            FileStorage().write(str(store_path), "{}")
        assert [(e["event"], e["component"]) for e in logs] == [("file_written", "storage.file")]

    def test_write_leaves_no_temp_files(self, store_path: Path) -> None:
        FileStorage().write(str(store_path), "{}")
        assert os.listdir(store_path.parent) == [store_path.name]

    def test_failed_replace_keeps_previous_content(
        self, store_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        storage = FileStorage()
        storage.write(str(store_path), "original")

        def _boom(src: str, dst: str) -> None:
            raise OSError("disk full")

        monkeypatch.setattr("checkem.storage.backend.os.replace", _boom)
        with pytest.raises(OSError, match="disk full"):
            storage.write(str(store_path), "replacement")

        assert store_path.read_text() == "original"
        assert os.listdir(store_path.parent) == [store_path.name]

    def test_read_missing_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            FileStorage().read(str(tmp_path / "absent.json"))

    def test_expands_user(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        FileStorage().write("~/store.json", "{}")
        assert (tmp_path / "store.json").read_text() == "{}"


# ---------------------------------------------------------------------------
# MemoryStorage
# ---------------------------------------------------------------------------


class TestMemoryStorage:
    def test_round_trip(self) -> None:
        storage = MemoryStorage()
        assert storage.exists("loc") is False
        storage.write("loc", "data")
        assert storage.exists("loc") is True
        assert storage.read("loc") == "data"
        assert storage.locations() == ["loc"]

    def test_initial_contents(self) -> None:
        storage = MemoryStorage({"loc": "seed"})
        assert storage.read("loc") == "seed"

    def test_read_missing_raises_file_not_found(self) -> None:
        with pytest.raises(FileNotFoundError):
            MemoryStorage().read("loc")

    def test_backend_names(self) -> None:
        assert MemoryStorage().backend_name == "memory"
        assert FileStorage().backend_name == "file"
