import copy
import logging
import os
import shutil

import pytest

from modkit.core.temp_dir import TempDir


def test_temp_dir_deletes_on_exit(tmp_path):
    target = tmp_path / "test"

    with TempDir.create(target) as temp_dir:
        assert temp_dir.exists()
        assert temp_dir.is_dir()
        (temp_dir / "file.txt").write_text("hello")
        (temp_dir / "nested").mkdir()

    assert not target.exists()


def test_temp_dir_creates_parents_and_removes_only_itself(tmp_path):
    target = tmp_path / "a" / "b" / "c"

    with TempDir.create(target):
        assert target.is_dir()

    assert not target.exists()
    assert (tmp_path / "a" / "b").is_dir()


def test_temp_dir_deletes_on_exception(tmp_path):
    target = tmp_path / "staging"

    with pytest.raises(RuntimeError):
        with TempDir.create(target) as temp_dir:
            (temp_dir / "partial.zip").write_bytes(b"PK")
            raise RuntimeError("boom")

    assert not target.exists()


def test_temp_dir_accepts_existing_directory(tmp_path):
    target = tmp_path / "exists"
    target.mkdir()

    with TempDir.create(target) as temp_dir:
        assert temp_dir.is_dir()

    assert not target.exists()


def test_temp_dir_refuses_existing_file(tmp_path):
    target = tmp_path / "file"
    target.write_text("x")

    with pytest.raises(FileExistsError):
        TempDir.create(target)


def test_temp_dir_behaves_like_path(tmp_path):
    target = tmp_path / "pathlike"

    with TempDir.create(target) as temp_dir:
        assert os.fspath(temp_dir) == str(target)
        assert temp_dir / "x" == target / "x"
        assert temp_dir.name == "pathlike"
        assert list(temp_dir.iterdir()) == []


def test_release_failure_is_logged_not_raised(tmp_path, monkeypatch, caplog):
    def boom(path, *args, **kwargs):
        raise OSError("device busy")
    monkeypatch.setattr("modkit.core.temp_dir.shutil.rmtree", boom)

    with caplog.at_level(logging.ERROR, logger="modkit.core.temp_dir"):
        with TempDir.create(tmp_path / "locked"):
            pass

    assert "Error removing temp directory" in caplog.text
    assert "device busy" in caplog.text


def test_release_when_already_removed(tmp_path, caplog):
    target = tmp_path / "gone"

    with caplog.at_level(logging.ERROR, logger="modkit.core.temp_dir"):
        with TempDir.create(target) as temp_dir:
            shutil.rmtree(temp_dir.path)

    assert not target.exists()
    assert "Error removing temp directory" in caplog.text


def test_release_is_idempotent(tmp_path):
    temp_dir = TempDir.create(tmp_path / "twice")
    temp_dir.release()
    temp_dir.release()
    assert not (tmp_path / "twice").exists()


def test_copy_keeps_path_and_missing_path_is_attribute_error(tmp_path):
    temp_dir = TempDir.create(tmp_path / "copied")

    copied = copy.copy(temp_dir)

    assert copied.path == temp_dir.path
    assert copied.name == "copied"
    assert not hasattr(TempDir.__new__(TempDir), "name")
    temp_dir.release()
