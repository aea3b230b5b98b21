import os

import pytest

from filestore.core.exceptions import DirectoryError
from filestore.infrastructure.storage import directory_guard
from filestore.infrastructure.storage.directory_guard import ensure_directory


def test_creates_full_chain(tmp_path):
    target = tmp_path / "a" / "b" / "c"

    ensure_directory(str(target))

    assert target.is_dir()


def test_is_idempotent(tmp_path):
    target = tmp_path / "uploads"

    ensure_directory(str(target))
    ensure_directory(str(target))

    assert target.is_dir()


def test_unwritable_directory_raises(tmp_path, monkeypatch):
    monkeypatch.setattr(directory_guard.os, "access", lambda path, mode: False)

    with pytest.raises(DirectoryError) as exc:
        ensure_directory(str(tmp_path))

    assert exc.value.directory == str(tmp_path)
    assert str(tmp_path) in str(exc.value)


@pytest.mark.skipif(hasattr(os, "geteuid") and os.geteuid() == 0, reason="root ignora permissões")
def test_read_only_directory_raises(tmp_path):
    target = tmp_path / "ro"
    target.mkdir()
    target.chmod(0o555)
    try:
        with pytest.raises(DirectoryError):
            ensure_directory(str(target))
    finally:
        target.chmod(0o755)


def test_creation_failure_raises(tmp_path, monkeypatch):
    def _deny(path, mode=0o777, exist_ok=False):
        raise PermissionError(13, "Permission denied", path)

    monkeypatch.setattr(directory_guard.os, "makedirs", _deny)

    with pytest.raises(DirectoryError) as exc:
        ensure_directory(str(tmp_path / "new"))

    assert exc.value.directory == str(tmp_path / "new")


def test_existing_file_is_not_a_directory(tmp_path):
    path = tmp_path / "file.txt"
    path.write_text("x")

    with pytest.raises(DirectoryError):
        ensure_directory(str(path))


def test_parent_is_a_regular_file_raises(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x")
    target = blocker / "sub" / "dir"

    with pytest.raises(DirectoryError) as exc:
        ensure_directory(str(target))

    assert exc.value.directory == str(target)
    assert not target.exists()
