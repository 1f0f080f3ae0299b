"""Tests for the file system wrapper."""

import pytest

from whoa.exceptions import FileSystemError
from whoa.filesystem import FileSystem


@pytest.fixture
def file_system():
    return FileSystem()


class TestFiles:
    def test_write_read_delete(self, file_system, tmp_path):
        path = str(tmp_path / "note.txt")

        file_system.write(path, "hello")
        assert file_system.exists(path)
        assert file_system.read(path) == "hello"

        file_system.delete(path)
        file_system.delete(path)
        assert not file_system.exists(path)

    def test_read_missing_file(self, file_system, tmp_path):
        with pytest.raises(FileSystemError):
            file_system.read(str(tmp_path / "missing.txt"))

    def test_require_file(self, file_system, tmp_path):
        path = tmp_path / "values.py"
        path.write_text("ANSWER = 42\n")

        assert file_system.require_file(str(path))["ANSWER"] == 42

        with pytest.raises(FileSystemError):
            file_system.require_file(str(tmp_path / "missing.py"))


class TestFolders:
    def test_scan_folder(self, file_system, tmp_path):
        (tmp_path / "b.txt").write_text("b")
        (tmp_path / "a").mkdir()

        entries = file_system.scan_folder(str(tmp_path))

        assert list(entries) == ["a", "b.txt"]
        assert file_system.is_folder(entries["a"])

    def test_create_and_delete_recursive(self, file_system, tmp_path):
        root = str(tmp_path / "root")
        file_system.create_folder(root)
        file_system.create_folder(str(tmp_path / "root" / "nested"))
        file_system.write(str(tmp_path / "root" / "nested" / "file.txt"), "x")

        assert file_system.is_writable(root)

        file_system.delete_folder_recursive(root)

        assert not file_system.exists(root)

    def test_create_folder_requires_parent(self, file_system, tmp_path):
        with pytest.raises(FileSystemError):
            file_system.create_folder(str(tmp_path / "missing" / "child"))

    def test_delete_folder_errors(self, file_system, tmp_path):
        (tmp_path / "full").mkdir()
        (tmp_path / "full" / "file.txt").write_text("x")

        with pytest.raises(FileSystemError):
            file_system.delete_folder(str(tmp_path / "full"))
        with pytest.raises(FileSystemError):
            file_system.delete_folder(str(tmp_path / "missing"))

    def test_symlink(self, file_system, tmp_path):
        (tmp_path / "target.txt").write_text("linked")
        link = str(tmp_path / "link.txt")

        file_system.symlink(str(tmp_path / "target.txt"), link)

        assert file_system.read(link) == "linked"
