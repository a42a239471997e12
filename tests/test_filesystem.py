"""Tests for the file system abstraction."""

import json

import pytest

from matclone.core.exceptions import FileSystemAccessError, ValidationError
from matclone.core.filesystem import DefaultFileSystem


class TestDefaultFileSystem:
    """Tests for DefaultFileSystem implementation."""

    def test_ensure_directory_creates_path(self, tmp_path):
        """ensure_directory creates nested directories."""
        fs = DefaultFileSystem()
        target = tmp_path / "a" / "b"

        assert fs.ensure_directory(target) == target
        assert target.is_dir()

    def test_ensure_directory_fails_on_file(self, tmp_path):
        """A file in the way raises FileSystemAccessError."""
        fs = DefaultFileSystem()
        blocker = tmp_path / "blocker"
        blocker.write_text("x")

        with pytest.raises(FileSystemAccessError) as exc_info:
            fs.ensure_directory(blocker)

        assert "Failed to create directory" in exc_info.value.message

    def test_resolve_inside_accepts_nested_path(self, tmp_path):
        """Paths under the base resolve."""
        fs = DefaultFileSystem()
        resolved = fs.resolve_inside(tmp_path / "Art" / "Metal.mat", tmp_path)
        assert resolved.is_absolute()

    def test_resolve_inside_rejects_traversal(self, tmp_path):
        """Paths escaping the base are rejected."""
        fs = DefaultFileSystem()
        base = tmp_path / "store"
        base.mkdir()

        with pytest.raises(ValidationError) as exc_info:
            fs.resolve_inside(base / ".." / "outside.mat", base)

        assert "escapes base directory" in exc_info.value.message

    def test_list_files_filters_by_suffix(self, tmp_path):
        """Only direct children with the suffix are listed."""
        fs = DefaultFileSystem()
        (tmp_path / "b.mat").write_text("{}")
        (tmp_path / "a.MAT").write_text("{}")
        (tmp_path / "c.txt").write_text("")
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "d.mat").write_text("{}")

        names = [path.name for path in fs.list_files(tmp_path, ".mat")]

        assert names == ["a.MAT", "b.mat"]

    def test_path_exists(self, tmp_path):
        """Files and directories exist; missing paths do not."""
        fs = DefaultFileSystem()
        (tmp_path / "Metal.mat").write_text("{}")

        assert fs.path_exists(tmp_path / "Metal.mat")
        assert fs.path_exists(tmp_path)
        assert not fs.path_exists(tmp_path / "Wood.mat")

    def test_list_files_missing_directory(self, tmp_path):
        """A missing directory lists nothing."""
        assert DefaultFileSystem().list_files(tmp_path / "missing", ".mat") == []

    def test_json_round_trip_creates_parents(self, tmp_path):
        """write_json creates parents and read_json reads it back."""
        fs = DefaultFileSystem()
        target = tmp_path / "x" / "y" / "data.json"

        fs.write_json(target, {"name": "Metal"})

        assert json.loads(target.read_text()) == {"name": "Metal"}
        assert fs.read_json(target) == {"name": "Metal"}

    def test_read_json_requires_object(self, tmp_path):
        """Top-level arrays are rejected."""
        target = tmp_path / "list.json"
        target.write_text("[1, 2]")

        with pytest.raises(FileSystemAccessError):
            DefaultFileSystem().read_json(target)

    def test_write_json_rejects_unserializable(self, tmp_path):
        """Non-serializable data raises FileSystemAccessError."""
        with pytest.raises(FileSystemAccessError) as exc_info:
            DefaultFileSystem().write_json(tmp_path / "bad.json", {"obj": object()})

        assert "Failed to write JSON" in exc_info.value.message
