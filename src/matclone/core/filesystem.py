"""File system access for disk-backed asset stores and settings."""

import json
from pathlib import Path
from typing import Any, Dict, List, Protocol

from .exceptions import FileSystemAccessError, ValidationError


class FileSystem(Protocol):
    """Protocol for the file operations used by stores and settings.

    Tests can substitute an in-memory implementation.
    """

    def ensure_directory(self, path: Path) -> Path:
        """Create a directory and its parents if missing.

        Raises:
            FileSystemAccessError: If the directory cannot be created.
        """
        ...

    def resolve_inside(self, path: Path, base_dir: Path) -> Path:
        """Resolve ``path`` and check that it stays under ``base_dir``.

        Raises:
            ValidationError: If the path cannot be resolved or escapes.
        """
        ...

    def path_exists(self, path: Path) -> bool:
        ...

    def is_directory(self, path: Path) -> bool:
        ...

    def list_files(self, directory: Path, suffix: str) -> List[Path]:
        """Return files in ``directory`` (not recursive) ending in ``suffix``."""
        ...

    def read_json(self, path: Path) -> Dict[str, Any]:
        """Read a JSON object.

        Raises:
            FileSystemAccessError: If read or parse fails.
        """
        ...

    def write_json(self, path: Path, data: Dict[str, Any]) -> None:
        """Write a JSON object, creating parent directories.

        Raises:
            FileSystemAccessError: If the write fails.
        """
        ...


class DefaultFileSystem:
    """Local disk implementation of :class:`FileSystem`."""

    def ensure_directory(self, path: Path) -> Path:
        try:
            path.mkdir(parents=True, exist_ok=True)
            return path
        except (OSError, ValueError) as exc:
            raise FileSystemAccessError(
                f"Failed to create directory: {path}",
                details={"path": str(path), "error": str(exc)},
            ) from exc

    def resolve_inside(self, path: Path, base_dir: Path) -> Path:
        try:
            resolved = path.resolve()
            base_resolved = base_dir.resolve()
        except (OSError, RuntimeError, ValueError) as exc:
            raise ValidationError(
                f"Cannot resolve path: {path}",
                details={"path": str(path), "error": str(exc)},
            ) from exc

        try:
            resolved.relative_to(base_resolved)
        except ValueError as exc:
            raise ValidationError(
                f"Path escapes base directory: {path}",
                details={"path": str(path), "base_dir": str(base_dir)},
            ) from exc
        return resolved

    def path_exists(self, path: Path) -> bool:
        return path.exists()

    def is_directory(self, path: Path) -> bool:
        return path.is_dir()

    def list_files(self, directory: Path, suffix: str) -> List[Path]:
        if not directory.is_dir():
            return []
        suffix_key = suffix.lower()
        return sorted(
            child
            for child in directory.iterdir()
            if child.is_file() and child.name.lower().endswith(suffix_key)
        )

    def read_json(self, path: Path) -> Dict[str, Any]:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise FileSystemAccessError(
                f"Failed to read JSON from {path}",
                details={
                    "path": str(path),
                    "error": str(exc),
                    "type": type(exc).__name__,
                },
            ) from exc
        if not isinstance(data, dict):
            raise FileSystemAccessError(
                f"Expected a JSON object in {path}",
                details={"path": str(path), "type": type(data).__name__},
            )
        return data

    def write_json(self, path: Path, data: Dict[str, Any]) -> None:
        try:
            self.ensure_directory(path.parent)
            with path.open("w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except (OSError, TypeError, ValueError) as exc:
            raise FileSystemAccessError(
                f"Failed to write JSON to {path}",
                details={
                    "path": str(path),
                    "error": str(exc),
                    "type": type(exc).__name__,
                },
            ) from exc
