"""Material asset store backed by JSON ``.mat`` files on disk."""

import logging
from pathlib import Path, PurePosixPath
from typing import Any, Dict, List, Optional

from ..core.exceptions import (
    AssetPersistError,
    FileSystemAccessError,
    FolderCreationError,
    MatCloneError,
    PathResolutionError,
)
from ..core.filesystem import DefaultFileSystem, FileSystem
from .scene import Material

logger = logging.getLogger(__name__)

MATERIAL_EXTENSION = ".mat"


class FileMaterialStore:
    """Store of :class:`Material` assets under a root directory.

    Each asset is one JSON file::

        {"name": "Metal", "properties": {"color": [1, 0, 0]}, "base": null}

    ``base`` holds the store path of the base material for variants, in which
    case ``properties`` contains only the overrides.

    Handles are cached per path, so loading the same path twice returns the
    same object.
    """

    extension = MATERIAL_EXTENSION

    def __init__(self, root_dir: Path, fs: Optional[FileSystem] = None) -> None:
        self.root_dir = Path(root_dir)
        self._fs = fs or DefaultFileSystem()
        self._fs.ensure_directory(self.root_dir)
        self._by_path: Dict[str, Material] = {}
        self._paths: Dict[int, str] = {}

    def _resolve(self, path: str) -> Path:
        return self._fs.resolve_inside(self.root_dir / path, self.root_dir)

    def _register(self, material: Material, path: str) -> None:
        self._by_path[path] = material
        self._paths[id(material)] = path

    def contains(self, asset: Any) -> bool:
        path = self._paths.get(id(asset))
        return path is not None and self._by_path.get(path) is asset

    def get_storage_path(self, asset: Any) -> Optional[str]:
        if not self.contains(asset):
            return None
        return self._paths[id(asset)]

    def folder_exists(self, path: str) -> bool:
        return self._fs.is_directory(self._resolve(path))

    def create_folder(self, parent: str, name: str) -> str:
        folder = f"{parent}/{name}" if parent else name
        try:
            self._fs.ensure_directory(self._resolve(folder))
        except MatCloneError as exc:
            raise FolderCreationError(
                f"Failed to create folder: {folder}",
                details={"folder": folder, "error": exc.message},
            ) from exc
        return folder

    def find_material_names(self, folder: str) -> List[str]:
        directory = self._resolve(folder)
        return [path.stem for path in self._fs.list_files(directory, self.extension)]

    def create_copy(self, source: Material) -> Material:
        return Material(source.name, properties=source.resolved())

    def create_variant(self, base: Material) -> Material:
        if not self.contains(base):
            raise PathResolutionError(
                f"Variant base '{base.name}' is not a persisted asset.",
                details={"material": base.name},
            )
        return Material(base.name, base=base)

    def persist_at(self, asset: Material, path: str) -> None:
        """Write ``asset`` to ``path`` and make it the canonical handle."""
        target = self._resolve(path)
        existing = self._by_path.get(path)
        if existing is not asset and (
            existing is not None or self._fs.path_exists(target)
        ):
            raise AssetPersistError(
                f"An asset already exists at {path}", details={"path": path}
            )
        base_path = None
        if asset.base is not None:
            base_path = self.get_storage_path(asset.base)
            if base_path is None:
                raise AssetPersistError(
                    f"Variant base of '{asset.name}' has no storage path.",
                    details={"path": path, "base": asset.base.name},
                )
        data = {"name": asset.name, "properties": asset.overrides, "base": base_path}
        try:
            self._fs.write_json(target, data)
        except FileSystemAccessError as exc:
            raise AssetPersistError(
                f"Failed to persist material '{asset.name}'.",
                details={"path": path, "error": exc.message},
            ) from exc
        self._register(asset, path)
        logger.debug("Persisted material %s", path)

    def load_at(self, path: str) -> Material:
        cached = self._by_path.get(path)
        if cached is not None:
            return cached
        try:
            data = self._fs.read_json(self._resolve(path))
        except FileSystemAccessError as exc:
            raise AssetPersistError(
                f"Failed to load material at {path}",
                details={"path": path, "error": exc.message},
            ) from exc
        base = self.load_at(data["base"]) if data.get("base") else None
        name = data.get("name") or PurePosixPath(path).stem
        material = Material(name, properties=data.get("properties") or {}, base=base)
        self._register(material, path)
        return material

    def add(self, material: Material, path: str) -> Material:
        """Persist a new material and return its canonical handle."""
        self.persist_at(material, path)
        return self.load_at(path)
