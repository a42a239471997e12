"""Host editor contracts consumed by the cloning core.

The core never imports a host API directly. Editors plug in by providing
objects that satisfy these protocols, which keeps the algorithm testable
against the in-process reference editor in ``matclone.editor``.
"""

from typing import Any, List, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class HasMaterialSlots(Protocol):
    """Component exposing an ordered, mutable material slot array."""

    def get_material_slots(self) -> List[Optional[Any]]:
        """Return a fresh copy of the current slot array."""
        ...

    def set_material_slots(self, slots: Sequence[Optional[Any]]) -> None:
        """Replace the whole slot array."""
        ...


class SceneNode(Protocol):
    """Node in the host scene graph."""

    name: str

    @property
    def components(self) -> Sequence[Any]:
        ...

    @property
    def children(self) -> Sequence["SceneNode"]:
        ...


class AssetStore(Protocol):
    """Persistent material asset store.

    Paths are store-relative POSIX strings such as ``Art/Mats/Metal.mat``.
    """

    extension: str

    def contains(self, asset: Any) -> bool:
        """Return True if the asset is persisted in this store."""
        ...

    def get_storage_path(self, asset: Any) -> Optional[str]:
        """Return the asset's storage path, or None when unsaved."""
        ...

    def folder_exists(self, path: str) -> bool:
        ...

    def create_folder(self, parent: str, name: str) -> str:
        """Create ``parent/name`` and return its path.

        Raises:
            FolderCreationError: If the folder cannot be created.
        """
        ...

    def find_material_names(self, folder: str) -> Sequence[str]:
        """Return the names of material assets directly inside ``folder``."""
        ...

    def create_copy(self, source: Any) -> Any:
        """Return a transient, independent copy of ``source``."""
        ...

    def create_variant(self, base: Any) -> Any:
        """Return a transient variant that inherits from ``base``."""
        ...

    def persist_at(self, asset: Any, path: str) -> None:
        """Write a transient asset to ``path``.

        Raises:
            AssetPersistError: If the asset cannot be written.
        """
        ...

    def load_at(self, path: str) -> Any:
        """Return the canonical handle of the asset stored at ``path``."""
        ...


class UndoLog(Protocol):
    """Host undo system."""

    def begin_group(self, label: str) -> None:
        ...

    def record(self, obj: Any) -> None:
        """Capture ``obj`` state so the open group can restore it."""
        ...

    def end_group(self) -> None:
        ...


class EditorContext(Protocol):
    """Explicit editor state passed into commands instead of globals."""

    asset_store: AssetStore
    undo_log: UndoLog

    def current_selection(self) -> Optional[SceneNode]:
        ...
