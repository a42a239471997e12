"""Duplicate material assets into a sibling clone folder."""

import logging
from pathlib import PurePosixPath
from typing import Any

from .exceptions import PathResolutionError
from .host import AssetStore
from .models import DEFAULT_CLONE_FOLDER_NAME
from .naming import unique_material_name

logger = logging.getLogger(__name__)


def _folder_of(path: str) -> str:
    parent = PurePosixPath(path).parent.as_posix()
    return "" if parent == "." else parent


def _join(folder: str, name: str) -> str:
    return f"{folder}/{name}" if folder else name


def clone_folder_path(
    source_path: str, folder_name: str = DEFAULT_CLONE_FOLDER_NAME
) -> str:
    """Return the folder that receives duplicates of ``source_path``.

    Sources already inside a clone folder stay there; every other source gets
    a ``<folder_name>`` subfolder next to it.

    Args:
        source_path: Store-relative path of the source asset.
        folder_name: Name of the clone folder.

    Returns:
        str: Store-relative destination folder.

    Examples:
        >>> clone_folder_path("Art/Mats/Metal.mat")
        'Art/Mats/clone'
        >>> clone_folder_path("Art/Mats/clone/Metal.mat")
        'Art/Mats/clone'
    """
    folder = _folder_of(source_path.replace("\\", "/"))
    leaf = PurePosixPath(folder).name if folder else ""
    if leaf.casefold() == folder_name.casefold():
        return folder
    return _join(folder, folder_name)


def ensure_clone_folder(store: AssetStore, folder: str) -> str:
    """Create ``folder`` in the store if it is missing."""
    if store.folder_exists(folder):
        return folder
    path = PurePosixPath(folder)
    logger.debug("Creating clone folder %s", folder)
    return store.create_folder(_folder_of(folder), path.name)


def duplicate_material(
    source: Any,
    store: AssetStore,
    as_variant: bool = False,
    folder_name: str = DEFAULT_CLONE_FOLDER_NAME,
) -> Any:
    """Create a persisted duplicate or variant of ``source``.

    Args:
        source: Persisted material asset to duplicate.
        store: Asset store holding ``source``.
        as_variant: Create a variant referencing ``source`` instead of a copy.
        folder_name: Name of the clone folder.

    Returns:
        The canonical handle of the new persisted asset.

    Raises:
        PathResolutionError: If ``source`` has no storage path.
        FolderCreationError: If the destination folder cannot be created.
        AssetPersistError: If the new asset cannot be written.
    """
    source_path = store.get_storage_path(source)
    if not source_path:
        raise PathResolutionError(
            f"Could not resolve the storage path of material '{source.name}'.",
            details={"material": source.name},
        )

    destination = ensure_clone_folder(
        store, clone_folder_path(source_path, folder_name)
    )
    name = unique_material_name(source.name, store.find_material_names(destination))

    duplicate = store.create_variant(source) if as_variant else store.create_copy(source)
    duplicate.name = name

    target = f"{_join(destination, name)}{store.extension}"
    store.persist_at(duplicate, target)
    logger.debug(
        "%s %s -> %s", "Derived" if as_variant else "Copied", source_path, target
    )
    return store.load_at(target)
