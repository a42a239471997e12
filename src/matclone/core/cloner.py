"""Clone the materials of a node subtree and rewrite renderer references."""

import logging
from typing import List, Optional

from .collector import collect_usages, ensure_usages
from .duplicator import duplicate_material
from .exceptions import MatCloneError, NoMaterialsFoundError, NoSelectionError
from .host import AssetStore, EditorContext, SceneNode, UndoLog
from .models import CloneResult, CloneSettings
from .rewriter import rewrite_references
from .transaction import TransactionScope

logger = logging.getLogger(__name__)


def clone_materials(
    root: Optional[SceneNode],
    store: AssetStore,
    undo_log: UndoLog,
    as_variant: bool = False,
    settings: Optional[CloneSettings] = None,
) -> CloneResult:
    """Duplicate every persisted material under ``root`` and re-point its slots.

    All slot rewrites happen inside a single undo group. A source material
    that cannot be duplicated is logged and skipped; the rest of the batch
    still runs.

    Args:
        root: Node whose subtree is processed. ``None`` is a no-op.
        store: Asset store holding the source materials.
        undo_log: Host undo log receiving one group for the batch.
        as_variant: Create variants referencing the sources instead of copies.
        settings: Optional clone settings; defaults are used when omitted.

    Returns:
        CloneResult: Count and paths of the created assets.
    """
    settings = settings or CloneSettings()
    if root is None:
        logger.warning("No node was given; nothing to clone.")
        return CloneResult(as_variant=as_variant)

    try:
        usages = ensure_usages(collect_usages(root, store), root)
    except NoMaterialsFoundError as exc:
        logger.info("%s (node=%s)", exc.message, exc.details.get("node"))
        return CloneResult(as_variant=as_variant)

    created: List[str] = []
    skipped: List[str] = []
    with TransactionScope(undo_log, settings.undo_label) as transaction:
        for original, slot_usages in usages.items():
            try:
                duplicate = duplicate_material(
                    original,
                    store,
                    as_variant=as_variant,
                    folder_name=settings.clone_folder_name,
                )
            except MatCloneError as exc:
                logger.warning("Skipping material '%s': %s", original.name, exc)
                skipped.append(original.name)
                continue

            rewritten = rewrite_references(
                slot_usages, original, duplicate, transaction
            )
            path = store.get_storage_path(duplicate) or duplicate.name
            logger.debug(
                "Rewrote %d slot(s) from '%s' to %s", rewritten, original.name, path
            )
            created.append(path)

    result = CloneResult(
        cloned_count=len(created),
        created_paths=tuple(created),
        skipped=tuple(skipped),
        as_variant=as_variant,
    )
    logger.info(result.message)
    return result


def require_selection(context: EditorContext) -> SceneNode:
    """Return the selected node.

    Raises:
        NoSelectionError: If nothing is selected.
    """
    node = context.current_selection()
    if node is None:
        raise NoSelectionError("No node is selected.")
    return node


def clone_selected(
    context: EditorContext,
    as_variant: bool = False,
    settings: Optional[CloneSettings] = None,
) -> CloneResult:
    """Run :func:`clone_materials` on the context's current selection."""
    return clone_materials(
        context.current_selection(),
        context.asset_store,
        context.undo_log,
        as_variant=as_variant,
        settings=settings,
    )
