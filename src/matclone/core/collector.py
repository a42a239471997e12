"""Collect material slot usages under a scene node."""

import logging
from typing import Any, Iterator, List, Set, Tuple

from .exceptions import NoMaterialsFoundError
from .host import AssetStore, HasMaterialSlots, SceneNode
from .models import SlotUsage, UsageGroup

logger = logging.getLogger(__name__)


def iter_nodes(root: SceneNode) -> Iterator[SceneNode]:
    """Yield ``root`` and its descendants depth-first, pre-order."""
    stack: List[SceneNode] = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(list(node.children)))


def iter_renderables(root: SceneNode) -> Iterator[HasMaterialSlots]:
    """Yield every slot-bearing component under ``root``, inactive ones included."""
    for node in iter_nodes(root):
        for component in node.components:
            if isinstance(component, HasMaterialSlots):
                yield component


def collect_usages(root: SceneNode, store: AssetStore) -> UsageGroup:
    """Group the persisted materials used under ``root`` by asset.

    Args:
        root: Node whose subtree is scanned.
        store: Asset store deciding which materials are persisted.

    Returns:
        UsageGroup: Mapping of material asset to the slots referencing it,
        in traversal order then slot index order. Empty when nothing under
        ``root`` references a persisted material.
    """
    group: UsageGroup = {}
    seen: Set[Tuple[int, int]] = set()

    for component in iter_renderables(root):
        for index, material in enumerate(component.get_material_slots()):
            if material is None:
                continue
            if not store.contains(material):
                logger.debug(
                    "Skipping non-persisted material %r on %r slot %d.",
                    getattr(material, "name", material),
                    getattr(component, "name", component),
                    index,
                )
                continue
            key = (id(component), index)
            if key in seen:
                continue
            seen.add(key)
            group.setdefault(material, []).append(SlotUsage(component, index))

    return group


def ensure_usages(group: UsageGroup, root: Any) -> UsageGroup:
    """Return ``group`` unchanged, or raise when it is empty.

    Raises:
        NoMaterialsFoundError: If ``group`` holds no usages.
    """
    if not group:
        raise NoMaterialsFoundError(
            "No persisted materials found to clone.",
            details={"node": getattr(root, "name", str(root))},
        )
    return group
