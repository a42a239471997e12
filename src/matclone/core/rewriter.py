"""Re-point renderer material slots to a replacement asset."""

import logging
from typing import Any, Sequence

from .models import SlotUsage
from .transaction import TransactionScope

logger = logging.getLogger(__name__)


def rewrite_references(
    usages: Sequence[SlotUsage],
    original: Any,
    replacement: Any,
    transaction: TransactionScope,
) -> int:
    """Replace ``original`` with ``replacement`` in every still-matching slot.

    Each component's current slot array is re-read, so a slot that no longer
    holds ``original`` is left untouched. The array is written back whole.

    Args:
        usages: Slot usages collected for ``original``.
        original: Material asset being replaced.
        replacement: Material asset to assign.
        transaction: Open transaction that records components before mutation.

    Returns:
        int: Number of slots rewritten.
    """
    rewritten = 0
    for usage in usages:
        slots = usage.component.get_material_slots()
        index = usage.slot_index
        if index >= len(slots) or slots[index] is not original:
            logger.debug(
                "Slot %d on %r no longer references %r; skipped.",
                index,
                getattr(usage.component, "name", usage.component),
                getattr(original, "name", original),
            )
            continue

        transaction.record(usage.component)
        slots[index] = replacement
        usage.component.set_material_slots(slots)
        rewritten += 1
    return rewritten
