import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from ..core.exceptions import ValidationError
from ..core.host import HasMaterialSlots

logger = logging.getLogger(__name__)


@dataclass
class UndoGroup:
    """Captured object states for one user-visible undo step."""

    label: str
    records: List[Tuple[Any, List[Any]]] = field(default_factory=list)

    def has(self, obj: Any) -> bool:
        return any(recorded is obj for recorded, _ in self.records)


class UndoStack:
    """Undo log for objects exposing material slots.

    ``record`` snapshots an object's slot array the first time it is seen in
    the open group; ``undo`` restores the snapshots of the latest group.
    """

    def __init__(self) -> None:
        self._groups: List[UndoGroup] = []
        self._open: Optional[UndoGroup] = None

    @property
    def labels(self) -> List[str]:
        return [group.label for group in self._groups]

    def __len__(self) -> int:
        return len(self._groups)

    def begin_group(self, label: str) -> None:
        if self._open is not None:
            raise ValidationError(
                "An undo group is already open.",
                details={"open": self._open.label, "requested": label},
            )
        self._open = UndoGroup(label)

    def record(self, obj: Any) -> None:
        if self._open is None:
            raise ValidationError("No undo group is open.")
        if not isinstance(obj, HasMaterialSlots):
            raise ValidationError(
                "Only objects with material slots can be recorded.",
                details={"type": type(obj).__name__},
            )
        if self._open.has(obj):
            return
        self._open.records.append((obj, obj.get_material_slots()))

    def end_group(self) -> None:
        group, self._open = self._open, None
        if group is None:
            return
        if group.records:
            self._groups.append(group)
        else:
            logger.debug("Dropping empty undo group '%s'.", group.label)

    def undo(self) -> Optional[str]:
        """Restore the most recent group and return its label."""
        if not self._groups:
            return None
        group = self._groups.pop()
        for obj, slots in reversed(group.records):
            obj.set_material_slots(slots)
        return group.label
