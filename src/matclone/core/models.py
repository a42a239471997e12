from dataclasses import dataclass
from typing import Any, Dict, List, Tuple


DEFAULT_CLONE_FOLDER_NAME = "clone"
DEFAULT_UNDO_LABEL = "Clone materials and rewrite references"
DEFAULT_LOG_LEVEL = "Info"


@dataclass(frozen=True)
class SlotUsage:
    """A single material slot on a renderable component.

    Attributes:
        component: Component exposing the material slot array.
        slot_index: Index into the component's slot array.
    """

    component: Any
    slot_index: int


# Material asset -> usages in collection order.
UsageGroup = Dict[Any, List[SlotUsage]]


@dataclass(frozen=True)
class CloneSettings:
    """Configuration for a clone run.

    Attributes:
        clone_folder_name: Name of the sibling folder that receives duplicates.
        undo_label: Label of the undo group wrapping the whole batch.
        log_level: Logging verbosity name (Error, Warning, Info, Debug).
    """

    clone_folder_name: str = DEFAULT_CLONE_FOLDER_NAME
    undo_label: str = DEFAULT_UNDO_LABEL
    log_level: str = DEFAULT_LOG_LEVEL


@dataclass(frozen=True)
class CloneResult:
    """Outcome of a clone run.

    Attributes:
        cloned_count: Number of source materials duplicated and rewritten.
        created_paths: Storage paths of the new material assets.
        skipped: Names of source materials that could not be duplicated.
        as_variant: Whether variants were created instead of full copies.
    """

    cloned_count: int = 0
    created_paths: Tuple[str, ...] = ()
    skipped: Tuple[str, ...] = ()
    as_variant: bool = False

    @property
    def message(self) -> str:
        """Return the human-readable count report."""
        noun = "material variant" if self.as_variant else "material"
        plural = "" if self.cloned_count == 1 else "s"
        verb = "Created" if self.as_variant else "Cloned"
        text = f"{verb} {self.cloned_count} {noun}{plural}."
        if self.skipped:
            text += f" Skipped {len(self.skipped)}: {', '.join(self.skipped)}."
        return text
