"""Editor commands for cloning the materials of the selected node."""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.cloner import clone_selected, require_selection
from ..core.exceptions import MatCloneError, NoSelectionError
from ..core.host import EditorContext
from ..core.models import CloneResult, CloneSettings

logger = logging.getLogger(__name__)

CLONE_COMMAND_LABEL = "Clone Materials and Replace References"
VARIANT_COMMAND_LABEL = "Create Material Variants and Replace References"


@dataclass(frozen=True)
class MenuCommand:
    """A context-menu entry bound to one clone mode.

    Attributes:
        label: Menu text.
        as_variant: Whether the command creates variants instead of copies.
    """

    label: str
    as_variant: bool = False

    def is_enabled(self, context: EditorContext) -> bool:
        """Return True when a node is selected."""
        return context.current_selection() is not None

    def run(
        self, context: EditorContext, settings: Optional[CloneSettings] = None
    ) -> Optional[CloneResult]:
        """Run the command and report failures through the log.

        Returns:
            Optional[CloneResult]: The clone result, or None when the command
            did not run or failed.
        """
        try:
            require_selection(context)
            return clone_selected(
                context, as_variant=self.as_variant, settings=settings
            )
        except NoSelectionError as exc:
            logger.debug("%s: %s", self.label, exc.message)
        except MatCloneError as exc:
            logger.error("%s failed: %s", self.label, exc.message)
            if exc.details:
                logger.error("%s details: %s", self.label, exc.details)
        except Exception as exc:
            logger.exception("%s failed: %s", self.label, exc)
        return None


CLONE_COMMAND = MenuCommand(CLONE_COMMAND_LABEL)
VARIANT_COMMAND = MenuCommand(VARIANT_COMMAND_LABEL, as_variant=True)
COMMANDS: Tuple[MenuCommand, ...] = (CLONE_COMMAND, VARIANT_COMMAND)
