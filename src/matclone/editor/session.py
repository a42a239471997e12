from typing import Optional

from ..core.host import AssetStore
from .scene import Node
from .undo import UndoStack


class EditorSession:
    """Editor state handed to commands: selection, asset store and undo log."""

    def __init__(
        self,
        asset_store: AssetStore,
        undo_log: Optional[UndoStack] = None,
        selection: Optional[Node] = None,
    ) -> None:
        self.asset_store = asset_store
        self.undo_log = undo_log if undo_log is not None else UndoStack()
        self._selection = selection

    def select(self, node: Optional[Node]) -> None:
        self._selection = node

    def current_selection(self) -> Optional[Node]:
        return self._selection
