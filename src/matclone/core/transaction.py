from typing import Any, Optional

from .exceptions import ValidationError
from .host import UndoLog


class TransactionScope:
    """One undo group held open for the duration of a batch.

    Use as a context manager; the group is closed exactly once on every exit
    path.

    Example:
        >>> with TransactionScope(undo_log, "Clone materials") as scope:
        ...     scope.record(renderer)
    """

    def __init__(self, undo_log: UndoLog, label: str) -> None:
        self._undo_log = undo_log
        self.label = label
        self._open = False
        self._closed = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> "TransactionScope":
        if self._open or self._closed:
            raise ValidationError(
                "Transaction scope cannot be reopened.", details={"label": self.label}
            )
        self._undo_log.begin_group(self.label)
        self._open = True
        return self

    def record(self, obj: Any) -> None:
        """Register ``obj`` for undo capture before it is mutated."""
        if not self._open:
            raise ValidationError(
                "Cannot record outside an open transaction.",
                details={"label": self.label},
            )
        self._undo_log.record(obj)

    def close(self) -> None:
        if not self._open:
            return
        self._open = False
        self._closed = True
        self._undo_log.end_group()

    def __enter__(self) -> "TransactionScope":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None
