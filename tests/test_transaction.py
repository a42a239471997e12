"""Tests for the undo transaction scope."""

import pytest

from matclone.core.exceptions import ValidationError
from matclone.core.transaction import TransactionScope


class FakeUndoLog:
    def __init__(self):
        self.calls = []

    def begin_group(self, label):
        self.calls.append(("begin", label))

    def record(self, obj):
        self.calls.append(("record", obj))

    def end_group(self):
        self.calls.append(("end",))


def test_scope_opens_and_closes_group():
    """Entering begins a group and leaving ends it."""
    undo_log = FakeUndoLog()

    with TransactionScope(undo_log, "Batch") as scope:
        assert scope.is_open
        scope.record("obj")

    assert not scope.is_open
    assert undo_log.calls == [("begin", "Batch"), ("record", "obj"), ("end",)]


def test_scope_closes_on_exception():
    """The group is closed even when the body raises."""
    undo_log = FakeUndoLog()

    with pytest.raises(RuntimeError):
        with TransactionScope(undo_log, "Batch"):
            raise RuntimeError("boom")

    assert undo_log.calls[-1] == ("end",)


def test_close_is_idempotent():
    """Closing twice ends the group once."""
    undo_log = FakeUndoLog()
    scope = TransactionScope(undo_log, "Batch").open()

    scope.close()
    scope.close()

    assert undo_log.calls.count(("end",)) == 1


def test_record_after_close_raises():
    """Recording outside the scope is rejected."""
    scope = TransactionScope(FakeUndoLog(), "Batch")
    with scope:
        pass

    with pytest.raises(ValidationError):
        scope.record("obj")


def test_scope_cannot_be_reopened():
    """A closed scope is single-use."""
    scope = TransactionScope(FakeUndoLog(), "Batch")
    with scope:
        pass

    with pytest.raises(ValidationError):
        scope.open()
