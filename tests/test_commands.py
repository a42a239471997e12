"""Tests for the editor commands."""

import logging

from matclone.dcc.commands import CLONE_COMMAND, COMMANDS, VARIANT_COMMAND
from matclone.editor.scene import Node, Renderer


def test_two_commands_cover_both_modes():
    """One copy command and one variant command are registered."""
    assert COMMANDS == (CLONE_COMMAND, VARIANT_COMMAND)
    assert not CLONE_COMMAND.as_variant
    assert VARIANT_COMMAND.as_variant


def test_enabled_only_with_selection(session):
    """Commands are disabled until a node is selected."""
    assert not CLONE_COMMAND.is_enabled(session)

    session.select(Node("root"))

    assert CLONE_COMMAND.is_enabled(session)
    assert VARIANT_COMMAND.is_enabled(session)


def test_run_without_selection_does_nothing(session):
    """Running with nothing selected returns None quietly."""
    assert CLONE_COMMAND.run(session) is None
    assert len(session.undo_log) == 0


def test_run_clones_selection(session, add_material):
    """The clone command duplicates the selection's materials."""
    mat = add_material("Art/Metal.mat")
    root = Node("root")
    renderer = root.add_component(Renderer("R", [mat]))
    session.select(root)

    result = CLONE_COMMAND.run(session)

    assert result.cloned_count == 1
    assert renderer.shared_materials[0] is not mat


def test_run_variant_command(session, add_material):
    """The variant command derives variants."""
    mat = add_material("Art/Metal.mat")
    root = Node("root")
    renderer = root.add_component(Renderer("R", [mat]))
    session.select(root)

    VARIANT_COMMAND.run(session)

    assert renderer.shared_materials[0].base is mat


def test_unexpected_errors_are_logged_not_raised(session, caplog):
    """Host-facing commands never raise."""

    class BrokenNode:
        name = "broken"

        @property
        def components(self):
            raise RuntimeError("scene unavailable")

        children = ()

    session.select(BrokenNode())

    with caplog.at_level(logging.ERROR):
        assert CLONE_COMMAND.run(session) is None

    assert "scene unavailable" in caplog.text
