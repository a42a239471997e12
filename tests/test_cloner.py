"""Tests for the top-level clone operation."""

import logging

from matclone.core.cloner import clone_materials, clone_selected
from matclone.core.models import CloneSettings
from matclone.editor.scene import Material, Node, Renderer
from matclone.editor.undo import UndoStack


def _three_renderer_scene(add_material):
    m1 = add_material("Art/Mats/M1.mat", color="red")
    m2 = add_material("Art/Mats/M2.mat", color="blue")
    root = Node("root")
    a = root.add_component(Renderer("A", [m1, m2]))
    b = root.add_child(Node("b")).add_component(Renderer("B", [m1]))
    c = root.add_child(Node("c")).add_component(Renderer("C", [m2, m2]))
    return root, (m1, m2), (a, b, c)


def test_three_renderer_scenario(store, add_material):
    """Two shared materials are duplicated and all five slots rewritten."""
    root, (m1, m2), (a, b, c) = _three_renderer_scene(add_material)
    undo = UndoStack()

    result = clone_materials(root, store, undo)

    assert result.cloned_count == 2
    assert result.created_paths == (
        "Art/Mats/clone/M1.mat",
        "Art/Mats/clone/M2.mat",
    )
    new_m1 = store.load_at("Art/Mats/clone/M1.mat")
    new_m2 = store.load_at("Art/Mats/clone/M2.mat")
    assert a.shared_materials == [new_m1, new_m2]
    assert b.shared_materials == [new_m1]
    assert c.shared_materials == [new_m2, new_m2]
    assert sorted(store.find_material_names("Art/Mats/clone")) == ["M1", "M2"]


def test_whole_batch_undoes_as_one_step(store, add_material):
    """A single undo restores every renderer."""
    root, (m1, m2), (a, b, c) = _three_renderer_scene(add_material)
    undo = UndoStack()

    clone_materials(root, store, undo)

    assert undo.labels == [CloneSettings().undo_label]
    undo.undo()
    assert a.shared_materials == [m1, m2]
    assert b.shared_materials == [m1]
    assert c.shared_materials == [m2, m2]


def test_node_without_renderers_is_a_no_op(store, caplog):
    """No renderers means zero clones and no undo step."""
    undo = UndoStack()

    with caplog.at_level(logging.INFO):
        result = clone_materials(Node("empty"), store, undo)

    assert result.cloned_count == 0
    assert len(undo) == 0
    assert not (store.root_dir / "clone").exists()
    assert "No persisted materials found" in caplog.text


def test_none_root_warns(store, caplog):
    """A missing node is reported and nothing happens."""
    with caplog.at_level(logging.WARNING):
        result = clone_materials(None, store, UndoStack())

    assert result.cloned_count == 0
    assert "nothing to clone" in caplog.text


def test_repeated_runs_never_collide(store, add_material):
    """Each run produces fresh names in the same clone folder."""
    mat = add_material("Art/Metal.mat")
    root = Node("root")
    renderer = root.add_component(Renderer("R", [mat]))
    undo = UndoStack()

    for _ in range(3):
        clone_materials(root, store, undo)

    names = store.find_material_names("Art/clone")
    assert sorted(names) == ["Metal", "Metal 1", "Metal 2"]
    assert len(set(names)) == len(names)
    assert renderer.shared_materials == [store.load_at("Art/clone/Metal 2.mat")]


def test_unresolvable_material_is_skipped(store, add_material, caplog):
    """One failing source does not abort the rest of the batch."""
    good = add_material("Art/Good.mat")
    broken = add_material("Art/Broken.mat")
    root = Node("root")
    renderer = root.add_component(Renderer("R", [broken, good]))

    original_get_path = store.get_storage_path

    def get_storage_path(asset):
        if asset is broken:
            return None
        return original_get_path(asset)

    store.get_storage_path = get_storage_path

    with caplog.at_level(logging.WARNING):
        result = clone_materials(root, store, UndoStack())

    assert result.cloned_count == 1
    assert result.skipped == ("Broken",)
    slots = renderer.shared_materials
    assert slots[0] is broken
    assert slots[1] is not good
    assert slots[1].name == "Good"
    assert "Skipping material 'Broken'" in caplog.text


def test_blocked_clone_folder_skips_only_that_material(store, add_material, caplog):
    """A clone folder that cannot be created skips just the sources that need it."""
    blocked = add_material("Art/Blocked.mat")
    good = add_material("Other/Good.mat")
    (store.root_dir / "Art" / "clone").write_text("not a folder")
    root = Node("root")
    renderer = root.add_component(Renderer("R", [blocked, good]))

    with caplog.at_level(logging.WARNING):
        result = clone_materials(root, store, UndoStack())

    assert result.cloned_count == 1
    assert result.created_paths == ("Other/clone/Good.mat",)
    assert result.skipped == ("Blocked",)
    assert renderer.shared_materials == [
        blocked,
        store.load_at("Other/clone/Good.mat"),
    ]
    assert "Failed to create folder: Art/clone" in caplog.text


def test_variant_mode_creates_variants(store, add_material):
    """Variant mode links each new asset to its source."""
    mat = add_material("Art/Metal.mat", roughness=0.2)
    root = Node("root")
    renderer = root.add_component(Renderer("R", [mat]))

    result = clone_materials(root, store, UndoStack(), as_variant=True)

    variant = renderer.shared_materials[0]
    assert result.as_variant
    assert result.message == "Created 1 material variant."
    assert variant.base is mat
    assert variant.get("roughness") == 0.2


def test_in_memory_materials_are_left_alone(store, add_material):
    """Slots holding unsaved materials keep them."""
    saved = add_material("Art/Saved.mat")
    transient = Material("Transient")
    root = Node("root")
    renderer = root.add_component(Renderer("R", [transient, saved]))

    result = clone_materials(root, store, UndoStack())

    assert result.cloned_count == 1
    assert renderer.shared_materials[0] is transient


def test_custom_clone_folder(store, add_material):
    """Settings choose the clone folder name."""
    mat = add_material("Art/Metal.mat")
    root = Node("root")
    root.add_component(Renderer("R", [mat]))

    result = clone_materials(
        root, store, UndoStack(), settings=CloneSettings(clone_folder_name="duplicates")
    )

    assert result.created_paths == ("Art/duplicates/Metal.mat",)


def test_clone_selected_uses_context(session, add_material):
    """The selection, store and undo log come from the context."""
    mat = add_material("Art/Metal.mat")
    root = Node("root")
    renderer = root.add_component(Renderer("R", [mat]))
    session.select(root)

    result = clone_selected(session)

    assert result.cloned_count == 1
    assert renderer.shared_materials[0] is not mat
    assert len(session.undo_log) == 1


def test_result_message_reports_count(store, add_material):
    """The report reads naturally for plural counts."""
    root, _, _ = _three_renderer_scene(add_material)

    result = clone_materials(root, store, UndoStack())

    assert result.message == "Cloned 2 materials."
