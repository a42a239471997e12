import pytest

from matclone.editor.file_store import FileMaterialStore
from matclone.editor.scene import Material
from matclone.editor.session import EditorSession


@pytest.fixture
def store(tmp_path):
    return FileMaterialStore(tmp_path / "Assets")


@pytest.fixture
def session(store):
    return EditorSession(store)


@pytest.fixture
def add_material(store):
    """Persist a material at a store path and return its handle."""

    def _add(path, name=None, **properties):
        stem = path.rsplit("/", 1)[-1].rsplit(".", 1)[0]
        return store.add(Material(name or stem, properties=properties), path)

    return _add
