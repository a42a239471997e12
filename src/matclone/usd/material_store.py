"""Material asset store backed by USD material layers.

Each asset is a ``.usda`` layer whose default prim is a ``UsdShade.Material``.
The display name is kept in the layer's ``customLayerData`` so it survives
names that are not valid prim identifiers.

Copies are flattened, so they no longer depend on the source. Variants are a
``Material`` prim that references the base layer by relative path; only the
opinions authored on top of that reference belong to the variant.
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from pxr import Gf, Sdf, Tf, Usd, UsdShade

from ..core.exceptions import (
    AssetPersistError,
    FolderCreationError,
    MatCloneError,
    PathResolutionError,
)
from ..core.filesystem import DefaultFileSystem, FileSystem

logger = logging.getLogger(__name__)

USD_MATERIAL_EXTENSION = ".usda"
NAME_KEY = "materialName"
PREVIEW_SHADER_NAME = "PreviewSurface"


class UsdMaterialAsset:
    """Handle to a material layer.

    Attributes:
        name: Display name.
        prim_name: Name of the layer's default Material prim.
        layer: Layer holding the material; ``None`` for an unsaved variant.
        base: Base asset for variants.
    """

    def __init__(
        self,
        name: str,
        prim_name: str,
        layer: Optional[Sdf.Layer] = None,
        base: Optional["UsdMaterialAsset"] = None,
    ) -> None:
        self.name = name
        self.prim_name = prim_name
        self.layer = layer
        self.base = base

    @property
    def prim_path(self) -> Sdf.Path:
        return Sdf.Path.absoluteRootPath.AppendChild(self.prim_name)

    def open_stage(self) -> Usd.Stage:
        """Return a composed stage for reading resolved values."""
        if self.layer is None:
            raise PathResolutionError(
                f"Material '{self.name}' has no layer yet.",
                details={"material": self.name},
            )
        return Usd.Stage.Open(self.layer)

    def diffuse_color(self) -> Optional[Gf.Vec3f]:
        stage = self.open_stage()
        shader = UsdShade.Shader.Get(
            stage, self.prim_path.AppendChild(PREVIEW_SHADER_NAME)
        )
        if not shader:
            return None
        color_input = shader.GetInput("diffuseColor")
        return color_input.Get() if color_input else None

    def __repr__(self) -> str:
        return f"UsdMaterialAsset({self.name!r})"


def author_preview_material(
    layer_path: Path, name: str, diffuse_color: Sequence[float] = (0.18, 0.18, 0.18)
) -> Sdf.Layer:
    """Write a new material layer with a UsdPreviewSurface shader.

    Args:
        layer_path: Destination ``.usda`` file.
        name: Display name of the material.
        diffuse_color: RGB diffuse color.

    Returns:
        Sdf.Layer: The saved layer.
    """
    stage = Usd.Stage.CreateNew(str(layer_path))
    prim_name = Tf.MakeValidIdentifier(name)
    material = UsdShade.Material.Define(stage, f"/{prim_name}")

    shader = UsdShade.Shader.Define(stage, f"/{prim_name}/{PREVIEW_SHADER_NAME}")
    shader.CreateIdAttr("UsdPreviewSurface")
    shader.CreateInput("diffuseColor", Sdf.ValueTypeNames.Color3f).Set(
        Gf.Vec3f(*diffuse_color)
    )
    surface = shader.CreateOutput("surface", Sdf.ValueTypeNames.Token)
    material.CreateSurfaceOutput().ConnectToSource(surface)

    stage.SetDefaultPrim(material.GetPrim())
    layer = stage.GetRootLayer()
    layer.customLayerData = {NAME_KEY: name}
    stage.Save()
    return layer


class UsdMaterialStore:
    """Store of USD material layers under a root directory."""

    extension = USD_MATERIAL_EXTENSION

    def __init__(self, root_dir: Path, fs: Optional[FileSystem] = None) -> None:
        self.root_dir = Path(root_dir)
        self._fs = fs or DefaultFileSystem()
        self._fs.ensure_directory(self.root_dir)
        self._by_path: Dict[str, UsdMaterialAsset] = {}
        self._paths: Dict[int, str] = {}

    def _resolve(self, path: str) -> Path:
        return self._fs.resolve_inside(self.root_dir / path, self.root_dir)

    def _register(self, asset: UsdMaterialAsset, path: str) -> None:
        self._by_path[path] = asset
        self._paths[id(asset)] = path

    def contains(self, asset: object) -> bool:
        path = self._paths.get(id(asset))
        return path is not None and self._by_path.get(path) is asset

    def get_storage_path(self, asset: object) -> Optional[str]:
        if not self.contains(asset):
            return None
        return self._paths[id(asset)]

    def folder_exists(self, path: str) -> bool:
        return self._fs.is_directory(self._resolve(path))

    def create_folder(self, parent: str, name: str) -> str:
        folder = f"{parent}/{name}" if parent else name
        try:
            self._fs.ensure_directory(self._resolve(folder))
        except MatCloneError as exc:
            raise FolderCreationError(
                f"Failed to create folder: {folder}",
                details={"folder": folder, "error": exc.message},
            ) from exc
        return folder

    def find_material_names(self, folder: str) -> List[str]:
        names: List[str] = []
        for path in self._fs.list_files(self._resolve(folder), self.extension):
            try:
                layer = Sdf.Layer.FindOrOpen(str(path))
            except Tf.ErrorException as exc:
                logger.warning("Skipping unreadable material layer %s: %s", path, exc)
                continue
            if layer is None or not layer.defaultPrim:
                continue
            spec = layer.GetPrimAtPath(
                Sdf.Path.absoluteRootPath.AppendChild(layer.defaultPrim)
            )
            if spec is not None and spec.typeName == "Material":
                names.append(path.stem)
        return names

    def create_copy(self, source: UsdMaterialAsset) -> UsdMaterialAsset:
        flattened = source.open_stage().Flatten()
        flattened.defaultPrim = source.prim_name
        return UsdMaterialAsset(source.name, source.prim_name, layer=flattened)

    def create_variant(self, base: UsdMaterialAsset) -> UsdMaterialAsset:
        if not self.contains(base):
            raise PathResolutionError(
                f"Variant base '{base.name}' is not a persisted asset.",
                details={"material": base.name},
            )
        return UsdMaterialAsset(base.name, base.prim_name, base=base)

    def _author_variant(self, asset: UsdMaterialAsset, target: Path) -> Sdf.Layer:
        base_path = self.get_storage_path(asset.base)
        if base_path is None:
            raise AssetPersistError(
                f"Variant base of '{asset.name}' has no storage path.",
                details={"base": asset.base.name},
            )
        reference = Path(
            os.path.relpath(self._resolve(base_path), target.parent)
        ).as_posix()
        if not reference.startswith("."):
            reference = f"./{reference}"

        stage = Usd.Stage.CreateNew(str(target))
        material = UsdShade.Material.Define(stage, f"/{asset.prim_name}")
        material.GetPrim().GetReferences().AddReference(reference)
        stage.SetDefaultPrim(material.GetPrim())
        layer = stage.GetRootLayer()
        layer.customLayerData = {NAME_KEY: asset.name}
        stage.Save()
        return layer

    def persist_at(self, asset: UsdMaterialAsset, path: str) -> None:
        target = self._resolve(path)
        if path in self._by_path or self._fs.path_exists(target):
            raise AssetPersistError(
                f"An asset already exists at {path}", details={"path": path}
            )
        try:
            if asset.base is not None:
                self._author_variant(asset, target)
            else:
                asset.layer.customLayerData = {NAME_KEY: asset.name}
                if not asset.layer.Export(str(target)):
                    raise AssetPersistError(
                        f"Failed to export material '{asset.name}'.",
                        details={"path": path},
                    )
        except Tf.ErrorException as exc:
            raise AssetPersistError(
                f"Failed to persist material '{asset.name}'.",
                details={"path": path, "error": str(exc)},
            ) from exc
        logger.debug("Persisted material layer %s", path)

    def load_at(self, path: str) -> UsdMaterialAsset:
        cached = self._by_path.get(path)
        if cached is not None:
            return cached
        try:
            layer = Sdf.Layer.FindOrOpen(str(self._resolve(path)))
        except Tf.ErrorException as exc:
            raise AssetPersistError(
                f"Failed to open material layer at {path}",
                details={"path": path, "error": str(exc)},
            ) from exc
        if layer is None or not layer.defaultPrim:
            raise AssetPersistError(
                f"No material layer at {path}", details={"path": path}
            )
        name = layer.customLayerData.get(NAME_KEY) or Path(path).stem
        asset = UsdMaterialAsset(name, layer.defaultPrim, layer=layer)
        self._register(asset, path)
        return asset

    def add_material(
        self, path: str, name: str, diffuse_color: Sequence[float] = (0.18, 0.18, 0.18)
    ) -> UsdMaterialAsset:
        """Author a new preview material at ``path`` and return its handle."""
        target = self._resolve(path)
        self._fs.ensure_directory(target.parent)
        author_preview_material(target, name, diffuse_color)
        return self.load_at(path)
