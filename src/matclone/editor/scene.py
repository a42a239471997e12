"""Reference scene graph used by the bundled editor session.

Objects compare by identity, mirroring how host editors hand out handles to
live objects.
"""

from typing import Any, Dict, Iterator, List, Optional, Sequence


class Material:
    """Material asset with optional base for variants.

    Attributes:
        name: Display name.
        base: Material whose values are inherited when a key is not overridden.
    """

    def __init__(
        self,
        name: str,
        properties: Optional[Dict[str, Any]] = None,
        base: Optional["Material"] = None,
    ) -> None:
        self.name = name
        self.base = base
        self._properties: Dict[str, Any] = dict(properties or {})

    @property
    def overrides(self) -> Dict[str, Any]:
        """Return the values stored on this material itself."""
        return dict(self._properties)

    @property
    def is_variant(self) -> bool:
        return self.base is not None

    def get(self, key: str, default: Any = None) -> Any:
        """Return ``key``, resolving unset values through the base chain."""
        material: Optional[Material] = self
        while material is not None:
            if key in material._properties:
                return material._properties[key]
            material = material.base
        return default

    def set(self, key: str, value: Any) -> None:
        self._properties[key] = value

    def clear(self, key: str) -> None:
        """Drop an override so the value resolves through the base again."""
        self._properties.pop(key, None)

    def resolved(self) -> Dict[str, Any]:
        """Return all values with base values filled in."""
        chain: List[Material] = []
        material: Optional[Material] = self
        while material is not None:
            chain.append(material)
            material = material.base
        values: Dict[str, Any] = {}
        for item in reversed(chain):
            values.update(item._properties)
        return values

    def __repr__(self) -> str:
        return f"Material({self.name!r})"


class Component:
    """Base class for anything attached to a :class:`Node`."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.enabled = True


class Light(Component):
    """Component without material slots."""

    def __init__(self, name: str = "Light", intensity: float = 1.0) -> None:
        super().__init__(name)
        self.intensity = intensity


class Renderer(Component):
    """Renderable component with an ordered material slot array."""

    def __init__(
        self, name: str = "Renderer", materials: Sequence[Optional[Material]] = ()
    ) -> None:
        super().__init__(name)
        self._materials: List[Optional[Material]] = list(materials)

    @property
    def shared_materials(self) -> List[Optional[Material]]:
        return list(self._materials)

    def get_material_slots(self) -> List[Optional[Material]]:
        return list(self._materials)

    def set_material_slots(self, slots: Sequence[Optional[Material]]) -> None:
        self._materials = list(slots)

    def __repr__(self) -> str:
        return f"Renderer({self.name!r})"


class Node:
    """Scene node with components and child nodes.

    ``active`` does not hide a node from traversal; inactive subtrees are
    still processed.
    """

    def __init__(self, name: str, active: bool = True) -> None:
        self.name = name
        self.active = active
        self.parent: Optional[Node] = None
        self._components: List[Component] = []
        self._children: List[Node] = []

    @property
    def components(self) -> List[Component]:
        return list(self._components)

    @property
    def children(self) -> List["Node"]:
        return list(self._children)

    def add_component(self, component: Component) -> Component:
        self._components.append(component)
        return component

    def add_child(self, child: "Node") -> "Node":
        if child.parent is not None:
            child.parent._children.remove(child)
        child.parent = self
        self._children.append(child)
        return child

    def walk(self) -> Iterator["Node"]:
        """Yield this node and all descendants depth-first."""
        yield self
        for child in self._children:
            yield from child.walk()

    def __repr__(self) -> str:
        return f"Node({self.name!r})"
