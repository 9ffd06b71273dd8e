"""
In-memory scene graph produced by a scene loader.

Only the parts the SDK manipulates are modelled: the node hierarchy, the
material flag used for occlusion, rendering order and morph targets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

MORPH_NORMALIZED = "normalized"
MORPH_ADDITIVE = "additive"


@dataclass(slots=True)
class Material:
    color_write_enabled: bool = True


@dataclass(slots=True)
class Morpher:
    """Named morph targets and their current weights."""

    targets: Dict[str, float] = field(default_factory=dict)
    calculation_mode: str = MORPH_ADDITIVE

    def set_weight(self, target_name: str, weight: float) -> bool:
        if target_name not in self.targets:
            return False
        self.targets[target_name] = weight
        return True


@dataclass(slots=True, eq=False)
class SceneNode:
    name: str = ""
    children: List["SceneNode"] = field(default_factory=list)
    material: Optional[Material] = None
    morpher: Optional[Morpher] = None
    rendering_order: int = 0
    parent: Optional["SceneNode"] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        for child in self.children:
            child.parent = self

    def add_child(self, node: "SceneNode") -> None:
        """Attach ``node`` here, detaching it from its previous parent."""
        if node.parent is not None:
            node.parent.children.remove(node)
        node.parent = self
        self.children.append(node)

    def walk(self) -> Iterator["SceneNode"]:
        """Yield this node and its descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def child_node(self, name: str, *, recursive: bool = True) -> Optional["SceneNode"]:
        candidates = self.walk() if recursive else iter(self.children)
        for node in candidates:
            if node is not self and node.name == name:
                return node
        return None


__all__ = ["MORPH_ADDITIVE", "MORPH_NORMALIZED", "Material", "Morpher", "SceneNode"]
