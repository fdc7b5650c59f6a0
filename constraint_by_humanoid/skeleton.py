"""In-memory skeleton node tree.

A skeleton is a rooted tree of Nodes.  The root usually stands for the
avatar object (it carries the rig-root marker, like an Animator on a Unity
GameObject) and holds an "Armature" child whose descendants are the bones.

Transforms are carried through untouched; nothing in this package reads them.

Nodes can be built directly or from a nested (name, children) outline:

    root = build_skeleton(("Avatar", [("Armature", [("Hips", [("Spine", [])])])]))
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Tuple


Transform = Tuple[Tuple[float, float, float],
                  Tuple[float, float, float, float],
                  Tuple[float, float, float]]

IDENTITY_TRANSFORM: Transform = ((0.0, 0.0, 0.0), (1.0, 0.0, 0.0, 0.0), (1.0, 1.0, 1.0))


@dataclass(eq=False)
class NodeConstraint:
    """A constraint attached to a Node by the in-memory host."""
    kind: Any                   # ConstraintKind
    source: "Node"
    weight: float = 1.0
    active: bool = False


@dataclass(eq=False)
class Node:
    """A single node in a skeleton hierarchy.

    Nodes compare and hash by identity, so two bones with the same name in
    different skeletons are never confused.
    """
    name: str
    transform: Transform = IDENTITY_TRANSFORM
    parent: Optional["Node"] = field(default=None, repr=False)
    children: List["Node"] = field(default_factory=list, repr=False)
    is_rig_root: bool = False
    constraints: List[NodeConstraint] = field(default_factory=list, repr=False)

    def add_child(self, name: str, transform: Transform = IDENTITY_TRANSFORM) -> "Node":
        child = Node(name=name, transform=transform, parent=self)
        self.children.append(child)
        return child

    def find(self, name: str) -> Optional["Node"]:
        """Find the first node (depth-first, self included) with this exact name."""
        for node in iter_nodes(self):
            if node.name == name:
                return node
        return None


def iter_nodes(root) -> Iterator:
    """Depth-first pre-order walk over ``root`` and all its descendants.

    Works for any object exposing a ``children`` sequence.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(list(node.children)))


def build_skeleton(outline, is_rig_root: bool = True) -> Node:
    """Build a tree from a nested ``(name, [children...])`` outline.

    The returned root is flagged as the rig root unless ``is_rig_root`` is False.
    """
    name, children = outline
    root = Node(name=name, is_rig_root=is_rig_root)
    _attach_outline(root, children)
    return root


def _attach_outline(parent: Node, children) -> None:
    for child_name, grandchildren in children:
        child = parent.add_child(child_name)
        _attach_outline(child, grandchildren)
