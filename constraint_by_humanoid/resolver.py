"""Resolve canonical humanoid roles to concrete nodes of one skeleton."""

from typing import Callable, Dict, Iterable, Iterator, Mapping, Optional

from .humanoid import (
    HUMANOID_BONES, HumanoidBone, aliases_for, has_rigify_torso,
    normalize_bone_name,
)
from .skeleton import iter_nodes


ResolveBone = Callable[[object, HumanoidBone], Optional[object]]


class RoleBinding(Mapping):
    """Read-only role -> node mapping for one skeleton.

    Only roles the skeleton actually has are stored; ``binding[role]`` on a
    missing role raises KeyError like any mapping, ``binding.get(role)``
    returns None.
    """

    __slots__ = ("_nodes",)

    def __init__(self, nodes: Mapping[HumanoidBone, object]):
        self._nodes: Dict[HumanoidBone, object] = {
            role: node for role, node in nodes.items() if node is not None
        }

    def __getitem__(self, role: HumanoidBone):
        return self._nodes[role]

    def __iter__(self) -> Iterator[HumanoidBone]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"RoleBinding({len(self._nodes)} roles)"


def resolve_by_name(root, role: HumanoidBone):
    """Find the node fulfilling ``role`` by bone-name convention.

    Node names (root and descendants) are compared case-insensitively with
    any "namespace:" prefix removed.  The role's aliases are tried in
    priority order; among nodes sharing a name the first found depth-first
    wins.  On a Rigify torso chain "spine" is the hips, not the spine.
    """
    return NameIndex(iter_nodes(root)).get_role(role)


class NameIndex:
    """First-seen node per normalized name over any iterable of named nodes.

    Build one per skeleton and reuse it for every role.
    """

    def __init__(self, nodes: Iterable):
        self._by_name: Dict[str, object] = {}
        for node in nodes:
            self._by_name.setdefault(normalize_bone_name(node.name), node)
        self.rigify_torso = has_rigify_torso(self._by_name)

    def get_role(self, role: HumanoidBone):
        for alias in aliases_for(role, self.rigify_torso):
            node = self._by_name.get(alias)
            if node is not None:
                return node
        return None


def resolve_skeleton(root, resolve_bone: Optional[ResolveBone] = None,
                     roles: Iterable[HumanoidBone] = HUMANOID_BONES) -> RoleBinding:
    """Resolve every role in ``roles`` against the skeleton under ``root``.

    Args:
        root: Skeleton root handed to ``resolve_bone``.
        resolve_bone: Host lookup ``(root, role) -> node or None``.  Defaults
            to name-convention matching over the node tree.
        roles: Roles to resolve, canonical order by default.

    Returns:
        RoleBinding holding the roles that resolved to a node.
    """
    if resolve_bone is None:
        # One walk of the tree serves every role.
        index = NameIndex(iter_nodes(root))
        return RoleBinding({role: index.get_role(role) for role in roles})
    return RoleBinding({role: resolve_bone(root, role) for role in roles})
