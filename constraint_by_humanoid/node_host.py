"""Host adapter for the in-memory skeleton tree (``skeleton.Node``).

Constraints are recorded on ``Node.constraints``; a node "has" a kind when
any recorded constraint is of that kind.  Two roots are the same rig when one
lies inside the other.
"""

from .binder import ConstraintKind, ConstraintOps
from .configure import RigHost
from .skeleton import Node, NodeConstraint, iter_nodes


def _make_ops(kind: ConstraintKind) -> ConstraintOps:
    def attach(target: Node, source: Node, weight: float) -> NodeConstraint:
        constraint = NodeConstraint(kind=kind, source=source, weight=weight)
        target.constraints.append(constraint)
        constraint.active = True
        return constraint

    def has(node: Node) -> bool:
        return any(c.kind is kind for c in node.constraints)

    return ConstraintOps(attach=attach, has=has)


def _same_rig(a: Node, b: Node) -> bool:
    # Roots resolve over all their descendants, so nesting shares bones.
    return any(n is b for n in iter_nodes(a)) or any(n is a for n in iter_nodes(b))


NODE_BACKEND = {kind: _make_ops(kind) for kind in ConstraintKind}


NODE_HOST = RigHost(
    resolve_bone=None,  # name-convention matching
    has_rig_marker=lambda root: root.is_rig_root,
    iter_names=lambda root: (node.name for node in iter_nodes(root)),
    display_name=lambda root: root.name,
    same_root=_same_rig,
    backend=NODE_BACKEND,
)
