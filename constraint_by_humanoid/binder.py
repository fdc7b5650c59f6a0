"""Constraint synthesis between two resolved humanoid skeletons.

For every canonical role, in declared order, a constraint of the requested
kind is attached to the destination bone with the source bone as its only
source at full weight.  Roles missing from either skeleton and roles whose
bones are excluded are skipped silently, as is a role whose source and
destination are the same bone.  A destination bone that already
carries a constraint of the requested kind is skipped with a warning, so
re-running the binder never stacks duplicates.

How a constraint is attached is up to the host: the binder only talks to a
``ConstraintBackend``, a table from ConstraintKind to the host's ``attach``
and ``has`` operations.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Tuple

from .humanoid import HUMANOID_BONES, HumanoidBone


class ConstraintKind(Enum):
    """The constraint behaviours that can be synthesized."""
    AIM = "AimConstraint"
    LOOK_AT = "LookAtConstraint"
    PARENT = "ParentConstraint"
    POSITION = "PositionConstraint"
    ROTATION = "RotationConstraint"
    SCALE = "ScaleConstraint"

    @property
    def label(self) -> str:
        """Display name with spaces between words, e.g. "Look At Constraint"."""
        return re.sub(r"(\B[A-Z])", r" \1", self.value)

    @classmethod
    def parse(cls, value) -> "ConstraintKind":
        """Accept a member, its identifier ("LOOK_AT") or its value.

        Raises:
            ValueError: ``value`` names no constraint kind.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            if value in cls.__members__:
                return cls.__members__[value]
            for kind in cls:
                if kind.value == value:
                    return kind
        raise ValueError(f"Unknown constraint kind: {value!r}")


def get_kind_items() -> List[Tuple[str, str, str]]:
    """Return (identifier, name, description) tuples for Blender EnumProperty."""
    return [(kind.name, kind.label, f"Add a {kind.label} to each humanoid bone")
            for kind in ConstraintKind]


# ============================================================================
# Host capability table
# ============================================================================

@dataclass(frozen=True)
class ConstraintOps:
    """Host operations for one constraint kind.

    attach(target, source, weight) adds an active constraint to ``target``
    driven by ``source`` and returns whatever handle the host uses.
    has(node) reports whether ``node`` already carries this kind.
    """
    attach: Callable[[Any, Any, float], Any]
    has: Callable[[Any], bool]


ConstraintBackend = Mapping[ConstraintKind, ConstraintOps]


# ============================================================================
# Results
# ============================================================================

@dataclass(frozen=True)
class ConstraintSpec:
    """A constraint the binder applied."""
    role: HumanoidBone
    target: Any
    kind: ConstraintKind
    source: Any
    weight: float = 1.0
    active: bool = True


@dataclass(frozen=True)
class BindWarning:
    """A role skipped because its destination already has the constraint."""
    role: HumanoidBone
    node_name: str
    kind: ConstraintKind

    @property
    def message(self) -> str:
        return (f"The bone `{self.node_name}` has been skipped because it "
                f"already has a {self.kind.label}.")


SKIP_ABSENT = "absent"
SKIP_EXCLUDED = "excluded"
SKIP_SAME_BONE = "same bone"


@dataclass
class BindResult:
    """Outcome of one binder pass.

    ``skipped`` records silent skips (SKIP_ABSENT, SKIP_EXCLUDED,
    SKIP_SAME_BONE) for diagnostics only.  ``errors`` holds precondition messages when the pass
    never ran.
    """
    kind: ConstraintKind
    applied: List[ConstraintSpec] = field(default_factory=list)
    warnings: List[BindWarning] = field(default_factory=list)
    skipped: Dict[HumanoidBone, str] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)

    @property
    def ran(self) -> bool:
        return not self.errors


def node_display_name(node) -> str:
    return getattr(node, "name", None) or str(node)


# ============================================================================
# Binder
# ============================================================================

def bind_constraints(source: Mapping[HumanoidBone, Any],
                     destination: Mapping[HumanoidBone, Any],
                     kind,
                     backend: ConstraintBackend,
                     excludes: Iterable[Any] = (),
                     roles: Iterable[HumanoidBone] = HUMANOID_BONES) -> BindResult:
    """Attach one constraint per role from source bone to destination bone.

    Args:
        source: Role binding of the source skeleton.
        destination: Role binding of the destination skeleton.
        kind: ConstraintKind, or its identifier string.
        backend: Host operations per constraint kind.
        excludes: Nodes (from either skeleton) that must not take part.
        roles: Roles to walk, canonical order by default.

    Returns:
        BindResult with the applied specs and duplicate warnings.

    Raises:
        ValueError: ``kind`` is unknown or ``backend`` has no entry for it.
    """
    kind = ConstraintKind.parse(kind)
    ops = backend.get(kind)
    if ops is None:
        raise ValueError(f"No host operations registered for {kind.label}")

    excluded = frozenset(excludes)
    result = BindResult(kind=kind)

    for role in roles:
        src = source.get(role)
        dst = destination.get(role)
        if src is None or dst is None:
            result.skipped[role] = SKIP_ABSENT
            continue

        if src in excluded or dst in excluded:
            result.skipped[role] = SKIP_EXCLUDED
            continue

        # A bone never drives itself.
        if src == dst:
            result.skipped[role] = SKIP_SAME_BONE
            continue

        if ops.has(dst):
            result.warnings.append(BindWarning(role, node_display_name(dst), kind))
            continue

        ops.attach(dst, src, 1.0)
        result.applied.append(ConstraintSpec(role=role, target=dst, kind=kind, source=src))

    return result
