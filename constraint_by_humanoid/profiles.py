"""Constraint profiles: how each constraint kind is realised on a host rig.

A ConstraintKind only says *what* behaviour is wanted.  A profile says which
Blender bone constraint type implements it and how that constraint is set up
(evaluation spaces, tracking axes, naming).  Profiles are registered in a
global dict and selected from the panel.

Adding a profile:
    1. Create a ConstraintProfile with the constraint types and spaces wanted
    2. Call register_profile() to add it to the registry
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .binder import ConstraintKind


# ---------------------------------------------------------------------------
# Configuration dataclasses
# ---------------------------------------------------------------------------

# Blender constraint type per kind.  Damped Track is the closest match to an
# aim constraint on bones (which point down their Y axis); Track To keeps an
# up axis like a look-at constraint.
DEFAULT_CONSTRAINT_TYPES: Dict[ConstraintKind, str] = {
    ConstraintKind.AIM: 'DAMPED_TRACK',
    ConstraintKind.LOOK_AT: 'TRACK_TO',
    ConstraintKind.PARENT: 'CHILD_OF',
    ConstraintKind.POSITION: 'COPY_LOCATION',
    ConstraintKind.ROTATION: 'COPY_ROTATION',
    ConstraintKind.SCALE: 'COPY_SCALE',
}

# Constraint types that honour owner_space / target_space.
SPACE_AWARE_TYPES = frozenset({'COPY_LOCATION', 'COPY_ROTATION', 'COPY_SCALE'})


@dataclass
class TrackingConfig:
    """Axis setup for the tracking constraint types."""

    # Bone axis that points at the target.  Blender bones run along +Y.
    track_axis: str = 'TRACK_Y'

    # Up axis for Track To (look-at).
    up_axis: str = 'UP_Z'


@dataclass
class ConstraintProfile:
    """Complete description of how constraints are created for one setup."""

    # Display info
    profile_id: str = "world"
    name: str = "World Space"
    notes: str = ""

    constraint_types: Dict[ConstraintKind, str] = field(
        default_factory=lambda: dict(DEFAULT_CONSTRAINT_TYPES))

    # Evaluation spaces for the copy-transform constraint types:
    # 'WORLD', 'POSE', 'LOCAL_WITH_PARENT' or 'LOCAL'.
    owner_space: str = 'WORLD'
    target_space: str = 'WORLD'

    tracking: TrackingConfig = field(default_factory=TrackingConfig)

    # Created constraints are named "<prefix> <kind label>".
    name_prefix: str = "Humanoid"

    def constraint_type(self, kind) -> str:
        """Blender constraint type for ``kind``.

        Raises:
            ValueError: the profile has no type for this kind.
        """
        kind = ConstraintKind.parse(kind)
        try:
            return self.constraint_types[kind]
        except KeyError:
            raise ValueError(
                f"Profile '{self.profile_id}' has no constraint type for {kind.label}"
            ) from None

    def constraint_name(self, kind) -> str:
        return f"{self.name_prefix} {ConstraintKind.parse(kind).label}"


# ---------------------------------------------------------------------------
# Profile registry
# ---------------------------------------------------------------------------

CONSTRAINT_PROFILES: Dict[str, ConstraintProfile] = {}

DEFAULT_PROFILE_ID = "world"


def register_profile(profile: ConstraintProfile) -> None:
    """Register a constraint profile in the global registry."""
    CONSTRAINT_PROFILES[profile.profile_id] = profile


def get_profile(profile_id: str) -> Optional[ConstraintProfile]:
    """Look up a profile by its profile_id string."""
    return CONSTRAINT_PROFILES.get(profile_id)


def require_profile(profile_id: str) -> ConstraintProfile:
    """Like get_profile(), but an unknown id is an error."""
    profile = CONSTRAINT_PROFILES.get(profile_id)
    if profile is None:
        raise ValueError(f"Unknown constraint profile: {profile_id!r}")
    return profile


def get_profile_items() -> List[Tuple[str, str, str]]:
    """Return (identifier, name, description) tuples for Blender EnumProperty."""
    return [(pid, prof.name, prof.notes or prof.name)
            for pid, prof in CONSTRAINT_PROFILES.items()]


# ---------------------------------------------------------------------------
# Built-in profiles
# ---------------------------------------------------------------------------

register_profile(ConstraintProfile(
    profile_id="world",
    name="World Space",
    owner_space='WORLD',
    target_space='WORLD',
    notes="Destination bones follow the source bones in world space",
))

register_profile(ConstraintProfile(
    profile_id="local",
    name="Local Space",
    owner_space='LOCAL',
    target_space='LOCAL',
    notes="Copy bone-local transforms; rigs may differ in rest pose and scale",
))
