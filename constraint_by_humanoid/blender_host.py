"""Blender host adapter: armatures as skeletons, pose-bone constraints.

A skeleton root is any object that is, or has among its descendants, an
armature object (the Blender counterpart of a Unity Animator).  Bones are
addressed by BoneRef (armature object name + bone name) so they can be
hashed, compared and listed in the exclusion set.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from .binder import ConstraintKind, ConstraintOps
from .configure import RigHost
from .humanoid import RIGIFY_TORSO_MARKER, HumanoidBone, bone_role_for_name
from .profiles import SPACE_AWARE_TYPES, ConstraintProfile
from .resolver import NameIndex


@dataclass(frozen=True)
class BoneRef:
    """A bone of an armature object, by name."""
    armature: str
    bone: str

    @property
    def name(self) -> str:
        return self.bone

    def armature_object(self):
        import bpy
        return bpy.data.objects.get(self.armature)

    def pose_bone(self):
        obj = self.armature_object()
        if obj is None or obj.pose is None:
            return None
        return obj.pose.bones.get(self.bone)


# ---------------------------------------------------------------------------
# Skeleton queries
# ---------------------------------------------------------------------------

def find_armature(root):
    """Return ``root`` if it is an armature, else its first armature descendant."""
    if root is None:
        return None
    if root.type == 'ARMATURE':
        return root
    for child in root.children_recursive:
        if child.type == 'ARMATURE':
            return child
    return None


def iter_object_names(root) -> Iterator[str]:
    """Names of ``root``, its descendant objects and their armature data."""
    for obj in (root, *root.children_recursive):
        yield obj.name
        if obj.type == 'ARMATURE':
            yield obj.data.name


def same_rig(a, b) -> bool:
    """True when two roots are the same object or lead to the same armature."""
    if a == b:
        return True
    armature_obj = find_armature(a)
    return armature_obj is not None and armature_obj == find_armature(b)


class BoneIndex:
    """Bone-name indexes per armature object, built on first use.

    One instance lives as long as the host that owns it, so a resolve pass
    walks each armature's bones once instead of once per role.
    """

    def __init__(self):
        self._indexes: Dict[str, NameIndex] = {}

    def for_armature(self, armature_obj) -> NameIndex:
        index = self._indexes.get(armature_obj.name)
        if index is None:
            index = NameIndex(armature_obj.data.bones)
            self._indexes[armature_obj.name] = index
        return index

    def resolve_bone(self, root, role: HumanoidBone) -> Optional[BoneRef]:
        """Find the bone fulfilling ``role`` in the armature under ``root``."""
        armature_obj = find_armature(root)
        if armature_obj is None:
            return None
        bone = self.for_armature(armature_obj).get_role(role)
        if bone is None:
            return None
        return BoneRef(armature_obj.name, bone.name)


def bone_role(armature_obj, bone_name: str) -> Optional[HumanoidBone]:
    """Role a bone of ``armature_obj`` fulfils, or None.

    The Rigify torso convention is detected by the exact marker bone name.
    """
    if armature_obj is None or armature_obj.type != 'ARMATURE':
        return None
    rigify_torso = armature_obj.data.bones.get(RIGIFY_TORSO_MARKER) is not None
    return bone_role_for_name(bone_name, rigify_torso)


# ---------------------------------------------------------------------------
# Constraint operations
# ---------------------------------------------------------------------------

def _configure_constraint(con, constraint_type, source: BoneRef, profile: ConstraintProfile):
    source_obj = source.armature_object()
    con.target = source_obj
    con.subtarget = source.bone

    if constraint_type in SPACE_AWARE_TYPES:
        con.owner_space = profile.owner_space
        con.target_space = profile.target_space
    elif constraint_type == 'DAMPED_TRACK':
        con.track_axis = profile.tracking.track_axis
    elif constraint_type == 'TRACK_TO':
        con.track_axis = profile.tracking.track_axis
        con.up_axis = profile.tracking.up_axis
    elif constraint_type == 'CHILD_OF':
        # Keep the current pose: cancel the parent's rest transform.
        source_pbone = source.pose_bone()
        con.inverse_matrix = (source_obj.matrix_world @ source_pbone.matrix).inverted()


def _make_ops(kind: ConstraintKind, profile: ConstraintProfile) -> ConstraintOps:
    constraint_type = profile.constraint_type(kind)

    def attach(target: BoneRef, source: BoneRef, weight: float):
        pbone = target.pose_bone()
        con = pbone.constraints.new(constraint_type)
        con.name = profile.constraint_name(kind)
        _configure_constraint(con, constraint_type, source, profile)
        con.influence = weight
        con.mute = False
        return con

    def has(node: BoneRef) -> bool:
        pbone = node.pose_bone()
        if pbone is None:
            return False
        return any(con.type == constraint_type for con in pbone.constraints)

    return ConstraintOps(attach=attach, has=has)


def make_backend(profile: ConstraintProfile):
    return {kind: _make_ops(kind, profile) for kind in profile.constraint_types}


def blender_host(profile: ConstraintProfile) -> RigHost:
    return RigHost(
        resolve_bone=BoneIndex().resolve_bone,
        has_rig_marker=lambda root: find_armature(root) is not None,
        iter_names=iter_object_names,
        display_name=lambda root: root.name,
        same_root=same_rig,
        backend=make_backend(profile),
    )
