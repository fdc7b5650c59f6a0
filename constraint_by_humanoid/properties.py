"""PropertyGroups for the Constraint by Humanoid panel."""

import bpy
from bpy.props import (
    StringProperty, BoolProperty, IntProperty,
    CollectionProperty, EnumProperty, PointerProperty,
)
from bpy.types import PropertyGroup

from .binder import get_kind_items


def _profile_items(self, context):
    """Dynamic enum items for the constraint profile dropdown."""
    from .profiles import get_profile_items
    return get_profile_items()


class CBH_ExcludeItem(PropertyGroup):
    """A bone that must not receive or drive a constraint."""
    armature: PointerProperty(name="Armature", type=bpy.types.Object)
    bone_name: StringProperty(name="Bone", default="")

    def to_ref(self):
        from .blender_host import BoneRef
        if self.armature is None:
            return None
        return BoneRef(self.armature.name, self.bone_name)


class CBH_SceneProperties(PropertyGroup):
    """Scene-level settings for the constraint configurator."""
    source: PointerProperty(
        name="Source",
        description="Rig whose humanoid bones drive the constraints",
        type=bpy.types.Object,
    )

    destination: PointerProperty(
        name="Destination",
        description="Rig whose humanoid bones receive the constraints",
        type=bpy.types.Object,
    )

    constraint_kind: EnumProperty(
        name="Constraint",
        description="Constraint added to each destination bone",
        items=get_kind_items(),
        default='ROTATION',
    )

    profile: EnumProperty(
        name="Profile",
        description="How constraints are set up on the bones",
        items=_profile_items,
    )

    excludes: CollectionProperty(type=CBH_ExcludeItem)
    excludes_index: IntProperty(name="Active Exclusion", default=0)

    show_excludes: BoolProperty(
        name="Exclude Bones",
        description="Show the list of bones left unconstrained",
        default=False,
    )

    def exclude_refs(self):
        return [ref for ref in (item.to_ref() for item in self.excludes) if ref is not None]


_classes = (
    CBH_ExcludeItem,
    CBH_SceneProperties,
)


def register():
    for cls in _classes:
        bpy.utils.register_class(cls)
    bpy.types.Scene.cbh_settings = bpy.props.PointerProperty(type=CBH_SceneProperties)


def unregister():
    del bpy.types.Scene.cbh_settings
    for cls in reversed(_classes):
        bpy.utils.unregister_class(cls)
