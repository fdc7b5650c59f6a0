"""Blender operators for the Constraint by Humanoid panel."""

import bpy
from bpy.types import Operator
from bpy.props import IntProperty


def settings_errors(context):
    """Precondition messages for the current panel settings."""
    from .blender_host import blender_host
    from .profiles import get_profile, DEFAULT_PROFILE_ID
    from .validation import validate_roots

    settings = context.scene.cbh_settings
    profile = get_profile(settings.profile) or get_profile(DEFAULT_PROFILE_ID)
    return validate_roots(settings.source, settings.destination, blender_host(profile))


class CBH_OT_apply_constraints(Operator):
    """Add a constraint to every humanoid bone of the destination, driven by the source"""
    bl_idname = "cbh.apply_constraints"
    bl_label = "Apply Changes"
    bl_options = {'REGISTER', 'UNDO'}

    @classmethod
    def poll(cls, context):
        return not settings_errors(context)

    def execute(self, context):
        from .blender_host import blender_host
        from .configure import configure_constraints, report_result
        from .profiles import require_profile

        settings = context.scene.cbh_settings
        host = blender_host(require_profile(settings.profile))
        result = configure_constraints(settings.source, settings.destination,
                                       settings.constraint_kind, host,
                                       excludes=settings.exclude_refs())
        report_result(result, self)
        return {'FINISHED'} if result.ran else {'CANCELLED'}


class CBH_OT_exclude_add_selected(Operator):
    """Exclude the selected pose bones from constraint configuration"""
    bl_idname = "cbh.exclude_add_selected"
    bl_label = "Exclude Selected Bones"
    bl_options = {'REGISTER', 'UNDO'}

    @classmethod
    def poll(cls, context):
        return context.mode == 'POSE' and bool(context.selected_pose_bones)

    def execute(self, context):
        settings = context.scene.cbh_settings
        existing = {(item.armature, item.bone_name) for item in settings.excludes}

        added = 0
        for pbone in context.selected_pose_bones:
            key = (pbone.id_data, pbone.name)
            if key in existing:
                continue
            item = settings.excludes.add()
            item.armature = pbone.id_data
            item.bone_name = pbone.name
            existing.add(key)
            added += 1

        if added:
            settings.excludes_index = len(settings.excludes) - 1
            self.report({'INFO'}, f"Excluded {added} bone(s)")
        else:
            self.report({'WARNING'}, "Selected bones are already excluded")
        return {'FINISHED'}


class CBH_OT_exclude_remove(Operator):
    """Remove a bone from the exclusion list"""
    bl_idname = "cbh.exclude_remove"
    bl_label = "Remove Exclusion"
    bl_options = {'REGISTER', 'UNDO'}

    index: IntProperty(default=-1)

    @classmethod
    def poll(cls, context):
        return len(context.scene.cbh_settings.excludes) > 0

    def execute(self, context):
        settings = context.scene.cbh_settings
        idx = self.index if self.index >= 0 else settings.excludes_index
        if not (0 <= idx < len(settings.excludes)):
            self.report({'ERROR'}, "No exclusion selected")
            return {'CANCELLED'}

        settings.excludes.remove(idx)
        settings.excludes_index = min(idx, len(settings.excludes) - 1) if settings.excludes else 0
        return {'FINISHED'}


class CBH_OT_exclude_clear(Operator):
    """Remove every bone from the exclusion list"""
    bl_idname = "cbh.exclude_clear"
    bl_label = "Clear Exclusions"
    bl_options = {'REGISTER', 'UNDO'}

    @classmethod
    def poll(cls, context):
        return len(context.scene.cbh_settings.excludes) > 0

    def execute(self, context):
        settings = context.scene.cbh_settings
        count = len(settings.excludes)
        settings.excludes.clear()
        settings.excludes_index = 0
        self.report({'INFO'}, f"Cleared {count} exclusion(s)")
        return {'FINISHED'}


_classes = (
    CBH_OT_apply_constraints,
    CBH_OT_exclude_add_selected,
    CBH_OT_exclude_remove,
    CBH_OT_exclude_clear,
)


def register():
    for cls in _classes:
        bpy.utils.register_class(cls)


def unregister():
    for cls in reversed(_classes):
        bpy.utils.unregister_class(cls)
