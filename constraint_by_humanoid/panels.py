"""Constraint by Humanoid N-panel for the 3D Viewport sidebar.

Provides UI for configuring constraints between two humanoid rigs:
- Source / Destination rig pickers
- Constraint kind and profile selection
- Exclusion list (collapsible)
- Validation messages and the Apply button
"""

import bpy
from bpy.types import Panel, UIList


# ---------------------------------------------------------------------------
# UIList classes
# ---------------------------------------------------------------------------

class CBH_UL_excludes(UIList):
    """UIList for excluded bones."""
    bl_idname = "CBH_UL_excludes"

    def draw_item(self, context, layout, data, item, icon, active_data, active_property,
                  index=0, flt_flag=0):
        from .blender_host import bone_role

        if self.layout_type in {'DEFAULT', 'COMPACT'}:
            row = layout.row(align=True)
            arm_name = item.armature.name if item.armature else "<missing>"
            row.label(text=f"{arm_name} / {item.bone_name}", icon='BONE_DATA')
            role = bone_role(item.armature, item.bone_name)
            if role is not None:
                row.label(text=role.label)
            op = row.operator("cbh.exclude_remove", text="", icon='X', emboss=False)
            op.index = index
        elif self.layout_type == 'GRID':
            layout.alignment = 'CENTER'
            layout.label(text=item.bone_name)


# ---------------------------------------------------------------------------
# Panel classes
# ---------------------------------------------------------------------------

class CBH_PT_Main(Panel):
    """Constraint by Humanoid main panel"""
    bl_label = "Constraint by Humanoid"
    bl_idname = "CBH_PT_Main"
    bl_space_type = 'VIEW_3D'
    bl_region_type = 'UI'
    bl_category = "Humanoid"

    def draw(self, context):
        from . import bl_info
        from .operators import settings_errors

        layout = self.layout
        settings = context.scene.cbh_settings

        version = ".".join(str(v) for v in bl_info["version"])
        layout.label(text=f"{bl_info['name']} - {version}")

        box = layout.box()
        col = box.column(align=True)
        col.label(text="Automatically sets up constraints between two rigs")
        col.label(text="based on the Unity Humanoid bone conventions.")

        layout.separator()
        col = layout.column(align=True)
        col.prop(settings, "source", icon='ARMATURE_DATA')
        col.prop(settings, "destination", icon='ARMATURE_DATA')

        # Exclusion list
        row = layout.row()
        icon = 'TRIA_DOWN' if settings.show_excludes else 'TRIA_RIGHT'
        row.prop(settings, "show_excludes", icon=icon, emboss=False)
        if settings.show_excludes:
            box = layout.box()
            box.template_list(
                "CBH_UL_excludes", "",
                settings, "excludes",
                settings, "excludes_index",
                rows=3,
            )
            row = box.row(align=True)
            row.operator("cbh.exclude_add_selected", icon='ADD')
            row.operator("cbh.exclude_clear", icon='TRASH')
            if context.mode != 'POSE':
                box.label(text="Select bones in Pose Mode to exclude them", icon='INFO')

        layout.separator()
        col = layout.column(align=True)
        col.prop(settings, "constraint_kind")
        col.prop(settings, "profile")

        errors = settings_errors(context)
        if errors:
            layout.separator()
            for message in errors:
                box = layout.box()
                box.label(text=message, icon='ERROR')

        layout.separator()
        row = layout.row()
        row.scale_y = 1.4
        row.enabled = not errors
        row.operator("cbh.apply_constraints", icon='CONSTRAINT_BONE')


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------

_classes = (
    CBH_UL_excludes,
    CBH_PT_Main,
)


def register():
    for cls in _classes:
        bpy.utils.register_class(cls)


def unregister():
    for cls in reversed(_classes):
        bpy.utils.unregister_class(cls)
