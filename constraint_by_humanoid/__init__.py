"""Constraint by Humanoid - bind two humanoid rigs with bone constraints.

For each Unity Humanoid bone role found on both rigs, adds a constraint of
the chosen kind (aim, look-at, parent, position, rotation, scale) to the
destination bone with the source bone as its only target at full weight.

The core (humanoid, skeleton, resolver, binder, validation, configure,
profiles, node_host) has no Blender dependency.  The panel, operators and
properties are loaded by register().
"""

bl_info = {
    "name": "Constraint by Humanoid",
    "author": "Natsuneko",
    "version": (0, 4, 0),
    "blender": (4, 4, 0),
    "location": "3D Viewport > Sidebar > Humanoid",
    "description": "Set up constraints between two rigs based on the Unity Humanoid bone conventions",
    "category": "Rigging",
}

__version__ = ".".join(str(v) for v in bl_info["version"])


def register():
    from . import properties
    from . import operators
    from . import panels
    properties.register()
    operators.register()
    panels.register()


def unregister():
    from . import panels
    from . import operators
    from . import properties
    panels.unregister()
    operators.unregister()
    properties.unregister()
