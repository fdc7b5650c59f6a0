"""Checks that gate the Apply action.

Each violated precondition yields one human-readable message.  Apply stays
disabled while any message is present; nothing here raises.
"""

from typing import List


ARMATURE_NAME = "armature"

MSG_SET_SOURCE = "Set the Source object"
MSG_SET_DESTINATION = "Set the Destination object"
MSG_SAME_OBJECT = "Could not set the same object as the Source and Destination"


def check_skeleton_root(root, host) -> List[str]:
    """Return the problems that make ``root`` unusable as a skeleton root.

    A usable root carries the rig-root marker and has a node named
    "Armature" (any case) among itself and its descendants.
    """
    errors = []
    name = host.display_name(root)
    if not host.has_rig_marker(root):
        errors.append(f"`{name}` must have an armature")
    if all(n.lower() != ARMATURE_NAME for n in host.iter_names(root)):
        errors.append(f"`{name}` must have an Armature object as a child")
    return errors


def validate_roots(source, destination, host) -> List[str]:
    """Collect every precondition message for a source/destination pair.

    Messages are deduplicated, keeping first-occurrence order.
    """
    errors = []
    if source is None:
        errors.append(MSG_SET_SOURCE)
    else:
        errors.extend(check_skeleton_root(source, host))

    if destination is None:
        errors.append(MSG_SET_DESTINATION)
    else:
        errors.extend(check_skeleton_root(destination, host))

    if source is not None and destination is not None and host.same_root(source, destination):
        errors.append(MSG_SAME_OBJECT)

    return list(dict.fromkeys(errors))
