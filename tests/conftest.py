import pytest

from constraint_by_humanoid.humanoid import HUMANOID_BONES
from constraint_by_humanoid.skeleton import Node


def make_rig(name, bone_names, rig_root=True, armature_name="Armature"):
    """Avatar root -> Armature -> bones; the first bone parents the rest."""
    root = Node(name=name, is_rig_root=rig_root)
    parent = root.add_child(armature_name) if armature_name else root
    bones = list(bone_names)
    if bones:
        first = parent.add_child(bones[0])
        for bone in bones[1:]:
            first.add_child(bone)
    return root


@pytest.fixture
def rig_factory():
    return make_rig


@pytest.fixture
def full_source():
    return make_rig("Source", [role.value for role in HUMANOID_BONES])


@pytest.fixture
def full_destination():
    return make_rig("Destination", [role.value for role in HUMANOID_BONES])
