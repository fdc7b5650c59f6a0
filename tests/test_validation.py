from constraint_by_humanoid.node_host import NODE_HOST
from constraint_by_humanoid.validation import (
    MSG_SAME_OBJECT, MSG_SET_DESTINATION, MSG_SET_SOURCE,
    check_skeleton_root, validate_roots,
)


def test_valid_root_has_no_problems(rig_factory):
    assert check_skeleton_root(rig_factory("Avatar", ["Hips"]), NODE_HOST) == []


def test_root_without_marker(rig_factory):
    root = rig_factory("Prop", ["Hips"], rig_root=False)
    assert check_skeleton_root(root, NODE_HOST) == ["`Prop` must have an armature"]


def test_root_without_armature_child(rig_factory):
    root = rig_factory("Avatar", ["Hips"], armature_name="Skeleton")
    assert check_skeleton_root(root, NODE_HOST) == [
        "`Avatar` must have an Armature object as a child"]


def test_armature_name_is_case_insensitive(rig_factory):
    assert check_skeleton_root(rig_factory("Avatar", ["Hips"], armature_name="ARMATURE"), NODE_HOST) == []
    assert check_skeleton_root(rig_factory("armature", ["Hips"], armature_name=None), NODE_HOST) == []


def test_missing_roots():
    assert validate_roots(None, None, NODE_HOST) == [MSG_SET_SOURCE, MSG_SET_DESTINATION]


def test_same_root_is_one_message(rig_factory):
    root = rig_factory("Avatar", ["Hips"])
    assert validate_roots(root, root, NODE_HOST) == [MSG_SAME_OBJECT]


def test_messages_are_deduplicated(rig_factory):
    root = rig_factory("Prop", ["Hips"], rig_root=False, armature_name=None)
    errors = validate_roots(root, root, NODE_HOST)
    assert errors == [
        "`Prop` must have an armature",
        "`Prop` must have an Armature object as a child",
        MSG_SAME_OBJECT,
    ]


def test_each_root_is_checked(rig_factory):
    src = rig_factory("Source", ["Hips"])
    dst = rig_factory("Destination", ["Hips"], rig_root=False)
    assert validate_roots(src, dst, NODE_HOST) == ["`Destination` must have an armature"]
    assert validate_roots(src, None, NODE_HOST) == [MSG_SET_DESTINATION]
