import pytest

from constraint_by_humanoid.humanoid import HUMANOID_BONES, HumanoidBone
from constraint_by_humanoid.resolver import RoleBinding, resolve_by_name, resolve_skeleton
from constraint_by_humanoid.skeleton import Node


def test_full_rig_resolves_every_role(full_source):
    binding = resolve_skeleton(full_source)
    assert len(binding) == len(HUMANOID_BONES)
    assert binding[HumanoidBone.LEFT_INDEX_DISTAL].name == "LeftIndexDistal"


def test_missing_roles_are_absent_not_errors(rig_factory):
    binding = resolve_skeleton(rig_factory("Avatar", ["Hips", "Spine"]))
    assert set(binding) == {HumanoidBone.HIPS, HumanoidBone.SPINE}
    assert binding.get(HumanoidBone.UPPER_CHEST) is None
    with pytest.raises(KeyError):
        binding[HumanoidBone.UPPER_CHEST]
    assert HumanoidBone.CHEST not in binding


def test_matching_ignores_case_and_namespace(rig_factory):
    binding = resolve_skeleton(rig_factory("Avatar", ["HIPS", "mixamorig:Spine", "mixamorig:LeftForeArm"]))
    assert binding[HumanoidBone.HIPS].name == "HIPS"
    assert binding[HumanoidBone.SPINE].name == "mixamorig:Spine"
    assert binding[HumanoidBone.LEFT_LOWER_ARM].name == "mixamorig:LeftForeArm"


def test_preferred_alias_wins_over_tree_order(rig_factory):
    root = rig_factory("Avatar", ["Hips", "Left arm", "LeftUpperArm"])
    assert resolve_by_name(root, HumanoidBone.LEFT_UPPER_ARM).name == "LeftUpperArm"


def test_first_node_depth_first_wins_for_duplicate_names():
    root = Node("Avatar", is_rig_root=True)
    armature = root.add_child("Armature")
    first = armature.add_child("Hips")
    first.add_child("Spine")
    armature.add_child("Hips")
    assert resolve_by_name(root, HumanoidBone.HIPS) is first


def test_custom_lookup_is_called_once_per_role(full_source):
    calls = []

    def lookup(root, role):
        calls.append(role)
        return "hips-node" if role is HumanoidBone.HIPS else None

    binding = resolve_skeleton(full_source, lookup)
    assert calls == list(HUMANOID_BONES)
    assert dict(binding) == {HumanoidBone.HIPS: "hips-node"}


def test_role_subset(full_source):
    roles = [HumanoidBone.HEAD, HumanoidBone.NECK]
    binding = resolve_skeleton(full_source, roles=roles)
    assert list(binding) == roles


def test_binding_is_read_only(full_source):
    binding = resolve_skeleton(full_source)
    with pytest.raises(TypeError):
        binding[HumanoidBone.HIPS] = Node("Other")
    assert isinstance(binding, RoleBinding)


def _sided(*patterns):
    return [p.format(x=x, y=y) for x, y in (("L", "l"), ("R", "r")) for p in patterns]


RIGIFY_METARIG = (
    ["spine", "spine.001", "spine.002", "spine.003", "spine.004", "spine.005", "spine.006"]
    + _sided("pelvis.{x}", "thigh.{x}", "shin.{x}", "foot.{x}", "toe.{x}", "heel.02.{x}",
             "breast.{x}", "shoulder.{x}", "upper_arm.{x}", "forearm.{x}", "hand.{x}",
             "palm.01.{x}", "eye.{x}")
    + _sided(*(f"{finger}.0{n}.{{x}}" for finger in ("thumb", "f_index", "f_middle", "f_ring", "f_pinky")
               for n in (1, 2, 3)))
)

UE_MANNEQUIN = (
    ["root", "pelvis", "spine_01", "spine_02", "spine_03", "neck_01", "head"]
    + _sided("clavicle_{y}", "upperarm_{y}", "lowerarm_{y}", "hand_{y}",
             "thigh_{y}", "calf_{y}", "foot_{y}", "ball_{y}", "ik_hand_{y}")
    + _sided(*(f"{finger}_0{n}_{{y}}" for finger in ("thumb", "index", "middle", "ring", "pinky")
               for n in (1, 2, 3)))
)


def test_rigify_metarig_resolves_torso_from_the_pelvis(rig_factory):
    binding = resolve_skeleton(rig_factory("Metarig", RIGIFY_METARIG))

    assert len(binding) == len(HUMANOID_BONES)
    assert {role: binding[role].name for role in HUMANOID_BONES[:4]} == {
        HumanoidBone.HIPS: "spine",
        HumanoidBone.SPINE: "spine.001",
        HumanoidBone.CHEST: "spine.002",
        HumanoidBone.UPPER_CHEST: "spine.003",
    }
    assert binding[HumanoidBone.NECK].name == "spine.004"
    assert binding[HumanoidBone.HEAD].name == "spine.006"
    assert binding[HumanoidBone.LEFT_TOES].name == "toe.L"
    assert binding[HumanoidBone.RIGHT_LITTLE_DISTAL].name == "f_pinky.03.R"


def test_unity_spine_without_rigify_marker_stays_spine(rig_factory):
    binding = resolve_skeleton(rig_factory("Avatar", ["Hips", "spine", "chest"]))
    assert binding[HumanoidBone.HIPS].name == "Hips"
    assert binding[HumanoidBone.SPINE].name == "spine"
    assert resolve_by_name(rig_factory("Avatar", ["spine"]), HumanoidBone.HIPS) is None


def test_unreal_mannequin_resolves_spine_chain(rig_factory):
    binding = resolve_skeleton(rig_factory("Mannequin", UE_MANNEQUIN))

    assert {role: binding[role].name for role in HUMANOID_BONES[:4]} == {
        HumanoidBone.HIPS: "pelvis",
        HumanoidBone.SPINE: "spine_01",
        HumanoidBone.CHEST: "spine_02",
        HumanoidBone.UPPER_CHEST: "spine_03",
    }
    assert binding[HumanoidBone.LEFT_SHOULDER].name == "clavicle_l"
    assert binding[HumanoidBone.RIGHT_TOES].name == "ball_r"
    assert set(HUMANOID_BONES) - set(binding) == {HumanoidBone.LEFT_EYE, HumanoidBone.RIGHT_EYE}
