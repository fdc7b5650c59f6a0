import pytest

from constraint_by_humanoid.binder import ConstraintKind
from constraint_by_humanoid.configure import configure_constraints, report_result, summarize
from constraint_by_humanoid.humanoid import HumanoidBone
from constraint_by_humanoid.node_host import NODE_HOST
from constraint_by_humanoid.skeleton import Node
from constraint_by_humanoid.validation import MSG_SAME_OBJECT


class FakeOperator:
    def __init__(self):
        self.reports = []

    def report(self, level, message):
        self.reports.append((level, message))


def test_configure_binds_shared_roles(rig_factory):
    src = rig_factory("Source", ["Hips", "Spine", "LeftHand"])
    dst = rig_factory("Destination", ["Hips", "Spine"])

    result = configure_constraints(src, dst, "ROTATION", NODE_HOST)

    assert result.ran
    assert [spec.role for spec in result.applied] == [HumanoidBone.HIPS, HumanoidBone.SPINE]


def test_identical_roots_never_bind(rig_factory):
    root = rig_factory("Avatar", ["Hips", "Spine"])

    result = configure_constraints(root, root, ConstraintKind.PARENT, NODE_HOST)

    assert not result.ran
    assert result.applied == []
    assert result.errors == [MSG_SAME_OBJECT]
    assert root.find("Hips").constraints == []


def test_root_nested_in_the_other_counts_as_same_object():
    outer = Node("Avatar", is_rig_root=True)
    inner = outer.add_child("Armature")
    inner.is_rig_root = True
    inner.add_child("Hips")

    for source, destination in ((outer, inner), (inner, outer)):
        result = configure_constraints(source, destination, "ROTATION", NODE_HOST)
        assert result.errors == [MSG_SAME_OBJECT]
    assert inner.find("Hips").constraints == []


def test_unity_source_onto_rigify_destination(rig_factory):
    src = rig_factory("Source", ["Hips", "Spine", "Chest"])
    dst = rig_factory("Metarig", ["spine", "spine.001", "spine.002"])

    result = configure_constraints(src, dst, "ROTATION", NODE_HOST)

    assert [(spec.source.name, spec.target.name) for spec in result.applied] == [
        ("Hips", "spine"), ("Spine", "spine.001"), ("Chest", "spine.002"),
    ]


def test_invalid_destination_blocks_everything(rig_factory):
    src = rig_factory("Source", ["Hips"])
    dst = rig_factory("Destination", ["Hips"], armature_name="Bones")

    result = configure_constraints(src, dst, "SCALE", NODE_HOST)

    assert result.errors == ["`Destination` must have an Armature object as a child"]
    assert dst.find("Hips").constraints == []


def test_unknown_kind_raises_before_validation():
    with pytest.raises(ValueError):
        configure_constraints(None, None, "BOGUS", NODE_HOST)


def test_excludes_pass_through(rig_factory):
    src = rig_factory("Source", ["Hips", "Spine"])
    dst = rig_factory("Destination", ["Hips", "Spine"])

    result = configure_constraints(src, dst, "POSITION", NODE_HOST, excludes=[src.find("Spine")])

    assert [spec.role for spec in result.applied] == [HumanoidBone.HIPS]


def test_report_through_operator(rig_factory):
    src = rig_factory("Source", ["Hips"])
    dst = rig_factory("Destination", ["Hips"])
    configure_constraints(src, dst, "PARENT", NODE_HOST)
    result = configure_constraints(src, dst, "PARENT", NODE_HOST)

    operator = FakeOperator()
    report_result(result, operator)

    assert operator.reports == [
        ({'WARNING'}, "The bone `Hips` has been skipped because it already has a Parent Constraint."),
        ({'INFO'}, "Added 0 Parent Constraint(s), skipped 1 already constrained bone(s)"),
    ]


def test_report_errors_to_console(rig_factory, capsys):
    root = rig_factory("Avatar", ["Hips"])
    result = configure_constraints(root, root, "AIM", NODE_HOST)

    report_result(result)

    out = capsys.readouterr().out.splitlines()
    assert out == [
        f"[Constraint by Humanoid] [ERROR] {MSG_SAME_OBJECT}",
        "[Constraint by Humanoid] [ERROR] Aim Constraint not applied: 1 problem(s)",
    ]
    assert summarize(result) == "Aim Constraint not applied: 1 problem(s)"
