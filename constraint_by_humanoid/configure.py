"""Configure humanoid constraints between two rigs.

This is the main entry point.  It:
1. Validates both roots (apply is refused while any message exists)
2. Resolves the humanoid roles of each root independently
3. Binds one constraint per shared role, source -> destination

Usage:
    from constraint_by_humanoid.configure import configure_constraints
    from constraint_by_humanoid.node_host import NODE_HOST
    result = configure_constraints(src_root, dst_root, "ROTATION", NODE_HOST)
    # result.applied -> [ConstraintSpec, ...], result.warnings -> [BindWarning, ...]
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from .binder import BindResult, ConstraintBackend, ConstraintKind, bind_constraints
from .resolver import ResolveBone, resolve_skeleton
from .validation import validate_roots


PRODUCT = "Constraint by Humanoid"
LOG_TAG = f"[{PRODUCT}]"


@dataclass(frozen=True)
class RigHost:
    """Everything the core needs from the application holding the rigs."""
    resolve_bone: Optional[ResolveBone]
    has_rig_marker: Callable[[Any], bool]
    iter_names: Callable[[Any], Iterable[str]]
    display_name: Callable[[Any], str]
    same_root: Callable[[Any, Any], bool]
    backend: ConstraintBackend


def configure_constraints(source_root, destination_root, kind, host: RigHost,
                          excludes: Iterable[Any] = ()) -> BindResult:
    """Validate, resolve and bind in one synchronous pass.

    Args:
        source_root: Root whose bones drive the constraints (may be None).
        destination_root: Root whose bones receive them (may be None).
        kind: ConstraintKind or its identifier string.
        host: Host adapter for the rigs.
        excludes: Bones that must not take part, from either rig.

    Returns:
        BindResult.  When preconditions fail ``errors`` is filled and nothing
        was attached.

    Raises:
        ValueError: ``kind`` is not a known constraint kind.
    """
    kind = ConstraintKind.parse(kind)

    errors = validate_roots(source_root, destination_root, host)
    if errors:
        return BindResult(kind=kind, errors=errors)

    source = resolve_skeleton(source_root, host.resolve_bone)
    destination = resolve_skeleton(destination_root, host.resolve_bone)
    return bind_constraints(source, destination, kind, host.backend, excludes=excludes)


def _report(operator, level, message):
    """Report a message through the operator or print to console."""
    if operator is not None and hasattr(operator, 'report'):
        operator.report({level}, message)
    else:
        print(f"{LOG_TAG} [{level}] {message}")


def summarize(result: BindResult) -> str:
    if not result.ran:
        return f"{result.kind.label} not applied: {len(result.errors)} problem(s)"
    return (f"Added {len(result.applied)} {result.kind.label}(s), "
            f"skipped {len(result.warnings)} already constrained bone(s)")


def report_result(result: BindResult, operator=None) -> None:
    """Send errors, duplicate warnings and a summary line to the user."""
    for message in result.errors:
        _report(operator, 'ERROR', message)
    for warning in result.warnings:
        _report(operator, 'WARNING', warning.message)
    _report(operator, 'INFO' if result.ran else 'ERROR', summarize(result))
