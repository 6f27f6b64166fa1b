"""Local inverse steps and forward propagation over a joint graph."""

from __future__ import annotations

from collections.abc import Sequence

from .model import Joint, JointType
from .transform import (
    Matrix,
    matmul,
    rotation_matrix,
    transform_axis,
    transform_point,
    translation_matrix,
)
from .vector import rotation_component, translation_component


def inverse_step(
    joints: Sequence[Joint],
    index: int,
    current: Sequence[float],
    target: Sequence[float],
    gain: float = -1.0,
) -> float:
    """Add to one joint the displacement that moves ``current`` towards ``target``.

    A ``gain`` of zero or less uses the joint's own ``kp[0]``. The result is
    clamped to the joint's limits, added to ``dt`` and counted in
    ``dt_count``; the clamped increment is returned.
    """
    joint = joints[index]
    k = joint.kp[0] if gain <= 0 else gain
    if joint.kind == JointType.LINEAR:
        step = k * translation_component(joint.axis, target, current)
    elif joint.kind == JointType.STOP:
        step = 0.0
    else:
        step = k * rotation_component(joint.axis, joint.position, target, current)

    low, high = joint.limits
    if joint.amount + step > high:
        step = high - joint.amount
    elif joint.amount + step < low:
        step = low - joint.amount

    joint.dt += step
    joint.dt_count += 1
    return step


def _local_matrix(joint: Joint) -> Matrix:
    if joint.kind == JointType.LINEAR:
        return translation_matrix(joint.axis, joint.dt)
    return rotation_matrix(joint.axis, joint.position, joint.dt)


def forward(
    joints: Sequence[Joint], index: int, transform: Matrix | None = None
) -> None:
    """Apply pending displacements from ``index`` up through all upper joints.

    Each joint averages its collected ``dt``, adds it to ``amount``, is moved
    by the transform coming from below (none at the starting joint) and
    passes its combined transform on to its upper joints.
    """
    stack: list[tuple[int, Matrix | None]] = [(index, transform)]
    while stack:
        number, incoming = stack.pop()
        joint = joints[number]
        joint.dt = joint.dt / joint.dt_count if joint.dt_count > 0.0 else 0.0
        joint.amount += joint.dt
        if incoming is None:
            outgoing = _local_matrix(joint)
        else:
            joint.position = list(transform_point(incoming, joint.position))
            joint.axis = list(transform_axis(incoming, joint.axis))
            outgoing = matmul(_local_matrix(joint), incoming)
        joint.dt = 0.0
        joint.dt_count = 0.0
        stack.extend((upper, outgoing) for upper in reversed(joint.upper))


def count_lower_joints(joints: Sequence[Joint], index: int, depth: int = 0) -> None:
    """Record in ``lower_depth`` how many joints lie below each joint."""
    stack = [(index, depth)]
    while stack:
        number, level = stack.pop()
        joints[number].lower_depth = level
        stack.extend((upper, level + 1) for upper in reversed(joints[number].upper))