"""Text reports of joint positions and displacements of a stored robot."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .model import Joint, JointType
from .modelfile import format_segments
from .store import Robot
from .vector import distance

DEGREES_PER_RADIAN = 180.0 / 3.1415
"""Conversion used when reporting rotary displacements."""


def _joint(robot: Robot, number: int) -> Joint:
    if not 0 <= number < len(robot.joints):
        raise IndexError(f"joint {number} is not in robot {robot.name!r}")
    return robot.joints[number]


def position_lines(robot: Robot, indices: Iterable[int]) -> list[str]:
    """Number and position of each requested joint, marking it as used."""
    lines = []
    for number in indices:
        joint = _joint(robot, number)
        p = joint.position
        lines.append(f"{number}\t{p[0]:.6f}\t{p[1]:.6f}\t{p[2]:.6f}")
        joint.dt_count = 1
    return lines


def distance_lines(
    robot: Robot, targets: Iterable[tuple[int, Sequence[float]]]
) -> list[str]:
    """For each (joint, point): distance, the point and the joint position."""
    lines = []
    for number, point in targets:
        joint = _joint(robot, number)
        p = joint.position
        lines.append(
            f"{number}\t{distance(point, p):e}\t"
            f"{point[0]:.6f}\t{point[1]:.6f}\t{point[2]:.6f}\t"
            f"{p[0]:.6f}\t{p[1]:.6f}\t{p[2]:.6f}"
        )
        joint.dt_count = 1
    return lines


def label_lines(robot: Robot) -> list[str]:
    """Plot commands placing each joint's number at its position."""
    return [
        f"set label {number + 1} '{number}' at "
        f"{j.position[0]:.6f},{j.position[1]:.6f},{j.position[2]:.6f} center"
        for number, j in enumerate(robot.joints)
    ]


def displacement_line(robot: Robot, indexed: bool = False) -> str:
    """Accumulated displacements, tab separated: rotary in degrees, linear as is.

    Joints of other kinds are left out. With ``indexed`` each value is
    preceded by its joint number.
    """
    parts = []
    for number, joint in enumerate(robot.joints):
        if joint.kind == JointType.ROTARY:
            value = joint.amount * DEGREES_PER_RADIAN
        elif joint.kind == JointType.LINEAR:
            value = joint.amount
        else:
            continue
        prefix = f"{number}\t" if indexed else ""
        parts.append(f"{prefix}{value:.6f}\t")
    return "".join(parts)


def translate(robot: Robot, offset: Sequence[float]) -> None:
    """Move every joint position by ``offset``."""
    for joint in robot.joints:
        joint.position = [c + d for c, d in zip(joint.position, offset)]


def joint_position_lines(
    robot: Robot, indices: Iterable[int], scientific: bool = False
) -> list[str]:
    """Positions of the requested joints, in fixed or scientific notation."""
    spec = "e" if scientific else ".6f"
    lines = []
    for number in indices:
        p = _joint(robot, number).position
        lines.append("\t".join(format(c, spec) for c in p))
    return lines


def pose_plot(robot: Robot) -> str:
    """Link segments of the robot from its base, as plot data."""
    return format_segments(robot.joints, robot.base)