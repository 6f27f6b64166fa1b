"""Data types describing a robot: joints and path points."""

from __future__ import annotations

import copy as _copy
from dataclasses import dataclass, field
from enum import IntEnum

PI = 3.1415927
"""Value of pi used when converting commanded angles from degrees."""

MAX_LINKS = 10
"""Largest number of upper or lower links a joint may list."""


class JointType(IntEnum):
    """How a joint moves. Unknown codes behave like a rotary joint."""

    ROTARY = 0x00
    LINEAR = 0x01
    STOP = 0x02


def _vec3() -> list[float]:
    return [0.0, 0.0, 0.0]


@dataclass
class Joint:
    """State of one joint of a robot.

    ``position`` and ``axis`` are the current place and direction of the
    joint axis. ``dt`` collects the displacement requested by inverse steps
    and ``dt_count`` how many steps contributed to it; ``amount`` is the
    accumulated displacement. ``upper`` and ``lower`` list the indices of the
    linked joints towards the tip and towards the base.
    """

    position: list[float] = field(default_factory=_vec3)
    axis: list[float] = field(default_factory=_vec3)
    dt: float = 0.0
    dt_count: float = 0.0
    amount: float = 0.0
    limits: list[float] = field(default_factory=lambda: [0.0, 0.0])
    upper: list[int] = field(default_factory=list)
    lower: list[int] = field(default_factory=list)
    kp: list[float] = field(default_factory=lambda: [0.0, 0.0])
    kind: int = JointType.ROTARY
    lower_depth: int = 0
    task_point: int = 0

    def copy(self) -> "Joint":
        """Return an independent copy of this joint."""
        return _copy.deepcopy(self)


@dataclass
class PathPoint:
    """A point of a path, with the joint assigned to it (negative: none)."""

    no: int = -1
    p: list[float] = field(default_factory=_vec3)
    dist: float = 99999999.99