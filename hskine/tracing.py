"""Assigning robot joints to the points of a path being traced."""

from __future__ import annotations

from collections.abc import Iterable

from .model import PathPoint
from .store import PathSet, Robot
from .vector import distance

TRACE_START = -2
"""Joint number marking a path that has not been started."""


def task_points(path_set: PathSet) -> list[PathPoint]:
    """Points of the path that have a joint (numbered above 0) assigned."""
    return [point for point in path_set.points if point.no > 0]


def format_task_points(points: Iterable[PathPoint]) -> str:
    """The number of points, then ``joint x y z`` per point."""
    points = list(points)
    out = [f"{len(points)}\n"]
    for point in points:
        p = point.p
        out.append(f"{point.no}\t{p[0]:.6f}\t{p[1]:.6f}\t{p[2]:.6f}\n")
    return "".join(out)


def advance_trace(
    robot: Robot, path_set: PathSet, use_joints: int = 1, rate: float = 0.98
) -> list[PathPoint]:
    """Move the joint assignments one step along the path.

    On an unstarted path the tip joint goes to the first point. Afterwards
    the assignments shift one point along, and the joint ``use_joints``
    below the last shifted one takes the first point when the gap between
    points is at least ``rate`` times the link length between them (always
    when ``rate`` is negative). Returns the points that now carry a joint.
    """
    joints = robot.joints
    points = path_set.points
    if not points:
        raise ValueError("path has no points")
    if not joints:
        raise ValueError("robot has no joints")

    head = points[0]
    if head.no == TRACE_START:
        head.no = len(joints) - 1
        joints[0].task_point = 1
        return [head]

    anchor = None
    for i in range(len(points) - 1, 0, -1):
        points[i].no = points[i - 1].no
        if points[i].no > 0:
            if points[i].no >= len(joints):
                raise ValueError(f"joint {points[i].no} is not in the robot")
            joints[points[i].no].task_point = 1
            anchor = i
    if anchor is None:
        raise ValueError("no joint is assigned to the path")

    lead = points[anchor]
    below = lead.no - use_joints
    if not 0 <= below < len(joints):
        raise ValueError(f"joint {below} below joint {lead.no} does not exist")

    if rate >= 0:
        gap = distance(lead.p, head.p) * use_joints
        link = rate * float(use_joints) * distance(
            joints[lead.no].position, joints[below].position
        )
        if gap >= link:
            head.no = below
            joints[below].task_point = 1
        else:
            head.no = -1
    else:
        head.no = below
        joints[below].task_point = 1
    return task_points(path_set)