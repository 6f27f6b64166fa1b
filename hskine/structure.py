"""Editing and listing the link structure of a robot."""

from __future__ import annotations

import re
from collections.abc import Sequence

from .model import MAX_LINKS
from .store import Robot

ADJUSTED_KP = 0.01
"""Coordination parameters given to every joint when links are rebuilt."""

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_WORD = re.compile(r"\s*(\S+)")


class _Cursor:
    """Text read both line by line and word by word from one position."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def line(self) -> str | None:
        if self._pos >= len(self._text):
            return None
        end = self._text.find("\n", self._pos)
        end = len(self._text) if end == -1 else end + 1
        chunk = self._text[self._pos:end]
        self._pos = end
        return chunk

    def word(self) -> str:
        match = _WORD.match(self._text, self._pos)
        if match is None:
            raise ValueError("unexpected end of structure data")
        self._pos = match.end()
        return match.group(1)

    def links(self) -> list[int]:
        found = []
        for _ in range(MAX_LINKS):
            value = int(self.word())
            if value == -1:
                break
            found.append(value)
        return found


def apply_adjacency(robot: Robot, matrix: Sequence[Sequence[int]]) -> Robot:
    """Rebuild all links from an adjacency matrix (rows: lower, columns: upper).

    A joint whose column holds only zeros becomes the base (the last such
    joint wins). Every joint's coordination parameters are reset.
    """
    size = len(robot.joints)
    if len(matrix) != size or any(len(row) != size for row in matrix):
        raise ValueError(
            f"adjacency matrix does not match the robot's {size} joints"
        )
    for i, joint in enumerate(robot.joints):
        joint.upper = [j for j, value in enumerate(matrix[i]) if value == 1]
        column = [row[i] for row in matrix]
        joint.lower = [j for j, value in enumerate(column) if value == 1]
        if column.count(0) == size:
            robot.base = i
        joint.kp = [ADJUSTED_KP, ADJUSTED_KP]
    return robot


def apply_structure(robot: Robot, text: str) -> Robot:
    """Change links and base from structure text.

    A ``$n`` line sets the base joint; a ``#n`` line is followed by the upper
    and the lower links of joint ``n``, each list ended by -1.
    """
    size = len(robot.joints)
    cursor = _Cursor(text)
    while (line := cursor.line()) is not None:
        if line.startswith("$"):
            match = _LEADING_INT.match(line, 1)
            if match is not None:
                robot.base = int(match.group(1))
        elif line.startswith("#"):
            match = _LEADING_INT.match(line, 1)
            if match is None:
                raise ValueError(f"bad joint header: {line.rstrip()!r}")
            index = int(match.group(1))
            if not 0 <= index < size:
                raise ValueError(f"joint number {index} out of range 0..{size - 1}")
            joint = robot.joints[index]
            joint.upper = cursor.links()
            joint.lower = cursor.links()
    return robot


def adjacency_matrix(robot: Robot) -> list[list[int]]:
    """Adjacency matrix of the upper links, expecting them in ascending order."""
    size = len(robot.joints)
    rows = []
    for joint in robot.joints:
        row = []
        k = 0
        for j in range(size):
            if k < len(joint.upper) and joint.upper[k] == j:
                row.append(1)
                k += 1
            else:
                row.append(0)
        rows.append(row)
    return rows


def format_adjacency(robot: Robot) -> str:
    """The joint count, then the adjacency matrix one row per line."""
    out = [f"{len(robot.joints)}\n"]
    for row in adjacency_matrix(robot):
        out.append("".join(f"{value} " for value in row) + "\n")
    return "".join(out)


def _structure_links(values: Sequence[int]) -> str:
    parts = [f"{value} " for value in values[:MAX_LINKS]]
    if len(values) < MAX_LINKS:
        parts.append("-1 ")
    return "".join(parts) + "\n"


def format_structure(robot: Robot) -> str:
    """Structure text that ``apply_structure`` reads back."""
    out = [f"${robot.base}\n"]
    for number, joint in enumerate(robot.joints):
        out.append(f"\n#{number}\n")
        out.append(_structure_links(joint.upper))
        out.append(_structure_links(joint.lower))
    return "".join(out)


def _link_lines(number: int, upper: Sequence[int], lower: Sequence[int]) -> str:
    return (
        "Upper:\t" + "".join(f"{value}\t" for value in upper) + "\n"
        "Lower:\t" + "".join(f"{value}\t" for value in lower) + "\n"
    )


def format_links(robot: Robot) -> str:
    """Upper and lower links of every joint."""
    out = []
    for number, joint in enumerate(robot.joints):
        out.append(f"ジョイント番号:{number}\n")
        out.append(_link_lines(number, joint.upper, joint.lower))
    return "".join(out)


def format_details(robot: Robot) -> str:
    """Full state of every joint together with the robot's name and base."""
    out = []
    for number, joint in enumerate(robot.joints):
        p, a = joint.position, joint.axis
        out.append(f"ジョイント番号:{number}\n")
        out.append(f"ジョイント位置\nX:{p[0]:.6f}\tY:{p[1]:.6f}\tZ:{p[2]:.6f}\n")
        out.append(f"ジョイント方向\nX:{a[0]:.6f}\tY:{a[1]:.6f}\tZ:{a[2]:.6f}\n")
        out.append(f"求めた変位\n{joint.dt:.6f}\n")
        out.append(f"このジョイントを使うEFの数\n{joint.dt_count:.6f}\n")
        out.append(_link_lines(number, joint.upper, joint.lower))
        out.append(f"下位ジョイントの数\n{joint.lower_depth}\n")
        out.append(f"タスク点かどうか\n{joint.task_point}\n")
        out.append(f"Name of Robo\n{robot.name}\n")
        out.append(f"sp->num\n{len(robot.joints)}\n")
        out.append(f"sp->base\n{robot.base}\n")
    return "".join(out)