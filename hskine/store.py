"""Persistent storage of robots and paths under numeric keys.

Each key holds either a robot model or a path. Data is kept as one JSON
file per key in a store directory, so that separate commands can share and
modify the same robot or path between runs.
"""

from __future__ import annotations

import json
import os
import re
import tempfile
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from pathlib import Path

from .model import MAX_LINKS, Joint, PathPoint
from .modelfile import parse_model

NAME_LENGTH = 79
"""Longest name kept for a robot or a path."""

STORE_ENV = "HSKINE_STORE"
"""Environment variable naming the directory of the default store."""

_ROBOT = "robot"
_PATH = "path"
_HEADER = re.compile(r"^#\s*([+-]?\d+)", re.MULTILINE)


class StoreError(Exception):
    """Raised when stored data is missing, taken or cannot be read."""


@dataclass
class Robot:
    """A named robot: its joints and the number of its base joint."""

    name: str
    joints: list[Joint] = field(default_factory=list)
    base: int = 0


@dataclass
class PathSet:
    """A named sequence of path points."""

    name: str
    points: list[PathPoint] = field(default_factory=list)


def find_base(joints: Sequence[Joint]) -> int:
    """Follow the first lower link from joint 0 down to the joint with none."""
    if not joints:
        return 0
    seen: set[int] = set()
    number = 0
    while joints[number].lower:
        if number in seen:
            raise ValueError("lower links form a loop; no base joint")
        seen.add(number)
        number = joints[number].lower[0]
        if not 0 <= number < len(joints):
            raise ValueError(f"lower link to missing joint {number}")
    return number


def _format_links(values: Sequence[int]) -> str:
    parts = [f"{value}\t" for value in values[:MAX_LINKS]]
    if len(values) < MAX_LINKS:
        parts.append("-1\n")
    return "".join(parts)


def format_model(robot: Robot) -> str:
    """Model text of ``robot``, including accumulated displacements."""
    out = [f"{len(robot.joints)}\n\n"]
    for number, joint in enumerate(robot.joints):
        p, a, lim, kp = joint.position, joint.axis, joint.limits, joint.kp
        out.append(f"#{number}\n")
        out.append(f"{p[0]:.6f}\t{p[1]:.6f}\t{p[2]:.6f}\n")
        out.append(f"{a[0]:.6f}\t{a[1]:.6f}\t{a[2]:.6f}\n")
        out.append(f"{lim[0]:.6f}\t{lim[1]:.6f}\n")
        out.append(_format_links(joint.upper))
        out.append(_format_links(joint.lower))
        out.append(f"{kp[0]:.6f}\t{kp[1]:.6f}\n")
        out.append(f"0x{int(joint.kind):x}\n")
        out.append(f"{joint.amount:.6f}\n\n")
    return "".join(out)


def format_path(path_set: PathSet) -> str:
    """Text listing of a path: the count, then one line per point."""
    out = [f"{len(path_set.points)}\n"]
    for point in path_set.points:
        p = point.p
        out.append(f"{point.no}\t{p[0]:.6f}\t{p[1]:.6f}\t{p[2]:.6f}{point.dist:e}\n")
    return "".join(out)


def parse_path(text: str, with_numbers: bool = False) -> list[PathPoint]:
    """Read path points: a count, then per point an optional joint number and x y z.

    Without numbers the first point is marked -2 (trace start) and the
    others -1 (unassigned).
    """
    tokens = iter(text.split())
    try:
        count = int(next(tokens))
    except StopIteration:
        raise ValueError("path data is empty") from None
    if count < 0:
        raise ValueError(f"negative point count: {count}")
    points = []
    try:
        for i in range(count):
            if with_numbers:
                no = int(next(tokens))
            else:
                no = -2 if i == 0 else -1
            coords = [float(next(tokens)) for _ in range(3)]
            points.append(PathPoint(no=no, p=coords))
    except StopIteration:
        raise ValueError(f"path data ends before point {len(points)}") from None
    return points


def _display_name(path: str | Path) -> str:
    return str(path).rsplit("/", 1)[-1][:NAME_LENGTH]


def _read_source(path: str | Path) -> str:
    try:
        return Path(path).read_text()
    except OSError as exc:
        raise StoreError(f"{path} does not exist") from exc


def _robot_record(robot: Robot) -> dict:
    return {
        "kind": _ROBOT,
        "name": robot.name,
        "base": robot.base,
        "joints": [asdict(joint) for joint in robot.joints],
    }


def _path_record(path_set: PathSet) -> dict:
    return {
        "kind": _PATH,
        "name": path_set.name,
        "points": [asdict(point) for point in path_set.points],
    }


class Store:
    """Robots and paths kept under integer keys in a directory."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _file(self, key: int) -> Path:
        return self.directory / f"{int(key)}.json"

    def _create(self, key: int, record: dict) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        try:
            with self._file(key).open("x", encoding="utf-8") as handle:
                json.dump(record, handle)
        except FileExistsError:
            raise StoreError(f"key {key} is already in use") from None

    def _read(self, key: int, kind: str) -> dict:
        try:
            text = self._file(key).read_text(encoding="utf-8")
        except FileNotFoundError:
            raise StoreError(f"nothing is stored under key {key}") from None
        record = json.loads(text)
        if record.get("kind") != kind:
            raise StoreError(f"key {key} does not hold a {kind}")
        return record

    def _write(self, key: int, record: dict) -> None:
        self._read(key, record["kind"])
        target = self._file(key)
        fd, temp = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(record, handle)
            os.replace(temp, target)
        except BaseException:
            Path(temp).unlink(missing_ok=True)
            raise

    # Robots

    def create_robot(self, key: int, name: str, joints: Sequence[Joint]) -> Robot:
        """Store a new robot under an unused key."""
        joints = list(joints)
        try:
            base = find_base(joints)
        except ValueError as exc:
            raise StoreError(str(exc)) from exc
        robot = Robot(name=name[:NAME_LENGTH], joints=joints, base=base)
        self._create(key, _robot_record(robot))
        return robot

    def robot(self, key: int) -> Robot:
        """The robot stored under ``key``."""
        record = self._read(key, _ROBOT)
        joints = [Joint(**data) for data in record["joints"]]
        return Robot(name=record["name"], joints=joints, base=record["base"])

    def save_robot(self, key: int, robot: Robot) -> None:
        """Replace the robot stored under ``key``."""
        self._write(key, _robot_record(robot))

    @contextmanager
    def editing_robot(self, key: int) -> Iterator[Robot]:
        """Yield the stored robot and save it back when the block succeeds."""
        robot = self.robot(key)
        yield robot
        self.save_robot(key, robot)

    def _robot_from_file(self, key: int, path: str | Path, with_amount: bool) -> Robot:
        text = _read_source(path)
        try:
            joints = parse_model(text, with_amount=with_amount)
        except ValueError as exc:
            raise StoreError(f"{path}: {exc}") from exc
        return self.create_robot(key, _display_name(path), joints)

    def load_robot_file(self, key: int, path: str | Path) -> Robot:
        """Create a robot under ``key`` from a model file."""
        return self._robot_from_file(key, path, with_amount=False)

    def reload_robot_file(self, key: int, path: str | Path) -> Robot:
        """Create a robot under ``key`` from a saved model with displacements."""
        return self._robot_from_file(key, path, with_amount=True)

    def inherit_robot_file(
        self, key: int, path: str | Path
    ) -> tuple[Robot, list[int]]:
        """Take positions, axes, limits and displacements from a saved model.

        The stored robot keeps its links, parameters and joint types. Returns
        the updated robot and the joint numbers read, in file order.
        """
        robot = self.robot(key)
        text = _read_source(path)
        try:
            source = parse_model(text, with_amount=True)
        except ValueError as exc:
            raise StoreError(f"{path}: {exc}") from exc
        indices = [int(match) for match in _HEADER.findall(text)]
        for index in indices:
            if not 0 <= index < len(robot.joints):
                raise StoreError(f"joint number {index} is not in robot {key}")
            joint, new = robot.joints[index], source[index]
            joint.position = list(new.position)
            joint.axis = list(new.axis)
            joint.limits = list(new.limits)
            joint.amount = new.amount
        try:
            robot.base = find_base(robot.joints)
        except ValueError as exc:
            raise StoreError(str(exc)) from exc
        self.save_robot(key, robot)
        return robot, indices

    # Paths

    def create_path(self, key: int, name: str, points: Sequence[PathPoint]) -> PathSet:
        """Store a new path under an unused key."""
        path_set = PathSet(name=name[:NAME_LENGTH], points=list(points))
        self._create(key, _path_record(path_set))
        return path_set

    def path(self, key: int) -> PathSet:
        """The path stored under ``key``."""
        record = self._read(key, _PATH)
        points = [PathPoint(**data) for data in record["points"]]
        return PathSet(name=record["name"], points=points)

    def save_path(self, key: int, path_set: PathSet) -> None:
        """Replace the path stored under ``key``."""
        self._write(key, _path_record(path_set))

    @contextmanager
    def editing_path(self, key: int) -> Iterator[PathSet]:
        """Yield the stored path and save it back when the block succeeds."""
        path_set = self.path(key)
        yield path_set
        self.save_path(key, path_set)

    def _path_from_file(self, key: int, path: str | Path, with_numbers: bool) -> PathSet:
        text = _read_source(path)
        try:
            points = parse_path(text, with_numbers=with_numbers)
        except ValueError as exc:
            raise StoreError(f"{path}: {exc}") from exc
        return self.create_path(key, _display_name(path), points)

    def load_path_file(self, key: int, path: str | Path) -> PathSet:
        """Create a path under ``key`` from a file of points."""
        return self._path_from_file(key, path, with_numbers=False)

    def reload_path_file(self, key: int, path: str | Path) -> PathSet:
        """Create a path under ``key`` from a file of numbered points."""
        return self._path_from_file(key, path, with_numbers=True)


def default_store() -> Store:
    """The store named by the environment, else one in the temporary directory."""
    directory = os.environ.get(STORE_ENV) or Path(tempfile.gettempdir()) / "hskine"
    return Store(directory)