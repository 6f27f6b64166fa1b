"""Reading robot model text and writing link segments for plotting."""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from pathlib import Path

from .model import MAX_LINKS, Joint

_WORD = re.compile(r"\s*(\S+)")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class _Stream:
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
            raise ValueError("unexpected end of model data")
        self._pos = match.end()
        return match.group(1)

    def floats(self, count: int) -> list[float]:
        return [float(self.word()) for _ in range(count)]

    def links(self) -> list[int]:
        found = []
        for _ in range(MAX_LINKS):
            value = int(self.word())
            if value == -1:
                break
            found.append(value)
        return found


def parse_model(text: str, with_amount: bool = False) -> list[Joint]:
    """Build the joints described by model text.

    The text starts with the joint count; each ``#n`` line is followed by
    position, axis, limits, upper links and lower links (each ended by -1),
    two coordination parameters and a hexadecimal joint type, and, when
    ``with_amount`` is set, the accumulated displacement.
    """
    stream = _Stream(text)
    count = int(stream.word())
    if count < 0:
        raise ValueError(f"negative joint count: {count}")
    joints = [Joint() for _ in range(count)]
    while (line := stream.line()) is not None:
        if not line.startswith("#"):
            continue
        match = _LEADING_INT.match(line, 1)
        if match is None:
            raise ValueError(f"bad joint header: {line.rstrip()!r}")
        index = int(match.group(1))
        if not 0 <= index < count:
            raise ValueError(f"joint number {index} out of range 0..{count - 1}")
        joint = joints[index]
        joint.position = stream.floats(3)
        joint.axis = stream.floats(3)
        joint.limits = stream.floats(2)
        joint.upper = stream.links()
        joint.lower = stream.links()
        joint.kp = stream.floats(2)
        joint.kind = int(stream.word(), 16)
        if with_amount:
            joint.amount = float(stream.word())
    return joints


def load_model(path: str | Path) -> list[Joint]:
    """Read a model file."""
    return parse_model(Path(path).read_text())


def iter_segments(
    joints: Sequence[Joint], index: int
) -> Iterator[tuple[list[float], list[float]]]:
    """Yield (lower end, upper end) of every link above ``index``, depth first."""
    yield from _segments(joints, index)


def _segments(
    joints: Sequence[Joint], index: int
) -> Iterator[tuple[list[float], list[float]]]:
    stack = [(index, upper) for upper in reversed(joints[index].upper)]
    while stack:
        parent, child = stack.pop()
        yield joints[parent].position, joints[child].position
        stack.extend((child, upper) for upper in reversed(joints[child].upper))


def format_segments(joints: Sequence[Joint], index: int) -> str:
    """Link segments as plot data: two coordinate lines, then two blank lines."""
    blocks = []
    for start, end in _segments(joints, index):
        blocks.append(
            f"{start[0]:.6f}\t{start[1]:.6f}\t{start[2]:.6f}\n"
            f"{end[0]:.6f}\t{end[1]:.6f}\t{end[2]:.6f}\n\n\n"
        )
    return "".join(blocks)