"""Summaries of solver results and small point-distance calculations."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from .model import PI
from .vector import cross, format_vector, inner


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding towards zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


@dataclass
class Summary:
    """Extremes and sums of error, time and step count over result lines."""

    lines: int
    max_error: float
    min_error: float
    sum_error: float
    max_time: float
    min_time: float
    sum_time: float
    max_steps: int
    min_steps: int
    sum_steps: int

    @property
    def mean_error(self) -> float:
        return self.sum_error / self.lines

    @property
    def mean_time(self) -> float:
        return self.sum_time / self.lines

    @property
    def mean_steps(self) -> int:
        """Mean step count, truncated towards zero."""
        return _trunc_div(self.sum_steps, self.lines)

    @property
    def time_per_step(self) -> float:
        if self.sum_steps:
            return self.sum_time / self.sum_steps
        if self.sum_time:
            return math.copysign(math.inf, self.sum_time)
        return math.nan


def point_distances(text: str, dims: int = 3) -> list[float]:
    """Distances between point pairs given as ``2 * dims`` numbers per pair.

    A trailing incomplete group of numbers is ignored.
    """
    if dims < 1:
        raise ValueError(f"dimension must be positive: {dims}")
    values = [float(token) for token in text.split()]
    group = 2 * dims
    result = []
    for start in range(0, len(values) - group + 1, group):
        first = values[start : start + dims]
        second = values[start + dims : start + group]
        result.append(math.sqrt(sum((b - a) ** 2.0 for a, b in zip(first, second))))
    return result


def _parse_line(line: str, extended: bool) -> tuple[float, float, int]:
    tokens = line.split()
    offset = 1 if extended else 0
    try:
        error = float(tokens[offset])
        seconds = float(tokens[offset + 1])
        steps = int(tokens[offset + 3])
    except (IndexError, ValueError):
        raise ValueError(f"unreadable result line: {line.rstrip()!r}") from None
    return error, seconds, steps


def summarize(lines: Iterable[str], extended: bool = False) -> Summary:
    """Summarise result lines of the form ``error time unit steps ...``.

    With ``extended`` every line carries one extra leading field. Blank lines
    are skipped; no result lines at all is an error.
    """
    summary: Summary | None = None
    for line in lines:
        if not line.strip():
            continue
        error, seconds, steps = _parse_line(line, extended)
        if summary is None:
            summary = Summary(1, error, error, error, seconds, seconds, seconds,
                              steps, steps, steps)
            continue
        summary.lines += 1
        summary.sum_error += error
        summary.sum_time += seconds
        summary.sum_steps += steps
        summary.min_error = min(summary.min_error, error)
        summary.max_error = max(summary.max_error, error)
        summary.min_time = min(summary.min_time, seconds)
        summary.max_time = max(summary.max_time, seconds)
        summary.min_steps = min(summary.min_steps, steps)
        summary.max_steps = max(summary.max_steps, steps)
    if summary is None:
        raise ValueError("no result lines to summarise")
    return summary


def format_summary(summary: Summary, unit: str = "sec") -> str:
    """Table of maximum, minimum, mean and sum, then time per step."""
    return (
        f"\tError\tTime({unit})\tCount\n"
        f"Max\t{summary.max_error:e}\t{summary.max_time:.6f}\t{summary.max_steps}\n"
        f"Min\t{summary.min_error:e}\t{summary.min_time:.6f}\t{summary.min_steps}\n"
        f"Ave\t{summary.mean_error:e}\t{summary.mean_time:.6f}\t{summary.mean_steps}\n"
        f"Sum\t{summary.sum_error:e}\t{summary.sum_time:.6f}\t{summary.sum_steps}\n"
        f"Time/Calc({unit})\t{summary.time_per_step:.6f}\n"
    )


def angle_demo() -> str:
    """Compare acos- and asin-based angles between two fixed vectors."""
    na = (1.0, 0.0, 0.0)
    ra = (1.0, -10.0, 0.0)
    axis = (0.0, 0.0, 1.0)
    c = cross(na, ra)
    cs = math.sqrt(inner(c, c))
    d = (c[0] / cs, c[1] / cs, c[2] / cs)
    bb = inner(d, axis)
    lengths = math.sqrt(inner(na, na)) * math.sqrt(inner(ra, ra))
    out = [f"Cross:{format_vector(c)}\n"]
    for angle in (math.acos(inner(na, ra) / lengths), math.asin(cs / lengths)):
        out.append(f"aas = {angle:e} {angle * 180.0 / PI:.6f} BB={bb:e} cs= {cs:e}\n")
    return "".join(out)