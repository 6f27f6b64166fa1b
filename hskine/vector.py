"""Three-component vector helpers and local kinematic error terms."""

from __future__ import annotations

import math
from collections.abc import Sequence

Vector = tuple[float, float, float]

_DEGENERATE_NORM = 0.000000000001
_COLLINEAR = 10e-10


def add(a: Sequence[float], b: Sequence[float]) -> Vector:
    """Sum of two vectors."""
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def sub(a: Sequence[float], b: Sequence[float]) -> Vector:
    """Difference ``a - b``."""
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def cross(a: Sequence[float], b: Sequence[float]) -> Vector:
    """Cross product ``a x b``."""
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def inner(a: Sequence[float], b: Sequence[float]) -> float:
    """Dot product."""
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between two points."""
    d = sub(a, b)
    return math.sqrt(inner(d, d))


def normalized(a: Sequence[float]) -> Vector:
    """Unit vector along ``a``; the zero vector when ``a`` is (nearly) zero."""
    length = math.sqrt(inner(a, a))
    if length < _DEGENERATE_NORM:
        return (0.0, 0.0, 0.0)
    return (a[0] / length, a[1] / length, a[2] / length)


def scale(s: float, v: Sequence[float]) -> Vector:
    """Vector ``v`` multiplied by the scalar ``s``."""
    return (s * v[0], s * v[1], s * v[2])


def rotation_component(
    axis: Sequence[float],
    origin: Sequence[float],
    target: Sequence[float],
    current: Sequence[float],
) -> float:
    """Angle between current and target seen from ``origin``, along ``axis``."""
    ra = sub(target, origin)
    na = sub(current, origin)
    c = cross(na, ra)
    cs = math.sqrt(inner(c, c))
    if cs < _COLLINEAR:
        return 0.0
    ratio = inner((c[0] / cs, c[1] / cs, c[2] / cs), axis)
    na_len = math.sqrt(inner(na, na))
    ra_len = math.sqrt(inner(ra, ra))
    if inner(na, ra) < 0.0:
        ff = cs / (na_len * ra_len)
        angle = 0.0 if abs(ff) > 1.0 else math.asin(ff)
    else:
        ff = inner(na, ra) / (na_len * ra_len)
        angle = 0.0 if abs(ff) > 1.0 else math.acos(ff)
    return angle * ratio


def translation_component(
    axis: Sequence[float], target: Sequence[float], current: Sequence[float]
) -> float:
    """Offset from current to target projected on ``axis``."""
    return inner(sub(target, current), axis)


def orientation_component(
    axis: Sequence[float], target: Sequence[float], current: Sequence[float]
) -> float:
    """Deviation of orientation ``current`` from ``target`` along ``axis``."""
    c = cross(current, target)
    s = math.sqrt(inner(c, c))
    angle = math.asin(s) if s <= 1.0 else math.nan
    return inner(scale(angle, axis), c)


def rotate(axis: Sequence[float], angle: float, x: Sequence[float]) -> Vector:
    """Rotate ``x`` about ``axis`` (through the origin) by ``angle``."""
    if inner(axis, axis) <= 0.0:
        raise ValueError("rotation axis must not be zero")
    turned = cross(axis, x)
    along = inner(x, axis)
    sq = math.sin(angle)
    cq = math.cos(angle)
    result = []
    for a_i, x_i, t_i in zip(axis, x, turned):
        b_i = along * a_i
        result.append(b_i + cq * (x_i - b_i) + sq * t_i)
    return (result[0], result[1], result[2])


def format_vector(a: Sequence[float]) -> str:
    """Text form ``(x,y,z)`` with six decimals."""
    return f"({a[0]:.6f},{a[1]:.6f},{a[2]:.6f})"