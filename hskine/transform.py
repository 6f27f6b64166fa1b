"""Homogeneous 4x4 transforms used by the kinematics."""

from __future__ import annotations

import math
from collections.abc import Sequence

Matrix = tuple[tuple[float, float, float, float], ...]


def identity() -> Matrix:
    """The 4x4 identity transform."""
    return tuple(
        tuple(1.0 if i == j else 0.0 for j in range(4)) for i in range(4)
    )


def rotation_matrix(
    axis: Sequence[float], point: Sequence[float], angle: float
) -> Matrix:
    """Rotation by ``angle`` about ``axis`` through ``point`` (Rodrigues)."""
    a0, a1, a2 = axis
    p0, p1, p2 = point
    s = math.sin(angle)
    v = 1.0 - math.cos(angle)
    return (
        (
            (-a2 * a2 - a1 * a1) * v + 1.0,
            a0 * a1 * v - a2 * s,
            a0 * a2 * v + a1 * s,
            p1 * (a2 * s - a0 * a1 * v)
            + p2 * (-a1 * s - a0 * a2 * v)
            - (-a2 * a2 - a1 * a1) * p0 * v,
        ),
        (
            a2 * s + a0 * a1 * v,
            (-a2 * a2 - a0 * a0) * v + 1.0,
            a1 * a2 * v - a0 * s,
            p0 * (-a2 * s - a0 * a1 * v)
            + p2 * (a0 * s - a1 * a2 * v)
            - (-a2 * a2 - a0 * a0) * p1 * v,
        ),
        (
            a0 * a2 * v - a1 * s,
            a0 * s + a1 * a2 * v,
            (-a1 * a1 - a0 * a0) * v + 1.0,
            p0 * (a1 * s - a0 * a2 * v)
            + p1 * (-a0 * s - a1 * a2 * v)
            - (-a1 * a1 - a0 * a0) * p2 * v,
        ),
        (0.0, 0.0, 0.0, 1.0),
    )


def translation_matrix(axis: Sequence[float], amount: float) -> Matrix:
    """Translation by ``amount`` along ``axis``."""
    return offset_matrix((axis[0] * amount, axis[1] * amount, axis[2] * amount))


def offset_matrix(offset: Sequence[float]) -> Matrix:
    """Translation by the vector ``offset``."""
    return (
        (1.0, 0.0, 0.0, offset[0]),
        (0.0, 1.0, 0.0, offset[1]),
        (0.0, 0.0, 1.0, offset[2]),
        (0.0, 0.0, 0.0, 1.0),
    )


def matmul(a: Matrix, b: Matrix) -> Matrix:
    """Matrix product ``a . b``."""
    columns = list(zip(*b))
    return tuple(
        tuple(sum(x * y for x, y in zip(row, col)) for col in columns) for row in a
    )


def _apply(t: Matrix, v: Sequence[float], w: float) -> tuple[float, float, float]:
    x, y, z = (
        row[0] * v[0] + row[1] * v[1] + row[2] * v[2] + row[3] * w for row in t[:3]
    )
    return (x, y, z)


def transform_point(t: Matrix, p: Sequence[float]) -> tuple[float, float, float]:
    """Apply ``t`` to the position ``p``."""
    return _apply(t, p, 1.0)


def transform_axis(t: Matrix, a: Sequence[float]) -> tuple[float, float, float]:
    """Apply ``t`` to the direction ``a`` (translation ignored)."""
    return _apply(t, a, 0.0)