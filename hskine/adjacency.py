"""Checking an adjacency matrix of joint links for base joints and loops."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

MAX_ROUNDS = 101
"""Closure rounds tried before giving up on the reachability matrix."""

Matrix = list[list[int]]


def read_matrix(text: str) -> Matrix:
    """Read a size ``n`` and ``n*n`` integers; missing or unreadable ones are 0."""
    tokens = text.split()
    if not tokens:
        raise ValueError("no matrix size given")
    size = int(tokens[0])
    if size < 0:
        raise ValueError(f"negative matrix size: {size}")
    values: list[int] = []
    for token in tokens[1 : 1 + size * size]:
        try:
            values.append(int(token))
        except ValueError:
            break
    values.extend([0] * (size * size - len(values)))
    return [values[row * size : (row + 1) * size] for row in range(size)]


def _check_square(matrix: Sequence[Sequence[int]]) -> int:
    size = len(matrix)
    if any(len(row) != size for row in matrix):
        raise ValueError("adjacency matrix must be square")
    return size


def reachability(matrix: Sequence[Sequence[int]]) -> Matrix:
    """Reflexive transitive closure of the matrix, as 0/1 entries.

    Raises ValueError when the closure does not settle within the allowed
    number of rounds.
    """
    size = _check_square(matrix)
    step = [
        [1 if i == j or matrix[i][j] else 0 for j in range(size)] for i in range(size)
    ]
    reach = [row[:] for row in step]
    for _ in range(MAX_ROUNDS):
        grown = [
            [
                1 if any(reach[i][k] and step[k][j] for k in range(size)) else 0
                for j in range(size)
            ]
            for i in range(size)
        ]
        if grown == reach:
            return reach
        reach = grown
    raise ValueError("reachability matrix could not be built")


def base_joints(reach: Sequence[Sequence[int]]) -> list[int]:
    """Joints from which every joint can be reached."""
    return [i for i, row in enumerate(reach) if all(value == 1 for value in row)]


def has_loop(reach: Sequence[Sequence[int]]) -> bool:
    """Whether two distinct joints reach each other."""
    size = len(reach)
    return any(
        reach[i][j] == 1 and reach[j][i] == 1
        for i in range(size)
        for j in range(size)
        if i != j
    )


def check_report(matrix: Sequence[Sequence[int]]) -> str:
    """Report text: the reachability matrix, base joints and loop warning."""
    try:
        reach = reachability(matrix)
    except ValueError:
        return "可達行列が作られませんでした\n"
    lines = [f"{len(reach)}\n"]
    lines.extend("".join(f"{value} " for value in row) + "\n" for row in reach)
    bases = base_joints(reach)
    if len(bases) > 1:
        lines.append(f"baseJointが{len(bases)}個あります\n")
        lines.append("basejoint:" + "".join(f"{b}\t" for b in bases) + "\n")
    elif not bases:
        lines.append("baseJointがありません")
    else:
        lines.append(f"baseJoint:{bases[0]}")
    lines.append("\n")
    if has_loop(reach):
        lines.append("jointがループしています\n\n")
    return "".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    """Read an adjacency matrix from standard input and print the check."""
    parser = argparse.ArgumentParser(
        prog="CheckAdj",
        description="Check an adjacency matrix (rows: lower, columns: upper).",
    )
    parser.parse_args(argv)
    try:
        matrix = read_matrix(sys.stdin.read())
    except ValueError as exc:
        print(f"CheckAdj: {exc}", file=sys.stderr)
        return 1
    sys.stdout.write(check_report(matrix))
    return 0