"""Command line for loading, saving and listing stored robots and paths."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from .store import Store, StoreError, default_store, format_model, format_path
from .stats import angle_demo, format_summary, point_distances, summarize


def build_parser() -> argparse.ArgumentParser:
    """Parser for all subcommands."""
    parser = argparse.ArgumentParser(
        prog="hskine", description="Kinematics model store and tools."
    )
    parser.add_argument("--store", help="store directory (default: environment)")
    sub = parser.add_subparsers(dest="command", required=True)

    for name, text in (
        ("load-robot", "create a robot from a model file"),
        ("reload-robot", "create a robot from a saved model with displacements"),
        ("inherit", "take positions and displacements from a saved model"),
        ("load-path", "create a path from a file of points"),
        ("reload-path", "create a path from a file of numbered points"),
    ):
        cmd = sub.add_parser(name, help=text)
        cmd.add_argument("key", type=int)
        cmd.add_argument("file")

    for name, text in (
        ("save-robot", "print the stored robot as model text"),
        ("output-path", "print the stored path"),
    ):
        cmd = sub.add_parser(name, help=text)
        cmd.add_argument("key", type=int)

    sub.add_parser("rescalc", help="summarise solver result lines from stdin")
    sub.add_parser("rescalc2", help="summarise extended result lines from stdin")
    sub.add_parser("p2p", help="distances of 2D point pairs from stdin")
    sub.add_parser("p2p-3d", help="distances of 3D point pairs from stdin")
    sub.add_parser("costest", help="print the angle comparison example")
    return parser


def _robot_message(name: str, key: int) -> str:
    return f"Rbot data definition Success!!\n Robot Name = {name} Key = {key} \n"


def _path_message(name: str, key: int) -> str:
    return f"Path data definition Success!!\n Robot Name = {name} Key = {key} \n"


def _run_store(args: argparse.Namespace, store: Store) -> None:
    out = sys.stdout
    command = args.command
    if command == "load-robot":
        robot = store.load_robot_file(args.key, args.file)
        out.write(_robot_message(robot.name, args.key))
    elif command == "reload-robot":
        robot = store.reload_robot_file(args.key, args.file)
        out.write(_robot_message(robot.name, args.key))
    elif command == "inherit":
        robot, indices = store.inherit_robot_file(args.key, args.file)
        out.write("".join(f"{index}\n" for index in indices))
        out.write(_robot_message(robot.name, args.key))
    elif command == "load-path":
        path_set = store.load_path_file(args.key, args.file)
        out.write(_path_message(path_set.name, args.key))
    elif command == "reload-path":
        path_set = store.reload_path_file(args.key, args.file)
        out.write(_path_message(path_set.name, args.key))
    elif command == "save-robot":
        out.write(format_model(store.robot(args.key)))
    elif command == "output-path":
        out.write(format_path(store.path(args.key)))


def _run_tool(command: str) -> None:
    out = sys.stdout
    if command == "rescalc":
        out.write(format_summary(summarize(sys.stdin, extended=False), "sec"))
    elif command == "rescalc2":
        out.write(format_summary(summarize(sys.stdin, extended=True), "microsec"))
    elif command in ("p2p", "p2p-3d"):
        dims = 2 if command == "p2p" else 3
        out.write("".join(f"{d:e}\n" for d in point_distances(sys.stdin.read(), dims)))
    elif command == "costest":
        out.write(angle_demo())


def main(argv: Sequence[str] | None = None) -> int:
    """Run one subcommand; returns the exit status."""
    args = build_parser().parse_args(argv)
    if args.command in ("rescalc", "rescalc2", "p2p", "p2p-3d", "costest"):
        try:
            _run_tool(args.command)
        except ValueError as exc:
            print(f"hskine: {exc}", file=sys.stderr)
            return 1
        return 0
    store = Store(args.store) if args.store else default_store()
    try:
        _run_store(args, store)
    except StoreError as exc:
        print(f"hskine: {exc}", file=sys.stderr)
        print("ERROR")
        return 1
    return 0