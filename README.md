# hskine

Building blocks for the kinematics of robots described as trees of joints.
Each joint has a position, an axis direction, travel limits, links to its
upper and lower neighbours, cooperation parameters and a type (rotary,
linear or fixed). Inverse kinematics works cooperatively: each joint between
a task point and the base adds its own small correction toward the target
(`hskine.kinematics.inverse_step`). A single forward pass from the base
(`hskine.kinematics.forward`) then applies the corrections and moves every
joint above.

The package needs only the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## The store

Robots and paths are kept in a store under integer keys
(`hskine.store.Store`). Each key is one JSON file in the store directory, so
separate commands can share a robot or a path between runs. The directory is
picked as follows:

1. the `--store` option of `hskine`;
2. otherwise the `HSKINE_STORE` environment variable;
3. otherwise a `hskine` directory in the system temporary directory.

Creating data under a key that is already in use is an error.

## Command line

```
hskine [--store DIR] <command> ...
```

Store commands:

| command | arguments | effect |
|---|---|---|
| `load-robot` | `KEY FILE` | create a robot from a structure file |
| `reload-robot` | `KEY FILE` | create a robot from a saved model that includes displacements |
| `inherit` | `KEY FILE` | copy positions, axes, limits and displacements from a saved model into the stored robot; prints the joint numbers read |
| `save-robot` | `KEY` | print the stored robot as model text, displacements included |
| `load-path` | `KEY FILE` | create a path from a count and `x y z` points |
| `reload-path` | `KEY FILE` | create a path from a count and `joint x y z` points |
| `output-path` | `KEY` | print the stored path |

When a store command fails, it prints the reason to standard error, prints
`ERROR` and exits with status 1.

Tools that read standard input:

| command | effect |
|---|---|
| `rescalc` | summarise result lines `error time unit steps ...` (max, min, mean, sum, time per step) |
| `rescalc2` | the same, for lines that carry one extra leading field; times labelled in microseconds |
| `p2p` | distance for each group of four numbers (two 2D points) |
| `p2p-3d` | distance for each group of six numbers (two 3D points) |
| `costest` | print the acos/asin angle comparison for two fixed vectors |

For example:

```
hskine load-robot 1 arm.txt
hskine save-robot 1 > arm-saved.txt
printf '0 0 0 3 4 0\n' | hskine p2p-3d
```

`hskine-checkadj` reads a joint count and then an adjacency matrix from
standard input. Rows are lower joints, columns are upper joints, and `1`
marks a link. It prints the reachability matrix, then the base joint or
joints, then a warning if the links form a loop:

```
printf '3\n0 1 0\n0 0 1\n0 0 0\n' | hskine-checkadj
```

## Structure file format

A structure file starts with the joint count. One block follows for each
joint:

```
#<joint number>
<x> <y> <z>              position
<ax> <ay> <az>           axis direction
<min> <max>              travel limits
<upper joints...> -1
<lower joints...> -1
<kp0> <kp1>              cooperation parameters
<type>                   hexadecimal: 0x0 rotary, 0x1 linear, 0x2 fixed
```

Saved models (`save-robot`, `hskine.store.format_model`) add one more line
to each block: the accumulated displacement. `reload-robot` and `inherit`
read it back. The base joint is found by following the first lower link from
joint 0.

## Library use

Vectors and transforms work on plain sequences:

```python
from hskine.vector import cross, distance
from hskine.transform import rotation_matrix, transform_point

distance((0.0, 0.0, 0.0), (3.0, 4.0, 0.0))   # 5.0
cross((1.0, 0.0, 0.0), (0.0, 1.0, 0.0))      # (0.0, 0.0, 1.0)

t = rotation_matrix((0.0, 0.0, 1.0), (0.0, 0.0, 0.0), 3.1415927 / 2)
transform_point(t, (1.0, 0.0, 0.0))          # close to (0, 1, 0)
```

The steps of an inverse kinematics iteration on a stored robot:

```python
from hskine.kinematics import forward, inverse_step
from hskine.store import default_store

store = default_store()
store.load_robot_file(1, "arm.txt")

tip, target = 5, (10.0, 5.0, 20.0)
with store.editing_robot(1) as robot:
    joints = robot.joints
    for _ in range(100):
        number = joints[tip].lower[0] if joints[tip].lower else -1
        while number >= 0:
            inverse_step(joints, number, joints[tip].position, target)
            number = joints[number].lower[0] if joints[number].lower else -1
        forward(joints, robot.base)
```

`inverse_step` uses the joint's `kp[0]` as gain unless a positive `gain` is
given, and it clamps the step to the joint's limits.

Other modules:

- `hskine.modelfile`: `parse_model`, `load_model`, and `iter_segments` /
  `format_segments` for link line segments as plot data.
- `hskine.structure`: rebuild links from an adjacency matrix
  (`apply_adjacency`) or from `$base` / `#n` structure text
  (`apply_structure`); list them with `adjacency_matrix`, `format_adjacency`,
  `format_structure`, `format_links` and `format_details`.
- `hskine.reports`: joint positions, distances to given points, plot labels,
  accumulated displacements (rotary joints in degrees), translation of a
  whole robot, and `pose_plot`.
- `hskine.tracing`: `advance_trace` moves joint assignments one step along a
  stored path; `task_points` and `format_task_points` list the points that
  have a joint assigned.
- `hskine.adjacency`: `read_matrix`, `reachability`, `base_joints`,
  `has_loop`, `check_report`.
- `hskine.stats`: `summarize`, `format_summary`, `point_distances`,
  `angle_demo`.

## What the package does not do

There is no ready-made solver. No function or command runs the iteration
above until it converges, drives joints from a list of commanded angles,
traces a path point by point, or computes a grasp; you write that loop
yourself from `inverse_step` and `forward`. The structure, report and tracing
functions are library calls only, with no commands of their own. The
package does not draw plots. It only writes text data for an external
plotting program.