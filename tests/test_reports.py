import math

import pytest

from hskine.model import Joint, JointType
from hskine.modelfile import format_segments
from hskine.reports import (
    displacement_line,
    distance_lines,
    joint_position_lines,
    label_lines,
    pose_plot,
    position_lines,
    translate,
)
from hskine.store import Robot
from hskine.vector import add


def _chain(n):
    joints = [
        Joint(
            position=[float(i), 2.0 * i, 0.5],
            axis=[0.0, 0.0, 1.0],
            upper=[i + 1] if i < n - 1 else [],
            lower=[i - 1] if i > 0 else [],
        )
        for i in range(n)
    ]
    return Robot(name="arm", joints=joints, base=0)


def test_position_lines_report_and_mark_joints():
    robot = _chain(3)
    lines = position_lines(robot, [2, 0])
    for line, number in zip(lines, [2, 0]):
        fields = line.split("\t")
        assert int(fields[0]) == number
        assert [float(f) for f in fields[1:]] == robot.joints[number].position
    assert robot.joints[2].dt_count == 1
    assert robot.joints[1].dt_count == 0


def test_position_lines_reject_missing_joint():
    with pytest.raises(IndexError):
        position_lines(_chain(2), [-1])


def test_distance_lines():
    robot = _chain(2)
    robot.joints[0].position = [0.0, 0.0, 0.0]
    (line,) = distance_lines(robot, [(0, (3.0, 4.0, 0.0))])
    fields = line.split("\t")
    assert int(fields[0]) == 0
    assert float(fields[1]) == pytest.approx(5.0)
    assert [float(f) for f in fields[2:5]] == [3.0, 4.0, 0.0]
    assert [float(f) for f in fields[5:8]] == [0.0, 0.0, 0.0]
    assert robot.joints[0].dt_count == 1


def test_label_lines():
    robot = _chain(2)
    robot.joints[0].position = [0.0, 0.0, 0.0]
    lines = label_lines(robot)
    assert len(lines) == 2
    assert lines[0] == "set label 1 '0' at 0.000000,0.000000,0.000000 center"


def test_displacement_line_skips_stopped_joints():
    robot = _chain(3)
    robot.joints[0].amount = 3.1415
    robot.joints[1].kind = JointType.LINEAR
    robot.joints[1].amount = 2.5
    robot.joints[2].kind = JointType.STOP
    robot.joints[2].amount = 1.0
    values = [float(f) for f in displacement_line(robot).split()]
    assert values == [pytest.approx(180.0), 2.5]
    indexed = displacement_line(robot, indexed=True).split()
    assert indexed[0] == "0"
    assert indexed[2] == "1"
    assert len(indexed) == 4


def test_translate_moves_every_joint():
    robot = _chain(3)
    before = [list(j.position) for j in robot.joints]
    offset = (1.5, -2.0, 0.25)
    translate(robot, offset)
    for old, joint in zip(before, robot.joints):
        assert joint.position == pytest.approx(list(add(old, offset)))


def test_joint_position_lines_notation():
    robot = _chain(3)
    fixed = joint_position_lines(robot, [1])[0].split("\t")
    sci = joint_position_lines(robot, [1], scientific=True)[0].split("\t")
    assert all("e" in f for f in sci)
    assert not any("e" in f for f in fixed)
    assert [float(f) for f in sci] == robot.joints[1].position
    assert [float(f) for f in fixed] == robot.joints[1].position


def test_pose_plot_starts_at_base():
    robot = _chain(3)
    robot.base = 1
    text = pose_plot(robot)
    assert text == format_segments(robot.joints, 1)
    lines = [line for line in text.splitlines() if line]
    assert len(lines) == 2
    assert [float(f) for f in lines[1].split("\t")] == robot.joints[2].position
    assert not math.isnan(float(lines[0].split("\t")[0]))