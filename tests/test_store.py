import pytest

from hskine.model import Joint, PathPoint
from hskine.modelfile import parse_model
from hskine.store import (
    PathSet,
    Robot,
    Store,
    StoreError,
    default_store,
    find_base,
    format_model,
    format_path,
    parse_path,
)

MODEL = (
    "3\n"
    "#0\n0 0 0\n0 0 1\n-3 3\n1 -1\n-1\n0.5 0.25\n0x0\n"
    "#1\n1 0 0\n0 0 1\n-3 3\n2 -1\n0 -1\n0.5 0.25\n0x0\n"
    "#2\n2 0 0\n0 0 1\n-1 1\n-1\n1 -1\n0.5 0.25\n0x1\n"
)

SAVED = (
    "3\n"
    "#0\n0 0 0\n0 0 1\n-3 3\n1 -1\n-1\n0.5 0.25\n0x0\n0.5\n"
    "#1\n1 0 0\n0 0 1\n-3 3\n2 -1\n0 -1\n0.5 0.25\n0x0\n0.25\n"
    "#2\n2 0 0\n0 0 1\n-1 1\n-1\n1 -1\n0.5 0.25\n0x1\n-0.5\n"
)


@pytest.fixture
def store(tmp_path):
    return Store(tmp_path / "store")


@pytest.fixture
def model_file(tmp_path):
    path = tmp_path / "arm.txt"
    path.write_text(MODEL)
    return path


def test_find_base_follows_lower_links():
    joints = [Joint(lower=[2]), Joint(lower=[]), Joint(lower=[1])]
    assert find_base(joints) == 1


def test_find_base_of_no_joints_is_zero():
    assert find_base([]) == 0


def test_find_base_rejects_loop():
    with pytest.raises(ValueError):
        find_base([Joint(lower=[1]), Joint(lower=[0])])


def test_format_model_header():
    robot = Robot("arm", parse_model(MODEL))
    text = format_model(robot)
    assert text.startswith("3\n\n#0\n0.000000\t0.000000\t0.000000\n")
    assert "0x1\n" in text


def test_format_model_round_trip():
    joints = parse_model(SAVED, with_amount=True)
    again = parse_model(format_model(Robot("arm", joints)), with_amount=True)
    assert again == joints


def test_format_path_line():
    text = format_path(PathSet("p", [PathPoint(no=-2, p=[1.0, 2.0, 3.0])]))
    assert text == "1\n-2\t1.000000\t2.000000\t3.0000001.000000e+08\n"


def test_parse_path_marks_first_point():
    points = parse_path("3\n1 2 3\n4 5 6\n7 8 9\n")
    assert [p.no for p in points] == [-2, -1, -1]
    assert points[2].p == [7.0, 8.0, 9.0]


def test_parse_path_with_numbers():
    points = parse_path("2\n5 1 2 3\n-1 4 5 6\n", with_numbers=True)
    assert [p.no for p in points] == [5, -1]
    assert points[0].p == [1.0, 2.0, 3.0]


def test_parse_path_short_data_raises():
    with pytest.raises(ValueError):
        parse_path("2\n1 2 3\n4 5\n")


def test_create_and_read_robot(store):
    joints = parse_model(MODEL)
    created = store.create_robot(7, "arm", joints)
    loaded = store.robot(7)
    assert loaded == created
    assert loaded.joints[2].kind == 1


def test_create_robot_twice_raises(store):
    store.create_robot(1, "a", [Joint()])
    with pytest.raises(StoreError):
        store.create_robot(1, "b", [Joint()])


def test_missing_robot_raises(store):
    with pytest.raises(StoreError):
        store.robot(99)


def test_key_holding_path_is_not_a_robot(store):
    store.create_path(3, "p", [PathPoint()])
    with pytest.raises(StoreError):
        store.robot(3)


def test_save_robot_needs_existing_key(store):
    with pytest.raises(StoreError):
        store.save_robot(4, Robot("x", [Joint()]))


def test_editing_robot_saves_changes(store):
    store.create_robot(2, "arm", parse_model(MODEL))
    with store.editing_robot(2) as robot:
        robot.joints[1].amount = 1.5
    assert store.robot(2).joints[1].amount == 1.5


def test_editing_robot_discards_on_error(store):
    store.create_robot(2, "arm", parse_model(MODEL))
    with pytest.raises(RuntimeError):
        with store.editing_robot(2) as robot:
            robot.joints[1].amount = 1.5
            raise RuntimeError
    assert store.robot(2).joints[1].amount == 0.0


def test_load_robot_file_sets_name_and_base(store, model_file):
    robot = store.load_robot_file(5, model_file)
    assert robot.name == "arm.txt"
    assert robot.base == 0
    assert store.robot(5).joints[1].upper == [2]


def test_name_is_truncated(store):
    robot = store.create_robot(6, "n" * 100, [Joint()])
    assert len(robot.name) == 79


def test_load_missing_file_raises(store, tmp_path):
    with pytest.raises(StoreError):
        store.load_robot_file(5, tmp_path / "none.txt")


def test_reload_robot_file_reads_amounts(store, tmp_path):
    path = tmp_path / "saved.txt"
    path.write_text(SAVED)
    robot = store.reload_robot_file(8, path)
    assert [j.amount for j in robot.joints] == [0.5, 0.25, -0.5]


def test_reload_robot_file_rejects_bad_joint_number(store, tmp_path):
    path = tmp_path / "bad.txt"
    path.write_text(SAVED.replace("#2", "#3"))
    with pytest.raises(StoreError):
        store.reload_robot_file(8, path)


def test_inherit_keeps_links_and_takes_positions(store, model_file, tmp_path):
    store.load_robot_file(9, model_file)
    other = tmp_path / "other.txt"
    other.write_text(
        SAVED.replace("#1\n1 0 0", "#1\n4 5 6").replace("2 -1\n0 -1", "-1\n-1")
    )
    robot, indices = store.inherit_robot_file(9, other)
    assert indices == [0, 1, 2]
    assert robot.joints[1].position == [4.0, 5.0, 6.0]
    assert robot.joints[1].upper == [2]
    assert store.robot(9).joints[2].amount == -0.5


def test_path_files(store, tmp_path):
    plain = tmp_path / "route.txt"
    plain.write_text("2\n0 0 0\n1 1 1\n")
    loaded = store.load_path_file(10, plain)
    assert loaded.name == "route.txt"
    assert [p.no for p in store.path(10).points] == [-2, -1]

    numbered = tmp_path / "numbered.txt"
    numbered.write_text("2\n4 0 0 0\n3 1 1 1\n")
    store.reload_path_file(11, numbered)
    assert [p.no for p in store.path(11).points] == [4, 3]


def test_editing_path_saves(store):
    store.create_path(12, "p", parse_path("2\n0 0 0\n1 1 1\n"))
    with store.editing_path(12) as path_set:
        path_set.points[1].no = 6
    assert store.path(12).points[1].no == 6


def test_default_store_uses_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("HSKINE_STORE", str(tmp_path / "here"))
    assert default_store().directory == tmp_path / "here"