import math

import pytest

from hskine import vector


def test_add_then_sub_round_trip():
    a = (1.5, -2.0, 3.25)
    b = (0.5, 4.0, -1.0)
    assert vector.sub(vector.add(a, b), b) == pytest.approx(a)


def test_cross_is_orthogonal():
    a = (1.0, 2.0, 3.0)
    b = (-4.0, 0.5, 2.0)
    c = vector.cross(a, b)
    assert vector.inner(c, a) == pytest.approx(0.0)
    assert vector.inner(c, b) == pytest.approx(0.0)


def test_cross_of_unit_axes():
    assert vector.cross((1, 0, 0), (0, 1, 0)) == (0, 0, 1)


def test_distance_symmetric_and_zero():
    a = (1.0, 2.0, 3.0)
    b = (4.0, 6.0, 3.0)
    assert vector.distance(a, b) == vector.distance(b, a)
    assert vector.distance(a, a) == 0.0
    assert vector.distance(a, b) == pytest.approx(math.hypot(3.0, 4.0))


def test_normalized_has_unit_length():
    n = vector.normalized((3.0, -7.0, 2.0))
    assert math.sqrt(vector.inner(n, n)) == pytest.approx(1.0)


def test_normalized_zero_vector():
    assert vector.normalized((0.0, 0.0, 0.0)) == (0.0, 0.0, 0.0)


def test_scale():
    assert vector.scale(2.0, (1.0, -1.5, 0.0)) == (2.0, -3.0, 0.0)


def test_rotation_component_quarter_turn():
    value = vector.rotation_component((0, 0, 1), (0, 0, 0), (0, 1, 0), (1, 0, 0))
    assert value == pytest.approx(math.pi / 2)


def test_rotation_component_sign_follows_axis():
    forward = vector.rotation_component((0, 0, 1), (0, 0, 0), (0, 1, 0), (1, 0, 0))
    backward = vector.rotation_component((0, 0, -1), (0, 0, 0), (0, 1, 0), (1, 0, 0))
    assert backward == pytest.approx(-forward)


def test_rotation_component_collinear_is_zero():
    assert vector.rotation_component((0, 0, 1), (0, 0, 0), (2, 0, 0), (1, 0, 0)) == 0.0


def test_translation_component_projects_on_axis():
    target = (5.0, 7.0, 0.0)
    current = (2.0, 1.0, 0.0)
    along_x = vector.translation_component((1, 0, 0), target, current)
    assert along_x == pytest.approx(target[0] - current[0])
    assert vector.translation_component((0, 0, 1), target, current) == 0.0


def test_orientation_component():
    value = vector.orientation_component((0, 0, 1), (0, 1, 0), (1, 0, 0))
    assert value == pytest.approx(math.pi / 2)
    assert vector.orientation_component((0, 0, 1), (1, 0, 0), (1, 0, 0)) == 0.0


def test_rotate_keeps_length_and_axis_part():
    axis = (0.0, 0.0, 1.0)
    x = (1.0, 2.0, 3.0)
    r = vector.rotate(axis, 0.7, x)
    assert vector.inner(r, r) == pytest.approx(vector.inner(x, x))
    assert r[2] == pytest.approx(x[2])


def test_rotate_quarter_turn():
    r = vector.rotate((0, 0, 1), math.pi / 2, (1, 0, 0))
    assert r == pytest.approx((0, 1, 0), abs=1e-12)


def test_rotate_zero_axis_raises():
    with pytest.raises(ValueError):
        vector.rotate((0, 0, 0), 1.0, (1, 0, 0))


def test_format_vector():
    assert vector.format_vector((1, -2.5, 0)) == "(1.000000,-2.500000,0.000000)"