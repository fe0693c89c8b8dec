import math

import pytest

from yapbsp.errors import GeometryValueError
from yapbsp.euclidean.vector import Vector1D, Vector2D
from yapbsp.precision import EpsilonPrecision


class TestVector1D:
    """Points on the real line"""

    def test_arithmetic(self):
        a = Vector1D(2.0)
        b = Vector1D(-3.0)
        assert a + b == Vector1D(-1.0)
        assert a - b == Vector1D(5.0)
        assert a * 2 == Vector1D(4.0)
        assert 2 * a == Vector1D(4.0)
        assert -a == Vector1D(-2.0)
        assert a / 4 == Vector1D(0.5)

    def test_norm_and_normalize(self):
        assert Vector1D(-3.0).norm() == 3.0
        assert Vector1D(-3.0).normalize() == Vector1D(-1.0)
        with pytest.raises(GeometryValueError):
            Vector1D(0.0).normalize()
        with pytest.raises(GeometryValueError):
            Vector1D(math.inf).normalize()

    def test_predicates(self):
        assert Vector1D(math.nan).is_nan()
        assert Vector1D(math.inf).is_infinite()
        assert not Vector1D(math.nan).is_infinite()
        assert Vector1D(1.0).is_finite()

    def test_equality(self):
        p = EpsilonPrecision(1e-3)
        assert Vector1D(1.0).eq(Vector1D(1.0005), p)
        assert Vector1D(1.0) != Vector1D(1.0005)
        assert Vector1D(math.nan) == Vector1D(math.nan)
        assert hash(Vector1D(math.nan)) == hash(Vector1D(math.nan))
        assert Vector1D(0.0) == Vector1D(-0.0)
        assert hash(Vector1D(0.0)) == hash(Vector1D(-0.0))

    def test_repr(self):
        assert repr(Vector1D(2)) == '(2.0)'


class TestVector2D:
    """Points and vectors in the plane"""

    def test_arithmetic(self):
        a = Vector2D(1.0, 2.0)
        b = Vector2D(3.0, -1.0)
        assert a + b == Vector2D(4.0, 1.0)
        assert a - b == Vector2D(-2.0, 3.0)
        assert a * 3 == Vector2D(3.0, 6.0)
        assert -a == Vector2D(-1.0, -2.0)

    def test_products(self):
        a = Vector2D(1.0, 0.0)
        b = Vector2D(0.0, 1.0)
        assert a.dot(b) == 0.0
        assert a.cross(b) == 1.0
        assert b.cross(a) == -1.0

    def test_norm(self):
        assert Vector2D(3.0, 4.0).norm() == 5.0
        assert Vector2D(3.0, 4.0).norm_sq() == 25.0
        n = Vector2D(3.0, 4.0).normalize()
        assert n.x == pytest.approx(0.6)
        assert n.y == pytest.approx(0.8)
        with pytest.raises(GeometryValueError):
            Vector2D(0.0, 0.0).normalize()
        with pytest.raises(GeometryValueError):
            Vector2D(math.nan, 1.0).normalize()

    def test_orthogonal_turns_left(self):
        o = Vector2D(2.0, 0.0).orthogonal()
        assert o.x == pytest.approx(0.0)
        assert o.y == pytest.approx(1.0)

    def test_polar(self):
        v = Vector2D.of_polar(2.0, math.pi / 2)
        assert v.x == pytest.approx(0.0, abs=1e-12)
        assert v.y == pytest.approx(2.0)

    def test_distance_and_lerp(self):
        a = Vector2D(0.0, 0.0)
        b = Vector2D(3.0, 4.0)
        assert a.distance(b) == 5.0
        assert a.lerp(b, 0.5) == Vector2D(1.5, 2.0)

    def test_equality(self):
        p = EpsilonPrecision(1e-6)
        assert Vector2D(1.0, 2.0).eq(Vector2D(1.0, 2.0 + 1e-9), p)
        assert not Vector2D(1.0, 2.0).eq(Vector2D(1.0, 2.1), p)
        assert Vector2D(math.nan, 0.0) == Vector2D(0.0, math.nan)
        assert {Vector2D(1.0, 2.0), Vector2D(1.0, 2.0)} == {Vector2D(1.0, 2.0)}

    def test_from_array(self):
        assert Vector2D.from_array([1, 2]) == Vector2D(1.0, 2.0)
        with pytest.raises(GeometryValueError):
            Vector2D.from_array([1, 2, 3])

    def test_iteration(self):
        assert list(Vector2D(1.0, 2.0)) == [1.0, 2.0]
        assert Vector2D(1.0, 2.0).as_array().tolist() == [1.0, 2.0]
