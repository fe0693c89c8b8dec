import random

import pytest

from yapbsp.errors import GeometryValueError
from yapbsp.euclidean.oned import OrientedPoint
from yapbsp.euclidean.path import LinePath, connect_all
from yapbsp.euclidean.twod import Line, segment_from_points
from yapbsp.euclidean.vector import Vector2D
from yapbsp.precision import EpsilonPrecision

PREC = EpsilonPrecision(1e-9)


def v(x, y):
    return Vector2D(x, y)


def loop(*points):
    points = list(points) + [points[0]]
    return [segment_from_points(a, b, PREC) for a, b in zip(points[:-1], points[1:])]


def same_points(actual, expected):
    return len(actual) == len(expected) and all(a.eq(e, PREC) for a, e in zip(actual, expected))


class TestLinePath:

    def test_closed_from_vertices(self):
        path = LinePath.from_vertices([v(0, 0), v(1, 0), v(1, 1), v(0, 1)], PREC, close=True)
        assert len(path) == 4
        assert path.is_closed()
        assert not path.is_infinite()
        assert path.size == pytest.approx(4.0)
        assert same_points(path.vertices, [v(0, 0), v(1, 0), v(1, 1), v(0, 1), v(0, 0)])

    def test_open(self):
        path = LinePath.from_vertices([v(0, 0), v(1, 0), v(1, 1)], PREC)
        assert not path.is_closed()
        assert path.start.eq(v(0, 0), PREC)
        assert path.end.eq(v(1, 1), PREC)
        rev = path.reverse()
        assert same_points(rev.vertices, [v(1, 1), v(1, 0), v(0, 0)])
        assert rev.size == pytest.approx(2.0)

    def test_empty(self):
        path = LinePath([])
        assert path.is_empty()
        assert path.start is None
        assert path.end is None
        assert not path.is_closed()
        assert path.vertices == []

    def test_repr(self):
        path = LinePath.from_vertices([v(0, 0), v(1, 0)], PREC)
        assert repr(path) == 'LinePath[vertices= [(0.0, 0.0), (1.0, 0.0)]]'

    def test_simplify_open(self):
        path = LinePath.from_vertices([v(0, 0), v(1, 0), v(2, 0), v(2, 1), v(2, 3)], PREC)
        simple = path.simplify()
        assert len(simple) == 2
        assert same_points(simple.vertices, [v(0, 0), v(2, 0), v(2, 3)])
        assert simple.size == pytest.approx(path.size)

    def test_simplify_closed_across_seam(self):
        path = LinePath.from_vertices([v(1, 0), v(2, 0), v(2, 2), v(0, 2), v(0, 0)], PREC, close=True)
        assert len(path) == 5
        simple = path.simplify()
        assert len(simple) == 4
        assert simple.is_closed()
        assert same_points(simple.vertices, [v(0, 0), v(2, 0), v(2, 2), v(0, 2), v(0, 0)])

    def test_simplify_infinite(self):
        line = Line.from_points(v(0, 0), v(1, 0), PREC)
        path = LinePath([line.reverse_ray(v(0, 0)),
                         segment_from_points(v(0, 0), v(2, 0), PREC),
                         segment_from_points(v(2, 0), v(3, 0), PREC)])
        simple = path.simplify()
        assert len(simple) == 1
        assert simple.start is None
        assert simple.end.eq(v(3, 0), PREC)
        assert simple.elements[0].kind == 'ReverseRay'

    def test_simplify_keeps_corners(self):
        path = LinePath.from_vertices([v(0, 0), v(1, 0), v(1, 1), v(0, 1)], PREC, close=True)
        assert len(path.simplify()) == 4


class TestConnectAll:

    def test_shuffled_square(self):
        pieces = loop(v(0, 0), v(1, 0), v(1, 1), v(0, 1))
        random.Random(7).shuffle(pieces)
        paths = connect_all(pieces)
        assert len(paths) == 1
        assert paths[0].is_closed()
        assert same_points(paths[0].vertices, [v(0, 0), v(1, 0), v(1, 1), v(0, 1), v(0, 0)])

    def test_empty(self):
        assert connect_all([]) == []

    def test_rejects_other_subsets(self):
        with pytest.raises(GeometryValueError):
            connect_all([OrientedPoint.create_positive_facing(0.0).span()])

    def test_open_chain(self):
        pieces = [segment_from_points(v(1, 0), v(2, 0), PREC),
                  segment_from_points(v(0, 0), v(1, 0), PREC)]
        paths = connect_all(pieces)
        assert len(paths) == 1
        assert not paths[0].is_closed()
        assert same_points(paths[0].vertices, [v(0, 0), v(1, 0), v(2, 0)])

    def test_infinite_chain(self):
        incoming = Line.from_points(v(-1, 0), v(0, 0), PREC).reverse_ray(v(0, 0))
        outgoing = Line.from_points(v(0, 0), v(0, 1), PREC).ray(v(0, 0))
        paths = connect_all([outgoing, incoming])
        assert len(paths) == 1
        path = paths[0]
        assert path.elements == [incoming, outgoing]
        assert path.is_infinite()
        assert path.start is None and path.end is None
        assert same_points(path.vertices, [v(0, 0)])

    def test_touching_loops_stay_apart(self):
        first = loop(v(0, 0), v(1, 0), v(1, 1), v(0, 1))
        second = loop(v(1, 1), v(2, 1), v(2, 2), v(1, 2))
        paths = connect_all(second + first)
        assert len(paths) == 2
        assert all(len(p) == 4 and p.is_closed() for p in paths)
        assert paths[0].start.eq(v(0, 0), PREC)
        assert paths[1].start.eq(v(1, 1), PREC)

    def test_sorted_with_infinite_first(self):
        square = loop(v(5, 5), v(6, 5), v(6, 6), v(5, 6))
        line = Line.from_points(v(0, 0), v(1, 0), PREC).span()
        paths = connect_all(square + [line])
        assert len(paths) == 2
        assert paths[0].is_infinite()
        assert paths[1].start.eq(v(5, 5), PREC)
