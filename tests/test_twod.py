import math

import pytest

from yapbsp.errors import GeometryValueError
from yapbsp.euclidean.twod import Line, LineConvexSubset, segment_from_points
from yapbsp.euclidean.vector import Vector2D
from yapbsp.euclidean.xform import AffineTransform2D
from yapbsp.partition import HyperplaneLocation, RegionLocation, SplitLocation
from yapbsp.precision import EpsilonPrecision

PREC = EpsilonPrecision(1e-9)


def v(x, y):
    return Vector2D(x, y)


def close(a, b):
    return a is not None and a.eq(b, PREC)


X_AXIS = Line.from_points(v(0, 0), v(1, 0), PREC)
Y_ONE = Line.from_points(v(0, 1), v(1, 1), PREC)
X_ONE = Line.from_points(v(1, -1), v(1, 1), PREC)


class TestLine:
    """Oriented lines: the left side of the direction is the minus side"""

    def test_from_points(self):
        assert close(Y_ONE.direction, v(1, 0))
        assert close(Y_ONE.origin, v(0, 1))
        assert Y_ONE.origin_offset == pytest.approx(-1.0)
        assert close(X_ONE.origin, v(1, 0))

    def test_from_point_and_angle(self):
        line = Line.from_point_and_angle(v(2, 0), 0.5 * math.pi, PREC)
        assert close(line.direction, v(0, 1))
        assert close(line.origin, v(2, 0))
        assert line.angle == pytest.approx(0.5 * math.pi)
        assert X_AXIS.reverse().angle == pytest.approx(math.pi)
        assert Line.from_points(v(0, 0), v(0, -1)).angle == pytest.approx(1.5 * math.pi)

    @pytest.mark.parametrize('direction', [v(0, 0), v(1e-12, 0), v(math.nan, 1), v(math.inf, 0)])
    def test_bad_direction(self, direction):
        with pytest.raises(GeometryValueError, match='Line direction cannot be zero'):
            Line.from_point_and_direction(v(0, 0), direction, PREC)

    def test_offset_and_classify(self):
        assert Y_ONE.offset(v(5, 3)) == pytest.approx(-2.0)
        assert Y_ONE.offset(v(5, -1)) == pytest.approx(2.0)
        assert Y_ONE.classify(v(0, 2)) == HyperplaneLocation.MINUS
        assert Y_ONE.classify(v(0, 0)) == HyperplaneLocation.PLUS
        assert Y_ONE.classify(v(7, 1)) == HyperplaneLocation.ON
        assert Y_ONE.reverse().classify(v(0, 2)) == HyperplaneLocation.PLUS

    def test_positions(self):
        assert Y_ONE.abscissa(v(3, 1)) == pytest.approx(3.0)
        assert close(Y_ONE.to_space(3.0), v(3, 1))
        assert close(Y_ONE.project(v(3, 5)), v(3, 1))
        assert Y_ONE.distance(v(3, 5)) == pytest.approx(4.0)

    def test_orientation(self):
        assert X_AXIS.similar_orientation(Y_ONE)
        assert not X_AXIS.similar_orientation(Y_ONE.reverse())
        assert X_AXIS.is_parallel(Y_ONE.reverse())
        assert not X_AXIS.is_parallel(X_ONE)

    def test_intersection(self):
        assert close(Y_ONE.intersection(X_ONE), v(1, 1))
        diagonal = Line.from_points(v(0, 0), v(1, 1), PREC)
        assert close(diagonal.intersection(Y_ONE), v(1, 1))
        assert X_AXIS.intersection(Y_ONE) is None

    def test_nearly_parallel_intersection(self):
        shallow = Line.from_point_and_direction(v(0, 1), v(1, 1e-6), PREC)
        point = X_AXIS.intersection(shallow)
        assert point.x == pytest.approx(-1e6, rel=1e-9)
        assert point.y == pytest.approx(0.0, abs=1e-9)

    def test_transform(self):
        moved = X_AXIS.transform(AffineTransform2D.create_translation(1.0, 2.0))
        assert close(moved.origin, v(0, 2))
        assert close(moved.direction, v(1, 0))

        reflected = Y_ONE.transform(AffineTransform2D.create_scale(1.0, -1.0))
        assert close(reflected.direction, v(-1, 0))
        # the minus side of the image is the image of the minus side
        assert reflected.classify(v(0, -2)) == HyperplaneLocation.MINUS

    def test_eq(self):
        nearly = Line.from_points(v(0, 1 + 1e-12), v(1, 1 + 1e-12), PREC)
        assert Y_ONE.eq(nearly, PREC)
        assert not Y_ONE.eq(Y_ONE.reverse(), PREC)
        assert Y_ONE == Line.from_points(v(0, 1), v(1, 1), PREC)


class TestLineConvexSubset:

    @pytest.fixture
    def segment(self):
        return segment_from_points(v(0, 0), v(2, 0), PREC)

    def test_segment(self, segment):
        assert segment.kind == 'Segment'
        assert segment.size == pytest.approx(2.0)
        assert close(segment.centroid, v(1, 0))
        assert close(segment.start_point, v(0, 0))
        assert close(segment.end_point, v(2, 0))
        assert segment.is_finite()
        assert not segment.is_full()
        assert not segment.is_empty()

    def test_kinds(self):
        ray = X_AXIS.ray(v(1, 0))
        assert ray.kind == 'Ray'
        assert ray.size == math.inf
        assert ray.centroid is None
        assert ray.end_point is None
        assert ray.is_infinite()
        reverse_ray = X_AXIS.reverse_ray(v(1, 0))
        assert reverse_ray.kind == 'ReverseRay'
        assert reverse_ray.start_point is None
        span = X_AXIS.span()
        assert span.kind == 'LineSpanningSubset'
        assert span.is_full()

    @pytest.mark.parametrize('start,end', [(math.nan, 1.0), (0.0, math.nan),
                                           (math.inf, math.inf), (-math.inf, -math.inf)])
    def test_invalid(self, start, end):
        with pytest.raises(GeometryValueError, match='Invalid line subset interval'):
            LineConvexSubset(X_AXIS, start, end)

    def test_bounds_sorted(self):
        subset = X_AXIS.subset(3.0, 1.0)
        assert (subset.start, subset.end) == (1.0, 3.0)

    def test_classify(self, segment):
        assert segment.classify(v(1, 0)) == RegionLocation.INSIDE
        assert segment.classify(v(0, 0)) == RegionLocation.BOUNDARY
        assert segment.classify(v(2, 0)) == RegionLocation.BOUNDARY
        assert segment.classify(v(3, 0)) == RegionLocation.OUTSIDE
        assert segment.classify(v(1, 1)) == RegionLocation.OUTSIDE
        assert segment.contains(v(0.5, 0))

    def test_closest(self, segment):
        assert close(segment.closest(v(5, 3)), v(2, 0))
        assert close(segment.closest(v(-1, -1)), v(0, 0))
        assert close(segment.closest(v(1.5, 4)), v(1.5, 0))

    def test_split_crossing(self, segment):
        split = segment.split(X_ONE)
        assert split.location == SplitLocation.BOTH
        assert close(split.minus.start_point, v(0, 0))
        assert close(split.minus.end_point, v(1, 0))
        assert close(split.plus.start_point, v(1, 0))
        assert close(split.plus.end_point, v(2, 0))

        split = segment.split(X_ONE.reverse())
        assert close(split.minus.start_point, v(1, 0))
        assert close(split.plus.end_point, v(1, 0))

    def test_split_one_side(self, segment):
        assert segment.split(Line.from_points(v(5, 0), v(5, 1), PREC)).location == SplitLocation.MINUS
        assert segment.split(Line.from_points(v(-1, 0), v(-1, 1), PREC)).location == SplitLocation.PLUS
        # touching at an end point is not a crossing
        split = segment.split(Line.from_points(v(2, 0), v(2, 1), PREC))
        assert split.location == SplitLocation.MINUS
        assert split.minus is segment

    def test_split_parallel(self, segment):
        assert segment.split(Y_ONE).location == SplitLocation.PLUS
        assert segment.split(Y_ONE.reverse()).location == SplitLocation.MINUS
        assert segment.split(X_AXIS).location == SplitLocation.NEITHER
        assert segment.split(X_AXIS.reverse()).location == SplitLocation.NEITHER

    def test_reverse(self, segment):
        rev = segment.reverse()
        assert close(rev.start_point, v(2, 0))
        assert close(rev.end_point, v(0, 0))
        assert close(rev.line.direction, v(-1, 0))
        assert rev.size == pytest.approx(2.0)

    def test_transform(self, segment):
        moved = segment.transform(AffineTransform2D.create_translation(1.0, 1.0))
        assert close(moved.start_point, v(1, 1))
        assert close(moved.end_point, v(3, 1))

        mirrored = segment.transform(AffineTransform2D.create_scale(-1.0, 1.0))
        assert close(mirrored.start_point, v(-2, 0))
        assert close(mirrored.end_point, v(0, 0))
        # the minus side (y > 0) stays above the x axis
        assert mirrored.line.classify(v(-1, 1)) == HyperplaneLocation.MINUS

        ray = X_AXIS.ray(v(1, 0)).transform(AffineTransform2D.create_scale(-1.0, 1.0))
        assert ray.kind == 'ReverseRay'
        assert close(ray.end_point, v(-1, 0))

    def test_intersection(self, segment):
        cross = segment_from_points(v(1, -1), v(1, 1), PREC)
        assert close(segment.intersection(cross), v(1, 0))
        far = segment_from_points(v(5, -1), v(5, 1), PREC)
        assert segment.intersection(far) is None
        assert close(segment.intersection(X_ONE), v(1, 0))
        assert segment.intersection(Line.from_points(v(5, 0), v(5, 1), PREC)) is None
        assert segment.intersection(Y_ONE) is None

    def test_repr(self, segment):
        assert repr(segment) == 'Segment[start_point= (0.0, 0.0), end_point= (2.0, 0.0)]'
        assert repr(X_AXIS.ray(v(1, 0))).startswith('Ray[start_point= (1.0, 0.0)')
        assert repr(X_AXIS.span()).startswith('LineSpanningSubset[')
