## two-dimensional Euclidean partitioning: lines, segments and polygons

## Copyright (c) 2020 Richard W. DeVaul
## Copyright (c) 2020 yapCAD contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
# 
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
# 
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""
Two-dimensional Euclidean geometry.

In the plane a hyperplane is an oriented :class:`Line`.  A line is kept
as a unit direction ``d`` and the point ``origin`` of the line closest
to the coordinate origin.  The offset of a point ``p`` is

    offset(p) = (p - origin) x d

so points to the *left* of the direction of travel have a negative
offset and lie on the minus side.  A polygon whose vertices run
counter-clockwise therefore has its interior on the minus side of every
edge, which is the orientation :class:`RegionBSPTree2D` expects of its
boundaries.

Positions along a line are measured by their *abscissa*, the dot
product with the direction.  A :class:`LineConvexSubset` is an interval
of abscissas: a segment, a ray, a reverse ray or the whole line.
"""

import logging
import math

import mpmath as mpm
import numpy as np

from ..errors import GeometryValueError
from ..partition import (Hyperplane, HyperplaneConvexSubset, RegionLocation,
                         HyperplaneLocation, Split)
from ..precision import default_precision
from ..bsp.region import RegionBSPTree
from .vector import Vector2D

logger = logging.getLogger(__name__)

## working precision, in decimal digits, for line/line intersection
INTERSECTION_DPS = 30


class Line(Hyperplane):
    """An oriented line in the plane."""

    def __init__(self, origin, direction, precision=None):
        self._origin = origin
        self._direction = direction
        self._precision = precision or default_precision()

    @staticmethod
    def from_points(p1, p2, precision=None):
        """The line through ``p1`` and ``p2``, directed from ``p1`` toward ``p2``."""
        return Line.from_point_and_direction(p1, p2 - p1, precision)

    @staticmethod
    def from_point_and_direction(point, direction, precision=None):
        """Raises ``GeometryValueError`` if ``direction`` is zero within precision or not finite."""
        precision = precision or default_precision()
        norm = direction.norm()
        if not math.isfinite(norm) or precision.eq_zero(norm):
            raise GeometryValueError('Line direction cannot be zero: {}'.format(direction))
        u = direction.normalize()
        k = point.cross(u)
        return Line(Vector2D(k * u.y, -k * u.x), u, precision)

    @staticmethod
    def from_point_and_angle(point, angle, precision=None):
        return Line.from_point_and_direction(point, Vector2D.of_polar(1.0, angle), precision)

    @property
    def origin(self):
        return self._origin

    @property
    def direction(self):
        return self._direction

    @property
    def origin_offset(self):
        """Signed distance of the coordinate origin from the line, negated."""
        return self._origin.cross(self._direction)

    @property
    def precision(self):
        return self._precision

    @property
    def angle(self):
        """Direction angle in ``[0, 2*pi)``."""
        a = self._direction.angle()
        return a + 2.0 * math.pi if a < 0.0 else a

    def offset(self, point):
        return (point - self._origin).cross(self._direction)

    def abscissa(self, point):
        return point.dot(self._direction)

    def to_space(self, abscissa):
        return self._origin + self._direction * abscissa

    def project(self, point):
        return self.to_space(self.abscissa(point))

    def distance(self, point):
        return abs(self.offset(point))

    def reverse(self):
        return Line(self._origin, -self._direction, self._precision)

    def similar_orientation(self, other):
        return self._direction.dot(other._direction) >= 0.0

    def is_parallel(self, other):
        return self._precision.eq_zero(self._direction.cross(other._direction))

    def span(self):
        return LineConvexSubset(self, -math.inf, math.inf)

    def subset(self, a, b):
        """Convex subset between abscissas ``a`` and ``b``, in either order."""
        return LineConvexSubset(self, a, b)

    def segment(self, p1, p2):
        return LineConvexSubset(self, self.abscissa(p1), self.abscissa(p2))

    def ray(self, start_point):
        return LineConvexSubset(self, self.abscissa(start_point), math.inf)

    def reverse_ray(self, end_point):
        return LineConvexSubset(self, -math.inf, self.abscissa(end_point))

    def intersection(self, other):
        """Point where this line crosses ``other``, or None if they are parallel.

        The solve is done in extended precision so that nearly parallel
        lines still meet at a stable point.
        """
        if self.is_parallel(other):
            return None
        d1 = self._direction
        d2 = other._direction
        with mpm.workdps(INTERSECTION_DPS):
            k1 = mpm.mpf(self._origin.x) * d1.y - mpm.mpf(self._origin.y) * d1.x
            k2 = mpm.mpf(other._origin.x) * d2.y - mpm.mpf(other._origin.y) * d2.x
            det = mpm.mpf(d1.x) * d2.y - mpm.mpf(d1.y) * d2.x
            x = (mpm.mpf(d1.x) * k2 - mpm.mpf(d2.x) * k1) / det
            y = (mpm.mpf(d1.y) * k2 - mpm.mpf(d2.y) * k1) / det
            return Vector2D(float(x), float(y))

    def transform(self, transform):
        """Map the line through ``transform``, keeping its minus side on the minus side."""
        p1 = transform.apply(self._origin)
        p2 = transform.apply(self._origin + self._direction)
        line = Line.from_points(p1, p2, self._precision)
        if not transform.preserves_orientation():
            line = line.reverse()
        return line

    def eq(self, other, precision):
        return (self._direction.eq(other._direction, precision)
                and self._origin.eq(other._origin, precision))

    def __eq__(self, other):
        if not isinstance(other, Line):
            return NotImplemented
        return (self._origin == other._origin and self._direction == other._direction
                and self._precision == other._precision)

    def __hash__(self):
        return hash((Line, self._origin, self._direction, self._precision))

    def __repr__(self):
        return 'Line[origin= {}, direction= {}]'.format(self._origin, self._direction)


class LineConvexSubset(HyperplaneConvexSubset):
    """A convex piece of a line: the points with abscissa in ``[start, end]``."""

    def __init__(self, line, start, end):
        start = float(start)
        end = float(end)
        if (math.isnan(start) or math.isnan(end)
                or (math.isinf(start) and start == end)):
            raise GeometryValueError('Invalid line subset interval: {}, {}'.format(start, end))
        self._line = line
        self._start = min(start, end)
        self._end = max(start, end)

    @property
    def line(self):
        return self._line

    @property
    def hyperplane(self):
        return self._line

    @property
    def start(self):
        return self._start

    @property
    def end(self):
        return self._end

    @property
    def start_point(self):
        return None if math.isinf(self._start) else self._line.to_space(self._start)

    @property
    def end_point(self):
        return None if math.isinf(self._end) else self._line.to_space(self._end)

    @property
    def kind(self):
        if math.isinf(self._start):
            return 'ReverseRay' if math.isfinite(self._end) else 'LineSpanningSubset'
        return 'Segment' if math.isfinite(self._end) else 'Ray'

    def is_full(self):
        return math.isinf(self._start) and math.isinf(self._end)

    def is_empty(self):
        return False

    def is_infinite(self):
        return math.isinf(self._start) or math.isinf(self._end)

    @property
    def size(self):
        return self._end - self._start

    @property
    def centroid(self):
        if self.is_infinite():
            return None
        return self._line.to_space(0.5 * (self._start + self._end))

    def classify(self, point):
        if self._line.classify(point) != HyperplaneLocation.ON:
            return RegionLocation.OUTSIDE
        precision = self._line.precision
        t = self._line.abscissa(point)
        if ((math.isfinite(self._start) and precision.eq(t, self._start))
                or (math.isfinite(self._end) and precision.eq(t, self._end))):
            return RegionLocation.BOUNDARY
        if self._start < t < self._end:
            return RegionLocation.INSIDE
        return RegionLocation.OUTSIDE

    def closest(self, point):
        t = min(max(self._line.abscissa(point), self._start), self._end)
        return self._line.to_space(t)

    def split(self, splitter):
        line = self._line
        crossing = line.intersection(splitter)
        if crossing is None:
            side = splitter.classify(line.origin)
            if side == HyperplaneLocation.MINUS:
                return Split(self, None)
            elif side == HyperplaneLocation.PLUS:
                return Split(None, self)
            return Split(None, None)

        precision = line.precision
        t = line.abscissa(crossing)
        # moving forward along this line crosses into the splitter's plus side
        forward_plus = line.direction.cross(splitter.direction) > 0.0

        if precision.lte(self._end, t):
            return Split(self, None) if forward_plus else Split(None, self)
        if precision.gte(self._start, t):
            return Split(None, self) if forward_plus else Split(self, None)

        low = LineConvexSubset(line, self._start, t)
        high = LineConvexSubset(line, t, self._end)
        return Split(low, high) if forward_plus else Split(high, low)

    def transform(self, transform):
        line = self._line
        image = line.transform(transform)
        forward = transform.apply(line.origin + line.direction) - transform.apply(line.origin)
        same = image.direction.dot(forward) > 0.0

        def mapped(t):
            if math.isinf(t):
                return t if same else -t
            return image.abscissa(transform.apply(line.to_space(t)))

        return LineConvexSubset(image, mapped(self._start), mapped(self._end))

    def reverse(self):
        return LineConvexSubset(self._line.reverse(), -self._end, -self._start)

    def intersection(self, other):
        """Point shared with a line or another line subset, or None."""
        if isinstance(other, LineConvexSubset):
            point = self._line.intersection(other._line)
            if point is None or not other.contains(point):
                return None
        else:
            point = self._line.intersection(other)
            if point is None:
                return None
        return point if self.contains(point) else None

    def __eq__(self, other):
        if not isinstance(other, LineConvexSubset):
            return NotImplemented
        return (self._line == other._line and self._start == other._start
                and self._end == other._end)

    def __hash__(self):
        return hash((LineConvexSubset, self._line, self._start, self._end))

    def __repr__(self):
        kind = self.kind
        if kind == 'Segment':
            return 'Segment[start_point= {}, end_point= {}]'.format(self.start_point, self.end_point)
        elif kind == 'Ray':
            return 'Ray[start_point= {}, direction= {}]'.format(self.start_point, self._line.direction)
        elif kind == 'ReverseRay':
            return 'ReverseRay[direction= {}, end_point= {}]'.format(self._line.direction, self.end_point)
        return 'LineSpanningSubset[origin= {}, direction= {}]'.format(
            self._line.origin, self._line.direction)


def segment_from_points(p1, p2, precision=None):
    """The segment from ``p1`` to ``p2``."""
    line = Line.from_points(p1, p2, precision)
    return line.segment(p1, p2)


class RegionBSPTree2D(RegionBSPTree):
    """A region of the plane, such as a polygon with holes."""

    @classmethod
    def from_vertices(cls, vertices, precision=None, close=True):
        """Build the region bounded by a vertex loop.

        The interior lies to the left of the loop, so counter-clockwise
        vertices describe the polygon and clockwise ones its complement.
        Consecutive duplicate vertices are skipped.
        """
        precision = precision or default_precision()
        points = list(vertices)
        if close and len(points) > 1 and not points[0].eq(points[-1], precision):
            points.append(points[0])
        segments = []
        for p1, p2 in zip(points[:-1], points[1:]):
            if p1.eq(p2, precision):
                continue
            segments.append(segment_from_points(p1, p2, precision))
        return cls.from_boundaries(segments)

    @classmethod
    def from_boundaries(cls, boundaries):
        tree = cls()
        tree.insert(list(boundaries))
        return tree

    def _boundary_arrays(self):
        boundaries = self.boundaries()
        if not boundaries:
            return None, None
        if any(b.is_infinite() for b in boundaries):
            return boundaries, None
        starts = np.array([[b.start_point.x, b.start_point.y] for b in boundaries])
        ends = np.array([[b.end_point.x, b.end_point.y] for b in boundaries])
        return starts, ends

    @property
    def size(self):
        """Area of the region; ``inf`` for an unbounded region."""
        if self.is_full():
            return math.inf
        starts, ends = self._boundary_arrays()
        if starts is None:
            return 0.0
        if ends is None:
            return math.inf
        cross = starts[:, 0] * ends[:, 1] - ends[:, 0] * starts[:, 1]
        area = float(0.5 * np.sum(cross))
        # finite boundaries enclosing the outside: the complement of a polygon
        return math.inf if area < 0.0 else area

    @property
    def centroid(self):
        """Area centroid, or None for an empty, unbounded or zero-area region."""
        if self.is_full():
            return None
        starts, ends = self._boundary_arrays()
        if starts is None or ends is None:
            return None
        cross = starts[:, 0] * ends[:, 1] - ends[:, 0] * starts[:, 1]
        area = 0.5 * np.sum(cross)
        if area <= 0.0:
            return None
        cx = np.sum((starts[:, 0] + ends[:, 0]) * cross) / (6.0 * area)
        cy = np.sum((starts[:, 1] + ends[:, 1]) * cross) / (6.0 * area)
        return Vector2D(cx, cy)

    def boundary_paths(self):
        """The boundary as connected :class:`yapbsp.euclidean.path.LinePath` objects.

        Collinear pieces left by tree cuts are joined, so each path has one
        element per polygon edge.
        """
        from .path import connect_all
        return [path.simplify() for path in connect_all(self.boundaries())]


__all__ = ['Line', 'LineConvexSubset', 'segment_from_points', 'RegionBSPTree2D']
