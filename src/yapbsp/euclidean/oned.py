## one-dimensional Euclidean partitioning: oriented points and intervals

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
One-dimensional Euclidean geometry.

On the real line a hyperplane is a single point with a facing
direction, an :class:`OrientedPoint`.  Its plus side lies in the facing
direction, so a positive-facing point at ``a`` has ``x > a`` on its plus
side and ``x < a`` on its minus side.  The only convex subset of such a
hyperplane is the point itself (:class:`OrientedPointConvexSubset`).

Regions of the line are unions of :class:`Interval` objects and are
represented by :class:`RegionBSPTree1D`.
"""

import logging
import math

from ..errors import GeometryValueError
from ..partition import (Hyperplane, HyperplaneConvexSubset, HyperplaneLocation,
                         RegionLocation, Split)
from ..precision import default_precision
from ..bsp.region import RegionBSPTree, RegionCutRule
from .vector import Vector1D

logger = logging.getLogger(__name__)


def _vec(value):
    return value if isinstance(value, Vector1D) else Vector1D(value)


def _coord(value):
    return value.x if isinstance(value, Vector1D) else float(value)


class OrientedPoint(Hyperplane):
    """A point on the real line facing in the positive or negative direction."""

    def __init__(self, point, positive_facing, precision=None):
        self._point = _vec(point)
        self._positive_facing = bool(positive_facing)
        self._precision = precision or default_precision()

    @staticmethod
    def from_location_and_direction(location, positive_facing, precision=None):
        return OrientedPoint(Vector1D(location), positive_facing, precision)

    @staticmethod
    def from_point_and_direction(point, direction, precision=None):
        """Build an oriented point facing along ``direction``.

        Raises ``GeometryValueError`` if the direction is zero within
        precision or not a finite number.
        """
        precision = precision or default_precision()
        d = _coord(direction)
        if not math.isfinite(d) or precision.eq_zero(d):
            raise GeometryValueError('Oriented point direction cannot be zero: {}'.format(d))
        return OrientedPoint(_vec(point), d > 0.0, precision)

    @staticmethod
    def create_positive_facing(location, precision=None):
        return OrientedPoint(_vec(location), True, precision)

    @staticmethod
    def create_negative_facing(location, precision=None):
        return OrientedPoint(_vec(location), False, precision)

    @property
    def point(self):
        return self._point

    @property
    def location(self):
        return self._point.x

    @property
    def direction(self):
        return Vector1D.ONE if self._positive_facing else -Vector1D.ONE

    @property
    def is_positive_facing(self):
        return self._positive_facing

    @property
    def precision(self):
        return self._precision

    def offset(self, point):
        delta = _coord(point) - self._point.x
        return delta if self._positive_facing else -delta

    def reverse(self):
        return OrientedPoint(self._point, not self._positive_facing, self._precision)

    def similar_orientation(self, other):
        return self._positive_facing == other._positive_facing

    def project(self, point):
        return self._point

    def span(self):
        return OrientedPointConvexSubset(self)

    def transform(self, transform):
        p = transform.apply(self._point)
        q = transform.apply(self._point + self.direction)
        return OrientedPoint.from_point_and_direction(p, q.x - p.x, self._precision)

    def eq(self, other, precision):
        return (precision.eq(self.location, other.location)
                and self._positive_facing == other._positive_facing)

    def __eq__(self, other):
        if not isinstance(other, OrientedPoint):
            return NotImplemented
        return (self._point == other._point
                and self._positive_facing == other._positive_facing
                and self._precision == other._precision)

    def __hash__(self):
        return hash((OrientedPoint, self._point, self._positive_facing, self._precision))

    def __repr__(self):
        return 'OrientedPoint[point= {}, direction= {}]'.format(self._point, self.direction)


class OrientedPointConvexSubset(HyperplaneConvexSubset):
    """The single-point convex subset of an :class:`OrientedPoint`."""

    def __init__(self, hyperplane):
        self._hyperplane = hyperplane

    @property
    def hyperplane(self):
        return self._hyperplane

    @property
    def point(self):
        return self._hyperplane.point

    @property
    def location(self):
        return self._hyperplane.location

    def split(self, splitter):
        side = splitter.classify(self._hyperplane.point)
        if side == HyperplaneLocation.MINUS:
            return Split(self, None)
        elif side == HyperplaneLocation.PLUS:
            return Split(None, self)
        return Split(None, None)

    def transform(self, transform):
        return OrientedPointConvexSubset(self._hyperplane.transform(transform))

    def reverse(self):
        return OrientedPointConvexSubset(self._hyperplane.reverse())

    def classify(self, point):
        if self._hyperplane.contains(_vec(point)):
            return RegionLocation.BOUNDARY
        return RegionLocation.OUTSIDE

    def closest(self, point):
        return self._hyperplane.point

    def is_full(self):
        return False

    def is_empty(self):
        return False

    def is_infinite(self):
        return False

    @property
    def size(self):
        return 0.0

    @property
    def centroid(self):
        return self._hyperplane.point

    def __eq__(self, other):
        if not isinstance(other, OrientedPointConvexSubset):
            return NotImplemented
        return self._hyperplane == other._hyperplane

    def __hash__(self):
        return hash((OrientedPointConvexSubset, self._hyperplane))

    def __repr__(self):
        return 'OrientedPointConvexSubset[point= {}, direction= {}]'.format(
            self._hyperplane.point, self._hyperplane.direction)


class Interval:
    """A closed, possibly unbounded, interval of the real line.

    A finite bound is held as an oriented point facing away from the
    interval: a negative-facing point at the minimum and a
    positive-facing point at the maximum, so the interval lies on the
    minus side of both.
    """

    def __init__(self, min_boundary, max_boundary):
        self._min_boundary = min_boundary
        self._max_boundary = max_boundary

    @staticmethod
    def of(a, b, precision=None):
        """Interval between ``a`` and ``b`` in either order.

        Raises ``GeometryValueError`` for NaN bounds or for two equal
        infinite bounds.
        """
        a = _coord(a)
        b = _coord(b)
        if math.isnan(a) or math.isnan(b) or (math.isinf(a) and a == b):
            raise GeometryValueError('Invalid interval: {}, {}'.format(a, b))
        lo, hi = min(a, b), max(a, b)
        precision = precision or default_precision()
        min_boundary = (OrientedPoint.create_negative_facing(lo, precision)
                        if math.isfinite(lo) else None)
        max_boundary = (OrientedPoint.create_positive_facing(hi, precision)
                        if math.isfinite(hi) else None)
        return Interval(min_boundary, max_boundary)

    @staticmethod
    def point(location, precision=None):
        return Interval.of(location, location, precision)

    @staticmethod
    def at_least(location, precision=None):
        """The interval ``[location, inf)``."""
        return Interval.of(location, math.inf, precision)

    @staticmethod
    def at_most(location, precision=None):
        """The interval ``(-inf, location]``."""
        return Interval.of(-math.inf, location, precision)

    @staticmethod
    def full():
        return Interval(None, None)

    @staticmethod
    def from_boundaries(a, b):
        """Interval bounded by two oriented points, sorted by their facing.

        Either boundary may be None for an unbounded side.  Raises
        ``GeometryValueError`` if both boundaries face the same way.
        """
        bounds = [h for h in (a, b) if h is not None]
        lows = [h for h in bounds if not h.is_positive_facing]
        highs = [h for h in bounds if h.is_positive_facing]
        if len(lows) > 1 or len(highs) > 1:
            raise GeometryValueError('Invalid interval boundaries: {}, {}'.format(a, b))
        return Interval(lows[0] if lows else None, highs[0] if highs else None)

    @property
    def min_boundary(self):
        return self._min_boundary

    @property
    def max_boundary(self):
        return self._max_boundary

    @property
    def min(self):
        return -math.inf if self._min_boundary is None else self._min_boundary.location

    @property
    def max(self):
        return math.inf if self._max_boundary is None else self._max_boundary.location

    def has_min_boundary(self):
        return self._min_boundary is not None

    def has_max_boundary(self):
        return self._max_boundary is not None

    def is_full(self):
        return self._min_boundary is None and self._max_boundary is None

    def is_infinite(self):
        return self._min_boundary is None or self._max_boundary is None

    def is_finite(self):
        return not self.is_infinite()

    @property
    def size(self):
        return self.max - self.min

    @property
    def centroid(self):
        if self.is_infinite():
            return None
        return Vector1D(0.5 * (self.min + self.max))

    def classify(self, point):
        x = _coord(point)
        if math.isnan(x):
            return RegionLocation.OUTSIDE
        boundary = False
        for bound in (self._min_boundary, self._max_boundary):
            if bound is None:
                continue
            side = bound.classify(x)
            if side == HyperplaneLocation.PLUS:
                return RegionLocation.OUTSIDE
            boundary = boundary or side == HyperplaneLocation.ON
        return RegionLocation.BOUNDARY if boundary else RegionLocation.INSIDE

    def contains(self, point):
        return self.classify(point) != RegionLocation.OUTSIDE

    def transform(self, transform):
        a = None if self._min_boundary is None else self._min_boundary.transform(transform)
        b = None if self._max_boundary is None else self._max_boundary.transform(transform)
        # a reflection swaps the facing of both bounds, and with it their roles
        return Interval.from_boundaries(a, b)

    def to_tree(self):
        tree = RegionBSPTree1D()
        tree.add(self)
        return tree

    def __eq__(self, other):
        if not isinstance(other, Interval):
            return NotImplemented
        return (self._min_boundary == other._min_boundary
                and self._max_boundary == other._max_boundary)

    def __hash__(self):
        return hash((Interval, self._min_boundary, self._max_boundary))

    def __repr__(self):
        return 'Interval[min= {}, max= {}]'.format(self.min, self.max)


class RegionBSPTree1D(RegionBSPTree):
    """A region of the real line: a union of intervals."""

    @classmethod
    def from_intervals(cls, intervals):
        tree = cls()
        for interval in intervals:
            tree.add(interval)
        return tree

    def add(self, interval):
        """Add ``interval`` to the region (union in place)."""
        self.union(self._interval_tree(interval))

    def _interval_tree(self, interval):
        # cuts are set directly so that a point interval keeps both of its
        # coincident boundaries
        tree = type(self)()
        if interval.is_full():
            tree._slots[tree._root].attribute = RegionLocation.INSIDE
            return tree
        index = tree._root
        if interval.has_min_boundary():
            tree._set_cut(index, interval.min_boundary.span(), RegionCutRule.MINUS_INSIDE)
            index = tree._slots[index].minus
        if interval.has_max_boundary():
            tree._set_cut(index, interval.max_boundary.span(), RegionCutRule.MINUS_INSIDE)
        return tree

    def classify(self, point):
        return super().classify(_vec(point))

    def node_region(self, node):
        """Return the :class:`Interval` covered by ``node``."""
        return self._node_interval(self._check_local(node))

    def _node_interval(self, index):
        lo = hi = None
        child = index
        parent = self._slots[index].parent
        while parent is not None:
            pslot = self._slots[parent]
            bound = pslot.cut.hyperplane
            if pslot.plus == child:
                bound = bound.reverse()
            # the node lies on the minus side of bound
            if bound.is_positive_facing:
                if hi is None or bound.location < hi.location:
                    hi = bound
            elif lo is None or bound.location > lo.location:
                lo = bound
            child = parent
            parent = pslot.parent
        return Interval(lo, hi)

    def to_intervals(self):
        """Return the region as a sorted list of disjoint intervals.

        Neighbouring inside cells are joined unless an outside cell
        (possibly a single point) separates them.
        """
        cells = []
        for index in self._leaf_indices():
            interval = self._node_interval(index)
            bound = interval.min_boundary or interval.max_boundary
            if bound is not None and bound.precision.gt(interval.min, interval.max):
                continue
            cells.append((interval.min, interval.max, self._slots[index].attribute, interval))
        cells.sort(key=lambda cell: (cell[0], cell[1]))

        result = []
        current = None
        for lo, hi, location, interval in cells:
            if location != RegionLocation.INSIDE:
                if current is not None:
                    result.append(Interval(*current))
                    current = None
                continue
            if current is None:
                current = [interval.min_boundary, interval.max_boundary]
            else:
                current[1] = interval.max_boundary
        if current is not None:
            result.append(Interval(*current))
        return result

    @property
    def size(self):
        return sum(interval.size for interval in self.to_intervals())

    @property
    def centroid(self):
        """Size-weighted centroid, or the mean of the points of a zero-size region.

        None for an empty or unbounded region.
        """
        intervals = self.to_intervals()
        if not intervals or any(i.is_infinite() for i in intervals):
            return None
        total = sum(i.size for i in intervals)
        if total > 0.0:
            return Vector1D(sum(i.centroid.x * i.size for i in intervals) / total)
        return Vector1D(sum(i.centroid.x for i in intervals) / len(intervals))

    @property
    def min(self):
        intervals = self.to_intervals()
        return intervals[0].min if intervals else math.inf

    @property
    def max(self):
        intervals = self.to_intervals()
        return intervals[-1].max if intervals else -math.inf

    def boundaries(self):
        result = []
        for interval in self.to_intervals():
            for bound in (interval.min_boundary, interval.max_boundary):
                if bound is not None:
                    result.append(bound.span())
        return result

    def project(self, point):
        """Return the boundary point closest to ``point``; ties go to the lower point."""
        x = _coord(point)
        best = None
        best_distance = math.inf
        for subset in sorted(self.boundaries(), key=lambda s: s.location):
            distance = abs(subset.location - x)
            if distance < best_distance:
                best = subset.point
                best_distance = distance
        return best


__all__ = ['OrientedPoint', 'OrientedPointConvexSubset', 'Interval', 'RegionBSPTree1D']
