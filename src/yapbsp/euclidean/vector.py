## immutable Euclidean points and vectors for yapbsp

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
Euclidean vectors in one and two dimensions.

``Vector1D`` and ``Vector2D`` serve both as points and as displacement
vectors.  They are immutable and hashable; ``==`` is exact (all NaN
vectors compare equal to each other) while :meth:`eq` compares within a
precision context.
"""

import math

import numpy as np

from ..errors import GeometryValueError
from ..partition import Point


def _normalize_factor(norm):
    if norm == 0.0 or not math.isfinite(norm):
        raise GeometryValueError('illegal norm: {}'.format(norm))
    return 1.0 / norm


class Vector1D(Point):
    """A point or vector on the real line."""

    __slots__ = ('_x',)

    def __init__(self, x):
        self._x = float(x)

    @staticmethod
    def of(x):
        return Vector1D(x)

    @property
    def x(self):
        return self._x

    @property
    def dimension(self):
        return 1

    def is_nan(self):
        return math.isnan(self._x)

    def is_infinite(self):
        return not self.is_nan() and math.isinf(self._x)

    def norm(self):
        return abs(self._x)

    def norm_sq(self):
        return self._x * self._x

    def normalize(self):
        return Vector1D(self._x * _normalize_factor(self.norm()))

    def dot(self, other):
        return self._x * other._x

    def distance(self, other):
        return abs(self._x - other._x)

    def lerp(self, other, t):
        return Vector1D(self._x + t * (other._x - self._x))

    def eq(self, other, precision):
        return precision.eq(self._x, other._x)

    def as_array(self):
        return np.array([self._x])

    def __add__(self, other):
        return Vector1D(self._x + other._x)

    def __sub__(self, other):
        return Vector1D(self._x - other._x)

    def __mul__(self, scale):
        return Vector1D(self._x * scale)

    __rmul__ = __mul__

    def __truediv__(self, scale):
        return Vector1D(self._x / scale)

    def __neg__(self):
        return Vector1D(-self._x)

    def __iter__(self):
        yield self._x

    def __eq__(self, other):
        if not isinstance(other, Vector1D):
            return NotImplemented
        if self.is_nan():
            return other.is_nan()
        return self._x == other._x

    def __hash__(self):
        if self.is_nan():
            return hash(('Vector1D', 'nan'))
        return hash(('Vector1D', self._x))

    def __repr__(self):
        return '({})'.format(self._x)


Vector1D.ZERO = Vector1D(0.0)
Vector1D.ONE = Vector1D(1.0)
Vector1D.NaN = Vector1D(math.nan)


class Vector2D(Point):
    """A point or vector in the plane."""

    __slots__ = ('_x', '_y')

    def __init__(self, x, y):
        self._x = float(x)
        self._y = float(y)

    @staticmethod
    def of(x, y):
        return Vector2D(x, y)

    @staticmethod
    def from_array(a):
        if len(a) != 2:
            raise GeometryValueError('bad coordinate array for a 2D vector: {}'.format(a))
        return Vector2D(a[0], a[1])

    @staticmethod
    def of_polar(radius, azimuth):
        return Vector2D(radius * math.cos(azimuth), radius * math.sin(azimuth))

    @property
    def x(self):
        return self._x

    @property
    def y(self):
        return self._y

    @property
    def dimension(self):
        return 2

    def is_nan(self):
        return math.isnan(self._x) or math.isnan(self._y)

    def is_infinite(self):
        return not self.is_nan() and (math.isinf(self._x) or math.isinf(self._y))

    def norm(self):
        return math.hypot(self._x, self._y)

    def norm_sq(self):
        return self._x * self._x + self._y * self._y

    def normalize(self):
        f = _normalize_factor(self.norm())
        return Vector2D(self._x * f, self._y * f)

    def dot(self, other):
        return self._x * other._x + self._y * other._y

    def cross(self, other):
        """Signed area of the parallelogram spanned by this vector and ``other``."""
        return self._x * other._y - self._y * other._x

    def orthogonal(self):
        """Unit vector a quarter turn counter-clockwise from this one."""
        return Vector2D(-self._y, self._x).normalize()

    def angle(self):
        return math.atan2(self._y, self._x)

    def distance(self, other):
        return math.hypot(self._x - other._x, self._y - other._y)

    def lerp(self, other, t):
        return Vector2D(self._x + t * (other._x - self._x),
                        self._y + t * (other._y - self._y))

    def eq(self, other, precision):
        return precision.eq(self._x, other._x) and precision.eq(self._y, other._y)

    def sort_key(self):
        return (self._x, self._y)

    def as_array(self):
        return np.array([self._x, self._y])

    def __add__(self, other):
        return Vector2D(self._x + other._x, self._y + other._y)

    def __sub__(self, other):
        return Vector2D(self._x - other._x, self._y - other._y)

    def __mul__(self, scale):
        return Vector2D(self._x * scale, self._y * scale)

    __rmul__ = __mul__

    def __truediv__(self, scale):
        return Vector2D(self._x / scale, self._y / scale)

    def __neg__(self):
        return Vector2D(-self._x, -self._y)

    def __iter__(self):
        yield self._x
        yield self._y

    def __eq__(self, other):
        if not isinstance(other, Vector2D):
            return NotImplemented
        if self.is_nan():
            return other.is_nan()
        return self._x == other._x and self._y == other._y

    def __hash__(self):
        if self.is_nan():
            return hash(('Vector2D', 'nan'))
        return hash(('Vector2D', self._x, self._y))

    def __repr__(self):
        return '({}, {})'.format(self._x, self._y)


Vector2D.ZERO = Vector2D(0.0, 0.0)
Vector2D.PLUS_X = Vector2D(1.0, 0.0)
Vector2D.MINUS_X = Vector2D(-1.0, 0.0)
Vector2D.PLUS_Y = Vector2D(0.0, 1.0)
Vector2D.MINUS_Y = Vector2D(0.0, -1.0)
Vector2D.NaN = Vector2D(math.nan, math.nan)


__all__ = ['Vector1D', 'Vector2D']
