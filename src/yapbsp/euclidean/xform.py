## homogeneous affine transforms for 1D and 2D yapbsp geometry

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

## An affine transform in n dimensions is held as an (n+1)x(n+1)
## homogeneous matrix.  Points are treated as column vectors, so the
## product A*B applies B first and then A.  Transforms are immutable:
## every composition returns a new instance.

import math

import numpy as np

from ..errors import GeometryValueError
from ..partition import Transform
from .vector import Vector1D, Vector2D


class AffineMatrix(Transform):
    """Base class for homogeneous affine transforms of fixed dimension"""

    dimension = None

    def __init__(self, a=None):
        size = self.dimension + 1
        if a is None:
            self.m = np.identity(size)
        else:
            m = np.array(a, dtype=float)
            if m.shape == (size * size,):
                m = m.reshape((size, size))
            if m.shape != (size, size):
                raise GeometryValueError('bad matrix shape for a {}D transform: {}'.format(
                    self.dimension, m.shape))
            if not np.all(np.isfinite(m)):
                raise GeometryValueError('bad element in matrix initialization: {}'.format(a))
            self.m = m
        self.m.setflags(write=False)

    def __repr__(self):
        return '{}({})'.format(type(self).__name__, self.m.tolist())

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return np.array_equal(self.m, other.m)

    def __hash__(self):
        return hash((type(self), self.m.tobytes()))

    def get(self, i, j):
        size = self.dimension + 1
        if i < 0 or i >= size or j < 0 or j >= size:
            raise ValueError('bad index passed to get: {},{}'.format(i, j))
        return float(self.m[i, j])

    def multiply(self, other):
        """Return the transform applying ``other`` first and then this one."""
        return type(self)(self.m @ other.m)

    def premultiply(self, other):
        """Return the transform applying this one first and then ``other``."""
        return type(self)(other.m @ self.m)

    def __mul__(self, other):
        if isinstance(other, AffineMatrix):
            return self.multiply(other)
        return self.apply(other)

    def determinant(self):
        return float(np.linalg.det(self.m[:-1, :-1]))

    def preserves_orientation(self):
        return self.determinant() > 0.0

    def inverse(self):
        det = self.determinant()
        if det == 0.0 or not math.isfinite(det):
            raise GeometryValueError('transform is not invertible; determinant is {}'.format(det))
        return type(self)(np.linalg.inv(self.m))

    def _apply_array(self, coords):
        v = np.append(np.asarray(coords, dtype=float), 1.0)
        return self.m @ v

    def _apply_vector_array(self, coords):
        return self.m[:-1, :-1] @ np.asarray(coords, dtype=float)


class AffineTransform1D(AffineMatrix):
    """x -> a*x + b"""

    dimension = 1

    @classmethod
    def identity(cls):
        return cls()

    @classmethod
    def of(cls, scale, offset=0.0):
        return cls([[scale, offset], [0.0, 1.0]])

    @classmethod
    def create_translation(cls, shift):
        return cls.of(1.0, _coord(shift))

    @classmethod
    def create_scale(cls, factor):
        return cls.of(_coord(factor), 0.0)

    @classmethod
    def from_function(cls, fn):
        """Build the affine transform that agrees with ``fn`` on 0 and 1."""
        b = fn(Vector1D.ZERO).x
        a = fn(Vector1D.ONE).x - b
        return cls.of(a, b)

    @property
    def scale_factor(self):
        return float(self.m[0, 0])

    @property
    def offset(self):
        return float(self.m[0, 1])

    def translate(self, shift):
        return self.premultiply(AffineTransform1D.create_translation(shift))

    def scale(self, factor):
        return self.premultiply(AffineTransform1D.create_scale(factor))

    def apply(self, point):
        return Vector1D(self.m[0, 0] * point.x + self.m[0, 1])

    def apply_vector(self, vector):
        return Vector1D(self.m[0, 0] * vector.x)


class AffineTransform2D(AffineMatrix):
    """Affine transform of the plane"""

    dimension = 2

    @classmethod
    def identity(cls):
        return cls()

    @classmethod
    def create_translation(cls, x, y=None):
        if y is None:
            x, y = x.x, x.y
        return cls([[1.0, 0.0, x], [0.0, 1.0, y], [0.0, 0.0, 1.0]])

    @classmethod
    def create_scale(cls, sx, sy=None):
        if sy is None:
            sy = sx
        return cls([[sx, 0.0, 0.0], [0.0, sy, 0.0], [0.0, 0.0, 1.0]])

    @classmethod
    def create_rotation(cls, angle, center=None):
        """Counter-clockwise rotation by ``angle`` radians, optionally about ``center``."""
        c = math.cos(angle)
        s = math.sin(angle)
        rot = cls([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
        if center is None:
            return rot
        return (cls.create_translation(center.x, center.y)
                .multiply(rot)
                .multiply(cls.create_translation(-center.x, -center.y)))

    @classmethod
    def from_function(cls, fn):
        """Build the affine transform that agrees with ``fn`` on the unit frame."""
        o = fn(Vector2D.ZERO)
        u = fn(Vector2D.PLUS_X) - o
        v = fn(Vector2D.PLUS_Y) - o
        return cls([[u.x, v.x, o.x], [u.y, v.y, o.y], [0.0, 0.0, 1.0]])

    def translate(self, x, y=None):
        return self.premultiply(AffineTransform2D.create_translation(x, y))

    def scale(self, sx, sy=None):
        return self.premultiply(AffineTransform2D.create_scale(sx, sy))

    def rotate(self, angle, center=None):
        return self.premultiply(AffineTransform2D.create_rotation(angle, center))

    def apply(self, point):
        r = self._apply_array((point.x, point.y))
        return Vector2D(r[0], r[1])

    def apply_vector(self, vector):
        r = self._apply_vector_array((vector.x, vector.y))
        return Vector2D(r[0], r[1])

    def apply_all(self, points):
        """Transform a sequence of points in one matrix product."""
        if not points:
            return []
        coords = np.array([[p.x, p.y, 1.0] for p in points]).T
        result = self.m @ coords
        return [Vector2D(x, y) for x, y in zip(result[0], result[1])]


def _coord(value):
    return value.x if isinstance(value, Vector1D) else float(value)


__all__ = ['AffineMatrix', 'AffineTransform1D', 'AffineTransform2D']
