## abstract partitioning contracts shared by all yapbsp geometries

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
Partitioning contracts.

The BSP engine in :mod:`yapbsp.bsp` knows nothing about coordinates.  It
manipulates geometry only through the small set of abstract types
defined here:

- ``Point``: a location in a space of fixed dimension.
- ``Hyperplane``: a codimension-1 divider that sorts points into its
  ``MINUS`` side, its ``PLUS`` side, or ``ON`` it.
- ``HyperplaneConvexSubset``: a convex piece of a hyperplane.  These
  pieces are the cuts stored at internal tree nodes and the facets
  reported as region boundaries.
- ``Transform``: an invertible mapping of points.

A concrete geometry (see :mod:`yapbsp.euclidean`) implements these
contracts, after which every tree algorithm works for it unchanged.
"""

from abc import ABC, abstractmethod
from enum import Enum


class HyperplaneLocation(Enum):
    """Location of a point relative to a hyperplane."""
    MINUS = -1
    ON = 0
    PLUS = 1


class SplitLocation(Enum):
    """Where the parts of an object ended up after a split."""
    MINUS = 'minus'
    PLUS = 'plus'
    BOTH = 'both'
    NEITHER = 'neither'


class RegionLocation(Enum):
    """Location of a point relative to a region."""
    INSIDE = 'inside'
    BOUNDARY = 'boundary'
    OUTSIDE = 'outside'


class Split:
    """Outcome of dividing an object by a hyperplane.

    The location is derived from which parts are present, so ``minus`` is
    not ``None`` exactly when the location is ``MINUS`` or ``BOTH`` (and
    symmetrically for ``plus``).  A split unpacks as ``minus, plus``.
    """

    __slots__ = ('_minus', '_plus')

    def __init__(self, minus, plus):
        self._minus = minus
        self._plus = plus

    @property
    def minus(self):
        return self._minus

    @property
    def plus(self):
        return self._plus

    @property
    def location(self):
        if self._minus is not None:
            return SplitLocation.BOTH if self._plus is not None else SplitLocation.MINUS
        return SplitLocation.PLUS if self._plus is not None else SplitLocation.NEITHER

    def __iter__(self):
        yield self._minus
        yield self._plus

    def __eq__(self, other):
        if not isinstance(other, Split):
            return NotImplemented
        return self._minus == other._minus and self._plus == other._plus

    def __hash__(self):
        return hash((self._minus, self._plus))

    def __repr__(self):
        return 'Split[location= {}, minus= {}, plus= {}]'.format(
            self.location.name, self._minus, self._plus)


class Point(ABC):
    """A point in a space of fixed dimension.

    Implementations are immutable and hashable; ``==`` is exact while
    :meth:`eq` compares within a precision context.
    """

    @property
    @abstractmethod
    def dimension(self):
        pass

    @abstractmethod
    def is_nan(self):
        pass

    @abstractmethod
    def is_infinite(self):
        pass

    def is_finite(self):
        return not (self.is_nan() or self.is_infinite())

    @abstractmethod
    def distance(self, other):
        pass

    @abstractmethod
    def eq(self, other, precision):
        """Return True if ``other`` is within ``precision`` of this point."""
        pass


class Transform(ABC):
    """An invertible point mapping that can be applied to hyperplanes.

    ``preserves_orientation`` reports whether the mapping keeps the
    handedness of space (a positive Jacobian determinant).  Hyperplane
    implementations use it to keep their minus side mapped onto the
    minus side of the image.
    """

    @abstractmethod
    def apply(self, point):
        pass

    @abstractmethod
    def preserves_orientation(self):
        pass

    def __call__(self, point):
        return self.apply(point)

    @staticmethod
    def from_function(fn, preserves_orientation=True):
        """Wrap a plain callable as a transform."""
        return _FunctionTransform(fn, preserves_orientation)


class _FunctionTransform(Transform):

    def __init__(self, fn, preserves):
        self._fn = fn
        self._preserves = preserves

    def apply(self, point):
        return self._fn(point)

    def preserves_orientation(self):
        return self._preserves


class Hyperplane(ABC):
    """A codimension-1 divider of a point space."""

    @property
    @abstractmethod
    def precision(self):
        """The precision context used for every comparison against this hyperplane."""
        pass

    @abstractmethod
    def offset(self, point):
        """Signed distance of ``point`` from the hyperplane; negative on the minus side."""
        pass

    def classify(self, point):
        sign = self.precision.sign(self.offset(point))
        if sign < 0:
            return HyperplaneLocation.MINUS
        elif sign > 0:
            return HyperplaneLocation.PLUS
        return HyperplaneLocation.ON

    def contains(self, point):
        return self.classify(point) == HyperplaneLocation.ON

    @abstractmethod
    def reverse(self):
        """Return the hyperplane with the minus and plus sides exchanged."""
        pass

    @abstractmethod
    def similar_orientation(self, other):
        """Return True if ``other`` faces roughly the same way as this hyperplane."""
        pass

    @abstractmethod
    def project(self, point):
        """Return the point of the hyperplane closest to ``point``."""
        pass

    @abstractmethod
    def span(self):
        """Return the convex subset covering the whole hyperplane."""
        pass

    @abstractmethod
    def transform(self, transform):
        pass

    @abstractmethod
    def eq(self, other, precision):
        """Return True if ``other`` is geometrically the same hyperplane."""
        pass


class HyperplaneConvexSubset(ABC):
    """A convex, possibly unbounded, piece of a hyperplane."""

    @property
    @abstractmethod
    def hyperplane(self):
        pass

    @property
    def precision(self):
        return self.hyperplane.precision

    @abstractmethod
    def split(self, splitter):
        """Divide this subset by the hyperplane ``splitter``; returns a :class:`Split`."""
        pass

    @abstractmethod
    def transform(self, transform):
        pass

    @abstractmethod
    def reverse(self):
        pass

    @abstractmethod
    def classify(self, point):
        """Return the :class:`RegionLocation` of ``point`` relative to this subset."""
        pass

    def contains(self, point):
        return self.classify(point) != RegionLocation.OUTSIDE

    @abstractmethod
    def closest(self, point):
        """Return the point of this subset closest to ``point``."""
        pass

    def to_convex(self):
        return [self]

    @abstractmethod
    def is_full(self):
        pass

    @abstractmethod
    def is_empty(self):
        pass

    @abstractmethod
    def is_infinite(self):
        pass

    def is_finite(self):
        return not self.is_infinite()

    @property
    @abstractmethod
    def size(self):
        pass

    @property
    @abstractmethod
    def centroid(self):
        pass


def convex_pieces(subsets):
    """Flatten a subset, an object with ``to_convex()``, or an iterable of either."""
    if isinstance(subsets, HyperplaneConvexSubset) or hasattr(subsets, 'to_convex'):
        return list(subsets.to_convex())
    pieces = []
    for item in subsets:
        pieces.extend(convex_pieces(item))
    return pieces


__all__ = ['HyperplaneLocation', 'SplitLocation', 'RegionLocation', 'Split',
           'Point', 'Transform', 'Hyperplane', 'HyperplaneConvexSubset',
           'convex_pieces']
