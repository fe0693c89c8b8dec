## boolean operators for region trees

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
Boolean set operations on region trees.

Each operator is a boolean function of two "is inside" flags, one
from each input.  Merging applies it leaf by leaf.  When one side of a
merge is a leaf, the function's truth table for that leaf's value says
what happens to the other side's subtree:

    f(leaf, inside) == f(leaf, outside)       -> constant leaf
    f(leaf, inside) and not f(leaf, outside)  -> the subtree itself
    otherwise                                  -> its complement

so large parts of a tree are reused or dropped without descending into
them.

The module level functions return new trees and never modify their
arguments; the in-place forms live on
:class:`yapbsp.bsp.region.RegionBSPTree`.
"""

from ..partition import RegionLocation

IDENTITY = 'identity'
COMPLEMENT = 'complement'


def _location(inside):
    return RegionLocation.INSIDE if inside else RegionLocation.OUTSIDE


class MergeOperator:
    """A named boolean combination of two region leaf locations."""

    def __init__(self, name, fn):
        self.name = name
        self._fn = fn

    def __call__(self, a, b):
        return _location(self._fn(a == RegionLocation.INSIDE, b == RegionLocation.INSIDE))

    def leaf_outcome(self, location, leaf_first=True):
        """Classify the effect of a leaf with ``location`` on the other operand.

        Returns ``RegionLocation.INSIDE`` or ``RegionLocation.OUTSIDE`` when
        the result is constant, or ``IDENTITY``/``COMPLEMENT``.
        """
        inside = location == RegionLocation.INSIDE
        if leaf_first:
            with_in, with_out = self._fn(inside, True), self._fn(inside, False)
        else:
            with_in, with_out = self._fn(True, inside), self._fn(False, inside)
        if with_in == with_out:
            return _location(with_in)
        return IDENTITY if with_in else COMPLEMENT

    def __repr__(self):
        return 'MergeOperator({})'.format(self.name)


UNION = MergeOperator('union', lambda a, b: a or b)
INTERSECTION = MergeOperator('intersection', lambda a, b: a and b)
DIFFERENCE = MergeOperator('difference', lambda a, b: a and not b)
XOR = MergeOperator('xor', lambda a, b: a != b)


def union(a, b):
    return a.merge(b, UNION)


def intersection(a, b):
    return a.merge(b, INTERSECTION)


def difference(a, b):
    return a.merge(b, DIFFERENCE)


def xor(a, b):
    return a.merge(b, XOR)


def complement(tree):
    """Return a complemented copy of ``tree``."""
    result = tree.copy()
    result.complement()
    return result


__all__ = ['MergeOperator', 'UNION', 'INTERSECTION', 'DIFFERENCE', 'XOR',
           'IDENTITY', 'COMPLEMENT',
           'union', 'intersection', 'difference', 'xor', 'complement']
