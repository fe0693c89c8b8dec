## region trees: inside/outside BSP trees with boolean algebra

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
Region BSP trees.

A ``RegionBSPTree`` is a :class:`yapbsp.bsp.tree.BSPTree` whose leaves
are labelled ``RegionLocation.INSIDE`` or ``RegionLocation.OUTSIDE``.
The set of points that fall into inside leaves is the region the tree
represents.  This module adds the region algebra on top of the plain
tree: classification, complement, the boolean operations, splitting a
region by a hyperplane and extracting its boundary.

Geometry-specific subclasses (see :mod:`yapbsp.euclidean`) add
measurements such as size and centroid.
"""

import logging
import math
from enum import Enum

from ..partition import HyperplaneLocation, RegionLocation, Split
from .boolean import (MergeOperator, UNION, INTERSECTION, DIFFERENCE, XOR,
                      COMPLEMENT)
from .tree import BSPTree

logger = logging.getLogger(__name__)

INSIDE = RegionLocation.INSIDE
OUTSIDE = RegionLocation.OUTSIDE
BOUNDARY = RegionLocation.BOUNDARY


class RegionCutRule(Enum):
    """Which child of a newly cut leaf is inside the region."""
    MINUS_INSIDE = 'minus_inside'
    PLUS_INSIDE = 'plus_inside'
    INHERIT = 'inherit'


class RegionCutBoundary:
    """The part of a node's cut that separates inside from outside.

    ``outside_facing`` pieces have the inside of the region on their
    minus side; ``inside_facing`` pieces have it on their plus side.
    """

    def __init__(self, inside_facing, outside_facing):
        self._inside_facing = list(inside_facing)
        self._outside_facing = list(outside_facing)

    @property
    def inside_facing(self):
        return self._inside_facing

    @property
    def outside_facing(self):
        return self._outside_facing

    def pieces(self):
        return self._inside_facing + self._outside_facing

    def is_empty(self):
        return not self._inside_facing and not self._outside_facing

    @property
    def size(self):
        return sum(piece.size for piece in self.pieces())

    def contains(self, point):
        return any(piece.contains(point) for piece in self.pieces())

    def closest(self, point):
        """Return the boundary point nearest ``point``, or None if the boundary is empty."""
        best = None
        best_distance = math.inf
        for piece in self.pieces():
            candidate = piece.closest(point)
            distance = point.distance(candidate)
            if distance < best_distance:
                best = candidate
                best_distance = distance
        return best

    def __repr__(self):
        return 'RegionCutBoundary[inside_facing= {}, outside_facing= {}]'.format(
            self._inside_facing, self._outside_facing)


class RegionBSPTree(BSPTree):
    """BSP tree representing a region of space."""

    def __init__(self, full=False):
        super().__init__(INSIDE if full else OUTSIDE)

    @classmethod
    def full(cls):
        return cls(full=True)

    @classmethod
    def empty(cls):
        return cls(full=False)

    @classmethod
    def from_boundaries(cls, boundaries):
        """Build a region from boundary pieces oriented with the inside on their minus side."""
        tree = cls()
        tree.insert(boundaries)
        return tree

    ## hooks

    def _child_attributes(self, index, cut_rule=RegionCutRule.MINUS_INSIDE):
        if cut_rule == RegionCutRule.PLUS_INSIDE:
            return OUTSIDE, INSIDE
        if cut_rule == RegionCutRule.INHERIT:
            location = self._slots[index].attribute
            return location, location
        return INSIDE, OUTSIDE

    def _cleared_attribute(self, index):
        parent = self._slots[index].parent
        if parent is not None and self._slots[parent].minus == index:
            return INSIDE
        return OUTSIDE

    def _extract_attribute(self):
        return OUTSIDE

    ## queries

    def is_full(self):
        return all(self._slots[i].attribute == INSIDE for i in self._leaf_indices())

    def is_empty(self):
        return all(self._slots[i].attribute == OUTSIDE for i in self._leaf_indices())

    def classify(self, point):
        """Return the location of ``point`` relative to the region.

        A point on a cut is classified on both sides of it; if both sides
        agree the cut is not a real boundary there and that answer is
        returned, otherwise the point is on the boundary.  NaN points are
        outside.
        """
        if point.is_nan():
            return OUTSIDE
        return self._classify(self._root, point)

    def _classify(self, index, point):
        slot = self._slots[index]
        while slot.cut is not None:
            location = slot.cut.hyperplane.classify(point)
            if location == HyperplaneLocation.ON:
                minus = self._classify(slot.minus, point)
                plus = self._classify(slot.plus, point)
                return minus if minus == plus else BOUNDARY
            index = slot.minus if location == HyperplaneLocation.MINUS else slot.plus
            slot = self._slots[index]
        return slot.attribute

    def contains(self, point):
        return self.classify(point) != OUTSIDE

    ## algebra

    def complement(self):
        """Complement the region in place by swapping every leaf's location."""
        self._complement_subtree(self._root)

    def _complement_subtree(self, index):
        for leaf in self._leaf_indices(index):
            slot = self._slots[leaf]
            slot.attribute = OUTSIDE if slot.attribute == INSIDE else INSIDE

    def _merge_leaf(self, a_tree, a, b_tree, b, combine):
        if not isinstance(combine, MergeOperator):
            return super()._merge_leaf(a_tree, a, b_tree, b, combine)
        a_slot = a_tree._slots[a]
        b_slot = b_tree._slots[b]
        if a_slot.cut is None and b_slot.cut is None:
            return self._alloc(None, combine(a_slot.attribute, b_slot.attribute))
        if a_slot.cut is None:
            outcome = combine.leaf_outcome(a_slot.attribute, leaf_first=True)
            source, index = b_tree, b
        else:
            outcome = combine.leaf_outcome(b_slot.attribute, leaf_first=False)
            source, index = a_tree, a
        if outcome == INSIDE or outcome == OUTSIDE:
            return self._alloc(None, outcome)
        result = self._take(source, index)
        if outcome == COMPLEMENT:
            self._complement_subtree(result)
        return result

    def _merge_in_place(self, other, operator):
        result = self.merge(other, operator)
        self._assume(result)

    def union(self, other):
        """Replace this region with its union with ``other``."""
        self._merge_in_place(other, UNION)

    def intersection(self, other):
        """Replace this region with its intersection with ``other``."""
        self._merge_in_place(other, INTERSECTION)

    def difference(self, other):
        """Remove ``other`` from this region."""
        self._merge_in_place(other, DIFFERENCE)

    def xor(self, other):
        """Replace this region with its symmetric difference with ``other``."""
        self._merge_in_place(other, XOR)

    def split(self, splitter):
        """Split the region by the hyperplane ``splitter``.

        Returns a :class:`Split` of two new trees.  Each is rooted at the
        splitter, with the part of this region on its side below the
        splitter and an outside leaf on the far side.  A side with no
        inside content is None.
        """
        span = splitter.span()
        work = self._create()
        minus, plus = work._split_subtree(self, self._root, span)
        result = Split(self._split_side(work, minus, span, True),
                       self._split_side(work, plus, span, False))
        logger.debug('split %s by %s: %s', type(self).__name__, splitter, result.location.name)
        return result

    def _split_side(self, work, index, span, minus_side):
        tree = self._create()
        content = tree._copy_from(work, index, None)
        outside = tree._alloc(None, OUTSIDE)
        if minus_side:
            root = tree._link(span, content, outside)
        else:
            root = tree._link(span, outside, content)
        tree._install_root(root)
        tree.condense()
        return None if tree.is_empty() else tree

    ## boundaries

    def node_cut_boundary(self, node):
        """Return the :class:`RegionCutBoundary` of ``node``'s cut, or None for a leaf."""
        return self._cut_boundary(self._check_local(node))

    def _cut_boundary(self, index):
        slot = self._slots[index]
        if slot.cut is None:
            return None
        minus_in, minus_out = [], []
        self._characterize(slot.cut, slot.minus, minus_in, minus_out)

        outside_facing, inside_facing = [], []
        for piece in minus_in:
            self._characterize(piece, slot.plus, [], outside_facing)
        for piece in minus_out:
            self._characterize(piece, slot.plus, inside_facing, [])
        return RegionCutBoundary(inside_facing, outside_facing)

    def _characterize(self, subset, index, inside, outside):
        slot = self._slots[index]
        if slot.cut is None:
            if slot.attribute == INSIDE:
                inside.append(subset)
            else:
                outside.append(subset)
            return
        split = subset.split(slot.cut.hyperplane)
        # a piece lying on a descendant cut does not separate anything there
        if split.minus is not None:
            self._characterize(split.minus, slot.minus, inside, outside)
        if split.plus is not None:
            self._characterize(split.plus, slot.plus, inside, outside)

    def boundaries(self):
        """Return the boundary pieces, each with the inside on its minus side."""
        result = []
        for index in self._internal_indices():
            boundary = self._cut_boundary(index)
            result.extend(boundary.outside_facing)
            result.extend(piece.reverse() for piece in boundary.inside_facing)
        return result

    def _internal_indices(self):
        stack = [self._root]
        while stack:
            index = stack.pop()
            slot = self._slots[index]
            if slot.cut is not None:
                yield index
                stack.append(slot.plus)
                stack.append(slot.minus)

    @property
    def boundary_size(self):
        return sum(piece.size for piece in self.boundaries())

    def project(self, point):
        """Return the boundary point closest to ``point``, or None if there is no boundary."""
        projector = _BoundaryProjector(self, point)
        projector.walk(self._root)
        return projector.closest


class _BoundaryProjector:
    """Closest-first walk that tracks the closest boundary point seen so far.

    Everything on the far side of a cut is at least ``abs(offset)`` from
    the target, so the cut's own boundary and its far subtree are skipped
    once a closer point is known.
    """

    def __init__(self, tree, target):
        self.tree = tree
        self.target = target
        self.closest = None
        self.distance = math.inf

    def walk(self, index):
        slot = self.tree._slots[index]
        if slot.cut is None:
            return
        offset = slot.cut.hyperplane.offset(self.target)
        if offset > 0.0:
            near, far = slot.plus, slot.minus
        else:
            near, far = slot.minus, slot.plus
        self.walk(near)
        if not abs(offset) < self.distance:
            return
        candidate = self.tree._cut_boundary(index).closest(self.target)
        if candidate is not None:
            distance = self.target.distance(candidate)
            if distance < self.distance:
                self.closest = candidate
                self.distance = distance
        self.walk(far)


__all__ = ['RegionBSPTree', 'RegionCutRule', 'RegionCutBoundary']
