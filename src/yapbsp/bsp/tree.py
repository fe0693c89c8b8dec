## dimension-agnostic binary space partitioning trees

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
Binary space partitioning trees.

A ``BSPTree`` is a recursive subdivision of space.  Every node owns a
convex cell (its *node region*, the intersection of the half-spaces
implied by its ancestors' cuts).  A node is either

- a **leaf**, which carries an attribute and has no cut and no
  children, or
- **internal**, which carries a cut (a ``HyperplaneConvexSubset``
  restricted to the node region) and exactly two children, ``minus``
  and ``plus``, one for each side of the cut.

Nodes are stored in an arena owned by the tree: a list of slot records
that refer to one another by index.  ``Node`` objects handed out to
callers are light handles ``(tree, index, record)``; a handle whose slot
has been released (or whose tree swapped in a new arena after an
in-place boolean operation) is *stale* and raises
``TreeStructureError`` when used.  Because nodes never point back at
their tree, copying a tree is a plain arena copy.

The tree is geometry agnostic.  It reaches the geometry only through
the contracts in :mod:`yapbsp.partition`.
"""

import logging
from enum import Enum

from ..errors import TreeStructureError
from ..partition import HyperplaneLocation, SplitLocation, convex_pieces
from .visitor import VisitResult, VisitOrder

logger = logging.getLogger(__name__)


class FindNodeCutRule(Enum):
    """What :meth:`BSPTree.find_node` does with a point lying on a cut."""
    NODE = 'node'
    MINUS = 'minus'
    PLUS = 'plus'


class _Slot:
    """Arena record for one node."""

    __slots__ = ('cut', 'minus', 'plus', 'parent', 'attribute', 'gen', 'live')

    def __init__(self):
        self.cut = None
        self.minus = None
        self.plus = None
        self.parent = None
        self.attribute = None
        self.gen = 0
        self.live = False


class Node:
    """Handle on a node stored in a :class:`BSPTree`."""

    __slots__ = ('_tree', '_index', '_record', '_gen')

    def __init__(self, tree, index):
        record = tree._slots[index]
        self._tree = tree
        self._index = index
        self._record = record
        self._gen = record.gen

    def _slot(self):
        self._tree._index_of(self)
        return self._record

    @property
    def tree(self):
        return self._tree

    @property
    def index(self):
        return self._index

    @property
    def parent(self):
        parent = self._slot().parent
        return None if parent is None else Node(self._tree, parent)

    @property
    def depth(self):
        return self._tree._depth(self._tree._index_of(self))

    @property
    def cut_subset(self):
        return self._slot().cut

    @property
    def cut_hyperplane(self):
        cut = self._slot().cut
        return None if cut is None else cut.hyperplane

    @property
    def minus(self):
        slot = self._slot()
        return None if slot.cut is None else Node(self._tree, slot.minus)

    @property
    def plus(self):
        slot = self._slot()
        return None if slot.cut is None else Node(self._tree, slot.plus)

    def get_children(self):
        """Return ``(minus, plus)``; raises ``TreeStructureError`` on a leaf."""
        minus, plus = self._tree._children(self._tree._index_of(self))
        return Node(self._tree, minus), Node(self._tree, plus)

    @property
    def attribute(self):
        return self._slot().attribute

    @attribute.setter
    def attribute(self, value):
        self._slot().attribute = value

    @property
    def is_leaf(self):
        return self._slot().cut is None

    @property
    def is_internal(self):
        return self._slot().cut is not None

    @property
    def is_root(self):
        return self._slot().parent is None

    @property
    def is_minus(self):
        parent = self._slot().parent
        return parent is not None and self._tree._slots[parent].minus == self._index

    @property
    def is_plus(self):
        parent = self._slot().parent
        return parent is not None and self._tree._slots[parent].plus == self._index

    def cut(self, hyperplane, *args, **kwargs):
        """Cut this node with ``hyperplane``.

        Any existing subtree is discarded first.  The hyperplane is
        restricted to the node region; if nothing of it remains the node
        is left a leaf and False is returned.
        """
        return self._tree._cut_node(self._tree._index_of(self), hyperplane, *args, **kwargs)

    def insert_cut(self, hyperplane):
        """Cut this node with ``hyperplane`` while keeping its subtree.

        The existing subtree is split by the new cut and its halves become
        the new children.  Returns False if the hyperplane misses the
        node region.
        """
        return self._tree._insert_cut(self._tree._index_of(self), hyperplane)

    def clear_cut(self):
        """Turn this node back into a leaf; returns True if it had a cut."""
        return self._tree._clear_cut(self._tree._index_of(self))

    def trim(self, subset):
        """Restrict ``subset`` to this node's region, or return None."""
        return self._tree._trim(self._tree._index_of(self), subset)

    def count(self):
        return self._tree._count(self._tree._index_of(self))

    def height(self):
        return self._tree._height(self._tree._index_of(self))

    def nodes(self):
        """Iterate over this node's subtree in pre-order."""
        return self._tree._iter_nodes(self._tree._index_of(self))

    def __eq__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        return (self._tree is other._tree and self._index == other._index
                and self._record is other._record and self._gen == other._gen)

    def __hash__(self):
        return hash((id(self._tree), self._index, self._gen))

    def __repr__(self):
        if not self._tree._is_current(self):
            return 'Node[stale]'
        slot = self._record
        if slot.cut is None:
            return 'Node[depth= {}, attribute= {}]'.format(
                self.depth, _attribute_name(slot.attribute))
        return 'Node[depth= {}, cut= {}]'.format(self.depth, slot.cut)


def _attribute_name(attribute):
    return getattr(attribute, 'name', attribute)


class BSPTree:
    """A binary space partitioning tree with arbitrary leaf attributes.

    The plain tree attaches no meaning to attributes; cut children simply
    inherit the attribute of the leaf they replace, and merging combines
    leaf attributes with a caller-supplied function.  See
    :class:`yapbsp.bsp.region.RegionBSPTree` for the inside/outside
    specialization.
    """

    def __init__(self, attribute=None):
        self._slots = []
        self._free = []
        self._root = self._alloc(None, attribute)

    def _create(self):
        """Return a new single-leaf tree of the same type."""
        return type(self)()

    ## arena management

    def _alloc(self, parent, attribute=None):
        if self._free:
            index = self._free.pop()
            slot = self._slots[index]
        else:
            index = len(self._slots)
            slot = _Slot()
            self._slots.append(slot)
        slot.cut = None
        slot.minus = None
        slot.plus = None
        slot.parent = parent
        slot.attribute = attribute
        slot.live = True
        return index

    def _release(self, index):
        slot = self._slots[index]
        slot.live = False
        slot.gen += 1
        slot.cut = None
        slot.minus = None
        slot.plus = None
        slot.parent = None
        slot.attribute = None
        self._free.append(index)

    def _release_subtree(self, index):
        # children that were adopted elsewhere have a new parent and survive
        stack = [index]
        while stack:
            current = stack.pop()
            slot = self._slots[current]
            if slot.cut is not None:
                for child in (slot.minus, slot.plus):
                    child_slot = self._slots[child]
                    if child_slot.live and child_slot.parent == current:
                        stack.append(child)
            self._release(current)

    def _is_current(self, node):
        if node._tree is not self:
            return False
        index = node._index
        return (0 <= index < len(self._slots) and self._slots[index] is node._record
                and node._record.live and node._record.gen == node._gen)

    def _index_of(self, node):
        if node._tree is not self:
            raise TreeStructureError('node belongs to a different tree: {!r}'.format(node))
        if not self._is_current(node):
            raise TreeStructureError('node is no longer part of this tree (index {})'.format(node._index))
        return node._index

    def _check_local(self, node):
        if not isinstance(node, Node):
            raise TreeStructureError('bad node: {!r}'.format(node))
        return self._index_of(node)

    def _children(self, index):
        slot = self._slots[index]
        if slot.cut is None:
            raise TreeStructureError('leaf nodes have no children')
        return slot.minus, slot.plus

    def _depth(self, index):
        depth = 0
        parent = self._slots[index].parent
        while parent is not None:
            depth += 1
            parent = self._slots[parent].parent
        return depth

    def _link(self, cut, minus, plus):
        """Return a new detached internal node over detached subtrees."""
        index = self._alloc(None)
        slot = self._slots[index]
        slot.cut = cut
        slot.minus = minus
        slot.plus = plus
        self._slots[minus].parent = index
        self._slots[plus].parent = index
        return index

    def _join(self, cut, minus, plus):
        """Like :meth:`_link`, but collapse children that are equal leaves."""
        ms = self._slots[minus]
        ps = self._slots[plus]
        if ms.cut is None and ps.cut is None and ms.attribute == ps.attribute:
            attribute = ms.attribute
            self._release(minus)
            self._release(plus)
            return self._alloc(None, attribute)
        return self._link(cut, minus, plus)

    def _take(self, source, index):
        """Move a subtree of this tree out of its parent, or copy one from ``source``."""
        if source is self:
            self._slots[index].parent = None
            return index
        return self._copy_from(source, index, None)

    def _copy_from(self, source, index, parent):
        src = source._slots[index]
        new = self._alloc(parent, src.attribute)
        if src.cut is not None:
            minus = self._copy_from(source, src.minus, new)
            plus = self._copy_from(source, src.plus, new)
            slot = self._slots[new]
            slot.cut = src.cut
            slot.minus = minus
            slot.plus = plus
        return new

    def _install_root(self, index):
        old = self._root
        self._root = index
        self._slots[index].parent = None
        if old != index:
            self._release_subtree(old)

    def _assume(self, other):
        """Replace this tree's arena with ``other``'s; outstanding handles go stale."""
        for slot in self._slots:
            slot.live = False
            slot.gen += 1
        self._slots = other._slots
        self._free = other._free
        self._root = other._root
        other._slots = []
        other._free = []
        other._root = other._alloc(None)

    ## hooks for specialized trees

    def _child_attributes(self, index, *args, **kwargs):
        """Attributes for the (minus, plus) leaves created by cutting ``index``."""
        attribute = self._slots[index].attribute
        return attribute, attribute

    def _cleared_attribute(self, index):
        """Attribute for a node whose cut has just been removed."""
        return None

    def _extract_attribute(self):
        """Attribute given to the side branches dropped by :meth:`extract`."""
        return None

    ## structure queries

    @property
    def root(self):
        return Node(self, self._root)

    def count(self):
        return self._count(self._root)

    def height(self):
        return self._height(self._root)

    def _count(self, index):
        total = 0
        stack = [index]
        while stack:
            slot = self._slots[stack.pop()]
            total += 1
            if slot.cut is not None:
                stack.append(slot.minus)
                stack.append(slot.plus)
        return total

    def _height(self, index):
        slot = self._slots[index]
        if slot.cut is None:
            return 0
        return 1 + max(self._height(slot.minus), self._height(slot.plus))

    def nodes(self):
        """Iterate over every node in pre-order (node, minus subtree, plus subtree)."""
        return self._iter_nodes(self._root)

    def _iter_nodes(self, index):
        stack = [index]
        while stack:
            current = stack.pop()
            slot = self._slots[current]
            yield Node(self, current)
            if slot.cut is not None:
                stack.append(slot.plus)
                stack.append(slot.minus)

    def _leaf_indices(self, index=None):
        stack = [self._root if index is None else index]
        while stack:
            current = stack.pop()
            slot = self._slots[current]
            if slot.cut is None:
                yield current
            else:
                stack.append(slot.plus)
                stack.append(slot.minus)

    def accept(self, visitor):
        """Walk the tree with ``visitor`` in the order it requests."""
        self._accept(self._root, visitor)

    def _accept(self, index, visitor):
        node = Node(self, index)
        slot = self._slots[index]
        if slot.cut is None:
            return visitor.visit(node) == VisitResult.TERMINATE
        order = visitor.visit_order(node)
        if order is None:
            order = VisitOrder.NODE_MINUS_PLUS
        for step in order.value:
            if step == 'node':
                if visitor.visit(node) == VisitResult.TERMINATE:
                    return True
            elif step == 'minus':
                if self._accept(slot.minus, visitor):
                    return True
            elif self._accept(slot.plus, visitor):
                return True
        return False

    def find_node(self, point, cut_rule=FindNodeCutRule.NODE):
        """Return the deepest node whose region contains ``point``.

        A point lying on a cut stops the search at that node when
        ``cut_rule`` is ``NODE``, and otherwise follows the named side.
        """
        index = self._root
        while True:
            slot = self._slots[index]
            if slot.cut is None:
                return Node(self, index)
            location = slot.cut.hyperplane.classify(point)
            if location == HyperplaneLocation.ON:
                if cut_rule == FindNodeCutRule.NODE:
                    return Node(self, index)
                location = (HyperplaneLocation.MINUS if cut_rule == FindNodeCutRule.MINUS
                            else HyperplaneLocation.PLUS)
            index = slot.minus if location == HyperplaneLocation.MINUS else slot.plus

    ## cutting and insertion

    def _trim(self, index, subset):
        child = index
        parent = self._slots[index].parent
        while parent is not None and subset is not None:
            pslot = self._slots[parent]
            split = subset.split(pslot.cut.hyperplane)
            subset = split.minus if pslot.minus == child else split.plus
            child = parent
            parent = pslot.parent
        return subset

    def _set_cut(self, index, subset, *args, **kwargs):
        minus_attr, plus_attr = self._child_attributes(index, *args, **kwargs)
        slot = self._slots[index]
        slot.cut = subset
        slot.minus = self._alloc(index, minus_attr)
        slot.plus = self._alloc(index, plus_attr)
        slot.attribute = None

    def _clear_cut(self, index):
        slot = self._slots[index]
        if slot.cut is None:
            return False
        for child in (slot.minus, slot.plus):
            self._release_subtree(child)
        slot.cut = None
        slot.minus = None
        slot.plus = None
        slot.attribute = self._cleared_attribute(index)
        return True

    def _cut_node(self, index, hyperplane, *args, **kwargs):
        self._clear_cut(index)
        subset = self._trim(index, hyperplane.span())
        if subset is None:
            logger.debug('cut rejected: %s does not intersect the region of node %d',
                         hyperplane, index)
            return False
        self._set_cut(index, subset, *args, **kwargs)
        return True

    def _insert_cut(self, index, hyperplane):
        subset = self._trim(index, hyperplane.span())
        if subset is None:
            logger.debug('insert_cut rejected: %s does not intersect the region of node %d',
                         hyperplane, index)
            return False
        slot = self._slots[index]
        if slot.cut is None:
            self._set_cut(index, subset)
            return True
        old_minus, old_plus = slot.minus, slot.plus
        minus, plus = self._split_subtree(self, index, subset)
        # the old node record is reused for the new cut
        for child in (old_minus, old_plus):
            if self._slots[child].live and self._slots[child].parent == index:
                self._release_subtree(child)
        slot.cut = subset
        slot.minus = minus
        slot.plus = plus
        self._slots[minus].parent = index
        self._slots[plus].parent = index
        return True

    def insert(self, subsets, *args, **kwargs):
        """Insert a convex subset, or each convex piece of ``subsets``, into the tree.

        Each piece is pushed down from the root, split by every cut it
        crosses.  When a piece reaches a leaf, the leaf is cut by the
        piece's whole hyperplane restricted to that leaf's region.  A
        piece that lies on an existing cut's hyperplane adds nothing, so
        inserting the same boundary twice is a no-op.
        """
        for piece in convex_pieces(subsets):
            self._insert_convex(self._root, piece, piece.hyperplane.span(), args, kwargs)

    def _insert_convex(self, index, piece, trimmed, args, kwargs):
        slot = self._slots[index]
        if slot.cut is None:
            self._set_cut(index, trimmed, *args, **kwargs)
            return
        cut_hyperplane = slot.cut.hyperplane
        piece_split = piece.split(cut_hyperplane)
        if piece_split.location == SplitLocation.NEITHER:
            return
        trimmed_split = trimmed.split(cut_hyperplane)
        minus, plus = slot.minus, slot.plus
        if piece_split.minus is not None and trimmed_split.minus is not None:
            self._insert_convex(minus, piece_split.minus, trimmed_split.minus, args, kwargs)
        if piece_split.plus is not None and trimmed_split.plus is not None:
            self._insert_convex(plus, piece_split.plus, trimmed_split.plus, args, kwargs)

    ## copying

    def copy(self):
        """Return a deep, compacted copy with an independent lifetime."""
        out = self._create()
        out._install_root(out._copy_from(self, self._root, None))
        return out

    def extract(self, node):
        """Return a new tree holding ``node``'s subtree and the path above it.

        Ancestor cuts are kept so that the subtree keeps its region; the
        branches leading away from ``node`` become leaves.
        """
        index = self._check_local(node)
        out = self._create()
        current = out._copy_from(self, index, None)
        child = index
        parent = self._slots[index].parent
        while parent is not None:
            pslot = self._slots[parent]
            other = out._alloc(None, self._extract_attribute())
            if pslot.minus == child:
                current = out._link(pslot.cut, current, other)
            else:
                current = out._link(pslot.cut, other, current)
            child = parent
            parent = pslot.parent
        out._install_root(current)
        return out

    ## whole-tree transformations

    def transform(self, transform):
        """Apply ``transform`` to every cut in place."""
        for slot in self._slots:
            if slot.live and slot.cut is not None:
                slot.cut = slot.cut.transform(transform)

    def condense(self):
        """Collapse internal nodes whose children are leaves with equal attributes.

        Returns True if the tree changed.
        """
        return self._condense(self._root)

    def _condense(self, index):
        slot = self._slots[index]
        if slot.cut is None:
            return False
        changed = self._condense(slot.minus)
        changed = self._condense(slot.plus) or changed
        ms = self._slots[slot.minus]
        ps = self._slots[slot.plus]
        if ms.cut is None and ps.cut is None and ms.attribute == ps.attribute:
            attribute = ms.attribute
            self._release(slot.minus)
            self._release(slot.plus)
            slot.cut = None
            slot.minus = None
            slot.plus = None
            slot.attribute = attribute
            return True
        return changed

    ## splitting and merging

    def _split_subtree(self, source, index, partitioner):
        """Split the subtree at ``source[index]`` by the convex subset ``partitioner``.

        The two halves are built in this tree as detached subtrees and
        returned as ``(minus, plus)`` indices.  ``partitioner`` must already
        be restricted to the subtree's region.  Subtrees lying entirely on
        one side are moved (when ``source`` is this tree) or copied whole
        instead of being split again.
        """
        src = source._slots[index]
        if src.cut is None:
            return self._alloc(None, src.attribute), self._alloc(None, src.attribute)

        cut = src.cut
        cut_hyperplane = cut.hyperplane
        part_split = partitioner.split(cut_hyperplane)
        location = part_split.location

        if location == SplitLocation.NEITHER:
            # partitioner lies on the cut hyperplane
            if partitioner.hyperplane.similar_orientation(cut_hyperplane):
                return self._take(source, src.minus), self._take(source, src.plus)
            return self._take(source, src.plus), self._take(source, src.minus)

        cut_split = cut.split(partitioner.hyperplane)

        if location == SplitLocation.MINUS:
            minus, plus = self._split_subtree(source, src.minus, partitioner)
            if cut_split.location != SplitLocation.PLUS:
                return self._link(cut, minus, self._take(source, src.plus)), plus
            return minus, self._link(cut, plus, self._take(source, src.plus))

        if location == SplitLocation.PLUS:
            minus, plus = self._split_subtree(source, src.plus, partitioner)
            if cut_split.location != SplitLocation.PLUS:
                return self._link(cut, self._take(source, src.minus), minus), plus
            return minus, self._link(cut, self._take(source, src.minus), plus)

        minus_minus, minus_plus = self._split_subtree(source, src.minus, part_split.minus)
        plus_minus, plus_plus = self._split_subtree(source, src.plus, part_split.plus)
        return (self._reassemble(cut_split.minus, minus_minus, plus_minus),
                self._reassemble(cut_split.plus, minus_plus, plus_plus))

    def _reassemble(self, cut, minus, plus):
        if cut is not None:
            return self._link(cut, minus, plus)
        # the partitioner crossed the cut but the cut did not cross the
        # partitioner; precision disagreement, keep the minus side
        logger.debug('split precision mismatch, dropping plus subtree %d', plus)
        self._release_subtree(plus)
        return minus

    def merge(self, other, combine):
        """Return a new tree combining this tree with ``other`` cell by cell.

        ``combine(a, b)`` maps a pair of leaf attributes to the attribute
        of the corresponding output leaf.  Neither input is modified.
        """
        out = self._create()
        root = out._merge_nodes(self, self._root, other, other._root, combine)
        out._install_root(root)
        logger.debug('merged trees of %d and %d nodes into %d nodes',
                     self.count(), other.count(), out.count())
        return out

    def _merge_nodes(self, a_tree, a, b_tree, b, combine):
        a_slot = a_tree._slots[a]
        b_slot = b_tree._slots[b]
        if a_slot.cut is None or b_slot.cut is None:
            return self._merge_leaf(a_tree, a, b_tree, b, combine)

        minus, plus = self._split_subtree(b_tree, b, a_slot.cut)
        result_minus = self._merge_nodes(a_tree, a_slot.minus, self, minus, combine)
        self._discard(minus, result_minus)
        result_plus = self._merge_nodes(a_tree, a_slot.plus, self, plus, combine)
        self._discard(plus, result_plus)
        return self._join(a_slot.cut, result_minus, result_plus)

    def _discard(self, temporary, result):
        """Release a temporary subtree unless the merge result adopted it."""
        slot = self._slots[temporary]
        if temporary != result and slot.live and slot.parent is None:
            self._release_subtree(temporary)

    def _merge_leaf(self, a_tree, a, b_tree, b, combine):
        """Merge where at least one side is a leaf, broadcasting the leaf."""
        a_slot = a_tree._slots[a]
        b_slot = b_tree._slots[b]
        if a_slot.cut is None and b_slot.cut is None:
            return self._alloc(None, combine(a_slot.attribute, b_slot.attribute))
        if a_slot.cut is None:
            minus = self._merge_nodes(a_tree, a, b_tree, b_slot.minus, combine)
            plus = self._merge_nodes(a_tree, a, b_tree, b_slot.plus, combine)
            return self._join(b_slot.cut, minus, plus)
        minus = self._merge_nodes(a_tree, a_slot.minus, b_tree, b, combine)
        plus = self._merge_nodes(a_tree, a_slot.plus, b_tree, b, combine)
        return self._join(a_slot.cut, minus, plus)

    ## display

    def tree_string(self, max_depth=8):
        """Return a multi-line, indented rendering of the tree."""
        lines = [type(self).__name__]
        self._tree_lines(self._root, 0, '', max_depth, lines)
        return '\n'.join(lines)

    def _tree_lines(self, index, depth, prefix, max_depth, lines):
        slot = self._slots[index]
        indent = '    ' * depth
        if slot.cut is None:
            lines.append('{}{}[{}]'.format(indent, prefix, _attribute_name(slot.attribute)))
            return
        lines.append('{}{}{}'.format(indent, prefix, slot.cut))
        if depth + 1 > max_depth:
            lines.append('{}    ...'.format(indent))
            return
        self._tree_lines(slot.minus, depth + 1, '[-] ', max_depth, lines)
        self._tree_lines(slot.plus, depth + 1, '[+] ', max_depth, lines)

    def __repr__(self):
        return '{}[count= {}, height= {}]'.format(type(self).__name__, self.count(), self.height())


__all__ = ['BSPTree', 'Node', 'FindNodeCutRule']
