## visitor protocol for walking yapbsp trees

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

"""Tree visitors.

A visitor receives every node reached by :meth:`BSPTree.accept`.  For
each internal node it chooses the order in which the node and its two
subtrees are processed, and it may stop the walk early by returning
``VisitResult.TERMINATE`` from :meth:`BSPTreeVisitor.visit`.
"""

from enum import Enum


class VisitOrder(Enum):
    """Order of processing for an internal node and its children."""
    NODE_MINUS_PLUS = ('node', 'minus', 'plus')
    NODE_PLUS_MINUS = ('node', 'plus', 'minus')
    MINUS_NODE_PLUS = ('minus', 'node', 'plus')
    MINUS_PLUS_NODE = ('minus', 'plus', 'node')
    PLUS_NODE_MINUS = ('plus', 'node', 'minus')
    PLUS_MINUS_NODE = ('plus', 'minus', 'node')
    NONE = ()


class VisitResult(Enum):
    CONTINUE = 'continue'
    TERMINATE = 'terminate'


class BSPTreeVisitor:
    """Base visitor: visits every node, parents before children, minus first."""

    def visit(self, node):
        return VisitResult.CONTINUE

    def visit_order(self, node):
        return VisitOrder.NODE_MINUS_PLUS


class ClosestFirstVisitor(BSPTreeVisitor):
    """Visit the side of each cut that contains ``target`` before the other side."""

    def __init__(self, target):
        self.target = target

    def visit_order(self, node):
        if node.cut_hyperplane.offset(self.target) > 0.0:
            return VisitOrder.PLUS_NODE_MINUS
        return VisitOrder.MINUS_NODE_PLUS


class FarthestFirstVisitor(BSPTreeVisitor):
    """Visit the side of each cut away from ``target`` before the side containing it."""

    def __init__(self, target):
        self.target = target

    def visit_order(self, node):
        if node.cut_hyperplane.offset(self.target) < 0.0:
            return VisitOrder.PLUS_NODE_MINUS
        return VisitOrder.MINUS_NODE_PLUS


__all__ = ['VisitOrder', 'VisitResult', 'BSPTreeVisitor',
           'ClosestFirstVisitor', 'FarthestFirstVisitor']
