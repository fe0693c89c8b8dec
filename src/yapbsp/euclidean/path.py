## connected chains of line subsets for 2D region boundaries

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
Line paths.

The boundary of a 2D region comes out of the tree as an unordered bag
of line subsets.  :func:`connect_all` links them end to start into
:class:`LinePath` chains: closed loops for bounded boundary components,
open paths that begin and end at infinity for unbounded ones.
"""

import logging
import math

from ..errors import GeometryValueError
from ..precision import default_precision
from .twod import segment_from_points

logger = logging.getLogger(__name__)


class LinePath:
    """An ordered chain of connected line subsets."""

    def __init__(self, elements):
        self._elements = list(elements)

    @staticmethod
    def from_vertices(vertices, precision=None, close=False):
        precision = precision or default_precision()
        points = list(vertices)
        if close and len(points) > 1 and not points[0].eq(points[-1], precision):
            points.append(points[0])
        elements = [segment_from_points(a, b, precision)
                    for a, b in zip(points[:-1], points[1:])]
        return LinePath(elements)

    @property
    def elements(self):
        return list(self._elements)

    def is_empty(self):
        return not self._elements

    @property
    def start(self):
        return self._elements[0].start_point if self._elements else None

    @property
    def end(self):
        return self._elements[-1].end_point if self._elements else None

    def is_infinite(self):
        return any(e.is_infinite() for e in self._elements)

    def is_closed(self):
        if not self._elements or self.is_infinite():
            return False
        precision = self._elements[0].precision
        return self.start.eq(self.end, precision)

    @property
    def size(self):
        return sum(e.size for e in self._elements)

    @property
    def vertices(self):
        """Finite vertices in path order; a closed path repeats its first vertex at the end."""
        result = []
        for e in self._elements:
            if e.start_point is not None:
                result.append(e.start_point)
        if self._elements and self._elements[-1].end_point is not None:
            result.append(self._elements[-1].end_point)
        return result

    def reverse(self):
        return LinePath(e.reverse() for e in reversed(self._elements))

    def simplify(self):
        """Return the path with consecutive collinear elements joined.

        A closed path also joins its last element into its first and is
        rotated to start at its lowest vertex.
        """
        if len(self._elements) < 2:
            return LinePath(self._elements)
        precision = self._elements[0].precision
        closed = self.is_closed()
        merged = [self._elements[0]]
        for element in self._elements[1:]:
            joined = _join(merged[-1], element, precision)
            if joined is None:
                merged.append(element)
            else:
                merged[-1] = joined
        if closed and len(merged) > 1:
            joined = _join(merged[-1], merged[0], precision)
            if joined is not None:
                merged = [joined] + merged[1:-1]
            merged = _rotate_to_min(merged)
        return LinePath(merged)

    def __iter__(self):
        return iter(self._elements)

    def __len__(self):
        return len(self._elements)

    def __repr__(self):
        if self.is_infinite():
            return 'LinePath[elements= {}]'.format(self._elements)
        return 'LinePath[vertices= {}]'.format(self.vertices)


def _turn(incoming, outgoing):
    d_in = incoming.line.direction
    d_out = outgoing.line.direction
    return math.atan2(d_in.cross(d_out), d_in.dot(d_out))


def _sort_key(path):
    start = path.start
    if start is None:
        end = path.end
        return (-math.inf, -math.inf) + (end.sort_key() if end is not None else (math.inf, math.inf))
    return start.sort_key() + (0.0, 0.0)


def _join(first, second, precision):
    """The single subset covering ``first`` then ``second``, or None if they are not collinear."""
    if not first.line.eq(second.line, precision):
        return None
    end = math.inf if second.end_point is None else first.line.abscissa(second.end_point)
    return first.line.subset(first.start, end)


def _rotate_to_min(elements):
    best = min(range(len(elements)), key=lambda i: elements[i].start_point.sort_key())
    return elements[best:] + elements[:best]


def connect_all(subsets, precision=None):
    """Link line subsets end to start into paths.

    Open paths start at pieces whose start is infinite or is not the end
    of any other piece.  The remaining pieces form loops, each rotated to
    start at its lexicographically lowest vertex.  When several pieces
    leave the same vertex, the one turning furthest to the left is taken,
    which keeps touching loops of a counter-clockwise boundary apart.
    Paths are returned sorted by their start point; paths starting at
    infinity come first.
    """
    pieces = list(subsets)
    if not pieces:
        return []
    if precision is None:
        precision = pieces[0].precision
    for piece in pieces:
        if not hasattr(piece, 'start_point'):
            raise GeometryValueError('cannot connect {!r}: not a line subset'.format(piece))

    used = [False] * len(pieces)

    def successor(current):
        end = current.end_point
        if end is None:
            return None
        best = None
        best_turn = -math.inf
        for i, candidate in enumerate(pieces):
            if used[i] or candidate.start_point is None:
                continue
            if candidate.start_point.eq(end, precision):
                turn = _turn(current, candidate)
                if turn > best_turn:
                    best = i
                    best_turn = turn
        return best

    def follow(first):
        used[first] = True
        chain = [pieces[first]]
        nxt = successor(pieces[first])
        while nxt is not None:
            used[nxt] = True
            chain.append(pieces[nxt])
            nxt = successor(pieces[nxt])
        return chain

    def is_head(i):
        start = pieces[i].start_point
        if start is None:
            return True
        return not any(j != i and p.end_point is not None and p.end_point.eq(start, precision)
                       for j, p in enumerate(pieces))

    paths = []
    for i in range(len(pieces)):
        if not used[i] and is_head(i):
            paths.append(LinePath(follow(i)))

    order = sorted(range(len(pieces)), key=lambda i: pieces[i].start_point.sort_key()
                   if pieces[i].start_point is not None else (-math.inf, -math.inf))
    for i in order:
        if used[i]:
            continue
        chain = follow(i)
        path = LinePath(chain)
        if path.is_closed():
            path = LinePath(_rotate_to_min(chain))
        else:
            logger.debug('boundary chain of %d pieces did not close', len(chain))
        paths.append(path)

    paths.sort(key=_sort_key)
    return paths


__all__ = ['LinePath', 'connect_all']
