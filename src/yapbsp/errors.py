## exception taxonomy for yapbsp

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
Errors raised by the partitioning engine and its geometry types.

Three families are distinguished so that callers can react to each in
its own way:

- TreeStructureError: a programmer error that broke a structural
  invariant of a tree (children of a leaf, foreign or stale nodes).
- GeometryValueError: a degenerate geometric input, such as a zero or
  non-finite direction, rejected at construction time.
- ConvergenceError: reserved for iterative numerical helpers.  No
  algorithm in the package iterates yet, so nothing raises it.
"""


class BSPError(Exception):
    """Base class for all yapbsp errors."""

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class TreeStructureError(BSPError):
    """Raised when a tree operation would violate a structural invariant."""
    pass


class GeometryValueError(BSPError, ValueError):
    """Raised when geometry is degenerate where it must not be."""
    pass


class ConvergenceError(BSPError):
    """Non-convergence of an iterative helper.

    Kept so callers can catch it alongside the other families; the
    current algorithms are all direct and never raise it.
    """

    def __init__(self, message, iterations=None, details=None):
        super().__init__(message, details)
        self.iterations = iterations


__all__ = ['BSPError', 'TreeStructureError', 'GeometryValueError', 'ConvergenceError']
