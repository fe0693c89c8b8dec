## epsilon-tolerant floating point comparison for yapbsp

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
Precision contexts.

Every geometric predicate in yapbsp (side-of-hyperplane tests,
intersections, interval bounds) compares real numbers through a
precision context instead of using the raw ``<`` and ``==`` operators.
A context is immutable and is normally shared by reference between all
of the hyperplanes that were built with "the same" tolerance.

The package default tolerance is the module constant ``DEFAULT_EPSILON``.
It can be overridden for a whole process with the ``YAPBSP_EPSILON`` environment variable.
"""

import logging
import math
import os
from abc import ABC, abstractmethod

from .errors import GeometryValueError

logger = logging.getLogger(__name__)

EPSILON_ENV = 'YAPBSP_EPSILON'


def _epsilon_from_env(default=1e-10):
    raw = os.environ.get(EPSILON_ENV)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        value = float('nan')
    if not math.isfinite(value) or value <= 0.0:
        logger.warning("ignoring %s=%r, using default epsilon %g", EPSILON_ENV, raw, default)
        return default
    return value


DEFAULT_EPSILON = _epsilon_from_env()


class PrecisionContext(ABC):
    """Three-way comparison of reals that tolerates floating point noise.

    Subclasses implement :meth:`compare`; every other predicate is
    derived from it so that they are guaranteed to agree.
    """

    @abstractmethod
    def compare(self, a, b):
        """Return -1, 0 or 1 as ``a`` is less than, equal to or greater than ``b``."""
        pass

    def eq(self, a, b):
        return self.compare(a, b) == 0

    def eq_zero(self, a):
        return self.compare(a, 0.0) == 0

    def lt(self, a, b):
        return self.compare(a, b) < 0

    def lte(self, a, b):
        return self.compare(a, b) <= 0

    def gt(self, a, b):
        return self.compare(a, b) > 0

    def gte(self, a, b):
        return self.compare(a, b) >= 0

    def sign(self, a):
        """Return the sign of ``a``, with values equal to zero reported as 0."""
        return self.compare(a, 0.0)

    def max(self, a, b):
        return b if self.lt(a, b) else a

    def min(self, a, b):
        return b if self.gt(a, b) else a


class EpsilonPrecision(PrecisionContext):
    """Precision context that treats values within ``epsilon`` as equal.

    Values that are not equal are ordered as ordinary floats, except that
    NaN sorts after every number (and compares equal only to another NaN).
    """

    __slots__ = ('_epsilon',)

    def __init__(self, epsilon):
        epsilon = float(epsilon)
        if not math.isfinite(epsilon) or epsilon < 0.0:
            raise GeometryValueError('bad precision epsilon: {}'.format(epsilon))
        self._epsilon = epsilon

    @property
    def epsilon(self):
        return self._epsilon

    def compare(self, a, b):
        if a == b or abs(a - b) <= self._epsilon:
            return 0
        a_nan = math.isnan(a)
        b_nan = math.isnan(b)
        if a_nan or b_nan:
            if a_nan and b_nan:
                return 0
            return 1 if a_nan else -1
        return -1 if a < b else 1

    def __eq__(self, other):
        if not isinstance(other, EpsilonPrecision):
            return NotImplemented
        return self._epsilon == other._epsilon

    def __hash__(self):
        return hash((EpsilonPrecision, self._epsilon))

    def __repr__(self):
        return 'EpsilonPrecision(epsilon={})'.format(self._epsilon)


_DEFAULT_PRECISION = EpsilonPrecision(DEFAULT_EPSILON)


def default_precision():
    """Return the shared precision context built from ``DEFAULT_EPSILON``."""
    return _DEFAULT_PRECISION


__all__ = ['DEFAULT_EPSILON', 'EPSILON_ENV', 'PrecisionContext',
           'EpsilonPrecision', 'default_precision']
