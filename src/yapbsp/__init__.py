# -*- coding: utf-8 -*-
"""Binary space partitioning trees with region boolean algebra.

The generic engine lives in :mod:`yapbsp.bsp`; concrete Euclidean
geometry for one and two dimensions lives in :mod:`yapbsp.euclidean`.
"""

import logging
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("yapbsp")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .errors import BSPError, TreeStructureError, GeometryValueError, ConvergenceError
from .precision import PrecisionContext, EpsilonPrecision, default_precision
from .partition import (
    HyperplaneLocation, SplitLocation, RegionLocation, Split,
    Point, Transform, Hyperplane, HyperplaneConvexSubset,
)

__all__ = [
    '__version__',
    'BSPError', 'TreeStructureError', 'GeometryValueError', 'ConvergenceError',
    'PrecisionContext', 'EpsilonPrecision', 'default_precision',
    'HyperplaneLocation', 'SplitLocation', 'RegionLocation', 'Split',
    'Point', 'Transform', 'Hyperplane', 'HyperplaneConvexSubset',
]
