"""Euclidean geometry in one and two dimensions."""

from .vector import Vector1D, Vector2D
from .xform import AffineTransform1D, AffineTransform2D
from .oned import OrientedPoint, OrientedPointConvexSubset, Interval, RegionBSPTree1D
from .twod import Line, LineConvexSubset, segment_from_points, RegionBSPTree2D
from .path import LinePath, connect_all

__all__ = ['Vector1D', 'Vector2D', 'AffineTransform1D', 'AffineTransform2D',
           'OrientedPoint', 'OrientedPointConvexSubset', 'Interval', 'RegionBSPTree1D',
           'Line', 'LineConvexSubset', 'segment_from_points', 'RegionBSPTree2D',
           'LinePath', 'connect_all']
