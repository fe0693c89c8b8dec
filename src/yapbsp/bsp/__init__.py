"""Generic binary space partitioning engine."""

from .tree import BSPTree, Node, FindNodeCutRule
from .visitor import (VisitOrder, VisitResult, BSPTreeVisitor,
                      ClosestFirstVisitor, FarthestFirstVisitor)
from .boolean import MergeOperator, UNION, INTERSECTION, DIFFERENCE, XOR
from .region import RegionBSPTree, RegionCutRule, RegionCutBoundary

__all__ = ['BSPTree', 'Node', 'FindNodeCutRule',
           'VisitOrder', 'VisitResult', 'BSPTreeVisitor',
           'ClosestFirstVisitor', 'FarthestFirstVisitor',
           'MergeOperator', 'UNION', 'INTERSECTION', 'DIFFERENCE', 'XOR',
           'RegionBSPTree', 'RegionCutRule', 'RegionCutBoundary']
