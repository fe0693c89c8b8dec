from yapbsp.bsp import BSPTree
from yapbsp.euclidean.oned import Interval, OrientedPoint, RegionBSPTree1D
from yapbsp.geometry_checks import CheckResult, check_tree_structure, check_region_attributes
from yapbsp.partition import RegionLocation


def sample_tree():
    tree = RegionBSPTree1D.from_intervals([Interval.of(0, 1), Interval.of(2, 3)])
    tree.add(Interval.of(0.5, 2.5))
    return tree


def test_check_result_truthiness():
    assert CheckResult(True)
    assert not CheckResult(False, ['broken'])
    assert CheckResult(True).warnings == []


def test_valid_trees():
    assert check_tree_structure(BSPTree()).ok
    tree = sample_tree()
    result = check_tree_structure(tree)
    assert result.ok, result.warnings
    assert check_region_attributes(tree).ok


def test_after_clear_and_recut():
    tree = sample_tree()
    tree.root.clear_cut()
    tree.root.cut(OrientedPoint.create_positive_facing(1.0))
    assert check_tree_structure(tree).ok
    assert check_region_attributes(tree).ok


def test_detects_bad_parent():
    tree = sample_tree()
    minus = tree.root.minus
    tree._slots[minus.index].parent = None
    result = check_tree_structure(tree)
    assert not result.ok
    assert any('parent' in w for w in result.warnings)


def test_detects_leak():
    tree = sample_tree()
    tree._alloc(None, RegionLocation.INSIDE)
    result = check_tree_structure(tree)
    assert not result.ok
    assert any('unreachable' in w for w in result.warnings)


def test_detects_attribute_on_internal_node():
    tree = sample_tree()
    tree._slots[tree.root.index].attribute = RegionLocation.INSIDE
    assert not check_tree_structure(tree).ok


def test_region_attributes():
    tree = RegionBSPTree1D()
    tree.root.cut(OrientedPoint.create_positive_facing(0.0))
    tree.root.plus.attribute = 'purple'
    result = check_region_attributes(tree)
    assert not result
    assert 'leaves without a region location' in result.warnings[0]
