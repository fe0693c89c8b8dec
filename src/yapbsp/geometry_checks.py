"""Structural validation helpers for yapbsp trees."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .partition import RegionLocation


@dataclass
class CheckResult:
    ok: bool
    warnings: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.ok


def check_tree_structure(tree) -> CheckResult:
    """Verify the arena invariants of ``tree``.

    Every reachable node must be live and owned by ``tree``.  Leaves have
    no cut and no children, internal nodes have a cut and two children
    that name them as parent, and each child sits one level below its
    parent.  Live slots that cannot be reached from the root are
    reported as leaks.
    """
    problems: List[str] = []
    slots = tree._slots
    seen = set()

    root = tree.root
    if root.tree is not tree:
        problems.append('root handle belongs to another tree')
    if slots[tree._root].parent is not None:
        problems.append(f'root {tree._root} has a parent')

    stack = [(tree._root, 0)]
    while stack:
        index, depth = stack.pop()
        if index in seen:
            problems.append(f'node {index} is reachable twice')
            continue
        seen.add(index)
        slot = slots[index]
        if not slot.live:
            problems.append(f'node {index} is reachable but released')
            continue
        if tree._depth(index) != depth:
            problems.append(f'node {index} has depth {tree._depth(index)}, expected {depth}')
        if slot.cut is None:
            if slot.minus is not None or slot.plus is not None:
                problems.append(f'leaf {index} has children')
            continue
        if slot.minus is None or slot.plus is None:
            problems.append(f'internal node {index} is missing a child')
            continue
        if slot.attribute is not None:
            problems.append(f'internal node {index} carries attribute {slot.attribute}')
        for child in (slot.minus, slot.plus):
            if slots[child].parent != index:
                problems.append(f'child {child} does not name {index} as parent')
            stack.append((child, depth + 1))

    for node in tree.nodes():
        if node.tree is not tree:
            problems.append(f'node {node.index} reports a foreign tree')

    leaked = [i for i, slot in enumerate(slots) if slot.live and i not in seen]
    if leaked:
        problems.append(f'unreachable live nodes: {leaked}')

    return CheckResult(not problems, problems)


def check_region_attributes(tree) -> CheckResult:
    """Verify that every leaf of a region tree is INSIDE or OUTSIDE."""
    bad = [node.index for node in tree.nodes()
           if node.is_leaf and node.attribute not in (RegionLocation.INSIDE, RegionLocation.OUTSIDE)]
    if bad:
        return CheckResult(False, [f'leaves without a region location: {bad}'])
    return CheckResult(True, [])


__all__ = [
    'CheckResult',
    'check_tree_structure',
    'check_region_attributes',
]
