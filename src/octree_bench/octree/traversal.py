# octree/traversal.py
from __future__ import annotations
from typing import TYPE_CHECKING, Iterator, List, Tuple

from octree_bench.model.models import AABB3D, Point3D

if TYPE_CHECKING:
    from .node import OctreeNode


def iter_points(node: "OctreeNode") -> Iterator[Point3D]:
    """前順: 自ノードの buffer → 子（octant 昇順）"""
    yield from node.points
    for _, child in node.storage.items():
        yield from iter_points(child)


def collect_all_points(node: "OctreeNode") -> List[Point3D]:
    return list(iter_points(node))


def iter_node_boxes(node: "OctreeNode", depth: int = 0) -> Iterator[Tuple[AABB3D, int]]:
    yield node.bounds, depth
    for _, child in node.storage.items():
        yield from iter_node_boxes(child, depth + 1)


def collect_node_boxes(node: "OctreeNode") -> List[Tuple[AABB3D, int]]:
    """全ノードの (AABB, 深さ)。ルートが深さ 0"""
    return list(iter_node_boxes(node))


def describe(node: "OctreeNode") -> List[str]:
    """構造ダンプ。出力先は呼び出し側が決める"""
    lines: List[str] = []

    def walk(n: "OctreeNode", depth: int):
        indent = "  " * depth
        mn, mx = n.bounds.min, n.bounds.max
        lines.append(f"{indent}Node bounds: ({mn.x},{mn.y},{mn.z}) to ({mx.x},{mx.y},{mx.z})")
        lines.append(f"{indent}Points: {len(n.points)}")
        lines.append(f"{indent}Active children: {len(n.storage)}")
        for octant, child in n.storage.items():
            lines.append(f"{indent}Child octant {octant}:")
            walk(child, depth + 1)

    walk(node, 0)
    return lines
