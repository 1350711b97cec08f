# octree/analysis.py
from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .node import OctreeNode


@dataclass(frozen=True)
class TreeStatistics:
    total_nodes: int
    leaf_nodes: int
    total_points: int
    max_depth: int

    @property
    def internal_nodes(self) -> int:
        return self.total_nodes - self.leaf_nodes

    @property
    def average_points_per_leaf(self) -> float:
        # リーフ 0 のときは 0 を返す（ゼロ除算しない）
        return self.total_points / self.leaf_nodes if self.leaf_nodes > 0 else 0


def get_statistics(root: "OctreeNode") -> TreeStatistics:
    """ツリー全体を 1 回走査して、ノード数・リーフ数・点数・最大深さを集計"""
    total_nodes = 0
    leaf_nodes = 0
    total_points = 0
    max_depth = 0

    def traverse(node: "OctreeNode", depth=0):
        nonlocal total_nodes, leaf_nodes, total_points, max_depth
        total_nodes += 1
        total_points += len(node.points)
        max_depth = max(max_depth, depth)

        if node.is_leaf():
            leaf_nodes += 1
        else:
            for _, child in node.storage.items():
                traverse(child, depth + 1)

    traverse(root)
    return TreeStatistics(total_nodes, leaf_nodes, total_points, max_depth)


def format_statistics(stats: TreeStatistics, title: str = "Octree Statistics") -> str:
    lines = [
        f"=== {title} ===",
        f"Total nodes: {stats.total_nodes}",
        f"Leaf nodes: {stats.leaf_nodes}",
        f"Internal nodes: {stats.internal_nodes}",
        f"Total points: {stats.total_points}",
        f"Maximum depth: {stats.max_depth}",
        f"Average points per leaf: {stats.average_points_per_leaf:g}",
    ]
    return "\n".join(lines)
