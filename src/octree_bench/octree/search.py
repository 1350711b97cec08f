# octree/search.py
from __future__ import annotations
from typing import TYPE_CHECKING, List, Optional

from octree_bench.model.models import AABB3D, Point3D

if TYPE_CHECKING:
    from .node import OctreeNode


def point_in_range(p: Point3D, query_min: Point3D, query_max: Point3D) -> bool:
    # 両端とも閉区間
    return (
        query_min.x <= p.x <= query_max.x and
        query_min.y <= p.y <= query_max.y and
        query_min.z <= p.z <= query_max.z
    )


def search_range(node: "OctreeNode", query: AABB3D, found=None, stats=None):
    """
    query と交差しない部分木は枝刈りして、範囲内の点を found に集める。
    stats["visited"] に訪問ノード数を数える。
    """
    if found is None:
        found = []
    if stats is None:
        stats = {"visited": 0}

    stats["visited"] += 1
    if not node.bounds.intersects(query):
        return found

    for p in node.points:
        if point_in_range(p, query.min, query.max):
            found.append(p)

    for _, child in node.storage.items():
        search_range(child, query, found, stats)

    return found


def range_query(node: "OctreeNode", query_min: Point3D, query_max: Point3D,
                stats: Optional[dict] = None) -> List[Point3D]:
    """閉じた直方体 [query_min, query_max] に入る点を走査順で返す"""
    return search_range(node, AABB3D(query_min, query_max), found=[], stats=stats)
