# octree/__init__.py
"""
Octree エンジン本体。

- OctreeNode: 格納方式（array / map / linear）でパラメータ化した共通エンジン
- Octree: ルート + 設定 + 警告 sink の束ね
- traversal / search / analysis: 読み取り専用の再帰走査
"""
from .analysis import TreeStatistics, format_statistics, get_statistics
from .node import OctreeNode, warn_sink
from .octant import child_bounds, get_octant, midpoint
from .search import range_query
from .storage import STORAGE_KINDS, ArrayChildren, LinearChildren, MapChildren, make_storage
from .traversal import collect_all_points, collect_node_boxes, describe, iter_points
from .tree import Octree

__all__ = [
    "ArrayChildren",
    "LinearChildren",
    "MapChildren",
    "Octree",
    "OctreeNode",
    "STORAGE_KINDS",
    "TreeStatistics",
    "child_bounds",
    "collect_all_points",
    "collect_node_boxes",
    "describe",
    "format_statistics",
    "get_octant",
    "get_statistics",
    "iter_points",
    "make_storage",
    "midpoint",
    "range_query",
    "warn_sink",
]
