"""
octree_bench: 格納方式を差し替えられるオクツリーと、その構築ベンチマーク。

- octree: エンジン本体（array / map / linear の子格納）
- creator: 点群の分布生成（random / grid / spiral）
- visualizer: VTK 書き出しと 2D 投影図
"""
from octree_bench.errors import ExportError, OutOfBoundsWarning
from octree_bench.model.models import AABB3D, Point3D
from octree_bench.octree import Octree, OctreeNode, TreeStatistics

__version__ = "0.1.0"

__all__ = [
    "AABB3D",
    "ExportError",
    "Octree",
    "OctreeNode",
    "OutOfBoundsWarning",
    "Point3D",
    "TreeStatistics",
]
