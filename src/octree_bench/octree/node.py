# octree/node.py
from __future__ import annotations
import warnings
from typing import Callable, Dict, List, Optional, Tuple

from octree_bench.errors import OutOfBoundsWarning
from octree_bench.model.models import AABB3D, Point3D
from .octant import child_bounds, get_octant
from .storage import ChildStorage, make_storage
from . import analysis, search, traversal

Sink = Callable[[str], None]

DEFAULT_CAPACITY = 1
DEFAULT_MAX_DEPTH = 32


def warn_sink(message: str, stacklevel: int = 3) -> None:
    """
    既定の sink。stacklevel は呼び出し元（insert を呼んだ側）を指すように渡す。
    既定の警告フィルタでは同じ場所・同じ文面の警告は 1 回しか表示されない。
    全件見たいときは warnings.simplefilter("always") か独自の sink を使う。
    """
    warnings.warn(message, OutOfBoundsWarning, stacklevel=stacklevel)


class OctreeNode:
    """
    オクツリーのノード（格納方式は storage で差し替え）。

    - points: まだ子に配られていない点（overflow buffer）
    - 子が 1 つも無ければリーフ（buffer の点数とは無関係）
    - capacity を超えたら subdivide。ただし max_depth のノードは分割しない
    """

    def __init__(
        self,
        bounds: AABB3D,
        storage: Optional[ChildStorage] = None,
        *,
        depth: int = 0,
        capacity: int = DEFAULT_CAPACITY,
        max_depth: int = DEFAULT_MAX_DEPTH,
        sink: Optional[Sink] = None,
    ):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1: {capacity}")
        if max_depth < 0:
            raise ValueError(f"max_depth must be >= 0: {max_depth}")
        self.bounds = bounds
        self.storage: ChildStorage = storage if storage is not None else make_storage("array")
        self.points: List[Point3D] = []
        self.depth = depth
        self.capacity = capacity
        self.max_depth = max_depth
        self.sink: Sink = sink if sink is not None else warn_sink

    @property
    def kind(self) -> str:
        return self.storage.kind

    def __repr__(self) -> str:
        return (f"OctreeNode(kind={self.kind}, depth={self.depth}, "
                f"points={len(self.points)}, children={len(self.storage)})")

    # --- 構造 ---------------------------------------------------------

    def is_leaf(self) -> bool:
        return len(self.storage) == 0

    def contains(self, p: Point3D) -> bool:
        return self.bounds.contains(p)

    def get_octant(self, p: Point3D) -> int:
        return get_octant(self.bounds, p)

    def child(self, octant: int) -> Optional["OctreeNode"]:
        return self.storage.get(octant)

    def children(self) -> List[Tuple[int, "OctreeNode"]]:
        """生きている子を octant 昇順で"""
        return list(self.storage.items())

    def _make_child(self, octant: int) -> "OctreeNode":
        child = OctreeNode(
            child_bounds(self.bounds, octant),
            self.storage.spawn(octant),
            depth=self.depth + 1,
            capacity=self.capacity,
            max_depth=self.max_depth,
            sink=self.sink,
        )
        self.storage.put(octant, child)
        return child

    # --- 挿入 ---------------------------------------------------------

    def insert(self, p: Point3D) -> bool:
        """範囲外なら sink に警告を流して捨てる（例外にはしない）。挿入できたら True"""
        if not self.contains(p):
            self.sink(f"Warning: Point ({p.x}, {p.y}, {p.z}) is outside node bounds")
            return False

        if self.is_leaf():
            self.points.append(p)
            if len(self.points) > self.capacity and self.depth < self.max_depth:
                self.subdivide()
            return True

        octant = self.get_octant(p)
        child = self.storage.get(octant)
        if child is None:
            child = self._make_child(octant)
        return child.insert(p)

    def subdivide(self) -> None:
        groups: Dict[int, List[Point3D]] = {}
        for p in self.points:
            groups.setdefault(self.get_octant(p), []).append(p)

        for octant in self.storage.octants_for_subdivision(groups):
            if self.storage.get(octant) is None:
                self._make_child(octant)

        self.points = []
        for octant in sorted(groups):
            child = self.storage.get(octant)
            for p in groups[octant]:
                child.insert(p)

    # --- 走査（読み取り専用）------------------------------------------

    def collect_all_points(self) -> List[Point3D]:
        return traversal.collect_all_points(self)

    def collect_node_boxes(self) -> List[Tuple[AABB3D, int]]:
        return traversal.collect_node_boxes(self)

    def range_query(self, query_min: Point3D, query_max: Point3D) -> List[Point3D]:
        return search.range_query(self, query_min, query_max)

    def get_statistics(self) -> analysis.TreeStatistics:
        return analysis.get_statistics(self)

    def summary(self, title: str = "Octree Statistics") -> str:
        return analysis.format_statistics(self.get_statistics(), title=title)
