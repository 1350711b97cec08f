# octree/tree.py
from __future__ import annotations
import logging
from functools import partial
from typing import Iterable, List, Optional, Tuple

from octree_bench.model.models import AABB3D, Point3D
from .analysis import TreeStatistics, format_statistics
from .node import DEFAULT_CAPACITY, DEFAULT_MAX_DEPTH, OctreeNode, Sink, warn_sink
from .storage import make_storage
from .traversal import describe

logger = logging.getLogger(__name__)

TITLES = {
    "array": "Classic Octree Statistics",
    "map": "Octree Statistics (HashMap)",
    "linear": "Octree Statistics (Linear Keys)",
}


class Octree:
    """
    ルートノードと設定をまとめた薄いラッパ。
    - insert / insert_all: 範囲外の点は sink に警告して捨てる
      （既定 sink の警告は insert / insert_all を呼んだ行を指す）
    - 走査系はルートの OctreeNode に委譲
    """

    def __init__(
        self,
        bounds: AABB3D,
        storage: str = "array",
        *,
        capacity: int = DEFAULT_CAPACITY,
        max_depth: int = DEFAULT_MAX_DEPTH,
        sink: Optional[Sink] = None,
    ):
        self.storage = storage
        if sink is None:
            # warn_sink <- OctreeNode.insert <- Octree.insert(_all) <- 呼び出し元
            sink = partial(warn_sink, stacklevel=4)
        self.root = OctreeNode(
            bounds,
            make_storage(storage),
            capacity=capacity,
            max_depth=max_depth,
            sink=sink,
        )
        self.inserted = 0
        self.dropped = 0

    @property
    def bounds(self) -> AABB3D:
        return self.root.bounds

    def _tally(self, ok: bool) -> bool:
        if ok:
            self.inserted += 1
        else:
            self.dropped += 1
        return ok

    def insert(self, p: Point3D) -> bool:
        return self._tally(self.root.insert(p))

    def insert_all(self, points: Iterable[Point3D]) -> int:
        """挿入できた点の数を返す"""
        count = 0
        for p in points:
            # insert と同じ呼び出し段数にする（警告の stacklevel）
            if self._tally(self.root.insert(p)):
                count += 1
        logger.debug("inserted %d points into %s octree (dropped so far: %d)",
                     count, self.storage, self.dropped)
        return count

    def collect_all_points(self) -> List[Point3D]:
        return self.root.collect_all_points()

    def collect_node_boxes(self) -> List[Tuple[AABB3D, int]]:
        return self.root.collect_node_boxes()

    def range_query(self, query_min: Point3D, query_max: Point3D) -> List[Point3D]:
        return self.root.range_query(query_min, query_max)

    def get_statistics(self) -> TreeStatistics:
        return self.root.get_statistics()

    def summary(self) -> str:
        return format_statistics(self.get_statistics(), title=TITLES.get(self.storage, "Octree Statistics"))

    def describe(self) -> List[str]:
        return describe(self.root)
