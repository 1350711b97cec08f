# benchmark.py
from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from octree_bench.config import OctreeConfig
from octree_bench.model.models import Point3D
from octree_bench.octree.analysis import TreeStatistics
from octree_bench.octree.node import Sink
from octree_bench.octree.storage import STORAGE_KINDS
from octree_bench.octree.tree import Octree

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    tree: Octree
    build_seconds: float
    inserted: int
    dropped: int

    @property
    def storage(self) -> str:
        return self.tree.storage

    @property
    def build_ms(self) -> float:
        return self.build_seconds * 1000.0

    def statistics(self) -> TreeStatistics:
        return self.tree.get_statistics()


def build_tree(
    storage: str,
    points: Sequence[Point3D],
    config: OctreeConfig,
    sink: Optional[Sink] = None,
) -> BuildResult:
    """挿入のみを計測（統計やエクスポートは含まない）"""
    tree = Octree(config.bounds, storage, capacity=config.capacity,
                  max_depth=config.max_depth, sink=sink)
    start = time.perf_counter()
    inserted = tree.insert_all(points)
    elapsed = time.perf_counter() - start
    logger.info("%s octree built in %.3f ms (%d inserted, %d dropped)",
                storage, elapsed * 1000.0, inserted, tree.dropped)
    return BuildResult(tree=tree, build_seconds=elapsed, inserted=inserted, dropped=tree.dropped)


def compare(
    points: Sequence[Point3D],
    config: OctreeConfig,
    storages: Iterable[str] = tuple(STORAGE_KINDS),
    sink: Optional[Sink] = None,
) -> List[BuildResult]:
    return [build_tree(s, points, config, sink=sink) for s in storages]


def format_comparison(results: Sequence[BuildResult]) -> str:
    header = f"{'storage':<8} {'build[ms]':>10} {'nodes':>8} {'leaves':>8} {'depth':>6} {'pts/leaf':>9} {'dropped':>8}"
    lines = [header, "-" * len(header)]
    for r in results:
        st = r.statistics()
        lines.append(
            f"{r.storage:<8} {r.build_ms:>10.3f} {st.total_nodes:>8d} {st.leaf_nodes:>8d} "
            f"{st.max_depth:>6d} {st.average_points_per_leaf:>9.3f} {r.dropped:>8d}"
        )
    return "\n".join(lines)
