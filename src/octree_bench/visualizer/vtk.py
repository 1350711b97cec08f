# vtk.py  —  ParaView 用の legacy VTK (ASCII, UNSTRUCTURED_GRID) 書き出し
from __future__ import annotations
import logging
from pathlib import Path
from typing import IO, Sequence, Tuple

import numpy as np

from octree_bench.errors import ExportError
from octree_bench.model.models import AABB3D, Point3D

logger = logging.getLogger(__name__)

VTK_VERTEX = 1
VTK_HEXAHEDRON = 12
POINT_LEVEL = -1  # 点セルのスカラー（箱の深さと区別する）

# VTK_HEXAHEDRON の頂点順: 下面 (z=min) を x → y の順に一周し、上面 (z=max) も同様
HEX_CORNER_BITS = np.array([
    [0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0],
    [0, 0, 1], [1, 0, 1], [1, 1, 1], [0, 1, 1],
], dtype=bool)


def box_corners(box: AABB3D) -> np.ndarray:
    """(8, 3) の隅座標。順番は HEX_CORNER_BITS"""
    mn = np.array(box.min.as_tuple(), dtype=float)
    mx = np.array(box.max.as_tuple(), dtype=float)
    return np.where(HEX_CORNER_BITS, mx, mn)


def write_vtk_stream(
    f: IO[str],
    points: Sequence[Point3D],
    boxes: Sequence[Tuple[AABB3D, int]],
    title: str = "Octree Visualization",
) -> None:
    n_pts, n_boxes = len(points), len(boxes)

    f.write("# vtk DataFile Version 3.0\n")
    f.write(f"{title}\n")
    f.write("ASCII\n")
    f.write("DATASET UNSTRUCTURED_GRID\n\n")

    # 点 + 箱ごとに 8 隅
    f.write(f"POINTS {n_pts + n_boxes * 8} float\n")
    for p in points:
        f.write(f"{p.x:.6f} {p.y:.6f} {p.z:.6f}\n")
    for box, _ in boxes:
        for x, y, z in box_corners(box):
            f.write(f"{x:.6f} {y:.6f} {z:.6f}\n")

    # セル: 点は頂点セル (1+1)、箱は六面体 (8+1)
    n_cells = n_pts + n_boxes
    f.write(f"\nCELLS {n_cells} {n_pts * 2 + n_boxes * 9}\n")
    for i in range(n_pts):
        f.write(f"1 {i}\n")
    for i in range(n_boxes):
        start = n_pts + i * 8
        f.write("8 " + " ".join(str(start + k) for k in range(8)) + "\n")

    f.write(f"\nCELL_TYPES {n_cells}\n")
    f.write(f"{VTK_VERTEX}\n" * n_pts)
    f.write(f"{VTK_HEXAHEDRON}\n" * n_boxes)

    # 深さでの色分け用
    f.write(f"\nCELL_DATA {n_cells}\n")
    f.write("SCALARS OctreeLevel int 1\n")
    f.write("LOOKUP_TABLE default\n")
    f.write(f"{POINT_LEVEL}\n" * n_pts)
    for _, level in boxes:
        f.write(f"{level}\n")


def export_vtk(
    path: str | Path,
    points: Sequence[Point3D],
    boxes: Sequence[Tuple[AABB3D, int]],
    title: str = "Octree Visualization",
) -> Path:
    """
    点リストと (AABB, 深さ) リストを VTK に書き出す。
    開けない/書けない場合は ExportError（ツリーには触らない）。
    """
    p = Path(path)
    try:
        with p.open("w", encoding="utf-8") as f:
            write_vtk_stream(f, points, boxes, title)
    except OSError as e:
        raise ExportError(p, e.strerror or str(e)) from e
    logger.info("exported %d points / %d boxes to %s", len(points), len(boxes), p)
    return p


def export_tree(tree, path: str | Path) -> Path:
    """Octree / OctreeNode をそのまま書き出す"""
    kind = getattr(tree, "storage", None)
    kind = kind if isinstance(kind, str) else getattr(tree, "kind", None)
    title = f"Octree Visualization ({kind})" if kind else "Octree Visualization"
    return export_vtk(path, tree.collect_all_points(), tree.collect_node_boxes(), title)
