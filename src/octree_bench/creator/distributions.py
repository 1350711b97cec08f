from __future__ import annotations
from typing import Callable, Dict, List, Optional

import numpy as np

from octree_bench.model.models import AABB3D, Point3D


def _to_points(arr: np.ndarray) -> List[Point3D]:
    return [Point3D(float(x), float(y), float(z)) for x, y, z in arr]


def random_points(num_points: int, bounds: AABB3D, seed: Optional[int] = None) -> List[Point3D]:
    """各軸一様乱数"""
    if num_points <= 0:
        return []
    rng = np.random.default_rng(seed)
    lo = np.array(bounds.min.as_tuple(), dtype=float)
    hi = np.array(bounds.max.as_tuple(), dtype=float)
    return _to_points(rng.uniform(lo, hi, size=(num_points, 3)))


def grid_points(points_per_side: int, bounds: AABB3D) -> List[Point3D]:
    """両端を含む等間隔の格子。x → y → z の順で z が最内ループ"""
    if points_per_side <= 0:
        return []
    if points_per_side == 1:
        return [bounds.min]
    xs = np.linspace(bounds.min.x, bounds.max.x, points_per_side)
    ys = np.linspace(bounds.min.y, bounds.max.y, points_per_side)
    zs = np.linspace(bounds.min.z, bounds.max.z, points_per_side)
    gx, gy, gz = np.meshgrid(xs, ys, zs, indexing="ij")
    return _to_points(np.stack([gx.ravel(), gy.ravel(), gz.ravel()], axis=1))


def spiral_points(num_points: int, bounds: AABB3D) -> List[Point3D]:
    """
    中心から z 方向に伸びる螺旋。半径は最小辺の半分から 0 まで線形に縮む。
    z は箱からはみ出すことがある（クランプしない。挿入時に捨てられる）。
    """
    if num_points <= 0:
        return []
    c = bounds.center()
    radius = min(bounds.width(), bounds.height(), bounds.depth()) / 2
    i = np.arange(num_points, dtype=float)
    t = i * 0.1
    r = radius * (1.0 - i / num_points)
    arr = np.stack([c.x + r * np.cos(t), c.y + r * np.sin(t), c.z + t * 0.1], axis=1)
    return _to_points(arr)


def grid_side_for(num_points: int) -> int:
    """num_points 以下に収まる立方格子の 1 辺の点数"""
    if num_points <= 0:
        return 0
    side = int(round(num_points ** (1.0 / 3.0)))
    while side ** 3 > num_points:
        side -= 1
    while (side + 1) ** 3 <= num_points:
        side += 1
    return side


DISTRIBUTIONS: Dict[str, Callable[..., List[Point3D]]] = {
    "random": lambda n, bounds, seed=None: random_points(n, bounds, seed),
    "grid": lambda n, bounds, seed=None: grid_points(grid_side_for(n), bounds),
    "spiral": lambda n, bounds, seed=None: spiral_points(n, bounds),
}


def generate(name: str, num_points: int, bounds: AABB3D, seed: Optional[int] = None) -> List[Point3D]:
    gen = DISTRIBUTIONS.get(name)
    if gen is None:
        raise ValueError(f"Invalid distribution type: {name} (choose from {', '.join(DISTRIBUTIONS)})")
    return gen(num_points, bounds, seed)
