# octree/octant.py
"""
オクタント判定と子バウンディングの導出（全ストレージ共通）。

- bit0: x が中点より大きい / bit1: y / bit2: z
- 中点ちょうどの点は下側に入る（`>` で比較、`>=` ではない）
"""
from __future__ import annotations
from typing import List

from octree_bench.model.models import AABB3D, Point3D

ROOT_CODE = 1


def midpoint(box: AABB3D) -> Point3D:
    return box.center()


def get_octant(box: AABB3D, p: Point3D) -> int:
    c = midpoint(box)
    idx = 0
    if p.x > c.x:
        idx |= 1
    if p.y > c.y:
        idx |= 2
    if p.z > c.z:
        idx |= 4
    return idx


def child_bounds(box: AABB3D, octant: int) -> AABB3D:
    """octant 番目の子の AABB。8 個で親をすき間・重なりなく埋める"""
    if not 0 <= octant < 8:
        raise ValueError(f"octant must be in 0..7: {octant}")
    mn, mx = box.min, box.max
    c = midpoint(box)
    return AABB3D(
        min=Point3D(
            c.x if octant & 1 else mn.x,
            c.y if octant & 2 else mn.y,
            c.z if octant & 4 else mn.z,
        ),
        max=Point3D(
            mx.x if octant & 1 else c.x,
            mx.y if octant & 2 else c.y,
            mx.z if octant & 4 else c.z,
        ),
    )


# --- 線形化キー（locational code）------------------------------------
# ルートは 1。子は親コードの下位に 3bit ずつオクタントを積む。

def locational_code(parent_code: int, octant: int) -> int:
    return (parent_code << 3) | octant


def code_depth(code: int) -> int:
    if code < ROOT_CODE:
        raise ValueError(f"invalid locational code: {code}")
    return (code.bit_length() - 1) // 3


def code_path(code: int) -> List[int]:
    """ルートからそのノードまでのオクタント列"""
    path = []
    for _ in range(code_depth(code)):
        path.append(code & 7)
        code >>= 3
    path.reverse()
    return path
