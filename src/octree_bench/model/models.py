from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

Vec3 = Tuple[float, float, float]


# --- 幾何 -------------------------------------------------------------

@dataclass(frozen=True)
class Point3D:
    x: float
    y: float
    z: float

    @classmethod
    def of(cls, xyz: Sequence[float]) -> "Point3D":
        """(x, y, z) のシーケンスから生成"""
        x, y, z = xyz
        return cls(float(x), float(y), float(z))

    def as_tuple(self) -> Vec3:
        return (self.x, self.y, self.z)

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))


@dataclass(frozen=True)
class AABB3D:
    """Axis-Aligned Bounding Box (3D)

    min <= max は呼び出し側の責任。ここでは並べ替えも検証もしない。
    """
    min: Point3D
    max: Point3D

    @classmethod
    def of(cls, mn: Sequence[float], mx: Sequence[float]) -> "AABB3D":
        return cls(min=Point3D.of(mn), max=Point3D.of(mx))

    def width(self) -> float:
        return self.max.x - self.min.x

    def height(self) -> float:
        return self.max.y - self.min.y

    def depth(self) -> float:
        return self.max.z - self.min.z

    def center(self) -> Point3D:
        return Point3D(
            (self.min.x + self.max.x) / 2,
            (self.min.y + self.max.y) / 2,
            (self.min.z + self.max.z) / 2,
        )

    def contains(self, p: Point3D) -> bool:
        """閉区間で判定（境界上の点も含む）"""
        return (
            self.min.x <= p.x <= self.max.x and
            self.min.y <= p.y <= self.max.y and
            self.min.z <= p.z <= self.max.z
        )

    def intersects(self, other: "AABB3D") -> bool:
        """分離軸判定。接しているだけでも交差とみなす"""
        return not (
            self.max.x < other.min.x or self.min.x > other.max.x or
            self.max.y < other.min.y or self.min.y > other.max.y or
            self.max.z < other.min.z or self.min.z > other.max.z
        )

    def corners(self) -> Tuple[Point3D, ...]:
        """VTK_HEXAHEDRON の頂点順で 8 隅を返す"""
        mn, mx = self.min, self.max
        return (
            Point3D(mn.x, mn.y, mn.z),  # 0
            Point3D(mx.x, mn.y, mn.z),  # 1
            Point3D(mx.x, mx.y, mn.z),  # 2
            Point3D(mn.x, mx.y, mn.z),  # 3
            Point3D(mn.x, mn.y, mx.z),  # 4
            Point3D(mx.x, mn.y, mx.z),  # 5
            Point3D(mx.x, mx.y, mx.z),  # 6
            Point3D(mn.x, mx.y, mx.z),  # 7
        )


__all__ = [
    "Point3D",
    "AABB3D",
    "Vec3",
]
