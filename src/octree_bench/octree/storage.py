# octree/storage.py
"""
子ノードの格納方式（ストラテジ）。

- ArrayChildren : 固定 8 スロット。分割時に 8 子をすべて生成
- MapChildren   : octant -> 子 の辞書。点が入る octant だけ生成
- LinearChildren: 木全体で 1 つの辞書を共有し、locational code で子を引く

どの方式でも items() は octant 昇順で返す（VTK 出力の順序を固定するため）。
"""
from __future__ import annotations
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, Optional, Protocol, Tuple

from .octant import ROOT_CODE, code_depth, locational_code

if TYPE_CHECKING:
    from .node import OctreeNode


class ChildStorage(Protocol):
    kind: str

    def get(self, octant: int) -> Optional["OctreeNode"]: ...

    def put(self, octant: int, node: "OctreeNode") -> None: ...

    def items(self) -> Iterator[Tuple[int, "OctreeNode"]]: ...

    def __len__(self) -> int: ...

    def spawn(self, octant: int) -> "ChildStorage": ...

    def octants_for_subdivision(self, occupied: Iterable[int]) -> Iterable[int]: ...


class ArrayChildren:
    kind = "array"

    def __init__(self):
        self._slots: List[Optional["OctreeNode"]] = [None] * 8

    def get(self, octant: int) -> Optional["OctreeNode"]:
        return self._slots[octant]

    def put(self, octant: int, node: "OctreeNode") -> None:
        self._slots[octant] = node

    def items(self) -> Iterator[Tuple[int, "OctreeNode"]]:
        for octant, child in enumerate(self._slots):
            if child is not None:
                yield octant, child

    def __len__(self) -> int:
        return sum(1 for child in self._slots if child is not None)

    def spawn(self, octant: int) -> "ArrayChildren":
        return ArrayChildren()

    def octants_for_subdivision(self, occupied: Iterable[int]) -> Iterable[int]:
        # 空になる octant も含めて 8 つすべて
        return range(8)


class MapChildren:
    kind = "map"

    def __init__(self):
        self._children: Dict[int, "OctreeNode"] = {}

    def get(self, octant: int) -> Optional["OctreeNode"]:
        return self._children.get(octant)

    def put(self, octant: int, node: "OctreeNode") -> None:
        self._children[octant] = node

    def items(self) -> Iterator[Tuple[int, "OctreeNode"]]:
        # dict の挿入順ではなく octant 昇順
        return iter(sorted(self._children.items()))

    def __len__(self) -> int:
        return len(self._children)

    def spawn(self, octant: int) -> "MapChildren":
        return MapChildren()

    def octants_for_subdivision(self, occupied: Iterable[int]) -> Iterable[int]:
        return sorted(set(occupied))


class LinearChildren:
    """
    線形化オクツリーの子格納。
    table は木全体で共有（root の LinearChildren() が生成し、spawn で引き継ぐ）。
    """
    kind = "linear"

    def __init__(self, table: Optional[Dict[int, "OctreeNode"]] = None, code: int = ROOT_CODE):
        self.table: Dict[int, "OctreeNode"] = {} if table is None else table
        self.code = code
        self._mask = 0

    @property
    def depth(self) -> int:
        return code_depth(self.code)

    def get(self, octant: int) -> Optional["OctreeNode"]:
        if not self._mask & (1 << octant):
            return None
        return self.table[locational_code(self.code, octant)]

    def put(self, octant: int, node: "OctreeNode") -> None:
        self.table[locational_code(self.code, octant)] = node
        self._mask |= 1 << octant

    def items(self) -> Iterator[Tuple[int, "OctreeNode"]]:
        for octant in range(8):
            if self._mask & (1 << octant):
                yield octant, self.table[locational_code(self.code, octant)]

    def __len__(self) -> int:
        return bin(self._mask).count("1")

    def spawn(self, octant: int) -> "LinearChildren":
        return LinearChildren(self.table, locational_code(self.code, octant))

    def octants_for_subdivision(self, occupied: Iterable[int]) -> Iterable[int]:
        return sorted(set(occupied))

    def lookup(self, code: int) -> Optional["OctreeNode"]:
        """locational code からノードを直接引く（ルート自身は table に無い）"""
        return self.table.get(code)


STORAGE_KINDS = {
    "array": ArrayChildren,
    "map": MapChildren,
    "linear": LinearChildren,
}


def make_storage(kind: str) -> ChildStorage:
    try:
        factory = STORAGE_KINDS[kind]
    except KeyError:
        raise ValueError(f"Unsupported storage: {kind} (choose from {', '.join(STORAGE_KINDS)})") from None
    return factory()
