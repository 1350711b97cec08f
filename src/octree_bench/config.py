# config.py
from __future__ import annotations
from dataclasses import dataclass, field, fields
from pathlib import Path
import json

from octree_bench.model.loader import validate_with_schema
from octree_bench.model.models import AABB3D
from octree_bench.octree.node import DEFAULT_CAPACITY, DEFAULT_MAX_DEPTH


@dataclass
class OctreeConfig:
    bounds_min: list[float] = field(default_factory=lambda: [-10.0, -10.0, -10.0])
    bounds_max: list[float] = field(default_factory=lambda: [10.0, 10.0, 10.0])
    capacity: int = DEFAULT_CAPACITY
    max_depth: int = DEFAULT_MAX_DEPTH
    storage: str = "array"
    distribution: str = "random"
    num_points: int = 1000
    seed: int | None = None
    points_file: str | None = None
    output: str | None = None
    plot: str | None = None
    plane: str = "xy"
    compare: bool = False
    print_tree: bool = False

    @property
    def bounds(self) -> AABB3D:
        return AABB3D.of(self.bounds_min, self.bounds_max)

    def resolved_output(self) -> Path:
        if self.output:
            return Path(self.output)
        return Path(f"octree_{self.distribution}.vtk")

    @classmethod
    def field_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]


def load_json(path: str | None, validate: bool = True) -> dict:
    """設定 JSON を読む。path が空なら空辞書"""
    if not path: return {}
    p = Path(path)
    if not p.exists(): raise FileNotFoundError(f"config not found: {p}")
    with p.open("r", encoding="utf-8") as f:
        cfg = json.load(f)
    if not isinstance(cfg, dict):
        raise ValueError("config json must be an object")
    if validate:
        validate_with_schema(cfg, "config.schema.json")
    return cfg
