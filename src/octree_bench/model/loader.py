from __future__ import annotations
import pathlib, json
from typing import Any, List

from jsonschema import validate

from .models import Point3D

SCHEMA_DIR = pathlib.Path(__file__).parent.parent / "schemas"


def load_json_file(path: str | pathlib.Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def validate_with_schema(instance: Any, schema_name: str, schema_dir: pathlib.Path = SCHEMA_DIR) -> None:
    schema = load_json_file(schema_dir / schema_name)
    validate(instance=instance, schema=schema)


class PointLoader:
    """点群 JSON を読み込んで Point3D のリストにする"""

    def __init__(self, validate_schema: bool = True, schema_dir: str | pathlib.Path | None = None):
        self.validate_schema = validate_schema
        self.schema_dir = SCHEMA_DIR if schema_dir is None else pathlib.Path(schema_dir)

    def load_points(self, path: str | pathlib.Path) -> List[Point3D]:
        """
        {"points": [[x, y, z], ...]} または
        {"points": [{"x":.., "y":.., "z":..}, ...]}
        """
        data = load_json_file(path)
        if self.validate_schema:
            validate_with_schema(data, "points.schema.json", self.schema_dir)

        points: List[Point3D] = []
        for item in data["points"]:
            if isinstance(item, dict):
                points.append(Point3D(float(item["x"]), float(item["y"]), float(item["z"])))
            else:
                points.append(Point3D.of(item))
        return points

    @staticmethod
    def dump_points(points: List[Point3D], path: str | pathlib.Path) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump({"points": [list(p.as_tuple()) for p in points]}, f, indent=2)
