import numpy as np
import pytest

from octree_bench.errors import ExportError
from octree_bench.model.models import AABB3D, Point3D
from octree_bench.octree import Octree
from octree_bench.visualizer.vtk import box_corners, export_tree, export_vtk


def _sections(text):
    lines = text.splitlines()
    idx = {}
    for i, line in enumerate(lines):
        for key in ("POINTS", "CELLS", "CELL_TYPES", "CELL_DATA"):
            if line.startswith(key + " "):
                idx[key] = i
    return lines, idx


def test_box_corners_order():
    box = AABB3D.of((0, 0, 0), (1, 2, 3))
    corners = box_corners(box)
    assert corners.shape == (8, 3)
    np.testing.assert_array_equal(corners, [
        [0, 0, 0], [1, 0, 0], [1, 2, 0], [0, 2, 0],
        [0, 0, 3], [1, 0, 3], [1, 2, 3], [0, 2, 3],
    ])
    assert [c.as_tuple() for c in box.corners()] == [tuple(row) for row in corners]


def test_export_layout(tmp_path):
    points = [Point3D(1, 2, 3), Point3D(-1, -2, -3)]
    boxes = [(AABB3D.of((-10, -10, -10), (10, 10, 10)), 0),
             (AABB3D.of((0, 0, 0), (10, 10, 10)), 1)]
    out = export_vtk(tmp_path / "tree.vtk", points, boxes, title="Octree Visualization (map)")
    lines, idx = _sections(out.read_text(encoding="utf-8"))

    assert lines[0] == "# vtk DataFile Version 3.0"
    assert lines[1] == "Octree Visualization (map)"
    assert lines[2] == "ASCII"
    assert lines[3] == "DATASET UNSTRUCTURED_GRID"

    assert lines[idx["POINTS"]] == "POINTS 18 float"
    coords = lines[idx["POINTS"] + 1: idx["POINTS"] + 19]
    assert coords[0] == "1.000000 2.000000 3.000000"
    assert coords[2] == "-10.000000 -10.000000 -10.000000"
    assert coords[3] == "10.000000 -10.000000 -10.000000"
    assert coords[4] == "10.000000 10.000000 -10.000000"
    assert coords[9] == "-10.000000 10.000000 10.000000"

    assert lines[idx["CELLS"]] == "CELLS 4 22"
    cells = lines[idx["CELLS"] + 1: idx["CELLS"] + 5]
    assert cells[:2] == ["1 0", "1 1"]
    assert cells[2] == "8 2 3 4 5 6 7 8 9"
    assert cells[3] == "8 10 11 12 13 14 15 16 17"

    assert lines[idx["CELL_TYPES"]] == "CELL_TYPES 4"
    assert lines[idx["CELL_TYPES"] + 1: idx["CELL_TYPES"] + 5] == ["1", "1", "12", "12"]

    assert lines[idx["CELL_DATA"]] == "CELL_DATA 4"
    assert lines[idx["CELL_DATA"] + 1] == "SCALARS OctreeLevel int 1"
    assert lines[idx["CELL_DATA"] + 2] == "LOOKUP_TABLE default"
    assert lines[idx["CELL_DATA"] + 3:] == ["-1", "-1", "0", "1"]


def test_export_tree_uses_walk_outputs(tmp_path, bounds, storage, random_cloud):
    tree = Octree(bounds, storage)
    tree.insert_all(random_cloud[:40])
    out = export_tree(tree, tmp_path / "t.vtk")
    lines, idx = _sections(out.read_text(encoding="utf-8"))

    n_pts = len(tree.collect_all_points())
    n_boxes = len(tree.collect_node_boxes())
    assert lines[1] == f"Octree Visualization ({storage})"
    assert lines[idx["POINTS"]] == f"POINTS {n_pts + 8 * n_boxes} float"
    assert lines[idx["CELLS"]] == f"CELLS {n_pts + n_boxes} {2 * n_pts + 9 * n_boxes}"
    levels = [int(v) for v in lines[idx["CELL_DATA"] + 3:]]
    assert levels == [-1] * n_pts + [lv for _, lv in tree.collect_node_boxes()]


def test_export_is_deterministic(tmp_path, bounds, random_cloud):
    outs = []
    for i in range(2):
        tree = Octree(bounds, "map")
        tree.insert_all(random_cloud)
        outs.append(export_tree(tree, tmp_path / f"{i}.vtk").read_text(encoding="utf-8"))
    assert outs[0] == outs[1]


def test_empty_tree_export(tmp_path, bounds):
    tree = Octree(bounds, "array")
    lines, idx = _sections(export_tree(tree, tmp_path / "e.vtk").read_text(encoding="utf-8"))
    assert lines[idx["POINTS"]] == "POINTS 8 float"
    assert lines[idx["CELL_DATA"] + 3:] == ["0"]


def test_export_failure_raises_and_keeps_tree(tmp_path, bounds):
    tree = Octree(bounds, "array")
    tree.insert_all([Point3D(1, 1, 1), Point3D(2, 2, 2)])
    before = tree.get_statistics()
    with pytest.raises(ExportError) as exc_info:
        export_tree(tree, tmp_path / "missing" / "out.vtk")
    assert isinstance(exc_info.value, OSError)
    assert "missing" in str(exc_info.value)
    assert tree.get_statistics() == before
