from collections import Counter

import numpy as np
import pytest

from octree_bench.model.models import Point3D
from octree_bench.octree import Octree, describe, iter_points
from octree_bench.octree.analysis import TreeStatistics, format_statistics
from octree_bench.octree.search import point_in_range, range_query


def _brute_force(points, qmin, qmax):
    return [p for p in points if point_in_range(p, qmin, qmax)]


def test_range_query_scenario(bounds, storage):
    tree = Octree(bounds, storage)
    tree.insert_all([Point3D(0, 0, 0), Point3D(5, 5, 5), Point3D(-0.5, -0.5, -0.5)])
    hits = tree.range_query(Point3D(-1, -1, -1), Point3D(1, 1, 1))
    assert Counter(hits) == Counter([Point3D(0, 0, 0), Point3D(-0.5, -0.5, -0.5)])


def test_range_query_is_closed_on_both_ends(bounds, storage):
    tree = Octree(bounds, storage)
    tree.insert_all([Point3D(1, 1, 1), Point3D(2, 2, 2), Point3D(3, 3, 3)])
    hits = tree.range_query(Point3D(1, 1, 1), Point3D(2, 2, 2))
    assert Counter(hits) == Counter([Point3D(1, 1, 1), Point3D(2, 2, 2)])


def test_range_query_matches_brute_force(bounds, storage, random_cloud):
    tree = Octree(bounds, storage)
    tree.insert_all(random_cloud)
    rng = np.random.default_rng(99)
    for _ in range(25):
        a, b = rng.uniform(-12, 12, size=(2, 3))
        lo, hi = np.minimum(a, b), np.maximum(a, b)
        qmin, qmax = Point3D.of(lo), Point3D.of(hi)
        assert Counter(tree.range_query(qmin, qmax)) == Counter(_brute_force(random_cloud, qmin, qmax))


def test_range_query_order_follows_traversal(bounds, storage, random_cloud):
    tree = Octree(bounds, storage)
    tree.insert_all(random_cloud)
    qmin, qmax = Point3D(-5, -5, -5), Point3D(5, 5, 5)
    expected = [p for p in tree.collect_all_points() if point_in_range(p, qmin, qmax)]
    assert tree.range_query(qmin, qmax) == expected


def test_range_query_prunes_subtrees(bounds, random_cloud):
    tree = Octree(bounds, "map")
    tree.insert_all(random_cloud)
    stats = {"visited": 0}
    range_query(tree.root, Point3D(8, 8, 8), Point3D(10, 10, 10), stats=stats)
    assert 0 < stats["visited"] < tree.get_statistics().total_nodes


def test_range_query_outside_tree(bounds, storage, random_cloud):
    tree = Octree(bounds, storage)
    tree.insert_all(random_cloud)
    assert tree.range_query(Point3D(20, 20, 20), Point3D(30, 30, 30)) == []


def test_statistics_consistency(bounds, storage, random_cloud):
    tree = Octree(bounds, storage)
    tree.insert_all(random_cloud)
    st = tree.get_statistics()
    buffered = 0
    stack = [tree.root]
    while stack:
        n = stack.pop()
        buffered += len(n.points)
        stack.extend(c for _, c in n.children())
    assert st.total_points == buffered == len(tree.collect_all_points()) == len(random_cloud)
    assert st.internal_nodes == st.total_nodes - st.leaf_nodes
    assert st.average_points_per_leaf == pytest.approx(st.total_points / st.leaf_nodes)


def test_empty_tree_statistics(bounds, storage):
    tree = Octree(bounds, storage)
    st = tree.get_statistics()
    assert st == TreeStatistics(total_nodes=1, leaf_nodes=1, total_points=0, max_depth=0)
    assert st.average_points_per_leaf == 0
    assert tree.collect_all_points() == []
    assert tree.collect_node_boxes() == [(bounds, 0)]


def test_average_without_leaves_is_zero():
    assert TreeStatistics(0, 0, 0, 0).average_points_per_leaf == 0


def test_summary_text(bounds, storage):
    tree = Octree(bounds, storage)
    tree.insert_all([Point3D(1, 1, 1), Point3D(2, 2, 2), Point3D(3, 3, 3)])
    text = tree.summary()
    assert "Total points: 3" in text
    assert "Maximum depth: 4" in text
    assert "Average points per leaf:" in text
    assert text.startswith("===")


def test_format_statistics_lines():
    text = format_statistics(TreeStatistics(9, 8, 4, 1), title="T")
    assert text.splitlines() == [
        "=== T ===",
        "Total nodes: 9",
        "Leaf nodes: 8",
        "Internal nodes: 1",
        "Total points: 4",
        "Maximum depth: 1",
        "Average points per leaf: 0.5",
    ]


def test_node_boxes_depths(bounds, storage, random_cloud):
    tree = Octree(bounds, storage)
    tree.insert_all(random_cloud)
    boxes = tree.collect_node_boxes()
    assert boxes[0] == (bounds, 0)
    assert len(boxes) == tree.get_statistics().total_nodes
    assert max(level for _, level in boxes) == tree.get_statistics().max_depth

    # 深さ d の箱は 1 辺がルートの 1/2^d
    for box, level in boxes:
        assert box.width() == pytest.approx(bounds.width() / 2 ** level)


def test_node_boxes_preorder(bounds):
    tree = Octree(bounds, "array")
    tree.insert_all([Point3D(1, 1, 1), Point3D(-1, -1, -1)])
    levels = [lv for _, lv in tree.collect_node_boxes()]
    assert levels == [0] + [1] * 8


def test_map_children_are_walked_in_octant_order(bounds):
    tree = Octree(bounds, "map")
    # 挿入順は octant 7, 0, 3
    pts = [Point3D(5, 5, 5), Point3D(-5, -5, -5), Point3D(5, 5, -5)]
    tree.insert_all(pts)
    assert [o for o, _ in tree.root.children()] == [0, 3, 7]
    assert tree.collect_all_points() == [pts[1], pts[2], pts[0]]


def test_iter_points_is_restartable(bounds, storage, random_cloud):
    tree = Octree(bounds, storage)
    tree.insert_all(random_cloud[:50])
    assert list(iter_points(tree.root)) == list(iter_points(tree.root)) == tree.collect_all_points()


def test_describe_lines(bounds):
    tree = Octree(bounds, "map")
    tree.insert_all([Point3D(5, 5, 5), Point3D(-5, -5, -5)])
    lines = describe(tree.root)
    assert lines[0] == "Node bounds: (-10.0,-10.0,-10.0) to (10.0,10.0,10.0)"
    assert lines[1] == "Points: 0"
    assert lines[2] == "Active children: 2"
    assert lines[3] == "Child octant 0:"
    assert lines[4].startswith("  Node bounds:")
    assert tree.describe() == lines
