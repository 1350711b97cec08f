# plot2d.py  —  ノード箱を平面に投影して深さで色分け
from __future__ import annotations
from pathlib import Path
from typing import Sequence, Tuple

import matplotlib
import matplotlib.pyplot as plt
from matplotlib import patches
from matplotlib.colors import Normalize

from octree_bench.model.models import AABB3D, Point3D

PLANES = {
    "xy": ("x", "y"),
    "xz": ("x", "z"),
    "yz": ("y", "z"),
}


def _axes_for(plane: str) -> Tuple[str, str]:
    try:
        return PLANES[plane]
    except KeyError:
        raise ValueError(f"Unsupported plane: {plane}") from None


def draw_octree(
    points: Sequence[Point3D],
    boxes: Sequence[Tuple[AABB3D, int]],
    plane: str = "xy",
    title: str = "Octree",
    output_path: str | Path | None = None,
):
    """
    boxes: collect_node_boxes() の結果 (AABB, 深さ)
    output_path があれば PNG 保存、無ければ plt.show()
    """
    ua, va = _axes_for(plane)
    if output_path:
        matplotlib.use("Agg")

    fig, ax = plt.subplots(figsize=(10, 8), dpi=120)

    levels = [lv for _, lv in boxes]
    vmin, vmax = (min(levels), max(levels)) if levels else (0, 1)
    if vmax == vmin:
        vmax = vmin + 1
    norm = Normalize(vmin=vmin, vmax=vmax)
    cmap = plt.cm.viridis

    # 浅い箱から描いて、深い箱を上に重ねる
    for box, level in sorted(boxes, key=lambda b: b[1]):
        u0, v0 = getattr(box.min, ua), getattr(box.min, va)
        u1, v1 = getattr(box.max, ua), getattr(box.max, va)
        ax.add_patch(patches.Rectangle(
            (u0, v0), u1 - u0, v1 - v0,
            fill=False, edgecolor=cmap(norm(level)), linewidth=0.6,
        ))

    if points:
        ax.scatter([getattr(p, ua) for p in points], [getattr(p, va) for p in points],
                   s=2, c="k", zorder=3)

    if boxes:
        root = boxes[0][0]
        ax.set_xlim(getattr(root.min, ua), getattr(root.max, ua))
        ax.set_ylim(getattr(root.min, va), getattr(root.max, va))

    sm = plt.cm.ScalarMappable(norm=norm, cmap=cmap)
    sm.set_array([])
    fig.colorbar(sm, ax=ax, label="Octree level")

    ax.set_aspect("equal")
    ax.set_xlabel(ua.upper())
    ax.set_ylabel(va.upper())
    ax.set_title(title)
    plt.tight_layout()

    if output_path:
        fig.savefig(output_path)
        plt.close(fig)
    else:
        plt.show()
    return fig
