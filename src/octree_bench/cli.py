# cli.py
from __future__ import annotations
import argparse
import logging
import sys
from typing import List

from jsonschema import ValidationError

from octree_bench.benchmark import build_tree, format_comparison
from octree_bench.config import OctreeConfig, load_json
from octree_bench.creator.distributions import DISTRIBUTIONS, generate
from octree_bench.errors import ExportError
from octree_bench.model.loader import PointLoader
from octree_bench.octree.storage import STORAGE_KINDS
from octree_bench.visualizer.vtk import export_tree

# 旧名（classic / hashmap / morton）も受け付ける
STORAGE_ALIASES = {
    "classic": "array",
    "hashmap": "map",
    "morton": "linear",
}

MAX_WARNINGS_SHOWN = 5


def _storage_name(value: str) -> str:
    name = STORAGE_ALIASES.get(value, value)
    if name not in STORAGE_KINDS:
        raise argparse.ArgumentTypeError(
            f"invalid tree type: {value} (choose from {', '.join(list(STORAGE_KINDS) + list(STORAGE_ALIASES))})")
    return name


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1: {value}")
    return n


def _non_negative_int(value: str) -> int:
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0: {value}")
    return n


def _apply_config_defaults(parser: argparse.ArgumentParser, config_path: str | None) -> dict:
    """--config の JSON を argparse のデフォルトに反映する（CLI 引数が優先）"""
    cfg = load_json(config_path)
    if "storage" in cfg:
        cfg["storage"] = _storage_name(cfg["storage"])
    parser.set_defaults(**cfg)
    return cfg


def build_parser() -> argparse.ArgumentParser:
    d = OctreeConfig()
    parser = argparse.ArgumentParser(
        prog="octree-bench",
        description="Build an octree over generated 3D points, print statistics and export to VTK",
    )
    parser.add_argument("--config", help="引数をまとめたJSONファイル")
    parser.add_argument("storage", nargs="?", type=_storage_name, default=d.storage,
                        help="array|map|linear (classic|hashmap|morton も可)")
    parser.add_argument("distribution", nargs="?", choices=list(DISTRIBUTIONS), default=d.distribution)
    parser.add_argument("num_points", nargs="?", type=int, default=d.num_points)
    parser.add_argument("--bounds-min", type=float, nargs=3, default=d.bounds_min, metavar=("X", "Y", "Z"))
    parser.add_argument("--bounds-max", type=float, nargs=3, default=d.bounds_max, metavar=("X", "Y", "Z"))
    parser.add_argument("--capacity", type=_positive_int, default=d.capacity, help="リーフが分割せずに持てる点数")
    parser.add_argument("--max-depth", type=_non_negative_int, default=d.max_depth, help="これより深くは分割しない")
    parser.add_argument("--seed", type=int, default=d.seed)
    parser.add_argument("--points-file", default=d.points_file, help="点群 JSON（指定時は分布生成しない）")
    parser.add_argument("-o", "--output", default=d.output, help="VTK 出力先（既定: octree_<distribution>.vtk）")
    parser.add_argument("--plot", default=d.plot, help="2D 投影図の PNG 出力先")
    parser.add_argument("--plane", choices=["xy", "xz", "yz"], default=d.plane)
    parser.add_argument("--compare", action="store_true", default=d.compare, help="全ストレージで計測して比較")
    parser.add_argument("--print-tree", action="store_true", default=d.print_tree, help="ツリー構造をダンプ")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def parse_config(argv: List[str] | None = None) -> tuple[OctreeConfig, argparse.Namespace]:
    parser = build_parser()

    # 1st parse: --config だけ拾う
    prelim, _ = parser.parse_known_args(argv)
    try:
        _apply_config_defaults(parser, prelim.config)
    except (FileNotFoundError, ValueError, ValidationError, argparse.ArgumentTypeError) as e:
        parser.error(str(e))

    # 2nd parse: CLI がデフォルト（config）を上書き
    args = parser.parse_args(argv)
    values = {k: getattr(args, k) for k in OctreeConfig.field_names()}
    return OctreeConfig(**values), args


class WarningCollector:
    """範囲外警告を溜めて、最後にまとめて表示する sink"""

    def __init__(self):
        self.messages: List[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)

    def report(self, out=sys.stdout):
        for m in self.messages[:MAX_WARNINGS_SHOWN]:
            print(m, file=out)
        rest = len(self.messages) - MAX_WARNINGS_SHOWN
        if rest > 0:
            print(f"... and {rest} more points outside the bounds", file=out)


def main(argv: List[str] | None = None) -> int:
    cfg, args = parse_config(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if cfg.points_file:
        try:
            points = PointLoader(validate_schema=True).load_points(cfg.points_file)
        except (OSError, ValueError, ValidationError) as e:
            print(f"Error: could not load points from {cfg.points_file}: {e}", file=sys.stderr)
            return 1
        source = cfg.points_file
    else:
        points = generate(cfg.distribution, cfg.num_points, cfg.bounds, cfg.seed)
        source = f"{cfg.distribution} x {cfg.num_points}"

    print(f"📦 points: {len(points)} ({source})")

    if cfg.compare:
        # どのストレージも同じ点を捨てるので、警告は最初の 1 本分だけ表示する
        collectors = [WarningCollector() for _ in STORAGE_KINDS]
        results = [build_tree(s, points, cfg, sink=c) for s, c in zip(STORAGE_KINDS, collectors)]
        print(format_comparison(results))
        collectors[0].report()
        return 0

    warnings_sink = WarningCollector()
    result = build_tree(cfg.storage, points, cfg, sink=warnings_sink)
    warnings_sink.report()

    print(f"\nBuild time: {result.build_ms:.3f} ms")
    print(result.tree.summary())

    if cfg.print_tree:
        print("\n".join(result.tree.describe()))

    out = cfg.resolved_output()
    try:
        export_tree(result.tree, out)
    except ExportError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"Octree exported to {out}")
    print("Open this file in ParaView to visualize the octree structure!")

    if cfg.plot:
        from octree_bench.visualizer.plot2d import draw_octree
        draw_octree(result.tree.collect_all_points(), result.tree.collect_node_boxes(),
                    plane=cfg.plane, title=f"Octree ({cfg.storage}, {cfg.distribution})",
                    output_path=cfg.plot)
        print(f"🖼  plot saved to {cfg.plot}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
