# visualizer/__init__.py
"""
可視化まわり。

- vtk: ParaView 向け legacy VTK 書き出し
- plot2d: matplotlib による平面投影（必要なときだけ import）
"""
__all__ = ["vtk", "plot2d"]
