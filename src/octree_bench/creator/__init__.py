# creator/__init__.py
"""ベンチマーク用の点群分布"""
__all__ = ["distributions"]
