# model/__init__.py
"""幾何プリミティブと点群ファイルのローダ"""
__all__ = ["models", "loader"]
