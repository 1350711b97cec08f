class OutOfBoundsWarning(UserWarning):
    """ノード範囲外の点を捨てたときの警告"""


class ExportError(OSError):
    """エクスポート先に書き込めなかった"""

    def __init__(self, path, reason):
        super().__init__(f"Could not open file {path} for writing: {reason}")
        self.path = path
        self.reason = reason
