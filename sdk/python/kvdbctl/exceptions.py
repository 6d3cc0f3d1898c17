"""
KVDBCtl Printer Exceptions
"""


class KVDBCtlError(Exception):
    """KVDBCtl基础异常"""
    pass


class UnsupportedOutputFormatError(KVDBCtlError):
    """不支持的输出格式"""

    def __init__(self, output_format: str):
        super().__init__(f"unsupported output format: {output_format!r}")
        self.output_format = output_format
