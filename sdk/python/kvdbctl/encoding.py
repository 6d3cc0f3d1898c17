"""
Key/value text encoding for the simple printer.
"""

from typing import List

from .config import FormatterConfig
from .types import KeyValue


def raw_text(data: bytes) -> str:
    """原样转换字节为文本"""
    # invalid UTF-8 stays as surrogate escapes; control characters are not escaped
    return data.decode("utf-8", "surrogateescape")


def encode_bytes(config: FormatterConfig, data: bytes) -> str:
    """按配置编码字节（十六进制或原文）"""
    if config.hex_encode:
        return data.hex()
    return raw_text(data)


def kv_lines(config: FormatterConfig, kv: KeyValue) -> List[str]:
    """键值对的输出行：键和值，或仅值"""
    value = encode_bytes(config, kv.value)
    if config.value_only:
        return [value]
    return [encode_bytes(config, kv.key), value]
