"""
KVDBCtl Printer Configuration
"""

from dataclasses import dataclass

SIMPLE_FORMAT = "simple"


@dataclass(frozen=True)
class FormatterConfig:
    """输出配置"""
    # set once from the command line flags, read-only afterwards
    hex_encode: bool = False  # --hex
    value_only: bool = False  # --print-value-only
