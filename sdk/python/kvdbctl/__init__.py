"""
KVDBCtl Printer

Plain text rendering of KVDB client responses for the kvdbctl command line.
"""

from .config import FormatterConfig
from .exceptions import KVDBCtlError, UnsupportedOutputFormatError
from .keyrange import format_range, prefix_range_end
from .printer import Printer, SimplePrinter, new_printer

__version__ = "1.0.0"
__all__ = [
    "FormatterConfig",
    "KVDBCtlError",
    "UnsupportedOutputFormatError",
    "Printer",
    "SimplePrinter",
    "new_printer",
    "format_range",
    "prefix_range_end",
]
