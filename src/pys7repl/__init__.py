"""pys7repl: decode S7 symbolic addresses and read them via python-snap7."""

__version__ = "0.1.0"

from .address import decode_address, is_valid_address, try_decode_address
from .client import S7Client
from .errors import MalformedAddressError, PLCIOError, PyS7ReplError
from .types import (
    DATA_TYPE_ALIASES,
    AddressingMode,
    DataType,
    MemoryAddress,
    is_variable_width,
    width_of,
)

__all__ = [
    "__version__",
    "decode_address",
    "is_valid_address",
    "try_decode_address",
    "S7Client",
    "MalformedAddressError",
    "PLCIOError",
    "PyS7ReplError",
    "DATA_TYPE_ALIASES",
    "AddressingMode",
    "DataType",
    "MemoryAddress",
    "is_variable_width",
    "width_of",
]
