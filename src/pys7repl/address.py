"""
Decode S7 symbolic addresses into MemoryAddress values.

Supported dialects, tried in this order (first match wins):

    1234            bare DB number, byte 0 of that block
    DB100.DBW8      data block: DB<n>.DB[B|W|X]<offset>[.<bit>] (bit only after X)
    A9.1 / Q9.1     discrete output: slot digit + bit 0..7
    MW180 / MB10    flag memory byte or word

Size tags are case-sensitive. Inputs (I/E), peripheral I/O, timers and counters
are documented S7 regions but have no recognizer here and decode as malformed.
"""

import re
from typing import Callable

from .errors import MalformedAddressError
from .types import AddressingMode, DataType, MemoryAddress

# re.ASCII keeps \d to 0-9 only
_DB_SHORTHAND_PATTERN = re.compile(r"(?P<db>\d{1,4})", re.ASCII)

_DATA_BLOCK_PATTERN = re.compile(
    r"DB(?P<db>\d{1,3})\.DB(?:(?P<tag>[BW])(?P<offset>\d{1,5})|X(?P<bit_offset>\d{1,5})(?:\.(?P<bit>[0-7]))?)",
    re.ASCII,
)

_OUTPUT_PATTERN = re.compile(r"[QA](?P<slot>\d)\.(?P<bit>[0-7])", re.ASCII)

_FLAG_MEMORY_PATTERN = re.compile(r"M(?P<tag>[BW])(?P<offset>\d{1,3})", re.ASCII)

# Size tag -> data type for DB and flag-memory dialects
_SIZE_TAGS: dict[str, DataType] = {
    "B": DataType.USINT,
    "W": DataType.INT,
    "X": DataType.BIT,
}


def _match_db_shorthand(token: str) -> MemoryAddress | None:
    m = _DB_SHORTHAND_PATTERN.fullmatch(token)
    if not m:
        return None
    return MemoryAddress(
        region=AddressingMode.DATA_BLOCK,
        data_block=int(m.group("db")),
        offset=0,
        bit=0,
        data_type=DataType.USINT,
    )


def _match_data_block(token: str) -> MemoryAddress | None:
    m = _DATA_BLOCK_PATTERN.fullmatch(token)
    if not m:
        return None
    if m.group("tag") is not None:
        # DBB / DBW: no bit selector in the grammar
        return MemoryAddress(
            region=AddressingMode.DATA_BLOCK,
            data_block=int(m.group("db")),
            offset=int(m.group("offset")),
            data_type=_SIZE_TAGS[m.group("tag")],
        )
    bit = m.group("bit")
    return MemoryAddress(
        region=AddressingMode.DATA_BLOCK,
        data_block=int(m.group("db")),
        offset=int(m.group("bit_offset")),
        bit=int(bit) if bit is not None else 0,
        data_type=DataType.BIT,
    )


def _match_output(token: str) -> MemoryAddress | None:
    # Q and A are the same output image; the prefix letter is not recorded
    m = _OUTPUT_PATTERN.fullmatch(token)
    if not m:
        return None
    return MemoryAddress(
        region=AddressingMode.OUTPUT,
        offset=int(m.group("slot")),
        bit=int(m.group("bit")),
    )


def _match_flag_memory(token: str) -> MemoryAddress | None:
    m = _FLAG_MEMORY_PATTERN.fullmatch(token)
    if not m:
        return None
    return MemoryAddress(
        region=AddressingMode.FLAG_MEMORY,
        offset=int(m.group("offset")),
        data_type=_SIZE_TAGS[m.group("tag")],
    )


Recognizer = Callable[[str], MemoryAddress | None]

# Order is fixed for determinism; the shapes do not overlap.
RECOGNIZERS: tuple[tuple[str, Recognizer], ...] = (
    ("db_shorthand", _match_db_shorthand),
    ("data_block", _match_data_block),
    ("output", _match_output),
    ("flag_memory", _match_flag_memory),
)


def try_decode_address(token: str) -> MemoryAddress | None:
    """Decode token, or return None if it matches no supported dialect."""
    if not isinstance(token, str):
        return None
    for _name, recognize in RECOGNIZERS:
        address = recognize(token)
        if address is not None:
            return address
    return None


def decode_address(token: str) -> MemoryAddress:
    """
    Decode an S7 address token (e.g. "DB100.DBW8", "A9.1", "MW180", "42").

    The token must already be trimmed; surrounding whitespace is malformed.
    Raises MalformedAddressError carrying the token verbatim.
    """
    address = try_decode_address(token)
    if address is None:
        raise MalformedAddressError(token)
    return address


def is_valid_address(token: str) -> bool:
    """True if decode_address(token) would succeed. Never raises."""
    return try_decode_address(token) is not None
