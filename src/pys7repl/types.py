"""Core data model: S7 data types and widths, addressing modes, MemoryAddress."""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class DataType(str, Enum):
    """Primitive S7 data types. Aliases (Byte, Word, ...) resolve via parse()."""

    BIT = "Bit"
    SINT = "SInt"
    INT = "Int"
    DINT = "DInt"
    LINT = "LInt"
    USINT = "USInt"
    UINT = "UInt"
    UDINT = "UDInt"
    ULINT = "ULInt"
    REAL = "Real"
    LREAL = "LReal"
    DATETIME = "Datetime"
    DATE = "Date"
    STRING = "String"
    BYTE_ARRAY = "ByteArray"

    @classmethod
    def parse(cls, name: str) -> "DataType":
        """
        Resolve a type name or alias to its canonical member.

        Matching is case-insensitive: "byte", "Byte" and "USInt" all give USINT.
        Raises ValueError for unknown names.
        """
        key = name.strip().lower()
        if key in _BY_LOWER_NAME:
            return _BY_LOWER_NAME[key]
        raise ValueError(f"Unknown data type: {name!r}")


# Alias name -> canonical type
DATA_TYPE_ALIASES: Mapping[str, DataType] = MappingProxyType(
    {
        "Byte": DataType.USINT,
        "Word": DataType.UINT,
        "DWord": DataType.UDINT,
        "LWord": DataType.ULINT,
    }
)

_BY_LOWER_NAME: dict[str, DataType] = {
    **{dt.value.lower(): dt for dt in DataType},
    **{alias.lower(): dt for alias, dt in DATA_TYPE_ALIASES.items()},
}

# Byte width per type; None = variable, length must be supplied by the caller
_WIDTHS: Mapping[DataType, int | None] = MappingProxyType(
    {
        DataType.BIT: 1,
        DataType.SINT: 1,
        DataType.INT: 2,
        DataType.DINT: 4,
        DataType.LINT: 8,
        DataType.USINT: 1,
        DataType.UINT: 2,
        DataType.UDINT: 4,
        DataType.ULINT: 8,
        DataType.REAL: 4,
        DataType.LREAL: 8,
        DataType.DATETIME: 8,
        DataType.DATE: 8,
        DataType.STRING: None,
        DataType.BYTE_ARRAY: None,
    }
)

_DESCRIPTIONS: Mapping[DataType, str] = MappingProxyType(
    {
        DataType.BIT: "1 Bit (Logical)",
        DataType.SINT: "8 Bit Signed Integer (-128...127)",
        DataType.INT: "16 Bit Signed Integer (-32.768...32.767)",
        DataType.DINT: "32 Bit Signed Integer (-2.147.483.648...2.147.483.647)",
        DataType.LINT: "64 Bit Signed Integer",
        DataType.USINT: "8 Bit Unsigned Integer (0...255)",
        DataType.UINT: "16 Bit Unsigned Integer (0...65.535)",
        DataType.UDINT: "32 Bit Unsigned Integer (0...4.294.967.295)",
        DataType.ULINT: "64 Bit Unsigned Integer",
        DataType.REAL: "32 Bit Signed Floating Point (single)",
        DataType.LREAL: "64 Bit Signed Floating Point (double)",
        DataType.DATETIME: "64 Bit BCD Encoded DateTime Value",
        DataType.DATE: "64 Bit BCD Encoded DateTime Value",
        DataType.STRING: "String (Length must be supplied)",
        DataType.BYTE_ARRAY: "Array of Bytes (Length must be supplied)",
    }
)


def width_of(data_type: DataType) -> int | None:
    """Return the storage width in bytes, or None for variable-width types."""
    return _WIDTHS[data_type]


def is_variable_width(data_type: DataType) -> bool:
    return _WIDTHS[data_type] is None


def describe(data_type: DataType) -> str:
    return _DESCRIPTIONS[data_type]


def aliases_of(data_type: DataType) -> list[str]:
    return [alias for alias, dt in DATA_TYPE_ALIASES.items() if dt is data_type]


class AddressingMode(str, Enum):
    """S7 memory regions. Only OUTPUT, FLAG_MEMORY and DATA_BLOCK are decoded today."""

    UNKNOWN = "Unknown"
    INPUT = "Input"
    OUTPUT = "Output"
    PERIPHERAL_INPUT = "PeripheralInput"
    PERIPHERAL_OUTPUT = "PeripheralOutput"
    FLAG_MEMORY = "FlagMemory"
    DATA_BLOCK = "DataBlock"
    TIMER = "Timer"
    COUNTER = "Counter"


@dataclass(frozen=True)
class MemoryAddress:
    """Decoded S7 address: region, DB number, byte offset, bit offset, data type."""

    region: AddressingMode = AddressingMode.UNKNOWN
    data_block: int = 0
    offset: int = 0
    bit: int = 0
    data_type: DataType = DataType.USINT

    def __post_init__(self) -> None:
        if self.data_block < 0:
            raise ValueError(f"data_block must be >= 0, got {self.data_block}")
        if self.offset < 0:
            raise ValueError(f"offset must be >= 0, got {self.offset}")
        if not 0 <= self.bit <= 7:
            raise ValueError(f"bit must be 0..7, got {self.bit}")

    @property
    def width(self) -> int | None:
        return width_of(self.data_type)

    def to_dict(self) -> dict[str, object]:
        return {
            "region": self.region.value,
            "data_block": self.data_block,
            "offset": self.offset,
            "bit": self.bit,
            "data_type": self.data_type.value,
            "width": self.width,
        }

    def __str__(self) -> str:
        if self.region == AddressingMode.FLAG_MEMORY:
            return f"{self.region.value}, offset={self.offset}, type={self.data_type.value}"
        if self.region == AddressingMode.OUTPUT:
            return f"{self.region.value}, offset={self.offset}, bit={self.bit}"
        return (
            f"{self.region.value}, DB={self.data_block}, offset={self.offset}, "
            f"type={self.data_type.value}, bit={self.bit}"
        )
