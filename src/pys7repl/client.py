"""S7Client: high-level wrapper over python-snap7 that reads by symbolic address."""

import logging
import struct
from typing import Any

from snap7.client import Client
from snap7.type import Area

from .address import decode_address
from .errors import PLCIOError
from .types import AddressingMode, DataType, MemoryAddress, width_of

logger = logging.getLogger(__name__)

# Regions with an snap7 area mapping; DB reads go through db_read
_REGION_AREAS: dict[AddressingMode, Area] = {
    AddressingMode.FLAG_MEMORY: Area.MK,
    AddressingMode.OUTPUT: Area.PA,
}

# struct formats for fixed-width numeric types (S7 is big-endian)
_STRUCT_FORMATS: dict[DataType, str] = {
    DataType.SINT: ">b",
    DataType.INT: ">h",
    DataType.DINT: ">i",
    DataType.LINT: ">q",
    DataType.USINT: ">B",
    DataType.UINT: ">H",
    DataType.UDINT: ">I",
    DataType.ULINT: ">Q",
    DataType.REAL: ">f",
    DataType.LREAL: ">d",
}


def decode_value(data: bytes | bytearray, address: MemoryAddress) -> bool | int | float | bytes:
    """
    Convert raw bytes read at address into a Python value.

    Bit and output addresses give bool; numeric types give int/float;
    Date, Datetime, String and ByteArray give the raw bytes.
    """
    if address.region == AddressingMode.OUTPUT or address.data_type == DataType.BIT:
        if not data:
            raise PLCIOError("Empty response", area=address.region.value, offset=address.offset)
        return bool((data[0] >> address.bit) & 1)
    fmt = _STRUCT_FORMATS.get(address.data_type)
    if fmt is None:
        return bytes(data)
    size = struct.calcsize(fmt)
    if len(data) < size:
        raise PLCIOError(
            f"Short response: expected {size} bytes, got {len(data)}",
            area=address.region.value,
            data_block=address.data_block,
            offset=address.offset,
        )
    return struct.unpack(fmt, bytes(data[:size]))[0]


class S7Client:
    """
    High-level S7 client that reads by symbolic address (e.g. DB100.DBW8, MW180, A9.1).
    Wraps python-snap7; connects lazily and closes on context exit.
    """

    def __init__(self, host: str, rack: int = 0, slot: int = 0, port: int = 102) -> None:
        self._host = host
        self._rack = rack
        self._slot = slot
        self._port = port
        self._client: Client | None = None

    def _get_client(self) -> Client:
        if self._client is None:
            client = Client()
            try:
                client.connect(self._host, self._rack, self._slot, self._port)
            except RuntimeError as e:
                raise PLCIOError(
                    f"Failed to connect to {self._host}:{self._port} (rack {self._rack}, slot {self._slot}): {e}",
                    cause=e,
                ) from e
            logger.debug("Connected to %s:%d rack=%d slot=%d", self._host, self._port, self._rack, self._slot)
            self._client = client
        return self._client

    def connect(self) -> None:
        """Connect to the PLC, dropping any existing connection first."""
        self.close()
        self._get_client()

    def close(self) -> None:
        """Disconnect from the PLC."""
        if self._client is not None:
            try:
                self._client.disconnect()
            except Exception as e:
                logger.warning("Error closing S7 client: %s", e)
            self._client = None
            logger.debug("Disconnected from %s", self._host)

    def __enter__(self) -> "S7Client":
        self.connect()
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    @property
    def connected(self) -> bool:
        return self._client is not None

    def _size_for(self, address: MemoryAddress, length: int | None) -> int:
        if length is not None:
            if address.data_type == DataType.BIT or address.region == AddressingMode.OUTPUT:
                raise ValueError("length is not supported for bit addresses")
            if length <= 0:
                raise ValueError(f"length must be > 0, got {length}")
            return length
        width = width_of(address.data_type)
        if width is None:
            raise ValueError(f"{address.data_type.value} has variable width; length must be supplied")
        return width

    def read_bytes(self, address: MemoryAddress | str, length: int | None = None) -> bytearray:
        """Read the raw bytes behind an address (decoding strings first)."""
        addr = decode_address(address) if isinstance(address, str) else address
        size = self._size_for(addr, length)
        client = self._get_client()
        logger.debug("Reading %d byte(s) at %s", size, addr)
        try:
            if addr.region == AddressingMode.DATA_BLOCK:
                return client.db_read(addr.data_block, addr.offset, size)
            area = _REGION_AREAS.get(addr.region)
            if area is None:
                raise PLCIOError(f"Unsupported region: {addr.region.value}", area=addr.region.value)
            return client.read_area(area, 0, addr.offset, size)
        except RuntimeError as e:
            raise PLCIOError(
                str(e),
                area=addr.region.value,
                data_block=addr.data_block,
                offset=addr.offset,
                cause=e,
            ) from e

    def read(self, address: MemoryAddress | str, length: int | None = None) -> bool | int | float | bytes:
        """Read an address and return it as bool, int, float or bytes."""
        addr = decode_address(address) if isinstance(address, str) else address
        return decode_value(self.read_bytes(addr, length), addr)

    def dump(self, data_block: int, offset: int, length: int) -> bytearray:
        """Read length raw bytes from a data block starting at offset."""
        if length <= 0:
            raise ValueError(f"length must be > 0, got {length}")
        return self.read_bytes(MemoryAddress(AddressingMode.DATA_BLOCK, data_block, offset), length)

    def __getitem__(self, address: str) -> bool | int | float | bytes:
        return self.read(address)
