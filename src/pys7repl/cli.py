#!/usr/bin/env python3
"""Command-line interface for pys7repl using Typer."""

import json
import logging
from typing import Optional

import typer
from typing_extensions import Annotated

from . import __version__  # type: ignore
from .address import decode_address, is_valid_address
from .client import S7Client
from .errors import MalformedAddressError, PLCIOError
from .types import DataType, aliases_of, describe, width_of

app = typer.Typer(
    name="pys7",
    help="Decode S7 symbolic addresses and read them from Siemens S7 PLCs.",
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)

# ============================================================================
# Shared options and helpers
# ============================================================================

HostOption = Annotated[
    Optional[str],
    typer.Option("--host", "-h", help="PLC hostname or IP address", envvar="PYS7_HOST"),
]
RackOption = Annotated[
    int,
    typer.Option("--rack", help="PLC rack number", envvar="PYS7_RACK"),
]
SlotOption = Annotated[
    int,
    typer.Option("--slot", help="PLC CPU slot number", envvar="PYS7_SLOT"),
]
PortOption = Annotated[
    int,
    typer.Option("--port", "-p", help="ISO-on-TCP port", envvar="PYS7_PORT"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Enable debug logging"),
]
JsonOption = Annotated[
    bool,
    typer.Option("--json", help="Output as JSON"),
]


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbose flag."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if not verbose else "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def create_client(host: Optional[str], rack: int, slot: int, port: int) -> S7Client:
    """Create and return an S7Client instance."""
    if not host:
        typer.echo("Error: --host is required for this command", err=True)
        raise typer.Exit(2)
    return S7Client(host=host, rack=rack, slot=slot, port=port)


def format_value(value: bool | int | float | bytes) -> str:
    """Format a read value for display."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (bytes, bytearray)):
        return value.hex(" ")
    return str(value)


def json_value(value: bool | int | float | bytes) -> bool | int | float | list[int]:
    if isinstance(value, (bytes, bytearray)):
        return list(value)
    return value


def format_dump(data: bytes | bytearray, start: int = 0, decimal: bool = False, per_line: int = 16) -> list[str]:
    """
    Render bytes as lines of per_line values, each prefixed with its byte address.

    Hex: "0x0010 - 0x01 0xFF ..."; decimal: "   16 -   1 255 ...".
    """
    lines: list[str] = []
    for i in range(0, len(data), per_line):
        chunk = data[i : i + per_line]
        label = f"{start + i:5}" if decimal else f"0x{start + i:04X}"
        values = " ".join(f"{b:3}" if decimal else f"0x{b:02X}" for b in chunk)
        lines.append(f"{label} - {values}")
    return lines


# ============================================================================
# Commands
# ============================================================================


@app.command()
def explain(
    address: Annotated[str, typer.Argument(help="Address to decode (e.g., DB100.DBW8, MW180, A9.1, 42)")],
    verbose: VerboseOption = False,
    json_output: JsonOption = False,
) -> None:
    """
    Show how an address decodes: region, data block, offset, bit and data type.

    Does not require a connection.
    """
    setup_logging(verbose)

    try:
        decoded = decode_address(address)
    except MalformedAddressError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)

    info = decoded.to_dict()
    if json_output:
        typer.echo(json.dumps({"address": address, **info}, indent=2))
    else:
        width = info["width"] if info["width"] is not None else "variable"
        typer.echo(f"Address:     {address}")
        typer.echo(f"Region:      {info['region']}")
        typer.echo(f"Data block:  {info['data_block']}")
        typer.echo(f"Offset:      {info['offset']}")
        typer.echo(f"Bit:         {info['bit']}")
        typer.echo(f"Data type:   {info['data_type']}")
        typer.echo(f"Width:       {width}")


@app.command()
def validate(
    addresses: Annotated[list[str], typer.Argument(help="Addresses to check")],
    json_output: JsonOption = False,
) -> None:
    """
    Check whether each address is well-formed.

    Exits with status 1 if any address is invalid.
    """
    results = {a: is_valid_address(a) for a in addresses}
    if json_output:
        typer.echo(json.dumps(results, indent=2))
    else:
        for a, ok in results.items():
            typer.echo(f"{a}: {'valid' if ok else 'invalid'}")
    if not all(results.values()):
        raise typer.Exit(1)


@app.command(name="types")
def list_types(json_output: JsonOption = False) -> None:
    """List S7 data types with their byte widths and aliases."""
    rows = [
        {
            "name": dt.value,
            "width": width_of(dt),
            "aliases": aliases_of(dt),
            "description": describe(dt),
        }
        for dt in DataType
    ]
    if json_output:
        typer.echo(json.dumps(rows, indent=2))
        return
    for row in rows:
        width = str(row["width"]) if row["width"] is not None else "var"
        alias = f" (alias: {', '.join(row['aliases'])})" if row["aliases"] else ""
        typer.echo(f"{row['name']:<10} {width:>3}  {row['description']}{alias}")


@app.command()
def ping(
    host: HostOption = None,
    rack: RackOption = 0,
    slot: SlotOption = 0,
    port: PortOption = 102,
    verbose: VerboseOption = False,
) -> None:
    """Test connectivity to the PLC."""
    setup_logging(verbose)

    client = create_client(host, rack, slot, port)
    try:
        with client:
            typer.echo(f"OK: Connected to {host}:{port} (rack {rack}, slot {slot})")
    except PLCIOError as e:
        typer.echo(f"Error: Connection error: {e}", err=True)
        raise typer.Exit(3)


@app.command()
def read(
    address: Annotated[str, typer.Argument(help="Address to read (e.g., DB100.DBW8, MW180, A9.1)")],
    host: HostOption = None,
    rack: RackOption = 0,
    slot: SlotOption = 0,
    port: PortOption = 102,
    length: Annotated[Optional[int], typer.Option("--length", "-l", help="Byte count (required for String/ByteArray)")] = None,
    verbose: VerboseOption = False,
    json_output: JsonOption = False,
) -> None:
    """
    Read a single address from the PLC.

    Returns the value as text by default, or JSON with --json.
    """
    setup_logging(verbose)

    try:
        decoded = decode_address(address)
    except MalformedAddressError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)

    client = create_client(host, rack, slot, port)
    try:
        with client:
            value = client.read(decoded, length)
        if json_output:
            typer.echo(json.dumps({"address": address, "value": json_value(value)}))
        else:
            typer.echo(format_value(value))
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)
    except PLCIOError as e:
        typer.echo(f"Error: Connection/S7 error: {e}", err=True)
        raise typer.Exit(3)
    except Exception as e:
        typer.echo(f"Error: Unexpected error: {e}", err=True)
        if verbose:
            import traceback
            traceback.print_exc()
        raise typer.Exit(4)


@app.command()
def dump(
    data_block: Annotated[int, typer.Argument(help="Data block number")],
    offset: Annotated[int, typer.Argument(help="Start byte offset")],
    length: Annotated[int, typer.Argument(help="Number of bytes")],
    host: HostOption = None,
    rack: RackOption = 0,
    slot: SlotOption = 0,
    port: PortOption = 102,
    dec: Annotated[bool, typer.Option("--dec", help="Show decimal instead of hex")] = False,
    verbose: VerboseOption = False,
) -> None:
    """Dump a range of bytes from a data block, 16 per line."""
    setup_logging(verbose)

    if length <= 0:
        typer.echo(f"Error: Length must be positive, got {length}", err=True)
        raise typer.Exit(2)

    client = create_client(host, rack, slot, port)
    try:
        with client:
            data = client.dump(data_block, offset, length)
        for line in format_dump(data, start=offset, decimal=dec):
            typer.echo(line)
    except PLCIOError as e:
        typer.echo(f"Error: Connection/S7 error: {e}", err=True)
        raise typer.Exit(3)
    except Exception as e:
        typer.echo(f"Error: Unexpected error: {e}", err=True)
        if verbose:
            import traceback
            traceback.print_exc()
        raise typer.Exit(4)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"pys7repl {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version and exit"),
    ] = None,
) -> None:
    """pys7 - Decode S7 addresses and read S7 PLC memory."""
    pass


if __name__ == "__main__":
    app()
