"""Tests for CLI module - formatting helpers and command structure."""

import json
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from pys7repl.cli import app, format_dump, format_value
from pys7repl.errors import PLCIOError

runner = CliRunner()


# ============================================================================
# Formatting Tests
# ============================================================================


class TestFormatValue:
    """Test value formatting for display."""

    def test_bool_formatting(self) -> None:
        assert format_value(True) == "true"
        assert format_value(False) == "false"

    def test_number_formatting(self) -> None:
        assert format_value(-2) == "-2"
        assert format_value(1.5) == "1.5"

    def test_bytes_formatting(self) -> None:
        assert format_value(b"\x01\xab") == "01 ab"


class TestFormatDump:
    """Test dump rendering, 16 bytes per line."""

    def test_hex_lines(self) -> None:
        lines = format_dump(bytes(range(18)))
        assert len(lines) == 2
        assert lines[0].startswith("0x0000 - 0x00 0x01 ")
        assert lines[0].endswith("0x0F")
        assert lines[1] == "0x0010 - 0x10 0x11"

    def test_decimal_lines(self) -> None:
        lines = format_dump(bytes([1, 255]), start=32, decimal=True)
        assert lines == ["   32 -   1 255"]

    def test_start_offset_labels(self) -> None:
        lines = format_dump(bytes(17), start=0x100)
        assert lines[0].startswith("0x0100 - ")
        assert lines[1].startswith("0x0110 - ")

    def test_empty(self) -> None:
        assert format_dump(b"") == []


# ============================================================================
# Command Tests
# ============================================================================


def test_explain_command() -> None:
    result = runner.invoke(app, ["explain", "DB100.DBW8"])

    assert result.exit_code == 0
    assert "Region:      DataBlock" in result.stdout
    assert "Data block:  100" in result.stdout
    assert "Offset:      8" in result.stdout
    assert "Data type:   Int" in result.stdout


def test_explain_command_json() -> None:
    result = runner.invoke(app, ["explain", "DB16.DBX80.3", "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["region"] == "DataBlock"
    assert data["data_block"] == 16
    assert data["offset"] == 80
    assert data["bit"] == 3
    assert data["data_type"] == "Bit"


def test_explain_malformed_exits_2() -> None:
    result = runner.invoke(app, ["explain", "mw10"])

    assert result.exit_code == 2


def test_validate_command() -> None:
    result = runner.invoke(app, ["validate", "MW180", "A9.1"])

    assert result.exit_code == 0
    assert "MW180: valid" in result.stdout
    assert "A9.1: valid" in result.stdout


def test_validate_command_invalid_exits_1() -> None:
    result = runner.invoke(app, ["validate", "MW180", "XYZ", "--json"])

    assert result.exit_code == 1
    data = json.loads(result.stdout)
    assert data == {"MW180": True, "XYZ": False}


def test_types_command() -> None:
    result = runner.invoke(app, ["types"])

    assert result.exit_code == 0
    assert "USInt" in result.stdout
    assert "alias: Byte" in result.stdout
    assert "var" in result.stdout


def test_types_command_json() -> None:
    result = runner.invoke(app, ["types", "--json"])

    assert result.exit_code == 0
    rows = {row["name"]: row for row in json.loads(result.stdout)}
    assert rows["UInt"]["width"] == 2
    assert rows["UInt"]["aliases"] == ["Word"]
    assert rows["String"]["width"] is None


@patch("pys7repl.cli.S7Client")
def test_read_command(mock_client_class: MagicMock) -> None:
    mock_client = MagicMock()
    mock_client_class.return_value = mock_client
    mock_client.__enter__.return_value = mock_client
    mock_client.read.return_value = 1234

    result = runner.invoke(app, ["read", "DB100.DBW8", "--host", "192.168.0.1", "--slot", "1"])

    assert result.exit_code == 0
    assert "1234" in result.stdout
    mock_client_class.assert_called_once_with(host="192.168.0.1", rack=0, slot=1, port=102)
    decoded, length = mock_client.read.call_args.args
    assert decoded.data_block == 100
    assert length is None


@patch("pys7repl.cli.S7Client")
def test_read_command_json_bytes(mock_client_class: MagicMock) -> None:
    mock_client = MagicMock()
    mock_client_class.return_value = mock_client
    mock_client.__enter__.return_value = mock_client
    mock_client.read.return_value = b"\x01\x02"

    result = runner.invoke(app, ["read", "DB1.DBB0", "--host", "192.168.0.1", "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data == {"address": "DB1.DBB0", "value": [1, 2]}


def test_read_command_requires_host() -> None:
    result = runner.invoke(app, ["read", "MW180"])

    assert result.exit_code == 2


def test_read_command_malformed_address() -> None:
    result = runner.invoke(app, ["read", "XYZ", "--host", "192.168.0.1"])

    assert result.exit_code == 2


@patch("pys7repl.cli.S7Client")
def test_read_command_plc_error_exits_3(mock_client_class: MagicMock) -> None:
    mock_client = MagicMock()
    mock_client_class.return_value = mock_client
    mock_client.__enter__.return_value = mock_client
    mock_client.read.side_effect = PLCIOError("CPU : Address out of range")

    result = runner.invoke(app, ["read", "MW180", "--host", "192.168.0.1"])

    assert result.exit_code == 3


@patch("pys7repl.cli.S7Client")
def test_dump_command(mock_client_class: MagicMock) -> None:
    mock_client = MagicMock()
    mock_client_class.return_value = mock_client
    mock_client.__enter__.return_value = mock_client
    mock_client.dump.return_value = bytearray(range(16))

    result = runner.invoke(app, ["dump", "5", "0", "16", "--host", "192.168.0.1", "--dec"])

    assert result.exit_code == 0
    assert result.stdout.startswith("    0 -   0   1")
    mock_client.dump.assert_called_once_with(5, 0, 16)


def test_dump_command_rejects_zero_length() -> None:
    result = runner.invoke(app, ["dump", "5", "0", "0", "--host", "192.168.0.1"])

    assert result.exit_code == 2


@patch("pys7repl.cli.S7Client")
def test_ping_command(mock_client_class: MagicMock) -> None:
    mock_client = MagicMock()
    mock_client_class.return_value = mock_client
    mock_client.__enter__.return_value = mock_client

    result = runner.invoke(app, ["ping", "--host", "192.168.0.1"])

    assert result.exit_code == 0
    assert "OK: Connected to 192.168.0.1:102" in result.stdout


def test_command_help() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for command in ("explain", "validate", "types", "read", "dump", "ping"):
        assert command in result.stdout


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "pys7repl" in result.stdout
