#!/usr/bin/env python3
"""Example: connect to an S7 PLC and read a few addresses by symbolic name."""

import sys

from pys7repl import S7Client, decode_address
from pys7repl.errors import MalformedAddressError, PLCIOError


def main() -> None:
    host = "192.168.0.1"  # change to your PLC IP
    rack = 0
    slot = 1

    try:
        with S7Client(host=host, rack=rack, slot=slot) as plc:
            # Data block word (16-bit signed)
            v = plc.read("DB100.DBW8")
            print(f"DB100.DBW8 = {v}")

            # Data block bit
            v = plc.read("DB16.DBX80.3")
            print(f"DB16.DBX80.3 = {v}")

            # Flag memory word and discrete output bit
            print(f"MW180 = {plc['MW180']}")
            print(f"A9.1 = {plc['A9.1']}")

            # Raw bytes of DB 5, offset 0
            data = plc.dump(5, 0, 16)
            print(f"DB5[0:16] = {data.hex(' ')}")

            print(f"decode(DB100.DBW8): {decode_address('DB100.DBW8')}")
    except MalformedAddressError as e:
        print(f"Malformed address: {e}", file=sys.stderr)
        sys.exit(1)
    except PLCIOError as e:
        print(f"S7/connection error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
