#!/usr/bin/env python3
"""Example: decode addresses offline, without a PLC connection."""

from pys7repl import decode_address, is_valid_address, width_of


def main() -> None:
    for token in ["42", "DB100.DBW8", "DB16.DBX80.3", "A9.1", "MW180", "mw10", "I3.2"]:
        if not is_valid_address(token):
            print(f"{token:<14} invalid")
            continue
        addr = decode_address(token)
        print(f"{token:<14} {addr}  ({width_of(addr.data_type)} byte(s))")


if __name__ == "__main__":
    main()
