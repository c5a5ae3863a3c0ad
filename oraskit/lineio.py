"""Reading single lines from binary streams."""

from __future__ import annotations

from typing import BinaryIO


def read_line(reader: BinaryIO) -> bytes:
    """Read one line, byte by byte, dropping the newline and a trailing CR.

    Nothing past the newline is consumed from ``reader``.
    """
    line = bytearray()
    while True:
        byte = reader.read(1)
        if not byte or byte == b"\n":
            break
        line += byte
    return bytes(line).removesuffix(b"\r")