"""Normalisation of text to lower-case letters and spaces."""

from __future__ import annotations

import os
from collections.abc import Iterator

_UNMAPPED = 0
_EOF_BYTE = 0xFF  # read as a signed char, this byte equals EOF and ends the input


def is_forbidden(byte: int) -> bool:
    """Whether ``byte`` is a digit or punctuation character to drop."""
    return 0x21 <= byte <= 0x40 or 0x5B <= byte <= 0x60


def conversion_table() -> dict[tuple[int, int], int]:
    """Map two-byte UTF-8 accented letters to their unaccented lower-case byte."""
    groups = {
        "a": (0x80, 0x81, 0x82, 0x83, 0x84, 0xA0, 0xA1, 0xA2, 0xA3, 0xA4),
        "e": (0x88, 0x89, 0x8A, 0x8B, 0xA8, 0xA9, 0xAA, 0xAB),
        "i": (0x8C, 0x8D, 0x8E, 0x8F, 0xAC, 0xAD, 0xAE, 0xAF),
        "o": (0x92, 0x93, 0x94, 0x95, 0x96, 0xB2, 0xB3, 0xB4, 0xB5, 0xB6),
        "u": (0x99, 0x9A, 0x9B, 0x9C, 0xB9, 0xBA, 0xBB, 0xBC),
        "c": (0x87, 0xA7),
        "n": (0x91, 0xB1),
    }
    return {
        (0xC3, second): ord(letter)
        for letter, seconds in groups.items()
        for second in seconds
    }


def _formatted(data: bytes) -> Iterator[int]:
    table = conversion_table()
    stream = iter(data)
    last = 0
    for byte in stream:
        if byte == _EOF_BYTE:
            return
        if byte == 0x0D:
            next(stream, None)
            yield ord(" ")
        elif is_forbidden(byte) or byte == 0xC2:
            continue
        elif byte < 0x80:
            if byte == 0x20 and last == 0x20:
                continue
            yield ord(chr(byte).lower())
            last = byte
        elif byte & 0xE0 == 0xE0:
            next(stream, None)
            next(stream, None)
        elif byte & 0xC0 == 0xC0:
            second = next(stream, _EOF_BYTE)
            yield table.get((byte, second), _UNMAPPED)


def format_bytes(data: bytes) -> bytes:
    """Lower-case ASCII, strip digits and punctuation, fold accents, squeeze spaces."""
    return bytes(_formatted(data))


def format_file(input_path: str | os.PathLike, output_path: str | os.PathLike) -> None:
    """Write the formatted contents of ``input_path`` to ``output_path``."""
    with open(input_path, "rb") as source:
        data = source.read()
    with open(output_path, "wb") as target:
        target.write(format_bytes(data))