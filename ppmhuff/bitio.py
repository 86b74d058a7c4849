"""Packing of variable-length codes into bytes, most significant bit first."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .huffman import Code


class BitWriter:
    """Accumulates codes into a byte string; a byte is emitted once it is full."""

    def __init__(self) -> None:
        self._output = bytearray()
        self._pending = 0
        self._pending_bits = 0
        self.bits_written = 0

    def write(self, code: Code) -> None:
        """Append the ``code.length`` low bits of ``code.value``."""
        if code.length <= 0:
            return
        value = code.value & ((1 << code.length) - 1)
        self._pending = (self._pending << code.length) | value
        self._pending_bits += code.length
        self.bits_written += code.length
        while self._pending_bits >= 8:
            self._pending_bits -= 8
            self._output.append((self._pending >> self._pending_bits) & 0xFF)
            self._pending &= (1 << self._pending_bits) - 1

    def flush(self) -> None:
        """Emit a partially filled byte, padding its low bits with zeros."""
        if self._pending_bits:
            self._output.append((self._pending << (8 - self._pending_bits)) & 0xFF)
            self._pending = 0
            self._pending_bits = 0

    def getvalue(self) -> bytes:
        """Return the complete bytes emitted so far."""
        return bytes(self._output)


def iter_bits(data: Iterable[int]) -> Iterator[int]:
    """Yield the bits of each byte in ``data``, most significant first."""
    for byte in data:
        for shift in range(7, -1, -1):
            yield (byte >> shift) & 1