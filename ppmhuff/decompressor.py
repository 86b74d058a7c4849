"""Decoding of streams written by the PPM compressor."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from functools import partial

from .bitio import iter_bits
from .context import Context, ContextTable
from .huffman import Symbol
from .model import EMPTY_CONTEXT, ORDER, RHO, equiprobable_context, update_context_str

_HEADER_SIZE = 4


class _Decoder:
    """Mirrors the encoder's model, reading codes instead of writing them."""

    def __init__(self, bits: Iterator[int]) -> None:
        self._bits = bits
        self._k0 = Context()
        self._eqprob = equiprobable_context(False)
        self._tables = [ContextTable() for _ in range(ORDER)]
        self._context_strs = [EMPTY_CONTEXT] * ORDER

    def _read_symbol(self, context: Context) -> Symbol:
        codes = {(s.code.value, s.code.length): s for s in context.symbols}
        value = length = 0
        while True:
            symbol = codes.get((value, length))
            if symbol is not None:
                return symbol
            if length >= context.max_search_length:
                raise ValueError("invalid code in compressed data")
            bit = next(self._bits, None)
            if bit is None:
                raise ValueError("compressed data ends unexpectedly")
            value = (value << 1) | bit
            length += 1

    def _advance(self, k: int, char: str) -> None:
        self._context_strs[k] = update_context_str(self._context_strs[k], k + 1, char)

    def _create(self, k: int, name: str, char: str) -> None:
        context = self._tables[k].create(name)
        context.add_symbol(char)
        context.add_symbol(RHO)
        context.rebuild()
        self._advance(k, char)

    def _escape(self, k: int, context: Context, char: str) -> None:
        context.symbols.get(RHO).counter += 1
        context.add_symbol(char)
        context.rebuild()
        self._advance(k, char)

    def decode_symbol(self) -> str:
        pending: list[Callable[[str], None]] = []
        for k in reversed(range(ORDER)):
            name = self._context_strs[k]
            if name == EMPTY_CONTEXT or len(name) < k + 1:
                pending.append(partial(self._advance, k))
                continue
            context = self._tables[k].get(name)
            if context is None:
                pending.append(partial(self._create, k, name))
                continue
            symbol = self._read_symbol(context)
            if symbol.repr == RHO:
                pending.append(partial(self._escape, k, context))
                continue
            char = symbol.repr
            symbol.counter += 1
            self._advance(k, char)
            context.rebuild()
            self._apply(pending, char)
            return char

        char = self._decode_order0()
        self._apply(pending, char)
        return char

    @staticmethod
    def _apply(pending: list[Callable[[str], None]], char: str) -> None:
        for action in pending:
            action(char)

    def _decode_order0(self) -> str:
        k0, eqprob = self._k0, self._eqprob
        rho = None
        if len(k0.symbols):
            symbol = self._read_symbol(k0)
            if symbol.repr != RHO:
                symbol.counter += 1
                k0.rebuild()
                return symbol.repr
            rho = symbol

        if not len(eqprob.symbols):
            raise ValueError("escape to an empty alphabet in compressed data")
        if len(eqprob.symbols) > 1:
            char = self._read_symbol(eqprob).repr
        else:
            char = next(iter(eqprob.symbols)).repr

        k0.add_symbol(char)
        if rho is not None:
            rho.counter += 1
        else:
            k0.add_symbol(RHO)
        if len(eqprob.symbols) == 1:
            k0.symbols.remove(RHO)

        eqprob.symbols.remove(char)
        eqprob.rebuild()
        k0.rebuild()
        return char


def decompress_bytes(data: bytes) -> bytes:
    """Decode the output of the compressor back into the original text."""
    if len(data) < _HEADER_SIZE:
        raise ValueError("compressed data lacks its size header")
    size = int.from_bytes(data[:_HEADER_SIZE], "big")
    decoder = _Decoder(iter_bits(data[_HEADER_SIZE:]))
    return bytes(ord(decoder.decode_symbol()) for _ in range(size))


def decompress(input_path: str | os.PathLike, output_path: str | os.PathLike) -> int:
    """Decompress a file and return the number of bytes written."""
    with open(input_path, "rb") as source:
        data = source.read()
    text = decompress_bytes(data)
    with open(output_path, "wb") as target:
        target.write(text)
    return len(text)