"""PPM compression with Huffman-coded contexts of orders -1 to 4."""

from __future__ import annotations

import math
import os
from collections.abc import Sequence
from dataclasses import dataclass

from .bitio import BitWriter
from .context import Context, ContextTable
from .model import (
    EMPTY_CONTEXT,
    ORDER,
    RHO,
    equiprobable_context,
    load_model,
    save_model,
    update_context_str,
)

_END_OF_INPUT = 0xFF  # read as a signed char this byte equals EOF


@dataclass
class CompressionStats:
    """Figures gathered while compressing.

    ``bits`` and ``information`` follow the encoder's own bookkeeping: a
    symbol found in a context of order 1 or more is counted with its code
    length and information after the context has been updated.
    """

    size: int = 0
    bits: int = 0
    information: float = 0.0

    @property
    def byte_count(self) -> int:
        return self.bits // 8

    @property
    def average_length(self) -> float:
        """Counted bits per input byte."""
        return self.bits / self.size if self.size else math.nan

    @property
    def entropy(self) -> float:
        """Accumulated self-information per input byte."""
        return self.information / self.size if self.size else math.nan


class _Encoder:
    def __init__(self, k0: Context, tables: Sequence[ContextTable], eqprob: Context) -> None:
        self.k0 = k0
        self.tables = list(tables)
        self.eqprob = eqprob
        self.context_strs = [EMPTY_CONTEXT] * len(self.tables)
        self.writer = BitWriter()
        self.stats = CompressionStats()

    def encode(self, char: str) -> None:
        for k in reversed(range(len(self.tables))):
            if self._search_context(k, char):
                return
        self._encode_order0(char)

    def _advance(self, k: int, char: str) -> None:
        self.context_strs[k] = update_context_str(self.context_strs[k], k + 1, char)

    def _search_context(self, k: int, char: str) -> bool:
        """Code ``char`` in the order k+1 context; True when it was found there."""
        name = self.context_strs[k]
        if name == EMPTY_CONTEXT or len(name) < k + 1:
            self._advance(k, char)
            return False

        table = self.tables[k]
        context = table.get(name)
        if context is None:
            context = table.create(name)
            context.add_symbol(char)
            context.add_symbol(RHO)
            context.rebuild()
            self._advance(k, char)
            return False

        symbol = context.symbols.get(char)
        if symbol is not None:
            symbol.counter += 1
            self.writer.write(symbol.code)
            self._advance(k, char)
            context.rebuild()
            self.stats.bits += symbol.code.length
            self.stats.information += context.information(symbol)
            return True

        rho = context.symbols.get(RHO)
        if rho is None:
            raise ValueError(f"context {name!r} has no escape symbol")
        self.writer.write(rho.code)
        rho.counter += 1
        context.add_symbol(char)
        self.stats.bits += rho.code.length
        self.stats.information += context.information(rho)
        context.rebuild()
        self._advance(k, char)
        return False

    def _encode_order0(self, char: str) -> None:
        k0, eqprob = self.k0, self.eqprob

        symbol = k0.symbols.get(char)
        if symbol is not None:
            symbol.counter += 1
            self.writer.write(symbol.code)
            self.stats.bits += symbol.code.length
            self.stats.information += k0.information(symbol)
            k0.rebuild()
            return

        symbol = eqprob.symbols.get(char)
        if symbol is None:
            return

        k0.add_symbol(char)
        rho = k0.symbols.get(RHO)
        if rho is not None:
            rho.counter += 1
            self.writer.write(rho.code)
            self.stats.bits += rho.code.length
            self.stats.information += eqprob.information(rho)
        else:
            k0.add_symbol(RHO)

        if len(eqprob.symbols) > 1:
            self.writer.write(symbol.code)
            self.stats.bits += symbol.code.length
            self.stats.information += eqprob.information(symbol)
        else:
            # The last unseen symbol is now known: no more escapes are needed.
            k0.symbols.remove(RHO)

        eqprob.symbols.remove(char)
        eqprob.rebuild()
        k0.rebuild()


def _compress(
    data: bytes, k0: Context, tables: Sequence[ContextTable], loaded: bool
) -> tuple[bytes, CompressionStats]:
    if len(tables) != ORDER:
        raise ValueError(f"expected {ORDER} context tables, got {len(tables)}")
    encoder = _Encoder(k0, tables, equiprobable_context(loaded))
    for byte in data:
        if byte == _END_OF_INPUT:
            break
        encoder.encode(chr(byte))
    encoder.writer.flush()
    encoder.stats.size = len(data)
    header = (len(data) & 0xFFFFFFFF).to_bytes(4, "big")
    return header + encoder.writer.getvalue(), encoder.stats


def compress_bytes(
    data: bytes,
    k0: Context | None = None,
    tables: Sequence[ContextTable] | None = None,
) -> tuple[bytes, CompressionStats]:
    """Compress ``data`` and return the compressed bytes with statistics.

    ``k0`` and ``tables`` hold the model and are updated in place. When
    ``k0`` already holds symbols it counts as a loaded model and the
    order -1 alphabet starts empty.
    """
    if k0 is None:
        k0 = Context()
    if tables is None:
        tables = [ContextTable() for _ in range(ORDER)]
    return _compress(data, k0, tables, loaded=len(k0.symbols) > 0)


def compress(
    input_path: str | os.PathLike,
    output_path: str | os.PathLike,
    save_model_path: str | os.PathLike | None = None,
    load_model_path: str | os.PathLike | None = None,
) -> CompressionStats:
    """Compress a file, optionally starting from and saving a model file."""
    k0 = Context()
    tables = [ContextTable() for _ in range(ORDER)]
    if load_model_path is not None:
        load_model(load_model_path, k0, tables)

    with open(input_path, "rb") as source:
        data = source.read()
    compressed, stats = _compress(data, k0, tables, loaded=load_model_path is not None)
    with open(output_path, "wb") as target:
        target.write(compressed)

    if save_model_path is not None:
        save_model(save_model_path, k0, tables)
    return stats