"""PPM model state: the fallback alphabet, context strings and model files."""

from __future__ import annotations

import os
from collections.abc import Iterator, Sequence
from string import ascii_lowercase

from .context import Context, ContextTable

EMPTY_CONTEXT = "---"
RHO = "`"
ALPHABET_SIZE = 27
ORDER = 4
_END_MARK = "-1"


def equiprobable_context(empty: bool) -> Context:
    """Return the order -1 context: space and a-z with equal counters, or nothing."""
    context = Context()
    if empty:
        return context
    for repr in " " + ascii_lowercase:
        context.add_symbol(repr)
    context.rebuild()
    return context


def update_context_str(context_str: str, k: int, symbol: str) -> str:
    """Return ``context_str`` extended by the first character of ``symbol``.

    Once the string holds ``k`` characters the oldest one is dropped.
    """
    char = symbol[0]
    if context_str == EMPTY_CONTEXT:
        return char
    if len(context_str) == k:
        return context_str[1:] + char
    return context_str + char


def save_model(path: str | os.PathLike, k0: Context, tables: Sequence[ContextTable]) -> None:
    """Write the counters of the order-0 context and of every context table."""
    with open(path, "w", encoding="latin-1", newline="\n") as out:
        for symbol in k0.symbols.bucket_heads():
            out.write(f"{symbol.repr},{symbol.counter}\n")
        out.write(f"{_END_MARK}\n")
        for table in tables:
            for context in table.bucket_heads():
                out.write(f"{context.name}:{len(context.symbols)}\n")
                for symbol in context.symbols.bucket_heads():
                    out.write(f"{symbol.repr},{symbol.counter}\n")
            out.write(f"{_END_MARK}\n")


def _body(line: str) -> str:
    return line[:-1] if line.endswith("\n") else line


def _split(line: str, separator: str) -> tuple[str, int]:
    head, found, tail = _body(line).partition(separator)
    if not found:
        raise ValueError(f"malformed model line: {line!r}")
    try:
        return head, int(tail)
    except ValueError:
        raise ValueError(f"malformed model line: {line!r}") from None


def _next_line(lines: Iterator[str]) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise ValueError("model file ends unexpectedly") from None


def _read_symbol(context: Context, line: str) -> None:
    repr, counter = _split(line, ",")
    context.add_symbol(repr)
    context.symbols.get(repr).counter = counter


def load_model(path: str | os.PathLike, k0: Context, tables: Sequence[ContextTable]) -> None:
    """Fill ``k0`` and ``tables`` from a model file and rebuild their trees."""
    with open(path, encoding="latin-1", newline="") as source:
        lines = iter(source)
        for line in lines:
            if _body(line) == _END_MARK:
                break
            _read_symbol(k0, line)
        k0.rebuild()

        for table in tables:
            while True:
                line = _next_line(lines)
                if _body(line) == _END_MARK:
                    break
                name, size = _split(line, ":")
                table.create(name)
                context = table.get(name)
                for _ in range(size):
                    _read_symbol(context, _next_line(lines))
                context.rebuild()