"""Hashed symbol tables and the Huffman-coded contexts built on them."""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass, field

from .huffman import Code, HuffmanTree, Node, Symbol, build_tree

TABLE_SIZE = 3000

_A = 0.6180339887
_M = 2.0**14
_INT_MIN = -(2**31)
_INT_LIMIT = 2**31


def _to_int32(value: float) -> int:
    """Truncate to a 32-bit int; out-of-range values become INT_MIN."""
    if not _INT_MIN <= value < _INT_LIMIT:
        return _INT_MIN
    return int(value)


def _signed_byte(ch: str) -> int:
    value = ord(ch)
    return value - 256 if 128 <= value < 256 else value


def hash_key(key: str) -> int:
    """Hash ``key`` by the multiplication method; the result is in [0, 2**14).

    The key is read as a base-128 number of signed bytes accumulated in a
    32-bit integer.
    """
    k = 0
    for power, ch in zip(range(len(key) - 1, -1, -1), key):
        k = _to_int32(k + _signed_byte(ch) * 128.0**power)
    product = k * _A
    return math.floor(_M * (product - math.floor(product)))


def _slot(key: str) -> int:
    return hash_key(key) % TABLE_SIZE


class SymbolTable:
    """Symbols chained in hash buckets, iterated in bucket order."""

    def __init__(self) -> None:
        self._buckets: dict[int, list[Symbol]] = {}

    def _chains(self) -> Iterator[list[Symbol]]:
        for index in sorted(self._buckets):
            yield self._buckets[index]

    def add(self, symbol: Symbol) -> Symbol:
        """Store a copy of ``symbol`` at the end of its chain and return it."""
        stored = Symbol(symbol.repr, symbol.counter, Code(symbol.code.value, symbol.code.length))
        self._buckets.setdefault(_slot(symbol.repr), []).append(stored)
        return stored

    def _discard(self, index: int, chain: list[Symbol], position: int) -> None:
        del chain[position]
        if not chain:
            del self._buckets[index]

    def remove(self, key: str) -> None:
        """Remove the first symbol named ``key``, if any."""
        index = _slot(key)
        chain = self._buckets.get(index, [])
        for position, symbol in enumerate(chain):
            if symbol.repr == key:
                self._discard(index, chain, position)
                return

    def increment(self, key: str) -> None:
        symbol = self.get(key)
        if symbol is not None:
            symbol.counter += 1

    def decrement(self, key: str) -> None:
        """Decrease the counter of ``key``, removing it when it reaches zero."""
        index = _slot(key)
        chain = self._buckets.get(index, [])
        for position, symbol in enumerate(chain):
            if symbol.repr == key:
                symbol.counter -= 1
                if not symbol.counter:
                    self._discard(index, chain, position)
                return

    def get(self, key: str) -> Symbol | None:
        for symbol in self._buckets.get(_slot(key), ()):
            if symbol.repr == key:
                return symbol
        return None

    def bucket_heads(self) -> Iterator[Symbol]:
        """Yield the first symbol of each non-empty bucket."""
        for chain in self._chains():
            yield chain[0]

    def find_code(self, code: Code) -> Symbol | None:
        """Return the first symbol whose code equals ``code``."""
        for symbol in self:
            if symbol.code.value == code.value and symbol.code.length == code.length:
                return symbol
        return None

    def __iter__(self) -> Iterator[Symbol]:
        for chain in self._chains():
            yield from chain

    def __len__(self) -> int:
        return sum(len(chain) for chain in self._buckets.values())


def _path_code(leaf: Node) -> Code:
    """Code of a leaf: bit i is 1 when the i-th edge above the leaf goes left."""
    code = Code()
    node = leaf
    while node.parent is not None:
        if node.is_left_child():
            code.value |= 1 << code.length
        code.length += 1
        node = node.parent
    return code


@dataclass(eq=False)
class Context:
    """A coding context: a symbol table and the Huffman tree over it."""

    name: str | None = None
    symbols: SymbolTable = field(default_factory=SymbolTable)
    tree: HuffmanTree | None = None
    max_search_length: int = 0

    def add_symbol(self, repr: str) -> Symbol:
        """Add a new symbol with counter 1 and return it."""
        return self.symbols.add(Symbol(repr, 1))

    def rebuild(self) -> None:
        """Rebuild the tree from the current counters and reassign codes."""
        if not len(self.symbols):
            self.tree = None
            return
        self.tree = build_tree(list(self.symbols))
        self.max_search_length = 0
        for leaf in self.tree.leaves:
            symbol = self.symbols.get(leaf.symbol.repr)
            code = _path_code(leaf)
            symbol.code.value = code.value
            symbol.code.length = code.length
            self.max_search_length = max(self.max_search_length, code.length)

    def information(self, symbol: Symbol) -> float:
        """Self-information in bits of ``symbol`` against the tree's total count."""
        if self.tree is None:
            raise ValueError("context has no tree")
        return math.log2(self.tree.root.symbol.counter / symbol.counter)


class ContextTable:
    """Contexts chained in hash buckets by name."""

    def __init__(self) -> None:
        self._buckets: dict[int, list[Context]] = {}

    def get(self, name: str) -> Context | None:
        for context in self._buckets.get(_slot(name), ()):
            if context.name == name:
                return context
        return None

    def create(self, name: str) -> Context:
        """Append a new empty context named ``name`` to its chain."""
        context = Context(name=name)
        self._buckets.setdefault(_slot(name), []).append(context)
        return context

    def bucket_heads(self) -> Iterator[Context]:
        """Yield the first context of each non-empty bucket."""
        for index in sorted(self._buckets):
            yield self._buckets[index][0]