"""Huffman trees built from symbol counters, with deterministic tie-breaking."""

from __future__ import annotations

import functools
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field


@dataclass
class Code:
    """A prefix code: ``length`` bits stored in the low bits of ``value``."""

    value: int = 0
    length: int = 0


@dataclass
class Symbol:
    """A symbol with its occurrence counter and current code."""

    repr: str
    counter: int = 1
    code: Code = field(default_factory=Code)


@dataclass(eq=False)
class Node:
    """A node of a Huffman tree."""

    symbol: Symbol
    is_leaf: bool = True
    parent: Node | None = field(default=None, repr=False)
    left_child: Node | None = None
    right_child: Node | None = None

    def is_left_child(self) -> bool:
        return self.parent is not None and self.parent.left_child is self

    def is_right_child(self) -> bool:
        return self.parent is not None and self.parent.right_child is self


@dataclass(eq=False)
class HuffmanTree:
    """A Huffman tree and its leaves in ascending counter order."""

    root: Node
    leaves: list[Node]


def _compare_nodes(a: Node, b: Node) -> int:
    diff = a.symbol.counter - b.symbol.counter
    if diff:
        return diff
    # Equal counters: reverse lexicographic order of the representations.
    return (b.symbol.repr > a.symbol.repr) - (b.symbol.repr < a.symbol.repr)


_NODE_ORDER = functools.cmp_to_key(_compare_nodes)


def _order_children(a: Node, b: Node) -> tuple[Node, Node]:
    """Return (left, right) for two nodes being merged."""
    ca, cb = a.symbol.counter, b.symbol.counter
    if ca < cb:
        return (a, b) if a.is_leaf and not b.is_leaf else (b, a)
    if ca > cb:
        return (b, a) if b.is_leaf and not a.is_leaf else (a, b)
    return (a, b) if a.symbol.repr < b.symbol.repr else (b, a)


def build_tree(symbols: Iterable[Symbol]) -> HuffmanTree:
    """Build a Huffman tree from the counters of ``symbols``.

    The symbols themselves are not modified; the tree holds copies.
    """
    nodes = [Node(Symbol(s.repr, s.counter)) for s in symbols]
    if not nodes:
        raise ValueError("cannot build a Huffman tree without symbols")

    nodes.sort(key=_NODE_ORDER)
    leaves = list(nodes)

    while len(nodes) > 1:
        first, second, *rest = nodes
        parent = Node(
            Symbol(
                f"{first.symbol.repr},{second.symbol.repr}",
                first.symbol.counter + second.symbol.counter,
            ),
            is_leaf=False,
        )
        first.parent = second.parent = parent
        parent.left_child, parent.right_child = _order_children(first, second)
        nodes = sorted([*rest, parent], key=_NODE_ORDER)

    return HuffmanTree(nodes[0], leaves)


def code_to_bits(code: Code) -> str:
    """Render a code as a string of '0' and '1', most significant bit first."""
    return "".join(
        "1" if (code.value >> i) & 1 else "0" for i in reversed(range(code.length))
    )


def _tree_lines(node: Node | None, depth: int) -> Iterator[str]:
    if node is None:
        return
    yield "\t" * depth + f'Node - (counter: {node.symbol.counter}, symbol: "{node.symbol.repr}")'
    yield "\t" * (depth + 1) + "Children:"
    yield from _tree_lines(node.left_child, depth + 2)
    yield from _tree_lines(node.right_child, depth + 2)


def format_tree(root: Node | None) -> str:
    """Return an indented, human-readable dump of the tree under ``root``."""
    return "".join(line + "\n" for line in _tree_lines(root, 0))