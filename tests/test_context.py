import itertools
import string

import pytest

from ppmhuff.context import TABLE_SIZE, Context, ContextTable, SymbolTable, hash_key
from ppmhuff.huffman import Code, Symbol, code_to_bits


def _colliding_pair():
    seen = {}
    for letters in itertools.product(string.ascii_lowercase + " ", repeat=2):
        key = "".join(letters)
        slot = hash_key(key) % TABLE_SIZE
        if slot in seen:
            return seen[slot], key
        seen[slot] = key
    raise AssertionError("no collision found")


def _context(counts):
    ctx = Context()
    for repr_, counter in counts.items():
        ctx.add_symbol(repr_).counter = counter
    ctx.rebuild()
    return ctx


def test_hash_of_empty_key_is_zero():
    assert hash_key("") == 0


@pytest.mark.parametrize(
    "key", ["a", " ", "`", "ab", "abcd", "abcde", "zzzzz", "\xe9", "\xe9\xe9\xe9\xe9\xe9"]
)
def test_hash_in_range_and_deterministic(key):
    value = hash_key(key)
    assert 0 <= value < 2**14
    assert hash_key(key) == value


def test_add_and_get():
    table = SymbolTable()
    table.add(Symbol("a", 3))
    found = table.get("a")
    assert found.repr == "a" and found.counter == 3
    assert table.get("b") is None


def test_add_stores_copy():
    table = SymbolTable()
    original = Symbol("a", 1)
    stored = table.add(original)
    original.counter = 10
    original.code.value = 7
    assert table.get("a") is stored
    assert stored.counter == 1
    assert stored.code == Code()


def test_increment_and_decrement():
    table = SymbolTable()
    table.add(Symbol("x", 1))
    table.increment("x")
    table.increment("x")
    assert table.get("x").counter == 3
    table.decrement("x")
    assert table.get("x").counter == 2


def test_decrement_to_zero_removes():
    table = SymbolTable()
    table.add(Symbol("x", 1))
    table.decrement("x")
    assert table.get("x") is None
    assert len(table) == 0


def test_remove_and_missing_remove():
    table = SymbolTable()
    for ch in "abc":
        table.add(Symbol(ch))
    table.remove("b")
    assert table.get("b") is None
    table.remove("zz")
    assert sorted(s.repr for s in table) == ["a", "c"]


def test_iteration_and_len():
    table = SymbolTable()
    for ch in "hello world":
        if table.get(ch) is None:
            table.add(Symbol(ch))
    assert len(table) == len(set("hello world"))
    assert {s.repr for s in table} == set("hello world")


def test_collision_chain():
    first, second = _colliding_pair()
    table = SymbolTable()
    table.add(Symbol(first, 1))
    table.add(Symbol(second, 2))
    assert table.get(first).counter == 1
    assert table.get(second).counter == 2
    assert [s.repr for s in table.bucket_heads()] == [first]
    assert len(table) == 2
    table.remove(first)
    assert [s.repr for s in table.bucket_heads()] == [second]


def test_find_code_after_rebuild():
    ctx = _context({"a": 5, "b": 2, "c": 1, "`": 1})
    for symbol in ctx.symbols:
        assert ctx.symbols.find_code(symbol.code) is symbol
    assert ctx.symbols.find_code(Code(0, 40)) is None


def test_codes_are_prefix_free_and_complete():
    ctx = _context({"a": 5, "b": 2, "c": 1, " ": 4, "e": 3, "`": 1})
    bits = [code_to_bits(s.code) for s in ctx.symbols]
    for x, y in itertools.permutations(bits, 2):
        assert not y.startswith(x)
    assert sum(2.0 ** -len(b) for b in bits) == 1.0
    assert ctx.max_search_length == max(len(b) for b in bits)


def test_frequent_symbol_has_shorter_code():
    ctx = _context({"a": 20, "b": 1, "c": 1, "d": 1})
    assert ctx.symbols.get("a").code.length < ctx.symbols.get("b").code.length


def test_single_symbol_has_empty_code():
    ctx = _context({"a": 1})
    assert ctx.symbols.get("a").code == Code()
    assert ctx.max_search_length == 0


def test_empty_rebuild_clears_tree():
    ctx = _context({"a": 1})
    ctx.symbols.remove("a")
    ctx.rebuild()
    assert ctx.tree is None


def test_information_of_equal_pair():
    ctx = _context({"a": 1, "b": 1})
    assert ctx.information(ctx.symbols.get("a")) == pytest.approx(1.0)


def test_information_without_tree_raises():
    ctx = Context()
    with pytest.raises(ValueError):
        ctx.information(Symbol("a"))


def test_context_table_create_and_get():
    table = ContextTable()
    created = table.create("abc")
    assert table.get("abc") is created
    assert created.name == "abc"
    assert table.get("abd") is None


def test_context_table_duplicate_create_keeps_first():
    table = ContextTable()
    first = table.create("ab")
    table.create("ab")
    assert table.get("ab") is first


def test_context_table_bucket_heads_with_collision():
    first, second = _colliding_pair()
    table = ContextTable()
    table.create(first)
    table.create(second)
    assert table.get(second).name == second
    assert [c.name for c in table.bucket_heads()] == [first]