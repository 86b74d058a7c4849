import pytest

from ppmhuff.huffman import Code, Node, Symbol, build_tree, code_to_bits, format_tree


def _symbols(counts):
    return [Symbol(r, c) for r, c in counts.items()]


def _walk(node):
    if node is None:
        return
    yield node
    yield from _walk(node.left_child)
    yield from _walk(node.right_child)


def _depth(node):
    depth = 0
    while node.parent is not None:
        node = node.parent
        depth += 1
    return depth


COUNTS = {"a": 3, "b": 1, "c": 7, " ": 2, "e": 2, "z": 1}


def test_root_counter_is_total():
    tree = build_tree(_symbols(COUNTS))
    assert tree.root.symbol.counter == sum(COUNTS.values())


def test_leaves_sorted_by_counter_then_descending_repr():
    tree = build_tree(_symbols(COUNTS))
    assert len(tree.leaves) == len(COUNTS)
    for left, right in zip(tree.leaves, tree.leaves[1:]):
        lc, rc = left.symbol.counter, right.symbol.counter
        assert lc < rc or (lc == rc and left.symbol.repr > right.symbol.repr)


def test_equal_counts_lower_repr_goes_left():
    tree = build_tree(_symbols({"a": 1, "b": 1}))
    assert tree.root.left_child.symbol.repr == "a"
    assert tree.root.right_child.symbol.repr == "b"


def test_heavier_leaf_goes_left():
    tree = build_tree(_symbols({"a": 1, "b": 5}))
    assert tree.root.left_child.symbol.repr == "b"
    assert tree.root.right_child.symbol.repr == "a"


def test_root_repr_lists_every_leaf():
    tree = build_tree(_symbols({"a": 3, "b": 1, "c": 7, "e": 2}))
    assert sorted(tree.root.symbol.repr.split(",")) == ["a", "b", "c", "e"]


def test_every_non_root_node_is_on_exactly_one_side():
    tree = build_tree(_symbols(COUNTS))
    for node in _walk(tree.root):
        if node is tree.root:
            assert not node.is_left_child() and not node.is_right_child()
        else:
            assert node.is_left_child() != node.is_right_child()


def test_internal_counters_are_sum_of_children():
    tree = build_tree(_symbols(COUNTS))
    for node in _walk(tree.root):
        if node.is_leaf:
            assert node.left_child is None and node.right_child is None
        else:
            assert node.symbol.counter == (
                node.left_child.symbol.counter + node.right_child.symbol.counter
            )


def test_leaves_reach_root():
    tree = build_tree(_symbols(COUNTS))
    for leaf in tree.leaves:
        node = leaf
        while node.parent is not None:
            node = node.parent
        assert node is tree.root


def test_single_symbol_root_is_the_leaf():
    tree = build_tree(_symbols({"q": 4}))
    assert tree.root is tree.leaves[0]
    assert tree.root.parent is None
    assert tree.root.is_leaf


def test_empty_input_raises():
    with pytest.raises(ValueError):
        build_tree([])


def test_input_symbols_not_modified():
    symbols = _symbols(COUNTS)
    tree = build_tree(symbols)
    assert [s.counter for s in symbols] == list(COUNTS.values())
    assert all(s.code == Code() for s in symbols)
    assert all(leaf.symbol is not s for leaf in tree.leaves for s in symbols)


def test_frequent_symbols_are_shallower():
    tree = build_tree(_symbols({"a": 1, "b": 2, "c": 4, "d": 8, "e": 16}))
    depth = {leaf.symbol.repr: _depth(leaf) for leaf in tree.leaves}
    assert depth["e"] <= depth["d"] <= depth["c"] <= depth["b"] <= depth["a"]
    assert depth["e"] < depth["a"]


@pytest.mark.parametrize("code", [Code(5, 3), Code(1, 4), Code(0, 2), Code(6, 3)])
def test_code_to_bits_round_trip(code):
    bits = code_to_bits(code)
    assert len(bits) == code.length
    assert int(bits, 2) == code.value


def test_code_to_bits_empty_code():
    assert code_to_bits(Code(0, 0)) == ""


def test_code_to_bits_keeps_low_bits():
    assert code_to_bits(Code(0b1111, 2)) == "11"


def test_format_tree_lists_all_nodes():
    tree = build_tree(_symbols(COUNTS))
    text = format_tree(tree.root)
    lines = text.splitlines()
    assert len(lines) == 2 * len(list(_walk(tree.root)))
    assert lines[0].startswith(f"Node - (counter: {sum(COUNTS.values())}, ")
    assert lines[1] == "\tChildren:"
    for leaf in tree.leaves:
        assert f'symbol: "{leaf.symbol.repr}")' in text


def test_format_tree_none_is_empty():
    assert format_tree(None) == ""


def test_standalone_node_is_no_child():
    node = Node(Symbol("x"))
    assert node.is_left_child() is False
    assert node.is_right_child() is False