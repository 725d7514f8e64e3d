import random

import pytest

import huffman as huff


CLASSIC = {"A": 5, "B": 9, "C": 12, "D": 13, "E": 16, "F": 45}


def _codes(freqs):
    return huff.build_code_table(huff.build_tree(freqs))


def test_classic_table():
    codes = _codes(CLASSIC)
    assert dict(codes) == {"F": "0", "C": "100", "D": "101", "A": "1100", "B": "1101", "E": "111"}


def test_classic_more_frequent_never_longer():
    codes = _codes(CLASSIC)
    ranked = sorted(CLASSIC, key=CLASSIC.get)
    lengths = [len(codes[s]) for s in ranked]
    assert lengths == sorted(lengths, reverse=True)


def test_classic_tree_weights():
    root = huff.build_tree(CLASSIC)
    assert root.weight == sum(CLASSIC.values())
    stack = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, huff.Internal):
            assert node.weight == node.left.weight + node.right.weight
            stack += [node.left, node.right]
    assert huff.tree_depth(root) == 4


def test_single_symbol_alphabet():
    root = huff.build_tree({"A": 5})
    assert isinstance(root, huff.Leaf)
    codes = huff.build_code_table(root)
    assert codes == {"A": "0"}
    assert huff.encode("AAA", codes) == "000"
    assert huff.decode("000", root) == ["A", "A", "A"]


def test_single_symbol_rejects_one_bit():
    root = huff.build_tree({"A": 2})
    with pytest.raises(huff.MalformedCodeError) as exc:
        huff.decode("001", root)
    assert exc.value.position == 2


def test_two_symbols_with_tied_weights():
    root = huff.build_tree({"A": 1, "B": 1})
    assert isinstance(root, huff.Internal)
    assert isinstance(root.left, huff.Leaf) and isinstance(root.right, huff.Leaf)
    assert (root.left.symbol, root.right.symbol) == ("A", "B")
    assert huff.build_code_table(root) == {"A": "0", "B": "1"}


def test_empty_alphabet():
    with pytest.raises(huff.EmptyAlphabetError):
        huff.build_tree({})
    with pytest.raises(huff.EmptyAlphabetError):
        huff.build_tree({"A": 0, "B": 0})
    with pytest.raises(ValueError):
        huff.build_tree({})


def test_zero_counts_are_skipped():
    codes = _codes({"A": 3, "B": 0, "C": 1})
    assert set(codes) == {"A", "C"}


def test_bad_counts():
    with pytest.raises(ValueError):
        huff.build_tree({"A": -1, "B": 2})
    with pytest.raises(TypeError):
        huff.build_tree({"A": 1.5})


def test_nul_and_none_are_ordinary_symbols():
    freqs = {"\0": 4, None: 2, "x": 1}
    root = huff.build_tree(freqs)
    codes = huff.build_code_table(root)
    assert set(codes) == {"\0", None, "x"}
    data = ["\0", None, "x", "\0"]
    assert huff.decode(huff.encode(data, codes), root) == data


def test_prefix_free_for_random_tables():
    rng = random.Random(2024)
    for _ in range(50):
        n = rng.randrange(1, 60)
        freqs = {i: rng.randrange(1, 1000) for i in range(n)}
        codes = _codes(freqs)
        assert len(codes) == n
        assert all(codes.values())
        assert huff.is_prefix_free(codes)


def test_is_prefix_free():
    assert huff.is_prefix_free({"a": "0", "b": "10", "c": "11"})
    assert not huff.is_prefix_free({"a": "1", "b": "10"})
    assert not huff.is_prefix_free({"a": "01", "b": "01"})


def test_round_trip_text():
    text = "abracadabra, said the wizard\nand the hat replied: été!"
    root = huff.build_tree(huff.count_frequencies(text))
    codes = huff.build_code_table(root)
    bits = huff.encode(text, codes)
    assert set(bits) <= {"0", "1"}
    assert "".join(huff.decode(bits, root)) == text


def test_round_trip_bytes():
    rng = random.Random(5)
    data = bytes(rng.randrange(0, 40) for _ in range(5000))
    root = huff.build_tree(huff.count_frequencies(data))
    codes = huff.build_code_table(root)
    assert bytes(huff.decode(huff.encode(data, codes), root)) == data


def test_encode_empty_sequence():
    codes = _codes(CLASSIC)
    assert huff.encode("", codes) == ""
    assert huff.decode("", huff.build_tree(CLASSIC)) == []


def test_encode_unknown_symbol():
    codes = _codes({"a": 1, "b": 2})
    with pytest.raises(huff.UnknownSymbolError) as exc:
        huff.encode("abzb", codes)
    assert exc.value.symbol == "z"
    assert exc.value.position == 2
    with pytest.raises(LookupError):
        huff.encode("q", codes)


def test_iter_encode_streams_codes():
    codes = _codes(CLASSIC)
    assert list(huff.iter_encode("FAB", codes)) == ["0", "1100", "1101"]


def test_decode_truncated_code():
    root = huff.build_tree(CLASSIC)
    with pytest.raises(huff.MalformedCodeError) as exc:
        huff.decode("0110", root) # F then a cut-off code
    assert exc.value.position == 4


def test_decode_invalid_bit():
    root = huff.build_tree(CLASSIC)
    with pytest.raises(huff.MalformedCodeError) as exc:
        huff.decode("01x0", root)
    assert exc.value.position == 2


def test_iter_decode_yields_before_error():
    root = huff.build_tree(CLASSIC)
    it = huff.iter_decode("011", root)
    assert next(it) == "F"
    with pytest.raises(huff.MalformedCodeError):
        next(it)


def test_code_table_is_deterministic_and_read_only():
    root = huff.build_tree(CLASSIC)
    first = huff.build_code_table(root)
    second = huff.build_code_table(root)
    assert dict(first) == dict(second)
    assert list(first) == list(second)
    with pytest.raises(TypeError):
        first["A"] = "1"


def test_separate_trees_do_not_interfere():
    a = _codes({"x": 1, "y": 1})
    b = _codes({"x": 10, "y": 1, "z": 1})
    assert a == {"x": "0", "y": "1"}
    assert b["x"] == "1"
    assert a == {"x": "0", "y": "1"}


def test_iter_leaves_left_to_right():
    root = huff.build_tree(CLASSIC)
    assert [leaf.symbol for leaf in huff.iter_leaves(root)] == ["F", "C", "D", "A", "B", "E"]


def test_count_and_merge_frequencies():
    assert huff.count_frequencies("abca") == {"a": 2, "b": 1, "c": 1}
    assert list(huff.count_frequencies("cab")) == ["c", "a", "b"]
    merged = huff.merge_frequencies(huff.count_frequencies("aab"), huff.count_frequencies("bc"))
    assert merged == {"a": 2, "b": 2, "c": 1}
    assert merged == huff.count_frequencies("aabbc")


def test_average_code_length_and_entropy():
    freqs = {"a": 1, "b": 1, "c": 1, "d": 1}
    codes = _codes(freqs)
    assert huff.average_code_length(codes, freqs) == pytest.approx(2.0)
    assert huff.entropy(freqs) == pytest.approx(2.0)

    codes = _codes(CLASSIC)
    avg = huff.average_code_length(codes, CLASSIC)
    assert avg == pytest.approx(224 / 100)
    assert huff.entropy(CLASSIC) <= avg < huff.entropy(CLASSIC) + 1


def test_entropy_of_single_symbol():
    assert huff.entropy({"a": 9}) == 0.0
    assert huff.entropy({}) == 0.0
