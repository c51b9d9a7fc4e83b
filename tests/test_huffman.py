import random

import numpy as np
import pytest

from huffcodec.errors import EmptyInputError
from huffcodec.huffman import (
    ALPHABET_SIZE,
    EOS,
    HuffNode,
    average_code_length,
    build_code_table,
    build_tree,
    count_frequencies,
    tree_shape,
)


def _freqs(**by_sym):
    f = np.zeros(ALPHABET_SIZE + 1, dtype=np.int64)
    for k, v in by_sym.items():
        f[int(k[1:])] = v
    return f


def test_count_frequencies_fixes_sentinel_and_total():
    f = count_frequencies(b"aaab")
    assert f.shape == (ALPHABET_SIZE + 1,)
    assert f[ord("a")] == 3
    assert f[ord("b")] == 1
    assert f[EOS] == 1
    assert f.sum() == 5


def test_count_frequencies_empty_input_only_has_sentinel():
    f = count_frequencies(b"")
    assert f[EOS] == 1
    assert f.sum() == 1


def test_aaab_tree_merges_b_and_eos_first():
    root = build_tree(count_frequencies(b"aaab"))
    assert tree_shape(root) == (5, (2, (98, 1), (EOS, 1)), (97, 3))
    assert build_code_table(root) == {97: "1", 98: "00", EOS: "01"}


def test_equal_frequencies_break_by_symbol_value():
    root = build_tree(_freqs(s1=1, s2=1, s3=1))
    assert build_code_table(root) == {3: "0", 1: "10", 2: "11"}


def test_leaf_wins_tie_against_merged_node():
    root = build_tree(_freqs(s0=1, s1=1, s2=2))
    assert tree_shape(root) == (4, (2, 2), (2, (0, 1), (1, 1)))
    assert build_code_table(root) == {2: "0", 0: "10", 1: "11"}


def test_heap_order_uses_freq_then_insertion_order():
    a = HuffNode(3, sym=1, order=5)
    b = HuffNode(3, sym=9, order=2)
    c = HuffNode(2, sym=0, order=7)
    assert b < a
    assert c < b


def test_empty_table_raises():
    with pytest.raises(EmptyInputError):
        build_tree(np.zeros(ALPHABET_SIZE + 1, dtype=np.int64))


def test_single_symbol_gets_non_empty_code():
    root = build_tree(_freqs(s65=1000))
    assert not root.is_leaf()
    assert root.left.sym == 65
    assert root.right is None
    assert build_code_table(root) == {65: "0"}


def test_code_table_rejects_bare_leaf():
    with pytest.raises(ValueError):
        build_code_table(HuffNode(1, sym=5))


def test_codes_are_prefix_free_and_cover_active_symbols():
    rng = random.Random(1234)
    data = bytes(rng.choice(b"abcdefghij\x00\xff") for _ in range(3000))
    freqs = count_frequencies(data)
    code = build_code_table(build_tree(freqs))

    assert set(code) == set(np.nonzero(freqs)[0].tolist())
    values = list(code.values())
    assert all(values)
    for i, x in enumerate(values):
        for j, y in enumerate(values):
            if i != j:
                assert not y.startswith(x)


def test_tree_is_deterministic():
    data = bytes(range(256)) * 2 + b"zzzzyyyx"
    freqs = count_frequencies(data)
    assert tree_shape(build_tree(freqs)) == tree_shape(build_tree(freqs.copy()))


def test_more_frequent_symbols_never_get_longer_codes():
    freqs = _freqs(s10=50, s20=20, s30=5, s40=1, s256=1)
    code = build_code_table(build_tree(freqs))
    assert len(code[10]) <= len(code[20]) <= len(code[30]) <= len(code[40])


def test_average_code_length_ignores_sentinel():
    freqs = count_frequencies(b"aaab")
    code = build_code_table(build_tree(freqs))
    assert average_code_length(code, freqs) == pytest.approx(1.25)


def test_average_code_length_empty_is_nan():
    freqs = count_frequencies(b"")
    code = build_code_table(build_tree(freqs))
    assert np.isnan(average_code_length(code, freqs))
