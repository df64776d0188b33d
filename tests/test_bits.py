import random

import pytest

from bytekernels.bits import (
    BitMap,
    HuffmanTree,
    create_text_block,
    create_text_line,
    random_bitops,
    run_bitops,
)

WORDS = ["alpha", "beta", "gamma", "delta", "epsilon", "zeta", "eta", "theta"]


def test_initial_pattern_alternates():
    bm = BitMap(4, 32)
    assert [bm.get(i) for i in range(8)] == [1, 0] * 4
    assert bm.words[0] == 0x55555555


def test_initial_pattern_64_bit_words():
    bm = BitMap(2, 64)
    assert bm.words[1] == 0x5555555555555555
    assert len(bm) == 128


def test_invalid_word_bits():
    with pytest.raises(ValueError):
        BitMap(4, 16)


def test_toggle_run_sets_and_clears_only_range():
    bm = BitMap(4, 32)
    before = [bm.get(i) for i in range(128)]
    bm.toggle_run(20, 50, 1)
    assert all(bm.get(i) == 1 for i in range(20, 70))
    assert [bm.get(i) for i in range(20)] == before[:20]
    assert [bm.get(i) for i in range(70, 128)] == before[70:]
    bm.toggle_run(30, 10, 0)
    assert all(bm.get(i) == 0 for i in range(30, 40))
    assert bm.get(29) == 1 and bm.get(40) == 1


def test_out_of_range_runs_raise():
    bm = BitMap(2, 32)
    with pytest.raises(IndexError):
        bm.toggle_run(60, 10, 1)
    with pytest.raises(IndexError):
        bm.get(64)
    with pytest.raises(ValueError):
        bm.flip_run(0, -1)


def test_random_bitops_stay_in_bounds():
    ops = random_bitops(random.Random(13), 200)
    assert len(ops) == 200
    for offset, length in ops:
        assert 0 <= offset < 262140
        assert 0 <= length and offset + length <= 262140


def test_run_bitops_word_size_independent():
    ops = random_bitops(random.Random(13), 30)
    narrow = BitMap(8192, 32)
    wide = BitMap(4096, 64)
    total_narrow = run_bitops(narrow, ops)
    total_wide = run_bitops(wide, ops)
    assert total_narrow == total_wide == sum(length for _, length in ops)
    probe = random.Random(1)
    for _ in range(500):
        bit = probe.randrange(262144)
        assert narrow.get(bit) == wide.get(bit)


def test_run_bitops_first_op_sets_run():
    bm = BitMap(8192, 32)
    run_bitops(bm, [(100, 300)])
    assert all(bm.get(i) == 1 for i in range(100, 400))
    assert bm.get(99) == 0 and bm.get(401) == 0


SAMPLE = b"abracadabra, a fine bit of text with repeated letters eeeee"


def test_huffman_round_trip():
    tree = HuffmanTree(SAMPLE)
    packed, nbits = tree.compress(SAMPLE)
    assert tree.decompress(packed, nbits) == SAMPLE
    assert nbits == sum(len(tree.code_for(b)) for b in SAMPLE)
    assert len(packed) == (nbits + 7) // 8


def test_huffman_codes_prefix_free():
    tree = HuffmanTree(SAMPLE)
    codes = [tree.code_for(b) for b in set(SAMPLE)]
    for a in codes:
        assert set(a) <= {"0", "1"}
        for b in codes:
            if a is not b:
                assert not b.startswith(a)


def test_huffman_frequent_bytes_get_shorter_codes():
    data = b"a" * 50 + b"b" * 10 + b"c" * 3 + b"d"
    tree = HuffmanTree(data)
    assert len(tree.code_for(ord("a"))) <= len(tree.code_for(ord("b")))
    assert len(tree.code_for(ord("b"))) <= len(tree.code_for(ord("d")))


def test_huffman_compresses_text():
    text = create_text_block(random.Random(13), WORDS, 2000, 500).encode()
    tree = HuffmanTree(text)
    packed, nbits = tree.compress(text)
    assert len(packed) < len(text)
    assert tree.decompress(packed, nbits) == text


def test_huffman_errors():
    with pytest.raises(ValueError):
        HuffmanTree(b"aaaa")
    tree = HuffmanTree(b"ab")
    with pytest.raises(KeyError):
        tree.code_for(ord("z"))
    with pytest.raises(ValueError):
        tree.decompress(b"\x00", 9)


def test_create_text_line_length_and_words():
    line = create_text_line(random.Random(5), WORDS, 40)
    assert len(line) == 40
    for word in line.split()[:-1]:
        assert word in WORDS


def test_create_text_block_structure():
    block = create_text_block(random.Random(13), WORDS, 1000, 50)
    assert len(block) == 1000
    assert block.endswith("\n")
    for line in block.split("\n")[:-1]:
        assert len(line) + 1 <= 50


def test_create_text_block_is_deterministic():
    a = create_text_block(random.Random(13), WORDS, 300, 60)
    b = create_text_block(random.Random(13), WORDS, 300, 60)
    assert a == b


def test_create_text_block_errors():
    with pytest.raises(ValueError):
        create_text_block(random.Random(1), WORDS, 0, 50)
    with pytest.raises(ValueError):
        create_text_block(random.Random(1), WORDS, 100, 6)
    with pytest.raises(ValueError):
        create_text_line(random.Random(1), [], 10)