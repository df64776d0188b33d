import random

import pytest

from bytekernels.idea import (
    KEYLEN,
    cipher_block,
    decrypt,
    encrypt,
    expand_key,
    inv,
    invert_key,
    mul,
)

USER_KEY = [1, 2, 3, 4, 5, 6, 7, 8]


def test_reference_vector():
    schedule = expand_key(USER_KEY)
    assert cipher_block((0, 1, 2, 3), schedule) == (0x11FB, 0xED2B, 0x0198, 0x6DE5)


def test_reference_vector_decrypts():
    schedule = expand_key(USER_KEY)
    crypt = cipher_block((0, 1, 2, 3), schedule)
    assert cipher_block(crypt, invert_key(schedule)) == (0, 1, 2, 3)


def test_zero_stands_for_two_to_sixteen():
    assert mul(0, 0) == 1
    assert mul(0, 1) == 0


@pytest.mark.parametrize("x", [0, 1, 2, 3, 255, 256, 4097, 40000, 65534, 65535])
def test_inverse_multiplies_to_one(x):
    assert mul(x, inv(x)) == 1


def test_inverse_over_many_words():
    for x in range(0, 65536, 97):
        assert mul(x, inv(x)) == 1


def test_mul_identity_and_commutative():
    rng = random.Random(5)
    for _ in range(200):
        a = rng.randrange(65536)
        b = rng.randrange(65536)
        assert mul(a, 1) == a
        assert mul(1, a) == a
        assert mul(a, b) == mul(b, a)
        assert 0 <= mul(a, b) <= 0xFFFF


def test_expand_key_keeps_user_key():
    schedule = expand_key(USER_KEY)
    assert len(schedule) == KEYLEN
    assert schedule[:8] == USER_KEY
    assert all(0 <= w <= 0xFFFF for w in schedule)


def test_expand_key_rejects_wrong_length():
    with pytest.raises(ValueError):
        expand_key([1, 2, 3])


def test_expand_key_rejects_wide_word():
    with pytest.raises(ValueError):
        expand_key([1, 2, 3, 4, 5, 6, 7, 70000])


def test_invert_key_rejects_wrong_length():
    with pytest.raises(ValueError):
        invert_key([0] * 10)


def test_block_round_trip_random_keys():
    rng = random.Random(3)
    for _ in range(20):
        userkey = [rng.randrange(60000) for _ in range(8)]
        schedule = expand_key(userkey)
        dk = invert_key(schedule)
        block = tuple(rng.randrange(65536) for _ in range(4))
        assert cipher_block(cipher_block(block, schedule), dk) == block


def test_buffer_round_trip():
    rng = random.Random(13)
    data = bytes(rng.randrange(256) for _ in range(4000))
    key = [rng.randrange(60000) for _ in range(8)]
    crypt = encrypt(data, key)
    assert len(crypt) == len(data)
    assert crypt != data
    assert decrypt(crypt, key) == data


def test_encrypt_is_deterministic_and_blockwise():
    data = bytes(range(16))
    whole = encrypt(data, USER_KEY)
    assert whole == encrypt(data, USER_KEY)
    assert whole[:8] == encrypt(data[:8], USER_KEY)
    assert whole[8:] == encrypt(data[8:], USER_KEY)


def test_encrypt_rejects_partial_block():
    with pytest.raises(ValueError):
        encrypt(b"abc", USER_KEY)


def test_cipher_block_rejects_short_block():
    with pytest.raises(ValueError):
        cipher_block((1, 2, 3), expand_key(USER_KEY))