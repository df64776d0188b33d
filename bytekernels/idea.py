"""IDEA block cipher: key schedule, block transform and buffer helpers.

Multiplication is modulo 2**16 + 1, where the word 0 stands for 2**16.
Buffers are processed as 8-byte blocks of four little-endian 16-bit words.
"""

from __future__ import annotations

import struct
from typing import Sequence

__all__ = [
    "ROUNDS",
    "KEYLEN",
    "BLOCK_SIZE",
    "mul",
    "inv",
    "expand_key",
    "invert_key",
    "cipher_block",
    "encrypt",
    "decrypt",
]

ROUNDS = 8
KEYLEN = 6 * ROUNDS + 4
BLOCK_SIZE = 8
USER_KEY_WORDS = 8

_MASK = 0xFFFF
_MODULUS = 0x10001
_BLOCK = struct.Struct("<4H")


def _low16(x: int) -> int:
    return x & _MASK


def _check_word(value: int) -> int:
    if not 0 <= value <= _MASK:
        raise ValueError(f"{value} is not a 16-bit word")
    return value


def mul(a: int, b: int) -> int:
    """Multiply two words modulo 2**16 + 1."""
    a = _low16(a)
    b = _low16(b)
    if a == 0:
        return _low16(1 - b)
    if b == 0:
        return _low16(1 - a)
    p = a * b
    lo = _low16(p)
    hi = _low16(p >> 16)
    return _low16(lo - hi + (1 if lo < hi else 0))


def inv(x: int) -> int:
    """Return the multiplicative inverse of x modulo 2**16 + 1."""
    x = _check_word(x)
    if x <= 1:
        return x
    t1 = _MODULUS // x
    y = _MODULUS % x
    if y == 1:
        return _low16(1 - t1)
    t0 = 1
    while True:
        q = x // y
        x %= y
        t0 = _low16(t0 + q * t1)
        if x == 1:
            return t0
        q = y // x
        y %= x
        t1 = _low16(t1 + q * t0)
        if y == 1:
            return _low16(1 - t1)


def expand_key(userkey: Sequence[int]) -> list[int]:
    """Compute the 52 encryption subkeys from an 8-word user key."""
    if len(userkey) != USER_KEY_WORDS:
        raise ValueError(f"user key must hold {USER_KEY_WORDS} words")
    z = [_check_word(w) for w in userkey] + [0] * (KEYLEN - USER_KEY_WORDS)
    base = 0
    i = 0
    for _ in range(USER_KEY_WORDS, KEYLEN):
        i += 1
        z[base + i + 7] = _low16(
            (z[base + (i & 7)] << 9) | (z[base + ((i + 1) & 7)] >> 7)
        )
        base += i & 8
        i &= 7
    return z


def invert_key(z: Sequence[int]) -> list[int]:
    """Compute the decryption subkeys from encryption subkeys."""
    if len(z) != KEYLEN:
        raise ValueError(f"key schedule must hold {KEYLEN} words")
    words = iter(_check_word(w) for w in z)
    out: list[int] = []

    def take() -> int:
        return next(words)

    def neg() -> int:
        return _low16(-next(words))

    def multiplicative_group(middle_swapped: bool) -> None:
        t1 = inv(take())
        t2 = neg()
        t3 = neg()
        t4 = inv(take())
        # Built back to front: the last pushed group lands first.
        if middle_swapped:
            out.extend([t4, t3, t2, t1])
        else:
            out.extend([t4, t2, t3, t1])

    def additive_pair() -> None:
        t1 = take()
        t2 = take()
        out.extend([t2, t1])

    multiplicative_group(middle_swapped=True)
    for _ in range(1, ROUNDS):
        additive_pair()
        multiplicative_group(middle_swapped=False)
    additive_pair()
    multiplicative_group(middle_swapped=True)

    out.reverse()
    return out


def cipher_block(block: Sequence[int], key: Sequence[int]) -> tuple[int, int, int, int]:
    """Transform one block of four words with a 52-word key schedule."""
    if len(block) != 4:
        raise ValueError("a block holds four words")
    if len(key) != KEYLEN:
        raise ValueError(f"key schedule must hold {KEYLEN} words")
    x1, x2, x3, x4 = (_check_word(w) for w in block)
    k = 0
    for _ in range(ROUNDS):
        x1 = mul(x1, key[k])
        x2 = _low16(x2 + key[k + 1])
        x3 = _low16(x3 + key[k + 2])
        x4 = mul(x4, key[k + 3])

        t2 = mul(x1 ^ x3, key[k + 4])
        t1 = mul(_low16(t2 + (x2 ^ x4)), key[k + 5])
        t2 = _low16(t1 + t2)

        x1 ^= t1
        x4 ^= t2
        t2 ^= x2
        x2 = x3 ^ t1
        x3 = t2
        k += 6
    return (
        mul(x1, key[k]),
        _low16(x3 + key[k + 1]),
        _low16(x2 + key[k + 2]),
        mul(x4, key[k + 3]),
    )


def _process(data: bytes, schedule: Sequence[int]) -> bytes:
    data = bytes(data)
    if len(data) % BLOCK_SIZE:
        raise ValueError(f"data length must be a multiple of {BLOCK_SIZE}")
    out = bytearray()
    for (block,) in zip(_BLOCK.iter_unpack(data)):
        out += _BLOCK.pack(*cipher_block(block, schedule))
    return bytes(out)


def encrypt(data: bytes, key: Sequence[int]) -> bytes:
    """Encrypt data, a multiple of 8 bytes long, with an 8-word user key."""
    return _process(data, expand_key(key))


def decrypt(data: bytes, key: Sequence[int]) -> bytes:
    """Decrypt data, a multiple of 8 bytes long, with an 8-word user key."""
    return _process(data, invert_key(expand_key(key)))