"""Bitfield run operations and Huffman compression kernels."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterator, Sequence

__all__ = [
    "BitMap",
    "random_bitops",
    "run_bitops",
    "HuffmanTree",
    "create_text_line",
    "create_text_block",
]

_BITOP_SPAN = 262140
_LEAF_COUNT = 256
_NO_NODE = -1


class BitMap:
    """A bitmap of fixed-width words, initialised to alternating bits.

    Every word starts out as 0x5555...; bit 0 of each word is set.
    """

    def __init__(self, nwords: int, word_bits: int = 32) -> None:
        if word_bits not in (32, 64):
            raise ValueError("word_bits must be 32 or 64")
        if nwords < 0:
            raise ValueError("nwords must not be negative")
        self.word_bits = word_bits
        pattern = 0
        for bit in range(0, word_bits, 2):
            pattern |= 1 << bit
        self.words = [pattern] * nwords

    @property
    def nbits(self) -> int:
        return len(self.words) * self.word_bits

    def __len__(self) -> int:
        return self.nbits

    def _spans(self, bit_addr: int, nbits: int) -> Iterator[tuple[int, int]]:
        if nbits < 0:
            raise ValueError("nbits must not be negative")
        end = bit_addr + nbits
        if bit_addr < 0 or end > self.nbits:
            raise IndexError(
                f"bit run {bit_addr}..{end} outside bitmap of {self.nbits} bits"
            )
        pos = bit_addr
        while pos < end:
            index, bit = divmod(pos, self.word_bits)
            take = min(self.word_bits - bit, end - pos)
            yield index, ((1 << take) - 1) << bit
            pos += take

    def toggle_run(self, bit_addr: int, nbits: int, value) -> None:
        """Set (value true) or clear (value false) nbits bits from bit_addr."""
        for index, mask in self._spans(bit_addr, nbits):
            if value:
                self.words[index] |= mask
            else:
                self.words[index] &= ~mask

    def flip_run(self, bit_addr: int, nbits: int) -> None:
        """Complement nbits bits starting at bit_addr."""
        for index, mask in self._spans(bit_addr, nbits):
            self.words[index] ^= mask

    def get(self, bit_addr: int) -> int:
        """Return the bit at bit_addr as 0 or 1."""
        if not 0 <= bit_addr < self.nbits:
            raise IndexError(f"bit {bit_addr} outside bitmap of {self.nbits} bits")
        index, bit = divmod(bit_addr, self.word_bits)
        return (self.words[index] >> bit) & 1


def random_bitops(rng, count: int) -> list[tuple[int, int]]:
    """Return count (offset, run length) pairs within the first 262140 bits."""
    if count < 0:
        raise ValueError("count must not be negative")
    ops = []
    for _ in range(count):
        offset = rng.randrange(_BITOP_SPAN)
        length = rng.randrange(_BITOP_SPAN - offset)
        ops.append((offset, length))
    return ops


def run_bitops(bitmap: BitMap, ops: Sequence[tuple[int, int]]) -> int:
    """Apply set, clear and complement runs in turn; return total bits touched."""
    total = 0
    for i, (offset, length) in enumerate(ops):
        kind = i % 3
        if kind == 0:
            bitmap.toggle_run(offset, length, 1)
        elif kind == 1:
            bitmap.toggle_run(offset, length, 0)
        else:
            bitmap.flip_run(offset, length)
        total += length
    return total


@dataclass
class _Node:
    count: int = 0
    parent: int | None = None
    left: int = _NO_NODE
    right: int = _NO_NODE
    active: bool = False


class HuffmanTree:
    """A Huffman code built from the byte frequencies of a sample."""

    def __init__(self, data: bytes) -> None:
        counts = Counter(bytes(data))
        if len(counts) < 2:
            raise ValueError("data must hold at least two distinct byte values")
        nodes = [_Node() for _ in range(2 * _LEAF_COUNT)]
        for byte, count in counts.items():
            nodes[byte].count = count
            nodes[byte].active = True

        root = _LEAF_COUNT - 1
        while True:
            free = [i for i in range(root + 1) if nodes[i].active and nodes[i].parent is None]
            if len(free) < 2:
                break
            low1 = min(free, key=lambda i: nodes[i].count)
            low2 = min((i for i in free if i != low1), key=lambda i: nodes[i].count)
            root += 1
            nodes[low1].parent = root
            nodes[low2].parent = root
            nodes[root] = _Node(
                count=nodes[low1].count + nodes[low2].count,
                left=low1,
                right=low2,
                active=True,
            )
        self._nodes = nodes
        self._root = root
        self._codes = {byte: self._build_code(byte) for byte in counts}

    def _build_code(self, byte: int) -> str:
        bits = []
        node = byte
        while node != self._root:
            parent = self._nodes[node].parent
            bits.append("0" if self._nodes[parent].left == node else "1")
            node = parent
        return "".join(reversed(bits))

    def code_for(self, byte: int) -> str:
        """Return the code of a byte as a string of '0' and '1'."""
        try:
            return self._codes[byte]
        except KeyError:
            raise KeyError(f"byte {byte} has no code in this tree") from None

    def compress(self, data: bytes) -> tuple[bytes, int]:
        """Encode data; return the packed bits (LSB first) and their count."""
        packed = bytearray()
        nbits = 0
        for byte in bytes(data):
            for bit in self.code_for(byte):
                if nbits % 8 == 0:
                    packed.append(0)
                if bit == "1":
                    packed[-1] |= 1 << (nbits % 8)
                nbits += 1
        return bytes(packed), nbits

    def decompress(self, packed: bytes, nbits: int) -> bytes:
        """Decode nbits bits of packed data back into bytes."""
        if nbits < 0 or nbits > len(packed) * 8:
            raise ValueError("nbits does not fit the packed data")
        out = bytearray()
        offset = 0
        while offset < nbits:
            node = self._root
            while self._nodes[node].left != _NO_NODE:
                if offset >= nbits:
                    raise ValueError("bit stream ends inside a code")
                bit = (packed[offset >> 3] >> (offset % 8)) & 1
                node = self._nodes[node].right if bit else self._nodes[node].left
                offset += 1
            out.append(node)
        return bytes(out)


def create_text_line(rng, words: Sequence[str], nchars: int) -> str:
    """Return exactly nchars characters of random words, each followed by a blank."""
    if not words:
        raise ValueError("words must not be empty")
    parts = []
    so_far = 0
    while so_far < nchars:
        piece = words[rng.randrange(len(words))] + " "
        piece = piece[: nchars - so_far]
        parts.append(piece)
        so_far += len(piece)
    return "".join(parts)


def create_text_block(
    rng, words: Sequence[str], length: int, max_line_length: int
) -> str:
    """Return length characters of random lines, each ending in a newline."""
    if length < 1:
        raise ValueError("length must be at least 1")
    if max_line_length <= 6:
        raise ValueError("max_line_length must exceed 6")
    lines = []
    so_far = 0
    while so_far < length:
        line_length = rng.randrange(max_line_length - 6) + 6
        if line_length + so_far > length:
            line_length = length - so_far
        if line_length > 1:
            body = create_text_line(rng, words, line_length)[: line_length - 1]
        else:
            body = ""
        lines.append(body + "\n")
        so_far += line_length
    return "".join(lines)