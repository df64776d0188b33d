# bytekernels

Deterministic compute kernels of the kind found in classic CPU
benchmarks, in plain Python with no third-party dependencies. Each
kernel is an ordinary function or class: run it, check its result,
and time it however you like.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `bytekernels.bits` | `BitMap` with `toggle_run`, `flip_run` and `get`; `random_bitops` and `run_bitops`; `HuffmanTree` with `code_for`, `compress` and `decompress`; `create_text_line` and `create_text_block` for word-based sample text |
| `bytekernels.idea` | IDEA block cipher: `mul`, `inv`, `expand_key`, `invert_key`, `cipher_block`, `encrypt`, `decrypt` |
| `bytekernels.nnet` | Back-propagation network: `PatternSet`, `parse_patterns`, `read_patterns`, `TrainingState` and `NeuralNet` with `randomize_weights`, `zero_changes`, `forward`, `backward`, `check_out_error` and `train` |
| `bytekernels.floating` | `the_function`, `trapezoid_integrate` and `fourier_coefficients` for the Fourier coefficients of (x+1)^x on 0..2; `build_problem`, `ludcmp`, `lubksb` and `lusolve` for linear systems, with `SingularMatrixError` |
| `bytekernels.dijkstra` | `dijkstra`, `path_to`, `read_matrix` and the `main` command |

Functions that produce random input take an `rng` argument: any object
with a `randrange` method, such as `random.Random(13)`. The same seed
gives the same bit operations, text, weights and linear systems.

## Bitfield runs

`BitMap(nwords, word_bits=32)` holds words of 32 or 64 bits, each
starting as the alternating pattern 0x5555…. `random_bitops(rng, count)`
draws `(offset, length)` pairs within the first 262140 bits, and
`run_bitops(bitmap, ops)` applies them in turn as set, clear and
complement runs, returning the total number of bits touched.

```python
import random
from bytekernels.bits import BitMap, random_bitops, run_bitops

bitmap = BitMap(8192)                 # 8192 * 32 = 262144 bits
ops = random_bitops(random.Random(13), 30)
touched = run_bitops(bitmap, ops)
```

## Huffman coding

`HuffmanTree(data)` builds a code from the byte frequencies of `data`,
which must contain at least two distinct byte values. `compress`
returns the packed bits (least significant bit first) and their count;
`decompress` reverses it.

```python
from bytekernels.bits import HuffmanTree

text = b"the quick brown fox jumps over the lazy dog\n"
tree = HuffmanTree(text)
packed, nbits = tree.compress(text)
assert tree.decompress(packed, nbits) == text
```

`create_text_block(rng, words, length, max_line_length)` returns
exactly `length` characters of random lines drawn from `words`, each
line ending in a newline; `max_line_length` must exceed 6.

## IDEA

`encrypt` and `decrypt` take the eight-word user key and data whose
length is a multiple of 8 bytes (blocks of four little-endian 16-bit
words). `expand_key` and `invert_key` give the 52-word encryption and
decryption schedules for use with `cipher_block`.

```python
from bytekernels.idea import decrypt, encrypt

userkey = [1, 2, 3, 4, 5, 6, 7, 8]
plain = bytes(range(64))
assert decrypt(encrypt(plain, userkey), userkey) == plain
```

## Neural net

`parse_patterns(text)` reads the input x size, input y size and output
size, then a pattern count (at most 10 are kept), then for each pattern
y-size rows of five inputs followed by eight outputs. Numbers may be
separated by commas or blanks; inputs are clamped to 0.1..0.9.
`read_patterns(path)` does the same for a file.

`NeuralNet(patterns, rng).train()` starts from fresh random weights,
trains until every output is within 0.1 of its target or some error
reaches 16, and returns the number of passes; the outcome is left in
its `state` attribute as a `TrainingState`.

## Fourier and LU

`fourier_coefficients(n)` returns the first `n` cosine and sine
coefficients, each integrated with 200 trapezoid steps; the sine list
starts with a meaningless 0.0.

`build_problem(rng, n)` returns a solvable system `(a, b)`.
`lusolve(a, b)` returns the solution and leaves its arguments
unchanged; `ludcmp` works in place and raises `SingularMatrixError`
when a row is all zeros.

```python
import random
from bytekernels.floating import build_problem, lusolve

a, b = build_problem(random.Random(13), 10)
x = lusolve(a, b)
```

## Shortest paths

`dijkstra(matrix, start, end)` returns the distance and predecessor
lists for every node, with `None` for nodes not reached; a cost of 9999
(`NO_EDGE`) means there is no edge. When `start` equals `end` nothing
is searched. `path_to(prev, node)` follows the predecessors back and
returns the path in forward order.

From the command line:

```
bytekernels-dijkstra MATRIX_FILE
```

`MATRIX_FILE` is plain text: the number of nodes N, then N×N
whitespace-separated integer costs in row order. The command also needs
a file named `_finfo_dataset` in the current directory whose first
integer is how many times each search is repeated. For every node `i`
it prints the cost of the shortest path to node `(i + N/2) mod N` and
the nodes along it. It exits with status 1 if an argument or file is
missing or malformed.

## What this package does not do

It has no benchmark driver: nothing here times the kernels, repeats
them until a time limit, or reports scores. The only command is the
shortest-path one above.