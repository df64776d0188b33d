"""Deterministic compute kernels: bitfield runs, Huffman coding, IDEA,
a back-propagation neural net, Fourier and LU solving, and shortest paths."""

__version__ = "0.1.0"
__all__ = ["__version__"]