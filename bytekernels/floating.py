"""Floating-point kernels: Fourier coefficients and LU decomposition.

The Fourier kernel integrates (x+1)**x and its sine and cosine weighted
forms over 0..2 with the trapezoid rule. The LU kernel builds a solvable
set of linear equations and solves it with Crout's method and partial
pivoting.
"""

from __future__ import annotations

import math
from typing import Sequence

__all__ = [
    "FOURIER_STEPS",
    "SingularMatrixError",
    "the_function",
    "trapezoid_integrate",
    "fourier_coefficients",
    "build_problem",
    "ludcmp",
    "lubksb",
    "lusolve",
]

FOURIER_STEPS = 200
_OMEGA = 3.1415926535897932
_TINY = 1.0e-20


class SingularMatrixError(ArithmeticError):
    """Raised when a matrix has a row of zeros and cannot be decomposed."""


def the_function(x: float, omegan: float, select: int) -> float:
    """Evaluate (x+1)**x, times cos(omegan*x) for select 1 or sin for select 2."""
    base = math.pow(x + 1.0, x)
    if select == 0:
        return base
    if select == 1:
        return base * math.cos(omegan * x)
    if select == 2:
        return base * math.sin(omegan * x)
    raise ValueError(f"select must be 0, 1 or 2, not {select}")


def trapezoid_integrate(
    x0: float, x1: float, nsteps: int, omegan: float, select: int
) -> float:
    """Integrate the_function over x0..x1 with the trapezoid rule.

    The interior sum takes the points x0+dx .. x0+(nsteps-2)*dx; the last
    interior point is left out, as in the benchmark this kernel measures.
    """
    if nsteps < 1:
        raise ValueError("nsteps must be at least 1")
    dx = (x1 - x0) / nsteps
    total = the_function(x0, omegan, select) / 2.0
    x = x0
    for _ in range(max(nsteps - 2, 0)):
        x += dx
        total += the_function(x, omegan, select)
    return (total + the_function(x1, omegan, select) / 2.0) * dx


def fourier_coefficients(n: int) -> tuple[list[float], list[float]]:
    """Return the first n cosine (A) and sine (B) coefficients of (x+1)**x on 0..2.

    B[0] has no meaning and is returned as 0.0.
    """
    if n < 1:
        raise ValueError("n must be at least 1")
    a = [0.0] * n
    b = [0.0] * n
    a[0] = trapezoid_integrate(0.0, 2.0, FOURIER_STEPS, 0.0, 0) / 2.0
    for i in range(1, n):
        a[i] = trapezoid_integrate(0.0, 2.0, FOURIER_STEPS, _OMEGA * i, 1)
        b[i] = trapezoid_integrate(0.0, 2.0, FOURIER_STEPS, _OMEGA * i, 2)
    return a, b


def _check_square(a: Sequence[Sequence[float]]) -> int:
    n = len(a)
    for row in a:
        if len(row) != n:
            raise ValueError("matrix must be square")
    return n


def build_problem(rng, n: int) -> tuple[list[list[float]], list[float]]:
    """Build a solvable n x n system (a, b) from random draws of rng.

    A random diagonal matrix and right-hand side are scrambled 8n times by
    adding or subtracting one random row to another.
    """
    if n < 1:
        raise ValueError("n must be at least 1")
    a = [[0.0] * n for _ in range(n)]
    b = [0.0] * n
    for i in range(n):
        b[i] = float(rng.randrange(100) + 1)
        a[i][i] = float(rng.randrange(1000) + 1)

    for _ in range(8 * n):
        k = rng.randrange(n)
        k1 = rng.randrange(n)
        if k == k1:
            continue
        rcon = 1.0 if k < k1 else -1.0
        a[k] = [x + y * rcon for x, y in zip(a[k], a[k1])]
        b[k] += b[k1] * rcon
    return a, b


def ludcmp(a: list[list[float]]) -> tuple[list[int], int]:
    """Replace a by the LU decomposition of a row permutation of itself.

    Returns the permutation vector and +1 or -1 for an even or odd number
    of row interchanges. A zero pivot is replaced by 1e-20.
    """
    n = _check_square(a)
    scale = []
    for row in a:
        big = max((abs(v) for v in row), default=0.0)
        if big == 0.0:
            raise SingularMatrixError("matrix has a row of zeros")
        scale.append(1.0 / big)

    d = 1
    indx = [0] * n
    imax = 0
    for j in range(n):
        for i in range(j):
            total = a[i][j]
            for k in range(i):
                total -= a[i][k] * a[k][j]
            a[i][j] = total
        big = 0.0
        for i in range(j, n):
            total = a[i][j]
            for k in range(j):
                total -= a[i][k] * a[k][j]
            a[i][j] = total
            dum = scale[i] * abs(total)
            if dum >= big:
                big = dum
                imax = i
        if j != imax:
            a[imax], a[j] = a[j], a[imax]
            d = -d
            scale[imax], scale[j] = scale[j], scale[imax]
        indx[j] = imax
        if a[j][j] == 0.0:
            a[j][j] = _TINY
        if j != n - 1:
            dum = 1.0 / a[j][j]
            for i in range(j + 1, n):
                a[i][j] *= dum
    return indx, d


def lubksb(
    a: Sequence[Sequence[float]], indx: Sequence[int], b: list[float]
) -> list[float]:
    """Solve A x = b given the LU decomposition of A; b is overwritten and returned."""
    n = _check_square(a)
    if len(indx) != n or len(b) != n:
        raise ValueError("indx and b must match the matrix size")
    first = -1
    for i in range(n):
        ip = indx[i]
        total = b[ip]
        b[ip] = b[i]
        if first != -1:
            for j in range(first, i):
                total -= a[i][j] * b[j]
        elif total != 0.0:
            first = i
        b[i] = total
    for i in reversed(range(n)):
        total = b[i]
        for j in range(i + 1, n):
            total -= a[i][j] * b[j]
        b[i] = total / a[i][i]
    return b


def lusolve(a: Sequence[Sequence[float]], b: Sequence[float]) -> list[float]:
    """Return the solution x of A x = b, leaving a and b unchanged."""
    matrix = [[float(v) for v in row] for row in a]
    rhs = [float(v) for v in b]
    if len(rhs) != len(matrix):
        raise ValueError("b must match the matrix size")
    indx, _ = ludcmp(matrix)
    return lubksb(matrix, indx, rhs)