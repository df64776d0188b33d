"""Shortest paths over an adjacency matrix with a first-in first-out queue.

A cost of NO_EDGE (9999) in the matrix means there is no edge. Nodes are
relaxed in the order they were queued, so a node may be visited several
times before its distance settles.
"""

from __future__ import annotations

import sys
from collections import deque
from pathlib import Path
from typing import Sequence

__all__ = ["NO_EDGE", "dijkstra", "path_to", "read_matrix", "main"]

NO_EDGE = 9999
DATASET_FILE = "_finfo_dataset"
_INT_SIZE = 4
_NODE_SIZE = 8


def _check_square(matrix: Sequence[Sequence[int]]) -> int:
    n = len(matrix)
    for row in matrix:
        if len(row) != n:
            raise ValueError("adjacency matrix must be square")
    return n


def dijkstra(
    matrix: Sequence[Sequence[int]], start: int, end: int
) -> tuple[list[int | None], list[int | None]]:
    """Return the distance and predecessor of every node, seen from start.

    Unreached nodes have None for both. When start equals end nothing is
    searched and every entry is None.
    """
    n = _check_square(matrix)
    for node in (start, end):
        if not 0 <= node < n:
            raise IndexError(f"node {node} outside a graph of {n} nodes")
    dist: list[int | None] = [None] * n
    prev: list[int | None] = [None] * n
    if start == end:
        return dist, prev

    dist[start] = 0
    queue: deque[tuple[int, int]] = deque([(start, 0)])
    while queue:
        node, d = queue.popleft()
        for neighbour, cost in enumerate(matrix[node]):
            if cost == NO_EDGE:
                continue
            candidate = d + cost
            current = dist[neighbour]
            if current is None or current > candidate:
                dist[neighbour] = candidate
                prev[neighbour] = node
                queue.append((neighbour, candidate))
    return dist, prev


def path_to(prev: Sequence[int | None], node: int) -> list[int]:
    """Follow predecessors back from node; return the path in forward order."""
    path = [node]
    seen = {node}
    while prev[path[-1]] is not None:
        step = prev[path[-1]]
        if step in seen:
            raise ValueError("predecessor chain contains a cycle")
        seen.add(step)
        path.append(step)
    path.reverse()
    return path


def _read_ints(text: str) -> list[int]:
    try:
        return [int(token) for token in text.split()]
    except ValueError as exc:
        raise ValueError(f"malformed number: {exc}") from None


def read_matrix(path) -> list[list[int]]:
    """Read a node count followed by that many rows of costs."""
    numbers = _read_ints(Path(path).read_text())
    if not numbers:
        raise ValueError("matrix file is empty")
    n, values = numbers[0], numbers[1:]
    if n < 0:
        raise ValueError("node count must not be negative")
    if len(values) < n * n:
        raise ValueError(f"expected {n * n} costs, found {len(values)}")
    return [values[i * n : (i + 1) * n] for i in range(n)]


def _read_repeat_count(path: Path) -> int:
    numbers = _read_ints(path.read_text())
    if not numbers:
        raise ValueError("dataset file holds no count")
    return numbers[0]


def main(argv=None) -> int:
    """Print the shortest path from each node to the node half way round."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("Usage: dijkstra <filename>", file=sys.stderr)
        print("Only supports matrix size is #define'd.", file=sys.stderr)
        return 1

    try:
        repeats = _read_repeat_count(Path(DATASET_FILE))
    except (OSError, ValueError):
        print("\nError: Can't find dataset!", file=sys.stderr)
        return 1

    try:
        matrix = read_matrix(args[0])
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    n = len(matrix)
    print(f"Matrix size: {n}")
    print(f"AdjMatrix size: {_INT_SIZE * (n + 1) * (n + 1)}")
    print(f"rgnNodesSize: {_NODE_SIZE * (n + 1)}")

    for start in range(n):
        end = (start + n // 2) % n
        dist, prev = dijkstra(matrix, start, end)
        for _ in range(repeats):
            if start == end:
                print("Shortest path is 0 in cost. Just stay where you are.")
            dist, prev = dijkstra(matrix, start, end)
        cost = dist[end] if dist[end] is not None else NO_EDGE
        route = "".join(f" {node}" for node in path_to(prev, end))
        print(f"Shortest path is {cost} in cost. Path is: {route}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())