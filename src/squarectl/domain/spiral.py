"""Expanding-ring spiral that orders grid coordinates by creation index.

The spiral is built one square frame ("ring") at a time. Ring 1 is the
single cell ``(0, 0)``; ring *s* adds the outer border of an ``s x s``
frame, walking:

1. ``(0, s-1)``                        top-right corner
2. ``(r, s-1)`` for ``r = 1 .. s-1``   right column, downward
3. ``(s-1, c)`` for ``c = s-2 .. 0``   bottom row, leftward
4. ``(r, 0)``   for ``r = s-2 .. 1``   left column, upward

Coordinates already in the spiral are skipped.

INVARIANT: Coordinates never move. Index *i* always maps to the same cell,
and the first *n* cells fit inside a ``ceil(sqrt(n))`` square.

Examples:
    >>> seq = PositionSequencer()
    >>> [seq.position_at(i) for i in range(9)]
    [(0, 0), (0, 1), (1, 1), (1, 0), (0, 2), (1, 2), (2, 2), (2, 1), (2, 0)]
"""

from __future__ import annotations

import math

Coordinate = tuple[int, int]


def grid_size_for(count: int) -> int:
    """Side length of the smallest square holding *count* cells.

    Examples:
        >>> grid_size_for(0), grid_size_for(1), grid_size_for(5), grid_size_for(9)
        (0, 1, 3, 3)
    """
    if count < 0:
        msg = f"count must be non-negative, got {count}"
        raise ValueError(msg)
    root = math.isqrt(count)
    return root if root * root == count else root + 1


class PositionSequencer:
    """Lazy, cached mapping from a 0-based creation index to ``(row, column)``.

    Not thread-safe on its own; the owning service serializes access.
    """

    def __init__(self) -> None:
        self._positions: list[Coordinate] = []
        self._seen: set[Coordinate] = set()
        self._ring_size = 0

    @property
    def ring_size(self) -> int:
        """Side length of the largest ring built so far (0 when empty)."""
        return self._ring_size

    def __len__(self) -> int:
        return len(self._positions)

    def position_at(self, index: int) -> Coordinate:
        """Return the grid coordinate for creation *index*.

        Raises:
            ValueError: If *index* is negative.
        """
        if index < 0:
            msg = f"Spiral index must be non-negative, got {index}"
            raise ValueError(msg)
        self._expand_to(grid_size_for(index + 1))
        return self._positions[index]

    def reset(self) -> None:
        """Drop every cached coordinate."""
        self._positions.clear()
        self._seen.clear()
        self._ring_size = 0

    # ------------------------------------------------------------------
    # Ring construction
    # ------------------------------------------------------------------

    def _expand_to(self, target_size: int) -> None:
        while self._ring_size < target_size:
            self._ring_size += 1
            self._add_ring(self._ring_size)

    def _add_ring(self, size: int) -> None:
        if size == 1:
            self._add((0, 0))
            return

        edge = size - 1
        self._add((0, edge))
        for row in range(1, size):
            self._add((row, edge))
        for col in range(size - 2, -1, -1):
            self._add((edge, col))
        for row in range(size - 2, 0, -1):
            self._add((row, 0))

    def _add(self, position: Coordinate) -> None:
        if position in self._seen:
            return
        self._seen.add(position)
        self._positions.append(position)
