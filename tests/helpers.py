from __future__ import annotations

from typing import List, Optional

from samegame.events.bus import EVENT_TICK, EventBus

BASE = (1, 2, 4)


def drive_ticks(bus: EventBus, count: int = 1, dt: float = 0.05) -> None:
    for _ in range(count):
        bus.emit(EVENT_TICK, dt=dt)


def stuck_grid(size: int) -> List[List[Optional[int]]]:
    """A full board where no two orthogonal neighbours share a value.

    Horizontal neighbours differ by 2 (mod 3) in the pattern index and
    vertical neighbours by 1, so nothing is mergeable.
    """
    return [[BASE[(row + 2 * col) % 3] for col in range(size)] for row in range(size)]


def flood_fill_oracle(grid, row: int, col: int) -> set[tuple[int, int]]:
    """Recursive reference flood fill used to cross-check region search."""
    value = grid[row][col]
    if value is None:
        return set()
    size = len(grid)
    seen: set[tuple[int, int]] = set()

    def visit(r: int, c: int) -> None:
        if not (0 <= r < size and 0 <= c < size):
            return
        if (r, c) in seen or grid[r][c] != value:
            return
        seen.add((r, c))
        visit(r + 1, c)
        visit(r - 1, c)
        visit(r, c + 1)
        visit(r, c - 1)

    visit(row, col)
    return seen
