from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from samegame.components.board import Cell, Grid
from samegame.components.placement_policy import PlacementPolicy
from samegame.constants import BASE_VALUES, MIN_REGION_SIZE, TARGET_VALUE

Position = Tuple[int, int]
Rows = Sequence[Sequence[Cell]]

# up, down, left, right
NEIGHBOUR_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    value: int


@dataclass(slots=True)
class MoveResult:
    """Outcome of one successful merge, plus the metadata listeners report."""

    grid: Grid
    won: bool
    region: List[Position]
    value: int
    merged_value: int
    merged_at: Position
    gravity_moves: List[GravityMove] = field(default_factory=list)
    spawned: List[Position] = field(default_factory=list)


def grid_size(grid: Rows) -> int:
    size = len(grid)
    if size == 0 or any(len(row) != size for row in grid):
        raise ValueError("Board must be a non-empty square matrix")
    return size


def freeze(rows: Iterable[Iterable[Cell]]) -> Grid:
    return tuple(tuple(row) for row in rows)


def thaw(grid: Rows) -> List[List[Cell]]:
    return [list(row) for row in grid]


def generate_grid(size: int, rng: random.Random | None = None) -> Grid:
    """Return a fresh ``size x size`` board sampled uniformly from the base values."""
    if size < 1:
        raise ValueError(f"Board size must be positive, got {size}")
    rng = rng or random.Random()
    return tuple(
        tuple(rng.choice(BASE_VALUES) for _ in range(size))
        for _ in range(size)
    )


def find_region(grid: Rows, row: int, col: int) -> Set[Position]:
    """Return every cell 4-connected to (row, col) that holds the same value.

    An empty seed yields an empty set. The board is not modified.
    """
    size = grid_size(grid)
    if not (0 <= row < size and 0 <= col < size):
        raise IndexError(f"Cell ({row}, {col}) is outside a {size}x{size} board")
    value = grid[row][col]
    if value is None:
        return set()
    region: Set[Position] = {(row, col)}
    queue = deque([(row, col)])
    while queue:
        r, c = queue.popleft()
        for dr, dc in NEIGHBOUR_OFFSETS:
            nr, nc = r + dr, c + dc
            if not (0 <= nr < size and 0 <= nc < size):
                continue
            if (nr, nc) in region or grid[nr][nc] != value:
                continue
            region.add((nr, nc))
            queue.append((nr, nc))
    return region


def _settle_with_moves(grid: Rows) -> Tuple[Grid, List[GravityMove]]:
    size = grid_size(grid)
    settled: List[List[Cell]] = [[None] * size for _ in range(size)]
    moves: List[GravityMove] = []
    target_col = 0
    for col in range(size):
        filled = [(row, grid[row][col]) for row in range(size) if grid[row][col] is not None]
        if not filled:
            # Fully empty column: everything to its right shifts one column left.
            continue
        first_row = size - len(filled)
        for offset, (row, value) in enumerate(filled):
            target_row = first_row + offset
            settled[target_row][target_col] = value
            if (row, col) != (target_row, target_col):
                moves.append(GravityMove(source=(row, col), target=(target_row, target_col), value=value))
        target_col += 1
    return freeze(settled), moves


def settle(grid: Rows) -> Grid:
    """Drop tiles to the bottom of their columns, then pack non-empty columns to the left."""
    settled, _ = _settle_with_moves(grid)
    return settled


def compute_gravity_moves(grid: Rows) -> List[GravityMove]:
    """List the tiles :func:`settle` would move, in column then row order."""
    _, moves = _settle_with_moves(grid)
    return moves


def empty_positions(grid: Rows) -> List[Position]:
    size = grid_size(grid)
    return [
        (row, col)
        for row in range(size)
        for col in range(size)
        if grid[row][col] is None
    ]


def refill(grid: Rows, rng: random.Random | None = None) -> Grid:
    """Fill every empty cell with an independent draw from the base values."""
    rng = rng or random.Random()
    cells = thaw(grid)
    for row, col in empty_positions(grid):
        cells[row][col] = rng.choice(BASE_VALUES)
    return freeze(cells)


def region_bottom_left(region: Iterable[Position]) -> Position:
    """Bottom-most member of the region, left-most among ties."""
    return max(region, key=lambda pos: (pos[0], -pos[1]))


def lowest_empty_row(grid: Rows, col: int) -> Optional[int]:
    for row in range(len(grid) - 1, -1, -1):
        if grid[row][col] is None:
            return row
    return None


def board_bottom_left_gap(grid: Rows) -> Optional[Position]:
    """Lowest empty cell of the left-most column that still has room."""
    for col in range(grid_size(grid)):
        row = lowest_empty_row(grid, col)
        if row is not None:
            return row, col
    return None


def _post_gravity_destination(settled: Grid, region: Set[Position], policy: PlacementPolicy) -> Position:
    if policy is PlacementPolicy.REMOVED_COLUMN:
        col = min(c for _, c in region)
        row = lowest_empty_row(settled, col)
        if row is not None:
            return row, col
    destination = board_bottom_left_gap(settled)
    if destination is None:
        # At least MIN_REGION_SIZE cells were just cleared, so a gap must exist.
        raise RuntimeError("Settled board has no room for the merged tile")
    return destination


def apply_move(
    grid: Rows,
    row: int,
    col: int,
    *,
    rng: random.Random | None = None,
    won: bool = False,
    target: int = TARGET_VALUE,
    policy: PlacementPolicy = PlacementPolicy.REGION_BOTTOM_LEFT,
) -> MoveResult | None:
    """Merge the region at (row, col) into one doubled tile.

    Returns ``None`` (nothing happens) when the game is already won, the cell
    is empty, or its region is a single tile. The input board is never
    modified; the result holds the settled and refilled successor.
    """
    if won:
        return None
    region = find_region(grid, row, col)
    if len(region) < MIN_REGION_SIZE:
        return None
    value = grid[row][col]
    if value is None:
        return None
    merged_value = value * 2

    cleared = thaw(grid)
    for r, c in region:
        cleared[r][c] = None

    if policy is PlacementPolicy.REGION_BOTTOM_LEFT:
        dest_row, dest_col = region_bottom_left(region)
        cleared[dest_row][dest_col] = merged_value
        settled, moves = _settle_with_moves(cleared)
        merged_at = next(
            (move.target for move in moves if move.source == (dest_row, dest_col)),
            (dest_row, dest_col),
        )
    else:
        settled, moves = _settle_with_moves(cleared)
        merged_at = _post_gravity_destination(settled, region, policy)
        placed = thaw(settled)
        placed[merged_at[0]][merged_at[1]] = merged_value
        settled = freeze(placed)

    spawned = empty_positions(settled)
    final = refill(settled, rng)
    return MoveResult(
        grid=final,
        won=merged_value == target,
        region=sorted(region),
        value=value,
        merged_value=merged_value,
        merged_at=merged_at,
        gravity_moves=moves,
        spawned=spawned,
    )


def find_next_move(grid: Rows) -> Position | None:
    """Return the first mergeable cell scanning rows bottom-up, columns left to right."""
    size = grid_size(grid)
    for row in range(size - 1, -1, -1):
        for col in range(size):
            if grid[row][col] is None:
                continue
            if len(find_region(grid, row, col)) >= MIN_REGION_SIZE:
                return row, col
    return None


def has_moves(grid: Rows) -> bool:
    return find_next_move(grid) is not None


def highest_value(grid: Rows) -> int:
    return max((value for row in grid for value in row if value is not None), default=0)
