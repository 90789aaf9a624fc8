import random
from collections import Counter

from samegame.systems.board_ops import GravityMove, compute_gravity_moves, freeze, settle


def _values(grid):
    return Counter(value for row in grid for value in row if value is not None)


def _random_holey_grid(rng: random.Random, size: int):
    return freeze(
        [[rng.choice((1, 2, 4, None, None)) for _ in range(size)] for _ in range(size)]
    )


def _assert_settled(grid):
    size = len(grid)
    occupied_columns = []
    for col in range(size):
        column = [grid[row][col] for row in range(size)]
        filled = [value for value in column if value is not None]
        # Tiles sit contiguously at the bottom.
        assert column == [None] * (size - len(filled)) + filled
        occupied_columns.append(bool(filled))
    # No empty column to the left of an occupied one.
    for left, right in zip(occupied_columns, occupied_columns[1:]):
        assert left or not right


def test_settle_drops_tiles_within_column():
    grid = freeze([
        [1, 2, 4],
        [None, None, 2],
        [2, None, 1],
    ])
    assert settle(grid) == (
        (None, None, 4),
        (1, None, 2),
        (2, 2, 1),
    )


def test_settle_keeps_column_order():
    grid = freeze([
        [1, 1, 1],
        [None, 1, 1],
        [4, 1, 1],
    ])
    assert [row[0] for row in settle(grid)] == [None, 1, 4]


def test_settle_packs_columns_left():
    grid = freeze([
        [None, None, 4],
        [1, None, 2],
        [2, None, 1],
    ])
    assert settle(grid) == (
        (None, 4, None),
        (1, 2, None),
        (2, 1, None),
    )


def test_settle_conserves_values_and_is_idempotent():
    rng = random.Random(3)
    for size in (1, 2, 4, 8):
        for _ in range(25):
            grid = _random_holey_grid(rng, size)
            settled = settle(grid)
            assert _values(settled) == _values(grid)
            _assert_settled(settled)
            assert settle(settled) == settled


def test_settle_all_empty_board():
    grid = freeze([[None, None], [None, None]])
    assert settle(grid) == grid


def test_settle_does_not_modify_input():
    rows = [[1, None], [None, 2]]
    settle(rows)
    assert rows == [[1, None], [None, 2]]


def test_gravity_moves_describe_settle():
    grid = freeze([
        [None, 4, None],
        [None, None, None],
        [None, 2, 1],
    ])
    moves = compute_gravity_moves(grid)
    assert moves == [
        GravityMove(source=(0, 1), target=(1, 0), value=4),
        GravityMove(source=(2, 1), target=(2, 0), value=2),
        GravityMove(source=(2, 2), target=(2, 1), value=1),
    ]


def test_gravity_moves_empty_when_already_settled():
    grid = freeze([
        [None, None],
        [1, 2],
    ])
    assert compute_gravity_moves(grid) == []
