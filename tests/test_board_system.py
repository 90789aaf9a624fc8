import random

import pytest

from samegame.constants import BASE_VALUES, DEFAULT_BOARD_SIZE
from samegame.events.bus import (
    EVENT_BOARD_CHANGED,
    EVENT_BOARD_RESET,
    EVENT_BOARD_RESET_REQUEST,
    EventBus,
)
from samegame.systems.board import BoardSystem
from samegame.utils.game_state import get_board, get_or_create_game_state
from samegame.world import create_world


@pytest.fixture
def setup_world():
    bus = EventBus()
    world = create_world(rng=random.Random(42))
    board_system = BoardSystem(world, bus)
    return bus, world, board_system


def test_initial_board_is_full_of_base_values(setup_world):
    _, world, _ = setup_world
    board = get_board(world)
    assert board.size == DEFAULT_BOARD_SIZE
    assert len(board.cells) == DEFAULT_BOARD_SIZE
    assert all(value in BASE_VALUES for row in board.cells for value in row)
    assert board.revision == 1


def test_reset_request_changes_size_and_clears_win(setup_world):
    bus, world, _ = setup_world
    state = get_or_create_game_state(world)
    state.won = True
    state.last_merged = (7, 0)
    resets = []
    bus.subscribe(EVENT_BOARD_RESET, lambda sender, **payload: resets.append(payload))

    bus.emit(EVENT_BOARD_RESET_REQUEST, size=16)

    board = get_board(world)
    assert board.size == 16
    assert len(board.cells) == 16
    assert all(len(row) == 16 for row in board.cells)
    assert not state.won
    assert state.last_merged is None
    assert resets == [{"size": 16, "revision": 2}]


def test_reset_without_size_keeps_size_and_replaces_board(setup_world):
    bus, world, _ = setup_world
    before = get_board(world).cells
    bus.emit(EVENT_BOARD_RESET_REQUEST)
    board = get_board(world)
    assert board.size == DEFAULT_BOARD_SIZE
    assert board.cells is not before


@pytest.mark.parametrize("size", [7, 0, 256, "large"])
def test_reset_request_ignores_unsupported_sizes(setup_world, size):
    bus, world, _ = setup_world
    before = get_board(world)
    revision = before.revision
    bus.emit(EVENT_BOARD_RESET_REQUEST, size=size)
    assert get_board(world).revision == revision
    assert get_board(world).size == DEFAULT_BOARD_SIZE


def test_load_commits_hand_built_board(setup_world):
    bus, world, board_system = setup_world
    changes = []
    bus.subscribe(EVENT_BOARD_CHANGED, lambda sender, **payload: changes.append(payload))
    board_system.load([[1, 2, 4], [2, 4, 1], [4, 1, 2]])
    board = get_board(world)
    assert board.size == 3
    assert board.cells == ((1, 2, 4), (2, 4, 1), (4, 1, 2))
    assert changes[-1]["reason"] == "load"


def test_same_seed_gives_same_board():
    first = BoardSystem(create_world(rng=random.Random(5)), EventBus()).board.cells
    second = BoardSystem(create_world(rng=random.Random(5)), EventBus()).board.cells
    assert first == second


def test_constructor_rejects_non_positive_size():
    with pytest.raises(ValueError):
        BoardSystem(create_world(), EventBus(), size=0)
