import random
from typing import Iterable, Optional

from esper import World

from samegame.components.board import Board, Cell
from samegame.constants import BOARD_SIZES, DEFAULT_BOARD_SIZE
from samegame.events.bus import (
    EventBus,
    EVENT_BOARD_CHANGED,
    EVENT_BOARD_RESET,
    EVENT_BOARD_RESET_REQUEST,
)
from samegame.systems.board_ops import freeze, generate_grid, grid_size
from samegame.utils.game_state import get_or_create_game_state


class BoardSystem:
    """Owns the board entity: creates it, resets it and swaps in new sizes."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        size: int = DEFAULT_BOARD_SIZE,
        *,
        rng: Optional[random.Random] = None,
    ):
        if size < 1:
            raise ValueError(f"Board size must be positive, got {size}")
        self.world = world
        self.event_bus = event_bus
        self._rng = rng or getattr(world, "random", None) or random.Random()
        self.board_entity = self.world.create_entity(Board(size=size))
        self.event_bus.subscribe(EVENT_BOARD_RESET_REQUEST, self.on_reset_request)
        self.reset()

    @property
    def board(self) -> Board:
        return self.world.component_for_entity(self.board_entity, Board)

    def on_reset_request(self, sender, **kwargs):
        size = kwargs.get('size')
        if size is not None:
            try:
                size = int(size)
            except (TypeError, ValueError):
                return
            # Only the enumerated sizes may come in from the outside.
            if size not in BOARD_SIZES:
                return
        self.reset(size)

    def reset(self, size: Optional[int] = None):
        board = self.board
        if size is not None:
            board.size = size
        board.cells = generate_grid(board.size, self._rng)
        board.revision += 1
        state = get_or_create_game_state(self.world)
        state.won = False
        state.last_merged = None
        state.moves_made = 0
        self.event_bus.emit(EVENT_BOARD_RESET, size=board.size, revision=board.revision)
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason="reset", revision=board.revision, source="reset")

    def load(self, rows: Iterable[Iterable[Cell]]):
        """Commit a hand-built board, keeping the current win flag."""
        cells = freeze(rows)
        board = self.board
        board.size = grid_size(cells)
        board.cells = cells
        board.revision += 1
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason="load", revision=board.revision, source="load")
