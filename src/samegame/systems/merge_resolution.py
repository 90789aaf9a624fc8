from __future__ import annotations

import random
from typing import Optional

from esper import World

from samegame.events.bus import (
    EventBus,
    EVENT_BOARD_CHANGED,
    EVENT_GAME_WON,
    EVENT_GRAVITY_APPLIED,
    EVENT_MOVE_REJECTED,
    EVENT_REFILL_COMPLETED,
    EVENT_REGION_CLEARED,
    EVENT_TILE_CLICK,
    EVENT_TILE_MERGED,
)
from samegame.systems.board_ops import MoveResult, apply_move
from samegame.utils.game_state import find_board, get_or_create_game_state


class MergeResolutionSystem:
    """Resolves tile clicks against the committed board.

    Manual and automated clicks take the same path; the ``source`` payload
    only travels along to the emitted events.
    """

    def __init__(self, world: World, event_bus: EventBus, *, rng: Optional[random.Random] = None):
        self.world = world
        self.event_bus = event_bus
        self._rng = rng or getattr(world, "random", None) or random.Random()
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        self.resolve(row, col, source=kwargs.get('source', 'manual'))

    def resolve(self, row: int, col: int, *, source: str = "manual") -> MoveResult | None:
        board = find_board(self.world)
        if board is None:
            return None
        if not (0 <= row < board.size and 0 <= col < board.size):
            return None
        state = get_or_create_game_state(self.world)
        if state.won:
            self._reject(row, col, "won", source)
            return None
        if board.cells[row][col] is None:
            self._reject(row, col, "empty", source)
            return None
        result = apply_move(
            board.cells,
            row,
            col,
            rng=self._rng,
            won=state.won,
            target=state.target,
            policy=state.policy,
        )
        if result is None:
            self._reject(row, col, "single", source)
            return None

        # Commit the successor snapshot before anyone hears about it.
        board.cells = result.grid
        board.revision += 1
        state.last_merged = result.merged_at
        state.moves_made += 1

        self.event_bus.emit(EVENT_REGION_CLEARED, positions=result.region, value=result.value)
        self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=result.gravity_moves)
        self.event_bus.emit(EVENT_TILE_MERGED, position=result.merged_at, value=result.merged_value)
        if result.spawned:
            self.event_bus.emit(EVENT_REFILL_COMPLETED, new_tiles=result.spawned)
        if result.won and not state.won:
            state.won = True
            self.event_bus.emit(EVENT_GAME_WON, value=result.merged_value, position=result.merged_at)
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason="merge", revision=board.revision, source=source)
        return result

    def _reject(self, row: int, col: int, reason: str, source: str) -> None:
        self.event_bus.emit(EVENT_MOVE_REJECTED, row=row, col=col, reason=reason, source=source)
