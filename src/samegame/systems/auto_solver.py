from __future__ import annotations

from typing import Optional, Tuple

from esper import World

from samegame.components.auto_player import AutoPlayer
from samegame.constants import AUTOPLAY_DELAY_DEFAULT, AUTOPLAY_DELAY_MAX, AUTOPLAY_DELAY_MIN
from samegame.events.bus import (
    EventBus,
    EVENT_AUTOPLAY_DELAY_CHANGED,
    EVENT_AUTOPLAY_HALTED,
    EVENT_AUTOPLAY_STARTED,
    EVENT_AUTOPLAY_TOGGLE,
    EVENT_BOARD_CHANGED,
    EVENT_BOARD_RESET,
    EVENT_GAME_WON,
    EVENT_TICK,
    EVENT_TILE_CLICK,
)
from samegame.systems.board_ops import find_next_move
from samegame.utils.game_state import find_board, get_or_create_game_state
from samegame.utils.scheduler import Scheduler

Position = Tuple[int, int]


def clamp_delay(delay: float) -> float:
    return min(AUTOPLAY_DELAY_MAX, max(AUTOPLAY_DELAY_MIN, float(delay)))


class AutoSolverSystem:
    """Plays the first available move on a timer until the board is stuck or won.

    Every move is a scheduled task on :class:`Scheduler`; the task reads the
    committed board when it fires. Resets, toggling off and winning cancel the
    pending task. A manual move pushes the next automated move back by a full
    delay.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        delay: float = AUTOPLAY_DELAY_DEFAULT,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.scheduler = scheduler or Scheduler()
        self.agent_entity = self.world.create_entity(AutoPlayer(delay=clamp_delay(delay)))
        event_bus.subscribe(EVENT_TICK, self.on_tick)
        event_bus.subscribe(EVENT_AUTOPLAY_TOGGLE, self.on_toggle)
        event_bus.subscribe(EVENT_AUTOPLAY_DELAY_CHANGED, self.on_delay_changed)
        event_bus.subscribe(EVENT_BOARD_RESET, self.on_board_reset)
        event_bus.subscribe(EVENT_BOARD_CHANGED, self.on_board_changed)
        event_bus.subscribe(EVENT_GAME_WON, self.on_game_won)

    @property
    def agent(self) -> AutoPlayer:
        return self.world.component_for_entity(self.agent_entity, AutoPlayer)

    # --- Event handlers -------------------------------------------------
    def on_tick(self, sender, **payload) -> None:
        try:
            dt = float(payload.get("dt", 0.0))
        except (TypeError, ValueError):
            return
        self.scheduler.advance(dt)

    def on_toggle(self, sender, **payload) -> None:
        enabled = payload.get("enabled")
        if enabled is None:
            enabled = not self.agent.enabled
        if enabled:
            self.start()
        else:
            self.stop("toggled_off")

    def on_delay_changed(self, sender, **payload) -> None:
        delay = payload.get("delay")
        if delay is None:
            return
        try:
            self.agent.delay = clamp_delay(delay)
        except (TypeError, ValueError):
            return
        if self.agent.pending is not None:
            self._schedule_next()

    def on_board_reset(self, sender, **payload) -> None:
        self.stop("reset")

    def on_board_changed(self, sender, **payload) -> None:
        if payload.get("source") in ("auto", "reset"):
            return
        if not self.agent.enabled:
            return
        # A move from outside the timer: restart the countdown from the new board.
        self._schedule_next()

    def on_game_won(self, sender, **payload) -> None:
        self.stop("won")

    # --- Core flow ------------------------------------------------------
    def start(self) -> None:
        agent = self.agent
        if agent.enabled:
            return
        if get_or_create_game_state(self.world).won:
            self.event_bus.emit(EVENT_AUTOPLAY_HALTED, reason="won")
            return
        agent.enabled = True
        self.event_bus.emit(EVENT_AUTOPLAY_STARTED, delay=agent.delay)
        self._schedule_next()

    def stop(self, reason: str) -> None:
        self._cancel_pending()
        agent = self.agent
        if not agent.enabled:
            return
        agent.enabled = False
        self.event_bus.emit(EVENT_AUTOPLAY_HALTED, reason=reason)

    def step(self) -> Position | None:
        """Play one move on the committed board, or halt if none is left."""
        board = find_board(self.world)
        if board is None:
            self.stop("no_moves")
            return None
        if get_or_create_game_state(self.world).won:
            self.stop("won")
            return None
        move = find_next_move(board.cells)
        if move is None:
            self.stop("no_moves")
            return None
        row, col = move
        self.event_bus.emit(EVENT_TILE_CLICK, row=row, col=col, source="auto")
        self.agent.moves_played += 1
        if self.agent.enabled:
            self._schedule_next()
        return move

    # --- Helpers ---------------------------------------------------------
    def _on_timer(self) -> None:
        self.agent.pending = None
        if not self.agent.enabled:
            return
        self.step()

    def _schedule_next(self) -> None:
        self._cancel_pending()
        agent = self.agent
        agent.pending = self.scheduler.schedule(agent.delay, self._on_timer)

    def _cancel_pending(self) -> None:
        agent = self.agent
        if agent.pending is not None:
            agent.pending.cancel()
            agent.pending = None
