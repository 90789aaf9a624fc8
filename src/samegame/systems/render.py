from typing import Any, Dict, List, Tuple

from esper import World

from samegame.components.auto_player import AutoPlayer
from samegame.components.board import Board
from samegame.constants import TILE_PADDING
from samegame.events.bus import (
    EventBus,
    EVENT_AUTOPLAY_HALTED,
    EVENT_BOARD_RESET,
    EVENT_TICK,
)
from samegame.rendering.palette import TARGET_COLOR, text_color, tile_color
from samegame.rendering.tile_sprites import TileSpriteCache
from samegame.systems.board_ops import has_moves, highest_value
from samegame.ui.layout import BoardGeometry, compute_board_geometry
from samegame.utils.game_state import find_board, get_or_create_game_state

# Numbers are not drawn on tiles smaller than this many pixels.
MIN_LABEL_TILE = 16
HIGHLIGHT_COLOR = (17, 24, 39)
STATUS_COLOR = (229, 231, 235)
WIN_COLOR = (22, 163, 74)

HALT_MESSAGES = {
    "no_moves": "Auto: stopped, no moves left",
    "won": "Auto: stopped, target reached",
}


class RenderSystem:
    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_AUTOPLAY_HALTED, self.on_autoplay_halted)
        self.event_bus.subscribe(EVENT_BOARD_RESET, self.on_board_reset)
        self._time = 0.0
        self._halt_reason: str | None = None
        self._last_tile_layout: Dict[Tuple[int, int], Dict[str, Any]] = {}
        self.tile_sprites = TileSpriteCache()
        self._moves_revision: int | None = None
        self._stuck = False

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        try:
            self._time += float(dt)
        except (TypeError, ValueError):
            self._time += 1/60

    def on_autoplay_halted(self, sender, **kwargs):
        self._halt_reason = kwargs.get('reason')

    def on_board_reset(self, sender, **kwargs):
        self._halt_reason = None

    def geometry(self, board: Board) -> BoardGeometry:
        return compute_board_geometry(self.window.width, self.window.height, board.size)

    def build_tile_layout(self, board: Board, geometry: BoardGeometry) -> Dict[Tuple[int, int], Dict[str, Any]]:
        """Per-cell drawing data, also kept for hit tests and headless checks."""
        highlight = get_or_create_game_state(self.world).last_merged
        layout: Dict[Tuple[int, int], Dict[str, Any]] = {}
        for row, cells in enumerate(board.cells):
            for col, value in enumerate(cells):
                layout[(row, col)] = {
                    "value": value,
                    "center": geometry.cell_center(row, col),
                    "color": tile_color(value),
                    "text_color": text_color(value),
                    "highlight": (row, col) == highlight,
                }
        return layout

    def status_lines(self, board: Board) -> List[str]:
        state = get_or_create_game_state(self.world)
        lines = [f"Board {board.size}x{board.size}   Moves {state.moves_made}   Best {highest_value(board.cells)}"]
        agent = self._agent()
        if agent is not None and agent.enabled:
            lines.append(f"Auto: on ({int(round(agent.delay * 1000))} ms)")
        elif self._halt_reason in HALT_MESSAGES:
            lines.append(HALT_MESSAGES[self._halt_reason])
        else:
            lines.append("Auto: off   [A] toggle  [+/-] delay  [R] new game  [1-5] size")
        if state.won:
            lines.append(f"Congratulations! You reached {state.target}!")
        elif self.board_stuck(board):
            lines.append("No moves left. Press R for a new game.")
        return lines

    def board_stuck(self, board: Board) -> bool:
        if self._moves_revision != board.revision:
            self._moves_revision = board.revision
            self._stuck = not has_moves(board.cells)
        return self._stuck

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        board = find_board(self.world)
        if board is None:
            return
        geometry = self.geometry(board)
        self._last_tile_layout = self.build_tile_layout(board, geometry)
        try:
            arcade.get_window()
        except Exception:
            # No active window (unit tests): layout cache only.
            return

        draw_size = max(geometry.tile_size - TILE_PADDING, 1)
        half = draw_size / 2
        highlighted = None
        self.tile_sprites.sync(arcade, board, geometry)
        self.tile_sprites.draw()
        for (row, col), entry in self._last_tile_layout.items():
            cx, cy = entry["center"]
            if entry["highlight"]:
                highlighted = (cx, cy)
            value = entry["value"]
            if value is None or geometry.tile_size < MIN_LABEL_TILE:
                continue
            label = str(value)
            font_size = max(6, min(geometry.tile_size * 0.35, geometry.tile_size * 1.4 / len(label)))
            arcade.draw_text(
                label, cx, cy, entry["text_color"], font_size,
                anchor_x="center", anchor_y="center", bold=True,
            )
        if highlighted is not None:
            cx, cy = highlighted
            arcade.draw_lrbt_rectangle_outline(cx - half, cx + half, cy - half, cy + half, HIGHLIGHT_COLOR, 2)

        state = get_or_create_game_state(self.world)
        text_y = self.window.height - 24
        for index, line in enumerate(self.status_lines(board)):
            color = STATUS_COLOR
            if state.won and index == 2:
                # Pulse the win banner.
                color = TARGET_COLOR if int(self._time * 2) % 2 else WIN_COLOR
            arcade.draw_text(line, 16, text_y, color, 14)
            text_y -= 22

    def _agent(self) -> AutoPlayer | None:
        for _, agent in self.world.get_component(AutoPlayer):
            return agent
        return None
