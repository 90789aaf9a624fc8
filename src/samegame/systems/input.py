from samegame.events.bus import EventBus, EVENT_MOUSE_PRESS, EVENT_TILE_CLICK
from samegame.ui.layout import compute_board_geometry
from samegame.utils.game_state import find_board


class InputSystem:
    """Turns left clicks on the board into tile clicks."""

    def __init__(self, event_bus: EventBus, window, world):
        self.event_bus = event_bus
        self.window = window
        self.world = world
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None:
            return
        # Left button only (arcade.MOUSE_BUTTON_LEFT == 1).
        if button != 1:
            return
        board = find_board(self.world)
        if board is None:
            return
        geometry = compute_board_geometry(self.window.width, self.window.height, board.size)
        cell = geometry.cell_at(x, y)
        if cell is None:
            return
        row, col = cell
        self.event_bus.emit(EVENT_TILE_CLICK, row=row, col=col, source="manual")
