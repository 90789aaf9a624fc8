"""Entry point for the Same Game 2147483648 puzzle.

Sets up ECS world, event bus, systems, and Arcade window.
"""
from arcade import Window, run, set_background_color, color, key
from samegame.world import create_world
from samegame.constants import (
    AUTOPLAY_DELAY_STEP, BOARD_SIZES, DEFAULT_BOARD_SIZE,
    WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH,
)
from samegame.events.bus import (
    EventBus, EVENT_TICK, EVENT_MOUSE_PRESS, EVENT_BOARD_RESET_REQUEST,
    EVENT_AUTOPLAY_TOGGLE, EVENT_AUTOPLAY_DELAY_CHANGED,
)
from samegame.systems.auto_solver import AutoSolverSystem
from samegame.systems.board import BoardSystem
from samegame.systems.input import InputSystem
from samegame.systems.merge_resolution import MergeResolutionSystem
from samegame.systems.render import RenderSystem

SIZE_KEYS = {
    key.KEY_1: BOARD_SIZES[0],
    key.KEY_2: BOARD_SIZES[1],
    key.KEY_3: BOARD_SIZES[2],
    key.KEY_4: BOARD_SIZES[3],
    key.KEY_5: BOARD_SIZES[4],
}


class SameGameWindow(Window):
    def __init__(self):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, WINDOW_TITLE, resizable=True)
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world()
        self.board_system = BoardSystem(self.world, self.event_bus, size=DEFAULT_BOARD_SIZE)
        self.merge_resolution_system = MergeResolutionSystem(self.world, self.event_bus)
        self.auto_solver_system = AutoSolverSystem(self.world, self.event_bus)
        self.render_system = RenderSystem(self.world, self.event_bus, self)
        self.input_system = InputSystem(self.event_bus, self, self.world)
        set_background_color(color.DARK_SLATE_GRAY)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == key.R:
            self.event_bus.emit(EVENT_BOARD_RESET_REQUEST)
        elif symbol == key.A:
            self.event_bus.emit(EVENT_AUTOPLAY_TOGGLE)
        elif symbol in (key.PLUS, key.EQUAL, key.NUM_ADD):
            self._nudge_delay(AUTOPLAY_DELAY_STEP)
        elif symbol in (key.MINUS, key.NUM_SUBTRACT):
            self._nudge_delay(-AUTOPLAY_DELAY_STEP)
        elif symbol in SIZE_KEYS:
            self.event_bus.emit(EVENT_BOARD_RESET_REQUEST, size=SIZE_KEYS[symbol])

    def _nudge_delay(self, step: float):
        delay = self.auto_solver_system.agent.delay + step
        self.event_bus.emit(EVENT_AUTOPLAY_DELAY_CHANGED, delay=delay)


def main():
    window = SameGameWindow()
    run()

if __name__ == "__main__":
    main()
