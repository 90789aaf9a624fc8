from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so systems that are not stored in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float (seconds)


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"                  # payload: x, y, button
EVENT_TILE_CLICK = "tile_click"                    # payload: row, col, source="manual"|"auto"


# ============================================================================
# BOARD MECHANICS
# ============================================================================
EVENT_BOARD_RESET_REQUEST = "board_reset_request"  # payload: size=int|None
EVENT_BOARD_RESET = "board_reset"                  # payload: size=int, revision=int
EVENT_MOVE_REJECTED = "move_rejected"              # payload: row, col, reason="won"|"empty"|"single", source
EVENT_REGION_CLEARED = "region_cleared"            # payload: positions=[(r,c),...], value=int
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=[GravityMove,...]
EVENT_TILE_MERGED = "tile_merged"                  # payload: position=(r,c), value=int
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: new_tiles=[(r,c),...]
EVENT_BOARD_CHANGED = "board_changed"              # payload: reason=str, revision=int, source=str


# ============================================================================
# GAME FLOW
# ============================================================================
EVENT_GAME_WON = "game_won"                        # payload: value=int, position=(r,c)


# ============================================================================
# AUTOMATION
# ============================================================================
EVENT_AUTOPLAY_TOGGLE = "autoplay_toggle"                  # payload: enabled=bool|None (None flips)
EVENT_AUTOPLAY_DELAY_CHANGED = "autoplay_delay_changed"    # payload: delay=float (seconds)
EVENT_AUTOPLAY_STARTED = "autoplay_started"                # payload: delay=float
EVENT_AUTOPLAY_HALTED = "autoplay_halted"                  # payload: reason="toggled_off"|"no_moves"|"won"|"reset"
