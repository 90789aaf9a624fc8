"""Game state resource describing win progress for the current board."""
from dataclasses import dataclass
from typing import Optional, Tuple

from samegame.components.placement_policy import PlacementPolicy
from samegame.constants import TARGET_VALUE


@dataclass
class GameState:
    """Singleton component storing the win flag and merge highlight.

    ``won`` is one-way: once set, moves are ignored until the board is reset.
    """
    won: bool = False
    target: int = TARGET_VALUE
    policy: PlacementPolicy = PlacementPolicy.REGION_BOTTOM_LEFT
    last_merged: Optional[Tuple[int, int]] = None
    moves_made: int = 0
