from dataclasses import dataclass
from typing import Optional, Tuple

from samegame.constants import (
    BOARD_MAX_HEIGHT_PCT,
    BOARD_MAX_WIDTH_PCT,
    BOTTOM_MARGIN,
    HEADER_HEIGHT,
    MIN_TILE_SIZE,
)


@dataclass(slots=True)
class BoardGeometry:
    """Pixel placement of the board. Arcade's y axis points up, rows count down."""
    size: int
    tile_size: int
    left: float
    bottom: float

    @property
    def width(self) -> float:
        return self.size * self.tile_size

    @property
    def top(self) -> float:
        return self.bottom + self.width

    @property
    def right(self) -> float:
        return self.left + self.width

    def cell_center(self, row: int, col: int) -> Tuple[float, float]:
        cx = self.left + col * self.tile_size + self.tile_size / 2
        cy = self.bottom + (self.size - 1 - row) * self.tile_size + self.tile_size / 2
        return cx, cy

    def cell_at(self, x: float, y: float) -> Optional[Tuple[int, int]]:
        if x < self.left or x >= self.right:
            return None
        if y < self.bottom or y >= self.top:
            return None
        col = int((x - self.left) // self.tile_size)
        row = self.size - 1 - int((y - self.bottom) // self.tile_size)
        if 0 <= row < self.size and 0 <= col < self.size:
            return row, col
        return None


def compute_board_geometry(window_width: int, window_height: int, size: int) -> BoardGeometry:
    """Return the board placement shared by rendering and input mapping."""
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - HEADER_HEIGHT) * BOARD_MAX_HEIGHT_PCT
    tile_size = int(min(max_board_w, max_board_h) / size)
    if tile_size < MIN_TILE_SIZE:
        tile_size = MIN_TILE_SIZE
    total_width = size * tile_size
    left = (window_width - total_width) / 2
    return BoardGeometry(size=size, tile_size=tile_size, left=left, bottom=BOTTOM_MARGIN)
