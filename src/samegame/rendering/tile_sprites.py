from __future__ import annotations

from typing import Any

from samegame.components.board import Board, Cell
from samegame.constants import TILE_PADDING
from samegame.rendering.palette import tile_color
from samegame.ui.layout import BoardGeometry


class TileSpriteCache:
    """One solid-colour sprite per board cell, drawn as a single batch.

    Sprites are replaced only for cells whose value changed since the last
    sync; a new board geometry rebuilds the whole list.
    """

    def __init__(self):
        self._tile_sprites: Any | None = None
        self._tile_sprite_map: dict[tuple[int, int], Any] = {}
        self._tile_values: dict[tuple[int, int], Cell] = {}
        self._layout_key: tuple | None = None
        self._revision: int | None = None

    def __len__(self) -> int:
        return len(self._tile_sprite_map)

    def sprite_at(self, row: int, col: int):
        return self._tile_sprite_map.get((row, col))

    def clear(self) -> None:
        self._tile_sprites = None
        self._tile_sprite_map.clear()
        self._tile_values.clear()
        self._revision = None

    def sync(self, arcade_module, board: Board, geometry: BoardGeometry) -> int:
        """Bring the sprites in line with ``board``; returns how many were created."""
        layout_key = (geometry.size, geometry.tile_size, geometry.left, geometry.bottom)
        if layout_key != self._layout_key:
            self.clear()
            self._layout_key = layout_key
        if self._tile_sprites is not None and self._revision == board.revision:
            return 0
        tile_list = self._tile_sprites
        if tile_list is None:
            tile_list = arcade_module.SpriteList()
            self._tile_sprites = tile_list
        draw_size = max(geometry.tile_size - TILE_PADDING, 1)
        created = 0
        for row, cells in enumerate(board.cells):
            for col, value in enumerate(cells):
                key = (row, col)
                if key in self._tile_values and self._tile_values[key] == value:
                    continue
                old = self._tile_sprite_map.pop(key, None)
                if old is not None:
                    old.remove_from_sprite_lists()
                sprite = arcade_module.SpriteSolidColor(draw_size, draw_size, color=tile_color(value))
                sprite.center_x, sprite.center_y = geometry.cell_center(row, col)
                self._tile_sprite_map[key] = sprite
                self._tile_values[key] = value
                tile_list.append(sprite)
                created += 1
        self._revision = board.revision
        return created

    def draw(self) -> None:
        if self._tile_sprites is not None:
            self._tile_sprites.draw()
