from __future__ import annotations

from esper import World

from samegame.components.board import Board
from samegame.components.game_state import GameState


def get_or_create_game_state(world: World) -> GameState:
    """Return the shared GameState component, creating it if absent."""
    existing = list(world.get_component(GameState))
    if existing:
        return existing[0][1]
    world.create_entity(GameState())
    return list(world.get_component(GameState))[0][1]


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board not found")


def find_board(world: World) -> Board | None:
    for _, board in world.get_component(Board):
        return board
    return None
