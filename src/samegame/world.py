import random

from esper import World

from samegame.components.game_state import GameState
from samegame.components.placement_policy import PlacementPolicy
from samegame.constants import TARGET_VALUE


def create_world(
    *,
    rng: random.Random | None = None,
    policy: PlacementPolicy = PlacementPolicy.REGION_BOTTOM_LEFT,
    target: int = TARGET_VALUE,
) -> World:
    world = World()
    # Shared random source for board generation and refill; seed it in tests.
    setattr(world, "random", rng or random.Random())

    # Register the global game state resource.
    state_entity = world.create_entity()
    world.add_component(state_entity, GameState(target=target, policy=policy))
    return world
