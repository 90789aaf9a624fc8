from enum import Enum, auto


class PlacementPolicy(Enum):
    """Where the doubled tile lands after a merge."""
    REGION_BOTTOM_LEFT = auto()   # bottom-most, then left-most region member, written before gravity
    BOARD_BOTTOM_LEFT = auto()    # lowest empty cell of the left-most column with room, after gravity
    REMOVED_COLUMN = auto()       # lowest empty cell of the left-most removed column, after gravity
