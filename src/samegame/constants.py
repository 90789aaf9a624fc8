# ============================================================================
# BOARD & TILES
# ============================================================================
BOARD_SIZES = (8, 16, 32, 64, 128)
DEFAULT_BOARD_SIZE = 8
BASE_VALUES = (1, 2, 4)          # fresh and refilled tiles are sampled uniformly from these
TARGET_VALUE = 2147483648        # 2**31, reaching it wins the game
MIN_REGION_SIZE = 2              # a lone tile cannot be merged


# ============================================================================
# AUTOMATION
# ============================================================================
# Delays are in seconds; the tick loop feeds dt in seconds as well.
AUTOPLAY_DELAY_MIN = 0.1
AUTOPLAY_DELAY_MAX = 5.0
AUTOPLAY_DELAY_DEFAULT = 0.5
AUTOPLAY_DELAY_STEP = 0.1


# ============================================================================
# WINDOW & LAYOUT
# ============================================================================
WINDOW_WIDTH = 800
WINDOW_HEIGHT = 800
WINDOW_TITLE = "Same Game - 2147483648"
BOTTOM_MARGIN = 20
# Space reserved above the board for the status lines.
HEADER_HEIGHT = 70
# Board maximum footprint relative to window (percentage of window width/height).
BOARD_MAX_WIDTH_PCT = 0.95
BOARD_MAX_HEIGHT_PCT = 0.95
# Tiles never shrink below this many pixels; large boards simply overflow.
MIN_TILE_SIZE = 4
TILE_PADDING = 2
