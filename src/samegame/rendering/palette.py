from typing import Optional, Tuple

Color = Tuple[int, int, int]

EMPTY_COLOR: Color = (229, 231, 235)
FALLBACK_COLOR: Color = (209, 213, 219)
TARGET_COLOR: Color = (234, 179, 8)
DARK_TEXT: Color = (31, 41, 55)
LIGHT_TEXT: Color = (255, 255, 255)

# Hue cycle repeated at deepening shades; index = log2(value).
_HUES = ('blue', 'green', 'yellow', 'orange', 'red', 'purple', 'pink', 'indigo')
_SHADES: dict[str, Tuple[Color, Color, Color, Color]] = {
    'blue':   ((191, 219, 254), (147, 197, 253), (96, 165, 250), (59, 130, 246)),
    'green':  ((187, 247, 208), (134, 239, 172), (74, 222, 128), (34, 197, 94)),
    'yellow': ((254, 240, 138), (253, 224, 71), (250, 204, 21), (234, 179, 8)),
    'orange': ((254, 215, 170), (253, 186, 116), (251, 146, 60), (249, 115, 22)),
    'red':    ((254, 202, 202), (252, 165, 165), (248, 113, 113), (239, 68, 68)),
    'purple': ((233, 213, 255), (216, 180, 254), (192, 132, 252), (168, 85, 247)),
    'pink':   ((251, 207, 232), (249, 168, 212), (244, 114, 182), (236, 72, 153)),
    'indigo': ((199, 210, 254), (165, 180, 252), (129, 140, 248), (99, 102, 241)),
}
TARGET_EXPONENT = 31


def tile_color(value: Optional[int]) -> Color:
    if value is None:
        return EMPTY_COLOR
    if value <= 0 or value & (value - 1):
        return FALLBACK_COLOR
    exponent = value.bit_length() - 1
    if exponent >= TARGET_EXPONENT:
        return TARGET_COLOR
    shade, hue = divmod(exponent, len(_HUES))
    return _SHADES[_HUES[hue]][shade]


def text_color(value: Optional[int]) -> Color:
    if value is None:
        return DARK_TEXT
    exponent = max(0, value.bit_length() - 1)
    if exponent >= TARGET_EXPONENT:
        return DARK_TEXT
    # The two deepest shades need light text.
    return LIGHT_TEXT if exponent // len(_HUES) >= 2 else DARK_TEXT
