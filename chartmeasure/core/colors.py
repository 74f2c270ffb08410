"""
RGB colour helpers used by the overlay label.
"""

import colorsys
from typing import NamedTuple


class Color(NamedTuple):
    r: int
    g: int
    b: int

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        value = value.lstrip('#')
        if len(value) != 6:
            raise ValueError(f"Expected #rrggbb, got {value!r}")
        return cls(int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)


def brighter(color: Color, amount: float = 0.75) -> Color:
    """Move the lightness of ``color`` towards white by ``amount`` (0..1)."""
    h, l, s = colorsys.rgb_to_hls(color.r / 255, color.g / 255, color.b / 255)
    l = l + (1.0 - l) * amount
    r, g, b = colorsys.hls_to_rgb(h, l, s)
    return Color(round(r * 255), round(g * 255), round(b * 255))


def luminance(color: Color) -> float:
    """Perceived brightness in 0..1 (ITU-R BT.601 weights)."""
    return (0.299 * color.r + 0.587 * color.g + 0.114 * color.b) / 255


def text_color(background: Color) -> Color:
    """Black or white, whichever reads better on ``background``."""
    return BLACK if luminance(background) > 0.5 else WHITE
