"""
Overlay renderer: line, endpoint markers and the floating label.

All drawing goes through a ``DrawingSurface`` so that the same code paints on
a QPainter or any other 2D backend.
"""

from contextlib import contextmanager
from typing import NamedTuple, Protocol, Tuple

from .colors import Color, brighter, text_color
from .spot import PlotArea, Point

# Distance between the end point and the label box
OFFSET = 10
# Inner padding of the label box, also used as corner arc
PADDING = 5
# Diameter of the endpoint markers
MARKER_SIZE = 5


class DrawingSurface(Protocol):
    """Minimal 2D drawing API used by the renderer."""

    def get_antialias(self) -> bool: ...

    def set_antialias(self, enabled: bool) -> None: ...

    def set_line_width(self, width: int) -> None: ...

    def set_foreground(self, color: Color) -> None: ...

    def set_background(self, color: Color) -> None: ...

    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None: ...

    def fill_oval(self, x: float, y: float, width: float, height: float) -> None: ...

    def fill_round_rectangle(self, x: float, y: float, width: float, height: float,
                             arc_width: float, arc_height: float) -> None: ...

    def draw_text(self, text: str, x: float, y: float) -> None: ...

    def text_extent(self, text: str) -> Tuple[float, float]: ...


class LabelLayout(NamedTuple):
    """Where the label box and its text go."""
    box_x: float
    box_y: float
    box_width: float
    box_height: float
    text_x: float
    text_y: float


@contextmanager
def antialiasing(surface: DrawingSurface, enabled: bool = True):
    """Switch antialiasing for the duration of the block, then restore it."""
    previous = surface.get_antialias()
    surface.set_antialias(enabled)
    try:
        yield surface
    finally:
        surface.set_antialias(previous)


def layout_label(anchor: Point, extent: Tuple[float, float], plot_area: PlotArea) -> LabelLayout:
    """
    Place the label next to ``anchor``.

    The label goes to the right of the point when the point is in the left
    half of the plot area, to the left otherwise.
    """
    text_width, text_height = extent
    box_width = text_width + 2 * PADDING
    box_height = text_height + 2 * PADDING
    box_y = anchor.y - text_height / 2 - PADDING

    if anchor.x < plot_area.center_x:
        box_x = anchor.x + OFFSET
    else:
        box_x = anchor.x - OFFSET - box_width

    return LabelLayout(box_x, box_y, box_width, box_height,
                       box_x + PADDING, box_y + PADDING)


class OverlayRenderer:
    """Draws one measurement between two pixel points."""

    def paint(self, surface: DrawingSurface, p1: Point, p2: Point, text: str,
              plot_area: PlotArea, color: Color) -> LabelLayout:
        with antialiasing(surface):
            surface.set_line_width(1)
            surface.set_foreground(color)
            surface.set_background(color)
            surface.draw_line(p1.x, p1.y, p2.x, p2.y)

            radius = MARKER_SIZE // 2
            surface.fill_oval(p1.x - radius, p1.y - radius, MARKER_SIZE, MARKER_SIZE)
            surface.fill_oval(p2.x - radius, p2.y - radius, MARKER_SIZE, MARKER_SIZE)

            layout = layout_label(p2, surface.text_extent(text), plot_area)

            background = brighter(color)
            surface.set_background(background)
            surface.set_foreground(text_color(background))
            surface.fill_round_rectangle(layout.box_x, layout.box_y,
                                         layout.box_width, layout.box_height,
                                         PADDING, PADDING)
            surface.draw_text(text, layout.text_x, layout.text_y)
        return layout
