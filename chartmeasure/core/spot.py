"""
Value objects shared by the measurement overlay.
"""

from dataclasses import dataclass
from datetime import date
from typing import NamedTuple

# Pointer buttons, numbered the way most toolkits report them
NO_BUTTON = 0
PRIMARY_BUTTON = 1
MIDDLE_BUTTON = 2
SECONDARY_BUTTON = 3


class Point(NamedTuple):
    """Position in pixel space."""
    x: float
    y: float


class PlotArea(NamedTuple):
    """Pixel rectangle of the plot area."""
    x: float
    y: float
    width: float
    height: float

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2


@dataclass(frozen=True)
class PointerEvent:
    """A pointer event as delivered by the host, in pixel coordinates."""
    x: float
    y: float
    time: int  # ms, event clock of the host
    button: int = NO_BUTTON


@dataclass(frozen=True)
class Spot:
    """
    A captured measurement point.

    Only the data coordinates are kept. The pixel position is derived on
    demand so the overlay follows the chart when the axes are rescaled.
    """
    time: int
    date: date
    x_coordinate: float  # epoch millis
    value: float

    def to_point(self, mapper) -> Point:
        """Current pixel position of this spot."""
        return mapper.to_point(self)
