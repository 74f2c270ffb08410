"""
Pixel <-> data coordinate mapping for the measurement overlay.

The mapper never caches positions: axes are queried again on every call so
that zooming or panning between two events keeps the overlay consistent.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol

from .spot import Point, PointerEvent, Spot

logger = logging.getLogger(__name__)


class AxisMapping(Protocol):
    """One chart axis, mapping pixels to data coordinates and back."""

    def data_coordinate(self, pixel: float) -> float:
        ...

    def pixel_coordinate(self, value: float) -> float:
        ...


@dataclass
class LinearAxis:
    """
    Linear axis between a pixel range and a data range.

    A vertical axis is expressed by passing the bottom pixel as
    ``pixel_low`` (pixel coordinates grow downwards, values upwards).
    """
    pixel_low: float
    pixel_high: float
    data_low: float
    data_high: float

    def __post_init__(self):
        if self.pixel_high == self.pixel_low:
            raise ValueError("Axis pixel range must not be empty")
        if self.data_high == self.data_low:
            raise ValueError("Axis data range must not be empty")

    @property
    def _slope(self) -> float:
        return (self.data_high - self.data_low) / (self.pixel_high - self.pixel_low)

    def data_coordinate(self, pixel: float) -> float:
        return self.data_low + (pixel - self.pixel_low) * self._slope

    def pixel_coordinate(self, value: float) -> float:
        return self.pixel_low + (value - self.data_low) / self._slope


def calendar_date(epoch_millis: float) -> date:
    """Calendar date of an epoch-millisecond timestamp in the local time zone."""
    try:
        return datetime.fromtimestamp(epoch_millis / 1000.0).date()
    except (OverflowError, OSError, ValueError):
        # Far outside the platform's range, e.g. after zooming out absurdly
        logger.debug("Clamping out-of-range x coordinate %r", epoch_millis)
        return date.max if epoch_millis > 0 else date.min


class CoordinateMapper:
    """Converts pointer events into spots and spots back into pixel points."""

    def __init__(self, x_axis: AxisMapping, y_axis: AxisMapping):
        self.x_axis = x_axis
        self.y_axis = y_axis

    def to_spot(self, event: PointerEvent) -> Spot:
        """Capture the data coordinates under the pointer."""
        x_coordinate = self.x_axis.data_coordinate(event.x)
        value = self.y_axis.data_coordinate(event.y)
        return Spot(
            time=event.time,
            date=calendar_date(x_coordinate),
            x_coordinate=x_coordinate,
            value=value,
        )

    def to_point(self, spot: Spot) -> Point:
        """Pixel position of a spot under the current axis ranges."""
        return Point(
            self.x_axis.pixel_coordinate(spot.x_coordinate),
            self.y_axis.pixel_coordinate(spot.value),
        )
