"""
Capture state machine for the two measurement points.

Two interaction styles are supported for placing the far point:

* drag: press, drag, release. A release more than
  ``CLICK_DRAG_THRESHOLD_MS`` after the first press finishes the measurement,
  and the next press starts a new one.
* click-click: a quick click places the start point, the far point follows
  the pointer, and the next click relocates it while keeping the start.
"""

import logging
from enum import Enum
from typing import Optional

from .coordinates import CoordinateMapper
from .spot import PointerEvent, Spot

logger = logging.getLogger(__name__)

# Releases later than this after the start press are treated as drags
CLICK_DRAG_THRESHOLD_MS = 300


class CaptureState(Enum):
    IDLE = "idle"
    ARMED = "armed"


class CaptureStateMachine:
    """
    Tracks the start and end spots of the current measurement.

    Each transition returns True when the overlay needs to be repainted.
    ``drag_engaged`` is the single flag that decides whether the end point
    follows the pointer and whether the next press relocates it.
    """

    def __init__(self, mapper: CoordinateMapper):
        self._mapper = mapper
        self.start: Optional[Spot] = None
        self.end: Optional[Spot] = None
        self.drag_engaged = False

    @property
    def state(self) -> CaptureState:
        return CaptureState.IDLE if self.start is None else CaptureState.ARMED

    def pointer_down(self, event: PointerEvent) -> bool:
        spot = self._mapper.to_spot(event)
        if self.drag_engaged:
            # click-click mode: move the far end, keep the anchor
            self.end = spot
        else:
            self.start = self.end = spot
            logger.debug("Measurement started at %s (%.4f)", spot.date, spot.value)
        self.drag_engaged = True
        return True

    def pointer_move(self, event: PointerEvent) -> bool:
        if not self.drag_engaged:
            return False
        self.end = self._mapper.to_spot(event)
        return True

    def pointer_up(self, event: PointerEvent) -> bool:
        if self.start is None:
            return False

        if event.time - self.start.time > CLICK_DRAG_THRESHOLD_MS:
            self.drag_engaged = False

        self.end = self._mapper.to_spot(event)
        logger.debug("Measurement end at %s (%.4f), following=%s",
                     self.end.date, self.end.value, self.drag_engaged)
        return True

    def reset(self):
        """Forget both points."""
        self.start = self.end = None
        self.drag_engaged = False
