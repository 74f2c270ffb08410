"""
Measurement overlay: mode controller, capture state machine, coordinate
mapper and renderer behind one object that a host feeds with pointer and
paint callbacks.
"""

from typing import Callable, Optional

from .capture import CaptureStateMachine
from .colors import BLACK, Color
from .coordinates import CoordinateMapper
from .formatting import measurement_label
from .mode import ChartHost, ModeController
from .renderer import DrawingSurface, LabelLayout, OverlayRenderer
from .spot import PRIMARY_BUTTON, PlotArea, PointerEvent, Spot


class MeasurementOverlay:
    """Host-independent measurement tool."""

    def __init__(self, host: ChartHost, mapper: CoordinateMapper, color: Color = BLACK):
        self._host = host
        self.mapper = mapper
        self.color = color
        self.capture = CaptureStateMachine(mapper)
        self.mode = ModeController(host, on_deactivate=self.capture.reset)
        self.renderer = OverlayRenderer()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def active(self) -> bool:
        return self.mode.active

    @property
    def show_relative_change(self) -> bool:
        return self.mode.show_relative_change

    @property
    def start(self) -> Optional[Spot]:
        return self.capture.start

    @property
    def end(self) -> Optional[Spot]:
        return self.capture.end

    @property
    def drag_engaged(self) -> bool:
        return self.capture.drag_engaged

    def toggle(self) -> bool:
        return self.mode.toggle()

    def add_mode_listener(self, listener: Callable[[bool], None]):
        self.mode.add_listener(listener)

    # ------------------------------------------------------------------
    # Pointer callbacks. Each returns True when the event was used.
    # ------------------------------------------------------------------

    def on_pointer_down(self, event: PointerEvent) -> bool:
        if not self.active or event.button != PRIMARY_BUTTON:
            return False
        return self._redraw_if(self.capture.pointer_down(event))

    def on_pointer_move(self, event: PointerEvent) -> bool:
        if not self.active:
            return False
        return self._redraw_if(self.capture.pointer_move(event))

    def on_pointer_up(self, event: PointerEvent) -> bool:
        if not self.active or event.button != PRIMARY_BUTTON:
            return False
        return self._redraw_if(self.capture.pointer_up(event))

    def _redraw_if(self, changed: bool) -> bool:
        if changed:
            self._host.request_redraw()
        return changed

    # ------------------------------------------------------------------
    # Paint callback
    # ------------------------------------------------------------------

    def label_text(self) -> str:
        return measurement_label(self.start, self.end, self._host.value_format,
                                 self.show_relative_change)

    def paint(self, surface: DrawingSurface, plot_area: PlotArea) -> Optional[LabelLayout]:
        """Draw the current measurement, if any."""
        if self.start is None or self.end is None:
            return None

        p1 = self.start.to_point(self.mapper)
        p2 = self.end.to_point(self.mapper)
        return self.renderer.paint(surface, p1, p2, self.label_text(), plot_area, self.color)
