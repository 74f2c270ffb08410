"""
Toolkit-independent measurement overlay.
"""

from .capture import CLICK_DRAG_THRESHOLD_MS, CaptureState, CaptureStateMachine
from .coordinates import AxisMapping, CoordinateMapper, LinearAxis, calendar_date
from .formatting import PERCENT_WITH_SIGN, ValueFormat, measurement_label, relative_change
from .mode import ChartHost, ModeController
from .overlay import MeasurementOverlay
from .renderer import DrawingSurface, OverlayRenderer
from .spot import PRIMARY_BUTTON, PlotArea, Point, PointerEvent, Spot

__all__ = [
    'CLICK_DRAG_THRESHOLD_MS',
    'CaptureState',
    'CaptureStateMachine',
    'AxisMapping',
    'CoordinateMapper',
    'LinearAxis',
    'calendar_date',
    'PERCENT_WITH_SIGN',
    'ValueFormat',
    'measurement_label',
    'relative_change',
    'ChartHost',
    'ModeController',
    'MeasurementOverlay',
    'DrawingSurface',
    'OverlayRenderer',
    'PRIMARY_BUTTON',
    'PlotArea',
    'Point',
    'PointerEvent',
    'Spot',
]
