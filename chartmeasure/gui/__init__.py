"""
Qt front end: timeline chart, measurement tool binding and main window.
"""

from .measurement_tool import MeasurementTool
from .timeline_chart import TimelineChart
from .main_window import MainWindow

__all__ = [
    'MeasurementTool',
    'TimelineChart',
    'MainWindow'
]
