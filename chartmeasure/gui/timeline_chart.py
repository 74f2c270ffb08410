"""
Timeline chart widget.

A pyqtgraph plot with a date axis that hosts the measurement tool and the
hover tooltip.
"""

import logging
from typing import List, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor
from PySide6.QtWidgets import QMenu, QVBoxLayout, QWidget
import pyqtgraph as pg

from ..core.formatting import ValueFormat
from ..core.series_reader import TimeSeries
from ..core.spot import PlotArea
from .chart_tooltip import ChartToolTip
from .measurement_tool import MeasurementTool
from .qt_adapters import ViewBoxAxis

logger = logging.getLogger(__name__)

SERIES_COLORS = ['#2a82da', '#e4572e', '#17bebb', '#76b041', '#ffc914', '#8e5572']

# DateAxisItem works in epoch seconds, the overlay in epoch millis
MILLIS_PER_SECOND = 1000.0


class TimelineChart(QWidget):
    """Time-series chart with a measurement tool and a hover tooltip."""

    def __init__(self, parent=None, value_format: Optional[ValueFormat] = None):
        super().__init__(parent)

        self._series: List[TimeSeries] = []
        # Parallel to _series; names are not unique
        self._curves: List[pg.PlotDataItem] = []

        self._setup_ui()

        self._x_axis = ViewBoxAxis(self.view_box, ViewBoxAxis.HORIZONTAL, scale=MILLIS_PER_SECOND)
        self._y_axis = ViewBoxAxis(self.view_box, ViewBoxAxis.VERTICAL)

        self._tool_tip = ChartToolTip(self._plot_widget, lambda: list(self._series), value_format)
        self._measurement_tool = MeasurementTool(self)

        self._plot_widget.scene().sigMouseClicked.connect(self._on_mouse_clicked)

    def _setup_ui(self):
        """Setup the plot widget."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self._plot_widget = pg.PlotWidget(axisItems={'bottom': pg.DateAxisItem(orientation='bottom')})
        self._plot_widget.setBackground('w')
        self._plot_widget.showGrid(x=True, y=True, alpha=0.3)
        self._plot_widget.setMouseEnabled(x=True, y=True)
        # Our own context menu replaces the ViewBox one
        self._plot_widget.setMenuEnabled(False)

        for axis_name in ('left', 'bottom'):
            axis = self._plot_widget.getPlotItem().getAxis(axis_name)
            axis.setPen(pg.mkPen('#888888'))
            axis.setTextPen(pg.mkPen('#333333'))

        self._legend = self._plot_widget.addLegend(offset=(10, 10))

        layout.addWidget(self._plot_widget)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def plot_widget(self) -> pg.PlotWidget:
        return self._plot_widget

    @property
    def view_box(self) -> pg.ViewBox:
        return self._plot_widget.getPlotItem().getViewBox()

    @property
    def tool_tip(self) -> ChartToolTip:
        return self._tool_tip

    @property
    def measurement_tool(self) -> MeasurementTool:
        return self._measurement_tool

    @property
    def series(self) -> List[TimeSeries]:
        return list(self._series)

    @property
    def x_axis_mapping(self) -> ViewBoxAxis:
        return self._x_axis

    @property
    def y_axis_mapping(self) -> ViewBoxAxis:
        return self._y_axis

    # ------------------------------------------------------------------
    # Host contract of the measurement overlay
    # ------------------------------------------------------------------

    @property
    def value_format(self) -> ValueFormat:
        return self._tool_tip.default_value_format

    @value_format.setter
    def value_format(self, value_format: ValueFormat):
        self._tool_tip.default_value_format = value_format
        self.request_redraw()

    def set_tooltip_active(self, active: bool):
        self._tool_tip.set_active(active)

    def request_redraw(self):
        self._plot_widget.scene().update()

    def plot_area(self) -> PlotArea:
        rect = self.view_box.sceneBoundingRect()
        return PlotArea(rect.x(), rect.y(), rect.width(), rect.height())

    # ------------------------------------------------------------------
    # Series
    # ------------------------------------------------------------------

    def add_series(self, series: TimeSeries, color: Optional[str] = None) -> pg.PlotDataItem:
        """Plot a time series; returns its curve."""
        if color is None:
            color = SERIES_COLORS[len(self._series) % len(SERIES_COLORS)]

        curve = pg.PlotDataItem(
            series.timestamps, series.values,
            pen=pg.mkPen(QColor(color), width=2),
            name=series.name,
        )
        self._plot_widget.addItem(curve)
        self._series.append(series)
        self._curves.append(curve)
        logger.debug("Added series %s with %d samples", series.name, len(series))
        return curve

    def clear_series(self):
        """Remove all series from the chart."""
        for curve in self._curves:
            self._plot_widget.removeItem(curve)
        self._curves.clear()
        self._series.clear()
        self._legend.clear()

    def reset_zoom(self):
        self._plot_widget.getPlotItem().enableAutoRange()
        self.view_box.autoRange()

    # ------------------------------------------------------------------
    # Context menu
    # ------------------------------------------------------------------

    def build_context_menu(self) -> QMenu:
        """Build the right-click menu; rebuilt on every request."""
        menu = QMenu(self)
        reset_action = menu.addAction("Reset Zoom")
        reset_action.triggered.connect(self.reset_zoom)
        menu.addSeparator()
        self._measurement_tool.add_context_menu(menu)
        return menu

    def _on_mouse_clicked(self, event):
        """Open the context menu on right click inside the plot."""
        if event.button() != Qt.RightButton:
            return
        if not self.view_box.sceneBoundingRect().contains(event.scenePos()):
            return
        menu = self.build_context_menu()
        menu.setAttribute(Qt.WA_DeleteOnClose)
        menu.popup(event.screenPos().toPoint())
        event.accept()
