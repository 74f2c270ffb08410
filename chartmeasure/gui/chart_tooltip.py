"""
Hover tooltip for the timeline chart.

Shows a vertical crosshair and the date and values under the mouse.
"""

from datetime import datetime
from typing import Callable, List

from PySide6.QtCore import QObject, QPointF, Qt
import pyqtgraph as pg

from ..core.formatting import ValueFormat
from ..core.series_reader import TimeSeries


class ChartToolTip(QObject):
    """Crosshair tooltip that can be switched off while other tools run."""

    def __init__(self, plot_widget: pg.PlotWidget, series_provider: Callable[[], List[TimeSeries]],
                 value_format: ValueFormat = None):
        super().__init__(plot_widget)
        self._plot_widget = plot_widget
        self._series_provider = series_provider
        self.default_value_format = value_format or ValueFormat()
        self._active = True

        self._crosshair = pg.InfiniteLine(
            angle=90, movable=False,
            pen=pg.mkPen('#888888', width=1, style=Qt.DashLine)
        )
        self._label = pg.TextItem(text="", color='#333333', fill=pg.mkBrush(255, 255, 255, 220),
                                  anchor=(0, 1))
        for item in (self._crosshair, self._label):
            item.setVisible(False)
            item.setZValue(500)
            plot_widget.addItem(item, ignoreBounds=True)

        plot_widget.scene().sigMouseMoved.connect(self._on_mouse_moved)

    def is_active(self) -> bool:
        return self._active

    def set_active(self, active: bool):
        """Enable or suppress the tooltip."""
        self._active = active
        if not active:
            self.hide()

    def hide(self):
        self._crosshair.setVisible(False)
        self._label.setVisible(False)

    def text_at(self, x: float) -> str:
        """Tooltip text for view x coordinate ``x`` (epoch seconds)."""
        try:
            lines = [datetime.fromtimestamp(x).strftime("%Y-%m-%d")]
        except (OverflowError, OSError, ValueError):
            return ""
        for series in self._series_provider():
            sample = series.value_at(x)
            if sample is not None:
                lines.append(f"{series.name}: {self.default_value_format.format(sample[1])}")
        return "\n".join(lines)

    def _on_mouse_moved(self, pos: QPointF):
        """Follow the mouse with crosshair and text."""
        if not self._active:
            return

        view_box = self._plot_widget.getPlotItem().getViewBox()
        if not view_box.sceneBoundingRect().contains(pos):
            self.hide()
            return

        view_pos = view_box.mapSceneToView(pos)
        text = self.text_at(view_pos.x())
        if not text:
            self.hide()
            return

        self._crosshair.setPos(view_pos.x())
        self._label.setText(text)
        self._label.setPos(view_pos)
        self._crosshair.setVisible(True)
        self._label.setVisible(True)
