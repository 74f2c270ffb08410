"""
Main window: a timeline chart with a toolbar, file loading and settings.
"""

import logging
import os
import pathlib
from typing import Optional

from PySide6.QtCore import QSettings
from PySide6.QtGui import QAction, QActionGroup, QColor
from PySide6.QtWidgets import (
    QColorDialog, QFileDialog, QLabel, QMainWindow, QMessageBox, QToolBar
)

from ..core.colors import BLACK
from ..core.formatting import ValueFormat
from ..core.series_reader import SeriesReadError, TimeSeries, read_time_series
from .timeline_chart import TimelineChart

logger = logging.getLogger(__name__)

VALUE_FORMATS = [
    ("Number", ",.2f"),
    ("Percent", ".2%"),
]


class MainWindow(QMainWindow):
    """Window hosting one TimelineChart."""

    def __init__(self, parent=None, settings: Optional[QSettings] = None,
                 value_format: Optional[ValueFormat] = None):
        super().__init__(parent)
        self.setWindowTitle("Chart Measure")
        self.resize(1100, 700)

        self._settings = settings if settings is not None else QSettings("ChartMeasure", "MainWindow")

        if value_format is None:
            value_format = self._stored_value_format()
        self._chart = TimelineChart(self, value_format=value_format)
        self._chart.measurement_tool.set_color(
            QColor(str(self._settings.value("measurement/color", BLACK.to_hex())))
        )
        self.setCentralWidget(self._chart)

        self._setup_menubar()
        self._setup_toolbar()
        self._setup_statusbar()

        self._chart.measurement_tool.active_changed.connect(self._on_measurement_toggled)

    @property
    def chart(self) -> TimelineChart:
        return self._chart

    @property
    def measure_action(self) -> QAction:
        return self._measure_action

    def _stored_value_format(self) -> ValueFormat:
        spec = str(self._settings.value("chart/value_format", VALUE_FORMATS[0][1]))
        try:
            return ValueFormat(spec)
        except ValueError:
            logger.warning("Ignoring invalid stored value format %r", spec)
            return ValueFormat(VALUE_FORMATS[0][1])

    def _setup_menubar(self):
        """Setup the menu bar."""
        menubar = self.menuBar()

        file_menu = menubar.addMenu("File")

        self._open_action = QAction("Open CSV...", self)
        self._open_action.setShortcut("Ctrl+O")
        self._open_action.triggered.connect(self._open_file)
        file_menu.addAction(self._open_action)

        self._clear_action = QAction("Clear Chart", self)
        self._clear_action.triggered.connect(self._chart.clear_series)
        file_menu.addAction(self._clear_action)

        file_menu.addSeparator()

        self._close_action = QAction("Close", self)
        self._close_action.setShortcut("Ctrl+W")
        self._close_action.triggered.connect(self.close)
        file_menu.addAction(self._close_action)

        view_menu = menubar.addMenu("View")

        self._reset_zoom_action = QAction("Reset Zoom", self)
        self._reset_zoom_action.setShortcut("Ctrl+0")
        self._reset_zoom_action.triggered.connect(self._chart.reset_zoom)
        view_menu.addAction(self._reset_zoom_action)

        format_menu = view_menu.addMenu("Value Format")
        self._format_group = QActionGroup(self)
        for label, spec in VALUE_FORMATS:
            action = QAction(label, self, checkable=True)
            action.setData(spec)
            action.setChecked(spec == self._chart.value_format.format_spec)
            self._format_group.addAction(action)
            format_menu.addAction(action)
        self._format_group.triggered.connect(self._on_format_selected)

        view_menu.addSeparator()

        self._color_action = QAction("Measurement Color...", self)
        self._color_action.triggered.connect(self._choose_color)
        view_menu.addAction(self._color_action)

    def _setup_toolbar(self):
        """Setup the toolbar."""
        self._toolbar = QToolBar("Main Toolbar")
        self._toolbar.setMovable(False)
        self.addToolBar(self._toolbar)

        self._toolbar.addAction(self._open_action)
        self._toolbar.addSeparator()
        self._measure_action = self._chart.measurement_tool.add_buttons(self._toolbar)

    def _setup_statusbar(self):
        """Setup the status bar."""
        self._status_label = QLabel("Ready")
        self.statusBar().addWidget(self._status_label)

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    def add_series(self, series: TimeSeries):
        self._chart.add_series(series)
        self._chart.reset_zoom()
        self._status_label.setText(f"{series.name}: {len(series)} samples")

    def load_file(self, file_path) -> bool:
        """Load a CSV series into the chart. Returns False on failure."""
        file_path = pathlib.Path(file_path)
        try:
            series = read_time_series(file_path)
        except SeriesReadError as e:
            logger.error("Failed to load %s: %s", file_path, e)
            QMessageBox.warning(self, "Error", f"Failed to load file:\n{e}")
            return False

        self._settings.setValue("files/last_directory", str(file_path.parent))
        self.add_series(series)
        return True

    def _open_file(self):
        start_dir = str(self._settings.value("files/last_directory", os.path.expanduser("~")))
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Open Time Series", start_dir, "CSV Files (*.csv);;All Files (*)"
        )
        if file_path:
            self.load_file(file_path)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def set_value_format(self, spec: str):
        self._chart.value_format = ValueFormat(spec)
        self._settings.setValue("chart/value_format", spec)
        for action in self._format_group.actions():
            action.setChecked(action.data() == spec)

    def _on_format_selected(self, action: QAction):
        self.set_value_format(action.data())

    def set_measurement_color(self, color: QColor):
        self._chart.measurement_tool.set_color(color)
        self._settings.setValue("measurement/color", color.name())
        self._chart.request_redraw()

    def _choose_color(self):
        color = QColorDialog.getColor(self._chart.measurement_tool.color(), self, "Measurement Color")
        if color.isValid():
            self.set_measurement_color(color)

    def _on_measurement_toggled(self, active: bool):
        if active:
            self._status_label.setText("Measure: click and drag, or click twice")
        else:
            self._status_label.setText("Ready")
