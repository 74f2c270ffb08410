#!/usr/bin/env python3
"""
Chart Measure

A time-series chart with a distance measurement tool: pick two points to see
the elapsed days, the value delta and the relative change.

Usage:
    python main.py [file.csv]            # Open a date,value CSV file
    python main.py --demo                # Start with a generated sample series
    python main.py --percent file.csv    # Values are fractions, show as percent
"""

import sys
import pathlib
import argparse
import logging
import os

os.environ.setdefault('PYQTGRAPH_QT_LIB', 'PySide6')

# Configure pyqtgraph BEFORE creating any widget
import pyqtgraph as pg

pg.setConfigOptions(
    useOpenGL=False,
    antialias=True,   # Curves only; the measurement overlay sets its own hint
)

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt
from PySide6.QtGui import QPalette, QColor

from chartmeasure.core.formatting import ValueFormat
from chartmeasure.core.series_reader import sample_series
from chartmeasure.gui.main_window import MainWindow
from chartmeasure.utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)


def apply_light_theme(app: QApplication):
    """Fusion style with a light palette that matches the white plot."""
    app.setStyle("Fusion")

    palette = app.style().standardPalette()
    accent = QColor(42, 130, 218)
    palette.setColor(QPalette.Window, QColor(240, 240, 242))
    palette.setColor(QPalette.Base, QColor(255, 255, 255))
    palette.setColor(QPalette.Highlight, accent)
    palette.setColor(QPalette.HighlightedText, QColor(255, 255, 255))
    palette.setColor(QPalette.Link, accent)
    app.setPalette(palette)

    app.setStyleSheet("""
        QToolBar {
            border-bottom: 1px solid #d0d0d0;
            spacing: 6px;
        }

        QStatusBar {
            border-top: 1px solid #d0d0d0;
        }
    """)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Chart Measure")
    parser.add_argument("file", nargs="?", help="CSV file with date,value columns")
    parser.add_argument("--demo", action="store_true",
                        help="Load a generated sample series")
    parser.add_argument("--percent", action="store_true",
                        help="Values are fractions; format them as percentages")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (default: INFO)")
    parser.add_argument("--log-file", help="Also write the log to this file")
    args = parser.parse_args()

    setup_logging(args.log_level, args.log_file)

    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication([])  # Empty list to avoid re-parsing args
    app.setApplicationName("Chart Measure")
    app.setOrganizationName("ChartMeasure")

    apply_light_theme(app)

    value_format = ValueFormat(".2%") if args.percent else None
    window = MainWindow(value_format=value_format)
    window.show()

    if args.demo:
        window.add_series(sample_series())

    if args.file:
        file_path = pathlib.Path(args.file)
        if file_path.exists():
            window.load_file(file_path)
        else:
            logger.error("File not found: %s", file_path)

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
