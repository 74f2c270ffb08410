"""
Qt implementations of the overlay's axis and drawing collaborators.
"""

from typing import Tuple

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QColor, QPainter, QPen, QBrush
import pyqtgraph as pg

from ..core.colors import Color


def to_qcolor(color: Color) -> QColor:
    return QColor(color.r, color.g, color.b)


def from_qcolor(color: QColor) -> Color:
    return Color(color.red(), color.green(), color.blue())


class ViewBoxAxis:
    """
    One axis of a pyqtgraph ViewBox seen as pixel <-> data mapping.

    Pixels are scene coordinates. ``scale`` converts view units into the
    data units reported to the overlay (1000 turns epoch seconds into
    epoch millis).
    """

    HORIZONTAL = 'horizontal'
    VERTICAL = 'vertical'

    def __init__(self, view_box: pg.ViewBox, orientation: str, scale: float = 1.0):
        if orientation not in (self.HORIZONTAL, self.VERTICAL):
            raise ValueError(f"Unknown orientation: {orientation}")
        self._view_box = view_box
        self._orientation = orientation
        self._scale = scale

    def data_coordinate(self, pixel: float) -> float:
        if self._orientation == self.HORIZONTAL:
            return self._view_box.mapSceneToView(QPointF(pixel, 0)).x() * self._scale
        return self._view_box.mapSceneToView(QPointF(0, pixel)).y() * self._scale

    def pixel_coordinate(self, value: float) -> float:
        value = value / self._scale
        if self._orientation == self.HORIZONTAL:
            return self._view_box.mapViewToScene(QPointF(value, 0)).x()
        return self._view_box.mapViewToScene(QPointF(0, value)).y()


class QPainterSurface:
    """Drawing surface over an active QPainter."""

    def __init__(self, painter: QPainter):
        self._painter = painter
        self._pen = QPen(Qt.black)
        self._pen.setStyle(Qt.SolidLine)
        self._brush = QBrush(Qt.black)

    def get_antialias(self) -> bool:
        return self._painter.testRenderHint(QPainter.Antialiasing)

    def set_antialias(self, enabled: bool):
        self._painter.setRenderHint(QPainter.Antialiasing, enabled)

    def set_line_width(self, width: int):
        self._pen.setWidth(width)

    def set_foreground(self, color: Color):
        self._pen.setColor(to_qcolor(color))

    def set_background(self, color: Color):
        self._brush = QBrush(to_qcolor(color))

    def draw_line(self, x1, y1, x2, y2):
        self._painter.setPen(self._pen)
        self._painter.drawLine(QPointF(x1, y1), QPointF(x2, y2))

    def fill_oval(self, x, y, width, height):
        self._painter.setPen(Qt.NoPen)
        self._painter.setBrush(self._brush)
        self._painter.drawEllipse(QRectF(x, y, width, height))

    def fill_round_rectangle(self, x, y, width, height, arc_width, arc_height):
        self._painter.setPen(Qt.NoPen)
        self._painter.setBrush(self._brush)
        # Qt takes corner radii, arcs are diameters
        self._painter.drawRoundedRect(QRectF(x, y, width, height), arc_width / 2, arc_height / 2)

    def draw_text(self, text: str, x, y):
        width, height = self.text_extent(text)
        self._painter.setPen(self._pen)
        self._painter.drawText(QRectF(x, y, width, height), Qt.AlignLeft | Qt.AlignTop, text)

    def text_extent(self, text: str) -> Tuple[float, float]:
        fm = self._painter.fontMetrics()
        return float(fm.horizontalAdvance(text)), float(fm.height())
