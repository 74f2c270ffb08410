"""
Painted icons for the measurement tool action.
"""

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QIcon, QPainter, QPixmap, QPen

OFF_COLOR = QColor(120, 120, 120)
ON_COLOR = QColor(42, 130, 218)


def create_measurement_icon(size: int = 24, color: QColor = None, active: bool = False) -> QIcon:
    """Create a ruler-line icon: a diagonal with endpoint dots and a day tick."""
    if color is None:
        color = ON_COLOR if active else OFF_COLOR

    pixmap = QPixmap(size, size)
    pixmap.fill(Qt.transparent)

    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.Antialiasing)

    # Highlight frame when the tool is on
    if active:
        frame = QColor(color)
        frame.setAlpha(60)
        painter.setPen(Qt.NoPen)
        painter.setBrush(frame)
        painter.drawRoundedRect(0, 0, size, size, 4, 4)

    pen = QPen(color)
    pen.setWidth(2)
    painter.setPen(pen)

    margin = 4
    painter.drawLine(margin, size - margin, size - margin, margin)

    # Horizontal tick under the line (the elapsed time)
    pen.setWidth(1)
    painter.setPen(pen)
    painter.drawLine(margin, size - margin, size - margin, size - margin)

    painter.setBrush(color)
    circle_radius = 3
    painter.drawEllipse(margin - circle_radius, size - margin - circle_radius,
                        circle_radius * 2, circle_radius * 2)
    painter.drawEllipse(size - margin - circle_radius, margin - circle_radius,
                        circle_radius * 2, circle_radius * 2)

    painter.end()
    return QIcon(pixmap)
