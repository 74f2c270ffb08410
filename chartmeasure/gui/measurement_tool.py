"""
Measurement tool for the timeline chart.

Binds the toolkit-independent MeasurementOverlay to Qt: mouse events of the
plot viewport are filtered into pointer events, painting happens in a
graphics item on top of the scene, and a toggle action is offered for
toolbars and context menus.
"""

import logging
from typing import List

from PySide6.QtCore import QEvent, QObject, QPointF, QRectF, Qt, Signal
from PySide6.QtGui import QAction, QColor
from PySide6.QtWidgets import QMenu, QToolBar
import pyqtgraph as pg

from ..core.colors import BLACK
from ..core.coordinates import CoordinateMapper
from ..core.overlay import MeasurementOverlay
from ..core.spot import (
    MIDDLE_BUTTON, NO_BUTTON, PRIMARY_BUTTON, SECONDARY_BUTTON, PointerEvent
)
from .measurement_icons import create_measurement_icon
from .qt_adapters import QPainterSurface, from_qcolor, to_qcolor

logger = logging.getLogger(__name__)

LABEL_MEASURE_DISTANCE = "Measure Distance"

_BUTTONS = {
    Qt.LeftButton: PRIMARY_BUTTON,
    Qt.MiddleButton: MIDDLE_BUTTON,
    Qt.RightButton: SECONDARY_BUTTON,
}


class MeasurementOverlayItem(pg.GraphicsObject):
    """
    Scene-level item the overlay paints into.

    Lives directly in the scene (no parent), so item coordinates are the
    pixel coordinates the overlay works with. The bounds are the visible part
    of the scene; they must not depend on the scene's own item bounds, which
    include this item.
    """

    def __init__(self, tool: "MeasurementTool", view: pg.GraphicsView):
        super().__init__()
        self._tool = tool
        self._view = view
        self.setZValue(1e6)
        self.setAcceptedMouseButtons(Qt.NoButton)

    def boundingRect(self):
        return QRectF(self._view.mapToScene(self._view.viewport().rect()).boundingRect())

    def view_resized(self):
        """Tell the scene the bounds moved along with the view."""
        self.prepareGeometryChange()

    def paint(self, painter, option, widget):
        self._tool.paint(painter)


class MeasurementTool(QObject):
    """
    Distance measurement between two points of a TimelineChart.

    Reports elapsed days, value delta and relative change between the
    points.
    """

    # Signals
    active_changed = Signal(bool)  # Emitted after every toggle

    def __init__(self, chart):
        super().__init__(chart)
        self._chart = chart
        self._buttons: List[QAction] = []

        self._icon_on = create_measurement_icon(24, active=True)
        self._icon_off = create_measurement_icon(24, active=False)

        mapper = CoordinateMapper(chart.x_axis_mapping, chart.y_axis_mapping)
        self._overlay = MeasurementOverlay(chart, mapper, color=BLACK)
        self._overlay.add_mode_listener(self._on_mode_changed)

        self._item = MeasurementOverlayItem(self, chart.plot_widget)
        chart.plot_widget.scene().addItem(self._item)

        viewport = chart.plot_widget.viewport()
        viewport.setMouseTracking(True)
        viewport.installEventFilter(self)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def overlay(self) -> MeasurementOverlay:
        return self._overlay

    @property
    def graphics_item(self) -> MeasurementOverlayItem:
        return self._item

    @property
    def is_active(self) -> bool:
        return self._overlay.active

    def color(self) -> QColor:
        return to_qcolor(self._overlay.color)

    def set_color(self, color: QColor):
        self._overlay.color = from_qcolor(QColor(color))

    def icon(self, active: bool):
        return self._icon_on if active else self._icon_off

    def add_buttons(self, toolbar: QToolBar) -> QAction:
        """Add the toggle action to ``toolbar``; its icon tracks the tool state."""
        action = self._create_action(toolbar)
        # keep toolbar actions to update their icon on context menu toggles
        self._buttons.append(action)
        toolbar.addAction(action)
        return action

    def add_context_menu(self, menu: QMenu) -> QAction:
        """Add the toggle action to a (freshly built) context menu."""
        action = self._create_action(menu)
        menu.addAction(action)
        return action

    def toggle(self) -> bool:
        return self._overlay.toggle()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _create_action(self, parent) -> QAction:
        action = QAction(self.icon(self.is_active), LABEL_MEASURE_DISTANCE, parent)
        action.setToolTip(f"{LABEL_MEASURE_DISTANCE}\nClick and drag, or click twice")
        action.triggered.connect(self.toggle)
        return action

    def _on_mode_changed(self, active: bool):
        icon = self.icon(active)
        for button in self._buttons:
            button.setIcon(icon)
        self.active_changed.emit(active)

    def _to_pointer_event(self, event) -> PointerEvent:
        pos = self._chart.plot_widget.mapToScene(event.position().toPoint())
        return PointerEvent(
            x=pos.x(),
            y=pos.y(),
            time=int(event.timestamp()),
            button=_BUTTONS.get(event.button(), NO_BUTTON),
        )

    def _in_plot_area(self, pointer: PointerEvent) -> bool:
        return self._chart.view_box.sceneBoundingRect().contains(QPointF(pointer.x, pointer.y))

    def eventFilter(self, obj, event):
        """Route plot mouse events into the overlay while the tool is active."""
        etype = event.type()
        if etype == QEvent.Type.Resize:
            self._item.view_resized()

        if not self._overlay.active:
            return super().eventFilter(obj, event)

        # The second press of a quick click pair arrives as a double click
        if etype in (QEvent.Type.MouseButtonPress, QEvent.Type.MouseButtonDblClick):
            pointer = self._to_pointer_event(event)
            if self._in_plot_area(pointer) and self._overlay.on_pointer_down(pointer):
                return True
        elif etype == QEvent.Type.MouseMove:
            if self._overlay.on_pointer_move(self._to_pointer_event(event)):
                return True
        elif etype == QEvent.Type.MouseButtonRelease:
            if self._overlay.on_pointer_up(self._to_pointer_event(event)):
                return True
            # A release without a capture must not reach the view box either
            if event.button() == Qt.LeftButton:
                return True

        return super().eventFilter(obj, event)

    def paint(self, painter):
        """Paint the current measurement with ``painter``."""
        self._overlay.paint(QPainterSurface(painter), self._chart.plot_area())
