"""Widget tests for the measurement tool on a TimelineChart."""
from datetime import date, datetime

import pytest
from PySide6.QtCore import QEvent, QPointF, Qt
from PySide6.QtGui import QColor, QImage, QMouseEvent, QPainter
from PySide6.QtWidgets import QToolBar

from chartmeasure.core.formatting import ValueFormat
from chartmeasure.core.renderer import antialiasing
from chartmeasure.core.series_reader import sample_series
from chartmeasure.gui.qt_adapters import QPainterSurface
from chartmeasure.gui.timeline_chart import TimelineChart

DAY_S = 86400
T0 = datetime(2024, 1, 1).timestamp()


@pytest.fixture
def chart(qtbot):
    chart = TimelineChart(value_format=ValueFormat("+,.2f"))
    qtbot.addWidget(chart)
    chart.resize(800, 600)
    chart.show()
    qtbot.waitExposed(chart)

    chart.add_series(sample_series(days=60, start=date(2024, 1, 1)))
    chart.view_box.setRange(xRange=(T0, T0 + 50 * DAY_S), yRange=(50, 150), padding=0)
    qtbot.waitUntil(lambda: chart.view_box.sceneBoundingRect().width() > 100)
    return chart


def scene_to_viewport(chart, scene_x, scene_y):
    return QPointF(chart.plot_widget.mapFromScene(QPointF(scene_x, scene_y)))


def viewport_pos(chart, day, value):
    """Viewport position of (days after T0, value)."""
    scene_x = chart.x_axis_mapping.pixel_coordinate((T0 + day * DAY_S) * 1000)
    scene_y = chart.y_axis_mapping.pixel_coordinate(value)
    return scene_to_viewport(chart, scene_x, scene_y)


def mouse(etype, pos, time, button=Qt.LeftButton):
    buttons = Qt.NoButton if etype == QEvent.Type.MouseButtonRelease else button
    event = QMouseEvent(etype, pos, pos, button, buttons, Qt.NoModifier)
    event.setTimestamp(time)
    return event


def send(chart, event):
    tool = chart.measurement_tool
    return tool.eventFilter(chart.plot_widget.viewport(), event)


def red_pixel_near(chart, pos, radius=3):
    """Whether the rendered plot has a strongly red pixel around viewport ``pos``."""
    pixmap = chart.plot_widget.grab()
    image = pixmap.toImage()
    ratio = pixmap.devicePixelRatio()
    widget_pos = chart.plot_widget.viewport().mapTo(chart.plot_widget, pos.toPoint())
    cx, cy = int(widget_pos.x() * ratio), int(widget_pos.y() * ratio)
    for x in range(cx - radius, cx + radius + 1):
        for y in range(cy - radius, cy + radius + 1):
            if not image.valid(x, y):
                continue
            color = QColor(image.pixel(x, y))
            if color.red() > 200 and color.red() - max(color.green(), color.blue()) > 60:
                return True
    return False


class TestAxisMapping:

    def test_round_trip(self, chart):
        rect = chart.view_box.sceneBoundingRect()
        for px, py in [(rect.center().x(), rect.center().y()),
                       (rect.left() + 13.5, rect.bottom() - 40.25)]:
            x = chart.x_axis_mapping.data_coordinate(px)
            y = chart.y_axis_mapping.data_coordinate(py)
            assert chart.x_axis_mapping.pixel_coordinate(x) == pytest.approx(px, abs=1e-3)
            assert chart.y_axis_mapping.pixel_coordinate(y) == pytest.approx(py, abs=1e-3)

    def test_x_axis_reports_epoch_millis(self, chart):
        rect = chart.view_box.sceneBoundingRect()
        ms_per_pixel = 50 * DAY_S * 1000 / rect.width()
        assert chart.x_axis_mapping.data_coordinate(rect.left()) == pytest.approx(T0 * 1000, abs=ms_per_pixel)

    def test_plot_area_matches_view_box(self, chart):
        area = chart.plot_area()
        rect = chart.view_box.sceneBoundingRect()
        assert area.center_x == pytest.approx(rect.center().x())


class TestToggle:

    def test_toolbar_icons_follow_state(self, chart, qtbot):
        tool = chart.measurement_tool
        first, second = QToolBar(), QToolBar()
        qtbot.addWidget(first)
        qtbot.addWidget(second)
        actions = [tool.add_buttons(first), tool.add_buttons(second)]

        with qtbot.waitSignal(tool.active_changed) as blocker:
            actions[0].trigger()
        assert blocker.args == [True]
        assert tool.is_active
        assert not chart.tool_tip.is_active()
        for action in actions:
            assert action.icon().cacheKey() == tool.icon(True).cacheKey()

        # Toggling from the context menu updates the toolbar buttons too
        menu = chart.build_context_menu()
        menu_action = [a for a in menu.actions() if a.text() == "Measure Distance"][0]
        assert menu_action.icon().cacheKey() == tool.icon(True).cacheKey()
        menu_action.trigger()

        assert not tool.is_active
        assert chart.tool_tip.is_active()
        for action in actions:
            assert action.icon().cacheKey() == tool.icon(False).cacheKey()

    def test_percentage_format_hides_relative_change(self, chart):
        chart.value_format = ValueFormat(".1%")
        chart.measurement_tool.toggle()
        assert chart.measurement_tool.overlay.show_relative_change is False

    def test_color_round_trip(self, chart):
        chart.measurement_tool.set_color(QColor("#336699"))
        assert chart.measurement_tool.color().name() == "#336699"


class TestMouseEvents:

    def test_ignored_while_inactive(self, chart):
        assert not send(chart, mouse(QEvent.Type.MouseButtonPress, viewport_pos(chart, 1, 100), 1000))
        assert chart.measurement_tool.overlay.start is None

    def test_drag_measures_days_and_values(self, chart):
        tool = chart.measurement_tool
        tool.toggle()

        assert send(chart, mouse(QEvent.Type.MouseButtonPress, viewport_pos(chart, 0.5, 100), 1000))
        assert send(chart, mouse(QEvent.Type.MouseMove, viewport_pos(chart, 3.5, 105), 1200))
        assert send(chart, mouse(QEvent.Type.MouseButtonRelease, viewport_pos(chart, 5.5, 110), 1600))

        overlay = tool.overlay
        assert not overlay.drag_engaged
        assert overlay.start.date == date(2024, 1, 1)
        assert overlay.end.date == date(2024, 1, 6)
        assert overlay.start.value == pytest.approx(100, abs=0.5)
        assert overlay.end.value == pytest.approx(110, abs=0.5)
        assert overlay.label_text().startswith("5 | +")

        # Moves after a finished drag are left to the chart
        assert not send(chart, mouse(QEvent.Type.MouseMove, viewport_pos(chart, 9.5, 90), 1700, Qt.NoButton))

    def test_click_click_relocates_end(self, chart):
        tool = chart.measurement_tool
        tool.toggle()

        send(chart, mouse(QEvent.Type.MouseButtonPress, viewport_pos(chart, 2.5, 100), 1000))
        send(chart, mouse(QEvent.Type.MouseButtonRelease, viewport_pos(chart, 2.5, 100), 1100))
        assert tool.overlay.drag_engaged

        send(chart, mouse(QEvent.Type.MouseMove, viewport_pos(chart, 6.5, 120), 1150, Qt.NoButton))
        assert tool.overlay.end.date == date(2024, 1, 7)

        send(chart, mouse(QEvent.Type.MouseButtonPress, viewport_pos(chart, 8.5, 80), 1200))
        assert tool.overlay.start.date == date(2024, 1, 3)
        assert tool.overlay.end.date == date(2024, 1, 9)

    def test_second_click_delivered_as_double_click(self, chart):
        tool = chart.measurement_tool
        tool.toggle()

        send(chart, mouse(QEvent.Type.MouseButtonPress, viewport_pos(chart, 2.5, 100), 1000))
        send(chart, mouse(QEvent.Type.MouseButtonRelease, viewport_pos(chart, 2.5, 100), 1050))
        assert send(chart, mouse(QEvent.Type.MouseButtonDblClick, viewport_pos(chart, 7.5, 110), 1200))

        assert tool.overlay.start.time == 1000
        assert tool.overlay.end.time == 1200
        assert tool.overlay.end.date == date(2024, 1, 8)

    def test_press_outside_plot_area_ignored(self, chart):
        chart.measurement_tool.toggle()
        rect = chart.view_box.sceneBoundingRect()
        on_left_axis = scene_to_viewport(chart, rect.left() - 20, rect.center().y())

        assert not send(chart, mouse(QEvent.Type.MouseButtonPress, on_left_axis, 1000))
        assert chart.measurement_tool.overlay.start is None

    def test_right_button_passes_through(self, chart):
        chart.measurement_tool.toggle()
        event = mouse(QEvent.Type.MouseButtonPress, viewport_pos(chart, 1, 100), 1000, Qt.RightButton)
        assert not send(chart, event)
        assert chart.measurement_tool.overlay.start is None

    def test_deactivate_clears(self, chart):
        tool = chart.measurement_tool
        tool.toggle()
        send(chart, mouse(QEvent.Type.MouseButtonPress, viewport_pos(chart, 1, 100), 1000))
        tool.toggle()
        assert tool.overlay.start is None and tool.overlay.end is None


class TestPainting:

    def test_shown_chart_survives_repaint_and_resize(self, chart, qtbot):
        view = chart.plot_widget
        item = chart.measurement_tool.graphics_item
        chart.measurement_tool.toggle()

        chart.resize(640, 480)
        chart.request_redraw()
        qtbot.wait(50)

        visible = view.mapToScene(view.viewport().rect()).boundingRect()
        assert item.boundingRect() == visible
        assert view.scene().itemsBoundingRect().contains(item.boundingRect())

    def test_chart_renders_measurement(self, chart):
        tool = chart.measurement_tool
        tool.set_color(QColor("#ff0000"))
        start, end = viewport_pos(chart, 10, 70), viewport_pos(chart, 30, 130)
        middle = viewport_pos(chart, 20, 100)
        assert not red_pixel_near(chart, start)

        tool.toggle()
        send(chart, mouse(QEvent.Type.MouseButtonPress, start, 1000))
        send(chart, mouse(QEvent.Type.MouseButtonRelease, end, 2000))

        assert red_pixel_near(chart, start)
        assert red_pixel_near(chart, middle)
        assert red_pixel_near(chart, end)

    def test_painter_surface_restores_antialias(self):
        image = QImage(100, 50, QImage.Format_ARGB32)
        image.fill(Qt.white)
        painter = QPainter(image)
        try:
            painter.setRenderHint(QPainter.Antialiasing, False)
            surface = QPainterSurface(painter)
            with antialiasing(surface):
                assert surface.get_antialias()
            assert not surface.get_antialias()

            width, height = surface.text_extent("12 | +3.00")
            assert width > 0 and height > 0
        finally:
            painter.end()
