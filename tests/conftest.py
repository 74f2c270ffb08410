"""Shared fixtures for Chart Measure tests."""
import os
import sys
from pathlib import Path

# Qt must be told before it is imported anywhere
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("PYQTGRAPH_QT_LIB", "PySide6")

import pytest

# ---------------------------------------------------------------------------
# Ensure the repository root is on sys.path so that `import chartmeasure` and
# `import main` resolve when tests run from any working directory.
# ---------------------------------------------------------------------------
_repo_root = Path(__file__).resolve().parent.parent
if str(_repo_root) not in sys.path:
    sys.path.insert(0, str(_repo_root))

from chartmeasure.core.coordinates import CoordinateMapper, LinearAxis  # noqa: E402
from chartmeasure.core.formatting import ValueFormat  # noqa: E402


class FakeHost:
    """Chart host that records what the overlay asks of it."""

    def __init__(self, value_format=None):
        self.value_format = value_format or ValueFormat("+,.2f")
        self.tooltip_active = True
        self.redraws = 0

    def set_tooltip_active(self, active):
        self.tooltip_active = active

    def request_redraw(self):
        self.redraws += 1


class FakeSurface:
    """Drawing surface that logs every call."""

    def __init__(self, char_width=7, line_height=14, fail_on=None):
        self.calls = []
        self.antialias = False
        self._char_width = char_width
        self._line_height = line_height
        self._fail_on = fail_on

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        if name == self._fail_on:
            raise RuntimeError(f"{name} failed")

    def get_antialias(self):
        return self.antialias

    def set_antialias(self, enabled):
        self.antialias = enabled
        self._record("set_antialias", enabled)

    def set_line_width(self, width):
        self._record("set_line_width", width)

    def set_foreground(self, color):
        self._record("set_foreground", color)

    def set_background(self, color):
        self._record("set_background", color)

    def draw_line(self, x1, y1, x2, y2):
        self._record("draw_line", x1, y1, x2, y2)

    def fill_oval(self, x, y, width, height):
        self._record("fill_oval", x, y, width, height)

    def fill_round_rectangle(self, x, y, width, height, arc_width, arc_height):
        self._record("fill_round_rectangle", x, y, width, height, arc_width, arc_height)

    def draw_text(self, text, x, y):
        self._record("draw_text", text, x, y)

    def text_extent(self, text):
        return len(text) * self._char_width, self._line_height

    def named(self, name):
        return [call for call in self.calls if call[0] == name]


# One day per 10 pixels from 2024-01-01 12:00 local time; values 0..200
# over pixels 400 (bottom) .. 0 (top)
DAY_MS = 86_400_000


@pytest.fixture
def origin_ms():
    from datetime import datetime
    return datetime(2024, 1, 1, 12, 0).timestamp() * 1000


@pytest.fixture
def mapper(origin_ms):
    x_axis = LinearAxis(pixel_low=0, pixel_high=10, data_low=origin_ms, data_high=origin_ms + DAY_MS)
    y_axis = LinearAxis(pixel_low=400, pixel_high=0, data_low=0, data_high=200)
    return CoordinateMapper(x_axis, y_axis)


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def surface():
    return FakeSurface()
