"""
Number formatting and label text for the measurement overlay.
"""

import numpy as np

from .spot import Spot

LABEL_SEPARATOR = " | "


class ValueFormat:
    """
    Formats chart values with a Python format spec.

    A spec containing ``%`` (e.g. ``".1%"``) is a percentage format: values
    are fractions and are shown multiplied by 100.
    """

    def __init__(self, format_spec: str = ",.2f"):
        # Fail early on a malformed spec rather than on the first paint
        format(0.0, format_spec)
        self.format_spec = format_spec

    @property
    def is_percentage(self) -> bool:
        return '%' in self.format_spec

    def format(self, value: float) -> str:
        return format(float(value), self.format_spec)

    def __eq__(self, other):
        return isinstance(other, ValueFormat) and other.format_spec == self.format_spec

    def __hash__(self):
        return hash(self.format_spec)

    def __repr__(self):
        return f"ValueFormat({self.format_spec!r})"


PERCENT_WITH_SIGN = ValueFormat("+.2%")


def relative_change(start_value: float, end_value: float) -> float:
    """
    ``end / start - 1``.

    A zero start value yields inf or nan instead of raising, which the
    formatters render as-is.
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        return float(np.float64(end_value) / np.float64(start_value) - 1.0)


def day_delta(start: Spot, end: Spot) -> int:
    """Whole calendar days from start to end; negative if end comes first."""
    return (end.date - start.date).days


def measurement_label(start: Spot, end: Spot, value_format: ValueFormat,
                      show_relative_change: bool = True) -> str:
    """Build the ``days | delta | change`` label text."""
    parts = [
        str(day_delta(start, end)),
        value_format.format(end.value - start.value),
    ]
    if show_relative_change:
        parts.append(PERCENT_WITH_SIGN.format(relative_change(start.value, end.value)))
    return LABEL_SEPARATOR.join(parts)
