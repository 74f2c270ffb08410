"""
Mode controller: switches the measurement tool on and off.
"""

import logging
from typing import Callable, List, Protocol

from .formatting import ValueFormat

logger = logging.getLogger(__name__)


class ChartHost(Protocol):
    """What the measurement overlay needs from the chart it sits on."""

    @property
    def value_format(self) -> ValueFormat: ...

    def set_tooltip_active(self, active: bool) -> None: ...

    def request_redraw(self) -> None: ...


class ModeController:
    """
    Owns the active flag of the tool.

    Listeners are called with the new state on every toggle; the Qt binding
    registers one per toolbar action to keep all icons in sync.
    """

    def __init__(self, host: ChartHost, on_deactivate: Callable[[], None]):
        self._host = host
        self._on_deactivate = on_deactivate
        self._listeners: List[Callable[[bool], None]] = []
        self.active = False
        self.show_relative_change = True

    def add_listener(self, listener: Callable[[bool], None]):
        self._listeners.append(listener)

    def toggle(self) -> bool:
        """Flip the tool state. Returns the new state."""
        self.active = not self.active

        if self.active:
            # No relative change on top of values that already are percentages
            fmt = self._host.value_format
            self.show_relative_change = not (isinstance(fmt, ValueFormat) and fmt.is_percentage)

        for listener in self._listeners:
            listener(self.active)

        self._host.set_tooltip_active(not self.active)

        if not self.active:
            self._on_deactivate()
            self._host.request_redraw()

        logger.info("Measurement tool %s", "activated" if self.active else "deactivated")
        return self.active
