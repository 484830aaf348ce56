"""Numeric sensors that expose single values of the spa state."""

from __future__ import annotations

import logging
import math
from enum import IntEnum
from typing import TYPE_CHECKING, Callable, List

from .state import NO_VALUE, SpaState

if TYPE_CHECKING:
    from .spa import BalboaSpa

logger = logging.getLogger(__name__)


class SensorType(IntEnum):
    """Which part of the spa state a sensor reports."""

    BLOWER = 1
    HIGHRANGE = 2
    CIRCULATION = 3
    RESTMODE = 4
    HEATSTATE = 5


SensorCallback = Callable[[float], None]


class BalboaSpaSensor:
    """Publishes one value of the spa state whenever it changes."""

    def __init__(self, sensor_type: SensorType) -> None:
        self.sensor_type = SensorType(sensor_type)
        self.state: float = math.nan
        self._callbacks: List[SensorCallback] = []

    def set_parent(self, parent: "BalboaSpa") -> None:
        """Follow the state updates of a spa."""
        parent.register_listener(self.update)

    def add_on_state_callback(self, callback: SensorCallback) -> None:
        """Call callback with each newly published value."""
        self._callbacks.append(callback)

    def _read(self, spa_state: SpaState) -> int:
        kind = self.sensor_type
        if kind == SensorType.BLOWER:
            return spa_state.blower
        if kind == SensorType.HIGHRANGE:
            return spa_state.highrange
        if kind == SensorType.CIRCULATION:
            return spa_state.circulation
        if kind == SensorType.RESTMODE:
            return spa_state.last_rest_mode()
        return spa_state.last_heat_state()

    def update(self, spa_state: SpaState) -> None:
        """Publish the current value if it differs from the last one."""
        value = self._read(spa_state)
        if value == NO_VALUE and self.sensor_type in (
            SensorType.RESTMODE,
            SensorType.HEATSTATE,
        ):
            return
        if self.state != value:
            self.state = float(value)
            for callback in self._callbacks:
                callback(self.state)