"""Climate entity that shows and sets the spa's water temperature."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, FrozenSet, List, Optional

from .state import SpaState

if TYPE_CHECKING:
    from .spa import BalboaSpa


class ClimateMode(Enum):
    """Operating modes the thermostat can report."""

    OFF = "off"
    HEAT = "heat"


class ClimateAction(Enum):
    """What the heater is doing right now."""

    OFF = "off"
    HEATING = "heating"
    IDLE = "idle"


@dataclass(frozen=True)
class ClimateTraits:
    """Capabilities the thermostat advertises."""

    supported_modes: FrozenSet[ClimateMode] = field(default_factory=frozenset)
    supports_action: bool = False
    supports_current_temperature: bool = False
    supports_two_point_target_temperature: bool = False


StateCallback = Callable[["BalboaSpaThermostat"], None]


class BalboaSpaThermostat:
    """Mirrors the spa's temperatures, heater activity and rest mode."""

    def __init__(self) -> None:
        self.target_temperature: float = math.nan
        self.current_temperature: float = math.nan
        self.mode = ClimateMode.OFF
        self.action = ClimateAction.OFF
        self._spa: Optional["BalboaSpa"] = None
        self._callbacks: List[StateCallback] = []

    def traits(self) -> ClimateTraits:
        """Heat or off, with action and current temperature, single set point."""
        return ClimateTraits(
            supported_modes=frozenset({ClimateMode.OFF, ClimateMode.HEAT}),
            supports_action=True,
            supports_current_temperature=True,
            supports_two_point_target_temperature=False,
        )

    def control(self, target_temperature: Optional[float]) -> None:
        """Ask the spa for a new set temperature; None leaves it unchanged."""
        if target_temperature is None:
            return
        if self._spa is None:
            raise RuntimeError("thermostat has no spa attached")
        self._spa.set_temp(target_temperature)

    def set_parent(self, parent: "BalboaSpa") -> None:
        """Attach to a spa and follow its state updates."""
        self._spa = parent
        parent.register_listener(self.update)

    def add_on_state_callback(self, callback: StateCallback) -> None:
        """Call callback with the thermostat whenever it publishes a change."""
        self._callbacks.append(callback)

    def _publish_state(self) -> None:
        for callback in self._callbacks:
            callback(self)

    def update(self, spa_state: SpaState) -> None:
        """Take over the smoothed values from the spa state, publishing on change."""
        changed = False

        target = spa_state.target_temp()
        if target > 0 and self.target_temperature != target:
            self.target_temperature = target
            changed = True

        current = spa_state.current_temp()
        if current > 0 and self.current_temperature != current:
            self.current_temperature = current
            changed = True

        heat_state = spa_state.heat_state()
        if heat_state == 0 and self.action != ClimateAction.IDLE:
            self.action = ClimateAction.IDLE
            changed = True
        elif heat_state == 1 and self.action != ClimateAction.HEATING:
            self.action = ClimateAction.HEATING
            changed = True

        rest_mode = spa_state.rest_mode()
        if rest_mode == 1 and self.mode != ClimateMode.OFF:
            self.mode = ClimateMode.OFF
            changed = True
        elif rest_mode == 0 and self.mode != ClimateMode.HEAT:
            self.mode = ClimateMode.HEAT
            changed = True

        if changed:
            self._publish_state()