"""Switches for the spa's jets, blower and light."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, List, Optional

from .state import SpaState

if TYPE_CHECKING:
    from .spa import BalboaSpa

SwitchCallback = Callable[[bool], None]


class SpaSwitch(ABC):
    """An on/off item of the spa that is changed by toggling it."""

    def __init__(self) -> None:
        self.state = False
        self._spa: Optional["BalboaSpa"] = None
        self._callbacks: List[SwitchCallback] = []

    @abstractmethod
    def _read(self, spa_state: SpaState) -> int:
        """The item's current value in the spa state."""

    @abstractmethod
    def _toggle(self, spa: "BalboaSpa") -> None:
        """Ask the spa to toggle the item."""

    def set_parent(self, parent: "BalboaSpa") -> None:
        """Attach to a spa and follow its state updates."""
        self._spa = parent
        parent.register_listener(self.update)

    def add_on_state_callback(self, callback: SwitchCallback) -> None:
        """Call callback with each newly published state."""
        self._callbacks.append(callback)

    def update(self, spa_state: SpaState) -> None:
        """Publish the item's state if it differs from the last one."""
        value = self._read(spa_state)
        if int(self.state) != value:
            self.state = bool(value)
            for callback in self._callbacks:
                callback(self.state)

    def write_state(self, state: bool) -> None:
        """Toggle the item on the spa if it is not already in the wanted state."""
        if self._spa is None:
            raise RuntimeError("switch has no spa attached")
        if self._read(self._spa.state()) != int(state):
            self._toggle(self._spa)


class BlowerSwitch(SpaSwitch):
    """The air blower."""

    def _read(self, spa_state: SpaState) -> int:
        return spa_state.blower

    def _toggle(self, spa: "BalboaSpa") -> None:
        spa.toggle_blower()


class Jet1Switch(SpaSwitch):
    """The first jet pump."""

    def _read(self, spa_state: SpaState) -> int:
        return spa_state.jet1

    def _toggle(self, spa: "BalboaSpa") -> None:
        spa.toggle_jet1()


class Jet2Switch(SpaSwitch):
    """The second jet pump."""

    def _read(self, spa_state: SpaState) -> int:
        return spa_state.jet2

    def _toggle(self, spa: "BalboaSpa") -> None:
        spa.toggle_jet2()


class Jet3Switch(SpaSwitch):
    """The third jet pump."""

    def _read(self, spa_state: SpaState) -> int:
        return spa_state.jet3

    def _toggle(self, spa: "BalboaSpa") -> None:
        spa.toggle_jet3()


class LightsSwitch(SpaSwitch):
    """The spa light."""

    def _read(self, spa_state: SpaState) -> int:
        return spa_state.light

    def _toggle(self, spa: "BalboaSpa") -> None:
        spa.toggle_light()