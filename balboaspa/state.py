"""Spa state as reported by the controller, with smoothing of noisy readings."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from itertools import groupby
from typing import Deque, Generic, TypeVar

POOL_SIZE = 20
COUNT_UNTIL_STABLE = 5
NO_VALUE = 254

T = TypeVar("T", int, float)


class ValueHistory(Generic[T]):
    """The most recent readings of one value, oldest first."""

    def __init__(self, capacity: int = POOL_SIZE, default: T = 0) -> None:
        self._values: Deque[T] = deque(maxlen=capacity)
        self._default = default

    def __len__(self) -> int:
        return len(self._values)

    def push(self, value: T) -> None:
        """Record a reading, dropping the oldest one when the history is full."""
        self._values.append(value)

    def last(self) -> T:
        """Return the most recent reading."""
        if not self._values:
            raise IndexError("value history is empty")
        return self._values[-1]

    def is_stable(self) -> bool:
        """True once enough readings have been seen to trust the mode."""
        return len(self._values) > COUNT_UNTIL_STABLE

    def mode(self) -> T:
        """Return the most frequent reading.

        Among equally frequent readings the smallest wins. When no reading
        occurs more than once the default value is returned.
        """
        best = self._default
        best_count = 1
        for value, run in groupby(sorted(self._values)):
            count = sum(1 for _ in run)
            if count > best_count:
                best, best_count = value, count
        return best


@dataclass
class SpaState:
    """Everything the status updates tell about the spa."""

    jet1: int = 0
    jet2: int = 0
    jet3: int = 0
    blower: int = 0
    light: int = 0
    highrange: int = 0
    circulation: int = 0
    hour: int = 0
    minutes: int = 0
    _current_temperatures: ValueHistory[float] = field(
        default_factory=lambda: ValueHistory(default=0.0), repr=False, compare=False
    )
    _target_temperatures: ValueHistory[float] = field(
        default_factory=lambda: ValueHistory(default=0.0), repr=False, compare=False
    )
    _heat_states: ValueHistory[int] = field(
        default_factory=ValueHistory, repr=False, compare=False
    )
    _rest_modes: ValueHistory[int] = field(
        default_factory=ValueHistory, repr=False, compare=False
    )

    def add_current_temp(self, value: float) -> None:
        self._current_temperatures.push(value)

    def add_target_temp(self, value: float) -> None:
        self._target_temperatures.push(value)

    def add_heat_state(self, value: int) -> None:
        self._heat_states.push(value)

    def add_rest_mode(self, value: int) -> None:
        self._rest_modes.push(value)

    def current_temp(self) -> float:
        """Smoothed water temperature, or 0 while readings are not yet stable."""
        if not self._current_temperatures.is_stable():
            return 0.0
        return self._current_temperatures.mode()

    def target_temp(self) -> float:
        """Smoothed set temperature, or 0 while readings are not yet stable."""
        if not self._target_temperatures.is_stable():
            return 0.0
        return self._target_temperatures.mode()

    def heat_state(self) -> int:
        """Smoothed heating state, or NO_VALUE while not yet stable."""
        if not self._heat_states.is_stable():
            return NO_VALUE
        return self._heat_states.mode()

    def last_heat_state(self) -> int:
        """Most recent heating state, or NO_VALUE if none was seen."""
        if len(self._heat_states) == 0:
            return NO_VALUE
        return self._heat_states.last()

    def rest_mode(self) -> int:
        """Smoothed rest mode, or NO_VALUE while not yet stable."""
        if not self._rest_modes.is_stable():
            return NO_VALUE
        return self._rest_modes.mode()

    def last_rest_mode(self) -> int:
        """Most recent rest mode, or NO_VALUE if none was seen."""
        if len(self._rest_modes) == 0:
            return NO_VALUE
        return self._rest_modes.last()