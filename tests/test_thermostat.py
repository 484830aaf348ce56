import math

import pytest

from balboaspa.spa import BalboaSpa
from balboaspa.state import SpaState
from balboaspa.thermostat import (
    BalboaSpaThermostat,
    ClimateAction,
    ClimateMode,
)


class FakeSpa:
    def __init__(self):
        self.listeners = []
        self.temps = []

    def register_listener(self, func):
        self.listeners.append(func)

    def set_temp(self, temp):
        self.temps.append(temp)


class QuietPort:
    in_waiting = 0

    def read(self, size=1):
        return b""

    def write(self, data):
        return len(data)

    def flush(self):
        pass


def stable_state(**values):
    state = SpaState()
    for _ in range(6):
        if "target" in values:
            state.add_target_temp(values["target"])
        if "current" in values:
            state.add_current_temp(values["current"])
        if "heat" in values:
            state.add_heat_state(values["heat"])
        if "rest" in values:
            state.add_rest_mode(values["rest"])
    return state


def test_traits_support_off_and_heat():
    traits = BalboaSpaThermostat().traits()
    assert traits.supported_modes == {ClimateMode.OFF, ClimateMode.HEAT}
    assert traits.supports_action is True
    assert traits.supports_current_temperature is True
    assert traits.supports_two_point_target_temperature is False


def test_control_forwards_temperature_to_spa():
    spa = FakeSpa()
    thermostat = BalboaSpaThermostat()
    thermostat.set_parent(spa)
    thermostat.control(37.5)
    assert spa.temps == [37.5]


def test_control_without_temperature_sends_nothing():
    spa = FakeSpa()
    thermostat = BalboaSpaThermostat()
    thermostat.set_parent(spa)
    thermostat.control(None)
    assert spa.temps == []


def test_control_without_parent_raises():
    with pytest.raises(RuntimeError):
        BalboaSpaThermostat().control(30.0)


def test_set_parent_registers_update():
    spa = FakeSpa()
    thermostat = BalboaSpaThermostat()
    thermostat.set_parent(spa)
    assert spa.listeners == [thermostat.update]


def test_unstable_state_publishes_nothing():
    thermostat = BalboaSpaThermostat()
    published = []
    thermostat.add_on_state_callback(published.append)
    state = SpaState()
    state.add_target_temp(38.0)
    thermostat.update(state)
    assert published == []
    assert math.isnan(thermostat.target_temperature)
    assert math.isnan(thermostat.current_temperature)
    assert thermostat.mode == ClimateMode.OFF
    assert thermostat.action == ClimateAction.OFF


def test_stable_state_is_taken_over_and_published_once():
    thermostat = BalboaSpaThermostat()
    published = []
    thermostat.add_on_state_callback(published.append)
    state = stable_state(target=38.0, current=36.5, heat=1, rest=0)
    thermostat.update(state)
    assert thermostat.target_temperature == 38.0
    assert thermostat.current_temperature == 36.5
    assert thermostat.action == ClimateAction.HEATING
    assert thermostat.mode == ClimateMode.HEAT
    assert published == [thermostat]

    thermostat.update(state)
    assert len(published) == 1


def test_idle_and_rest_mode_turn_off():
    thermostat = BalboaSpaThermostat()
    thermostat.update(stable_state(heat=1, rest=0))
    published = []
    thermostat.add_on_state_callback(published.append)
    thermostat.update(stable_state(heat=0, rest=1))
    assert thermostat.action == ClimateAction.IDLE
    assert thermostat.mode == ClimateMode.OFF
    assert len(published) == 1


def test_follows_real_spa_updates():
    spa = BalboaSpa(QuietPort())
    thermostat = BalboaSpaThermostat()
    thermostat.set_parent(spa)
    for _ in range(6):
        spa.state().add_target_temp(35.0)
    spa.update()
    assert thermostat.target_temperature == 35.0