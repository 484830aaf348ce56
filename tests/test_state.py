import pytest

from balboaspa.state import (
    COUNT_UNTIL_STABLE,
    NO_VALUE,
    POOL_SIZE,
    SpaState,
    ValueHistory,
)


def test_history_keeps_only_pool_size_values():
    history = ValueHistory()
    for value in range(POOL_SIZE + 5):
        history.push(value)
    assert len(history) == POOL_SIZE
    assert history.last() == POOL_SIZE + 4


def test_last_on_empty_history_raises():
    with pytest.raises(IndexError):
        ValueHistory().last()


def test_stability_needs_more_than_threshold():
    history = ValueHistory()
    for _ in range(COUNT_UNTIL_STABLE):
        history.push(1)
    assert history.is_stable() is False
    history.push(1)
    assert history.is_stable() is True


def test_mode_picks_most_frequent():
    history = ValueHistory()
    for value in [3, 1, 2, 3, 2, 3]:
        history.push(value)
    assert history.mode() == 3


def test_mode_tie_prefers_smallest():
    history = ValueHistory()
    for value in [2, 1, 2, 1]:
        history.push(value)
    assert history.mode() == 1


def test_mode_all_distinct_returns_default():
    history = ValueHistory(default=0.0)
    for value in [38.5, 39.0, 37.5]:
        history.push(value)
    assert history.mode() == 0.0


def test_mode_last_run_counts():
    history = ValueHistory()
    for value in [9, 9, 9, 1]:
        history.push(value)
    assert history.mode() == 9


def test_mode_of_floats():
    history = ValueHistory(default=0.0)
    for value in [38.5, 38.5, 38.0]:
        history.push(value)
    assert history.mode() == 38.5


def test_temperatures_zero_until_stable():
    state = SpaState()
    for _ in range(COUNT_UNTIL_STABLE):
        state.add_current_temp(38.5)
        state.add_target_temp(39.0)
    assert state.current_temp() == 0
    assert state.target_temp() == 0
    state.add_current_temp(38.5)
    state.add_target_temp(39.0)
    assert state.current_temp() == 38.5
    assert state.target_temp() == 39.0


def test_heat_state_no_value_until_stable():
    state = SpaState()
    assert state.heat_state() == NO_VALUE
    assert state.last_heat_state() == NO_VALUE
    for _ in range(COUNT_UNTIL_STABLE + 1):
        state.add_heat_state(1)
    assert state.heat_state() == 1
    state.add_heat_state(0)
    assert state.last_heat_state() == 0
    assert state.heat_state() == 1


def test_rest_mode_no_value_until_stable():
    state = SpaState()
    assert state.rest_mode() == NO_VALUE
    assert state.last_rest_mode() == NO_VALUE
    state.add_rest_mode(1)
    assert state.last_rest_mode() == 1
    assert state.rest_mode() == NO_VALUE
    for _ in range(COUNT_UNTIL_STABLE):
        state.add_rest_mode(0)
    assert state.rest_mode() == 0


def test_states_compare_on_flags_only():
    first = SpaState(jet1=1)
    second = SpaState(jet1=1)
    second.add_rest_mode(1)
    assert first == second
    assert SpaState(jet1=0) != first