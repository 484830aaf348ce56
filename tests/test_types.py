import json

import pytest

from balboaspa.types import SpaFilterSettings, fault_message


@pytest.mark.parametrize(
    "code, message",
    [
        (15, "Sensors are out of sync"),
        (16, "The water flow is low"),
        (19, "Priming Mode"),
        (26, "Sensors are out of sync -- Call for service"),
        (37, "Standby Mode (Hold Mode)"),
    ],
)
def test_known_fault_codes(code, message):
    assert fault_message(code) == message


def test_codes_18_and_21_share_message():
    assert fault_message(18) == fault_message(21) == "The settings have been reset"


@pytest.mark.parametrize("code", [0, 14, 23, 33, 38, 63])
def test_unknown_fault_codes(code):
    assert fault_message(code) == "Unknown error"


def test_filter1_payload_is_json_with_padded_times():
    settings = SpaFilterSettings(
        filter1_hour=6,
        filter1_minute=5,
        filter1_duration_hour=2,
        filter1_duration_minute=0,
    )
    decoded = json.loads(settings.filter1_payload())
    assert decoded == {"start": "06:05", "duration": "02:00"}


def test_filter2_payload_round_trips_values():
    settings = SpaFilterSettings(
        filter2_enabled=True,
        filter2_hour=20,
        filter2_minute=30,
        filter2_duration_hour=11,
        filter2_duration_minute=45,
    )
    decoded = json.loads(settings.filter2_payload())
    start_hour, start_minute = decoded["start"].split(":")
    duration_hour, duration_minute = decoded["duration"].split(":")
    assert (int(start_hour), int(start_minute)) == (20, 30)
    assert (int(duration_hour), int(duration_minute)) == (11, 45)


def test_payload_has_compact_form():
    payload = SpaFilterSettings().filter1_payload()
    assert " " not in payload
    assert payload.startswith('{"start":')