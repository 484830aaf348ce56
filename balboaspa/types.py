"""Records decoded from controller messages."""

from __future__ import annotations

import json
from dataclasses import dataclass

_FAULT_MESSAGES = {
    15: "Sensors are out of sync",
    16: "The water flow is low",
    17: "The water flow has failed",
    18: "The settings have been reset",
    19: "Priming Mode",
    20: "The clock has failed",
    21: "The settings have been reset",
    22: "Program memory failure",
    26: "Sensors are out of sync -- Call for service",
    27: "The heater is dry",
    28: "The heater may be dry",
    29: "The water is too hot",
    30: "The heater is too hot",
    31: "Sensor A Fault",
    32: "Sensor B Fault",
    34: "A pump may be stuck on",
    35: "Hot fault",
    36: "The GFCI test failed",
    37: "Standby Mode (Hold Mode)",
}


def fault_message(code: int) -> str:
    """Describe a controller fault code."""
    return _FAULT_MESSAGES.get(code, "Unknown error")


@dataclass
class SpaConfig:
    """Equipment fitted to the spa; temp_scale is 0 for Fahrenheit, 1 for Celsius."""

    pump1: int = 0
    pump2: int = 0
    pump3: int = 0
    pump4: int = 0
    pump5: int = 0
    pump6: int = 0
    light1: int = 0
    light2: int = 0
    circ: bool = False
    blower: bool = False
    mister: bool = False
    aux1: bool = False
    aux2: bool = False
    temp_scale: int = 0


@dataclass
class SpaFaultLog:
    """One entry of the controller's fault log."""

    total_entries: int = 0
    current_entry: int = 0
    fault_code: int = 0
    fault_message: str = ""
    days_ago: int = 0
    hour: int = 0
    minutes: int = 0


def _clock(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}"


def _payload(start: str, duration: str) -> str:
    return json.dumps({"start": start, "duration": duration}, separators=(",", ":"))


@dataclass
class SpaFilterSettings:
    """The two filter cycles: start time and duration of each."""

    filter1_hour: int = 0
    filter1_minute: int = 0
    filter1_duration_hour: int = 0
    filter1_duration_minute: int = 0
    filter2_enabled: bool = False
    filter2_hour: int = 0
    filter2_minute: int = 0
    filter2_duration_hour: int = 0
    filter2_duration_minute: int = 0

    def filter1_payload(self) -> str:
        """JSON description of the first filter cycle."""
        return _payload(
            _clock(self.filter1_hour, self.filter1_minute),
            _clock(self.filter1_duration_hour, self.filter1_duration_minute),
        )

    def filter2_payload(self) -> str:
        """JSON description of the second filter cycle."""
        return _payload(
            _clock(self.filter2_hour, self.filter2_minute),
            _clock(self.filter2_duration_hour, self.filter2_duration_minute),
        )