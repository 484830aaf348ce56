"""Client for the spa controller's RS-485 bus: registration, polling and commands."""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from enum import IntEnum
from typing import Callable, List, Optional, Protocol

from .protocol import (
    FrameReader,
    MessageType,
    build_frame,
    decode_config,
    decode_fault,
    decode_filter_settings,
)
from .state import SpaState
from .types import SpaConfig, SpaFaultLog, SpaFilterSettings

logger = logging.getLogger(__name__)

MIN_TEMPERATURE = 26
MAX_TEMPERATURE = 40
POLLING_INTERVAL = 0.05  # seconds between polls of the serial port
MAX_CLIENT_ID = 0x2F

BROADCAST = 0xFF
NEW_CLIENT = 0xFE
CLIENT_MARKER = 0xBF

Listener = Callable[[SpaState], None]


class Port(Protocol):
    """The part of a serial port the spa client needs."""

    @property
    def in_waiting(self) -> int: ...

    def read(self, size: int = 1) -> bytes: ...

    def write(self, data: bytes) -> Optional[int]: ...

    def flush(self) -> None: ...


class ToggleItem(IntEnum):
    """Item codes understood by the toggle message."""

    JET1 = 0x04
    JET2 = 0x05
    JET3 = 0x06
    BLOWER = 0x0C
    LIGHT = 0x11


class Stage(IntEnum):
    """Progress of a one-off request to the controller."""

    WANTED = 0
    REQUESTED = 1
    RECEIVED = 2


_NOTHING = 0x00
_SET_TIME = 0x21
_SET_TEMPERATURE = 0xFF


def _bit(value: int, bit: int) -> int:
    return (value >> bit) & 0x01


class BalboaSpa:
    """Talks to a spa controller over a serial port and tracks its state."""

    def __init__(self, port: Port) -> None:
        self._port = port
        self._listeners: List[Listener] = []
        self._config = SpaConfig()
        self._state = SpaState()
        self._fault_log = SpaFaultLog()
        self._filter_settings = SpaFilterSettings()
        self._client_id = 0
        self._last_state_crc = 0x00
        self._pending = _NOTHING
        self._set_temp = 0
        self._set_hour = 0
        self._set_minute = 0
        self._config_stage = Stage.WANTED
        self._fault_log_stage = Stage.WANTED
        self._filter_stage = Stage.WANTED
        self.last_rx: Optional[float] = None
        self.setup()

    def setup(self) -> None:
        """Discard any partly received frame."""
        self._reader = FrameReader()

    @property
    def client_id(self) -> int:
        """The bus address assigned by the controller, 0 while unregistered."""
        return self._client_id

    @property
    def fault_log(self) -> SpaFaultLog:
        return self._fault_log

    @property
    def filter_settings(self) -> SpaFilterSettings:
        return self._filter_settings

    def config(self) -> SpaConfig:
        """A copy of the equipment configuration last reported."""
        return replace(self._config)

    def state(self) -> SpaState:
        """The live spa state."""
        return self._state

    def register_listener(self, func: Listener) -> None:
        """Call func with the spa state after every poll."""
        self._listeners.append(func)

    def update(self) -> None:
        """Process every byte waiting on the port, then notify listeners."""
        while self._port.in_waiting:
            for byte in self._port.read(self._port.in_waiting):
                self.feed_byte(byte)
        for listener in self._listeners:
            listener(self._state)

    def feed_byte(self, byte: int) -> None:
        """Process one byte received from the bus."""
        frame = self._reader.feed(byte)
        if frame is not None:
            try:
                self._handle_frame(frame)
            except ValueError as exc:
                logger.debug("ignoring malformed frame %s: %s", frame.hex(" "), exc)
        self.last_rx = time.monotonic()

    # Commands

    def set_temp(self, temp: float) -> None:
        """Queue a new set temperature, given in the spa's display unit."""
        if self._config.temp_scale == 1:
            temp = (temp * 9.0) / 5.0 + 32
        else:
            temp = temp * 2.0
        self._set_temp = int(temp) & 0xFF
        self._pending = _SET_TEMPERATURE

    def set_hour(self, hour: int) -> None:
        """Queue a clock update with a new hour."""
        self._set_hour = hour & 0xFF
        self._pending = _SET_TIME

    def set_minute(self, minute: int) -> None:
        """Queue a clock update with a new minute."""
        self._set_minute = minute & 0xFF
        self._pending = _SET_TIME

    def toggle_light(self) -> None:
        self._pending = ToggleItem.LIGHT

    def toggle_jet1(self) -> None:
        self._pending = ToggleItem.JET1

    def toggle_jet2(self) -> None:
        self._pending = ToggleItem.JET2

    def toggle_jet3(self) -> None:
        self._pending = ToggleItem.JET3

    def toggle_blower(self) -> None:
        self._pending = ToggleItem.BLOWER

    # Bus handling

    def _handle_frame(self, frame: bytes) -> None:
        if len(frame) < 5:
            return
        destination, kind = frame[2], frame[4]

        if self._client_id == 0:
            self._handle_unregistered(frame)
            return

        if destination == self._client_id and kind == MessageType.CLEAR_TO_SEND:
            self._send_pending()
        elif destination == self._client_id and kind == MessageType.CONFIGURATION:
            if self._is_new(frame):
                self._decode_config(frame)
        elif destination == self._client_id and kind == MessageType.FAULT_LOG:
            if self._is_new(frame):
                self._decode_fault(frame)
        elif destination == BROADCAST and kind == MessageType.STATUS_UPDATE:
            if self._is_new(frame):
                self._decode_state(frame)
        elif destination == self._client_id and kind == MessageType.FILTER_CYCLES:
            if self._is_new(frame):
                logger.debug("decoding filter settings")
                self._decode_filter_settings(frame)

    def _handle_unregistered(self, frame: bytes) -> None:
        logger.debug("unregistered, received %s", frame.hex(" "))
        destination, kind = frame[2], frame[4]
        if destination == NEW_CLIENT and kind == MessageType.CHANNEL_ASSIGNMENT_RESPONSE:
            if len(frame) < 6:
                raise ValueError("channel assignment frame carries no id")
            self._client_id = min(frame[5], MAX_CLIENT_ID)
            logger.debug("got id %d, acknowledging", self._client_id)
            self._send([self._client_id, CLIENT_MARKER, MessageType.CHANNEL_ASSIGNMENT_ACK])
        if destination == NEW_CLIENT and kind == MessageType.NEW_CLIENT_CLEAR_TO_SEND:
            logger.debug("requesting id")
            self._send(
                [NEW_CLIENT, CLIENT_MARKER, MessageType.CHANNEL_ASSIGNMENT_REQUEST,
                 0x02, 0xF1, 0x73]
            )

    def _is_new(self, frame: bytes) -> bool:
        length = frame[1]
        if length >= len(frame):
            raise ValueError(f"length byte {length} exceeds frame of {len(frame)} bytes")
        return frame[length] != self._last_state_crc

    def _send_pending(self) -> None:
        head = [self._client_id, CLIENT_MARKER]
        if self._pending == _SET_TIME:
            payload = head + [MessageType.SET_TIME, self._set_hour, self._set_minute]
        elif self._pending == _SET_TEMPERATURE:
            payload = head + [MessageType.SET_TEMPERATURE, self._set_temp]
        elif self._pending == _NOTHING:
            payload = head + self._next_request()
        else:
            payload = head + [MessageType.TOGGLE_ITEM, int(self._pending), 0x00]
        self._send(payload)
        self._pending = _NOTHING

    def _next_request(self) -> List[int]:
        if self._config_stage == Stage.WANTED:
            logger.debug("requesting configuration")
            self._config_stage = Stage.REQUESTED
            return [MessageType.SETTINGS_REQUEST, 0x00, 0x00, 0x01]
        if self._fault_log_stage == Stage.WANTED:
            logger.debug("requesting fault log")
            self._fault_log_stage = Stage.REQUESTED
            return [MessageType.SETTINGS_REQUEST, 0x20, 0xFF, 0x00]
        if self._filter_stage == Stage.WANTED and self._fault_log_stage == Stage.RECEIVED:
            logger.debug("requesting filter settings")
            self._filter_stage = Stage.REQUESTED
            return [MessageType.SETTINGS_REQUEST, 0x01, 0x00, 0x00]
        return [MessageType.NOTHING_TO_SEND]

    def _send(self, payload: List[int]) -> None:
        self._port.write(build_frame(int(b) & 0xFF for b in payload))
        self._port.flush()

    # Decoders

    def _decode_config(self, frame: bytes) -> None:
        self._config = decode_config(frame)
        logger.debug("got config %s", self._config)
        self._config_stage = Stage.RECEIVED

    def _decode_fault(self, frame: bytes) -> None:
        self._fault_log = decode_fault(frame)
        logger.debug("got fault log %s", self._fault_log)
        self._fault_log_stage = Stage.RECEIVED

    def _decode_filter_settings(self, frame: bytes) -> None:
        settings = decode_filter_settings(frame)
        self._filter_settings = settings
        logger.debug("filter1 %s", settings.filter1_payload())
        logger.debug("filter2 enabled %s", "ON" if settings.filter2_enabled else "OFF")
        logger.debug("filter2 %s", settings.filter2_payload())
        self._filter_stage = Stage.RECEIVED

    def _to_degrees(self, raw: int) -> float:
        if self._config.temp_scale == 1:
            return (raw - 32.0) * 5.0 / 9.0
        return raw / 2.0

    def _decode_state(self, frame: bytes) -> None:
        if len(frame) <= 25:
            raise ValueError(f"status frame needs at least 26 bytes, got {len(frame)}")
        state = self._state

        target = self._to_degrees(frame[25])
        if target != 0 and MIN_TEMPERATURE <= target <= MAX_TEMPERATURE:
            state.add_target_temp(target)
            logger.debug("target temperature %.2f", target)

        current = self._to_degrees(frame[7]) if frame[7] != 0xFF else 0.0
        if current != 0 and current < 100:
            state.add_current_temp(current)
            logger.debug("current temperature %.2f", current)

        self._set_hour = frame[8]
        self._set_minute = frame[9]
        state.hour = frame[8] & 0x1F
        state.minutes = frame[9] & 0x3F

        state.add_rest_mode(frame[10])
        state.add_heat_state(_bit(frame[15], 4))

        state.highrange = _bit(frame[15], 2)
        state.jet1 = _bit(frame[16], 1)
        state.jet2 = _bit(frame[16], 3)
        state.jet3 = _bit(frame[16], 5)
        state.circulation = _bit(frame[18], 1)
        state.blower = _bit(frame[18], 2)
        state.light = int(frame[19] == 0x03)

        self._last_state_crc = frame[frame[1]]