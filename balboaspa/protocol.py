"""Framing, checksums and message decoding for the spa's RS-485 bus."""

from __future__ import annotations

from collections import deque
from enum import IntEnum
from typing import Deque, Iterable, Optional

from .types import SpaConfig, SpaFaultLog, SpaFilterSettings, fault_message

SOF = 0x7E
MAX_FRAME_LENGTH = 35


class MessageType(IntEnum):
    """Message type byte, found at index 4 of a frame."""

    NEW_CLIENT_CLEAR_TO_SEND = 0x00
    CHANNEL_ASSIGNMENT_REQUEST = 0x01
    CHANNEL_ASSIGNMENT_RESPONSE = 0x02
    CHANNEL_ASSIGNMENT_ACK = 0x03
    CLEAR_TO_SEND = 0x06
    NOTHING_TO_SEND = 0x07
    TOGGLE_ITEM = 0x11
    STATUS_UPDATE = 0x13
    SET_TEMPERATURE = 0x20
    SET_TIME = 0x21
    SETTINGS_REQUEST = 0x22
    FILTER_CYCLES = 0x23
    FAULT_LOG = 0x28
    CONFIGURATION = 0x2E


def crc8(data: Iterable[int]) -> int:
    """Checksum of a frame body: CRC-8, polynomial 0x07, init and final xor 0x02."""
    crc = 0x02
    for byte in data:
        crc ^= byte
        for _ in range(8):
            if crc & 0x80:
                crc = ((crc << 1) ^ 0x07) & 0xFF
            else:
                crc = (crc << 1) & 0xFF
    return crc ^ 0x02


def build_frame(payload: Iterable[int]) -> bytes:
    """Wrap a payload with length byte, checksum and start/end markers."""
    body = bytes(payload)
    if len(body) + 4 > MAX_FRAME_LENGTH:
        raise ValueError(f"payload of {len(body)} bytes does not fit in a frame")
    body = bytes([len(body) + 2]) + body
    return bytes([SOF]) + body + bytes([crc8(body), SOF])


class FrameReader:
    """Collects bytes from the bus and yields complete frames."""

    def __init__(self) -> None:
        self._buffer: Deque[int] = deque(maxlen=MAX_FRAME_LENGTH)

    def feed(self, byte: int) -> Optional[bytes]:
        """Add one received byte; return the frame it completes, if any."""
        buffer = self._buffer
        buffer.append(byte & 0xFF)

        if buffer[0] != SOF:
            buffer.clear()

        # A doubled start marker: keep only the first.
        if len(buffer) > 1 and buffer[1] == SOF:
            buffer.pop()

        if byte == SOF and len(buffer) > 2:
            frame = bytes(buffer)
            buffer.clear()
            return frame
        return None


def _require(frame: bytes, last_index: int, what: str) -> None:
    if len(frame) <= last_index:
        raise ValueError(
            f"{what} frame needs at least {last_index + 1} bytes, got {len(frame)}"
        )


def decode_config(frame: bytes) -> SpaConfig:
    """Decode a configuration response."""
    _require(frame, 9, "configuration")
    return SpaConfig(
        pump1=frame[5] & 0x03,
        pump2=(frame[5] & 0x0C) >> 2,
        pump3=(frame[5] & 0x30) >> 4,
        pump4=(frame[5] & 0xC0) >> 6,
        pump5=frame[6] & 0x03,
        pump6=(frame[6] & 0xC0) >> 6,
        light1=frame[7] & 0x03,
        light2=(frame[7] >> 2) & 0x03,
        circ=(frame[8] & 0x80) != 0,
        blower=(frame[8] & 0x03) != 0,
        mister=(frame[9] & 0x30) != 0,
        aux1=(frame[9] & 0x01) != 0,
        aux2=(frame[9] & 0x02) != 0,
        temp_scale=frame[3] & 0x01,
    )


def decode_fault(frame: bytes) -> SpaFaultLog:
    """Decode a fault log response."""
    _require(frame, 10, "fault log")
    code = frame[7]
    return SpaFaultLog(
        total_entries=frame[5],
        current_entry=frame[6],
        fault_code=code,
        fault_message=fault_message(code),
        days_ago=frame[8],
        hour=frame[9],
        minutes=frame[10],
    )


def decode_filter_settings(frame: bytes) -> SpaFilterSettings:
    """Decode a filter cycles response."""
    _require(frame, 12, "filter cycles")
    return SpaFilterSettings(
        filter1_hour=frame[5],
        filter1_minute=frame[6],
        filter1_duration_hour=frame[7],
        filter1_duration_minute=frame[8],
        filter2_enabled=bool(frame[9] & 0x80),
        filter2_hour=frame[9] & 0x7F,
        filter2_minute=frame[10],
        filter2_duration_hour=frame[11],
        filter2_duration_minute=frame[12],
    )