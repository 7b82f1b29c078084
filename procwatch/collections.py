"""Shared value types and small helpers used across the monitor."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ProcessLoggerType(enum.Enum):
    """Kind of resource an alert refers to."""

    CPU = "cpu"
    MEM = "mem"
    DISK = "disk"
    NET = "net"


class Command(enum.IntEnum):
    """Message types exchanged between the monitor and its controller."""

    CTB_NOTI_CONFIG = 1
    CTA_SEND_LOGS = 2


class IoType(enum.IntEnum):
    """Kind of I/O event."""

    DISK_IO = 1
    NETWORK_IO = 2


@dataclass
class UsageData:
    """A single measurement: a timestamp (seconds since the epoch) and a value."""

    time: float = 0.0
    data: float = 0.0


@dataclass
class MonitoringComponent:
    """Resource limits (or readings) for one process."""

    cpu_usage: float = 0.0
    mem_usage: float = 0.0
    disk_usage: float = 0.0
    network_usage: float = 0.0


@dataclass
class IoInfo:
    """One I/O event attributed to a process."""

    time: float = 0.0
    size: int = 0
    pid: int = 0


def bytes_to_text(data: bytes) -> str:
    """Decode raw bytes to text without losing any byte."""
    return bytes(data).decode("utf-8", errors="surrogateescape")


def text_to_bytes(text: str) -> bytes:
    """Encode text to bytes; the inverse of :func:`bytes_to_text`."""
    return text.encode("utf-8", errors="surrogateescape")