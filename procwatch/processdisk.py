"""Disk I/O throughput of a process."""

from __future__ import annotations

import time
from collections import deque
from datetime import datetime, timezone
from pathlib import Path

from procwatch.collections import UsageData
from procwatch.process import DEFAULT_PROC_ROOT

_BYTES_PER_MB = 1024 * 1024


def read_io_counter(pid: int, proc_root: str | Path = DEFAULT_PROC_ROOT) -> int:
    """Bytes read plus bytes written by ``pid``, or 0 if it cannot be read."""
    proc_dir = Path(proc_root) / str(pid)
    if not proc_dir.is_dir():
        return 0
    read_bytes = 0
    write_bytes = 0
    try:
        with open(proc_dir / "io", encoding="utf-8", errors="replace") as fh:
            for line in fh:
                fields = line.split()
                if line.startswith("read_bytes") and len(fields) >= 2:
                    read_bytes = int(fields[1])
                if line.startswith("write_bytes") and len(fields) >= 2:
                    write_bytes = int(fields[1])
                    break
    except (OSError, ValueError):
        return 0
    return read_bytes + write_bytes


def _bucket(timestamp: float) -> tuple[int, int]:
    """Key used to merge events that fall in the same second."""
    moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    year_month = moment.year * 12 + moment.month
    day_seconds = (
        moment.day * 3600 * 12 + moment.hour * 3600 + moment.minute * 60 + moment.second
    )
    return year_month, day_seconds


class _IoSeries:
    """Per-second totals of I/O events, oldest first."""

    def __init__(self) -> None:
        self._entries: deque[UsageData] = deque()

    def add(self, timestamp: float, data: float) -> None:
        if not self._entries:
            self._entries.append(UsageData(time=timestamp, data=float(data)))
            return
        last = self._entries[-1]
        last_ym, last_dhms = _bucket(last.time)
        ym, dhms = _bucket(timestamp)
        if last_ym == ym:
            if last_dhms == dhms:
                last.data += float(data)
            elif last_dhms < dhms:
                self._entries.append(UsageData(time=timestamp, data=float(data)))
        elif last_ym < ym:
            self._entries.append(UsageData(time=timestamp, data=float(data)))

    def __len__(self) -> int:
        return len(self._entries)

    def pop_front(self) -> UsageData:
        return self._entries.popleft()


class ProcessDiskStats:
    """Tracks disk throughput of one process.

    Throughput can either be sampled from the proc filesystem with
    :meth:`update`, or fed as timestamped events with :meth:`add_data`.
    """

    def __init__(self, pid: int = 0, proc_root: str | Path = DEFAULT_PROC_ROOT) -> None:
        self.pid = pid
        self.proc_root = Path(proc_root)
        self.last_retrieved_time = 0
        self.last_io = 0
        self.last_speed = 0
        self._last_time = time.monotonic()
        self._series = _IoSeries()
        if not (self.proc_root / str(pid)).is_dir():
            self.pid = 0
            return
        self.last_io = read_io_counter(self.pid, self.proc_root)
        self._last_time = time.monotonic()

    def update(self) -> None:
        """Sample the I/O counter and recompute the speed in bytes per second."""
        if not (self.proc_root / str(self.pid)).is_dir():
            self.last_speed = 0
            self.last_io = 0
            return
        now = time.monotonic()
        elapsed = now - self._last_time
        current = read_io_counter(self.pid, self.proc_root)
        if current == 0:
            self.last_speed = 0
            self.last_io = 0
            return
        self.last_retrieved_time = int(time.time())
        delta = current - self.last_io
        if elapsed > 0 and delta >= 0:
            self.last_speed = int(delta / elapsed)
        else:
            self.last_speed = 0
        self._last_time = now
        self.last_io = current

    def last_speed_mb(self) -> UsageData:
        """The last sampled speed in megabytes per second."""
        return UsageData(time=self.last_retrieved_time, data=self.last_speed / _BYTES_PER_MB)

    def add_data(self, time: float, data: float) -> None:
        """Record ``data`` bytes transferred at ``time`` (seconds since the epoch)."""
        self._series.add(time, data)

    def has_data(self) -> bool:
        """True when at least one completed second is waiting to be taken."""
        return len(self._series) > 1

    def pop_front_mb(self) -> UsageData:
        """Remove and return the oldest second's total, in megabytes."""
        entry = self._series.pop_front()
        return UsageData(time=entry.time, data=entry.data / 1024 / 1024)