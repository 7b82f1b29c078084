"""Network throughput of a process."""

from __future__ import annotations

from pathlib import Path

from procwatch.collections import UsageData
from procwatch.process import DEFAULT_PROC_ROOT
from procwatch.processdisk import _IoSeries


class ProcessNetworkStats:
    """Tracks network throughput of one process, fed as timestamped events."""

    def __init__(self, pid: int = 0, proc_root: str | Path = DEFAULT_PROC_ROOT) -> None:
        self.pid = pid
        self.proc_root = Path(proc_root)
        self.last_retrieved_time = 0
        self.last_data_recv = 0
        self.last_data_sent = 0
        self.last_speed = 0.0
        self._series = _IoSeries()
        if not (self.proc_root / str(pid)).is_dir():
            self.pid = 0

    def update(self) -> None:
        """Reset the known speed once the process is gone; otherwise keep it.

        The proc filesystem offers no per-process network counters, so a
        running process keeps its last known speed.
        """
        if not (self.proc_root / str(self.pid)).is_dir():
            self.last_speed = 0.0
            self.last_data_recv = 0
            self.last_data_sent = 0

    def last_speed_kb(self) -> UsageData:
        """The last known speed in kilobytes per second."""
        return UsageData(time=self.last_retrieved_time, data=self.last_speed)

    def add_data(self, time: float, data: float) -> None:
        """Record ``data`` bytes transferred at ``time`` (seconds since the epoch)."""
        self._series.add(time, data)

    def has_data(self) -> bool:
        """True when at least one completed second is waiting to be taken."""
        return len(self._series) > 1

    def pop_front_kb(self) -> UsageData:
        """Remove and return the oldest second's total, in kilobytes."""
        entry = self._series.pop_front()
        return UsageData(time=entry.time, data=entry.data / 1024)