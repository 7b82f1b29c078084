"""CPU usage of a process, sampled from a proc filesystem."""

from __future__ import annotations

import time
from pathlib import Path

from procwatch.collections import UsageData
from procwatch.process import DEFAULT_PROC_ROOT


def read_system_clock_cycles(proc_root: str | Path = DEFAULT_PROC_ROOT) -> int:
    """Sum of the first nine counters of the aggregate ``cpu`` line in ``stat``."""
    try:
        with open(Path(proc_root) / "stat", encoding="utf-8", errors="replace") as fh:
            for line in fh:
                if line.startswith("cpu"):
                    fields = line.split()[1:10]
                    return sum(int(v) for v in fields if v.lstrip("-").isdigit())
    except OSError:
        pass
    return 0


def read_process_clock_cycles(pid: int, proc_root: str | Path = DEFAULT_PROC_ROOT) -> int:
    """User plus system ticks spent by ``pid``, or 0 if it cannot be read."""
    proc_dir = Path(proc_root) / str(pid)
    if not proc_dir.is_dir():
        return 0
    try:
        with open(proc_dir / "stat", encoding="utf-8", errors="replace") as fh:
            line = fh.readline()
    except OSError:
        return 0
    filtered = "".join(c for c in line if c.isdigit() and c.isascii() or c == " ")
    numbers = filtered.split()
    if len(numbers) < 13:
        return 0
    return int(numbers[11]) + int(numbers[12])


class ProcessCpuStats:
    """Tracks the share of total CPU time a process used between updates."""

    def __init__(
        self,
        process_name: str = "",
        pid: int = 0,
        proc_root: str | Path = DEFAULT_PROC_ROOT,
    ) -> None:
        self.process_name = process_name
        self.pid = pid
        self.proc_root = Path(proc_root)
        self.last_usage_percentage = 0.0
        self.last_retrieved_time = 0
        self._last_process_cycles = 0
        self._last_system_cycles = 0
        if not self._proc_dir().is_dir():
            self.pid = 0
            return
        self._last_process_cycles = read_process_clock_cycles(self.pid, self.proc_root)
        self._last_system_cycles = read_system_clock_cycles(self.proc_root)

    def _proc_dir(self) -> Path:
        return self.proc_root / str(self.pid)

    def update(self) -> None:
        """Take a new sample and recompute the usage percentage."""
        self.last_retrieved_time = int(time.time())
        if not self._proc_dir().is_dir():
            self.last_usage_percentage = 0.0
            return
        now_process = read_process_clock_cycles(self.pid, self.proc_root)
        now_system = read_system_clock_cycles(self.proc_root)
        system_delta = now_system - self._last_system_cycles
        if system_delta != 0:
            percent = (now_process - self._last_process_cycles) / system_delta * 100
        else:
            percent = 0.0
        self._last_process_cycles = now_process
        self._last_system_cycles = now_system
        self.last_usage_percentage = percent

    def usage_data(self) -> UsageData:
        """The last sample as a timestamped value."""
        return UsageData(time=self.last_retrieved_time, data=self.last_usage_percentage)