"""Resident memory of a process, read from a proc filesystem."""

from __future__ import annotations

import time
from pathlib import Path

from procwatch.collections import UsageData
from procwatch.process import DEFAULT_PROC_ROOT


def read_resident_memory(pid: int, proc_root: str | Path = DEFAULT_PROC_ROOT) -> float:
    """The ``VmRSS`` figure (in kB) from the process status file, or 0.0."""
    try:
        with open(Path(proc_root) / str(pid) / "status", encoding="utf-8", errors="replace") as fh:
            for line in fh:
                if line.startswith("VmRSS"):
                    fields = line.split()
                    if len(fields) >= 2:
                        try:
                            return float(fields[1])
                        except ValueError:
                            return 0.0
                    return 0.0
    except OSError:
        pass
    return 0.0


class ProcessMemoryStats:
    """Tracks the resident memory of one process.

    The usage is the ``VmRSS`` figure divided by 1024 * 1024.
    """

    def __init__(
        self,
        process_name: str = "",
        pid: int = 0,
        proc_root: str | Path = DEFAULT_PROC_ROOT,
    ) -> None:
        self.process_name = process_name
        self.pid = pid
        self.proc_root = Path(proc_root)
        self.memory_usage = 0.0
        self.last_retrieved_time = 0

    def update(self) -> None:
        """Read the current resident memory."""
        if not (self.proc_root / str(self.pid)).is_dir():
            self.memory_usage = 0.0
            return
        usage = read_resident_memory(self.pid, self.proc_root)
        self.last_retrieved_time = int(time.time())
        self.memory_usage = usage / (1024 * 1024)

    def usage_data(self) -> UsageData:
        """The last reading as a timestamped value."""
        return UsageData(time=self.last_retrieved_time, data=self.memory_usage)