"""All resource statistics kept for one process."""

from __future__ import annotations

from pathlib import Path

from procwatch.process import DEFAULT_PROC_ROOT
from procwatch.processcpu import ProcessCpuStats
from procwatch.processdisk import ProcessDiskStats
from procwatch.processmem import ProcessMemoryStats
from procwatch.processnetwork import ProcessNetworkStats


class ProcessInfo:
    """Memory, CPU, disk and network statistics of a single process."""

    def __init__(
        self,
        process_name: str = "",
        pid: int = 0,
        proc_root: str | Path = DEFAULT_PROC_ROOT,
    ) -> None:
        self.process_name = process_name
        self.pid = pid
        self.memory_stats = ProcessMemoryStats(process_name, pid, proc_root)
        self.cpu_stats = ProcessCpuStats(process_name, pid, proc_root)
        self.disk_stats = ProcessDiskStats(pid, proc_root)
        self.network_stats = ProcessNetworkStats(pid, proc_root)

    def update(self) -> None:
        """Refresh every statistic."""
        self.disk_stats.update()
        self.network_stats.update()
        self.cpu_stats.update()
        self.memory_stats.update()