"""Checking a process's resource usage against configured limits."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from procwatch.collections import MonitoringComponent, ProcessLoggerType, UsageData
from procwatch.process import DEFAULT_PROC_ROOT
from procwatch.processcontroller import ProcessController


@dataclass(frozen=True)
class Alert:
    """A reading of one resource that went over its limit."""

    process_name: str
    pid: int
    kind: ProcessLoggerType
    usage: UsageData
    limit: float

    def __str__(self) -> str:
        moment = datetime.fromtimestamp(self.usage.time, tz=timezone.utc)
        return (
            f"{moment.isoformat()} {self.process_name} pid={self.pid} "
            f"{self.kind.value} usage {self.usage.data:.4f} > {self.limit:.4f}"
        )


class ProcessSupervision(ProcessController):
    """A watched process that raises alerts when it exceeds its limits."""

    def __init__(
        self,
        name: str = "",
        max_usage: MonitoringComponent | None = None,
        proc_root: str | Path = DEFAULT_PROC_ROOT,
    ) -> None:
        self.max_usage = max_usage if max_usage is not None else MonitoringComponent()
        self.alerts: list[Alert] = []
        super().__init__(name, proc_root)

    def update_stats(self) -> None:
        """Refresh the statistics if the process is still running."""
        if self.exists() and self.process_info is not None:
            self.process_info.update()

    def _alert(self, kind: ProcessLoggerType, usage: UsageData, limit: float) -> None:
        self.alerts.append(Alert(self.name, self.pid, kind, usage, limit))

    def check_stats(self) -> None:
        """Compare the latest statistics with the limits and record alerts."""
        info = self.process_info
        if info is None:
            return
        limits = self.max_usage

        usage = info.memory_stats.usage_data()
        if usage.data > limits.mem_usage:
            self._alert(ProcessLoggerType.MEM, usage, limits.mem_usage)

        usage = info.cpu_stats.usage_data()
        if int(usage.data * 10000) > int(limits.cpu_usage * 10000):
            self._alert(ProcessLoggerType.CPU, usage, limits.cpu_usage)

        disk = info.disk_stats
        while disk.has_data():
            usage = disk.pop_front_mb()
            if usage.data > limits.disk_usage:
                self._alert(ProcessLoggerType.DISK, usage, limits.disk_usage)

        network = info.network_stats
        while network.has_data():
            usage = network.pop_front_kb()
            if usage.data > limits.network_usage:
                self._alert(ProcessLoggerType.NET, usage, limits.network_usage)

        usage = disk.last_speed_mb()
        if usage.data > limits.disk_usage:
            self._alert(ProcessLoggerType.DISK, usage, limits.disk_usage)

        usage = network.last_speed_kb()
        if usage.data > limits.network_usage:
            self._alert(ProcessLoggerType.NET, usage, limits.network_usage)

    def take_alerts(self) -> list[Alert]:
        """Return the recorded alerts and forget them."""
        alerts, self.alerts = self.alerts, []
        return alerts