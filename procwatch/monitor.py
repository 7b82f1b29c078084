"""The monitoring loop: watch configured processes and queue alert logs."""

from __future__ import annotations

import argparse
import sys
import time
from collections import deque
from pathlib import Path
from typing import Iterable

from procwatch.collections import MonitoringComponent, bytes_to_text, text_to_bytes
from procwatch.mutex import NamedMutex
from procwatch.process import DEFAULT_PROC_ROOT
from procwatch.processsupervision import ProcessSupervision

_FIELDS_PER_ENTRY = 5


def default_config_path() -> Path:
    """Where the controller stores the per-process limits."""
    return Path.home() / ".config" / "Process Monitoring" / "ProcessMonitoringStats"


def parse_config(text: str) -> list[tuple[str, MonitoringComponent]]:
    """Parse whitespace-separated records: name cpu mem disk network."""
    tokens = text.split()
    if len(tokens) % _FIELDS_PER_ENTRY:
        raise ValueError("incomplete configuration record")
    entries = []
    for start in range(0, len(tokens), _FIELDS_PER_ENTRY):
        name, *numbers = tokens[start:start + _FIELDS_PER_ENTRY]
        try:
            cpu, mem, disk, net = (float(n) for n in numbers)
        except ValueError as exc:
            raise ValueError(f"invalid limit for process {name!r}") from exc
        entries.append((name, MonitoringComponent(cpu, mem, disk, net)))
    return entries


def format_config(entries: Iterable[tuple[str, MonitoringComponent]]) -> str:
    """Write records in the form read by :func:`parse_config`."""
    lines = []
    for name, limits in entries:
        if not name or any(c.isspace() for c in name):
            raise ValueError(f"process name cannot be stored: {name!r}")
        values = (limits.cpu_usage, limits.mem_usage, limits.disk_usage, limits.network_usage)
        lines.append(" ".join([name, *(repr(float(v)) for v in values)]) + "\n")
    return "".join(lines)


class Monitor:
    """Watches every configured process and queues the alerts it produces."""

    def __init__(
        self,
        config_path: str | Path | None = None,
        proc_root: str | Path = DEFAULT_PROC_ROOT,
    ) -> None:
        self.config_path = Path(config_path) if config_path is not None else default_config_path()
        self.proc_root = Path(proc_root)
        self.processes: list[ProcessSupervision] = []
        self._logs: deque[bytes] = deque()
        self._log_mutex = NamedMutex("pm_cta_logs")
        self._config_mutex = NamedMutex("config_reg")
        self._inner_mutex = NamedMutex("")
        self.reload_config()

    def reload_config(self) -> None:
        """Read the limits file and rebuild the list of watched processes."""
        with self._config_mutex:
            try:
                text = self.config_path.read_text(encoding="utf-8", errors="replace")
            except OSError:
                text = ""
        entries = parse_config(text)
        with self._inner_mutex:
            self.processes = [
                ProcessSupervision(name, limits, self.proc_root) for name, limits in entries
            ]

    def run_cycle(self) -> str:
        """Sample every process once; queue and return the alert log text."""
        with self._inner_mutex:
            for supervised in self.processes:
                supervised.try_attach()
            lines = []
            for supervised in self.processes:
                supervised.update_stats()
                supervised.check_stats()
                lines.extend(f"{alert}\n" for alert in supervised.take_alerts())
        log = "".join(lines)
        if log:
            with self._log_mutex:
                self._logs.append(text_to_bytes(log))
        return log

    def pop_log(self) -> bytes | None:
        """Remove and return the oldest queued log, or None if there is none."""
        with self._log_mutex:
            return self._logs.popleft() if self._logs else None

    def run(self, cycles: int | None = None, interval: float = 1.0) -> None:
        """Run ``cycles`` cycles (forever when None), one per ``interval`` seconds."""
        done = 0
        while cycles is None or done < cycles:
            start = time.monotonic()
            self.run_cycle()
            done += 1
            _sleep_rest(start, interval)


def _sleep_rest(start: float, interval: float) -> None:
    remaining = interval - (time.monotonic() - start)
    if remaining > 0:
        time.sleep(remaining)


def _mtime(path: Path) -> float | None:
    try:
        return path.stat().st_mtime
    except OSError:
        return None


def main(argv: list[str] | None = None) -> int:
    """Watch the configured processes and write alerts to standard output."""
    parser = argparse.ArgumentParser(prog="procwatch", description=main.__doc__)
    parser.add_argument("--config", type=Path, default=None, help="limits file")
    parser.add_argument("--proc-root", default=DEFAULT_PROC_ROOT, help="proc filesystem root")
    parser.add_argument("--interval", type=float, default=1.0, help="seconds between cycles")
    parser.add_argument("--cycles", type=int, default=None, help="stop after this many cycles")
    args = parser.parse_args(argv)

    try:
        monitor = Monitor(args.config, args.proc_root)
    except ValueError as exc:
        print(f"procwatch: {exc}", file=sys.stderr)
        return 1

    seen_mtime = _mtime(monitor.config_path)
    done = 0
    try:
        while args.cycles is None or done < args.cycles:
            start = time.monotonic()
            current_mtime = _mtime(monitor.config_path)
            if current_mtime != seen_mtime:
                seen_mtime = current_mtime
                try:
                    monitor.reload_config()
                except ValueError as exc:
                    print(f"procwatch: {exc}", file=sys.stderr)
            monitor.run_cycle()
            while (entry := monitor.pop_log()) is not None:
                sys.stdout.write(bytes_to_text(entry))
            sys.stdout.flush()
            done += 1
            _sleep_rest(start, args.interval)
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())