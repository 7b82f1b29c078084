"""Finding a named process and keeping its statistics attached to it."""

from __future__ import annotations

from pathlib import Path

from procwatch.process import DEFAULT_PROC_ROOT, Process, find_process_id_by_name
from procwatch.processinfo import ProcessInfo


class ProcessController(Process):
    """A named process whose pid is looked up again whenever it goes away."""

    def __init__(self, name: str = "", proc_root: str | Path = DEFAULT_PROC_ROOT) -> None:
        super().__init__(name, proc_root)
        self.process_info: ProcessInfo | None = None
        self.attach()

    def attach(self) -> bool:
        """Look up the pid by name and start collecting statistics for it."""
        self.pid = find_process_id_by_name(self.name, self.proc_root)
        if self.pid == 0:
            return False
        if not (self.proc_root / str(self.pid)).is_dir():
            return False
        self.process_info = ProcessInfo(self.name, self.pid, self.proc_root)
        return True

    def exists(self) -> bool:
        """True when the attached process is still running."""
        return self.pid != 0 and (self.proc_root / str(self.pid)).is_dir()

    def try_attach(self) -> bool:
        """Keep the current process if it runs, otherwise look it up again."""
        if self.exists():
            return True
        return self.attach()