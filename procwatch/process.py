"""Looking up processes by name in a proc filesystem."""

from __future__ import annotations

import re
from pathlib import Path

DEFAULT_PROC_ROOT = "/proc"

_LEADING_DIGITS = re.compile(r"\d+")


def _clean_name(name: str) -> str:
    return name.split("\0", 1)[0]


def find_process_id_by_name(name: str, proc_root: str | Path = DEFAULT_PROC_ROOT) -> int:
    """Return the pid of the first process whose ``comm`` equals ``name``, or 0."""
    root = Path(proc_root)
    try:
        entries = [e for e in root.iterdir() if e.name[:1].isdigit() and e.is_dir()]
    except OSError:
        return 0
    entries.sort(key=lambda e: int(_LEADING_DIGITS.match(e.name).group()))
    for entry in entries:
        try:
            with open(entry / "comm", encoding="utf-8", errors="replace") as fh:
                comm = fh.readline().rstrip("\n")
        except OSError:
            continue
        if comm and comm == name:
            return int(_LEADING_DIGITS.match(entry.name).group())
    return 0


class Process:
    """A named process and the pid found for it (0 when not running)."""

    def __init__(self, name: str = "", proc_root: str | Path = DEFAULT_PROC_ROOT) -> None:
        self.proc_root = Path(proc_root)
        self.name = _clean_name(name)
        self.pid = find_process_id_by_name(self.name, self.proc_root) if self.name else 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, pid={self.pid})"