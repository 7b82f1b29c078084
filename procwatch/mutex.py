"""A mutex that may be shared by name across threads and processes."""

from __future__ import annotations

import os
import tempfile
import threading

try:
    import fcntl
except ImportError:  # pragma: no cover - platforms without fcntl
    fcntl = None

_registry_guard = threading.Lock()
_named_locks: dict[str, threading.Lock] = {}


class NamedMutex:
    """Mutual exclusion object.

    An empty name gives a private mutex. A non-empty name gives a mutex that
    every ``NamedMutex`` with the same name shares, within this process and,
    where file locks are available, across processes.
    """

    def __init__(self, name: str = "") -> None:
        self.name = ""
        self._lock: threading.Lock | None = None
        self._fd: int | None = None
        self._owned = False
        self.set_mutex(name)

    def set_mutex(self, name: str) -> None:
        """Close the current mutex and open the one called ``name``."""
        if "/" in name or "\0" in name:
            raise ValueError(f"invalid mutex name: {name!r}")
        self.close()
        self.name = name
        if not name:
            self._lock = threading.Lock()
            return
        with _registry_guard:
            self._lock = _named_locks.setdefault(name, threading.Lock())
        if fcntl is not None:
            path = os.path.join(tempfile.gettempdir(), f"procwatch-{name}.lock")
            self._fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o660)

    def lock(self) -> None:
        """Block until the mutex is acquired."""
        if self._lock is None:
            raise RuntimeError("mutex is closed")
        self._lock.acquire()
        if self._fd is not None:
            fcntl.flock(self._fd, fcntl.LOCK_EX)
        self._owned = True

    def unlock(self) -> None:
        """Release the mutex."""
        if self._lock is None:
            raise RuntimeError("mutex is closed")
        if not self._lock.locked():
            raise RuntimeError("mutex is not locked")
        if self._fd is not None:
            fcntl.flock(self._fd, fcntl.LOCK_UN)
        self._owned = False
        self._lock.release()

    def close(self) -> None:
        """Release any held lock and free the underlying resources."""
        if self._lock is not None and self._owned:
            self.unlock()
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None
        self._lock = None

    def __enter__(self) -> "NamedMutex":
        self.lock()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unlock()

    def __del__(self) -> None:
        try:
            self.close()
        except Exception:
            pass