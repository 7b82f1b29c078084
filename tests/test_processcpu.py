import time

import pytest

from procwatch.processcpu import (
    ProcessCpuStats,
    read_process_clock_cycles,
    read_system_clock_cycles,
)


def _write_system(root, user):
    (root / "stat").write_text(
        f"cpu  {user} 0 0 0 0 0 0 0 0 0\ncpu0 {user} 0 0 0 0 0 0 0 0 0\nintr 5\n"
    )


def _write_process(root, pid, utime, stime):
    d = root / str(pid)
    d.mkdir(exist_ok=True)
    (d / "stat").write_text(
        f"{pid} (worker) S 1 {pid} {pid} 0 -1 4194304 120 0 0 0 "
        f"{utime} {stime} 0 0 20 0 1 0 555 1000 50\n"
    )


@pytest.fixture
def proc_root(tmp_path):
    _write_system(tmp_path, 1000)
    _write_process(tmp_path, 42, 25, 0)
    return tmp_path


def test_system_cycles_read_from_cpu_line(proc_root):
    assert read_system_clock_cycles(proc_root) == 1000


def test_system_cycles_missing_file(tmp_path):
    assert read_system_clock_cycles(tmp_path) == 0


def test_process_cycles_read_utime(proc_root):
    assert read_process_clock_cycles(42, proc_root) == 25


def test_process_cycles_missing_pid(proc_root):
    assert read_process_clock_cycles(99, proc_root) == 0


def test_missing_process_resets_pid(proc_root):
    stats = ProcessCpuStats("ghost", 99, proc_root)
    assert stats.pid == 0
    stats.update()
    assert stats.last_usage_percentage == 0.0


def test_no_system_progress_gives_zero(proc_root):
    stats = ProcessCpuStats("worker", 42, proc_root)
    _write_process(proc_root, 42, 100, 0)
    stats.update()
    assert stats.last_usage_percentage == 0.0


def test_update_computes_share(proc_root):
    stats = ProcessCpuStats("worker", 42, proc_root)
    _write_system(proc_root, 2000)
    _write_process(proc_root, 42, 525, 0)
    before = int(time.time())
    stats.update()
    after = int(time.time())
    data = stats.usage_data()
    assert data.data == pytest.approx(50.0)
    assert before <= data.time <= after


def test_update_uses_deltas_between_samples(proc_root):
    stats = ProcessCpuStats("worker", 42, proc_root)
    _write_system(proc_root, 2000)
    _write_process(proc_root, 42, 525, 0)
    stats.update()
    _write_system(proc_root, 3000)
    _write_process(proc_root, 42, 525, 0)
    stats.update()
    assert stats.last_usage_percentage == 0.0


def test_process_disappears(proc_root):
    stats = ProcessCpuStats("worker", 42, proc_root)
    (proc_root / "42" / "stat").unlink()
    (proc_root / "42").rmdir()
    stats.update()
    assert stats.usage_data().data == 0.0