import time

import pytest

from procwatch.processdisk import ProcessDiskStats, read_io_counter

BASE = 1_700_000_000.0


def _write_io(root, pid, read_bytes, write_bytes):
    proc = root / str(pid)
    proc.mkdir(exist_ok=True)
    (proc / "io").write_text(
        "rchar: 5000\n"
        "wchar: 6000\n"
        "syscr: 10\n"
        "syscw: 20\n"
        f"read_bytes: {read_bytes}\n"
        f"write_bytes: {write_bytes}\n"
        "cancelled_write_bytes: 0\n"
    )


def test_read_io_counter_sums_read_and_write(tmp_path):
    _write_io(tmp_path, 42, 4096, 8192)
    assert read_io_counter(42, tmp_path) == 12288


def test_read_io_counter_missing_process(tmp_path):
    assert read_io_counter(99, tmp_path) == 0


def test_missing_process_resets_pid(tmp_path):
    stats = ProcessDiskStats(99, tmp_path)
    assert stats.pid == 0
    stats.update()
    assert stats.last_speed == 0
    assert stats.last_io == 0


def test_update_measures_speed(tmp_path):
    _write_io(tmp_path, 42, 1000, 0)
    stats = ProcessDiskStats(42, tmp_path)
    assert stats.last_io == 1000
    time.sleep(0.05)
    _write_io(tmp_path, 42, 3000, 0)
    stats.update()
    assert stats.last_io == 3000
    assert stats.last_speed > 0
    assert stats.last_retrieved_time > 0
    sample = stats.last_speed_mb()
    assert sample.data * 1024 * 1024 == pytest.approx(stats.last_speed)
    assert sample.time == stats.last_retrieved_time


def test_update_with_zero_counter_clears_speed(tmp_path):
    _write_io(tmp_path, 42, 0, 0)
    stats = ProcessDiskStats(42, tmp_path)
    stats.update()
    assert stats.last_speed == 0
    assert stats.last_io == 0


def test_same_second_is_merged(tmp_path):
    stats = ProcessDiskStats(99, tmp_path)
    stats.add_data(BASE, 100)
    stats.add_data(BASE + 0.5, 50)
    assert stats.has_data() is False
    stats.add_data(BASE + 1, 7)
    assert stats.has_data() is True
    first = stats.pop_front_mb()
    assert first.time == BASE
    assert first.data == pytest.approx((100 + 50) / (1024 * 1024))
    assert stats.has_data() is False


def test_older_events_are_ignored(tmp_path):
    stats = ProcessDiskStats(99, tmp_path)
    stats.add_data(BASE, 100)
    stats.add_data(BASE - 5, 999)
    first = stats.pop_front_mb()
    assert first.data == pytest.approx(100 / (1024 * 1024))
    with pytest.raises(IndexError):
        stats.pop_front_mb()


def test_pop_from_empty_raises(tmp_path):
    stats = ProcessDiskStats(99, tmp_path)
    with pytest.raises(IndexError):
        stats.pop_front_mb()