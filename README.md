# procwatch

procwatch watches a list of processes, chosen by name, and records an alert
whenever one of them goes over the CPU, memory, disk or network limit set for
it. It reads what it needs from a Linux `/proc` filesystem (or any directory
laid out the same way) and uses only the standard library.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Configuration

The limits file is plain text. Each record is a process name followed by four
limits, all separated by whitespace:

```
nginx    50.0  0.5  20  1024
postgres 80.0  2.0  50   512
```

The fields are, in order:

1. the process name, compared exactly with `/proc/<pid>/comm`
2. CPU: the process's share of all CPU ticks counted on the aggregate `cpu`
   line of `/proc/stat` since the last sample, in percent
3. memory: the `VmRSS` figure of `/proc/<pid>/status` (kB) divided by
   1024 * 1024
4. disk: bytes read plus written per second, in megabytes
5. network: bytes per second, in kilobytes

A value is an alert when it is strictly greater than its limit (CPU is
compared to four decimal places). A file whose token count is not a multiple
of five, or with a limit that is not a number, raises `ValueError`.

By default the file is `~/.config/Process Monitoring/ProcessMonitoringStats`.

`procwatch.monitor.parse_config` reads such text into a list of
`(name, MonitoringComponent)` pairs, and `procwatch.monitor.format_config`
writes pairs back out; names that are empty or contain whitespace are refused
with `ValueError`.

## Running

```
procwatch [--config PATH] [--proc-root DIR] [--interval SECONDS] [--cycles N]
```

Once per interval (1 second by default) the command looks each configured
process up again if it has gone away, refreshes its figures, checks them
against the limits and prints any alerts to standard output, one per line:

```
2024-05-01T10:00:00+00:00 nginx pid=1234 cpu usage 63.2000 > 50.0000
```

When the limits file changes on disk it is read again before the next cycle.
It runs until `--cycles` cycles are done, or until interrupted with Ctrl-C.
If the limits file cannot be parsed at start-up it exits with status 1.

## Using it from Python

```python
from procwatch.monitor import Monitor

monitor = Monitor("watch.conf", "/proc")   # reads the limits file
log = monitor.run_cycle()                  # alert text of this cycle
entry = monitor.pop_log()                  # oldest queued log as bytes, or None
monitor.run(cycles=10, interval=1.0)       # several cycles in a row
```

The building blocks can also be used alone:

- `procwatch.process.find_process_id_by_name(name, proc_root)` returns the
  lowest pid whose `comm` equals `name`, or 0.
- `ProcessCpuStats`, `ProcessMemoryStats`, `ProcessDiskStats` and
  `ProcessNetworkStats` each track one kind of usage for one pid; call
  `update()` to sample and read the result with `usage_data()`,
  `last_speed_mb()` or `last_speed_kb()`.
- `ProcessDiskStats` and `ProcessNetworkStats` also accept timestamped I/O
  events through `add_data(time, data)`; events in the same second are summed,
  and `has_data()` / `pop_front_mb()` / `pop_front_kb()` hand over completed
  seconds.
- `ProcessInfo` bundles the four for one process; `ProcessController` looks the
  process up by name and, with `try_attach()`, again after it restarts.
- `ProcessSupervision` checks the figures against a `MonitoringComponent` of
  limits and collects `Alert` records, which `take_alerts()` hands over.
- `NamedMutex` is a lock shared by every instance with the same name (across
  processes too, through a lock file in the temporary directory); it works as
  a context manager.

## What it does not do

- `/proc` has no per-process network counters, so `update()` never measures
  network speed; network alerts come only from events given to
  `ProcessNetworkStats.add_data`.
- Alert logs are queued in memory and printed by the command; they are not
  sent to any other program or written to a log file.
- It does not write the limits file for you beyond `format_config`, and does
  not install itself as a service or start-up program.