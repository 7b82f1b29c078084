"""Watch named processes through /proc and alert when they exceed resource limits."""

__version__ = "0.1.0"

__all__ = [
    "collections",
    "monitor",
    "mutex",
    "process",
    "processcontroller",
    "processcpu",
    "processdisk",
    "processinfo",
    "processmem",
    "processnetwork",
    "processsupervision",
]