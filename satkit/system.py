"""Process time and memory measurements."""

from __future__ import annotations

import mmap
import re
import sys
import time

try:
    import resource
except ImportError:  # not available on every platform
    resource = None

_PROC_SELF = "/proc/self"
_MB = 1024 * 1024
_VMPEAK = re.compile(r"VmPeak:\s*(\d+)\s*kB")


def cpu_time() -> float:
    """User CPU time of this process in seconds."""
    if resource is not None:
        return resource.getrusage(resource.RUSAGE_SELF).ru_utime
    return time.process_time()


def real_time() -> float:
    """Wall-clock time in seconds since the epoch."""
    return time.time()


def _read_statm(field: int) -> int:
    try:
        with open(f"{_PROC_SELF}/statm", encoding="ascii") as handle:
            words = handle.read().split()
    except OSError:
        return 0
    try:
        return int(words[field])
    except (IndexError, ValueError) as exc:
        raise RuntimeError(
            'ERROR! Failed to parse memory statistics from "/proc".'
        ) from exc


def _read_peak_kb() -> int:
    try:
        with open(f"{_PROC_SELF}/status", encoding="ascii", errors="replace") as handle:
            for line in handle:
                found = _VMPEAK.match(line)
                if found:
                    return int(found.group(1))
    except OSError:
        return 0
    return 0


def mem_used() -> float:
    """Memory in use in megabytes; 0 where it cannot be measured."""
    if sys.platform.startswith("linux"):
        return _read_statm(0) * mmap.PAGESIZE / _MB
    if resource is not None and sys.platform.startswith("freebsd"):
        return resource.getrusage(resource.RUSAGE_SELF).ru_maxrss / 1024
    if resource is not None and sys.platform == "darwin":
        return resource.getrusage(resource.RUSAGE_SELF).ru_maxrss / _MB
    return 0.0


def mem_used_peak() -> float:
    """Peak memory in megabytes, falling back to the current use."""
    if sys.platform.startswith("linux"):
        peak = float(_read_peak_kb() // 1024)
        return mem_used() if peak == 0 else peak
    return mem_used()