"""Reports memory usage from /proc/meminfo."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .util import ModuleError

MEMINFO_PATH = Path("/proc/meminfo")

# /proc/meminfo reports kibibytes; values are kept in kilobytes.
_KIB_TO_KB = 1.024


@dataclass
class MemoryInfo:
    used_kb: int = 0
    max_kb: int = 0
    percentage: float = 0.0


def _parse_value(line: str, what: str) -> int:
    try:
        value = line.split(": ")[1]
    except IndexError as exc:
        raise ModuleError("Memory", f"Could not parse {what} memory: {line!r}") from exc
    value = value[: len(value) - 3].strip()
    try:
        return int(float(value) * _KIB_TO_KB)
    except ValueError as exc:
        raise ModuleError("Memory", f"Could not parse {what} memory: {exc}") from exc


def parse_meminfo(lines: Iterable[str]) -> MemoryInfo:
    """Build memory usage from the lines of a meminfo file."""
    max_kb = 0
    available_kb = 0
    for raw in lines:
        line = raw.rstrip("\r\n")
        if line.startswith("MemTotal"):
            max_kb = _parse_value(line, "total")
        if line.startswith("MemAvailable"):
            available_kb = _parse_value(line, "memfree")
        if max_kb and available_kb:
            break

    if max_kb == 0:
        raise ModuleError("Memory", "Could not find total memory")
    if available_kb > max_kb:
        raise ModuleError("Memory", "Available memory exceeds total memory")

    used_kb = max_kb - available_kb
    return MemoryInfo(
        used_kb=used_kb,
        max_kb=max_kb,
        percentage=used_kb / max_kb * 100.0,
    )


def get_memory() -> MemoryInfo:
    """Memory usage of the running system."""
    try:
        with open(MEMINFO_PATH, encoding="utf-8", errors="replace") as handle:
            return parse_meminfo(handle)
    except OSError as exc:
        raise ModuleError("Memory", f"Can't read from {MEMINFO_PATH} - {exc}") from exc