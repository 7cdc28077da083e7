"""Reports how long the system has been running."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from pathlib import Path

import psutil

from .util import ModuleError, file_read

UPTIME_PATH = Path("/proc/uptime")

_YEAR = 31_557_600  # 365.25 days
_MONTH = 2_630_016  # 30.44 days
_DAY = 86_400


@dataclass
class UptimeInfo:
    uptime: int = 0  # whole seconds

    def replace_placeholders(self, text: str) -> str:
        return text.replace("{time}", format_duration(self.uptime))


def format_duration(seconds: int) -> str:
    """Human readable duration such as ``1day 2h 3m 4s``."""
    if seconds == 0:
        return "0s"
    years, rest = divmod(seconds, _YEAR)
    months, rest = divmod(rest, _MONTH)
    days, rest = divmod(rest, _DAY)
    hours, rest = divmod(rest, 3600)
    minutes, secs = divmod(rest, 60)

    parts = [
        f"{value}{unit}{'s' if value > 1 else ''}"
        for value, unit in ((years, "year"), (months, "month"), (days, "day"))
        if value > 0
    ]
    parts += [
        f"{value}{unit}"
        for value, unit in ((hours, "h"), (minutes, "m"), (secs, "s"))
        if value > 0
    ]
    return " ".join(parts)


def parse_uptime(contents: str) -> UptimeInfo:
    """Uptime from the contents of /proc/uptime."""
    try:
        seconds = float(contents.split(" ")[0])
    except ValueError as exc:
        raise ModuleError("Uptime", f"Could not parse {UPTIME_PATH}: {exc}") from exc
    return UptimeInfo(uptime=math.floor(seconds))


def get_uptime() -> UptimeInfo:
    """Uptime of the running system."""
    try:
        contents = file_read(UPTIME_PATH)
    except (OSError, UnicodeDecodeError):
        return UptimeInfo(uptime=max(0, int(time.time() - psutil.boot_time())))
    return parse_uptime(contents)