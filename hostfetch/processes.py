"""Counts running processes by scanning /proc."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .util import ModuleError

PathLike = Union[str, "os.PathLike[str]"]

PROC_ROOT = Path("/proc")

_PID_NAME = re.compile(r"\+?[0-9]+")
_MAX_PID = 2**64


@dataclass
class ProcessesInfo:
    count: int = 0

    def replace_placeholders(self, text: str) -> str:
        return text.replace("{count}", str(self.count))


def _is_pid(name: str) -> bool:
    return _PID_NAME.fullmatch(name) is not None and int(name) < _MAX_PID


def get_process_count(proc_root: Optional[PathLike] = None) -> ProcessesInfo:
    """Number of entries in /proc named by a process id."""
    root = Path(proc_root) if proc_root is not None else PROC_ROOT
    try:
        names = os.listdir(root)
    except OSError as exc:
        raise ModuleError("Processes", f"Failed to read {root}: {exc}") from exc
    return ProcessesInfo(count=sum(1 for name in names if _is_pid(name)))