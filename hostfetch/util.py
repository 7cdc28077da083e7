"""Small helpers shared by the information modules."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, "os.PathLike[str]"]

WSL_INTEROP = Path("/proc/sys/fs/binfmt_misc/WSLInterop")


class ModuleError(Exception):
    """Raised when an information module cannot gather its data."""

    def __init__(self, module: str, message: str) -> None:
        super().__init__(f"{module}: {message}")
        self.module = module
        self.message = message


def file_read(path: PathLike) -> str:
    """Return the whole text of a small file."""
    return Path(path).read_text(encoding="utf-8")


def find_first_path_exists(paths: Iterable[PathLike]) -> Optional[Path]:
    """Return the first of ``paths`` that exists, or None."""
    return next((Path(p) for p in paths if Path(p).exists()), None)


def is_flag_set(value: int, flag: int) -> bool:
    """True if ``value`` shares any bit with ``flag``."""
    return (value & flag) > 0


def in_wsl() -> bool:
    """True when running under the Windows Subsystem for Linux."""
    return WSL_INTEROP.exists()