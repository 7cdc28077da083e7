"""Detects the init system from the command line of process 1."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag
from pathlib import Path
from typing import Optional

from .package_managers import ManagerInfo
from .process_info import ProcessInfo
from .util import ModuleError
from .versions import find_version

PROC_ROOT = Path("/proc")
INIT_PID = 1


class InitSysFlag(IntFlag):
    NAME = 1
    PATH = 2
    VERSION = 4


@dataclass
class InitSystemInfo:
    name: str = "Unknown"
    path: str = "Unknown"
    version: str = "Unknown"

    def replace_placeholders(self, text: str) -> str:
        return (
            text.replace("{name}", self.name)
            .replace("{path}", self.path)
            .replace("{version}", self.version)
        )


def gen_info_flags(format_str: str) -> InitSysFlag:
    """Which pieces of information a format string needs."""
    flags = InitSysFlag(0)
    if "{name}" in format_str:
        flags |= InitSysFlag.NAME | InitSysFlag.PATH
    if "{path}" in format_str:
        flags |= InitSysFlag.PATH
    if "{version}" in format_str:
        flags |= InitSysFlag.NAME | InitSysFlag.PATH | InitSysFlag.VERSION
    return flags


def get_init_system(
    format_str: str, package_managers: Optional[ManagerInfo] = None
) -> InitSystemInfo:
    """Name, resolved path and version of the init system."""
    flags = gen_info_flags(format_str)
    info = InitSystemInfo()
    process = ProcessInfo(INIT_PID, PROC_ROOT)

    if flags & InitSysFlag.PATH:
        try:
            path = process.cmdline()[0]
        except ProcessLookupError as exc:
            raise ModuleError(
                "InitSys", f"Failed to read from root process cmdline: {exc}"
            ) from exc
        try:
            info.path = str(Path(path).resolve(strict=True))
        except (OSError, RuntimeError) as exc:
            raise ModuleError(
                "InitSys", f"Failed to canonicalize {path} symlink: {exc}"
            ) from exc

    if flags & InitSysFlag.NAME:
        info.name = info.path.split("/")[-1]

    if flags & InitSysFlag.VERSION:
        if info.name == "init":
            # Most likely sysvinit, which has no way to report its version.
            info.version = "Unknown"
        else:
            info.version = find_version(info.path, info.name, package_managers) or "Unknown"

    return info