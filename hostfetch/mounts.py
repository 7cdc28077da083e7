"""Lists mounted physical drives and their space usage."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntFlag
from pathlib import Path
from typing import Optional, Union

from .util import ModuleError, in_wsl

PathLike = Union[str, "os.PathLike[str]"]

MTAB_PATH = Path("/etc/mtab")

_DEVICE_LINK_DIRS = (
    ("UUID=", Path("/dev/disk/by-uuid")),
    ("LABEL=", Path("/dev/disk/by-label")),
    ("PARTLABEL=", Path("/dev/disk/by-partlabel")),
)


class MountsFlag(IntFlag):
    DEVICE = 1
    SPACE_USED = 4
    SPACE_TOTAL = 8
    SPACE_AVAIL = 16


_SPACE_FLAGS = MountsFlag.SPACE_AVAIL | MountsFlag.SPACE_USED | MountsFlag.SPACE_TOTAL


@dataclass
class MountInfo:
    device: str = "Unknown"
    mount: str = "Unknown"
    filesystem: str = "Unknown"
    space_avail_kb: int = 0
    space_total_kb: int = 0
    percent: float = 0.0

    def is_ignored(self, ignore: Iterable[str]) -> bool:
        """True if the mount point or filesystem starts with an ignored prefix."""
        return any(
            prefix and (self.mount.startswith(prefix) or self.filesystem.startswith(prefix))
            for prefix in ignore
        )


def gen_info_flags(format_str: str) -> MountsFlag:
    """Which pieces of information a format string needs."""
    flags = MountsFlag(0)
    if "{device}" in format_str:
        flags |= MountsFlag.DEVICE
    if "{space_used}" in format_str or "bar" in format_str:
        flags |= MountsFlag.SPACE_USED
    if "{space_avail}" in format_str:
        flags |= MountsFlag.SPACE_AVAIL
    if "{space_total}" in format_str or "bar" in format_str:
        flags |= MountsFlag.SPACE_TOTAL
    return flags


def get_device_name(device_name: str) -> Optional[str]:
    """Resolve UUID=, LABEL= and PARTLABEL= references to a device path.

    Returns None for references that do not resolve.
    """
    for prefix, link_dir in _DEVICE_LINK_DIRS:
        if device_name.startswith(prefix):
            link = link_dir / device_name[len(prefix):]
            if not link.is_symlink():
                return None
            try:
                return str(link.resolve(strict=True))
            except (OSError, RuntimeError):
                return None
    return device_name


def is_device_wanted(device_name: str) -> bool:
    """Crude check that a device is a physical one worth listing."""
    if in_wsl() and device_name[1:3] == ":\\":
        return True
    return device_name.startswith("/")


def parse_mtab_line(line: str) -> Optional[list[str]]:
    """Split an mtab line into its fields; None for comments, blanks and short lines."""
    if line.startswith("#") or not line.strip():
        return None
    fields = line.replace("\t", " ").split()
    if len(fields) < 3:
        return None
    return fields


def _fill_space(mount: MountInfo, mount_point: str) -> None:
    try:
        stats = os.statvfs(mount_point)
    except OSError as exc:
        code = exc.errno if exc.errno is not None else "N/A"
        raise ModuleError(
            "Mounts", f"'statfs' syscall failed for mount point {mount_point} (code {code})"
        ) from exc
    mount.space_total_kb = stats.f_blocks * stats.f_frsize // 1000
    mount.space_avail_kb = stats.f_bfree * stats.f_frsize // 1000
    if mount.space_total_kb:
        used = mount.space_total_kb - mount.space_avail_kb
        mount.percent = used / mount.space_total_kb * 100.0


def get_mounted_drives(
    format_str: str,
    ignore: Iterable[str] = (),
    path: Optional[PathLike] = None,
) -> list[MountInfo]:
    """Every wanted mount listed in the mount table."""
    flags = gen_info_flags(format_str)
    ignore = list(ignore)
    mtab = Path(path) if path is not None else MTAB_PATH
    try:
        handle = open(mtab, encoding="utf-8", errors="replace")
    except OSError as exc:
        raise ModuleError("Mounts", f"Unable to read from {mtab}: {exc}") from exc

    mounts: list[MountInfo] = []
    seen_devices: set[str] = set()
    with handle:
        for raw in handle:
            fields = parse_mtab_line(raw.rstrip("\r\n"))
            if fields is None:
                continue

            device_name = fields[0]
            device = get_device_name(device_name)
            if device is None or device in seen_devices:
                continue
            seen_devices.add(device_name)

            if not is_device_wanted(device):
                continue

            mount_point = fields[1].replace("\\040", " ")
            if mount_point in ("none", "swap"):
                continue

            mount = MountInfo(device=device, mount=mount_point, filesystem=fields[2])
            if mount.is_ignored(ignore):
                continue

            if flags & _SPACE_FLAGS:
                _fill_space(mount, mount_point)

            mounts.append(mount)

    return mounts