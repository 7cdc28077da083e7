"""Counts installed packages per package manager."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Union

from .package_managers import Manager, ManagerInfo

PathLike = Union[str, "os.PathLike[str]"]

FLATPAK_ROOT = Path("/var/lib/flatpak")

_CACHED_MANAGERS = (
    ("pacman", Manager.PACMAN),
    ("dpkg", Manager.DPKG),
    ("xbps", Manager.XBPS),
    ("brew", Manager.HOMEBREW),
)


@dataclass
class ManagerCount:
    manager_name: str
    package_count: int


@dataclass
class PackagesInfo:
    packages: list[ManagerCount] = field(default_factory=list)

    def render(self, format_str: str, ignore: Iterable[str] = ()) -> str:
        """Join one formatted entry per manager that has packages and is not ignored."""
        ignored = set(ignore)
        return ", ".join(
            format_str.replace("{manager}", entry.manager_name).replace(
                "{count}", str(entry.package_count)
            )
            for entry in self.packages
            if entry.manager_name not in ignored and entry.package_count != 0
        )


def get_packages(package_managers: ManagerInfo) -> PackagesInfo:
    """Package counts for every supported manager."""
    info = PackagesInfo(
        [
            ManagerCount(name, len(package_managers.find_all_packages_from(flag)))
            for name, flag in _CACHED_MANAGERS
        ]
    )
    flatpak = process_flatpak_packages()
    if flatpak is not None:
        info.packages.append(ManagerCount("flatpak", flatpak))
    return info


def process_flatpak_packages(root: Optional[PathLike] = None) -> Optional[int]:
    """Number of installed flatpak apps and runtimes, or None without flatpak."""
    base = Path(root) if root is not None else FLATPAK_ROOT
    try:
        return len(os.listdir(base / "app")) + len(os.listdir(base / "runtime"))
    except OSError:
        return None