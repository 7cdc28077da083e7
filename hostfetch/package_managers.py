"""Reads and caches installed packages from the system's package managers."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import IntFlag
from pathlib import Path
from typing import Iterable, Optional, Union

PathLike = Union[str, "os.PathLike[str]"]

PACMAN_LOCAL = Path("/var/lib/pacman/local")
DPKG_STATUS = Path("/var/lib/dpkg/status")
XBPS_PKGDB = Path("/var/db/xbps/pkgdb-0.38.plist")
HOMEBREW_DIRS = (
    Path("/home/linuxbrew/.linuxbrew/Cellar"),
    Path("/home/linuxbrew/.linuxbrew/Caskroom"),
)


class Manager(IntFlag):
    """Bit flags for each supported package manager."""

    PACMAN = 1
    DPKG = 2
    XBPS = 4
    HOMEBREW = 32


@dataclass
class PackageInfo:
    name: str
    version: str
    manager: Manager


@dataclass
class ManagerInfo:
    """Cache of every package found, keyed by name."""

    available_managers: Manager = Manager(0)
    packages: dict[str, PackageInfo] = field(default_factory=dict)

    def probe_and_cache(self) -> None:
        self.process_pacman_packages()
        self.process_dpkg_packages()
        self.process_xbps_packages()
        self.process_homebrew_packages()

    def find_all_packages_from(self, manager: int) -> dict[str, PackageInfo]:
        return {
            name: package
            for name, package in self.packages.items()
            if package.manager & manager
        }

    def add_package(self, package: PackageInfo) -> None:
        """Add a package, or merge its manager into an existing entry.

        The version of an existing entry is left untouched.
        """
        existing = self.packages.get(package.name)
        if existing is not None:
            existing.manager |= package.manager
            return
        self.packages[package.name] = package

    def process_pacman_packages(self, path: Optional[PathLike] = None) -> None:
        root = Path(path) if path is not None else PACMAN_LOCAL
        try:
            entries = list(os.scandir(root))
        except OSError:
            return

        for entry in entries:
            try:
                if not entry.is_dir(follow_symlinks=False):
                    continue
            except OSError:
                continue
            # {name, may include -}-{version}-{rev}
            parts = entry.name.split("-")
            if len(parts) < 2:
                continue
            name = "-".join(parts[:-2])
            name = name.removesuffix("-git")
            self.add_package(PackageInfo(name, parts[-2], Manager.PACMAN))

        self.available_managers |= Manager.PACMAN

    def process_dpkg_packages(self, path: Optional[PathLike] = None) -> None:
        status = Path(path) if path is not None else DPKG_STATUS
        try:
            handle = open(status, encoding="utf-8", errors="replace")
        except OSError:
            return

        current = PackageInfo("", "", Manager.DPKG)
        with handle:
            for raw in handle:
                line = raw.rstrip("\r\n")
                if not line:
                    if current.name:
                        self.add_package(current)
                    current = PackageInfo("", "", Manager.DPKG)
                    continue

                if line.startswith("Package: "):
                    if not current.name:
                        current.name = line[len("Package: "):]
                    continue
                if current.name and line.startswith("Version: "):
                    current.version = _debian_upstream_version(line[len("Version: "):])

        self.available_managers |= Manager.DPKG

    def process_xbps_packages(self, path: Optional[PathLike] = None) -> None:
        pkgdb = Path(path) if path is not None else XBPS_PKGDB
        try:
            handle = open(pkgdb, encoding="utf-8", errors="replace")
        except OSError:
            return

        current = PackageInfo("", "", Manager.XBPS)
        next_is_key = False
        next_is_version = False
        dict_level = 0
        with handle:
            for raw in handle:
                line = raw.rstrip("\r\n")
                if not line:
                    continue
                line = line.strip()

                if next_is_key:
                    next_is_key = False
                    if line.startswith("<key>") and line.endswith("</key>"):
                        current.name = line[len("<key>"):-len("</key>")]
                    continue

                if line == "<dict>":
                    dict_level += 1
                    if dict_level == 1:
                        next_is_key = True
                        continue
                if line == "</dict>":
                    dict_level -= 1
                    if dict_level == 1:
                        if current.name:
                            self.add_package(current)
                        current = PackageInfo("", "", Manager.XBPS)
                        next_is_key = True
                        continue
                    if dict_level <= 0:
                        break
                    continue

                if current.name:
                    if line == "<key>pkgver</key>":
                        next_is_version = True
                        continue
                    if next_is_version:
                        # <string>{package-name}-{ver}_{rev}</string>
                        pkgver = line[len("<string>"):len(line) - len("</string>")]
                        current.version = pkgver.split("_")[0].split("-")[-1]
                        next_is_version = False

        self.available_managers |= Manager.XBPS

    def process_homebrew_packages(self, dirs: Optional[Iterable[PathLike]] = None) -> None:
        candidates = [Path(d) for d in (dirs if dirs is not None else HOMEBREW_DIRS)]
        existing = [d for d in candidates if d.is_dir()]
        if not existing:
            return

        for brew_dir in existing:
            for package_dir in sorted(brew_dir.iterdir()):
                if not package_dir.is_dir():
                    continue
                try:
                    versions = sorted(child.name for child in package_dir.iterdir())
                except OSError:
                    continue
                if not versions:
                    continue
                self.add_package(PackageInfo(package_dir.name, versions[-1], Manager.HOMEBREW))

        self.available_managers |= Manager.HOMEBREW


def _debian_upstream_version(version: str) -> str:
    """Strip the epoch and Debian revision from a dpkg version string."""
    parts = version.split(":")
    upstream = parts[1] if len(parts) > 1 else parts[0]
    return upstream.split("-")[0]