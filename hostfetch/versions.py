"""Version detection for executables such as shells, terminals and init systems."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping
from typing import Callable, Optional

from .package_managers import ManagerInfo
from .process_info import ProcessInfo

PACKAGED_PREFIXES = (
    "/usr/bin",
    "/usr/lib",
    "/data/data/com.termux/files/usr/bin",
)

# Executables that take a single-dash version flag.
_SINGLE_DASH_VERSION = frozenset({"xterm", "elvish"})

# Executable names that differ from the name of the package that ships them.
_PACKAGE_NAMES = {"nvim": "neovim"}


class ReinvocationError(RuntimeError):
    """Raised when checking a version would start the process that started us."""


def find_version(
    exe_path: str,
    name: Optional[str] = None,
    package_managers: Optional[ManagerInfo] = None,
) -> Optional[str]:
    """Find the version of an executable, or None if it cannot be found.

    Environment variables exported by the program are tried first, then the
    package manager cache for system locations, then ``<exe> --version``.
    """
    if name is None:
        name = exe_path.split("/")[-1]
    if package_managers is None:
        package_managers = ManagerInfo()

    version = app_specific_version(name)
    if version is not None:
        return version

    if exe_path.startswith(PACKAGED_PREFIXES):
        version = use_package_manager(substitute_package_name(name), package_managers)
        if version is not None:
            return version

    return _run_version_command(exe_path, name)


def use_package_manager(name: str, package_managers: ManagerInfo) -> Optional[str]:
    """Look the package up in the cache of installed packages."""
    package = package_managers.packages.get(name)
    if package is not None:
        return package.version
    if name == "weston-terminal":
        package = package_managers.packages.get("weston")
        if package is not None:
            return package.version
    return None


def _xterm_style(text: str) -> str:
    return text.split("(")[1].split(")")[0]


_PARSERS: dict[str, Callable[[str], str]] = {
    # Terminals
    "xterm": _xterm_style,
    "foot": lambda raw: raw.split(" ")[2].strip(),
    # Shells
    "bash": lambda raw: raw.split(" ")[3].split("(")[0].strip(),
    "fish": lambda raw: raw.split(" ")[2].strip(),
    "elvish": lambda raw: raw.split("+")[0].strip(),
    # Editors
    "vim": lambda raw: raw.split(" ")[4],
    "nvim": lambda raw: raw.split(" ")[1].split("\n")[0][1:],
    # Init systems
    "systemd": lambda raw: raw.split(" ")[2].split("\n")[0].strip("()"),
}


def parse_version_output(name: str, raw: str) -> Optional[str]:
    """Extract the version from the output of ``<name> --version``."""
    raw = raw.strip()
    parser = _PARSERS.get(name)
    try:
        if parser is not None:
            return parser(raw)
        return raw.split(" ")[1]
    except IndexError:
        return None


def substitute_package_name(name: str) -> str:
    """Map an executable name to the name of the package providing it."""
    return _PACKAGE_NAMES.get(name, name)


def _konsole(value: str) -> Optional[str]:
    if len(value) < 6:
        return None
    return f"{value[0:2]}.{value[2:4]}.{value[4:6]}"


def _xterm_env(value: str) -> Optional[str]:
    try:
        return _xterm_style(value)
    except IndexError:
        return None


_ENV_VERSIONS: dict[str, tuple[str, Callable[[str], Optional[str]]]] = {
    "konsole": ("KONSOLE_VERSION", _konsole),
    "xterm": ("XTERM_VERSION", _xterm_env),
    "bash": ("BASH_VERSION", lambda value: value.split("(")[0]),
    "fish": ("FISH_VERSION", lambda value: value),
    "zsh": ("ZSH_VERSION", lambda value: value),
    "nu": ("NU_VERSION", lambda value: value),
}


def app_specific_version(
    name: str, environ: Optional[Mapping[str, str]] = None
) -> Optional[str]:
    """Version taken from a variable the program exports, if it does."""
    if environ is None:
        environ = os.environ
    entry = _ENV_VERSIONS.get(name)
    if entry is None:
        return None
    variable, parse = entry
    value = environ.get(variable)
    if value is None:
        return None
    return parse(value)


def _run_version_command(path: str, name: str) -> Optional[str]:
    from .shell import KNOWN_SHELLS

    # Refuse to start our own parent again unless it is a shell: that could
    # start us again in turn and never stop.
    try:
        parent_name = ProcessInfo.from_parent().process_name()
    except (ProcessLookupError, ValueError):
        return None
    if parent_name == name and parent_name not in KNOWN_SHELLS:
        raise ReinvocationError(
            "Parent process re-invoked for version checking, without it being a "
            f"known shell. Called {parent_name} vs {name}"
        )

    flag = "-version" if name in _SINGLE_DASH_VERSION else "--version"
    try:
        result = subprocess.run([path, flag], capture_output=True, check=False)
    except OSError:
        return None
    try:
        raw = result.stdout.decode("utf-8")
    except UnicodeDecodeError:
        return None
    return parse_version_output(name, raw)