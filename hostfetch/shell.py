"""Detects the shell that is running us."""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from enum import IntFlag
from typing import Optional

from .package_managers import ManagerInfo
from .process_info import ProcessInfo
from .util import ModuleError
from .versions import find_version

# Shells known by name; parent processes are walked until one of these is met,
# so that sudo, scripts and wrappers do not get in the way.
KNOWN_SHELLS = frozenset(
    {
        "bash",
        "dash",
        "ksh",
        "nsh",
        "oil",
        "yash",
        "zsh",
        "tcsh",
        "closh",
        "elvish",
        "fish",
        "nu",
        "ion",
        "murex",
        "nushell",
        "oh",
        "powershell",
        "9base",
        "xonsh",
    }
)

MAX_PARENT_WALK = 10


class ShellFlag(IntFlag):
    NAME = 1
    PATH = 2
    VERSION = 4


@dataclass
class ShellInfo:
    name: str = "Unknown"
    path: str = "Unknown"
    version: str = "Unknown"

    def replace_placeholders(self, text: str) -> str:
        return (
            text.replace("{name}", self.name)
            .replace("{path}", self.path)
            .replace("{version}", self.version)
        )


def gen_info_flags(format_str: str) -> ShellFlag:
    """Which pieces of information a format string needs."""
    flags = ShellFlag(0)
    if "{name}" in format_str:
        flags |= ShellFlag.NAME | ShellFlag.PATH
    if "{path}" in format_str:
        flags |= ShellFlag.PATH
    if "{version}" in format_str:
        flags |= ShellFlag.NAME | ShellFlag.PATH | ShellFlag.VERSION
    return flags


def get_shell(
    format_str: str,
    show_default_shell: bool = False,
    package_managers: Optional[ManagerInfo] = None,
) -> ShellInfo:
    """Find the running shell by walking up the parent processes."""
    flags = gen_info_flags(format_str)
    if show_default_shell:
        return get_default_shell(flags, package_managers)

    shell = ShellInfo()
    process = ProcessInfo.from_parent()
    for _ in range(MAX_PARENT_WALK):
        try:
            shell.name = process.process_name()
        except (ProcessLookupError, ValueError) as exc:
            raise ModuleError("Shell", f"Failed to find process name: {exc}") from exc
        if shell.name.lower() in KNOWN_SHELLS:
            break
        try:
            process = process.parent_process()
        except (ProcessLookupError, ValueError) as exc:
            raise ModuleError("Shell", f"Unable to get parent process: {exc}") from exc
    else:
        raise ModuleError(
            "Shell",
            f"Shell parent process loop ran for more than {MAX_PARENT_WALK} iterations.",
        )

    if flags & ShellFlag.PATH:
        try:
            shell.path = process.get_exe(True)
        except (ProcessLookupError, ValueError) as exc:
            raise ModuleError("Shell", f"Failed to find exe path: {exc}") from exc

    if flags & ShellFlag.VERSION:
        shell.version = find_version(shell.path, shell.name, package_managers) or "Unknown"

    return shell


def get_default_shell(
    info_flags: int, package_managers: Optional[ManagerInfo] = None
) -> ShellInfo:
    """The user's login shell, taken from $SHELL."""
    shell = ShellInfo()

    if info_flags & ShellFlag.PATH:
        configured = os.environ.get("SHELL")
        if configured is None:
            raise ModuleError("Shell", "Could not parse $SHELL env variable: not present")
        resolved = shutil.which(configured)
        if resolved is None:
            raise ModuleError("Shell", f"Could not find 'which' for {configured}")
        shell.path = resolved

    if info_flags & ShellFlag.NAME:
        shell.name = shell.path.split("/")[-1]

    if info_flags & ShellFlag.VERSION:
        shell.version = find_version(shell.path, shell.name, package_managers) or "Unknown"

    return shell