"""Detects the terminal emulator that is running us."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import IntFlag
from typing import Optional

from .package_managers import ManagerInfo
from .process_info import ProcessInfo
from .util import ModuleError, in_wsl
from .versions import find_version

# Terminals known by name; parent processes are walked until one is met.
KNOWN_TERMS = frozenset(
    {
        "alacritty",
        "fbpad",
        "fbterm",
        "foot",
        "guake",
        "kitty",
        "konsole",
        "rxvt",
        "st",
        "terminator",
        "termite",
        "tmuxp",
        "xterm",
        "yakuake",
        "tilix",
        "hyper",
        "wezterm-gui",
        "gnome-terminal-server",
        "qterminal",
        "terminology",
        "weston-terminal",
        "tmux",
        "ghostty",
    }
)

_DISPLAY_NAMES = {
    "gnome-terminal-server": "GNOME Terminal",
    "io.elementary.terminal": "Elementary Terminal",
    "wezterm-gui": "wezterm",
}

MAX_PARENT_WALK = 10


class TerminalFlag(IntFlag):
    NAME = 1
    PATH = 2
    VERSION = 4


@dataclass
class TerminalInfo:
    name: str = "Unknown"
    path: str = "Unknown"
    version: str = "Unknown"

    def replace_placeholders(self, text: str) -> str:
        return (
            text.replace("{name}", self.name)
            .replace("{path}", self.path)
            .replace("{version}", self.version)
        )


def gen_info_flags(format_str: str) -> TerminalFlag:
    """Which pieces of information a format string needs."""
    flags = TerminalFlag(0)
    if "{name}" in format_str:
        flags |= TerminalFlag.NAME | TerminalFlag.PATH
    if "{path}" in format_str:
        flags |= TerminalFlag.PATH
    if "{version}" in format_str:
        flags |= TerminalFlag.NAME | TerminalFlag.PATH | TerminalFlag.VERSION
    return flags


def normalise_terminal_name(name: str) -> str:
    """Friendly name for terminals whose process name is unhelpful."""
    return _DISPLAY_NAMES.get(name.strip(), name)


def get_terminal(
    format_str: str, package_managers: Optional[ManagerInfo] = None
) -> TerminalInfo:
    """Find the terminal by walking up the parent processes."""
    flags = gen_info_flags(format_str)
    terminal = TerminalInfo()

    if in_wsl():
        return TerminalInfo(name="Windows Terminal", path="N/A", version="N/A")

    ssh_tty = os.environ.get("SSH_TTY")
    if ssh_tty is not None:
        return TerminalInfo(name="SSH", path=ssh_tty, version="N/A")

    process = ProcessInfo.from_parent()
    for _ in range(MAX_PARENT_WALK + 1):
        try:
            terminal.name = process.process_name()
        except (ProcessLookupError, ValueError) as exc:
            raise ModuleError("Terminal", f"Can't get process name: {exc}") from exc
        if terminal.name in KNOWN_TERMS:
            break
        try:
            process = process.parent_process()
        except (ProcessLookupError, ValueError) as exc:
            raise ModuleError("Terminal", f"Can't get parent process: {exc}") from exc
    else:
        raise ModuleError(
            "Terminal",
            f"Terminal PID loop ran for more than {MAX_PARENT_WALK} iterations.",
        )

    if not process.is_valid():
        raise ModuleError("Terminal", "Unable to find terminal process")

    if flags & TerminalFlag.NAME:
        try:
            terminal.name = normalise_terminal_name(process.process_name())
        except (ProcessLookupError, ValueError) as exc:
            raise ModuleError("Terminal", f"Can't get process name: {exc}") from exc

    if flags & TerminalFlag.PATH:
        try:
            terminal.path = process.get_exe(True)
        except (ProcessLookupError, ValueError) as exc:
            raise ModuleError("Terminal", f"Can't get process exe: {exc}") from exc

    if flags & TerminalFlag.VERSION:
        terminal.version = (
            find_version(terminal.path, terminal.name, package_managers) or "Unknown"
        )

    return terminal