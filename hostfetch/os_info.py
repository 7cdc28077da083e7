"""Reports the distribution name and the running kernel release."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import IntFlag
from pathlib import Path

from .util import ModuleError, file_read

OS_RELEASE_PATH = Path("/etc/os-release")


class OSFlag(IntFlag):
    DISTRO = 1
    KERNEL = 2


@dataclass
class OSInfo:
    distro: str = "Unknown"
    distro_id: str = "Unknown"
    kernel: str = "Unknown"

    def replace_placeholders(self, text: str) -> str:
        return text.replace("{distro}", self.distro).replace("{kernel}", self.kernel)


def gen_info_flags(format_str: str) -> OSFlag:
    """Which pieces of information a format string needs."""
    flags = OSFlag(0)
    if "{distro}" in format_str:
        flags |= OSFlag.DISTRO
    if "{kernel}" in format_str:
        flags |= OSFlag.KERNEL
    return flags


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def parse_os_release(contents: str) -> OSInfo:
    """Take the pretty name and id from the contents of an os-release file."""
    info = OSInfo()
    for line in contents.strip().split("\n"):
        if line.startswith("PRETTY_NAME="):
            info.distro = _unquote(line[len("PRETTY_NAME="):])
        elif line.startswith("ID="):
            info.distro_id = line[len("ID="):].strip()
    return info


def get_os(format_str: str, need_distro: bool = False) -> OSInfo:
    """Distribution and kernel, as far as the format needs them.

    ``need_distro`` forces the distribution to be read even when the format
    does not mention it, for example to choose a logo.
    """
    flags = gen_info_flags(format_str)
    info = OSInfo()

    if flags & OSFlag.DISTRO or need_distro:
        try:
            contents = file_read(OS_RELEASE_PATH)
        except (OSError, UnicodeDecodeError) as exc:
            raise ModuleError("OS", f"Can't read from {OS_RELEASE_PATH} - {exc}") from exc
        parsed = parse_os_release(contents)
        info.distro = parsed.distro
        info.distro_id = parsed.distro_id

    if flags & OSFlag.KERNEL:
        info.kernel = os.uname().release

    return info