"""Reports the current user name and the machine's host name."""

from __future__ import annotations

import os
import pwd
from dataclasses import dataclass
from enum import IntFlag

from .util import ModuleError


class HostnameFlag(IntFlag):
    HOSTNAME = 1
    USERNAME = 2


@dataclass
class HostnameInfo:
    username: str = "Unknown"
    hostname: str = "Unknown"

    def replace_placeholders(self, text: str) -> str:
        return text.replace("{username}", self.username).replace(
            "{hostname}", self.hostname
        )


def gen_info_flags(format_str: str) -> HostnameFlag:
    """Which pieces of information a format string needs."""
    flags = HostnameFlag(0)
    if "{hostname}" in format_str:
        flags |= HostnameFlag.HOSTNAME
    if "{username}" in format_str:
        flags |= HostnameFlag.USERNAME
    return flags


def _username() -> str:
    # The environment is the cheap source; the password database is the fallback.
    name = os.environ.get("USER")
    if name is not None:
        return name
    try:
        return pwd.getpwuid(os.getuid()).pw_name
    except KeyError as exc:
        raise ModuleError("Hostname", f"Unable to find the current user: {exc}") from exc


def get_hostname(format_str: str) -> HostnameInfo:
    """User and host names, as far as the format needs them."""
    flags = gen_info_flags(format_str)
    info = HostnameInfo()

    if flags & HostnameFlag.USERNAME:
        info.username = _username()

    if flags & HostnameFlag.HOSTNAME:
        info.hostname = os.uname().nodename

    return info