"""Detects the host machine's model and chassis type."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag
from pathlib import Path

from .util import ModuleError, file_read, find_first_path_exists, in_wsl

# product_name is preferred, as laptops report their model there.
HOST_PATHS = (
    Path("/sys/devices/virtual/dmi/id/product_name"),
    Path("/sys/devices/virtual/dmi/id/board_name"),
    Path("/sys/firmware/devicetree/base/model"),
)
CHASSIS_TYPE_PATH = Path("/sys/devices/virtual/dmi/id/chassis_type")

# SMBIOS chassis types, read as decimal.
_CHASSIS_TYPES = {
    "1": "Other",
    "2": "Unknown",
    "3": "Desktop",
    "4": "Low Profile Desktop",
    "5": "Pizza Box",
    "6": "Mini Tower",
    "7": "Tower",
    "8": "Portable",
    "9": "Laptop",
    "10": "Notebook",
    "11": "Hand Held",
    "12": "Docking Station",
    "13": "All In One",
    "14": "Sub Notebook",
    "15": "Space-saving",
    "16": "Lunch Box",
    "17": "Main Server Chassis",
    "18": "Expansion Chassis",
    "19": "Sub Chassis",
    "20": "Bus Expansion Chassis",
    "21": "Peripheral Chassis",
    "22": "RAID Chassis",
    "23": "Rack Mount Chassis",
    "24": "Sealed-case PC",
    "25": "Multi-system",
    "26": "CompactPCI",
    "27": "AdvancedTCA",
    "28": "Blade",
    "29": "Blade Enclosing",
    "30": "Tablet",
    "31": "Convertible",
    "32": "Detachable",
    "33": "IoT Gateway",
    "34": "Embedded PC",
    "35": "Mini PC",
    "36": "Stick PC",
}


class HostFlag(IntFlag):
    HOST = 1
    CHASSIS = 2


@dataclass
class HostInfo:
    host: str = "Unknown"
    chassis: str = "Unknown"

    def replace_placeholders(self, text: str) -> str:
        return text.replace("{host}", self.host).replace("{chassis}", self.chassis)


def gen_info_flags(format_str: str) -> HostFlag:
    """Which pieces of information a format string needs."""
    flags = HostFlag(0)
    if "{host}" in format_str:
        flags |= HostFlag.HOST
    if "{chassis}" in format_str:
        flags |= HostFlag.CHASSIS
    return flags


def chassis_name(code: object) -> str:
    """Name of an SMBIOS chassis type code."""
    return _CHASSIS_TYPES.get(str(code).strip(), "Unknown")


def get_host(format_str: str) -> HostInfo:
    """Model and chassis of the machine, as far as the format needs them."""
    flags = gen_info_flags(format_str)
    host = HostInfo()

    if in_wsl():
        return HostInfo(host="Windows Subsystem for Linux", chassis="N/A")

    if flags & HostFlag.HOST:
        chosen = find_first_path_exists(HOST_PATHS)
        if chosen is None:
            raise ModuleError("Host", "Can't find an appropriate path for host.")
        try:
            host.host = file_read(chosen).strip()
        except (OSError, UnicodeDecodeError) as exc:
            raise ModuleError("Host", f"Can't read from {chosen} - {exc}") from exc

    # Some machines, such as single-board computers, have no chassis file.
    if flags & HostFlag.CHASSIS and CHASSIS_TYPE_PATH.exists():
        try:
            host.chassis = chassis_name(file_read(CHASSIS_TYPE_PATH))
        except (OSError, UnicodeDecodeError) as exc:
            raise ModuleError(
                "Host", f"Can't read from {CHASSIS_TYPE_PATH} - {exc}"
            ) from exc

    return host