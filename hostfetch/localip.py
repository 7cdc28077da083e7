"""Lists the local IP addresses of the machine's physical interfaces."""

from __future__ import annotations

import ipaddress
import socket
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from itertools import islice
from pathlib import Path
from typing import Any

import psutil

from .util import ModuleError

VIRTUAL_NET_ROOT = Path("/sys/devices/virtual/net")

# Guard against a runaway interface list.
MAX_ADDRESS_ENTRIES = 26


@dataclass
class LocalIPInfo:
    interface: str = "Unknown"
    ip_addr: str = "Unknown"

    def replace_placeholders(self, text: str) -> str:
        return text.replace("{interface}", self.interface).replace("{addr}", self.ip_addr)


def _virtual_interfaces() -> set[str]:
    try:
        return {entry.name for entry in VIRTUAL_NET_ROOT.iterdir()}
    except OSError as exc:
        raise ModuleError(
            "LocalIP", f"Can't read from {VIRTUAL_NET_ROOT}: {exc}"
        ) from exc


def _collect(
    addresses: Mapping[str, Iterable[Any]], virtual: set[str]
) -> list[LocalIPInfo]:
    entries = (
        (name, address) for name, group in addresses.items() for address in group
    )
    found: list[LocalIPInfo] = []
    for name, address in islice(entries, MAX_ADDRESS_ENTRIES):
        if name in virtual:
            continue
        if address.family == socket.AF_INET:
            found.append(LocalIPInfo(name, str(ipaddress.IPv4Address(address.address))))
        elif address.family == socket.AF_INET6:
            ip = ipaddress.IPv6Address(address.address)
            # A scope id marks a link-local address, which is not kept.
            if ip.scope_id is None:
                found.append(LocalIPInfo(f"{name} (v6)", str(ip)))
    return found


def get_local_ips() -> list[LocalIPInfo]:
    """Addresses of every interface that is not a virtual device."""
    virtual = _virtual_interfaces()
    try:
        addresses = psutil.net_if_addrs()
    except OSError as exc:
        raise ModuleError("LocalIP", f"Unable to list interface addresses: {exc}") from exc
    return _collect(addresses, virtual)