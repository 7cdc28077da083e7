"""Detects display adapters from the PCI bus in sysfs."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import IntFlag
from pathlib import Path
from typing import Iterable, Optional, Union

from .util import ModuleError, file_read, find_first_path_exists

PathLike = Union[str, "os.PathLike[str]"]

PCI_DEVICES_ROOT = Path("/sys/bus/pci/devices")
PCI_IDS_PATHS = (
    Path("/usr/share/hwdata/pci.ids"),
    Path("/usr/share/misc/pci.ids"),
)
AMD_IDS_PATHS = (Path("/usr/share/libdrm/amdgpu.ids"),)

AMD_VENDOR_ID = "1002"
AMD_VENDOR_NAME = "Advanced Micro Devices, Inc. [AMD/ATI]"
DISPLAY_CLASS_PREFIX = "0x03"


class GPUFlag(IntFlag):
    VENDOR = 1
    MODEL = 2
    VRAM = 4


@dataclass
class GPUInfo:
    index: Optional[int] = None
    vendor: str = "Unknown"
    model: str = "Unknown"
    vram_mb: int = 0


def gen_info_flags(format_str: str) -> GPUFlag:
    """Which pieces of information a format string needs."""
    flags = GPUFlag(0)
    # Vendor and model come from the same lookup.
    if "{vendor}" in format_str or "{model}" in format_str:
        flags |= GPUFlag.VENDOR | GPUFlag.MODEL
    if "{vram}" in format_str:
        flags |= GPUFlag.VRAM
    return flags


def _lines(path: Path):
    """Yield the lines of a text file without their line endings."""
    with open(path, encoding="utf-8", errors="replace") as handle:
        for raw in handle:
            line = raw.rstrip("\n")
            yield line[:-1] if line.endswith("\r") else line


def _open_ids(paths: Iterable[PathLike], what: str) -> Path:
    ids_path = find_first_path_exists(paths)
    if ids_path is None:
        raise ModuleError("GPU", f"Could not find an appropriate path for getting {what} info.")
    if not os.access(ids_path, os.R_OK):
        raise ModuleError("GPU", f"Can't read from {ids_path}")
    return ids_path


def search_pci_ids(
    vendor: str, device: str, paths: Optional[Iterable[PathLike]] = None
) -> tuple[str, str]:
    """Look a vendor and device id up in a pci.ids database.

    The device falls back to its id when it is not listed.
    """
    ids_path = _open_ids(paths if paths is not None else PCI_IDS_PATHS, "PCI ID")

    vendor_result = ""
    device_result = ""
    device_term = "\t" + device
    in_vendor = False
    try:
        for line in _lines(ids_path):
            if line.strip().startswith("#"):
                continue

            if in_vendor and line:
                in_vendor = line[0].isspace()
                if not in_vendor:
                    # Left the vendor's block without finding the device.
                    break

            if line.startswith(vendor) and not vendor_result:
                vendor_result = line[len(vendor):].strip()
                in_vendor = True
            elif in_vendor and line.startswith(device_term):
                device_result = line[len(device_term):].strip()
                break
    except OSError as exc:
        raise ModuleError("GPU", f"Can't read from {ids_path} - {exc}") from exc

    return vendor_result, device_result or device


def search_amd_model(
    device: str, revision: str, paths: Optional[Iterable[PathLike]] = None
) -> Optional[str]:
    """Look an AMD device and revision up in libdrm's amdgpu.ids."""
    ids_path = _open_ids(paths if paths is not None else AMD_IDS_PATHS, "AMD PCI ID")

    term = f"{device},\t{revision},\t".lower()
    try:
        for line in _lines(ids_path):
            if line.strip().startswith("#"):
                continue
            if line.lower().startswith(term):
                return line[len(term):] or None
    except OSError as exc:
        raise ModuleError("GPU", f"Can't read from {ids_path} - {exc}") from exc
    return None


def _read_device_file(device_dir: Path, name: str) -> str:
    try:
        return file_read(device_dir / name)
    except (OSError, UnicodeDecodeError) as exc:
        raise ModuleError("GPU", f"Can't read from file: {exc}") from exc


def _read_hex_id(device_dir: Path, name: str) -> str:
    return _read_device_file(device_dir, name)[2:].strip()


def get_gpus(
    format_str: str,
    amd_accuracy: bool = False,
    ignore_disabled: bool = False,
    devices_root: Optional[PathLike] = None,
) -> list[GPUInfo]:
    """Every display adapter found on the PCI bus."""
    flags = gen_info_flags(format_str)
    root = Path(devices_root) if devices_root is not None else PCI_DEVICES_ROOT
    try:
        device_dirs = sorted(root.iterdir())
    except OSError as exc:
        raise ModuleError("GPU", f"Can't read from {root}: {exc}") from exc

    gpus: list[GPUInfo] = []
    for device_dir in device_dirs:
        if not _read_device_file(device_dir, "class").startswith(DISPLAY_CLASS_PREFIX):
            continue

        if ignore_disabled and _read_device_file(device_dir, "enable").strip() == "0":
            continue

        gpu = GPUInfo()
        if flags & (GPUFlag.MODEL | GPUFlag.VENDOR):
            vendor_id = _read_hex_id(device_dir, "vendor")
            device_id = _read_hex_id(device_dir, "device")
            if vendor_id == AMD_VENDOR_ID and amd_accuracy:
                gpu.vendor = AMD_VENDOR_NAME
                revision_id = _read_hex_id(device_dir, "revision")
                model = search_amd_model(device_id, revision_id)
                if model is not None:
                    gpu.model = model
            if gpu.model == "Unknown":
                gpu.vendor, gpu.model = search_pci_ids(vendor_id, device_id)

        if flags & GPUFlag.VRAM:
            try:
                raw = file_read(device_dir / "mem_info_vram_total")
            except (OSError, UnicodeDecodeError):
                raw = None
            if raw is not None:
                try:
                    gpu.vram_mb = int(raw.strip()) // 1024 // 1024
                except ValueError as exc:
                    raise ModuleError("GPU", f"Could not parse VRAM total: {exc}") from exc

        gpus.append(gpu)

    return gpus