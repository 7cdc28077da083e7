from pathlib import Path

import pytest

from hostfetch import gpu
from hostfetch.gpu import (
    AMD_VENDOR_NAME,
    GPUFlag,
    GPUInfo,
    gen_info_flags,
    get_gpus,
    search_amd_model,
    search_pci_ids,
)
from hostfetch.util import ModuleError

PCI_IDS = (
    "# pci.ids sample\n"
    "10de  NVIDIA Corporation\n"
    "\t2484  GA104 [GeForce RTX 3070]\n"
    "\t\t1043 147a  Some subsystem\n"
    "\t2504  GA106 [GeForce RTX 3060]\n"
    "1002  Advanced Micro Devices, Inc. [AMD/ATI]\n"
    "\t73bf  Navi 21\n"
)

AMD_IDS = "# amdgpu.ids\n1.0.0\n73BF,\tC1,\tAMD Radeon RX 6900 XT\n"


@pytest.fixture
def pci_ids(tmp_path: Path) -> Path:
    path = tmp_path / "pci.ids"
    path.write_text(PCI_IDS)
    return path


@pytest.fixture
def amd_ids(tmp_path: Path) -> Path:
    path = tmp_path / "amdgpu.ids"
    path.write_text(AMD_IDS)
    return path


def make_device(root: Path, name: str, **files: str) -> Path:
    device = root / name
    device.mkdir(parents=True)
    for filename, contents in files.items():
        (device / filename).write_text(contents)
    return device


def test_info_flags_vendor_and_model_linked():
    assert gen_info_flags("{vendor}") == GPUFlag.VENDOR | GPUFlag.MODEL
    assert gen_info_flags("{model}") == GPUFlag.VENDOR | GPUFlag.MODEL
    assert gen_info_flags("{vram}") == GPUFlag.VRAM
    assert gen_info_flags("plain") == GPUFlag(0)


def test_defaults():
    info = GPUInfo()
    assert (info.vendor, info.model, info.vram_mb, info.index) == ("Unknown", "Unknown", 0, None)


def test_search_pci_ids_finds_device(pci_ids):
    assert search_pci_ids("10de", "2484", [pci_ids]) == (
        "NVIDIA Corporation",
        "GA104 [GeForce RTX 3070]",
    )
    assert search_pci_ids("10de", "2504", [pci_ids])[1] == "GA106 [GeForce RTX 3060]"


def test_search_pci_ids_other_vendor(pci_ids):
    assert search_pci_ids("1002", "73bf", [pci_ids]) == (AMD_VENDOR_NAME, "Navi 21")


def test_search_pci_ids_unknown_device_falls_back_to_id(pci_ids):
    assert search_pci_ids("10de", "ffff", [pci_ids]) == ("NVIDIA Corporation", "ffff")


def test_search_pci_ids_unknown_vendor(pci_ids):
    assert search_pci_ids("abcd", "2484", [pci_ids]) == ("", "2484")


def test_search_pci_ids_skips_missing_paths(pci_ids, tmp_path):
    missing = tmp_path / "nope.ids"
    assert search_pci_ids("10de", "2484", [missing, pci_ids])[0] == "NVIDIA Corporation"


def test_search_pci_ids_no_database(tmp_path):
    with pytest.raises(ModuleError):
        search_pci_ids("10de", "2484", [tmp_path / "missing"])


def test_search_amd_model_case_insensitive(amd_ids):
    assert search_amd_model("73bf", "c1", [amd_ids]) == "AMD Radeon RX 6900 XT"


def test_search_amd_model_not_found(amd_ids):
    assert search_amd_model("73bf", "ff", [amd_ids]) is None


def test_search_amd_model_no_database(tmp_path):
    with pytest.raises(ModuleError):
        search_amd_model("73bf", "c1", [tmp_path / "missing"])


def test_get_gpus_vram_only(tmp_path):
    root = tmp_path / "devices"
    make_device(
        root,
        "0000:01:00.0",
        **{"class": "0x030000\n", "mem_info_vram_total": f"{8 * 1024 ** 3}\n"},
    )
    make_device(root, "0000:02:00.0", **{"class": "0x020000\n"})
    gpus = get_gpus("{vram}", devices_root=root)
    assert len(gpus) == 1
    assert gpus[0].vram_mb == 8 * 1024
    assert gpus[0].vendor == "Unknown"


def test_get_gpus_missing_vram_file_keeps_zero(tmp_path):
    root = tmp_path / "devices"
    make_device(root, "0000:01:00.0", **{"class": "0x030000\n"})
    assert [g.vram_mb for g in get_gpus("{vram}", devices_root=root)] == [0]


def test_get_gpus_vendor_lookup(tmp_path, pci_ids, monkeypatch):
    monkeypatch.setattr(gpu, "PCI_IDS_PATHS", (pci_ids,))
    root = tmp_path / "devices"
    make_device(
        root,
        "0000:01:00.0",
        **{"class": "0x030000\n", "vendor": "0x10de\n", "device": "0x2484\n"},
    )
    [found] = get_gpus("{vendor} {model}", devices_root=root)
    assert (found.vendor, found.model) == ("NVIDIA Corporation", "GA104 [GeForce RTX 3070]")


def test_get_gpus_amd_accuracy(tmp_path, amd_ids, pci_ids, monkeypatch):
    monkeypatch.setattr(gpu, "AMD_IDS_PATHS", (amd_ids,))
    monkeypatch.setattr(gpu, "PCI_IDS_PATHS", (pci_ids,))
    root = tmp_path / "devices"
    make_device(
        root,
        "0000:03:00.0",
        **{
            "class": "0x030000\n",
            "vendor": "0x1002\n",
            "device": "0x73bf\n",
            "revision": "0xc1\n",
        },
    )
    [accurate] = get_gpus("{model}", amd_accuracy=True, devices_root=root)
    assert (accurate.vendor, accurate.model) == (AMD_VENDOR_NAME, "AMD Radeon RX 6900 XT")
    [plain] = get_gpus("{model}", amd_accuracy=False, devices_root=root)
    assert plain.model == "Navi 21"


def test_get_gpus_ignores_disabled(tmp_path):
    root = tmp_path / "devices"
    make_device(root, "0000:01:00.0", **{"class": "0x030000\n", "enable": "0\n"})
    make_device(root, "0000:02:00.0", **{"class": "0x030000\n", "enable": "1\n"})
    assert len(get_gpus("", ignore_disabled=True, devices_root=root)) == 1
    assert len(get_gpus("", ignore_disabled=False, devices_root=root)) == 2


def test_get_gpus_missing_root(tmp_path):
    with pytest.raises(ModuleError):
        get_gpus("", devices_root=tmp_path / "missing")


def test_get_gpus_missing_class_file(tmp_path):
    root = tmp_path / "devices"
    (root / "0000:01:00.0").mkdir(parents=True)
    with pytest.raises(ModuleError):
        get_gpus("", devices_root=root)