from pathlib import Path

import pytest

from hostfetch import host, util
from hostfetch.host import HostFlag, HostInfo, chassis_name, gen_info_flags, get_host
from hostfetch.util import ModuleError


@pytest.fixture
def no_wsl(tmp_path, monkeypatch):
    monkeypatch.setattr(util, "WSL_INTEROP", tmp_path / "no-wsl-interop")


@pytest.mark.parametrize(
    "code, name",
    [("9", "Laptop"), ("3", "Desktop"), ("10\n", "Notebook"), (36, "Stick PC"), ("99", "Unknown"), ("", "Unknown")],
)
def test_chassis_name(code, name):
    assert chassis_name(code) == name


def test_info_flags():
    assert gen_info_flags("{host}") == HostFlag.HOST
    assert gen_info_flags("{chassis}") == HostFlag.CHASSIS
    assert gen_info_flags("{host} ({chassis})") == HostFlag.HOST | HostFlag.CHASSIS
    assert gen_info_flags("nothing") == HostFlag(0)


def test_replace_placeholders():
    info = HostInfo(host="Board X", chassis="Laptop")
    assert info.replace_placeholders("{host} - {chassis}") == "Board X - Laptop"
    assert HostInfo().replace_placeholders("{host}") == "Unknown"


def test_get_host_reads_first_existing_path(tmp_path, monkeypatch, no_wsl):
    board = tmp_path / "board_name"
    board.write_text("  Board X  \n")
    monkeypatch.setattr(host, "HOST_PATHS", (tmp_path / "product_name", board))
    monkeypatch.setattr(host, "CHASSIS_TYPE_PATH", tmp_path / "chassis_type")
    result = get_host("{host}")
    assert (result.host, result.chassis) == ("Board X", "Unknown")


def test_get_host_chassis(tmp_path, monkeypatch, no_wsl):
    chassis = tmp_path / "chassis_type"
    chassis.write_text("9\n")
    monkeypatch.setattr(host, "CHASSIS_TYPE_PATH", chassis)
    result = get_host("{chassis}")
    assert (result.host, result.chassis) == ("Unknown", "Laptop")


def test_get_host_missing_chassis_file_stays_unknown(tmp_path, monkeypatch, no_wsl):
    monkeypatch.setattr(host, "CHASSIS_TYPE_PATH", tmp_path / "absent")
    assert get_host("{chassis}").chassis == "Unknown"


def test_get_host_no_host_path(tmp_path, monkeypatch, no_wsl):
    monkeypatch.setattr(host, "HOST_PATHS", (tmp_path / "a", tmp_path / "b"))
    with pytest.raises(ModuleError):
        get_host("{host}")


def test_get_host_in_wsl(tmp_path, monkeypatch):
    marker = tmp_path / "WSLInterop"
    marker.write_text("")
    monkeypatch.setattr(util, "WSL_INTEROP", marker)
    result = get_host("{host} {chassis}")
    assert (result.host, result.chassis) == ("Windows Subsystem for Linux", "N/A")