import pytest

from hostfetch.mounts import (
    MountInfo,
    MountsFlag,
    gen_info_flags,
    get_device_name,
    get_mounted_drives,
    is_device_wanted,
    parse_mtab_line,
)
from hostfetch.util import ModuleError

MTAB = "\n".join(
    [
        "# a comment",
        "",
        "/dev/sda1 / ext4 rw,relatime 0 0",
        "/dev/sda2 /home\\040dir ext4 rw 0 0",
        "proc /proc proc rw 0 0",
        "/dev/sda1 /again ext4 rw 0 0",
        "/dev/sdb1 none swap sw 0 0",
        "/dev/sdc1\t/boot/efi\tvfat\trw 0 0",
        "",
    ]
)


def write_mtab(tmp_path, text=MTAB):
    path = tmp_path / "mtab"
    path.write_text(text)
    return path


def test_gen_info_flags_device():
    assert gen_info_flags("{device}") == MountsFlag.DEVICE


def test_gen_info_flags_bar_needs_used_and_total():
    flags = gen_info_flags("{bar}")
    assert flags == MountsFlag.SPACE_USED | MountsFlag.SPACE_TOTAL


def test_gen_info_flags_avail_only():
    assert gen_info_flags("{space_avail}") == MountsFlag.SPACE_AVAIL


def test_gen_info_flags_empty():
    assert gen_info_flags("{mount}") == MountsFlag(0)


def test_parse_mtab_line_splits_spaces_and_tabs():
    assert parse_mtab_line("/dev/sda1\t/  ext4 rw") == ["/dev/sda1", "/", "ext4", "rw"]


@pytest.mark.parametrize("line", ["# comment", "", "   ", "/dev/sda1 /"])
def test_parse_mtab_line_skips(line):
    assert parse_mtab_line(line) is None


def test_get_device_name_plain_device():
    assert get_device_name("/dev/sda1") == "/dev/sda1"


@pytest.mark.parametrize(
    "name", ["UUID=not-a-real-uuid-000", "LABEL=no-such-label", "PARTLABEL=no-such-part"]
)
def test_get_device_name_unresolved(name):
    assert get_device_name(name) is None


def test_is_device_wanted():
    assert is_device_wanted("/dev/sda1") is True
    assert is_device_wanted("tmpfs") is False


def test_is_ignored_by_mount_prefix():
    mount = MountInfo(mount="/boot/efi", filesystem="vfat")
    assert mount.is_ignored(["/boot"]) is True


def test_is_ignored_by_filesystem_prefix():
    mount = MountInfo(mount="/data", filesystem="btrfs")
    assert mount.is_ignored(["btr"]) is True


def test_is_ignored_skips_empty_entries():
    mount = MountInfo(mount="/data", filesystem="ext4")
    assert mount.is_ignored(["", "/home"]) is False


def test_get_mounted_drives_filters_table(tmp_path):
    mounts = get_mounted_drives("{mount}", path=write_mtab(tmp_path))
    assert [m.mount for m in mounts] == ["/", "/home dir", "/boot/efi"]
    assert [m.device for m in mounts] == ["/dev/sda1", "/dev/sda2", "/dev/sdc1"]
    assert [m.filesystem for m in mounts] == ["ext4", "ext4", "vfat"]
    assert all(m.space_total_kb == 0 for m in mounts)


def test_get_mounted_drives_ignore(tmp_path):
    mounts = get_mounted_drives("{mount}", ignore=["/boot", "vf"], path=write_mtab(tmp_path))
    assert [m.mount for m in mounts] == ["/", "/home dir"]


def test_get_mounted_drives_space(tmp_path):
    encoded = str(tmp_path).replace(" ", "\\040")
    mtab = write_mtab(tmp_path, f"/dev/fake {encoded} ext4 rw 0 0\n")
    (mount,) = get_mounted_drives("{space_total} {space_avail}", path=mtab)
    assert mount.mount == str(tmp_path)
    assert mount.space_total_kb >= mount.space_avail_kb
    assert 0.0 <= mount.percent <= 100.0


def test_get_mounted_drives_space_missing_mount(tmp_path):
    missing = tmp_path / "missing"
    mtab = write_mtab(tmp_path, f"/dev/fake {missing} ext4 rw 0 0\n")
    with pytest.raises(ModuleError):
        get_mounted_drives("{space_used}", path=mtab)


def test_get_mounted_drives_missing_table(tmp_path):
    with pytest.raises(ModuleError):
        get_mounted_drives("{mount}", path=tmp_path / "absent")