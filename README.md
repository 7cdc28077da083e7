# hostfetch

A library for collecting information about a Linux system: the distribution
and kernel, host model and chassis, user and host name, running shell and
terminal, GPUs, memory, swap, mounted drives, installed packages, local IP
addresses, locale, init system, process count and uptime. Most of it is read
from `/proc`, `/sys` and the package manager databases; swap usage, interface
addresses and the uptime fallback come from `psutil`.

Only Linux is supported.

## Installation

```
pip install hostfetch
```

To run the test suite:

```
pip install "hostfetch[test]"
pytest
```

## Usage

Each area of the system has its own module with a `get_*` function that
returns a dataclass. When a source cannot be read, these functions raise
`hostfetch.util.ModuleError`, which carries `module` and `message` attributes.

```python
from hostfetch.os_info import get_os
from hostfetch.memory import get_memory
from hostfetch.uptime import get_uptime
from hostfetch.package_managers import ManagerInfo
from hostfetch.packages import get_packages
from hostfetch.shell import get_shell
from hostfetch.util import ModuleError

os_info = get_os("{distro} ({kernel})")
print(os_info.replace_placeholders("{distro} on {kernel}"))

memory = get_memory()
print(f"{memory.used_kb} / {memory.max_kb} kB ({memory.percentage:.1f}%)")

print(get_uptime().replace_placeholders("up {time}"))

managers = ManagerInfo()
managers.probe_and_cache()
print(get_packages(managers).render("{count} ({manager})", ignore=["flatpak"]))

try:
    shell = get_shell("{name} {version}", False, managers)
    print(shell.replace_placeholders("{name} {version}"))
except ModuleError as err:
    print(f"shell: {err}")
```

### Modules

- `hostfetch.os_info`: `get_os(format_str, need_distro=False)` and
  `parse_os_release(contents)`; fills `{distro}` and `{kernel}`.
- `hostfetch.host`: `get_host(format_str)` and `chassis_name(code)`; fills
  `{host}` and `{chassis}`.
- `hostfetch.hostname`: `get_hostname(format_str)`; fills `{username}` and
  `{hostname}`.
- `hostfetch.shell`: `get_shell(format_str, show_default_shell, package_managers)`
  walks up the parent processes until it meets a known shell, or reads
  `$SHELL` with `show_default_shell`; fills `{name}`, `{path}` and `{version}`.
- `hostfetch.terminal`: `get_terminal(format_str, package_managers)`, the same
  walk for known terminals; reports `SSH` when `$SSH_TTY` is set.
- `hostfetch.gpu`: `get_gpus(format_str, amd_accuracy, ignore_disabled, devices_root)`
  lists display adapters from the PCI bus, named with the system's `pci.ids`
  (and libdrm's `amdgpu.ids` with `amd_accuracy`).
- `hostfetch.memory`: `get_memory()` and `parse_meminfo(lines)`.
- `hostfetch.swap`: `get_swap()`.
- `hostfetch.mounts`: `get_mounted_drives(format_str, ignore, path)` reads
  `/etc/mtab`, resolves `UUID=`, `LABEL=` and `PARTLABEL=` devices and fills
  space figures through `statvfs` when the format asks for them.
- `hostfetch.package_managers`: `ManagerInfo` caches packages from pacman,
  dpkg, xbps and Homebrew; each reader takes an optional path for testing.
- `hostfetch.packages`: `get_packages(managers)` counts packages per manager,
  plus Flatpak apps and runtimes; `PackagesInfo.render` joins the non-empty,
  non-ignored entries with `", "`.
- `hostfetch.localip`: `get_local_ips()` lists addresses of interfaces that are
  not under `/sys/devices/virtual/net`; fills `{interface}` and `{addr}`.
- `hostfetch.locale_info`: `get_locale()` and `parse_locale(raw)`; fills
  `{language}` and `{encoding}`.
- `hostfetch.initsys`: `get_init_system(format_str, package_managers)` from
  the command line of process 1.
- `hostfetch.processes`: `get_process_count(proc_root)`; fills `{count}`.
- `hostfetch.uptime`: `get_uptime()`, `parse_uptime(contents)` and
  `format_duration(seconds)`; fills `{time}`.
- `hostfetch.process_info`: `ProcessInfo` and `ProcessStatus`, a cached view
  of `/proc/<pid>`.
- `hostfetch.versions`: `find_version(exe_path, name, package_managers)` tries
  variables the program exports (such as `BASH_VERSION`), then the package
  cache for programs under `/usr/bin` or `/usr/lib`, and finally runs
  `<program> --version`. It raises `ReinvocationError` rather than start its
  own parent process when that is not a known shell.

### Format strings

The `format_str` given to a `get_*` function decides which details are
gathered: a GPU format without `{vram}` never reads GPU memory, and a shell
format without `{version}` never looks for a version. The info objects of the
OS, host, hostname, shell, terminal, init system, locale, local IP, processes
and uptime modules have `replace_placeholders(text)` to fill a template. The
GPU, memory, swap and mount objects only hold their values as fields.

## What this package does not do

There is no command-line program, no logo, and no configuration file. The
package gathers the information; titles, colours, progress bars, byte
formatting and laying the results out on screen are left to the caller.