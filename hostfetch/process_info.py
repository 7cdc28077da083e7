"""Reads information about a process from /proc."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, "os.PathLike[str]"]

PROC_ROOT = Path("/proc")


@dataclass(frozen=True)
class ProcessStatus:
    """The fields used from a /proc/<pid>/stat file."""

    pid: int
    comm: str
    ppid: int

    @classmethod
    def from_stat_file(cls, contents: str) -> "ProcessStatus":
        lower = contents.find("(")
        upper = contents.find(")")
        if lower < 0 or upper < 0:
            raise ValueError("malformed stat contents: no command name")
        upper += 1
        fields = contents[upper:].split(" ")
        try:
            pid = int(contents.split(" ")[0])
            ppid = int(fields[2])
        except (IndexError, ValueError) as exc:
            raise ValueError(f"malformed stat contents: {exc}") from exc
        return cls(pid=pid, comm=contents[lower:upper], ppid=ppid)


class ProcessInfo:
    """Lazily read, cached view of a single process."""

    def __init__(self, pid: int, proc_root: PathLike = PROC_ROOT) -> None:
        self.pid = pid
        self._proc_root = Path(proc_root)
        self._path = self._proc_root / str(pid)
        self._exe: Optional[str] = None
        self._process_name: Optional[str] = None
        self._cmdline: Optional[list[str]] = None
        self._stat: Optional[ProcessStatus] = None

    @classmethod
    def from_parent(cls) -> "ProcessInfo":
        return cls(os.getppid())

    def is_valid(self) -> bool:
        return self._path.exists()

    def get_exe(self, work_around_python: bool) -> str:
        """Resolved path of the executable.

        With ``work_around_python`` an interpreter is replaced by the script
        it runs, taken from the second command-line argument.
        """
        if self._exe is not None:
            return self._exe
        try:
            exe = str((self._path / "exe").resolve(strict=True))
        except (OSError, RuntimeError) as exc:
            raise ProcessLookupError(
                f"Unable to canonicalize /exe, is this process still valid? ({exc})"
            ) from exc
        self._exe = exe
        if work_around_python and "python" in exe:
            args = self.cmdline()
            if len(args) < 2:
                raise ProcessLookupError("Unable to work around python.")
            self._exe = args[1]
        return self._exe

    def process_name(self) -> str:
        if self._process_name is None:
            try:
                exe = self.get_exe(True)
            except ProcessLookupError as exc:
                raise ProcessLookupError(f"Unable to get exe path: {exc}") from exc
            self._process_name = exe.split("/")[-1]
        return self._process_name

    def cmdline(self) -> list[str]:
        if self._cmdline is None:
            contents = self._read("cmdline")
            self._cmdline = contents.split("\0")
        return list(self._cmdline)

    def stat(self) -> ProcessStatus:
        if self._stat is None:
            self._stat = ProcessStatus.from_stat_file(self._read("stat"))
        return self._stat

    def parent_pid(self) -> int:
        return self.stat().ppid

    def parent_process(self) -> "ProcessInfo":
        parent = ProcessInfo(self.parent_pid(), self._proc_root)
        if not parent.is_valid():
            raise ProcessLookupError("Parent process was not valid.")
        return parent

    def _read(self, name: str) -> str:
        try:
            return (self._path / name).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ProcessLookupError(
                f"Unable to open /{name}, is this process still valid? ({exc})"
            ) from exc