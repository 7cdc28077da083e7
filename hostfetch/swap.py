"""Reports swap usage."""

from __future__ import annotations

from dataclasses import dataclass

import psutil


@dataclass
class SwapInfo:
    used_kb: int = 0
    total_kb: int = 0
    percent: float = 0.0


def get_swap() -> SwapInfo:
    """Swap usage of the running system, in kilobytes."""
    stats = psutil.swap_memory()
    total_kb = stats.total // 1000
    used_kb = total_kb - stats.free // 1000
    percent = used_kb / total_kb * 100.0 if total_kb else 0.0
    return SwapInfo(used_kb=used_kb, total_kb=total_kb, percent=percent)