# ============================================================================
# SYSTEM METRICS
# ============================================================================
# STATUS: Core - Process metrics for the status report
# PURPOSE: Snapshot of interpreter and process resource usage
# CREATED: 18 OCT 2026
# ============================================================================
"""
System Metrics

Collects the "system" block of the status body from the host runtime:

- version: Python implementation and version
- threads_count: Live threads in the process
- tasks_count: Unfinished asyncio tasks on the running loop
- alloc_bytes: Resident set size
- total_alloc_bytes: Virtual memory size
- heap_objects_count: Objects tracked by the garbage collector
- gc_collections: Garbage collections run so far (all generations)
"""

import asyncio
import gc
import platform
import threading

import psutil

from health.core import SystemInfo


def _tasks_count() -> int:
    try:
        return len(asyncio.all_tasks())
    except RuntimeError:
        # No running loop (called from sync code)
        return 0


def collect_system_info() -> SystemInfo:
    """Take a snapshot of process metrics."""
    memory = psutil.Process().memory_info()

    return SystemInfo(
        version=f"{platform.python_implementation()} {platform.python_version()}",
        threads_count=threading.active_count(),
        tasks_count=_tasks_count(),
        alloc_bytes=memory.rss,
        total_alloc_bytes=memory.vms,
        heap_objects_count=len(gc.get_objects()),
        gc_collections=sum(stats["collections"] for stats in gc.get_stats()),
    )


__all__ = [
    "collect_system_info",
]
