from __future__ import annotations

from typing import Protocol

import psutil

from ctr_telemetry.errors import StatsProviderError
from ctr_telemetry.models.container import ContainerHandle, RawStats

_NANOS_PER_SECOND = 1_000_000_000


class StatsProvider(Protocol):
    def read_raw_stats(self, handle: ContainerHandle) -> RawStats: ...


class ProcessStatsProvider:
    """Reads CPU and memory counters of a container's init process."""

    def read_raw_stats(self, handle: ContainerHandle) -> RawStats:
        if handle.pid is None:
            raise StatsProviderError(f"container {handle.id} has no init pid")

        try:
            p = psutil.Process(handle.pid)
            with p.oneshot():
                cpu = p.cpu_times()
                mem = p.memory_info()
        except psutil.NoSuchProcess as e:
            raise StatsProviderError(f"container {handle.id} process {handle.pid} exited") from e
        except psutil.AccessDenied as e:
            raise StatsProviderError(f"access denied reading process {handle.pid} of {handle.id}") from e

        user = cpu.user + getattr(cpu, "children_user", 0.0)
        system = cpu.system + getattr(cpu, "children_system", 0.0)
        return RawStats(
            cpu_user_nanos=int(user * _NANOS_PER_SECOND),
            cpu_system_nanos=int(system * _NANOS_PER_SECOND),
            memory_working_set_bytes=int(mem.rss),
        )
