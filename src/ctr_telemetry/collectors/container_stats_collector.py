from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor

from ctr_telemetry.errors import ContainerNotFound
from ctr_telemetry.models.container import (
    BatchUsageResult,
    ContainerFilter,
    ContainerUsageSnapshot,
    CpuUsage,
    MemoryUsage,
    SkippedContainer,
)
from ctr_telemetry.services.container_registry import ContainerRegistry
from ctr_telemetry.services.stats_provider import StatsProvider

logger = logging.getLogger(__name__)


class ContainerStatsCollector:
    def __init__(
        self,
        registry: ContainerRegistry,
        provider: StatsProvider,
        batch_workers: int = 4,
    ) -> None:
        self.registry = registry
        self.provider = provider
        self.batch_workers = max(1, int(batch_workers))

    def snapshot_container(self, container_id: str) -> ContainerUsageSnapshot:
        handle = self.registry.lookup(container_id)
        if handle is None:
            raise ContainerNotFound(container_id)

        now = time.time_ns()
        raw = self.provider.read_raw_stats(handle)

        return ContainerUsageSnapshot(
            container_id=handle.id,
            metadata=handle.metadata,
            labels=dict(handle.labels),
            annotations=dict(handle.annotations),
            cpu=CpuUsage(
                timestamp_ns=now,
                usage_core_nanoseconds=raw.cpu_user_nanos + raw.cpu_system_nanos,
            ),
            memory=MemoryUsage(
                timestamp_ns=now,
                working_set_bytes=raw.memory_working_set_bytes,
            ),
        )

    def snapshot_matching(self, flt: ContainerFilter | None = None) -> BatchUsageResult:
        # Each container is looked up again by id so one removed after
        # listing is reported as skipped rather than with stale metadata.
        handles = self.registry.list(flt or ContainerFilter())
        if not handles:
            return BatchUsageResult(stats=[])

        stats: list[ContainerUsageSnapshot] = []
        skipped: list[SkippedContainer] = []

        workers = min(self.batch_workers, len(handles))
        with ThreadPoolExecutor(max_workers=workers) as ex:
            futures = [(h.id, ex.submit(self.snapshot_container, h.id)) for h in handles]

            for container_id, fut in futures:
                try:
                    stats.append(fut.result())
                except Exception as e:  # noqa: BLE001
                    logger.warning("unable to get stats for container %s: %s", container_id, e)
                    skipped.append(SkippedContainer(container_id=container_id, reason=str(e)))

        return BatchUsageResult(stats=stats, skipped=skipped)
