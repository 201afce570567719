from __future__ import annotations

from ctr_telemetry.collectors.container_stats_collector import ContainerStatsCollector
from ctr_telemetry.collectors.mount_table import default_mount_table
from ctr_telemetry.collectors.storage_usage_collector import StorageUsageCollector
from ctr_telemetry.models.container import BatchUsageResult, ContainerFilter, ContainerUsageSnapshot
from ctr_telemetry.models.filesystem import FilesystemUsage
from ctr_telemetry.services.config_service import AgentConfig
from ctr_telemetry.services.container_registry import ContainerRegistry
from ctr_telemetry.services.instrumentation import instrumented
from ctr_telemetry.services.stats_provider import StatsProvider
from ctr_telemetry.services.storage_backend import StaticStorageBackend, StorageBackend, storage_root


class RuntimeStatsService:
    def __init__(
        self,
        registry: ContainerRegistry,
        provider: StatsProvider,
        backend: StorageBackend,
        storage: StorageUsageCollector | None = None,
        batch_workers: int = 4,
    ) -> None:
        self.backend = backend
        self.containers = ContainerStatsCollector(registry, provider, batch_workers=batch_workers)
        self.storage = storage or StorageUsageCollector()

    @classmethod
    def from_config(
        cls,
        cfg: AgentConfig,
        registry: ContainerRegistry,
        provider: StatsProvider,
    ) -> RuntimeStatsService:
        return cls(
            registry=registry,
            provider=provider,
            backend=StaticStorageBackend(run_root=cfg.run_root, graph_driver_name=cfg.graph_driver),
            storage=StorageUsageCollector(
                mount_table=default_mount_table(cfg.mountinfo_path),
                uuid_dir=cfg.uuid_dir,
            ),
            batch_workers=cfg.batch_workers,
        )

    @instrumented("container_stats")
    def get_container_stats(self, container_id: str) -> ContainerUsageSnapshot:
        return self.containers.snapshot_container(container_id)

    @instrumented("list_container_stats")
    def list_container_stats(self, flt: ContainerFilter | None = None) -> BatchUsageResult:
        return self.containers.snapshot_matching(flt)

    @instrumented("image_fs_info")
    def image_fs_info(self) -> FilesystemUsage:
        return self.storage.snapshot(storage_root(self.backend))
