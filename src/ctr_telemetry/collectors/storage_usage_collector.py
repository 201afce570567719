from __future__ import annotations

import logging
import time

from ctr_telemetry.collectors.device_identity import DEFAULT_UUID_DIR, device_identity
from ctr_telemetry.collectors.mount_table import MountTable, default_mount_table, resolve_source_device
from ctr_telemetry.collectors.usage_accountant import compute_usage
from ctr_telemetry.models.filesystem import FilesystemUsage

logger = logging.getLogger(__name__)


class StorageUsageCollector:
    def __init__(
        self,
        mount_table: MountTable | None = None,
        uuid_dir: str = DEFAULT_UUID_DIR,
    ) -> None:
        self.mount_table = mount_table or default_mount_table()
        self.uuid_dir = uuid_dir

    def snapshot(self, storage_root: str) -> FilesystemUsage:
        device = resolve_source_device(storage_root, self.mount_table)
        identity = device_identity(device, self.uuid_dir)
        usage = compute_usage(storage_root)

        logger.debug(
            "storage %s on %s (%s): %d bytes, %d inodes",
            storage_root,
            device,
            identity.identifier or "no uuid",
            usage.total_bytes,
            usage.entry_count,
        )
        return FilesystemUsage(
            timestamp_ns=time.time_ns(),
            storage_identifier=identity.identifier,
            used_bytes=usage.total_bytes,
            inodes_used=usage.entry_count,
        )
