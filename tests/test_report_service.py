from __future__ import annotations

from ctr_telemetry.models.container import (
    BatchUsageResult,
    ContainerMetadata,
    ContainerUsageSnapshot,
    CpuUsage,
    MemoryUsage,
    SkippedContainer,
)
from ctr_telemetry.models.filesystem import FilesystemUsage
from ctr_telemetry.services.report_service import ReportService


def test_render_filesystem():
    out = ReportService().render_filesystem(
        "/run/storage/overlay",
        FilesystemUsage(timestamp_ns=1_700_000_000_000_000_000, storage_identifier="", used_bytes=10, inodes_used=2),
    )

    assert "- root: /run/storage/overlay" in out
    assert "- storage_id: (none)" in out
    assert "- used_bytes: 10" in out


def test_render_batch_lists_skipped():
    snap = ContainerUsageSnapshot(
        container_id="c1",
        metadata=ContainerMetadata(name="web"),
        labels={},
        annotations={},
        cpu=CpuUsage(timestamp_ns=1_700_000_000_000_000_000, usage_core_nanoseconds=42),
        memory=MemoryUsage(timestamp_ns=1_700_000_000_000_000_000, working_set_bytes=8),
    )
    out = ReportService().render_batch(
        BatchUsageResult(stats=[snap], skipped=[SkippedContainer(container_id="c2", reason="gone")])
    )

    assert out.startswith("[Containers] 1 reported, 1 skipped")
    assert "c1 (web): cpu=42ns working_set=8B" in out
    assert "c2: skipped (gone)" in out
