from __future__ import annotations

from datetime import datetime

from ctr_telemetry.models.container import BatchUsageResult, ContainerUsageSnapshot
from ctr_telemetry.models.filesystem import FilesystemUsage


def _ts(ns: int) -> str:
    return datetime.fromtimestamp(ns / 1_000_000_000).strftime("%F %T")


class ReportService:
    def render_filesystem(self, root: str, u: FilesystemUsage) -> str:
        return (
            "[Image filesystem]\n"
            f"- ts: {_ts(u.timestamp_ns)}\n"
            f"- root: {root}\n"
            f"- storage_id: {u.storage_identifier or '(none)'}\n"
            f"- used_bytes: {u.used_bytes}\n"
            f"- inodes_used: {u.inodes_used}\n"
        )

    def render_container(self, s: ContainerUsageSnapshot) -> str:
        return (
            f"  - {s.container_id} ({s.metadata.name}): "
            f"cpu={s.cpu.usage_core_nanoseconds}ns "
            f"working_set={s.memory.working_set_bytes}B @ {_ts(s.cpu.timestamp_ns)}"
        )

    def render_batch(self, r: BatchUsageResult) -> str:
        lines = [f"[Containers] {len(r.stats)} reported, {len(r.skipped)} skipped"]
        lines.extend(self.render_container(s) for s in r.stats)
        lines.extend(f"  - {s.container_id}: skipped ({s.reason})" for s in r.skipped)
        return "\n".join(lines) + "\n"
