from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ContainerMetadata:
    name: str
    attempt: int = 0


@dataclass(frozen=True)
class ContainerHandle:
    id: str
    metadata: ContainerMetadata
    pod_sandbox_id: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    pid: int | None = None


@dataclass(frozen=True)
class ContainerFilter:
    id: str = ""
    pod_sandbox_id: str = ""
    label_selector: dict[str, str] = field(default_factory=dict)

    def matches(self, handle: ContainerHandle) -> bool:
        if self.id and handle.id != self.id:
            return False
        if self.pod_sandbox_id and handle.pod_sandbox_id != self.pod_sandbox_id:
            return False
        for k, v in self.label_selector.items():
            if handle.labels.get(k) != v:
                return False
        return True


@dataclass(frozen=True)
class RawStats:
    cpu_user_nanos: int
    cpu_system_nanos: int
    memory_working_set_bytes: int


@dataclass(frozen=True)
class CpuUsage:
    timestamp_ns: int
    usage_core_nanoseconds: int


@dataclass(frozen=True)
class MemoryUsage:
    timestamp_ns: int
    working_set_bytes: int


@dataclass(frozen=True)
class ContainerUsageSnapshot:
    container_id: str
    metadata: ContainerMetadata
    labels: dict[str, str]
    annotations: dict[str, str]
    cpu: CpuUsage
    memory: MemoryUsage


@dataclass(frozen=True)
class SkippedContainer:
    container_id: str
    reason: str


@dataclass(frozen=True)
class BatchUsageResult:
    stats: list[ContainerUsageSnapshot]
    skipped: list[SkippedContainer] = field(default_factory=list)
