from __future__ import annotations

import os
from pathlib import Path

import pytest

from ctr_telemetry.models.container import ContainerHandle, ContainerMetadata, RawStats
from ctr_telemetry.services.container_registry import InMemoryContainerRegistry


class FakeStatsProvider:
    def __init__(self, stats: dict[str, RawStats | Exception] | None = None) -> None:
        self.stats = stats or {}
        self.calls: list[str] = []

    def read_raw_stats(self, handle: ContainerHandle) -> RawStats:
        self.calls.append(handle.id)
        value = self.stats.get(handle.id, RawStats(1, 1, 1))
        if isinstance(value, Exception):
            raise value
        return value


def make_handle(cid: str, pod: str = "pod-a", labels: dict[str, str] | None = None) -> ContainerHandle:
    return ContainerHandle(
        id=cid,
        metadata=ContainerMetadata(name=f"name-{cid}", attempt=1),
        pod_sandbox_id=pod,
        labels=labels or {},
        annotations={"io.example/owner": cid},
    )


def write_mountinfo(path: Path, target: Path, source: str) -> None:
    st = os.lstat(target)
    major, minor = os.major(st.st_dev), os.minor(st.st_dev)
    path.write_text(
        "22 1 0:21 / /proc rw,nosuid shared:12 - proc proc rw\n"
        f"29 1 {major}:{minor} / {target} rw,relatime shared:1 - ext4 {source} rw\n",
        encoding="utf-8",
    )


@pytest.fixture
def registry() -> InMemoryContainerRegistry:
    return InMemoryContainerRegistry(
        [
            make_handle("c1", labels={"app": "web"}),
            make_handle("c2", labels={"app": "db"}),
            make_handle("c3", pod="pod-b", labels={"app": "web"}),
        ]
    )


@pytest.fixture
def storage_env(tmp_path: Path) -> dict[str, Path]:
    run_root = tmp_path / "run"
    driver_root = run_root / "overlay"
    driver_root.mkdir(parents=True)
    (driver_root / "layer").write_bytes(b"x" * 512)

    mountinfo = tmp_path / "mountinfo"
    write_mountinfo(mountinfo, driver_root, "/dev/fakedisk1")

    uuid_dir = tmp_path / "by-uuid"
    uuid_dir.mkdir()
    os.symlink("/dev/otherdisk", uuid_dir / "0000-aaaa")
    os.symlink("/dev/fakedisk1", uuid_dir / "1234-abcd")

    return {
        "run_root": run_root,
        "driver_root": driver_root,
        "mountinfo": mountinfo,
        "uuid_dir": uuid_dir,
    }
