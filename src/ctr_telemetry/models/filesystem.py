from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MountEntry:
    major: int
    minor: int
    source: str
    mountpoint: str = ""


@dataclass(frozen=True)
class DeviceIdentity:
    device_path: str
    identifier: str


@dataclass(frozen=True)
class DirectoryUsage:
    path: str
    total_bytes: int
    entry_count: int


@dataclass(frozen=True)
class FilesystemUsage:
    timestamp_ns: int
    storage_identifier: str
    used_bytes: int
    inodes_used: int
