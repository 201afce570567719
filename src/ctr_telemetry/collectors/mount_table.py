from __future__ import annotations

import logging
import os
import re
import sys
from pathlib import Path
from typing import Protocol

import psutil

from ctr_telemetry.errors import DeviceNotFound, StatsIOError
from ctr_telemetry.models.filesystem import MountEntry

logger = logging.getLogger(__name__)

_OCTAL_ESCAPE = re.compile(r"\\([0-7]{3})")


class MountTable(Protocol):
    def entries(self) -> list[MountEntry]: ...


def device_numbers(path: str) -> tuple[int, int]:
    try:
        st = os.lstat(path)
    except OSError as e:
        raise StatsIOError(e.errno, f"cannot stat {path}: {e.strerror}") from e
    return os.major(st.st_dev), os.minor(st.st_dev)


def _unescape(field: str) -> str:
    return _OCTAL_ESCAPE.sub(lambda m: chr(int(m.group(1), 8)), field)


class MountInfoTable:
    def __init__(self, path: str = "/proc/self/mountinfo") -> None:
        self.path = path

    def entries(self) -> list[MountEntry]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                lines = f.read().splitlines()
        except OSError as e:
            raise StatsIOError(e.errno, f"cannot read mount table {self.path}: {e.strerror}") from e

        rows: list[MountEntry] = []
        for line in lines:
            row = self._parse_line(line)
            if row is not None:
                rows.append(row)
        return rows

    def _parse_line(self, line: str) -> MountEntry | None:
        # id parent major:minor root mountpoint opts [optional...] - fstype source superopts
        fields = line.split()
        if len(fields) < 10:
            return None
        try:
            sep = fields.index("-", 6)
        except ValueError:
            return None
        if sep + 2 >= len(fields):
            return None

        major, _, minor = fields[2].partition(":")
        try:
            return MountEntry(
                major=int(major),
                minor=int(minor),
                source=_unescape(fields[sep + 2]),
                mountpoint=_unescape(fields[4]),
            )
        except ValueError:
            logger.debug("skipping malformed mountinfo line: %r", line)
            return None


class PartitionMountTable:
    def entries(self) -> list[MountEntry]:
        try:
            partitions = psutil.disk_partitions(all=True)
        except OSError as e:
            raise StatsIOError(e.errno, f"cannot enumerate partitions: {e}") from e

        rows: list[MountEntry] = []
        for p in partitions:
            try:
                st = os.stat(p.mountpoint)
            except OSError as e:
                logger.debug("skipping mount %s: %s", p.mountpoint, e)
                continue
            rows.append(
                MountEntry(
                    major=os.major(st.st_dev),
                    minor=os.minor(st.st_dev),
                    source=str(p.device),
                    mountpoint=str(p.mountpoint),
                )
            )
        return rows


def default_mount_table(mountinfo_path: str = "/proc/self/mountinfo") -> MountTable:
    if sys.platform.startswith("linux") and Path(mountinfo_path).exists():
        return MountInfoTable(mountinfo_path)
    return PartitionMountTable()


def resolve_source_device(path: str, mount_table: MountTable) -> str:
    major, minor = device_numbers(path)
    for m in mount_table.entries():
        if m.major == major and m.minor == minor:
            logger.debug("%s is on %s (%d:%d, mounted at %s)", path, m.source, major, minor, m.mountpoint)
            return m.source
    raise DeviceNotFound(path, major, minor)
