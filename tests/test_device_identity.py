from __future__ import annotations

import os

import pytest

from ctr_telemetry.collectors.device_identity import device_identity, resolve_identity
from ctr_telemetry.errors import IdentityNotFound, StatsIOError


def test_missing_directory_returns_empty(tmp_path):
    assert resolve_identity("/dev/sda1", str(tmp_path / "by-uuid")) == ""


def test_relative_link_resolves_against_directory(tmp_path):
    d = tmp_path / "disk" / "by-uuid"
    d.mkdir(parents=True)
    os.symlink("../../sda1", d / "abcd-0001")

    expected = str(tmp_path / "sda1")
    assert resolve_identity(expected, str(d)) == "abcd-0001"
    assert device_identity(expected, str(d)).identifier == "abcd-0001"


def test_absolute_link_string_match(tmp_path):
    d = tmp_path / "by-uuid"
    d.mkdir()
    os.symlink("/dev/nvme0n1p2", d / "ffff-2222")

    assert resolve_identity("/dev/nvme0n1p2", str(d)) == "ffff-2222"


def test_no_match_raises(tmp_path):
    d = tmp_path / "by-uuid"
    d.mkdir()
    os.symlink("/dev/sdb1", d / "1111")

    with pytest.raises(IdentityNotFound):
        resolve_identity("/dev/sdc1", str(d))


def test_unreadable_link_aborts(tmp_path):
    d = tmp_path / "by-uuid"
    d.mkdir()
    (d / "0000-not-a-link").write_text("", encoding="utf-8")
    os.symlink("/dev/sda1", d / "9999")

    with pytest.raises(StatsIOError):
        resolve_identity("/dev/sda1", str(d))


def test_uuid_path_that_is_a_file_is_io_error(tmp_path):
    f = tmp_path / "by-uuid"
    f.write_text("x", encoding="utf-8")

    with pytest.raises(StatsIOError):
        resolve_identity("/dev/sda1", str(f))


def test_unlistable_directory_is_io_error(tmp_path, monkeypatch):
    d = tmp_path / "by-uuid"
    d.mkdir()

    def denied(path):
        raise PermissionError(13, "Permission denied", str(path))

    monkeypatch.setattr(os, "listdir", denied)

    with pytest.raises(StatsIOError):
        resolve_identity("/dev/sda1", str(d))
