from __future__ import annotations

import logging
import os

from ctr_telemetry.errors import IdentityNotFound, StatsIOError
from ctr_telemetry.models.filesystem import DeviceIdentity

logger = logging.getLogger(__name__)

DEFAULT_UUID_DIR = "/dev/disk/by-uuid"


def resolve_identity(device_path: str, uuid_dir: str = DEFAULT_UUID_DIR) -> str:
    if not os.path.exists(uuid_dir):
        logger.debug("%s does not exist, no stable identity for %s", uuid_dir, device_path)
        return ""

    try:
        names = sorted(os.listdir(uuid_dir))
    except OSError as e:
        raise StatsIOError(e.errno, f"cannot list {uuid_dir}: {e.strerror}") from e

    for name in names:
        link = os.path.join(uuid_dir, name)
        try:
            target = os.readlink(link)
        except OSError as e:
            raise StatsIOError(e.errno, f"cannot read link {link}: {e.strerror}") from e

        # Lexical resolution only; the by-uuid links are relative ("../../sda1").
        device = os.path.abspath(os.path.join(uuid_dir, target))
        if device == device_path:
            return name

    raise IdentityNotFound(device_path, uuid_dir)


def device_identity(device_path: str, uuid_dir: str = DEFAULT_UUID_DIR) -> DeviceIdentity:
    return DeviceIdentity(device_path=device_path, identifier=resolve_identity(device_path, uuid_dir))
