from __future__ import annotations


class StatsError(Exception):
    pass


class ContainerNotFound(StatsError):
    def __init__(self, container_id: str) -> None:
        super().__init__(f"container not found: {container_id}")
        self.container_id = container_id


class DeviceNotFound(StatsError):
    def __init__(self, path: str, major: int, minor: int) -> None:
        super().__init__(f"no mount matches device {major}:{minor} of {path}")
        self.path = path
        self.major = major
        self.minor = minor


class IdentityNotFound(StatsError):
    def __init__(self, device_path: str, uuid_dir: str) -> None:
        super().__init__(f"device {device_path} has no entry in {uuid_dir}")
        self.device_path = device_path
        self.uuid_dir = uuid_dir


class StatsIOError(StatsError, OSError):
    pass


class PartialWalkFailure(StatsError):
    """Raised when a usage walk could not visit every entry.

    The totals accumulated before the failure are kept for diagnostics only.
    """

    def __init__(self, path: str, partial_bytes: int, partial_entries: int, cause: OSError) -> None:
        super().__init__(
            f"walk aborted at {path}: {cause} "
            f"(partial: {partial_bytes} bytes, {partial_entries} entries)"
        )
        self.path = path
        self.partial_bytes = partial_bytes
        self.partial_entries = partial_entries
        self.cause = cause


class StatsProviderError(StatsError):
    pass
