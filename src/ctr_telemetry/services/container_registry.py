from __future__ import annotations

import threading
from typing import Protocol

from ctr_telemetry.models.container import ContainerFilter, ContainerHandle


class ContainerRegistry(Protocol):
    def lookup(self, container_id: str) -> ContainerHandle | None: ...

    def list(self, flt: ContainerFilter) -> list[ContainerHandle]: ...


class InMemoryContainerRegistry:
    def __init__(self, containers: list[ContainerHandle] | None = None) -> None:
        self._lock = threading.Lock()
        self._containers: dict[str, ContainerHandle] = {}
        for c in containers or []:
            self.add(c)

    def add(self, handle: ContainerHandle) -> None:
        with self._lock:
            self._containers[handle.id] = handle

    def remove(self, container_id: str) -> None:
        with self._lock:
            self._containers.pop(container_id, None)

    def lookup(self, container_id: str) -> ContainerHandle | None:
        with self._lock:
            return self._containers.get(container_id)

    def list(self, flt: ContainerFilter) -> list[ContainerHandle]:
        with self._lock:
            handles = list(self._containers.values())
        return [h for h in handles if flt.matches(h)]
