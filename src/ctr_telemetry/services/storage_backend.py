from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Protocol


class StorageBackend(Protocol):
    @property
    def run_root(self) -> str: ...

    @property
    def graph_driver_name(self) -> str: ...


@dataclass(frozen=True)
class StaticStorageBackend:
    run_root: str
    graph_driver_name: str


def storage_root(backend: StorageBackend) -> str:
    return os.path.join(backend.run_root, backend.graph_driver_name)
