from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfigPaths:
    path: Path


@dataclass(frozen=True)
class AgentConfig:
    run_root: str = "/var/run/containers/storage"
    graph_driver: str = "overlay"
    uuid_dir: str = "/dev/disk/by-uuid"
    mountinfo_path: str = "/proc/self/mountinfo"
    batch_workers: int = 4
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, cfg: dict[str, Any]) -> AgentConfig:
        d = cls()

        batch_workers = d.batch_workers
        if cfg.get("batch_workers"):
            try:
                batch_workers = int(cfg["batch_workers"])
            except (TypeError, ValueError):
                logger.warning("invalid batch_workers %r, using %d", cfg["batch_workers"], d.batch_workers)
            if batch_workers < 1:
                logger.warning("batch_workers must be positive, using %d", d.batch_workers)
                batch_workers = d.batch_workers

        log_level = str(cfg.get("log_level") or d.log_level).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            logger.warning("invalid log_level %r, using %s", cfg.get("log_level"), d.log_level)
            log_level = d.log_level

        return cls(
            run_root=str(cfg.get("run_root") or d.run_root),
            graph_driver=str(cfg.get("graph_driver") or d.graph_driver),
            uuid_dir=str(cfg.get("uuid_dir") or d.uuid_dir),
            mountinfo_path=str(cfg.get("mountinfo_path") or d.mountinfo_path),
            batch_workers=batch_workers,
            log_level=log_level,
        )


class ConfigService:
    def __init__(self, paths: ConfigPaths | None = None) -> None:
        self.paths = paths or ConfigPaths(path=self.default_path())

    @staticmethod
    def default_path() -> Path:
        xdg = os.environ.get("XDG_CONFIG_HOME")
        if xdg:
            base = Path(xdg)
        else:
            base = Path.home() / ".config"
        return base / "ctr_telemetry" / "config.json"

    def load(self) -> dict[str, Any]:
        p = self.paths.path
        if not p.exists():
            return {}
        try:
            with open(p, "r", encoding="utf-8") as f:
                obj = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("ignoring unreadable config %s: %s", p, e)
            return {}
        return obj if isinstance(obj, dict) else {}

    def load_config(self) -> AgentConfig:
        return AgentConfig.from_dict(self.load())
