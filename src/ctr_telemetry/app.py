import logging
import sys

from ctr_telemetry.errors import StatsError
from ctr_telemetry.services.config_service import ConfigService
from ctr_telemetry.services.container_registry import InMemoryContainerRegistry
from ctr_telemetry.services.report_service import ReportService
from ctr_telemetry.services.runtime_stats_service import RuntimeStatsService
from ctr_telemetry.services.stats_provider import ProcessStatsProvider
from ctr_telemetry.services.storage_backend import storage_root


def run() -> None:
    cfg = ConfigService().load_config()
    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Standalone runs have no runtime registry attached; only image storage is reported.
    service = RuntimeStatsService.from_config(cfg, InMemoryContainerRegistry(), ProcessStatsProvider())
    report = ReportService()

    try:
        usage = service.image_fs_info()
    except (StatsError, OSError) as e:
        logging.getLogger(__name__).error("image filesystem info failed: %s", e)
        raise SystemExit(1) from e

    sys.stdout.write(report.render_filesystem(storage_root(service.backend), usage))
    raise SystemExit(0)
