"""Report StorageGRID health and exit non-zero when the grid is not operative.

Connection settings come from STORAGEGRID_CONFIG_PATH or the STORAGEGRID_*
environment variables. STORAGEGRID_MAX_UNAVAILABLE sets how many nodes may
be down or unknown before the grid counts as not operative (default: 0).

    STORAGEGRID_ENDPOINT=grid.example.com STORAGEGRID_USERNAME=root \\
    STORAGEGRID_PASSWORD=secret python examples/health_check.py
"""

import os
import sys

import structlog

from storagegrid_sdk import GridClient, StorageGridError
from storagegrid_sdk.config import configure_logging, resolve_config

MAX_UNAVAILABLE_ENV_VAR = "STORAGEGRID_MAX_UNAVAILABLE"

logger = structlog.get_logger("health_check")


def main() -> int:
    try:
        cfg = resolve_config()
    except (FileNotFoundError, StorageGridError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    configure_logging(cfg.log_level)
    max_unavailable = int(os.environ.get(MAX_UNAVAILABLE_ENV_VAR, "0"))

    with GridClient.from_config(cfg) as grid:
        try:
            health = grid.health.get()
        except StorageGridError:
            logger.exception("Failed to get health status", endpoint=cfg.endpoint)
            return 2

    nodes = health.nodes
    alerts = health.alerts
    operative = health.operative(max_unavailable)
    logger.info(
        "Grid health",
        all_green=health.all_green(),
        operative=operative,
        max_unavailable=max_unavailable,
        nodes_connected=nodes.connected if nodes else None,
        nodes_down=nodes.administratively_down if nodes else None,
        nodes_unknown=nodes.unknown if nodes else None,
        alerts_critical=alerts.critical if alerts else None,
        alerts_major=alerts.major if alerts else None,
    )

    if not operative:
        logger.error("Grid is not operative")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
