"""Prometheus collector for StorageGRID grid health.

Exposes the alert, alarm and node counts reported by the health endpoint so
an embedding application can serve them from its own registry.
"""

import time
from collections.abc import Iterator

import structlog
from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily
from prometheus_client.metrics_core import Metric
from prometheus_client.registry import Collector

from .services.health import Health, HealthServiceProtocol

logger = structlog.get_logger(__name__)


def generate_metrics(health: Health) -> Iterator[Metric]:
    """Generate Prometheus metrics from a health summary.

    Missing counts are exported as 0.

    Args:
        health: Health summary from the grid.

    Yields:
        Prometheus Metric objects.
    """
    alerts = GaugeMetricFamily(
        "storagegrid_health_alerts",
        "Number of active alerts by severity",
        labels=["severity"],
    )
    if health.alerts is not None:
        alerts.add_metric(["critical"], health.alerts.critical or 0)
        alerts.add_metric(["major"], health.alerts.major or 0)
        alerts.add_metric(["minor"], health.alerts.minor or 0)
    yield alerts

    alarms = GaugeMetricFamily(
        "storagegrid_health_alarms",
        "Number of active legacy alarms by severity",
        labels=["severity"],
    )
    if health.alarms is not None:
        alarms.add_metric(["critical"], health.alarms.critical or 0)
        alarms.add_metric(["major"], health.alarms.major or 0)
        alarms.add_metric(["minor"], health.alarms.minor or 0)
        alarms.add_metric(["notice"], health.alarms.notice or 0)
    yield alarms

    nodes = GaugeMetricFamily(
        "storagegrid_health_nodes",
        "Number of grid nodes by connection state",
        labels=["state"],
    )
    if health.nodes is not None:
        nodes.add_metric(["connected"], health.nodes.connected or 0)
        nodes.add_metric(
            ["administratively-down"], health.nodes.administratively_down or 0
        )
        nodes.add_metric(["unknown"], health.nodes.unknown or 0)
    yield nodes

    yield GaugeMetricFamily(
        "storagegrid_health_all_green",
        "1 if all nodes are connected and no alerts or alarms are active",
        value=1 if health.all_green() else 0,
    )


class HealthCollector(Collector):
    """Prometheus collector querying grid health on every scrape.

    A failed query is logged and counted; the scrape then only carries the
    scrape metadata.
    """

    def __init__(self, health_service: HealthServiceProtocol, scraper_description: str):
        """Initialize the collector.

        Args:
            health_service: Service used to fetch the health summary.
            scraper_description: Description of the scraped grid for metric
                help texts (e.g., the API base URL).
        """
        self._health_service = health_service
        self._scraper_desc = scraper_description

        # Track errors manually (no global Counter registration)
        self._error_count = 0

    def collect(self) -> Iterator[Metric]:
        """Collect metrics for a Prometheus scrape.

        Yields:
            Scrape duration and error count, then the health metrics.
        """
        health: Health | None = None
        start = time.time()
        try:
            health = self._health_service.get()
            duration_value = time.time() - start
        except Exception:
            logger.exception("Failed to fetch grid health")
            self._error_count += 1
            duration_value = -1.0

        # -1 indicates an error, >= 0 is the fetch duration
        scrape_duration = GaugeMetricFamily(
            "storagegrid_health_scrape_duration",
            f"health scrape duration from {self._scraper_desc} in seconds, "
            f"-1 indicates error",
        )
        scrape_duration.add_metric([], duration_value)
        yield scrape_duration

        error_counter = CounterMetricFamily(
            "storagegrid_health_scrape_error",
            "grid health scrape errors",
        )
        error_counter.add_metric([], self._error_count)
        yield error_counter

        if health is not None:
            yield from generate_metrics(health)
