"""
ri_exporter/metrics - Prometheus 메트릭 게시

Usage:
    from ri_exporter.metrics import MetricPublisher, ScrapeCollector
"""

from .collector import ScrapeCollector
from .publisher import GAUGE_HELP, MetricPublisher, PublishedState

__all__: list[str] = [
    "MetricPublisher",
    "PublishedState",
    "ScrapeCollector",
    "GAUGE_HELP",
]
