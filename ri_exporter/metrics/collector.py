"""
ri_exporter/metrics/collector.py - scrape 시점 수집 컬렉터

Prometheus가 /metrics를 요청할 때마다 수집 주기를 한 번 실행한 뒤
MetricPublisher의 현재 상태를 렌더링합니다. 주기가 실패하면 이전 값이
그대로 노출됩니다.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from prometheus_client.core import Metric
from prometheus_client.registry import Collector

if TYPE_CHECKING:
    from ..exporter import Exporter


class ScrapeCollector(Collector):
    """scrape마다 Exporter.run_cycle()을 실행하는 컬렉터"""

    def __init__(self, exporter: Exporter):
        self.exporter = exporter

    def describe(self) -> Iterator[Metric]:
        # 등록 시점에는 AWS를 호출하지 않음
        return self.exporter.publisher.describe()

    def collect(self) -> Iterator[Metric]:
        self.exporter.run_cycle()
        return self.exporter.publisher.collect()
