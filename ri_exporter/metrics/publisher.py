"""
ri_exporter/metrics/publisher.py - Prometheus 게이지 상태 관리

수집 주기마다 계산된 원시/정규화 수량을 4개의 게이지 패밀리로 노출합니다.

게이지 (이름 = {namespace}_{subsystem}_{name}):
    - instances{type,size}
    - reserved_instances{type,size}
    - normalized_instances{type}
    - normalized_reserve_instances{type}

publish()는 이전 값을 병합하지 않고 전체를 교체합니다 (reset-then-set).
교체는 불변 상태 객체를 lock 아래에서 바꿔 끼우는 방식이라 scrape 중에
초기화 도중의 빈 상태가 노출되지 않습니다.

사용법:
    from prometheus_client import CollectorRegistry, generate_latest

    publisher = MetricPublisher(namespace="cloud")
    registry = CollectorRegistry()
    registry.register(publisher)

    publisher.publish(instances, reserved, normalized_instances, normalized_reserved)
    print(generate_latest(registry).decode())
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from prometheus_client.core import GaugeMetricFamily
from prometheus_client.registry import Collector

from ..config import settings
from ..normalize.types import InstanceTypeKey

logger = logging.getLogger(__name__)

INSTANCES = "instances"
RESERVED_INSTANCES = "reserved_instances"
NORMALIZED_INSTANCES = "normalized_instances"
NORMALIZED_RESERVE_INSTANCES = "normalized_reserve_instances"

GAUGE_HELP: Mapping[str, str] = MappingProxyType(
    {
        INSTANCES: "A gauge vector of instances",
        RESERVED_INSTANCES: "A gauge vector of reserved instances",
        NORMALIZED_INSTANCES: "A gauge vector of normalized instances",
        NORMALIZED_RESERVE_INSTANCES: "A gauge vector of normalized reserve instances",
    }
)


@dataclass(frozen=True)
class PublishedState:
    """한 주기에 게시된 게이지 값 (불변)

    Attributes:
        instances: (type, size) → running 인스턴스 수
        reserved: (type, size) → active 예약 수량
        normalized_instances: type → 정규화 인스턴스 합계
        normalized_reserved: type → 정규화 예약 합계
    """

    instances: Mapping[tuple[str, str], float] = field(default_factory=dict)
    reserved: Mapping[tuple[str, str], float] = field(default_factory=dict)
    normalized_instances: Mapping[str, float] = field(default_factory=dict)
    normalized_reserved: Mapping[str, float] = field(default_factory=dict)


def _split_labels(counts: Mapping[str, int]) -> dict[tuple[str, str], float]:
    labels: dict[tuple[str, str], float] = {}
    for raw, count in counts.items():
        key = InstanceTypeKey.parse(raw)
        labels[(key.family, key.size)] = float(count)
    return labels


class MetricPublisher(Collector):
    """게이지 상태 보관 및 렌더링

    prometheus_client 커스텀 컬렉터 프로토콜(describe/collect)을 구현합니다.
    """

    def __init__(self, namespace: str = settings.DEFAULT_NAMESPACE, subsystem: str = settings.SUBSYSTEM):
        self.namespace = namespace
        self.subsystem = subsystem
        self._lock = threading.Lock()
        self._state = PublishedState()

    def metric_name(self, name: str) -> str:
        """namespace/subsystem이 붙은 전체 메트릭 이름"""
        return "_".join(part for part in (self.namespace, self.subsystem, name) if part)

    @property
    def state(self) -> PublishedState:
        with self._lock:
            return self._state

    def publish(
        self,
        instances: Mapping[str, int],
        reserved: Mapping[str, int],
        normalized_instances: Mapping[str, float],
        normalized_reserved: Mapping[str, float],
    ) -> PublishedState:
        """4개 게이지 패밀리의 값을 통째로 교체

        이전 주기에만 있던 label 조합은 남지 않습니다.

        Raises:
            MalformedKeyError: 원시 수량 키가 "family.size" 형식이 아닌 경우
                (이 경우 기존 상태는 유지됨)
        """
        state = PublishedState(
            instances=MappingProxyType(_split_labels(instances)),
            reserved=MappingProxyType(_split_labels(reserved)),
            normalized_instances=MappingProxyType(dict(normalized_instances)),
            normalized_reserved=MappingProxyType(dict(normalized_reserved)),
        )

        with self._lock:
            self._state = state

        logger.debug(
            f"게이지 갱신: instances={len(state.instances)}, reserved={len(state.reserved)}, "
            f"normalized_instances={len(state.normalized_instances)}, "
            f"normalized_reserved={len(state.normalized_reserved)}"
        )
        return state

    def _families(self, state: PublishedState) -> list[GaugeMetricFamily]:
        instances = GaugeMetricFamily(
            self.metric_name(INSTANCES), GAUGE_HELP[INSTANCES], labels=["type", "size"]
        )
        for (family, size), value in sorted(state.instances.items()):
            instances.add_metric([family, size], value)

        reserved = GaugeMetricFamily(
            self.metric_name(RESERVED_INSTANCES), GAUGE_HELP[RESERVED_INSTANCES], labels=["type", "size"]
        )
        for (family, size), value in sorted(state.reserved.items()):
            reserved.add_metric([family, size], value)

        normalized_instances = GaugeMetricFamily(
            self.metric_name(NORMALIZED_INSTANCES), GAUGE_HELP[NORMALIZED_INSTANCES], labels=["type"]
        )
        for family, value in sorted(state.normalized_instances.items()):
            normalized_instances.add_metric([family], value)

        normalized_reserved = GaugeMetricFamily(
            self.metric_name(NORMALIZED_RESERVE_INSTANCES),
            GAUGE_HELP[NORMALIZED_RESERVE_INSTANCES],
            labels=["type"],
        )
        for family, value in sorted(state.normalized_reserved.items()):
            normalized_reserved.add_metric([family], value)

        return [instances, reserved, normalized_instances, normalized_reserved]

    def describe(self) -> Iterator[GaugeMetricFamily]:
        """등록 시 메트릭 이름 확인용 (값 없음)"""
        yield from self._families(PublishedState())

    def collect(self) -> Iterator[GaugeMetricFamily]:
        yield from self._families(self.state)
