"""
ri_exporter/exporter.py - 수집 주기 실행

한 번의 scrape 주기 = 인벤토리 조회 → 정규화 2회 → 게이지 게시.

실패 정책:
    - InventoryFetchError: 이번 주기만 중단, 기존 게이지 값 유지, 에러 로그
    - NormalizationError (MalformedKeyError): 위와 동일
    - 재시도 없음 (다음 scrape에서 다시 시도)

사용법:
    from ri_exporter.client import create_session
    from ri_exporter.exporter import Exporter
    from ri_exporter.metrics import MetricPublisher

    exporter = Exporter.from_session(create_session(), "us-east-1", MetricPublisher())
    result = exporter.run_cycle()
    if not result.success:
        print(result.error)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from .exceptions import InventoryFetchError, NormalizationError, is_access_denied, is_throttling
from .inventory import collect_inventory
from .metrics.publisher import MetricPublisher
from .normalize import InventorySnapshot, normalize

logger = logging.getLogger(__name__)

InventoryFetcher = Callable[[], InventorySnapshot]


@dataclass
class CycleResult:
    """수집 주기 실행 결과

    Attributes:
        success: 게이지가 갱신되었으면 True
        snapshot: 수집된 인벤토리 (조회 실패 시 None)
        normalized_instances: 패밀리별 정규화 인스턴스 합계
        normalized_reserved: 패밀리별 정규화 예약 합계
        error: 주기를 중단시킨 예외
        duration: 소요 시간 (초)
    """

    success: bool
    snapshot: InventorySnapshot | None = None
    normalized_instances: dict[str, float] = field(default_factory=dict)
    normalized_reserved: dict[str, float] = field(default_factory=dict)
    error: Exception | None = None
    duration: float = 0.0


class Exporter:
    """인벤토리 조회와 게이지 게시를 연결하는 주기 실행기

    Args:
        fetch: 인자 없이 InventorySnapshot을 반환하는 callable
        publisher: 게이지 상태를 보관하는 MetricPublisher
    """

    def __init__(self, fetch: InventoryFetcher, publisher: MetricPublisher):
        self.fetch = fetch
        self.publisher = publisher

    @classmethod
    def from_session(cls, session, region: str | None, publisher: MetricPublisher) -> Exporter:
        """boto3 Session 기반 Exporter 생성"""
        return cls(lambda: collect_inventory(session, region), publisher)

    def run_cycle(self) -> CycleResult:
        """한 번의 fetch → normalize → publish 주기 실행

        예외를 던지지 않고 CycleResult.error로 실패를 전달합니다.
        """
        started = time.monotonic()
        snapshot: InventorySnapshot | None = None

        try:
            snapshot = self.fetch()
            logger.info(f"instances {snapshot.instances}")
            logger.info(f"reserve_instances {snapshot.reserved}")

            normalized_instances = normalize(snapshot.instances)
            normalized_reserved = normalize(snapshot.reserved)
            logger.info(f"normalized_instances {normalized_instances}")
            logger.info(f"normalized_reserve_instances {normalized_reserved}")

            self.publisher.publish(
                snapshot.instances,
                snapshot.reserved,
                normalized_instances,
                normalized_reserved,
            )
        except InventoryFetchError as e:
            if is_access_denied(e):
                logger.error(f"EC2 인벤토리 조회 권한 없음, 이전 메트릭 유지: {e}")
            elif is_throttling(e):
                logger.warning(f"EC2 API 스로틀링, 이전 메트릭 유지: {e}")
            else:
                logger.error(f"EC2 인벤토리 조회 실패, 이전 메트릭 유지: {e}")
            return CycleResult(success=False, snapshot=snapshot, error=e, duration=time.monotonic() - started)
        except NormalizationError as e:
            logger.error(f"정규화 실패, 이전 메트릭 유지: {e}")
            return CycleResult(success=False, snapshot=snapshot, error=e, duration=time.monotonic() - started)

        duration = time.monotonic() - started
        logger.debug(f"수집 주기 완료 ({duration:.2f}s)")
        return CycleResult(
            success=True,
            snapshot=snapshot,
            normalized_instances=normalized_instances,
            normalized_reserved=normalized_reserved,
            duration=duration,
        )
