"""
ri_exporter/normalize/normalizer.py - 인스턴스 수량 정규화

인스턴스 타입별 수량을 패밀리별 "정규화 단위" 합계로 변환합니다.

계산식:
    normalized[family] += weight(size) / weight(minimum_size(family)) * count

- 최소 크기가 선언되지 않은 패밀리는 자기 자신의 size를 기준으로 사용 (비율 1)
- 키 하나라도 "family.size" 형식이 아니면 배치 전체가 MalformedKeyError로 실패
- 계수 테이블에 없는 size는 0으로 기여하고 경고 로그를 남김 (NaN/inf 미발생)
- 계수/비율/합계는 모두 float(배정밀도)로 계산. 단정밀도(float32)로 계산하는
  구현과는 큰 합계에서 마지막 자릿수가 다를 수 있음

사용법:
    from ri_exporter.normalize import normalize

    normalize({"c5.xlarge": 40, "c5.2xlarge": 50})
    # {"c5": 280.0}
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from .table import minimum_size_of, weight_of
from .types import InstanceTypeKey

logger = logging.getLogger(__name__)


def normalization_factor(key: InstanceTypeKey) -> float | None:
    """단일 인스턴스 타입의 정규화 비율

    Returns:
        ``weight(size) / weight(minimum_size)``. 둘 중 하나라도 계수 테이블에
        없으면 ``None``
    """
    minimum_size = minimum_size_of(key.family) or key.size

    weight = weight_of(key.size)
    base_weight = weight_of(minimum_size)
    if weight is None or base_weight is None:
        return None

    return weight / base_weight


def normalize(counts: Mapping[str, int]) -> dict[str, float]:
    """인스턴스 타입별 수량을 패밀리별 정규화 합계로 변환

    입력 순서와 무관하게 같은 결과를 내도록 키 정렬 순으로 누적합니다.

    Args:
        counts: ``{"c5.xlarge": 40, ...}`` 형식의 수량 맵

    Returns:
        ``{"c5": 280.0, ...}`` 형식의 패밀리별 합계. 입력에 등장한 패밀리만 포함

    Raises:
        MalformedKeyError: 구분자 또는 size가 없는 키가 있는 경우 (부분 결과 없음)
    """
    # 누적 전에 전체 키를 검증
    parsed = sorted((InstanceTypeKey.parse(raw), count) for raw, count in counts.items())

    totals: dict[str, float] = {}
    for key, count in parsed:
        factor = normalization_factor(key)
        if factor is None:
            logger.warning(f"정규화 계수 없음: {key} (수량 {count}개는 0으로 계산)")
            factor = 0.0

        totals[key.family] = totals.get(key.family, 0.0) + factor * count

    return totals
