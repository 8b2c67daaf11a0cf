"""
ri_exporter/normalize/table.py - 정규화 계수 테이블

Reserved Instance 정규화에 사용하는 두 개의 정적 테이블을 제공합니다.

- SIZE_WEIGHTS: 인스턴스 크기 → 정규화 계수 (small = 1 기준)
- FAMILY_MINIMUM_SIZES: 인스턴스 패밀리 → 과금/정규화 기준이 되는 최소 크기

두 테이블 모두 읽기 전용이며, 테이블에 없는 값은 None으로 구분합니다.
(계수 0과 "없음"은 다른 의미)

사용법:
    from ri_exporter.normalize.table import weight_of, minimum_size_of

    weight_of("2xlarge")    # 16.0
    weight_of("metal")      # None
    minimum_size_of("m4")   # "large"
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

SIZE_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        "nano": 0.25,
        "micro": 0.5,
        "small": 1.0,
        "medium": 2.0,
        "large": 4.0,
        "xlarge": 8.0,
        "2xlarge": 16.0,
        "4xlarge": 32.0,
        "8xlarge": 64.0,
        "9xlarge": 72.0,
        "10xlarge": 80.0,
        "12xlarge": 96.0,
        "16xlarge": 128.0,
        "18xlarge": 144.0,
        "24xlarge": 192.0,
        "32xlarge": 256.0,
    }
)

FAMILY_MINIMUM_SIZES: Mapping[str, str] = MappingProxyType(
    {
        # General purpose
        "t2": "nano",
        "t3": "nano",
        "m3": "medium",
        "m4": "large",
        "m5": "large",
        "m5d": "large",
        # Compute optimized
        "c3": "large",
        "c4": "large",
        "c5": "large",
        "c5d": "large",
        # Memory optimized
        "r3": "large",
        "r4": "large",
        "r5": "large",
        "r5d": "large",
        # Storage optimized
        "i2": "xlarge",
        "i3": "large",
    }
)


def weight_of(size: str) -> float | None:
    """크기의 정규화 계수 조회

    Args:
        size: 인스턴스 크기 (예: ``"large"``, ``"2xlarge"``)

    Returns:
        정규화 계수. 테이블에 없으면 ``None``
    """
    return SIZE_WEIGHTS.get(size)


def minimum_size_of(family: str) -> str | None:
    """패밀리의 최소 기준 크기 조회

    Returns:
        최소 크기. 선언되지 않은 패밀리면 ``None``
    """
    return FAMILY_MINIMUM_SIZES.get(family)
