"""
ri_exporter/normalize - Reserved Instance 정규화

인스턴스 타입별 수량을 AWS 정규화 단위(normalized unit)로 변환합니다.

Usage:
    from ri_exporter.normalize import normalize, InstanceTypeKey

    normalize({"m4.4xlarge": 10, "m4.large": 100})  # {"m4": 180.0}
"""

from .normalizer import normalization_factor, normalize
from .table import FAMILY_MINIMUM_SIZES, SIZE_WEIGHTS, minimum_size_of, weight_of
from .types import InstanceTypeKey, InventorySnapshot

__all__: list[str] = [
    # normalizer
    "normalize",
    "normalization_factor",
    # table
    "SIZE_WEIGHTS",
    "FAMILY_MINIMUM_SIZES",
    "weight_of",
    "minimum_size_of",
    # types
    "InstanceTypeKey",
    "InventorySnapshot",
]
