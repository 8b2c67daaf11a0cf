"""
ri_exporter/normalize/types.py - 인벤토리 데이터 타입

- InstanceTypeKey: "family.size" 형식의 인스턴스 타입 식별자
- InventorySnapshot: 한 번의 수집 주기에서 얻은 원시 수량 맵 2종
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..exceptions import MalformedKeyError

SEPARATOR = "."


@dataclass(frozen=True, order=True)
class InstanceTypeKey:
    """인스턴스 타입 키 (예: c5.2xlarge → family="c5", size="2xlarge")

    Attributes:
        family: 인스턴스 패밀리 (c5, m4 등)
        size: 패밀리 내 크기 (large, 2xlarge 등)
    """

    family: str
    size: str

    @classmethod
    def parse(cls, raw: str) -> InstanceTypeKey:
        """문자열 키를 첫 번째 "." 기준으로 분리

        Raises:
            MalformedKeyError: 구분자가 없거나 family/size가 비어 있는 경우
        """
        family, sep, size = raw.partition(SEPARATOR)
        if not sep or not family or not size:
            raise MalformedKeyError(raw)
        return cls(family=family, size=size)

    def __str__(self) -> str:
        return f"{self.family}{SEPARATOR}{self.size}"


@dataclass
class InventorySnapshot:
    """EC2 인벤토리 스냅샷

    수집 주기마다 새로 생성되며 주기 간에 공유되지 않습니다.

    Attributes:
        instances: 인스턴스 타입별 running 인스턴스 수
        reserved: 인스턴스 타입별 active Reserved Instance 수량 합계
    """

    instances: dict[str, int] = field(default_factory=dict)
    reserved: dict[str, int] = field(default_factory=dict)

    @property
    def total_instances(self) -> int:
        return sum(self.instances.values())

    @property
    def total_reserved(self) -> int:
        return sum(self.reserved.values())
