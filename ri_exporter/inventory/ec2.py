"""
ri_exporter/inventory/ec2.py - EC2 인벤토리 수집

running 상태 인스턴스와 active 상태 Reserved Instance를 조회하여
인스턴스 타입별 수량 맵을 만듭니다.

조회 조건:
    - describe_instances: instance-state-name = running (페이지네이션)
    - describe_reserved_instances: state = active (InstanceCount 합산)

사용법:
    from ri_exporter.inventory import collect_inventory

    snapshot = collect_inventory(session, "us-east-1")
    snapshot.instances  # {"c5.xlarge": 40, ...}
    snapshot.reserved   # {"c5.xlarge": 32, ...}
"""

from __future__ import annotations

import logging
from collections import Counter

from botocore.exceptions import BotoCoreError, ClientError

from ..client import ec2_client
from ..config import settings
from ..exceptions import InventoryFetchError
from ..normalize.types import InventorySnapshot

logger = logging.getLogger(__name__)


def collect_running_instances(session, region: str | None = None) -> dict[str, int]:
    """running 인스턴스를 인스턴스 타입별로 집계합니다.

    Args:
        session: boto3 Session 객체
        region: AWS 리전 코드 (None이면 세션 기본값)

    Returns:
        ``{instance_type: count}`` 딕셔너리

    Raises:
        InventoryFetchError: API 호출 실패
    """
    counts: Counter[str] = Counter()

    try:
        ec2 = ec2_client(session, region)
        paginator = ec2.get_paginator("describe_instances")
        pages = paginator.paginate(
            Filters=[{"Name": "instance-state-name", "Values": list(settings.INSTANCE_STATES)}],
        )
        for page in pages:
            for reservation in page.get("Reservations", []):
                for inst in reservation.get("Instances", []):
                    instance_type = inst.get("InstanceType")
                    if instance_type:
                        counts[instance_type] += 1
    except (ClientError, BotoCoreError) as e:
        raise InventoryFetchError.from_client_error("ec2", "describe_instances", e) from e

    return dict(counts)


def collect_active_reservations(session, region: str | None = None) -> dict[str, int]:
    """active Reserved Instance 수량을 인스턴스 타입별로 합산합니다.

    예약 레코드 하나가 여러 인스턴스(InstanceCount)를 포함하므로 레코드 수가 아닌
    InstanceCount 합계를 사용합니다.

    Raises:
        InventoryFetchError: API 호출 실패
    """
    counts: Counter[str] = Counter()

    # describe_reserved_instances는 페이지네이션을 지원하지 않음
    try:
        ec2 = ec2_client(session, region)
        response = ec2.describe_reserved_instances(
            Filters=[{"Name": "state", "Values": list(settings.RESERVATION_STATES)}],
        )
    except (ClientError, BotoCoreError) as e:
        raise InventoryFetchError.from_client_error("ec2", "describe_reserved_instances", e) from e

    for reserved in response.get("ReservedInstances", []):
        instance_type = reserved.get("InstanceType")
        if instance_type:
            counts[instance_type] += reserved.get("InstanceCount", 0)

    return dict(counts)


def collect_inventory(session, region: str | None = None) -> InventorySnapshot:
    """인스턴스/예약 수량을 한 번에 수집하여 스냅샷으로 반환합니다."""
    instances = collect_running_instances(session, region)
    reserved = collect_active_reservations(session, region)

    snapshot = InventorySnapshot(instances=instances, reserved=reserved)
    logger.debug(
        f"인벤토리 수집 완료 ({region or session.region_name}): "
        f"인스턴스 {snapshot.total_instances}개, 예약 {snapshot.total_reserved}개"
    )
    return snapshot
