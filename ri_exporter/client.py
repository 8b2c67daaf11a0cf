"""
ri_exporter/client.py - boto3 session/EC2 client 생성

Example:
    from ri_exporter.client import create_session, ec2_client

    session = create_session(profile="prod")
    ec2 = ec2_client(session, "us-east-1")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from botocore.config import Config

from .config import settings

if TYPE_CHECKING:
    import boto3

# 재시도(adaptive) + 타임아웃
EC2_CLIENT_CONFIG = Config(
    retries={"max_attempts": settings.API_MAX_ATTEMPTS, "mode": "adaptive"},
    connect_timeout=settings.API_CONNECT_TIMEOUT,
    read_timeout=settings.API_READ_TIMEOUT,
)


def create_session(profile: str | None = None, region: str | None = None) -> boto3.Session:
    """공유 설정(~/.aws/config)을 읽는 boto3 Session 생성

    Raises:
        botocore.exceptions.ProfileNotFound: 존재하지 않는 프로파일
    """
    import boto3

    return boto3.Session(profile_name=profile, region_name=region)


def ec2_client(session: boto3.Session, region: str | None = None) -> Any:
    """재시도/타임아웃이 적용된 EC2 client (region이 None이면 세션 기본값)"""
    return session.client("ec2", region_name=region, config=EC2_CLIENT_CONFIG)
