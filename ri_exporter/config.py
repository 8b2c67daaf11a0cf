"""
ri_exporter/config.py - 중앙 설정 관리

익스포터 전체에서 사용하는 기본값, 환경변수 헬퍼, 로깅 설정을 정의합니다.

우선순위:
    CLI 옵션 > 환경변수 > Settings 기본값

Usage:
    from ri_exporter.config import settings, get_default_region, LogConfig

    region = get_default_region()  # "us-east-1"
    LogConfig.from_env().apply()
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION_NAME = "ec2-ri-exporter"

# 환경변수 이름
ENV_METRICS_ADDRESS = "RI_EXPORTER_METRICS_ADDRESS"
ENV_NAMESPACE = "RI_EXPORTER_NAMESPACE"


@dataclass(frozen=True)
class Settings:
    """익스포터 기본 설정 (불변)"""

    # 메트릭 엔드포인트
    DEFAULT_METRICS_ADDRESS: str = ":9900"
    DEFAULT_NAMESPACE: str = "cloud"
    SUBSYSTEM: str = "aws_compute_ec2_ri"

    # AWS
    DEFAULT_REGION: str = "us-east-1"
    API_MAX_ATTEMPTS: int = 5
    API_CONNECT_TIMEOUT: int = 10  # 초
    API_READ_TIMEOUT: int = 30  # 초

    # EC2 조회 필터
    INSTANCE_STATES: tuple[str, ...] = ("running",)
    RESERVATION_STATES: tuple[str, ...] = ("active",)


settings = Settings()


# =============================================================================
# 환경변수 헬퍼
# =============================================================================


def get_default_profile() -> str | None:
    """AWS_PROFILE > AWS_DEFAULT_PROFILE 순으로 프로파일 조회"""
    return os.environ.get("AWS_PROFILE") or os.environ.get("AWS_DEFAULT_PROFILE") or None


def get_default_region() -> str:
    """AWS_REGION > AWS_DEFAULT_REGION > Settings.DEFAULT_REGION"""
    return os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION") or settings.DEFAULT_REGION


# =============================================================================
# 로깅 설정
# =============================================================================


@dataclass
class LogConfig:
    """로깅 설정

    Attributes:
        level: 로그 레벨 이름 (DEBUG, INFO, WARNING, ...)
        format: logging 포맷 문자열
        date_format: 시간 포맷
    """

    level: str = "INFO"
    format: str = field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def from_env(cls) -> LogConfig:
        """LOG_LEVEL / LOG_FORMAT 환경변수에서 로드"""
        defaults = cls()
        return cls(
            level=os.environ.get("LOG_LEVEL", defaults.level).upper(),
            format=os.environ.get("LOG_FORMAT", defaults.format),
            date_format=defaults.date_format,
        )

    def apply(self, handler: logging.Handler | None = None) -> None:
        """루트 로거에 설정 적용

        Args:
            handler: 사용할 핸들러 (None이면 기본 StreamHandler)
        """
        logging.basicConfig(
            level=getattr(logging, self.level, logging.INFO),
            format=self.format,
            datefmt=self.date_format,
            handlers=[handler] if handler else None,
            force=True,
        )

        # botocore 노이즈 로그 제한
        for name in ("botocore", "boto3", "urllib3"):
            logging.getLogger(name).setLevel(logging.WARNING)


@lru_cache(maxsize=1)
def get_version() -> str:
    """설치된 배포판 메타데이터에서 버전 조회"""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "0.0.0.dev0"
