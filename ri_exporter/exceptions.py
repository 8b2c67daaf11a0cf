"""
ri_exporter/exceptions.py - 통합 예외 계층 구조

익스포터 전체에서 사용되는 예외 클래스들을 정의합니다.

예외 계층 구조:
    ExporterError (베이스)
    ├── NormalizationError (정규화 관련)
    │   └── MalformedKeyError
    ├── InventoryFetchError (EC2 API 호출 실패)
    └── ConfigError (설정 관련)

Usage:
    from ri_exporter.exceptions import InventoryFetchError

    try:
        ec2.describe_reserved_instances(Filters=filters)
    except ClientError as e:
        raise InventoryFetchError.from_client_error("ec2", "describe_reserved_instances", e) from e
"""

from __future__ import annotations

from typing import Any

# =============================================================================
# 베이스 예외
# =============================================================================


class ExporterError(Exception):
    """익스포터 기본 예외 클래스

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message


# =============================================================================
# 정규화 관련 예외
# =============================================================================


class NormalizationError(ExporterError):
    """인스턴스 수량 정규화 관련 예외"""


class MalformedKeyError(NormalizationError):
    """인스턴스 타입 키에 size 부분이 없는 경우

    "c5", "large" 처럼 "family.size" 형식이 아닌 키가 하나라도 있으면
    배치 전체가 실패합니다.
    """

    def __init__(self, key: str, cause: Exception | None = None):
        super().__init__(f"인스턴스 타입 키 파싱 실패 [{key}]: 'family.size' 형식이 아닙니다", cause)
        self.key = key
        self.details["key"] = key


# =============================================================================
# EC2 인벤토리 조회 예외
# =============================================================================


class InventoryFetchError(ExporterError):
    """EC2 인벤토리 API 호출 실패

    boto3/botocore 예외를 래핑하여 일관된 예외 처리를 제공합니다.
    """

    def __init__(
        self,
        service: str,
        operation: str,
        error_code: str | None = None,
        error_message: str | None = None,
        cause: Exception | None = None,
    ):
        message = f"{service}.{operation}"
        if error_code:
            message = f"{message} 실패 ({error_code})"
        else:
            message = f"{message} 실패"
        if error_message:
            message = f"{message}: {error_message}"

        super().__init__(message, cause)
        self.service = service
        self.operation = operation
        self.error_code = error_code
        self.error_message = error_message
        self.details.update(
            {
                "service": service,
                "operation": operation,
                "error_code": error_code,
            }
        )

    def __str__(self) -> str:
        # error_message에 원인 메시지가 이미 포함됨
        return self.message

    @classmethod
    def from_client_error(
        cls,
        service: str,
        operation: str,
        client_error: Exception,
    ) -> InventoryFetchError:
        """botocore.exceptions.ClientError / BotoCoreError로부터 생성

        Args:
            service: AWS 서비스 이름
            operation: API 작업 이름
            client_error: botocore 예외

        Returns:
            InventoryFetchError 인스턴스
        """
        error_code = None
        error_message = None

        # ClientError 형식 파싱
        if hasattr(client_error, "response"):
            error_info = client_error.response.get("Error", {})
            error_code = error_info.get("Code")
            error_message = error_info.get("Message")
        else:
            error_message = str(client_error)

        return cls(
            service=service,
            operation=operation,
            error_code=error_code,
            error_message=error_message,
            cause=client_error,
        )


# =============================================================================
# 설정 관련 예외
# =============================================================================


class ConfigError(ExporterError):
    """설정 관련 예외"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: Exception | None = None,
    ):
        full_message = f"설정 오류 [{key}]: {message}"
        super().__init__(full_message, cause)
        self.config_key = key
        self.details["config_key"] = key


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================

_ACCESS_DENIED_CODES = frozenset(
    {
        "AccessDenied",
        "AccessDeniedException",
        "UnauthorizedOperation",
        "UnauthorizedAccess",
        "AuthFailure",
    }
)

_THROTTLING_CODES = frozenset(
    {
        "Throttling",
        "ThrottlingException",
        "RequestLimitExceeded",
        "TooManyRequestsException",
        "RateExceeded",
    }
)


def _error_code(error: Exception) -> str | None:
    if isinstance(error, InventoryFetchError):
        return error.error_code

    # botocore ClientError 직접 확인
    if hasattr(error, "response"):
        return error.response.get("Error", {}).get("Code", "")

    return None


def is_access_denied(error: Exception) -> bool:
    """액세스 거부 오류인지 확인

    Args:
        error: 확인할 예외

    Returns:
        액세스 거부 오류이면 True
    """
    return _error_code(error) in _ACCESS_DENIED_CODES


def is_throttling(error: Exception) -> bool:
    """스로틀링 오류인지 확인"""
    return _error_code(error) in _THROTTLING_CODES
