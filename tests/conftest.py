"""
tests/conftest.py - pytest 공통 픽스처

AWS API 모킹과 테스트 헬퍼를 제공합니다.

Usage:
    def test_something(mock_boto3_session, mock_ec2_client):
        # mock_boto3_session: boto3.Session 모킹
        # mock_ec2_client: describe_instances / describe_reserved_instances 응답이 설정된 EC2 클라이언트
        pass
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock, patch

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment():
    """테스트 환경 설정"""
    os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

    yield


# =============================================================================
# 응답 헬퍼
# =============================================================================


def build_instances_page(instance_types: List[str], state: str = "running") -> Dict[str, Any]:
    """describe_instances 페이지 응답 생성"""
    return {
        "Reservations": [
            {
                "Instances": [
                    {
                        "InstanceId": f"i-{index:017x}",
                        "InstanceType": instance_type,
                        "State": {"Name": state},
                    }
                    for index, instance_type in enumerate(instance_types)
                ]
            }
        ]
    }


def build_reserved_response(records: List[tuple]) -> Dict[str, Any]:
    """describe_reserved_instances 응답 생성 ((instance_type, count) 목록)"""
    return {
        "ReservedInstances": [
            {
                "ReservedInstancesId": f"ri-{index:08d}",
                "InstanceType": instance_type,
                "InstanceCount": count,
                "State": "active",
            }
            for index, (instance_type, count) in enumerate(records)
        ]
    }


# =============================================================================
# AWS 모킹 픽스처
# =============================================================================


@pytest.fixture
def mock_boto3_session():
    """boto3.Session 모킹"""
    with patch("boto3.Session") as mock_session_class:
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session

        mock_session.client.return_value = MagicMock()
        mock_session.region_name = "us-east-1"

        yield mock_session


@pytest.fixture
def mock_ec2_client():
    """EC2 클라이언트 모킹"""
    mock_client = MagicMock()

    # describe_instances 페이지네이터 응답
    mock_paginator = MagicMock()
    mock_paginator.paginate.return_value = [
        build_instances_page(["c5.xlarge", "c5.xlarge", "m4.large"]),
        build_instances_page(["c5.2xlarge"]),
    ]
    mock_client.get_paginator.return_value = mock_paginator

    # describe_reserved_instances 응답
    mock_client.describe_reserved_instances.return_value = build_reserved_response(
        [("c5.xlarge", 2), ("c5.xlarge", 1), ("m4.4xlarge", 1)]
    )

    yield mock_client


@pytest.fixture
def client_error_factory():
    """botocore ClientError 생성 헬퍼"""
    from botocore.exceptions import ClientError

    def _create(error_code: str, error_message: str = "Test error", operation: Optional[str] = None):
        return ClientError(
            {
                "Error": {
                    "Code": error_code,
                    "Message": error_message,
                }
            },
            operation or "TestOperation",
        )

    return _create


# =============================================================================
# moto 통합
# =============================================================================


@pytest.fixture
def aws_credentials():
    """moto 사용 시 AWS 자격 증명 설정"""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"


@pytest.fixture
def moto_session(aws_credentials):
    """moto로 모킹된 boto3 Session과 서브넷 ID"""
    import boto3
    from moto import mock_aws

    with mock_aws():
        session = boto3.Session(region_name="us-east-1")
        ec2 = session.client("ec2")

        vpc_id = ec2.create_vpc(CidrBlock="10.0.0.0/16")["Vpc"]["VpcId"]
        subnet_id = ec2.create_subnet(VpcId=vpc_id, CidrBlock="10.0.1.0/24")["Subnet"]["SubnetId"]

        yield session, subnet_id
