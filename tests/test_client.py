"""
tests/test_client.py - ri_exporter/client.py 테스트
"""

from unittest.mock import MagicMock, patch

from ri_exporter.client import EC2_CLIENT_CONFIG, create_session, ec2_client


class TestEc2Client:
    """ec2_client 테스트"""

    def test_retry_and_timeouts(self):
        session = MagicMock()

        ec2_client(session, "us-east-1")

        session.client.assert_called_once_with("ec2", region_name="us-east-1", config=EC2_CLIENT_CONFIG)
        assert EC2_CLIENT_CONFIG.retries == {"max_attempts": 5, "mode": "adaptive"}
        assert EC2_CLIENT_CONFIG.connect_timeout == 10
        assert EC2_CLIENT_CONFIG.read_timeout == 30

    def test_session_default_region(self):
        session = MagicMock()

        ec2_client(session)

        assert session.client.call_args.kwargs["region_name"] is None


class TestCreateSession:
    """create_session 테스트"""

    def test_profile_and_region(self):
        with patch("boto3.Session") as mock_session_class:
            create_session("prod", "eu-west-1")

        mock_session_class.assert_called_once_with(profile_name="prod", region_name="eu-west-1")
