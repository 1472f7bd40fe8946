"""
Tests for CloudFormation stack lookups.
"""

import json
from unittest.mock import Mock, patch

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

from cloudformation.stack_manager import StackManager

TEMPLATE = json.dumps(
    {
        "AWSTemplateFormatVersion": "2010-09-09",
        "Resources": {"Bucket": {"Type": "AWS::S3::Bucket"}},
        "Outputs": {"Greeting": {"Value": "hello"}},
    }
)


@pytest.fixture
def aws_credentials(monkeypatch) -> None:
    """Fake credentials so moto never touches a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.delenv("AWS_PROFILE", raising=False)


class TestStackManagerWithMoto:
    """Test StackManager against moto's CloudFormation."""

    @mock_aws
    def test_describe_existing_stack(self, aws_credentials) -> None:
        """A deployed stack is described."""
        boto3.client("cloudformation", region_name="us-east-1").create_stack(
            StackName="my-stack", TemplateBody=TEMPLATE
        )

        manager = StackManager(region="us-east-1")
        stack = manager.describe_stack("my-stack")

        assert stack is not None
        assert stack["StackName"] == "my-stack"
        assert manager.get_stack_status("my-stack") == "CREATE_COMPLETE"
        assert manager.get_stack_outputs("my-stack") == {"Greeting": "hello"}

    @mock_aws
    def test_describe_missing_stack(self, aws_credentials) -> None:
        """A missing stack is described as None."""
        manager = StackManager(region="us-east-1")

        assert manager.describe_stack("missing-stack") is None
        assert manager.get_stack_status("missing-stack") is None
        assert manager.get_stack_outputs("missing-stack") == {}

    @mock_aws
    def test_get_account_id(self, aws_credentials) -> None:
        """The caller's account comes from STS."""
        manager = StackManager(region="us-east-1")

        assert manager.get_account_id() == "123456789012"


class TestStackManager:
    """Test StackManager with mocked clients."""

    def create_manager(self):
        """Create a test manager with mocked AWS clients."""
        with patch("boto3.Session"):
            manager = StackManager(region="us-east-1")

            # Mock AWS clients
            manager.cloudformation = Mock()
            manager.sts = Mock()

            return manager

    def test_session_uses_profile(self) -> None:
        """Profile and region are passed to the boto3 session."""
        with patch("cloudformation.stack_manager.boto3.Session") as mock_session:
            StackManager(region="eu-west-1", profile="deploy")

        mock_session.assert_called_once_with(region_name="eu-west-1", profile_name="deploy")

    def test_default_region(self) -> None:
        """Region defaults to us-east-1 without a profile."""
        with patch("cloudformation.stack_manager.boto3.Session") as mock_session:
            manager = StackManager()

        assert manager.region == "us-east-1"
        mock_session.assert_called_once_with(region_name="us-east-1")

    def test_describe_stack(self) -> None:
        """The first stack in the response is returned."""
        manager = self.create_manager()
        manager.cloudformation.describe_stacks.return_value = {
            "Stacks": [{"StackName": "test-stack", "StackStatus": "UPDATE_COMPLETE"}]
        }

        stack = manager.describe_stack("test-stack")

        assert stack == {"StackName": "test-stack", "StackStatus": "UPDATE_COMPLETE"}
        manager.cloudformation.describe_stacks.assert_called_once_with(
            StackName="test-stack"
        )

    def test_describe_stack_empty_response(self) -> None:
        """An empty stack list is described as None."""
        manager = self.create_manager()
        manager.cloudformation.describe_stacks.return_value = {"Stacks": []}

        assert manager.describe_stack("test-stack") is None

    def test_describe_stack_not_exists(self) -> None:
        """A does-not-exist error is described as None."""
        manager = self.create_manager()
        manager.cloudformation.describe_stacks.side_effect = ClientError(
            {"Error": {"Message": "Stack with id test-stack does not exist"}},
            "DescribeStacks",
        )

        assert manager.describe_stack("test-stack") is None

    def test_describe_stack_other_error(self) -> None:
        """Other client errors propagate."""
        manager = self.create_manager()
        manager.cloudformation.describe_stacks.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "Access denied"}},
            "DescribeStacks",
        )

        with pytest.raises(ClientError):
            manager.describe_stack("test-stack")

    def test_get_stack_outputs(self) -> None:
        """Outputs are flattened into a dictionary."""
        manager = self.create_manager()
        manager.cloudformation.describe_stacks.return_value = {
            "Stacks": [
                {
                    "StackStatus": "CREATE_COMPLETE",
                    "Outputs": [
                        {"OutputKey": "ApiUrl", "OutputValue": "https://api.example.com"},
                        {"OutputKey": "BucketName", "OutputValue": "my-bucket"},
                    ],
                }
            ]
        }

        assert manager.get_stack_outputs("test-stack") == {
            "ApiUrl": "https://api.example.com",
            "BucketName": "my-bucket",
        }

    def test_get_stack_outputs_none_defined(self) -> None:
        """A stack without outputs yields an empty dictionary."""
        manager = self.create_manager()
        manager.cloudformation.describe_stacks.return_value = {
            "Stacks": [{"StackStatus": "CREATE_COMPLETE"}]
        }

        assert manager.get_stack_outputs("test-stack") == {}
