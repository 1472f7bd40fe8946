"""
CloudFormation stack lookups.
"""

import logging
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)


class StackManager:
    """Read CloudFormation stack state."""

    def __init__(self, region: Optional[str] = None, profile: Optional[str] = None):
        """
        Initialize stack manager.

        Args:
            region: AWS region
            profile: AWS profile to use
        """
        self.region = region or "us-east-1"
        self.profile = profile

        # Initialize AWS clients
        session_args = {"region_name": self.region}
        if profile:
            session_args["profile_name"] = profile

        session = boto3.Session(**session_args)
        self.cloudformation = session.client("cloudformation")
        self.sts = session.client("sts")

    def describe_stack(self, stack_name: str) -> Optional[Dict[str, Any]]:
        """
        Get the live description of a stack.

        Returns:
            The stack entry from DescribeStacks, or None if the stack does not exist
        """
        try:
            response = self.cloudformation.describe_stacks(StackName=stack_name)
        except ClientError as e:
            if "does not exist" in str(e):
                logger.info(f"Stack {stack_name} does not exist")
                return None
            raise

        if response["Stacks"]:
            return response["Stacks"][0]
        return None

    def get_stack_status(self, stack_name: str) -> Optional[str]:
        """Get current stack status."""
        stack = self.describe_stack(stack_name)
        if stack:
            return str(stack["StackStatus"])
        return None

    def get_stack_outputs(self, stack_name: str) -> Dict[str, str]:
        """Get stack outputs as a dictionary."""
        stack = self.describe_stack(stack_name)
        if not stack:
            return {}
        return {
            output["OutputKey"]: output["OutputValue"]
            for output in stack.get("Outputs", [])
        }

    def get_account_id(self) -> str:
        """Get the AWS account ID of the current credentials."""
        response = self.sts.get_caller_identity()
        return str(response["Account"])
