"""
Errors raised by CDK stack operations.

Every error carries the human-readable ``message`` and the raw stderr text
captured from the cdk process in ``err``.
"""

from typing import Optional


class CdkError(Exception):
    """Base error for a failed cdk invocation."""

    def __init__(self, message: str, err: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.err = err or ""

    def __str__(self) -> str:
        if self.err:
            return f"{self.message}: {self.err.strip()}"
        return self.message


class StackInitFailed(CdkError):
    """Raised when ``cdk init`` exits non-zero."""


class StackDeployFailed(CdkError):
    """Raised when ``cdk deploy`` reports an error and exits non-zero."""


class StackDestroyFailed(CdkError):
    """Raised when ``cdk destroy`` exits non-zero."""


class StackDiffFailed(CdkError):
    """Raised when ``cdk diff`` writes anything to stderr."""


class StackSynthFailed(CdkError):
    """Raised when ``cdk synth`` writes anything to stderr."""


class StackBootstrapFailed(CdkError):
    """Raised when ``cdk bootstrap`` exits non-zero."""


class CdkNotInstalled(CdkError):
    """Raised when the cdk executable is missing or unusable."""
