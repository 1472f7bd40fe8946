"""
AWS CDK stack lifecycle utilities.

The module-level functions mirror the CdkClient methods for one-off calls.
"""

from typing import Any, Dict, Iterable, Optional

from config import CdkConfig

from .client import CdkClient
from .command_builder import PROMOTED_CONTEXT_KEYS, build_command, build_params
from .errors import (
    CdkError,
    CdkNotInstalled,
    StackBootstrapFailed,
    StackDeployFailed,
    StackDestroyFailed,
    StackDiffFailed,
    StackInitFailed,
    StackSynthFailed,
)
from .models import ParameterLike, ProcessOutcome, StackParameter
from .runner import run_cdk


def init(language: str, config: CdkConfig) -> None:
    """Initialize a CDK app."""
    CdkClient(config).init(language)


def destroy(
    name: str,
    parameters: Optional[Iterable[ParameterLike]],
    config: CdkConfig,
) -> str:
    """Delete a stack, returning its name."""
    return CdkClient(config).destroy(name, parameters)


def deploy(
    name: str,
    script: Optional[str],
    parameters: Optional[Iterable[ParameterLike]],
    config: CdkConfig,
) -> Optional[Dict[str, Any]]:
    """Deploy a stack, returning its live description."""
    return CdkClient(config).deploy(name, script, parameters)


def diff(
    name: str,
    script: Optional[str],
    parameters: Optional[Iterable[ParameterLike]],
    config: CdkConfig,
) -> None:
    """Diff a stack against its deployed state."""
    CdkClient(config).diff(name, script, parameters)


def synth(
    name: str,
    script: Optional[str],
    parameters: Optional[Iterable[ParameterLike]],
    config: CdkConfig,
) -> Optional[Dict[str, Any]]:
    """Synthesize a stack, returning its live description."""
    return CdkClient(config).synth(name, script, parameters)


__all__ = [
    "CdkClient",
    "CdkConfig",
    "CdkError",
    "CdkNotInstalled",
    "PROMOTED_CONTEXT_KEYS",
    "ProcessOutcome",
    "StackBootstrapFailed",
    "StackDeployFailed",
    "StackDestroyFailed",
    "StackDiffFailed",
    "StackInitFailed",
    "StackParameter",
    "StackSynthFailed",
    "build_command",
    "build_params",
    "deploy",
    "destroy",
    "diff",
    "init",
    "run_cdk",
    "synth",
]
