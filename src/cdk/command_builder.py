"""
Build cdk argument vectors for stack operations.
"""

from typing import Iterable, List, Optional

from config import CdkConfig

from .models import ParameterLike, normalize_parameters

# Parameter keys that are also exposed to the CDK app as context variables
PROMOTED_CONTEXT_KEYS = ("EnvironmentStage", "ResourcePrefix")


def global_flags(config: CdkConfig) -> List[str]:
    """Flags passed to every stack-level cdk command."""
    return [
        "--profile", config.profile,
        "--region", config.region,
        "--require-approval", "never",
    ]


def build_params(
    name: str,
    parameters: Optional[Iterable[ParameterLike]],
    config: CdkConfig,
    *,
    script_path: Optional[str] = None,
) -> List[str]:
    """
    Build the flag portion of a stack command.

    Args:
        name: Fully qualified stack name
        parameters: Stack inputs, in the order they should appear
        config: AWS profile/region to target
        script_path: Path to the stack script, exposed as ScriptPath context

    Returns:
        Argument list, without the leading operation and stack name
    """
    params = global_flags(config)

    for parameter in normalize_parameters(parameters):
        key = parameter.parameter_key
        value = parameter.parameter_value
        params.extend(["--parameters", f"{name}:{key}={value}"])
        if key in PROMOTED_CONTEXT_KEYS:
            params.extend(["--context", f"{key}={value}"])

    params.extend(["--context", f"StackName={name}"])
    if script_path:
        params.extend(["--context", f"ScriptPath={script_path}"])

    return params


def build_command(
    operation: str,
    name: str,
    parameters: Optional[Iterable[ParameterLike]],
    config: CdkConfig,
    *,
    script_path: Optional[str] = None,
) -> List[str]:
    """Build ``[operation, name, *flags]`` for a stack-level command."""
    return [operation, name] + build_params(
        name, parameters, config, script_path=script_path
    )
