"""
Configuration management for CDK stack utilities.

Resolves the AWS profile/region and the CDK project location once, and hands
them to the command builder and client as an immutable value.
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Mapping, Optional, Union
from dataclasses import dataclass, fields


DEFAULT_PROFILE = "default"
DEFAULT_REGION = "us-east-1"
DEFAULT_CDK_DIR = "cdk"
DEFAULT_CDK_COMMAND = "cdk"


@dataclass
class ConfigurationError(Exception):
    """Raised when configuration is invalid or cannot be loaded."""

    message: str
    details: Optional[str] = None

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


@dataclass(frozen=True)
class CdkConfig:
    """AWS and CDK settings shared by every stack operation."""

    profile: str = DEFAULT_PROFILE
    region: str = DEFAULT_REGION

    # Directory holding cdk.json; every cdk process runs from here
    cdk_dir: str = DEFAULT_CDK_DIR
    cdk_command: str = DEFAULT_CDK_COMMAND

    @property
    def cdk_path(self) -> Path:
        """CDK project directory as a path."""
        return Path(self.cdk_dir)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def check_keys(cls, data: Mapping[str, Any]) -> None:
        """Reject keys that are not config fields."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(
                "Unknown configuration keys", ", ".join(unknown)
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CdkConfig":
        """Create config from dictionary, rejecting unknown keys and skipping None values."""
        cls.check_keys(data)
        return cls(**{k: str(v) for k, v in data.items() if v is not None})

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CdkConfig":
        """
        Build config from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)
        """
        env = os.environ if environ is None else environ
        return cls(
            profile=env.get("AWS_PROFILE") or DEFAULT_PROFILE,
            region=env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION") or DEFAULT_REGION,
            cdk_dir=env.get("CDK_DIR") or DEFAULT_CDK_DIR,
            cdk_command=env.get("CDK_COMMAND") or DEFAULT_CDK_COMMAND,
        )


def _load_config_file(config_file: Union[str, Path]) -> Dict[str, Any]:
    """Load a YAML config file into a dictionary."""
    path = Path(config_file)
    if not path.exists():
        raise ConfigurationError("Configuration file not found", str(path))

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}", str(e)) from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration in {path} must be a mapping")
    return data


def load_cdk_config(
    config_file: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
    **overrides: Optional[str],
) -> CdkConfig:
    """
    Load CDK configuration.

    Values are layered: environment variables first, then the optional YAML
    file, then any keyword overrides that are not None.

    Args:
        config_file: Optional YAML file with profile/region/cdk_dir/cdk_command
        environ: Environment mapping (defaults to os.environ)
        **overrides: Explicit values, typically from CLI options

    Returns:
        Immutable CdkConfig
    """
    config = CdkConfig.from_env(environ)

    if config_file:
        data = _load_config_file(config_file)
        CdkConfig.check_keys(data)
        # null values in the file leave the environment value in place
        file_values = {k: v for k, v in data.items() if v is not None}
        config = CdkConfig.from_dict({**config.to_dict(), **file_values})

    explicit = {k: v for k, v in overrides.items() if v is not None}
    if explicit:
        config = CdkConfig.from_dict({**config.to_dict(), **explicit})

    return config
