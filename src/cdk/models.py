"""
Data types passed between the command builder, runner and client.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Union


@dataclass(frozen=True)
class StackParameter:
    """One stack input, in CloudFormation's ParameterKey/ParameterValue shape."""

    parameter_key: str
    parameter_value: str

    @classmethod
    def from_dict(cls, data: Mapping[str, str]) -> "StackParameter":
        """Create a parameter from a CloudFormation-style dictionary."""
        return cls(
            parameter_key=data["ParameterKey"],
            parameter_value=str(data["ParameterValue"]),
        )

    def to_dict(self) -> Dict[str, str]:
        """Convert to a CloudFormation-style dictionary."""
        return {
            "ParameterKey": self.parameter_key,
            "ParameterValue": self.parameter_value,
        }


ParameterLike = Union[StackParameter, Mapping[str, str]]


def normalize_parameters(
    parameters: Union[Iterable[ParameterLike], None]
) -> List[StackParameter]:
    """Convert a parameter sequence to StackParameter instances, keeping order."""
    if not parameters:
        return []
    return [
        p if isinstance(p, StackParameter) else StackParameter.from_dict(p)
        for p in parameters
    ]


@dataclass
class ProcessOutcome:
    """Exit status and captured output of one cdk process."""

    exit_code: int
    stderr: str = ""
    stdout: str = ""

    @property
    def success(self) -> bool:
        """Check if the process exited cleanly."""
        return self.exit_code == 0
