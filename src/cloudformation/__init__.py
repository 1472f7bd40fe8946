"""
CloudFormation stack management utilities.
"""

from .stack_manager import StackManager

__all__ = ["StackManager"]
