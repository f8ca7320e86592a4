"""
Stack Lifecycle - create, list and delete CloudFormation stacks from the command line.
"""

__version__ = "1.0.0"

from .config import DriverConfig, Operation, build_config
from .errors import (
    ConfigurationError,
    StackLifecycleError,
    StackOperationError,
    VisibilityTimeoutError,
)

__all__ = [
    "DriverConfig",
    "Operation",
    "build_config",
    "ConfigurationError",
    "StackLifecycleError",
    "StackOperationError",
    "VisibilityTimeoutError",
]
