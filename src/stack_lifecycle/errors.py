"""
Errors raised while driving a stack through its lifecycle.

Every error carries the process exit code the CLI reports for it.
"""

from dataclasses import dataclass
from typing import Optional


class StackLifecycleError(Exception):
    """Base class for all stack lifecycle failures."""

    exit_code = 1


@dataclass
class ConfigurationError(StackLifecycleError):
    """Raised when configuration is invalid or cannot be loaded."""

    message: str
    details: Optional[str] = None

    exit_code = 2

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class StackOperationError(StackLifecycleError):
    """A CloudFormation call or waiter failed."""

    exit_code = 1

    def __init__(self, operation: str, stack_name: Optional[str], cause: Exception):
        self.operation = operation
        self.stack_name = stack_name
        self.cause = cause
        target = f" stack {stack_name}" if stack_name else " stacks"
        super().__init__(f"Could not {operation}{target}: {cause}")


class VisibilityTimeoutError(StackLifecycleError):
    """The stack never reached the expected state in the stack list."""

    exit_code = 3

    def __init__(
        self,
        stack_name: str,
        waited: float,
        expectation: str = "in list of stacks",
        last_status: Optional[str] = None,
    ):
        self.stack_name = stack_name
        self.waited = waited
        self.expectation = expectation
        self.last_status = last_status
        message = f"Could not find {stack_name} {expectation} after {waited:g} seconds"
        if last_status:
            message += f" (last status: {last_status})"
        super().__init__(message)
