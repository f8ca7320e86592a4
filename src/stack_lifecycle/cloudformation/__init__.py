"""
CloudFormation stack management utilities.
"""

from .poller import PollState, StackPoller
from .stack_manager import StackManager, StackSummary, find_stack
from .stack_status import ALL_STACK_STATUSES, StackStatus

__all__ = [
    "StackManager",
    "StackSummary",
    "find_stack",
    "StackPoller",
    "PollState",
    "StackStatus",
    "ALL_STACK_STATUSES",
]
