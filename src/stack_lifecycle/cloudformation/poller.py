"""
Poll the stack list until a stack shows up in the expected state.

CloudFormation's ListStacks is eventually consistent, so a stack that a waiter
has just reported as created or deleted may not be listed that way yet.
"""

import logging
import time
from enum import Enum
from typing import Callable, Optional

from ..backoff import BackoffPolicy
from ..errors import VisibilityTimeoutError
from .stack_manager import StackManager, StackSummary, find_stack
from .stack_status import StackStatus

logger = logging.getLogger(__name__)

StackPredicate = Callable[[Optional[StackSummary]], bool]


class PollState(Enum):
    """States of a single confirmation run."""

    WAITING = "waiting"
    FOUND = "found"
    TIMED_OUT = "timed_out"


def is_listed(stack: Optional[StackSummary]) -> bool:
    return stack is not None


def is_delete_complete(stack: Optional[StackSummary]) -> bool:
    return stack is not None and stack.status == StackStatus.DELETE_COMPLETE.value


class StackPoller:
    """Confirm stack state through ListStacks with exponential backoff."""

    def __init__(
        self,
        manager: StackManager,
        policy: BackoffPolicy,
        sleep: Optional[Callable[[float], None]] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.manager = manager
        self.policy = policy
        self._sleep = sleep or time.sleep
        self._clock = clock or time.monotonic
        self.state = PollState.WAITING
        self.attempts = 0

    def wait_for(
        self,
        stack_name: str,
        predicate: StackPredicate,
        expectation: str = "in list of stacks",
    ) -> StackSummary:
        """Poll until ``predicate`` holds for the stack called ``stack_name``.

        Each attempt sleeps for the next delay of the policy, clipped so that
        the total time spent never exceeds ``policy.max_wait``, and then takes
        a fresh snapshot of the stack list.

        Returns:
            The matching stack summary

        Raises:
            VisibilityTimeoutError: If the schedule runs out first
            StackOperationError: If listing the stacks fails
        """
        self.state = PollState.WAITING
        self.attempts = 0
        started = self._clock()
        last: Optional[StackSummary] = None

        for delay in self.policy.delays():
            remaining = self.policy.max_wait - (self._clock() - started)
            if remaining <= 0:
                break

            pause = min(delay, remaining)
            logger.debug(f"Sleeping {pause:g} seconds before looking for {stack_name}")
            self._sleep(pause)

            self.attempts += 1
            last = find_stack(self.manager.list_stacks(), stack_name)
            if predicate(last):
                self.state = PollState.FOUND
                logger.info(f"Found {stack_name} {expectation} after {self.attempts} attempt(s)")
                return last

            logger.debug(f"Attempt {self.attempts}: {stack_name} not yet {expectation}")

        self.state = PollState.TIMED_OUT
        waited = self._clock() - started
        raise VisibilityTimeoutError(
            stack_name,
            waited,
            expectation=expectation,
            last_status=last.status if last else None,
        )

    def wait_until_visible(self, stack_name: str) -> StackSummary:
        """Wait until the stack appears in the stack list."""
        return self.wait_for(stack_name, is_listed)

    def wait_until_deleted(self, stack_name: str) -> StackSummary:
        """Wait until the stack is listed as DELETE_COMPLETE."""
        return self.wait_for(
            stack_name,
            is_delete_complete,
            expectation=f"with status {StackStatus.DELETE_COMPLETE.value}",
        )
