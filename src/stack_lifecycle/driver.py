"""
Sequence create, list and delete for a single stack.
"""

import logging
from typing import Callable, List, Optional

import click

from .backoff import BackoffPolicy
from .cloudformation import StackManager, StackPoller, StackSummary
from .cloudformation.stack_status import StackStatus, status_color
from .config import DriverConfig, Operation

logger = logging.getLogger(__name__)

Echo = Callable[[str], None]


def build_poller(manager: StackManager, config: DriverConfig, **kwargs) -> StackPoller:
    """Create a poller using the backoff settings in ``config``."""
    policy = BackoffPolicy(
        initial_delay=config.initial_delay,
        multiplier=config.multiplier,
        max_wait=config.max_retry_seconds,
    )
    return StackPoller(manager, policy, **kwargs)


def format_stack(stack: StackSummary, color: bool = False) -> str:
    status = click.style(stack.status, fg=status_color(stack.status)) if color else stack.status
    return f"{stack.name}, Status: {status}"


class StackLifecycleDriver:
    """Run one operation from the configuration against CloudFormation."""

    def __init__(
        self,
        manager: StackManager,
        config: DriverConfig,
        poller: Optional[StackPoller] = None,
        echo: Echo = click.echo,
        color: bool = False,
    ):
        self.manager = manager
        self.config = config
        self.poller = poller or build_poller(manager, config)
        self.echo = echo
        self.color = color

    def run(self) -> None:
        """Run the configured operation.

        Any failure stops the sequence and propagates as a StackLifecycleError.
        """
        operation = self.config.operation
        logger.debug(f"Running {operation.value} for {self.config.stack_name}")

        if operation == Operation.CREATE:
            self.create()
        elif operation == Operation.LIST:
            self.show_stacks()
        elif operation == Operation.DELETE:
            self.delete()
        else:
            self.create()
            self.show_stacks()
            self.delete(confirm=False)

    def create(self) -> StackSummary:
        name = self.config.stack_name
        self.echo(f"Creating stack {name}")
        self.manager.create_stack(name, self.config.template_body or "")
        stack = self.poller.wait_until_visible(name)
        self.echo(f"Found {name} in list of stacks, as expected")
        return stack

    def show_stacks(self) -> List[StackSummary]:
        stacks = self.manager.list_stacks()
        if self.config.explicit_name:
            stacks = [s for s in stacks if s.name == self.config.stack_name]
        if not stacks:
            self.echo("No stacks found")
        for stack in stacks:
            self.echo(format_stack(stack, self.color))
        return stacks

    def delete(self, confirm: bool = True) -> List[StackSummary]:
        """Delete the stack once it is confirmed to be listed.

        A stack that never shows up in the list is not deleted. Pass
        ``confirm=False`` when the caller has already seen it listed.
        """
        name = self.config.stack_name
        if confirm:
            self.poller.wait_until_visible(name)

        self.echo(f"Deleting stack {name}")
        self.manager.delete_stack(name)
        self.poller.wait_until_deleted(name)
        self.echo(f"Found {name}, with status DELETE_COMPLETE, as expected")

        self.echo(f"{name} should NOT be in the following list:")
        remaining = [
            s
            for s in self.manager.list_stacks()
            if s.status != StackStatus.DELETE_COMPLETE.value
        ]
        for stack in remaining:
            self.echo(format_stack(stack, self.color))
        return remaining
