"""
CloudFormation stack management operations.
"""

import logging
from typing import Iterable, List, NamedTuple, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError, WaiterError

from ..errors import ConfigurationError, StackOperationError
from .stack_status import ALL_STACK_STATUSES

logger = logging.getLogger(__name__)

DEFAULT_WAITER_DELAY = 30
DEFAULT_WAITER_MAX_ATTEMPTS = 120


class StackSummary(NamedTuple):
    """Name and status of a stack as reported by ListStacks."""

    name: str
    status: str


def find_stack(stacks: Iterable[StackSummary], name: str) -> Optional[StackSummary]:
    """Return the first stack called ``name``, or None if there is none."""
    for stack in stacks:
        if stack.name == name:
            return stack
    return None


class StackManager:
    """Create, list and delete CloudFormation stacks."""

    def __init__(
        self,
        region: Optional[str] = None,
        profile: Optional[str] = None,
        waiter_delay: int = DEFAULT_WAITER_DELAY,
        waiter_max_attempts: int = DEFAULT_WAITER_MAX_ATTEMPTS,
    ):
        """
        Initialize stack manager.

        Args:
            region: AWS region, defaults to the session's configured region
            profile: AWS profile to use
            waiter_delay: Seconds between checks in the create/delete waiters
            waiter_max_attempts: Checks before a waiter gives up
        """
        self.region = region
        self.profile = profile
        self.waiter_config = {"Delay": waiter_delay, "MaxAttempts": waiter_max_attempts}

        session_args = {}
        if region:
            session_args["region_name"] = region
        if profile:
            session_args["profile_name"] = profile

        try:
            session = boto3.Session(**session_args)
            self.cloudformation = session.client("cloudformation")
        except BotoCoreError as e:
            raise ConfigurationError("Could not create CloudFormation client", details=str(e))

    def create_stack(self, stack_name: str, template_body: str) -> None:
        """Create a stack and block until CloudFormation reports it complete.

        Raises:
            StackOperationError: If the request is rejected or creation fails
        """
        logger.info(f"Creating stack {stack_name}")
        try:
            self.cloudformation.create_stack(
                StackName=stack_name, TemplateBody=template_body
            )
            self._wait("stack_create_complete", stack_name)
        except (ClientError, WaiterError, BotoCoreError) as e:
            raise StackOperationError("create", stack_name, e)
        logger.info(f"Stack {stack_name} created")

    def list_stacks(
        self, status_filter: Optional[Iterable[str]] = None
    ) -> List[StackSummary]:
        """List stacks whose status is in ``status_filter``.

        Args:
            status_filter: Statuses to include, defaults to ALL_STACK_STATUSES

        Returns:
            A fresh snapshot of (name, status) pairs in service order
        """
        statuses = list(status_filter) if status_filter is not None else list(ALL_STACK_STATUSES)
        stacks = []

        try:
            paginator = self.cloudformation.get_paginator("list_stacks")
            for page in paginator.paginate(StackStatusFilter=statuses):
                for stack in page["StackSummaries"]:
                    stacks.append(StackSummary(stack["StackName"], stack["StackStatus"]))
        except (ClientError, BotoCoreError) as e:
            raise StackOperationError("list", None, e)

        logger.debug(f"Listed {len(stacks)} stacks")
        return stacks

    def delete_stack(self, stack_name: str) -> None:
        """Delete a stack and block until CloudFormation reports it gone.

        Raises:
            StackOperationError: If the request is rejected or deletion fails
        """
        logger.info(f"Deleting stack {stack_name}")
        try:
            self.cloudformation.delete_stack(StackName=stack_name)
            self._wait("stack_delete_complete", stack_name)
        except (ClientError, WaiterError, BotoCoreError) as e:
            raise StackOperationError("delete", stack_name, e)
        logger.info(f"Stack {stack_name} deleted")

    def _wait(self, waiter_name: str, stack_name: str) -> None:
        """Block on one of the SDK's stack waiters."""
        logger.debug(f"Waiting on {waiter_name} for {stack_name} with {self.waiter_config}")
        waiter = self.cloudformation.get_waiter(waiter_name)
        waiter.wait(StackName=stack_name, WaiterConfig=dict(self.waiter_config))

