"""
Tests for CloudFormation stack management functionality.
"""

from unittest.mock import Mock, patch

import pytest
from botocore.exceptions import BotoCoreError, ClientError, WaiterError

from stack_lifecycle.cloudformation.stack_manager import (
    StackManager,
    StackSummary,
    find_stack,
)
from stack_lifecycle.cloudformation.stack_status import ALL_STACK_STATUSES
from stack_lifecycle.errors import ConfigurationError, StackOperationError


class TestFindStack:
    """Test name lookup in a stack snapshot."""

    def test_found(self) -> None:
        stacks = [StackSummary("a", "CREATE_COMPLETE"), StackSummary("b", "UPDATE_COMPLETE")]
        assert find_stack(stacks, "b") == StackSummary("b", "UPDATE_COMPLETE")

    def test_not_found(self) -> None:
        stacks = [StackSummary("a", "CREATE_COMPLETE")]
        assert find_stack(stacks, "missing") is None

    def test_empty_snapshot(self) -> None:
        assert find_stack([], "a") is None

    def test_first_match_wins(self) -> None:
        """Deleted stacks keep their name, so duplicates are normal."""
        stacks = [
            StackSummary("other", "CREATE_COMPLETE"),
            StackSummary("dup", "DELETE_COMPLETE"),
            StackSummary("dup", "CREATE_COMPLETE"),
        ]
        assert find_stack(stacks, "dup").status == "DELETE_COMPLETE"

    def test_name_match_is_exact(self) -> None:
        stacks = [StackSummary("stack-1", "CREATE_COMPLETE")]
        assert find_stack(stacks, "stack") is None
        assert find_stack(stacks, "STACK-1") is None


class TestStackManager:
    """Test CloudFormation stack management."""

    def create_manager(self, **kwargs):
        """Create a test manager with a mocked CloudFormation client."""
        with patch("boto3.Session"):
            manager = StackManager(region="us-east-1", **kwargs)

            manager.cloudformation = Mock()

            return manager

    def test_session_arguments(self) -> None:
        """Region and profile are passed to the boto3 session."""
        with patch("boto3.Session") as session_cls:
            StackManager(region="eu-west-1", profile="dev")

        session_cls.assert_called_once_with(region_name="eu-west-1", profile_name="dev")
        session_cls.return_value.client.assert_called_once_with("cloudformation")

    def test_session_defaults(self) -> None:
        """Without region or profile the session uses the boto3 defaults."""
        with patch("boto3.Session") as session_cls:
            StackManager()

        session_cls.assert_called_once_with()

    def test_session_failure(self) -> None:
        with patch("boto3.Session", side_effect=BotoCoreError()):
            with pytest.raises(ConfigurationError):
                StackManager(profile="missing")

    def test_create_stack(self) -> None:
        """Test creating a stack waits for completion."""
        manager = self.create_manager()
        waiter = Mock()
        manager.cloudformation.get_waiter.return_value = waiter

        manager.create_stack("test-stack", "{}")

        manager.cloudformation.create_stack.assert_called_once_with(
            StackName="test-stack", TemplateBody="{}"
        )
        manager.cloudformation.get_waiter.assert_called_once_with("stack_create_complete")
        waiter.wait.assert_called_once_with(
            StackName="test-stack", WaiterConfig={"Delay": 30, "MaxAttempts": 120}
        )

    def test_create_stack_rejected(self) -> None:
        """A rejected request fails without waiting."""
        manager = self.create_manager()
        manager.cloudformation.create_stack.side_effect = ClientError(
            {"Error": {"Code": "ValidationError", "Message": "Template format error"}},
            "CreateStack",
        )

        with pytest.raises(StackOperationError) as exc_info:
            manager.create_stack("test-stack", "not a template")

        assert exc_info.value.operation == "create"
        assert exc_info.value.stack_name == "test-stack"
        assert "Template format error" in str(exc_info.value)
        manager.cloudformation.get_waiter.assert_not_called()

    def test_create_stack_waiter_failure(self) -> None:
        """A stack that rolls back surfaces the waiter error."""
        manager = self.create_manager(waiter_delay=5, waiter_max_attempts=3)
        waiter = Mock()
        waiter.wait.side_effect = WaiterError(
            name="StackCreateComplete",
            reason="Waiter encountered a terminal failure state",
            last_response={},
        )
        manager.cloudformation.get_waiter.return_value = waiter

        with pytest.raises(StackOperationError) as exc_info:
            manager.create_stack("test-stack", "{}")

        assert isinstance(exc_info.value.cause, WaiterError)
        waiter.wait.assert_called_once_with(
            StackName="test-stack", WaiterConfig={"Delay": 5, "MaxAttempts": 3}
        )

    def test_list_stacks(self) -> None:
        """Test listing stacks across pages."""
        manager = self.create_manager()
        paginator = manager.cloudformation.get_paginator.return_value
        paginator.paginate.return_value = [
            {
                "StackSummaries": [
                    {"StackName": "stack-a", "StackStatus": "CREATE_COMPLETE"},
                    {"StackName": "stack-b", "StackStatus": "DELETE_COMPLETE"},
                ]
            },
            {"StackSummaries": [{"StackName": "stack-c", "StackStatus": "ROLLBACK_FAILED"}]},
        ]

        stacks = manager.list_stacks()

        assert stacks == [
            StackSummary("stack-a", "CREATE_COMPLETE"),
            StackSummary("stack-b", "DELETE_COMPLETE"),
            StackSummary("stack-c", "ROLLBACK_FAILED"),
        ]
        manager.cloudformation.get_paginator.assert_called_once_with("list_stacks")
        paginator.paginate.assert_called_once_with(
            StackStatusFilter=list(ALL_STACK_STATUSES)
        )

    def test_list_stacks_custom_filter(self) -> None:
        manager = self.create_manager()
        paginator = manager.cloudformation.get_paginator.return_value
        paginator.paginate.return_value = [{"StackSummaries": []}]

        assert manager.list_stacks(status_filter=["CREATE_COMPLETE"]) == []
        paginator.paginate.assert_called_once_with(StackStatusFilter=["CREATE_COMPLETE"])

    def test_list_stacks_error(self) -> None:
        """Listing errors propagate rather than returning an empty list."""
        manager = self.create_manager()
        manager.cloudformation.get_paginator.return_value.paginate.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "not authorized"}}, "ListStacks"
        )

        with pytest.raises(StackOperationError) as exc_info:
            manager.list_stacks()

        assert exc_info.value.operation == "list"
        assert "not authorized" in str(exc_info.value)

    def test_delete_stack(self) -> None:
        """Deletion waits on the stack that was deleted."""
        manager = self.create_manager()
        waiter = Mock()
        manager.cloudformation.get_waiter.return_value = waiter

        manager.delete_stack("test-stack")

        manager.cloudformation.delete_stack.assert_called_once_with(StackName="test-stack")
        manager.cloudformation.get_waiter.assert_called_once_with("stack_delete_complete")
        assert waiter.wait.call_args[1]["StackName"] == "test-stack"

    def test_delete_stack_failure(self) -> None:
        manager = self.create_manager()
        waiter = Mock()
        waiter.wait.side_effect = WaiterError(
            name="StackDeleteComplete", reason="DELETE_FAILED", last_response={}
        )
        manager.cloudformation.get_waiter.return_value = waiter

        with pytest.raises(StackOperationError) as exc_info:
            manager.delete_stack("test-stack")

        assert exc_info.value.operation == "delete"
