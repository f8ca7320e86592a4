"""
CloudFormation stack status values.
"""

from enum import Enum
from typing import Optional, Tuple


class StackStatus(str, Enum):
    """Lifecycle states reported by CloudFormation for a stack."""

    CREATE_IN_PROGRESS = "CREATE_IN_PROGRESS"
    CREATE_FAILED = "CREATE_FAILED"
    CREATE_COMPLETE = "CREATE_COMPLETE"
    ROLLBACK_IN_PROGRESS = "ROLLBACK_IN_PROGRESS"
    ROLLBACK_FAILED = "ROLLBACK_FAILED"
    ROLLBACK_COMPLETE = "ROLLBACK_COMPLETE"
    DELETE_IN_PROGRESS = "DELETE_IN_PROGRESS"
    DELETE_FAILED = "DELETE_FAILED"
    DELETE_COMPLETE = "DELETE_COMPLETE"
    UPDATE_IN_PROGRESS = "UPDATE_IN_PROGRESS"
    UPDATE_COMPLETE_CLEANUP_IN_PROGRESS = "UPDATE_COMPLETE_CLEANUP_IN_PROGRESS"
    UPDATE_COMPLETE = "UPDATE_COMPLETE"
    UPDATE_FAILED = "UPDATE_FAILED"
    UPDATE_ROLLBACK_IN_PROGRESS = "UPDATE_ROLLBACK_IN_PROGRESS"
    UPDATE_ROLLBACK_FAILED = "UPDATE_ROLLBACK_FAILED"
    UPDATE_ROLLBACK_COMPLETE_CLEANUP_IN_PROGRESS = (
        "UPDATE_ROLLBACK_COMPLETE_CLEANUP_IN_PROGRESS"
    )
    UPDATE_ROLLBACK_COMPLETE = "UPDATE_ROLLBACK_COMPLETE"
    REVIEW_IN_PROGRESS = "REVIEW_IN_PROGRESS"
    IMPORT_IN_PROGRESS = "IMPORT_IN_PROGRESS"
    IMPORT_COMPLETE = "IMPORT_COMPLETE"
    IMPORT_ROLLBACK_IN_PROGRESS = "IMPORT_ROLLBACK_IN_PROGRESS"
    IMPORT_ROLLBACK_FAILED = "IMPORT_ROLLBACK_FAILED"
    IMPORT_ROLLBACK_COMPLETE = "IMPORT_ROLLBACK_COMPLETE"

    def __str__(self) -> str:
        return self.value


# Default ListStacks filter, deleted stacks included
ALL_STACK_STATUSES: Tuple[str, ...] = (
    StackStatus.CREATE_IN_PROGRESS.value,
    StackStatus.CREATE_FAILED.value,
    StackStatus.CREATE_COMPLETE.value,
    StackStatus.DELETE_COMPLETE.value,
    StackStatus.ROLLBACK_IN_PROGRESS.value,
    StackStatus.ROLLBACK_FAILED.value,
    StackStatus.ROLLBACK_COMPLETE.value,
    StackStatus.DELETE_IN_PROGRESS.value,
    StackStatus.DELETE_FAILED.value,
    StackStatus.UPDATE_IN_PROGRESS.value,
    StackStatus.UPDATE_COMPLETE_CLEANUP_IN_PROGRESS.value,
    StackStatus.UPDATE_COMPLETE.value,
    StackStatus.UPDATE_ROLLBACK_IN_PROGRESS.value,
    StackStatus.UPDATE_ROLLBACK_FAILED.value,
    StackStatus.UPDATE_ROLLBACK_COMPLETE_CLEANUP_IN_PROGRESS.value,
    StackStatus.UPDATE_ROLLBACK_COMPLETE.value,
    StackStatus.REVIEW_IN_PROGRESS.value,
)


def status_color(status: Optional[str]) -> str:
    """Terminal color for a status: green for success, red for failure, yellow otherwise."""
    status = status or ""
    if "COMPLETE" in status and "ROLLBACK" not in status:
        return "green"
    if "FAILED" in status or "ROLLBACK" in status:
        return "red"
    return "yellow"
