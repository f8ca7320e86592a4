"""
Stack naming utilities.
"""

import re
import uuid

STACK_NAME_PREFIX = "stack"

# CloudFormation: starts with a letter, alphanumerics and hyphens, max 128 chars
STACK_NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9-]{0,127}$")


def generate_stack_name(prefix: str = STACK_NAME_PREFIX) -> str:
    """Create a random stack name of the form ``<prefix>-<uuid4>``."""
    return f"{prefix}-{uuid.uuid4()}"


def is_valid_stack_name(name: str) -> bool:
    """Check a name against the CloudFormation stack naming rules."""
    return bool(STACK_NAME_PATTERN.match(name))
