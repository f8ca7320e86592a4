"""
Configuration for the stack lifecycle driver.

Settings come from command-line flags, an optional JSON or YAML config file,
and built-in defaults, in that order of precedence. The result is a frozen
``DriverConfig`` that is passed explicitly to everything that needs it.
"""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from jsonschema import ValidationError, validate

from .errors import ConfigurationError
from .naming import generate_stack_name, is_valid_stack_name

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRY_SECONDS = 100
MIN_MAX_RETRY_SECONDS = 10
DEFAULT_INITIAL_DELAY = 1.0
DEFAULT_MULTIPLIER = 2.0


class Operation(str, Enum):
    """What the driver should do with the stack."""

    CREATE = "create"
    LIST = "list"
    DELETE = "delete"
    ALL = "all"

    @property
    def needs_template(self) -> bool:
        return self in (Operation.CREATE, Operation.ALL)

    @classmethod
    def parse(cls, value: Union[str, "Operation"]) -> "Operation":
        """Convert a flag value to an Operation."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ConfigurationError(f"Unknown operation: {value}")


CONFIG_FILE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "MaxRetrySeconds": {"type": "integer"},
        "TemplateFile": {"type": "string"},
        "Debug": {"type": "boolean"},
        "InitialDelay": {"type": "number", "exclusiveMinimum": 0},
        "Multiplier": {"type": "number", "exclusiveMinimum": 1},
        "Region": {"type": "string"},
        "Profile": {"type": "string"},
    },
    "additionalProperties": False,
}


@dataclass(frozen=True)
class DriverConfig:
    """Settings for a single run of the driver."""

    stack_name: str
    operation: Operation = Operation.ALL
    template_file: Optional[Path] = None
    template_body: Optional[str] = None
    max_retry_seconds: int = DEFAULT_MAX_RETRY_SECONDS
    initial_delay: float = DEFAULT_INITIAL_DELAY
    multiplier: float = DEFAULT_MULTIPLIER
    debug: bool = False
    region: Optional[str] = None
    profile: Optional[str] = None
    # False when the name was generated rather than supplied
    explicit_name: bool = True


def load_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Load and validate a config file.

    Args:
        path: JSON file, or YAML file when the suffix is .yaml/.yml

    Returns:
        The validated settings

    Raises:
        ConfigurationError: If the file is missing, unparseable or invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r") as f:
            if config_path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to parse configuration file {config_path}: {e}")

    if data is None:
        data = {}

    try:
        validate(instance=data, schema=CONFIG_FILE_SCHEMA)
    except ValidationError as e:
        raise ConfigurationError(
            f"Configuration validation failed: {e.message}",
            details=f"Path: {' -> '.join(str(p) for p in e.absolute_path)}",
        )

    logger.debug(f"Loaded configuration from {config_path}: {data}")
    return dict(data)


def read_template(path: Union[str, Path]) -> str:
    """Read a template file; its contents are passed through untouched."""
    template_path = Path(path)
    try:
        return template_path.read_text()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Could not read template file {template_path}", details=str(e))


def build_config(
    operation: Union[str, Operation] = Operation.ALL,
    stack_name: Optional[str] = None,
    template_file: Optional[Union[str, Path]] = None,
    max_retry_seconds: Optional[int] = None,
    config_file: Optional[Union[str, Path]] = None,
    initial_delay: Optional[float] = None,
    multiplier: Optional[float] = None,
    debug: bool = False,
    region: Optional[str] = None,
    profile: Optional[str] = None,
) -> DriverConfig:
    """Merge flags, config file and defaults into a DriverConfig.

    The template is read here so that a bad template path fails before any
    call to CloudFormation is made.
    """
    op = Operation.parse(operation)
    file_settings = load_config_file(config_file) if config_file else {}

    def pick(value: Any, key: str, default: Any) -> Any:
        if value is not None:
            return value
        return file_settings.get(key, default)

    retry_seconds = int(pick(max_retry_seconds, "MaxRetrySeconds", DEFAULT_MAX_RETRY_SECONDS))
    if retry_seconds < MIN_MAX_RETRY_SECONDS:
        logger.debug(f"Raising max retry seconds from {retry_seconds} to {MIN_MAX_RETRY_SECONDS}")
        retry_seconds = MIN_MAX_RETRY_SECONDS

    delay = float(pick(initial_delay, "InitialDelay", DEFAULT_INITIAL_DELAY))
    factor = float(pick(multiplier, "Multiplier", DEFAULT_MULTIPLIER))
    if delay <= 0:
        raise ConfigurationError(f"Initial delay must be positive, got {delay:g}")
    if factor <= 1:
        raise ConfigurationError(f"Multiplier must be greater than 1, got {factor:g}")

    template_value = pick(template_file, "TemplateFile", None)
    template_path = Path(template_value) if template_value else None
    template_body = None
    if op.needs_template:
        if template_path is None:
            raise ConfigurationError(
                "You must supply the name of a template file",
                details="stack-lifecycle -t TEMPLATE-FILE",
            )
        template_body = read_template(template_path)

    explicit_name = bool(stack_name)
    if stack_name:
        if not is_valid_stack_name(stack_name):
            raise ConfigurationError(f"Invalid stack name: {stack_name}")
        name = stack_name
    else:
        name = generate_stack_name()

    return DriverConfig(
        stack_name=name,
        operation=op,
        template_file=template_path,
        template_body=template_body,
        max_retry_seconds=retry_seconds,
        initial_delay=delay,
        multiplier=factor,
        debug=bool(debug or file_settings.get("Debug", False)),
        region=pick(region, "Region", None),
        profile=pick(profile, "Profile", None),
        explicit_name=explicit_name,
    )
