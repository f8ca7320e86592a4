#!/usr/bin/env python3
"""Main CLI entry point for the stack lifecycle driver."""

import logging
import sys
from typing import Optional

import click

from .. import __version__
from ..cloudformation import StackManager
from ..config import (
    DEFAULT_MAX_RETRY_SECONDS,
    MIN_MAX_RETRY_SECONDS,
    Operation,
    build_config,
)
from ..driver import StackLifecycleDriver
from ..errors import StackLifecycleError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(debug: bool) -> None:
    """Send log records to stderr, at DEBUG when debugging is on."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )
    # botocore is very chatty at DEBUG
    logging.getLogger("botocore").setLevel(logging.INFO if debug else logging.WARNING)


@click.command()
@click.version_option(version=__version__)
@click.option(
    "--max-retry-seconds",
    "-d",
    type=int,
    help=(
        "Max seconds to spend polling the stack list "
        f"(default {DEFAULT_MAX_RETRY_SECONDS}, minimum {MIN_MAX_RETRY_SECONDS})"
    ),
)
@click.option(
    "--operation",
    "-o",
    type=click.Choice([op.value for op in Operation], case_sensitive=False),
    default=Operation.ALL.value,
    show_default=True,
    help="Whether to create, list, or delete the stack, or all to do them all",
)
@click.option("--stack-name", "-n", help="Stack to create, list, or delete (default: stack-<uuid>)")
@click.option(
    "--template-file",
    "-t",
    type=click.Path(dir_okay=False),
    help="Local file containing the template; required for create",
)
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(dir_okay=False),
    help="JSON or YAML config file (MaxRetrySeconds, TemplateFile, Debug)",
)
@click.option("--initial-delay", type=float, help="First backoff delay in seconds (default 1)")
@click.option("--multiplier", type=float, help="Backoff growth factor (default 2)")
@click.option("--region", help="AWS region")
@click.option("--profile", help="AWS profile to use")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def cli(
    max_retry_seconds: Optional[int],
    operation: str,
    stack_name: Optional[str],
    template_file: Optional[str],
    config_file: Optional[str],
    initial_delay: Optional[float],
    multiplier: Optional[float],
    region: Optional[str],
    profile: Optional[str],
    debug: bool,
) -> None:
    """Create, list, and delete a CloudFormation stack.

    Creation and deletion block until CloudFormation reports them complete, and
    are then confirmed against the stack list with exponential backoff.
    """
    configure_logging(debug)

    try:
        config = build_config(
            operation=operation,
            stack_name=stack_name,
            template_file=template_file,
            max_retry_seconds=max_retry_seconds,
            config_file=config_file,
            initial_delay=initial_delay,
            multiplier=multiplier,
            debug=debug,
            region=region,
            profile=profile,
        )
        if config.debug and not debug:
            configure_logging(True)

        if not config.explicit_name:
            click.echo(f"Created stack name {config.stack_name}")

        manager = StackManager(region=config.region, profile=config.profile)
        driver = StackLifecycleDriver(manager, config, color=sys.stdout.isatty())
        driver.run()

    except StackLifecycleError as e:
        logger.debug("Operation failed", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(e.exit_code)


if __name__ == "__main__":
    cli()
