#!/usr/bin/env python3
"""
cli_decorators.py
-------------------
Custom Click decorators for hugocheck CLIs.

Usage:
    from hugocheck.core.cli_decorators import hugocheck_cli_group

    @hugocheck_cli_group("checker")
    def cli(ctx):
        '''hugocheck - Validate Hugo content'''
        pass  # Setup handled automatically
"""
from functools import wraps
from pathlib import Path
from typing import Callable
import click

from hugocheck.core.cli import setup_logger
from hugocheck.core.paths import LOG_DIR


def hugocheck_cli_group(component_name: str) -> Callable:
    """
    Decorator factory for creating consistent CLI groups.

    Automatically adds:
    - Click group() decorator
    - --log-dir option
    - --verbose option
    - Context object setup with logger

    Args:
        component_name: Component identifier for logging (e.g., "checker")

    Provides context with:
        ctx.obj["log_dir"]: Path - Log directory
        ctx.obj["verbose"]: bool - Verbose flag
        ctx.obj["logger"]: CheckerLogger - Configured logger instance
    """
    def decorator(f: Callable) -> Callable:
        @click.group()
        @click.option(
            "--log-dir",
            type=click.Path(file_okay=False),
            default=str(LOG_DIR),
            help="Directory for log files"
        )
        @click.option(
            "-v", "--verbose",
            is_flag=True,
            help="Enable verbose logging"
        )
        @click.pass_context
        @wraps(f)
        def wrapper(ctx: click.Context, log_dir: str, verbose: bool):
            ctx.ensure_object(dict)
            ctx.obj["log_dir"] = Path(log_dir)
            ctx.obj["verbose"] = verbose
            ctx.obj["logger"] = setup_logger(Path(log_dir), component_name, verbose)

            return f(ctx)

        return wrapper
    return decorator
