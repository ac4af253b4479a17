#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Logging for hugocheck runs.

Every run writes two rotating files:

    <log_dir>/<component>.log   progress, warnings and findings
    <log_dir>/errors.log        fatal findings and exceptions with traceback

Console output is limited to warnings unless the CLI runs in verbose mode.
The logger is only a sink: nothing it does changes the outcome of a check.

Usage:
    logger = CheckerLogger(log_dir, "checker")
    logger.log_info("Checking all files content in the folder 'content'")
    logger.log_issue(issue)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional

# --- Third party imports ---
import click

if TYPE_CHECKING:
    from hugocheck.validators.report import CheckIssue

FILE_FORMAT = "%(asctime)s - %(levelname)s - [%(funcName)s:%(lineno)d] - %(message)s"
CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def _with_details(message: str, details: Optional[Dict[str, Any]]) -> str:
    if not details:
        return message
    return f"{message}: {json.dumps(details, default=str)}"


def _format_error(error: BaseException) -> str:
    return f"{type(error).__name__}: {error}"


class CheckerLogger:
    """
    File and console logging for one hugocheck component.

    Attributes:
        log_dir: Directory holding the log files
        component_name: Component name, used for the main log file name
        main_logger: Logger for progress and findings
        error_logger: Logger for fatal findings and exceptions
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "hugocheck",
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 5,
        console_level: int = logging.WARNING,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.console_level = console_level
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.main_logger = self._logger(
            "operations", f"{component_name}.log", logging.INFO, max_bytes, backup_count
        )
        console = logging.StreamHandler()
        console.setLevel(console_level)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
        self.main_logger.addHandler(console)

        self.error_logger = self._logger(
            "errors", "errors.log", logging.ERROR, max_bytes, backup_count
        )

    def _logger(
        self, channel: str, file_name: str, level: int, max_bytes: int, backup_count: int
    ) -> logging.Logger:
        logger = logging.getLogger(f"{self.component_name}.{channel}")
        logger.setLevel(level)
        # A new CheckerLogger for the same component replaces the old handlers
        logger.handlers = []

        handler = RotatingFileHandler(
            self.log_dir / file_name,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        return logger

    # ----- Progress -----

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.info(_with_details(message, details))

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.warning(_with_details(message, details))

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Log a completed operation with its counters as JSON."""
        self.main_logger.info(_with_details(f"OPERATION {operation}", details or {}))

    # ----- Findings and errors -----

    def log_issue(self, issue: CheckIssue) -> None:
        """
        Log a check finding.

        Warnings go to the main log; fatal findings go to both logs, with the
        underlying cause on a second line.
        """
        location = f" ({issue.file_path})" if issue.file_path else ""
        text = f"[{issue.category}] {issue.describe()}{location}"
        if issue.is_fatal:
            self.main_logger.error(text)
            self.error_logger.error(text)
        else:
            self.main_logger.warning(text)

    def log_error(self, error: BaseException, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Log an exception with context and its own traceback.

        Args:
            error: Exception that occurred
            context: Where it occurred (folder, file, operation)
        """
        self.error_logger.error(_with_details(_format_error(error), context))
        trace = "".join(
            traceback.format_exception(type(error), error, error.__traceback__)
        )
        self.error_logger.error(f"Traceback:\n{trace}")

    def log_cli_error(
        self,
        error: BaseException,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """
        Log an exception and return the line shown to the CLI user.

        Examples:
            >>> logger.log_cli_error(ConfigError("Key 'languages' must be a list"))
            "❌ ConfigError: Key 'languages' must be a list"
        """
        self.log_error(error, context or {"source": "cli"})
        message = f"❌ {_format_error(error)}"
        if show_traceback:
            trace = "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )
            return f"{message}\n\n{trace}"
        return message


def handle_cli_error(
    ctx: click.Context,
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Log a command failure, print it to stderr and exit.

    Args:
        ctx: Click context holding `logger` and `verbose`
        error: Exception that stopped the command
        operation: Command name (e.g. 'languages')
        additional_context: Extra context such as the rule-set file
        exit_code: Process exit status
    """
    context = {"operation": operation, **(additional_context or {})}
    message = safe_logger(ctx.obj.get("logger")).log_cli_error(
        error, context, show_traceback=ctx.obj.get("verbose", False)
    )
    click.echo(message, err=True)
    sys.exit(exit_code)


class NullLogger:
    """Logger with the CheckerLogger interface that discards everything."""

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_issue(self, issue: CheckIssue) -> None:
        pass

    def log_error(self, error: BaseException, context: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_cli_error(
        self,
        error: BaseException,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        return f"❌ {_format_error(error)}"


_null_logger = NullLogger()


def safe_logger(logger: Optional[CheckerLogger]) -> CheckerLogger:
    """Return logger, or a shared NullLogger when it is None."""
    return logger if logger is not None else _null_logger  # type: ignore[return-value]
