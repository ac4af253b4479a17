#!/usr/bin/env python3
"""
cli.py
------
Shared CLI utilities and statistics for hugocheck commands.

Functions:
    setup_logger: Initialize CheckerLogger for CLI operations

Classes:
    CheckStats: Counters for a validation run

Usage:
    from hugocheck.core.cli import setup_logger, CheckStats

    logger = setup_logger(log_dir, "checker")
    stats = CheckStats()
    stats.files_processed += 1
    print(stats.summary())
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import logging
from pathlib import Path
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Any, Optional

# --- Local imports ---
from hugocheck.core.logging_manager import CheckerLogger


# ═══════════════════════════════════════════════════════════════════════════
# LOGGER SETUP
# ═══════════════════════════════════════════════════════════════════════════

def setup_logger(
    log_dir: Path, component_name: str, verbose: bool = False
) -> CheckerLogger:
    """
    Setup logging for CLI operations.

    Creates the operations log directory if it doesn't exist and initializes
    a CheckerLogger instance for the specified component. In verbose mode
    informational messages are echoed to the console as well.

    Args:
        log_dir: Base log directory (typically from paths.LOG_DIR)
        component_name: Component identifier for logging (e.g., 'checker')
        verbose: Echo INFO messages to the console

    Returns:
        Configured CheckerLogger instance
    """
    operations_log_dir = log_dir / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return CheckerLogger(
        operations_log_dir,
        component_name=component_name,
        console_level=logging.INFO if verbose else logging.WARNING,
    )


# ═══════════════════════════════════════════════════════════════════════════
# STATISTICS
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class CheckStats:
    """
    Statistics for a validation run.

    Attributes:
        folders_checked: Number of governed folders visited
        documents_checked: Number of logical documents visited
        files_processed: Number of language variants validated
        files_ignored: Number of files skipped by an ignore rule
        warnings: Number of warnings raised
        start_time: Run start timestamp
    """
    folders_checked: int = 0
    documents_checked: int = 0
    files_processed: int = 0
    files_ignored: int = 0
    warnings: int = 0
    start_time: datetime = field(default_factory=datetime.now)
    _duration_cached: Optional[float] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate statistics on initialization."""
        for name in (
            "folders_checked",
            "documents_checked",
            "files_processed",
            "files_ignored",
            "warnings",
        ):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    def duration(self) -> float:
        """Get elapsed time in seconds (cached after first call)."""
        if self._duration_cached is None:
            self._duration_cached = (datetime.now() - self.start_time).total_seconds()
        return self._duration_cached

    def summary(self) -> str:
        """Get formatted summary string."""
        return (
            f"{self.folders_checked} folders, "
            f"{self.documents_checked} documents, "
            f"{self.files_processed} files checked, "
            f"{self.files_ignored} ignored, "
            f"{self.warnings} warnings, "
            f"{self.duration():.2f}s"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "folders_checked": self.folders_checked,
            "documents_checked": self.documents_checked,
            "files_processed": self.files_processed,
            "files_ignored": self.files_ignored,
            "warnings": self.warnings,
            "duration": self.duration(),
        }
