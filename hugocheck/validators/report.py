#!/usr/bin/env python3
"""
report.py
---------
Result types for validation checks.

Every check returns either None (passed) or a CheckIssue. Warnings are
informational; the first error ends the run and becomes the report's
`fatal` issue.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

# --- Local imports ---
from hugocheck.core.cli import CheckStats

ERROR = "error"
WARNING = "warning"


@dataclass(frozen=True)
class CheckIssue:
    """
    A single validation finding.

    Attributes:
        severity: "error" (aborts the run) or "warning" (informational)
        category: Area of the check (language, structure, header, list,
            slug, duplicate, body, config, io)
        message: Human-readable description
        file_path: Offending file or folder, when there is one
        cause: Message of an underlying error, when the issue wraps one
    """

    severity: str
    category: str
    message: str
    file_path: Optional[Path] = None
    cause: Optional[str] = None

    @classmethod
    def error(
        cls,
        category: str,
        message: str,
        file_path: Optional[Path] = None,
        cause: Optional[str] = None,
    ) -> CheckIssue:
        return cls(ERROR, category, message, file_path, cause)

    @classmethod
    def warning(
        cls, category: str, message: str, file_path: Optional[Path] = None
    ) -> CheckIssue:
        return cls(WARNING, category, message, file_path)

    @property
    def is_fatal(self) -> bool:
        return self.severity == ERROR

    def describe(self) -> str:
        """Message followed by the underlying cause, if any."""
        if self.cause:
            return f"{self.message}\n   ↳ {self.cause}"
        return self.message


@dataclass
class CheckReport:
    """Outcome of a complete validation run."""

    fatal: Optional[CheckIssue] = None
    warnings: List[CheckIssue] = field(default_factory=list)
    stats: CheckStats = field(default_factory=CheckStats)

    @property
    def passed(self) -> bool:
        return self.fatal is None

    def add_warning(self, issue: CheckIssue) -> None:
        self.warnings.append(issue)
        self.stats.warnings += 1


def format_check_report(report: CheckReport) -> str:
    """
    Format a validation report as readable text.

    Args:
        report: Report to format

    Returns:
        Formatted report string
    """
    lines = []
    lines.append("\n" + "=" * 60)
    lines.append("HUGO CONTENT CHECK REPORT")
    lines.append("=" * 60)
    lines.append("")

    lines.append(f"Folders Checked: {report.stats.folders_checked}")
    lines.append(f"Documents Checked: {report.stats.documents_checked}")
    lines.append(f"Files Checked: {report.stats.files_processed}")
    lines.append(f"Files Ignored: {report.stats.files_ignored}")
    lines.append(f"⚠️  Warnings: {len(report.warnings)}")
    lines.append("")

    if report.warnings:
        lines.append("WARNINGS:")
        for issue in report.warnings:
            location = f" ({issue.file_path})" if issue.file_path else ""
            lines.append(f"   ⚠️ [{issue.category}] {issue.message}{location}")
        lines.append("")

    if report.passed:
        lines.append("✅ ALL FILES VALID")
    else:
        lines.append("❌ VALIDATION FAILED")
        lines.append(f"   ❌ [{report.fatal.category}] {report.fatal.describe()}")
    lines.append("")
    lines.append("=" * 60)

    return "\n".join(lines)
