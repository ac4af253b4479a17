#!/usr/bin/env python3
"""
validators
----------
Validation engine for Hugo content folders.

Architecture:
    - report.py: CheckIssue / CheckReport result types
    - language.py: language code validation
    - resolution.py: file -> (language, root document) resolution
    - content.py: per-file rules and the per-folder duplicate table
    - checker.py: the engine walking folders, documents and variants
    - cli.py: `hugocheck` command

Usage:
    # Through CLI
    hugocheck check ./site

    # Direct import for programmatic use
    from hugocheck.validators.checker import Checker
"""

from hugocheck.validators.report import CheckIssue, CheckReport, format_check_report
from hugocheck.validators.checker import Checker

__all__ = [
    "CheckIssue",
    "CheckReport",
    "format_check_report",
    "Checker",
]
