#!/usr/bin/env python3
"""
language.py
-----------
Language code validation.

A language code is valid when it is two lower-case letters, declared in the
folder's rule set, and known to Babel's locale data. Checks run in that
order and stop at the first failure.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Optional

# --- Third party imports ---
from babel import Locale, UnknownLocaleError

# --- Local imports ---
from hugocheck.core.paths import RULESET_FILENAME
from hugocheck.dataclasses.ruleset import RuleSet
from hugocheck.validators.report import CheckIssue


def is_known_locale(code: str) -> bool:
    """Return True if Babel has locale data for the language code."""
    try:
        Locale.parse(code)
    except (UnknownLocaleError, ValueError):
        return False
    return True


def validate_language(code: Optional[str], ruleset: RuleSet) -> Optional[CheckIssue]:
    """
    Validate a language code against a rule set.

    Args:
        code: Language code to check
        ruleset: Rule set declaring the valid languages

    Returns:
        None if the code is valid, otherwise a fatal CheckIssue

    Examples:
        >>> validate_language("en", RuleSet(languages=["en"])) is None
        True
        >>> validate_language("EN", RuleSet(languages=["en"])).message
        "Language code: 'EN' is invalid. It should be lower case"
    """
    if code is None or not code.strip():
        return CheckIssue.error("language", "Language code is required")

    if len(code) != 2:
        return CheckIssue.error(
            "language",
            f"Language code: '{code}' is invalid. It should be 2 characters long",
        )

    if not all(c.isalpha() and c.islower() for c in code):
        return CheckIssue.error(
            "language",
            f"Language code: '{code}' is invalid. It should be lower case",
        )

    if code not in ruleset.languages:
        return CheckIssue.error(
            "language",
            f"Language code '{code}' is not defined in {RULESET_FILENAME} file, "
            f"expected {', '.join(ruleset.languages)}.",
            ruleset.source,
        )

    if not is_known_locale(code):
        return CheckIssue.error(
            "language",
            f"Language code: '{code}' is invalid. It should be a valid culture",
        )

    return None
