#!/usr/bin/env python3
"""
content.py
----------
Per-file content rules.

Each rule takes the folder's rule set and one LanguageVariant and returns
None when the file passes or a fatal CheckIssue describing the first
problem. Rules that need cross-file state (duplicate headers) read and
update the FolderContext of the folder being checked.

Rules:
    - check_required_headers: configured keys are present and non-empty
    - check_required_lists: list values are drawn from the allowed values
    - check_slug: `slug` matches the folder's pattern
    - check_header_duplicates: tracked header values are unique per folder
    - check_body: body language (local) or spelling (remote)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Optional

# --- Local imports ---
from hugocheck.core.exceptions import CheckerError
from hugocheck.core.paths import RULESET_FILENAME
from hugocheck.dataclasses.content import Folder, LanguageVariant
from hugocheck.dataclasses.ruleset import HeaderKind, RuleSet
from hugocheck.nlp.detection import detect_language
from hugocheck.nlp.spellcheck import SpellChecker
from hugocheck.utils.md import extract_prose
from hugocheck.utils.yaml_access import contains, get_list, get_string
from hugocheck.validators.report import CheckIssue

SLUG_KEY = "slug"


# ═══════════════════════════════════════════════════════════════════════════
# FOLDER STATE
# ═══════════════════════════════════════════════════════════════════════════

class DuplicateTable:
    """
    First file seen for each (header key, header value) pair.

    Values are compared as strings exactly as returned by get_string.
    """

    def __init__(self) -> None:
        self._seen: Dict[str, Dict[str, Path]] = {}

    def first_file(self, key: str, value: str) -> Optional[Path]:
        return self._seen.get(key, {}).get(value)

    def record(self, key: str, value: str, file_path: Path) -> None:
        self._seen.setdefault(key, {})[value] = file_path

    def __len__(self) -> int:
        return sum(len(values) for values in self._seen.values())


@dataclass
class FolderContext:
    """
    State that exists only while one folder's content is validated.

    Attributes:
        folder: Folder being validated
        duplicates: Duplicate-tracking table for the folder
        spell_checker: Initialised spell checker, when the rule set uses one
    """

    folder: Folder
    duplicates: DuplicateTable = field(default_factory=DuplicateTable)
    spell_checker: Optional[SpellChecker] = None

    @property
    def ruleset(self) -> RuleSet:
        return self.folder.ruleset


# ═══════════════════════════════════════════════════════════════════════════
# RULES
# ═══════════════════════════════════════════════════════════════════════════

def check_required_headers(
    ruleset: RuleSet, variant: LanguageVariant
) -> Optional[CheckIssue]:
    """Every required header must hold a non-empty value of its kind."""
    for header in ruleset.required_headers:
        if header.kind == HeaderKind.LIST:
            if not get_list(variant.front_matter, header.name):
                return CheckIssue.error(
                    "header",
                    f"There are no required header key '{header.name}' (list) "
                    f"in the file {variant.path}",
                    variant.path,
                )
        elif not get_string(variant.front_matter, header.name):
            return CheckIssue.error(
                "header",
                f"There are no required header key '{header.name}' (value) "
                f"in the file {variant.path}",
                variant.path,
            )
    return None


def check_required_list_item(
    ruleset: RuleSet, variant: LanguageVariant, key: str, value: str
) -> Optional[CheckIssue]:
    """A single list item must be allowed for (key, variant language)."""
    if not ruleset.is_list_key(key):
        return CheckIssue.error(
            "list",
            f"There are no required list '{key}' in the file {variant.path}. "
            f"Check required-lists in the {RULESET_FILENAME}",
            variant.path,
        )

    scopes = ruleset.required_lists[key]
    if variant.language not in scopes:
        return CheckIssue.error(
            "list",
            f"There are no required list '{key}' in the file {variant.path} "
            f"for language {variant.language}",
            variant.path,
        )

    if value not in scopes[variant.language]:
        return CheckIssue.error(
            "list",
            f"There are no required '{value}' from the list '{key}' in the file "
            f"{variant.path} for language {variant.language}. "
            f"Check required-lists in the {RULESET_FILENAME}",
            variant.path,
        )
    return None


def check_required_lists(
    ruleset: RuleSet, variant: LanguageVariant
) -> Optional[CheckIssue]:
    """Every required list must be present and contain only allowed items."""
    for key in ruleset.required_lists:
        items = get_list(variant.front_matter, key)
        if not items:
            return CheckIssue.error(
                "list",
                f"There are no required list '{key}' in the file {variant.path}",
                variant.path,
            )
        for item in items:
            issue = check_required_list_item(ruleset, variant, key, item)
            if issue is not None:
                return issue
    return None


def check_slug(ruleset: RuleSet, variant: LanguageVariant) -> Optional[CheckIssue]:
    """A present `slug` must fully match the folder's pattern."""
    if not ruleset.check_slug or not contains(variant.front_matter, SLUG_KEY):
        return None

    slug = get_string(variant.front_matter, SLUG_KEY)
    if re.fullmatch(ruleset.slug_pattern, slug) is None:
        return CheckIssue.error(
            "slug",
            f"Slug '{slug}' in the file {variant.path} doesn't match "
            f"with the pattern '{ruleset.slug_pattern}'",
            variant.path,
        )
    return None


def check_header_duplicates(
    context: FolderContext, variant: LanguageVariant
) -> Optional[CheckIssue]:
    """
    Tracked header values must be unique within the folder.

    The first file to use a value owns it; a later file with the same
    value fails, and the message names both files.
    """
    for key in context.ruleset.duplicate_headers:
        if not contains(variant.front_matter, key):
            continue

        value = get_string(variant.front_matter, key)
        first = context.duplicates.first_file(key, value)
        if first is not None and first != variant.path:
            return CheckIssue.error(
                "duplicate",
                f"Detected duplicates {key}: '{value}' in two files "
                f"'{first}' and '{variant.path}'",
                variant.path,
            )
        context.duplicates.record(key, value, variant.path)
    return None


def check_body(
    context: FolderContext,
    variant: LanguageVariant,
    detector: Optional[Callable[[str], str]] = None,
) -> Optional[CheckIssue]:
    """
    Check the body language locally or spell-check it remotely.

    Without remote spell checking, and when the rule set asks for it, the
    body prose is run through local language detection; a body without prose
    (empty, or only code) is skipped. With remote spell checking the whole
    body is sent, with the expected language as a hint when file-language
    checking is on.
    """
    ruleset = context.ruleset

    if not ruleset.spell_check:
        if not ruleset.check_file_language:
            return None

        prose = extract_prose(variant.tokens)
        if not prose.strip():
            return None

        try:
            detected = (detector or detect_language)(prose)
        except CheckerError as e:
            return CheckIssue.error(
                "body",
                f"File '{variant.path}' failed language detection.",
                variant.path,
                cause=str(e),
            )

        if detected.lower() != variant.language.lower():
            return CheckIssue.error(
                "body",
                f"Language '{detected}' is not expected '{variant.language}' "
                f"in the file {variant.path}",
                variant.path,
            )
        return None

    if context.spell_checker is None or not context.spell_checker.is_initialised:
        return CheckIssue.error(
            "body",
            f"Spell checker is not initialised for the folder '{context.folder.path}'",
            variant.path,
        )

    language = variant.language if ruleset.check_file_language else None
    try:
        result = context.spell_checker.check(variant.body, language)
    except CheckerError as e:
        return CheckIssue.error(
            "body",
            f"File '{variant.path}' failed spellcheck.",
            variant.path,
            cause=str(e),
        )

    if not result.ok:
        return CheckIssue.error(
            "body",
            f"File '{variant.path}' failed spellcheck.",
            variant.path,
            cause=result.reason,
        )
    return None


def check_variant(
    context: FolderContext,
    variant: LanguageVariant,
    detector: Optional[Callable[[str], str]] = None,
) -> Optional[CheckIssue]:
    """Run every content rule on one variant, stopping at the first error."""
    ruleset = context.ruleset
    return (
        check_required_headers(ruleset, variant)
        or check_required_lists(ruleset, variant)
        or check_slug(ruleset, variant)
        or check_header_duplicates(context, variant)
        or check_body(context, variant, detector)
    )
