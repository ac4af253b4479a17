#!/usr/bin/env python3
"""
checker.py
----------
Validation engine for a Hugo content tree.

Walks every folder that contains a `hugo-checker.yaml`, groups its Markdown
files into documents and language variants, checks the folder's language
structure, then applies the content rules to each variant.

Run order:
    1. Read the site `config.yaml`
    2. Discover rule-set files (sorted by path) and build each Folder
    3. validate_folder() for every folder
    4. validate_folder_content() for every folder, documents and languages
       in discovery order

The run is fail-fast: the first error ends it and is returned as the
report's fatal issue. Warnings are collected and logged but never stop the
run.

Usage:
    from hugocheck.validators.checker import Checker

    report = Checker(Path("site")).run()
    if not report.passed:
        print(report.fatal.describe())
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Callable, List, Optional, Union

# --- Third party imports ---
import yaml

# --- Local imports ---
from hugocheck.core.exceptions import (
    CheckerError,
    ConfigError,
    DocumentParseError,
    SpellCheckError,
)
from hugocheck.core.logging_manager import CheckerLogger, safe_logger
from hugocheck.core.paths import RULESET_FILENAME, SITE_CONFIG_FILENAME
from hugocheck.dataclasses.content import Folder
from hugocheck.dataclasses.ruleset import SiteConfig, load_ruleset, load_site_config
from hugocheck.nlp.spellcheck import SpellChecker
from hugocheck.validators.content import FolderContext, check_variant
from hugocheck.validators.language import validate_language
from hugocheck.validators.report import CheckIssue, CheckReport
from hugocheck.validators.resolution import FileResolver


def checker_version() -> str:
    """Installed hugocheck version, or 'unknown' when running from source."""
    try:
        return version("hugocheck")
    except PackageNotFoundError:
        return "unknown"


def discover_rulesets(hugo_folder: Path) -> List[Path]:
    """Find every rule-set file below hugo_folder, sorted by path."""
    return sorted(Path(hugo_folder).rglob(RULESET_FILENAME))


class Checker:
    """
    Validates a Hugo site against its per-folder rule sets.

    Attributes:
        hugo_folder: Root folder of the site
        api_key: OpenAI API key for folders that enable spell checking
        logger: Reporting sink
        spell_checker: Remote spell checker, created on first use
        detector: Local language detector (defaults to langdetect)
    """

    def __init__(
        self,
        hugo_folder: Path,
        api_key: Optional[str] = None,
        logger: Optional[CheckerLogger] = None,
        spell_checker: Optional[SpellChecker] = None,
        detector: Optional[Callable[[str], str]] = None,
    ):
        self.hugo_folder = Path(hugo_folder)
        self.api_key = api_key
        self.logger = safe_logger(logger)
        self.spell_checker = spell_checker
        self.detector = detector
        self.report = CheckReport()

    # ----- Entry point -----

    def run(self) -> CheckReport:
        """
        Run every check and return the outcome.

        Errors raised by collaborators (missing files, unreadable YAML,
        spell check failures) are converted into the fatal issue.
        """
        self.report = CheckReport()
        self.logger.log_info(f"hugocheck version: {checker_version()}")

        try:
            fatal = self._run()
        except (CheckerError, OSError, yaml.YAMLError) as e:
            self.logger.log_error(e, {"hugo_folder": str(self.hugo_folder)})
            fatal = self._issue_from_error(e)

        self.report.fatal = fatal
        if fatal is None:
            self.logger.log_info("Well done!")
            self.logger.log_operation("check_complete", self.report.stats.to_dict())
        else:
            self.logger.log_issue(fatal)
        return self.report

    def _run(self) -> Optional[CheckIssue]:
        if not self.hugo_folder.is_dir():
            return CheckIssue.error(
                "io",
                f"Folder input:hugo-folder: '{self.hugo_folder}' doesn't exist",
                self.hugo_folder,
            )
        self.hugo_folder = self.hugo_folder.absolute()
        self.logger.log_info(f"Hugo folder exists: {self.hugo_folder}")

        site = self.read_site_config()

        folders = self.load_folders()
        if isinstance(folders, CheckIssue):
            return folders

        for folder in folders:
            issue = self.validate_folder(folder, site)
            if issue is not None:
                return issue

        for folder in folders:
            issue = self.validate_folder_content(folder)
            if issue is not None:
                return issue

        return None

    # ----- Loading -----

    def read_site_config(self) -> SiteConfig:
        """Read the site `config.yaml`; raises ConfigError if absent."""
        path = self.hugo_folder / SITE_CONFIG_FILENAME
        self.logger.log_info(f"Hugo configuration file '{path}' is loading...")
        site = load_site_config(path)
        self.logger.log_info(
            f"Website title: {site.title}, language code: {site.language_code}"
        )
        return site

    def load_folders(self) -> Union[List[Folder], CheckIssue]:
        """
        Discover rule-set files and build a Folder for each.

        Returns:
            Folders in discovery order, or a fatal issue
        """
        ruleset_files = discover_rulesets(self.hugo_folder)
        if not ruleset_files:
            return CheckIssue.error(
                "config",
                f"'{RULESET_FILENAME}' file doesn't exist in any subdirectory "
                f"of {self.hugo_folder}",
                self.hugo_folder,
            )

        folders = []
        for ruleset_file in ruleset_files:
            self.logger.log_info(
                f"Hugo checker configuration file '{ruleset_file}' is loading..."
            )
            ruleset = load_ruleset(ruleset_file)

            resolver = FileResolver(ruleset, self.logger)
            folder = resolver.build_folder(ruleset_file.parent)
            if isinstance(folder, CheckIssue):
                return folder

            for ignored in folder.ignored:
                self._warn(CheckIssue.warning("ignored", "Ignore file", ignored))
            self.report.stats.files_ignored += len(folder.ignored)
            folders.append(folder)

        return folders

    # ----- Folder structure -----

    def validate_folder(
        self, folder: Folder, site: Optional[SiteConfig] = None
    ) -> Optional[CheckIssue]:
        """
        Check the folder's language configuration and file completeness.

        Args:
            folder: Folder to check
            site: Site configuration; its language code is validated too
                when language structure is enforced

        Returns:
            None, or the first fatal issue
        """
        self.logger.log_info(f"Folder {folder.path}")
        if not folder.documents:
            self._warn(
                CheckIssue.warning(
                    "structure",
                    f"Folder {folder.path} doesn't have any markdown files",
                    folder.path,
                )
            )

        ruleset = folder.ruleset
        if ruleset.check_language_structure:
            issue = self.validate_language_structure(folder, site)
            if issue is not None:
                return issue

        for document in folder.documents.values():
            self.logger.log_info(
                f"File '{document.root_path}' found languages "
                f"{', '.join(document.languages)}"
            )
            if not ruleset.check_language_structure:
                continue

            missing = document.missing_languages(ruleset.languages)
            if missing:
                return CheckIssue.error(
                    "structure",
                    f"File '{document.root_path}' doesn't have language "
                    f"'*.{missing[0]}.md'",
                    document.root_path,
                )

        return None

    def validate_language_structure(
        self, folder: Folder, site: Optional[SiteConfig] = None
    ) -> Optional[CheckIssue]:
        """Validate declared languages and required-list language scopes."""
        ruleset = folder.ruleset
        if not ruleset.languages:
            return CheckIssue.error(
                "config",
                f"Languages are not defined in the {RULESET_FILENAME} file",
                ruleset.source,
            )

        if site is not None:
            self.logger.log_info(
                f"languageCode in the {SITE_CONFIG_FILENAME}: {site.language_code}"
            )
            issue = validate_language(site.language_code, ruleset)
            if issue is not None:
                return issue

        self.logger.log_info(
            f"Default language used for primary files *.md: '{ruleset.default_language}'"
        )
        issue = validate_language(ruleset.default_language, ruleset)
        if issue is not None:
            return issue

        self.logger.log_info(f"All used languages: {','.join(ruleset.languages)}")
        for language in ruleset.languages:
            issue = validate_language(language, ruleset)
            if issue is not None:
                return issue

        for key, scopes in ruleset.required_lists.items():
            for language in ruleset.languages:
                if language not in scopes:
                    return self._undefined_scope(folder, key, language)
            for language in scopes:
                if language not in ruleset.languages:
                    return self._undefined_scope(folder, key, language)

        self.logger.log_info("All languages are valid")
        return None

    @staticmethod
    def _undefined_scope(folder: Folder, key: str, language: str) -> CheckIssue:
        return CheckIssue.error(
            "config",
            f"Undefined language in the key required.{key}: {language}. "
            f"Check languages key.",
            folder.ruleset.source,
        )

    # ----- Folder content -----

    def validate_folder_content(self, folder: Folder) -> Optional[CheckIssue]:
        """
        Apply the content rules to every variant of every document.

        A fresh FolderContext (and duplicate table) is used for the folder
        and discarded when it has been checked.
        """
        self.logger.log_info(f"Checking all files content in the folder '{folder.path}'")
        self.report.stats.folders_checked += 1

        context = FolderContext(folder)
        if folder.ruleset.spell_check:
            try:
                context.spell_checker = self._initialise_spell_checker(folder)
            except SpellCheckError as e:
                return CheckIssue.error(
                    "body",
                    f"Cannot initialise spell checking for the folder '{folder.path}'",
                    folder.path,
                    cause=str(e),
                )

        for document in folder.documents.values():
            self.report.stats.documents_checked += 1
            for variant in document.variants.values():
                self.logger.log_info(
                    f"Checking file '{variant.path}' language '{variant.language}'"
                )
                self.report.stats.files_processed += 1
                issue = check_variant(context, variant, self.detector)
                if issue is not None:
                    return issue

        return None

    def _initialise_spell_checker(self, folder: Folder) -> SpellChecker:
        if self.spell_checker is None:
            self.spell_checker = SpellChecker()

        options = folder.ruleset.spell_check_options
        self.spell_checker.initialise(
            self.api_key,
            options.prompt,
            options.model,
            options.temperature,
            options.max_tokens,
        )
        self.logger.log_info("Connected with OpenAI ChatGPT API")
        return self.spell_checker

    # ----- Helpers -----

    def _warn(self, issue: CheckIssue) -> None:
        self.logger.log_issue(issue)
        self.report.add_warning(issue)

    @staticmethod
    def _issue_from_error(error: Exception) -> CheckIssue:
        if isinstance(error, ConfigError):
            category = "config"
        elif isinstance(error, DocumentParseError):
            category = "parse"
        elif isinstance(error, CheckerError):
            category = "check"
        else:
            category = "io"

        file_path = getattr(error, "filename", None)
        cause = error.__cause__
        return CheckIssue.error(
            category,
            f"{type(error).__name__}: {error}",
            Path(file_path) if file_path else None,
            cause=str(cause) if cause else None,
        )
