#!/usr/bin/env python3
"""
resolution.py
-------------
File resolution: which physical files form one logical document.

A page `about.md` in the default language and its translations
`about.fr.md`, `about.de.md` all share the root path `about.md`. The root
path is used as the document key even when the default-language file does
not exist on disk.

Usage:
    resolver = FileResolver(ruleset)
    resolver.language(Path("about.fr.md"))    # 'fr'
    resolver.root_path(Path("about.fr.md"))   # Path('about.md')
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from typing import Optional, Tuple, Union

# --- Local imports ---
from hugocheck.core.exceptions import DocumentParseError
from hugocheck.core.logging_manager import CheckerLogger, safe_logger
from hugocheck.core.paths import MARKDOWN_EXTENSION, MARKDOWN_PATTERN
from hugocheck.dataclasses.content import Folder, LanguageVariant
from hugocheck.dataclasses.ruleset import RuleSet
from hugocheck.validators.language import validate_language
from hugocheck.validators.report import CheckIssue


def _stem(file_path: Path) -> str:
    name = file_path.name
    if name.endswith(MARKDOWN_EXTENSION):
        return name[: -len(MARKDOWN_EXTENSION)]
    return file_path.stem


class FileResolver:
    """Maps file paths to their language and root document path."""

    def __init__(self, ruleset: RuleSet, logger: Optional[CheckerLogger] = None):
        self.ruleset = ruleset
        self.logger = safe_logger(logger)

    def language(self, file_path: Path) -> str:
        """
        Language encoded in a file name.

        The last `.`-separated segment of the name (without `.md`) is the
        language; a name with a single segment is in the default language.
        The result is not validated; see resolve().
        """
        segments = _stem(Path(file_path)).split(".")
        if len(segments) == 1:
            return self.ruleset.default_language
        return segments[-1]

    def root_path(self, file_path: Path) -> Path:
        """
        Root document path of a file.

        Default-language files are their own root. For other languages one
        trailing segment is removed from the name and `.md` appended.
        For names of the form `<base>.md` / `<base>.<lang>.md`, resolving a
        root path again returns it unchanged.
        """
        file_path = Path(file_path).absolute()
        if self.language(file_path) == self.ruleset.default_language:
            return file_path

        stem = _stem(file_path)
        base = stem.rsplit(".", 1)[0]
        return file_path.with_name(base + MARKDOWN_EXTENSION)

    def resolve(self, file_path: Path) -> Union[Tuple[str, Path], CheckIssue]:
        """
        Resolve language and root path, validating the language.

        Returns:
            (language, root_path), or a fatal CheckIssue naming the file
        """
        language = self.language(file_path)
        issue = validate_language(language, self.ruleset)
        if issue is not None:
            return CheckIssue.error(
                "language",
                f"File '{file_path}' has an invalid language, "
                f"expected {', '.join(self.ruleset.languages)}",
                Path(file_path),
                cause=issue.message,
            )
        return language, self.root_path(file_path)

    def is_ignored(self, file_path: Path) -> bool:
        return Path(file_path).name in self.ruleset.ignore_files

    def build_folder(self, folder_path: Path) -> Union[Folder, CheckIssue]:
        """
        Scan one directory level for Markdown files and group them.

        Files are visited in name order. Ignored files are recorded on the
        folder; files that cannot be read or parsed propagate their error.

        Args:
            folder_path: Directory governed by this resolver's rule set

        Returns:
            Populated Folder, or the first fatal CheckIssue

        Raises:
            OSError: If a file cannot be read
            DocumentParseError: If a page has invalid front matter
        """
        folder_path = Path(folder_path).absolute()
        if not folder_path.is_dir():
            return CheckIssue.error(
                "io", f"Folder {folder_path} doesn't exist", folder_path
            )

        self.logger.log_info(
            f"Loading markdown file names from the folder '{folder_path}'"
        )
        folder = Folder(path=folder_path, ruleset=self.ruleset)

        for file_path in sorted(folder_path.glob(MARKDOWN_PATTERN)):
            if not file_path.is_file():
                continue

            if self.is_ignored(file_path):
                self.logger.log_info(f"Ignore file '{file_path}'")
                folder.ignored.append(file_path)
                continue

            resolved = self.resolve(file_path)
            if isinstance(resolved, CheckIssue):
                return resolved
            language, root = resolved

            self.logger.log_info(f"Reading markdown file '{file_path}'")
            try:
                variant = LanguageVariant.from_file(file_path, language)
            except DocumentParseError as e:
                raise DocumentParseError(
                    f"File '{file_path}' cannot be parsed: {e}"
                ) from e

            if folder.add_variant(root, variant):
                self.logger.log_warning(
                    f"File '{file_path}' replaces an earlier '{language}' file "
                    f"for document '{root}'"
                )

        self.logger.log_info(
            f"Markdown files count in the folder {folder_path}: {folder.variant_count}"
        )
        return folder
