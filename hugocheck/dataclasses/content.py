#!/usr/bin/env python3
"""
content.py
-------------------
Dataclasses for the content tree of a governed folder.

    Folder            one directory containing a hugo-checker.yaml
    └── Document      one logical page, keyed by its root file path
        └── LanguageVariant   one physical file in one language

A Folder exclusively owns its Documents; a Document owns its variants. The
tree is built once per run and discarded afterwards.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

# --- Third party imports ---
from markdown_it.token import Token

# --- Local imports ---
from hugocheck.core.exceptions import DocumentParseError
from hugocheck.dataclasses.ruleset import RuleSet
from hugocheck.utils.md import split_frontmatter, parse_body
from hugocheck.utils.yaml_access import parse_yaml


@dataclass(frozen=True)
class LanguageVariant:
    """
    One file of a document, written in one language.

    Attributes:
        language: Two-letter language code
        path: Absolute file path
        header: Raw front-matter text
        front_matter: Parsed front-matter mapping
        body: Body text with surrounding whitespace trimmed
        tokens: markdown-it block tokens of the body
    """

    language: str
    path: Path
    header: str
    front_matter: Dict[str, Any]
    body: str
    tokens: List[Token] = field(default_factory=list, compare=False, repr=False)

    @classmethod
    def from_file(cls, path: Path, language: str) -> LanguageVariant:
        """
        Read and parse a Markdown page.

        Raises:
            OSError: If the file cannot be read
            DocumentParseError: If the file is not UTF-8 or the front
                matter is missing or invalid
        """
        try:
            text = Path(path).read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise DocumentParseError(f"File '{path}' is not valid UTF-8") from e
        header, body = split_frontmatter(text)
        return cls(
            language=language,
            path=Path(path),
            header=header,
            front_matter=parse_yaml(header),
            body=body,
            tokens=parse_body(body),
        )


@dataclass
class Document:
    """
    A logical page and all of its translations.

    Attributes:
        root_path: Path the page has (or would have) in the default language
        variants: language code -> LanguageVariant, in discovery order
    """

    root_path: Path
    variants: Dict[str, LanguageVariant] = field(default_factory=dict)

    @property
    def languages(self) -> List[str]:
        return list(self.variants)

    def missing_languages(self, languages: List[str]) -> List[str]:
        """Return declared languages with no variant, in declaration order."""
        return [language for language in languages if language not in self.variants]


@dataclass
class Folder:
    """
    A directory governed by a rule set.

    Attributes:
        path: Absolute directory path
        ruleset: Rules for the directory
        documents: root path -> Document, in discovery order
        ignored: Files skipped by an ignore rule
    """

    path: Path
    ruleset: RuleSet
    documents: Dict[Path, Document] = field(default_factory=dict)
    ignored: List[Path] = field(default_factory=list)

    def add_variant(self, root_path: Path, variant: LanguageVariant) -> bool:
        """
        Attach a variant to the document identified by root_path.

        A second variant for the same (root, language) replaces the first.

        Returns:
            True if an existing variant was replaced
        """
        document = self.documents.setdefault(root_path, Document(root_path))
        replaced = variant.language in document.variants
        document.variants[variant.language] = variant
        return replaced

    @property
    def variant_count(self) -> int:
        return sum(len(d.variants) for d in self.documents.values())
