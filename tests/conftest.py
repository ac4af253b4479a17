"""
conftest.py
-----------
Shared pytest fixtures for hugocheck tests.

Provides fixtures for:
- Building throw-away Hugo sites (config.yaml, hugo-checker.yaml, pages)
- Rule sets for unit tests
- Writing single Markdown pages
"""
import pytest
import yaml
from pathlib import Path
from typing import Any, Dict, Optional

from hugocheck.dataclasses.content import LanguageVariant
from hugocheck.dataclasses.ruleset import RuleSet


def write_page(
    folder: Path,
    name: str,
    front_matter: Optional[Dict[str, Any]] = None,
    body: str = "Some content.",
) -> Path:
    """Write a Markdown page with YAML front matter and return its path."""
    folder.mkdir(parents=True, exist_ok=True)
    header = yaml.safe_dump(front_matter or {}, allow_unicode=True, sort_keys=False)
    path = folder / name
    path.write_text(f"---\n{header}---\n\n{body}\n", encoding="utf-8")
    return path


def make_variant(
    tmp_path: Path,
    name: str,
    language: str,
    front_matter: Optional[Dict[str, Any]] = None,
    body: str = "Some content.",
) -> LanguageVariant:
    """Write a page and load it as a LanguageVariant."""
    return LanguageVariant.from_file(
        write_page(tmp_path, name, front_matter, body), language
    )


# ----- Rule Set Fixtures -----

@pytest.fixture
def basic_ruleset_data():
    """Rule-set mapping for an English/French folder."""
    return {
        "default-language": "en",
        "languages": ["en", "fr"],
        "required-headers": ["title"],
        "check-language-structure": True,
    }


@pytest.fixture
def ruleset(basic_ruleset_data):
    """RuleSet built from basic_ruleset_data."""
    return RuleSet.from_dict(basic_ruleset_data)


# ----- Site Fixtures -----

@pytest.fixture
def make_site(tmp_path):
    """
    Factory creating a Hugo site under tmp_path.

    Usage:
        site = make_site(
            ruleset={"default-language": "en", "languages": ["en"]},
            pages={"a.md": {"title": "Hello"}},
        )
    """

    def _make_site(
        ruleset: Optional[Dict[str, Any]] = None,
        pages: Optional[Dict[str, Any]] = None,
        folder: str = "content",
        language_code: str = "en",
        title: str = "Test Site",
    ) -> Path:
        site = tmp_path / "site"
        site.mkdir(exist_ok=True)
        (site / "config.yaml").write_text(
            yaml.safe_dump({"languageCode": language_code, "title": title}),
            encoding="utf-8",
        )

        content = site / folder
        content.mkdir(parents=True, exist_ok=True)
        if ruleset is not None:
            (content / "hugo-checker.yaml").write_text(
                yaml.safe_dump(ruleset), encoding="utf-8"
            )

        for name, page in (pages or {}).items():
            if isinstance(page, tuple):
                front_matter, body = page
            else:
                front_matter, body = page, "Some content."
            write_page(content, name, front_matter, body)

        return site

    return _make_site
