"""
test_checker.py
---------------
Tests for the validation engine (hugocheck.validators.checker).

Sites are built on disk with the make_site fixture and checked end to end.
"""
import pytest
import yaml
from unittest.mock import MagicMock

from conftest import write_page
from hugocheck.nlp.spellcheck import SpellCheckResult
from hugocheck.validators.checker import Checker, discover_rulesets


def write_ruleset(folder, data):
    folder.mkdir(parents=True, exist_ok=True)
    (folder / "hugo-checker.yaml").write_text(yaml.safe_dump(data), encoding="utf-8")


class TestValidSite:
    """Sites that pass every check."""

    def test_translated_page_passes(self, make_site, basic_ruleset_data):
        site = make_site(
            ruleset=basic_ruleset_data,
            pages={"a.md": {"title": "Hello"}, "a.fr.md": {"title": "Bonjour"}},
        )

        report = Checker(site).run()

        assert report.passed
        assert report.fatal is None
        assert report.stats.folders_checked == 1
        assert report.stats.documents_checked == 1
        assert report.stats.files_processed == 2

    def test_structure_not_enforced_allows_missing_translation(self, make_site):
        site = make_site(
            ruleset={"default-language": "en", "languages": ["en", "fr"]},
            pages={"a.md": {"title": "Hello"}},
        )
        assert Checker(site).run().passed

    def test_empty_folder_is_a_warning(self, make_site, basic_ruleset_data):
        site = make_site(ruleset=basic_ruleset_data)

        report = Checker(site).run()

        assert report.passed
        assert len(report.warnings) == 1
        assert "doesn't have any markdown files" in report.warnings[0].message

    def test_ignored_files_are_reported_as_warnings(self, make_site):
        site = make_site(
            ruleset={
                "default-language": "en",
                "languages": ["en"],
                "required-headers": ["title"],
                "ignore-files": ["_index.md"],
            },
            pages={"_index.md": {}, "a.md": {"title": "Hello"}},
        )

        report = Checker(site).run()

        assert report.passed
        assert report.stats.files_ignored == 1
        assert report.stats.files_processed == 1
        assert [w.category for w in report.warnings] == ["ignored"]

    def test_duplicates_are_tracked_per_folder(self, make_site):
        ruleset = {
            "default-language": "en",
            "languages": ["en"],
            "check-header-duplicates": ["id"],
        }
        site = make_site(ruleset=ruleset, pages={"a.md": {"id": 1}})
        other = site / "content" / "other"
        write_ruleset(other, ruleset)
        write_page(other, "b.md", {"id": 1})

        report = Checker(site).run()

        assert report.passed
        assert report.stats.folders_checked == 2


class TestContentFailures:
    """Content rule failures end the run."""

    def test_translation_missing_title(self, make_site, basic_ruleset_data):
        site = make_site(
            ruleset=basic_ruleset_data,
            pages={"a.md": {"title": "Hello"}, "a.fr.md": {"description": "Bonjour"}},
        )

        report = Checker(site).run()

        assert not report.passed
        assert report.fatal.category == "header"
        assert "'title'" in report.fatal.message
        assert report.fatal.file_path.name == "a.fr.md"

    def test_duplicate_in_folder(self, make_site):
        site = make_site(
            ruleset={
                "default-language": "en",
                "languages": ["en"],
                "check-header-duplicates": ["id"],
            },
            pages={"x.md": {"id": 42}, "y.md": {"id": 42}},
        )

        report = Checker(site).run()

        assert report.fatal.category == "duplicate"
        assert "x.md" in report.fatal.message
        assert "y.md" in report.fatal.message

    def test_bad_slug(self, make_site):
        site = make_site(
            ruleset={
                "default-language": "en",
                "languages": ["en"],
                "pattern-slug-regex": "^[a-z0-9-]+$",
            },
            pages={"a.md": {"slug": "Bad_Slug!"}},
        )

        report = Checker(site).run()

        assert report.fatal.category == "slug"
        assert "Bad_Slug!" in report.fatal.message

    def test_page_without_front_matter(self, make_site, basic_ruleset_data):
        site = make_site(ruleset=basic_ruleset_data)
        (site / "content" / "broken.md").write_text("Just text", encoding="utf-8")

        report = Checker(site).run()

        assert report.fatal.category == "parse"
        assert "broken.md" in report.fatal.message
        assert "Starting '---' not found" in report.fatal.cause

    def test_invalid_file_language(self, make_site, basic_ruleset_data):
        site = make_site(
            ruleset=basic_ruleset_data,
            pages={"a.md": {"title": "Hello"}, "a.de.md": {"title": "Hallo"}},
        )

        report = Checker(site).run()

        assert report.fatal.category == "language"
        assert "a.de.md" in report.fatal.message


class TestStructureFailures:
    """Language structure failures."""

    def test_missing_translation(self, make_site, basic_ruleset_data):
        site = make_site(ruleset=basic_ruleset_data, pages={"a.md": {"title": "Hello"}})

        report = Checker(site).run()

        assert report.fatal.category == "structure"
        assert "'*.fr.md'" in report.fatal.message

    def test_missing_default_language_file(self, make_site, basic_ruleset_data):
        site = make_site(
            ruleset=basic_ruleset_data, pages={"a.fr.md": {"title": "Bonjour"}}
        )

        report = Checker(site).run()

        assert "'*.en.md'" in report.fatal.message
        assert report.fatal.file_path.name == "a.md"

    def test_site_language_must_be_declared(self, make_site, basic_ruleset_data):
        site = make_site(ruleset=basic_ruleset_data, language_code="de")

        report = Checker(site).run()

        assert report.fatal.category == "language"
        assert "'de'" in report.fatal.message

    def test_languages_must_be_declared(self, make_site):
        site = make_site(
            ruleset={"default-language": "en", "check-language-structure": True}
        )

        report = Checker(site).run()

        assert "Languages are not defined" in report.fatal.message

    def test_required_list_scope_must_cover_languages(self, make_site):
        site = make_site(
            ruleset={
                "default-language": "en",
                "languages": ["en", "fr"],
                "check-language-structure": True,
                "required-lists": {"categories": {"en": ["news"]}},
            }
        )

        report = Checker(site).run()

        assert (
            "Undefined language in the key required.categories: fr"
            in report.fatal.message
        )

    def test_required_list_scope_must_not_add_languages(self, make_site):
        site = make_site(
            ruleset={
                "default-language": "en",
                "languages": ["en"],
                "check-language-structure": True,
                "required-lists": {"categories": {"en": ["news"], "de": ["nachrichten"]}},
            }
        )

        report = Checker(site).run()

        assert "required.categories: de" in report.fatal.message

    def test_structure_checked_before_content(self, make_site, basic_ruleset_data):
        """A structure error in a later folder wins over a content error in an earlier one."""
        site = make_site(
            ruleset=basic_ruleset_data,
            folder="content/a",
            pages={"p.md": {}, "p.fr.md": {}},
        )
        later = site / "content" / "b"
        write_ruleset(later, basic_ruleset_data)
        write_page(later, "q.md", {"title": "Hello"})

        report = Checker(site).run()

        assert report.fatal.category == "structure"
        assert "q.md" in report.fatal.message


class TestSiteFailures:
    """Problems with the site itself."""

    def test_missing_hugo_folder(self, tmp_path):
        report = Checker(tmp_path / "nope").run()

        assert not report.passed
        assert "doesn't exist" in report.fatal.message

    def test_missing_site_config(self, make_site, basic_ruleset_data):
        site = make_site(ruleset=basic_ruleset_data)
        (site / "config.yaml").unlink()

        report = Checker(site).run()

        assert report.fatal.category == "config"
        assert "config.yaml" in report.fatal.message

    def test_no_rulesets(self, make_site):
        site = make_site(pages={"a.md": {"title": "Hello"}})

        report = Checker(site).run()

        assert "'hugo-checker.yaml' file doesn't exist" in report.fatal.message

    def test_malformed_ruleset(self, make_site):
        site = make_site(ruleset={"languages": "en"})

        report = Checker(site).run()

        assert report.fatal.category == "config"
        assert "'languages' must be a list" in report.fatal.message

    def test_run_can_be_repeated(self, make_site, basic_ruleset_data):
        site = make_site(
            ruleset=basic_ruleset_data,
            pages={"a.md": {"title": "Hello"}, "a.fr.md": {"title": "Bonjour"}},
        )
        checker = Checker(site)

        checker.run()
        report = checker.run()

        assert report.passed
        assert report.stats.files_processed == 2


class TestBodyChecks:
    """Language detection and spell checking through the engine."""

    def test_injected_detector_is_used(self, make_site):
        site = make_site(
            ruleset={
                "default-language": "en",
                "languages": ["en", "fr"],
                "check-file-language": True,
            },
            pages={"a.fr.md": ({}, "This page was never translated.")},
        )
        detector = MagicMock(return_value="en")

        report = Checker(site, detector=detector).run()

        assert report.fatal.category == "body"
        assert "Language 'en' is not expected 'fr'" in report.fatal.message

    def test_spell_checker_is_initialised_with_folder_options(self, make_site):
        site = make_site(
            ruleset={
                "default-language": "en",
                "languages": ["en"],
                "chatgpt-spell-check": True,
                "chatgpt-model": "gpt-4o",
                "chatgpt-temperature": 0.2,
            },
            pages={"a.md": ({}, "Fine text.")},
        )
        spell_checker = MagicMock()
        spell_checker.check.return_value = SpellCheckResult(ok=True)

        report = Checker(site, api_key="sk-test", spell_checker=spell_checker).run()

        assert report.passed
        args = spell_checker.initialise.call_args[0]
        assert args[0] == "sk-test"
        assert args[2] == "gpt-4o"
        assert args[3] == pytest.approx(0.2)
        spell_checker.check.assert_called_once_with("Fine text.", None)

    def test_spell_check_without_api_key(self, make_site):
        site = make_site(
            ruleset={
                "default-language": "en",
                "languages": ["en"],
                "chatgpt-spell-check": True,
            },
            pages={"a.md": ({}, "Text.")},
        )

        report = Checker(site).run()

        assert "Cannot initialise spell checking" in report.fatal.message
        assert "Undefined chatgpt-api-key" in report.fatal.cause


class TestDiscoverRulesets:
    """Test discover_rulesets."""

    def test_sorted_recursive(self, tmp_path):
        for name in ("b", "a", "a/nested"):
            write_ruleset(tmp_path / name, {})

        found = discover_rulesets(tmp_path)

        assert [p.parent.relative_to(tmp_path).as_posix() for p in found] == [
            "a",
            "a/nested",
            "b",
        ]


class TestYamlParsing:
    """Rule sets and pages written by hand, not through yaml.safe_dump."""

    def test_unquoted_norwegian_code(self, make_site):
        site = make_site(
            pages={"a.md": {"title": "Hello"}, "a.no.md": {"title": "Hei"}}
        )
        (site / "content" / "hugo-checker.yaml").write_text(
            "default-language: en\n"
            "languages: [en, no]\n"
            "required-headers: [title]\n"
            "check-language-structure: true\n",
            encoding="utf-8",
        )

        report = Checker(site).run()

        assert report.passed, report.fatal
        assert report.stats.files_processed == 2

    def test_non_utf8_page_is_reported(self, make_site, basic_ruleset_data):
        site = make_site(ruleset=basic_ruleset_data)
        (site / "content" / "latin1.md").write_bytes(
            "---\ntitle: Caf\xe9\n---\n".encode("latin-1")
        )

        report = Checker(site).run()

        assert not report.passed
        assert report.fatal.category == "parse"
        assert "latin1.md" in report.fatal.message
        assert "not valid UTF-8" in report.fatal.cause
