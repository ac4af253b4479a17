#!/usr/bin/env python3
"""
ruleset.py
-------------------
Dataclasses for checker configuration.

A RuleSet governs one folder of a Hugo site and is read from the
`hugo-checker.yaml` file placed in that folder. The SiteConfig is read once
from the site's `config.yaml`.

Rule-set file format (all keys optional unless a check needs them):

    default-language: en
    languages: [en, fr]
    required-headers:
      - title
      - name: categories
        kind: list
    required-lists:
      categories:
        en: [news, blog]
        fr: [actualites, blog]
    check-slug-regex: true
    pattern-slug-regex: "^[a-z0-9-]+$"
    check-header-duplicates: [slug, id]
    ignore-files: [_index.md]
    check-language-structure: true
    check-file-language: false
    chatgpt-spell-check: false
    chatgpt-prompt: "..."
    chatgpt-model: gpt-4o-mini
    chatgpt-temperature: 0.0
    chatgpt-max-tokens: 1024

Loading only checks the shape of the file (types of values). Cross-language
consistency is checked by the engine when the folder is validated.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

# --- Third party imports ---
import yaml

# --- Local imports ---
from hugocheck.core.exceptions import ConfigError
from hugocheck.utils.yaml_access import get_string, load_yaml


DEFAULT_SPELLCHECK_PROMPT = (
    "You are a proofreader for a website. Check the Markdown text sent by the "
    "user for spelling and grammar mistakes. {language_hint}"
    "Reply with a JSON object: {\"ok\": true} when the text has no mistakes, "
    "otherwise {\"ok\": false, \"issues\": [\"short description\", ...]}."
)
DEFAULT_SPELLCHECK_MODEL = "gpt-4o-mini"
DEFAULT_SPELLCHECK_TEMPERATURE = 0.0
DEFAULT_SPELLCHECK_MAX_TOKENS = 1024


class HeaderKind(str, Enum):
    """Shape a required header value must have."""

    SCALAR = "scalar"
    LIST = "list"


@dataclass(frozen=True)
class HeaderKey:
    """A required front-matter key and the shape of its value."""

    name: str
    kind: HeaderKind = HeaderKind.SCALAR


@dataclass(frozen=True)
class SpellCheckOptions:
    """Parameters passed to the remote spell checker."""

    prompt: str = DEFAULT_SPELLCHECK_PROMPT
    model: str = DEFAULT_SPELLCHECK_MODEL
    temperature: float = DEFAULT_SPELLCHECK_TEMPERATURE
    max_tokens: int = DEFAULT_SPELLCHECK_MAX_TOKENS


@dataclass
class RuleSet:
    """
    Checks enabled for one folder and their parameters.

    Attributes:
        default_language: Language of files without a language suffix
        languages: Ordered, unique list of valid language codes
        required_headers: Keys every page must define
        required_lists: list key -> language -> allowed values
        slug_pattern: Regular expression a `slug` value must fully match
        check_slug: Whether the slug check runs
        duplicate_headers: Keys whose values must be unique in the folder
        ignore_files: File names skipped during discovery
        check_language_structure: Require a file per declared language
        check_file_language: Verify the body is written in the file's language
        spell_check: Send bodies to the remote spell checker
        spell_check_options: Remote spell checker parameters
        source: Rule-set file this was loaded from
    """

    default_language: str = ""
    languages: List[str] = field(default_factory=list)
    required_headers: List[HeaderKey] = field(default_factory=list)
    required_lists: Dict[str, Dict[str, Set[str]]] = field(default_factory=dict)
    slug_pattern: Optional[str] = None
    check_slug: bool = False
    duplicate_headers: List[str] = field(default_factory=list)
    ignore_files: Set[str] = field(default_factory=set)
    check_language_structure: bool = False
    check_file_language: bool = False
    spell_check: bool = False
    spell_check_options: SpellCheckOptions = field(default_factory=SpellCheckOptions)
    source: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: Optional[Path] = None) -> RuleSet:
        """
        Build a RuleSet from a parsed rule-set mapping.

        Args:
            data: Parsed YAML mapping with kebab-case keys
            source: File the mapping was read from (for messages)

        Returns:
            RuleSet instance

        Raises:
            ConfigError: If a value has the wrong type
        """
        where = f" in '{source}'" if source else ""

        languages = _string_list(data, "languages", where)
        if len(set(languages)) != len(languages):
            raise ConfigError(f"Key 'languages' contains duplicates{where}")

        required_lists = _required_lists(data.get("required-lists"), where)

        slug_pattern = data.get("pattern-slug-regex")
        if slug_pattern is not None and not isinstance(slug_pattern, str):
            raise ConfigError(f"Key 'pattern-slug-regex' must be a string{where}")
        if slug_pattern:
            try:
                re.compile(slug_pattern)
            except re.error as e:
                raise ConfigError(
                    f"Key 'pattern-slug-regex' is not a valid regular expression: {e}{where}"
                ) from e
        check_slug = _flag(data, "check-slug-regex", where, default=bool(slug_pattern))
        if check_slug and not slug_pattern:
            raise ConfigError(
                f"Key 'check-slug-regex' is enabled but 'pattern-slug-regex' is empty{where}"
            )

        options = SpellCheckOptions(
            prompt=str(data.get("chatgpt-prompt") or DEFAULT_SPELLCHECK_PROMPT),
            model=str(data.get("chatgpt-model") or DEFAULT_SPELLCHECK_MODEL),
            temperature=_number(
                data, "chatgpt-temperature", where, DEFAULT_SPELLCHECK_TEMPERATURE
            ),
            max_tokens=int(
                _number(data, "chatgpt-max-tokens", where, DEFAULT_SPELLCHECK_MAX_TOKENS)
            ),
        )

        return cls(
            default_language=_language_code(data, "default-language", where),
            languages=languages,
            required_headers=_required_headers(
                data.get("required-headers"), required_lists, where
            ),
            required_lists=required_lists,
            slug_pattern=slug_pattern,
            check_slug=check_slug,
            duplicate_headers=_string_list(data, "check-header-duplicates", where),
            ignore_files=set(_string_list(data, "ignore-files", where)),
            check_language_structure=_flag(data, "check-language-structure", where),
            check_file_language=_flag(data, "check-file-language", where),
            spell_check=_flag(data, "chatgpt-spell-check", where),
            spell_check_options=options,
            source=source,
        )

    def is_list_key(self, key: str) -> bool:
        """Return True if key is configured as a required list."""
        return key in self.required_lists


@dataclass(frozen=True)
class SiteConfig:
    """Site-wide settings read from the Hugo `config.yaml`."""

    language_code: str
    title: str


# ----- Loaders -----

def _read_mapping(path: Path, description: str) -> Dict[str, Any]:
    if not path.is_file():
        raise ConfigError(f"{description} '{path}' doesn't exist")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = load_yaml(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"{description} '{path}' is not valid YAML: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{description} '{path}' must contain a mapping")
    return data


def load_ruleset(path: Path) -> RuleSet:
    """
    Load a `hugo-checker.yaml` rule-set file.

    Args:
        path: Rule-set file path

    Returns:
        RuleSet for the folder containing the file

    Raises:
        ConfigError: If the file is missing, unreadable, or malformed
    """
    path = Path(path)
    return RuleSet.from_dict(
        _read_mapping(path, "Hugo checker configuration file"), source=path
    )


def load_site_config(path: Path) -> SiteConfig:
    """
    Load the Hugo site configuration (`config.yaml`).

    Only `languageCode` and `title` are used.

    Raises:
        ConfigError: If the file is missing, unreadable, or malformed
    """
    data = _read_mapping(Path(path), "Hugo configuration file")
    return SiteConfig(
        language_code=get_string(data, "languageCode"),
        title=get_string(data, "title"),
    )


# ----- Value helpers -----

def _string_list(data: Dict[str, Any], key: str, where: str) -> List[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f"Key '{key}' must be a list{where}")
    if any(isinstance(item, bool) for item in value):
        raise ConfigError(f"Key '{key}' must not contain true/false values{where}")
    if any(isinstance(item, (list, dict)) or item is None for item in value):
        raise ConfigError(f"Key '{key}' must only contain plain values{where}")
    return [str(item) for item in value]


def _language_code(data: Dict[str, Any], key: str, where: str) -> str:
    if isinstance(data.get(key), bool):
        raise ConfigError(f"Key '{key}' must be a language code, not true/false{where}")
    return get_string(data, key)


def _flag(data: Dict[str, Any], key: str, where: str, default: bool = False) -> bool:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigError(f"Key '{key}' must be true or false{where}")
    return value


def _number(data: Dict[str, Any], key: str, where: str, default: float) -> float:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"Key '{key}' must be a number{where}")
    return value


def _required_lists(value: Any, where: str) -> Dict[str, Dict[str, Set[str]]]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"Key 'required-lists' must be a mapping{where}")

    result: Dict[str, Dict[str, Set[str]]] = {}
    for list_key, scopes in value.items():
        if scopes is None:
            scopes = {}
        if not isinstance(scopes, dict):
            raise ConfigError(
                f"Key 'required-lists.{list_key}' must map languages to values{where}"
            )
        result[str(list_key)] = {}
        for language, items in scopes.items():
            if isinstance(language, bool):
                raise ConfigError(
                    f"Key 'required-lists.{list_key}' has a true/false language key{where}"
                )
            if items is None:
                items = []
            if not isinstance(items, list):
                raise ConfigError(
                    f"Key 'required-lists.{list_key}.{language}' must be a list{where}"
                )
            result[str(list_key)][str(language)] = {str(item) for item in items}
    return result


def _required_headers(
    value: Any, required_lists: Dict[str, Dict[str, Set[str]]], where: str
) -> List[HeaderKey]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f"Key 'required-headers' must be a list{where}")

    headers = []
    for item in value:
        if isinstance(item, dict):
            name = item.get("name")
            if not name:
                raise ConfigError(f"Required header entry {item} has no 'name'{where}")
            try:
                kind = HeaderKind(item.get("kind", HeaderKind.SCALAR.value))
            except ValueError:
                raise ConfigError(
                    f"Required header '{name}' has unknown kind '{item.get('kind')}'{where}"
                ) from None
            headers.append(HeaderKey(str(name), kind))
        elif isinstance(item, (str, int)):
            name = str(item)
            kind = HeaderKind.LIST if name in required_lists else HeaderKind.SCALAR
            headers.append(HeaderKey(name, kind))
        else:
            raise ConfigError(f"Key 'required-headers' has an invalid entry {item!r}{where}")
    return headers
