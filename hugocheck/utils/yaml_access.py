#!/usr/bin/env python3
"""
yaml_access.py
-------------------
Read-only accessors for parsed YAML mappings.

Front matter is parsed once with PyYAML; every check then reads values
through these helpers, which treat a missing key as empty and never raise
for absence.

Functions:
    load_yaml: Load YAML with YAML 1.2 booleans (true/false only)
    parse_yaml: Parse YAML text into a mapping
    contains: Check whether a key is present
    get_string: Scalar value as a string ("" when absent)
    get_list: List value as strings ([] when absent)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from datetime import date, datetime
from typing import IO, Any, Dict, List, Mapping, Union

# --- Third party imports ---
import yaml

# --- Local imports ---
from hugocheck.core.exceptions import DocumentParseError

BOOL_TAG = "tag:yaml.org,2002:bool"


class ContentLoader(yaml.SafeLoader):
    """
    SafeLoader with YAML 1.2 booleans.

    Only true/false are booleans; yes/no/on/off stay strings, so language
    codes such as `no` (Norwegian) survive unquoted.
    """


ContentLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
ContentLoader.add_implicit_resolver(
    BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


def load_yaml(stream: Union[str, IO[str]]) -> Any:
    """Load one YAML document with ContentLoader; raises yaml.YAMLError."""
    return yaml.load(stream, Loader=ContentLoader)


def parse_yaml(text: str) -> Dict[str, Any]:
    """
    Parse YAML text into a mapping.

    Args:
        text: YAML document (e.g. a front-matter header)

    Returns:
        Parsed mapping; an empty document yields {}

    Raises:
        DocumentParseError: If the text is not valid YAML or not a mapping
    """
    try:
        data = load_yaml(text)
    except yaml.YAMLError as e:
        raise DocumentParseError(f"Invalid YAML syntax: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DocumentParseError(
            f"Header must be a mapping, got {type(data).__name__}"
        )
    return data


def contains(root: Mapping[str, Any], key: str) -> bool:
    """Return True if key is present in the mapping."""
    return key in root


def _scalar_to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def get_string(root: Mapping[str, Any], key: str) -> str:
    """
    Get a scalar value as a string.

    YAML scalars that PyYAML converts (ints, dates, booleans) are rendered
    back to text so `id: 42` and `id: "42"` compare equal. Lists and
    mappings are not scalars and yield "".

    Examples:
        >>> get_string({"id": 42}, "id")
        '42'
        >>> get_string({}, "title")
        ''
    """
    value = root.get(key)
    if isinstance(value, (list, dict)):
        return ""
    return _scalar_to_str(value).strip()


def get_list(root: Mapping[str, Any], key: str) -> List[str]:
    """
    Get a list value as a list of strings.

    A single scalar is treated as a one-item list; empty items are dropped.

    Examples:
        >>> get_list({"tags": ["a", "b"]}, "tags")
        ['a', 'b']
        >>> get_list({"tags": "a"}, "tags")
        ['a']
        >>> get_list({}, "tags")
        []
    """
    value = root.get(key)
    if value is None or isinstance(value, dict):
        return []
    if not isinstance(value, list):
        value = [value]

    items = []
    for item in value:
        if isinstance(item, (list, dict)):
            continue
        text = _scalar_to_str(item).strip()
        if text:
            items.append(text)
    return items
